import pytest

from pocketrpg.zone import ZoneAllocator, ZoneError


@pytest.fixture
def zone():
    return ZoneAllocator()


def test_malloc_returns_block_of_size(zone):
    block = zone.malloc(16)
    assert len(block) == 16
    assert block in zone
    assert zone.free_memory() == 16


def test_free_memory_sums_live_blocks(zone):
    a = zone.malloc(10)
    zone.malloc(20)
    assert zone.free_memory() == 30
    zone.free(a)
    assert zone.free_memory() == 20
    assert len(zone) == 1


def test_double_free_raises(zone):
    block = zone.malloc(4)
    zone.free(block)
    with pytest.raises(ZoneError):
        zone.free(block)


def test_free_foreign_block_raises(zone):
    with pytest.raises(ZoneError):
        zone.free(bytearray(4))


def test_calloc_is_zeroed(zone):
    block = zone.calloc(3, 5)
    assert block == bytearray(15)
    assert zone.free_memory() == 15


def test_realloc_none_allocates(zone):
    block = zone.realloc(None, 8)
    assert block in zone
    assert zone.free_memory() == 8


def test_realloc_grow_keeps_data_and_zeroes_tail(zone):
    block = zone.malloc(3)
    block[:] = b"abc"
    grown = zone.realloc(block, 6)
    assert grown == bytearray(b"abc\x00\x00\x00")
    assert zone.free_memory() == 6


def test_realloc_shrink_truncates(zone):
    block = zone.malloc(4)
    block[:] = b"wxyz"
    shrunk = zone.realloc(block, 2)
    assert shrunk == bytearray(b"wx")
    assert zone.free_memory() == 2


def test_realloc_zero_frees(zone):
    block = zone.malloc(5)
    assert zone.realloc(block, 0) is None
    assert block not in zone
    assert zone.free_memory() == 0


def test_realloc_foreign_block_raises(zone):
    with pytest.raises(ZoneError):
        zone.realloc(bytearray(2), 4)


def test_negative_size_raises(zone):
    with pytest.raises(ZoneError):
        zone.malloc(-1)


def test_equal_buffers_are_tracked_separately(zone):
    a = zone.malloc(4)
    b = zone.malloc(4)
    zone.free(a)
    assert b in zone
    assert a not in zone
    assert zone.free_memory() == 4