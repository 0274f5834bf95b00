import pytest

from pocketrpg.constants import (
    ControllerButton,
    KeyAction,
    LineFlag,
    MenuId,
    MouseButton,
    SpriteFlag,
)


def _is_power_of_two(value):
    return value > 0 and value & (value - 1) == 0


def test_line_flags_are_distinct_single_bits():
    values = [flag.value for flag in LineFlag]
    assert all(_is_power_of_two(v) for v in values)
    assert len(set(values)) == len(values)
    assert [LineFlag(v) for v in values] == list(LineFlag)


def test_sprite_flags_do_not_overlap_line_flags():
    all_line = LineFlag(0)
    for flag in LineFlag:
        all_line |= flag
    for flag in (SpriteFlag.HIDDEN, SpriteFlag.WALL, SpriteFlag.AUTO_ANIMATE):
        rebuilt = SpriteFlag(int(flag))
        assert rebuilt is flag
        assert int(rebuilt) & int(all_line) == 0


def test_sprite_oriented_combines_directions():
    combined = SpriteFlag(
        int(SpriteFlag.NORTH) | int(SpriteFlag.SOUTH) | int(SpriteFlag.EAST) | int(SpriteFlag.WEST)
    )
    assert combined == SpriteFlag.ORIENTED
    for direction in (SpriteFlag.NORTH, SpriteFlag.SOUTH, SpriteFlag.EAST, SpriteFlag.WEST):
        assert direction in combined
    assert SpriteFlag(int(SpriteFlag.HORIZONTAL) | int(SpriteFlag.VERTICAL)) == SpriteFlag.ORIENTED
    assert int(SpriteFlag.HORIZONTAL) & int(SpriteFlag.VERTICAL) == 0


def test_sprite_auto_animate_is_top_bit():
    assert SpriteFlag(2147483648) is SpriteFlag.AUTO_ANIMATE


def test_controller_buttons_are_contiguous():
    real = sorted(b.value for b in ControllerButton if b not in (ControllerButton.INVALID, ControllerButton.MAX))
    assert real == list(range(ControllerButton.MAX))
    assert ControllerButton(-1) is ControllerButton.INVALID


def test_mouse_buttons_are_contiguous():
    real = sorted(b.value for b in MouseButton if b not in (MouseButton.INVALID, MouseButton.MAX))
    assert real == list(range(MouseButton.MAX))
    assert MouseButton(-1) is MouseButton.INVALID


def test_menu_ids_are_contiguous_and_ordered():
    values = [m.value for m in MenuId]
    assert values == list(range(len(values)))
    assert MenuId.SOUND < MenuId.INGAME_SOUND
    assert MenuId(MenuId.INGAME_CONTROLLER.value) is MenuId.INGAME_CONTROLLER


def test_unknown_menu_id_raises():
    with pytest.raises(ValueError):
        MenuId(len(MenuId) + 5)


def test_key_action_menu_flags_are_bits_above_game_actions():
    menu_flags = [
        KeyAction.MENU_UP,
        KeyAction.MENU_DOWN,
        KeyAction.MENU_PAGE_UP,
        KeyAction.MENU_PAGE_DOWN,
        KeyAction.MENU_SELECT,
        KeyAction.MENU_OPEN,
    ]
    assert [KeyAction(int(f)) for f in menu_flags] == menu_flags
    assert all(_is_power_of_two(int(f)) for f in menu_flags)
    assert all(int(f) > KeyAction.PASSTURN for f in menu_flags)
    assert KeyAction(0x800) is KeyAction.MENU_OPEN


def test_key_action_digits_are_sequential():
    assert KeyAction(int(KeyAction.NUM_0) + 1) is KeyAction.NUM_1
    assert KeyAction(int(KeyAction.NUM_0) + 2) is KeyAction.NUM_2
    assert KeyAction(int(KeyAction.NUM_0) + 9) is KeyAction.NUM_9