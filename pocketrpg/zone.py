"""Tracked memory blocks whose total size can be queried."""

from __future__ import annotations

from typing import Optional


class ZoneError(Exception):
    """Raised for invalid allocations or blocks not owned by the zone."""


class ZoneAllocator:
    """Hands out zero-filled byte buffers and keeps count of their sizes."""

    def __init__(self) -> None:
        self._blocks: dict[int, tuple[bytearray, int]] = {}

    def __len__(self) -> int:
        return len(self._blocks)

    def __contains__(self, block: object) -> bool:
        entry = self._blocks.get(id(block))
        return entry is not None and entry[0] is block

    def _check_owned(self, block: bytearray, operation: str) -> None:
        if block not in self:
            raise ZoneError(f"{operation}: block was not allocated by this zone")

    @staticmethod
    def _check_size(size: int, operation: str) -> None:
        if size < 0:
            raise ZoneError(f"{operation}: failed on allocation of {size} bytes")

    def malloc(self, size: int) -> bytearray:
        """Allocate a block of ``size`` bytes."""
        self._check_size(size, "malloc")
        block = bytearray(size)
        self._blocks[id(block)] = (block, size)
        return block

    def calloc(self, count: int, size: int) -> bytearray:
        """Allocate ``count`` elements of ``size`` bytes each, zero-filled."""
        if count < 0:
            raise ZoneError(f"calloc: invalid element count {count}")
        return self.malloc(count * size)

    def realloc(self, block: Optional[bytearray], size: int) -> Optional[bytearray]:
        """Resize a block, zero-filling any growth; size 0 frees it."""
        if block is None:
            return self.malloc(size)
        if size == 0:
            self.free(block)
            return None
        self._check_owned(block, "realloc")
        self._check_size(size, "realloc")
        del self._blocks[id(block)]
        current = len(block)
        if size > current:
            block.extend(bytes(size - current))
        else:
            del block[size:]
        self._blocks[id(block)] = (block, size)
        return block

    def free(self, block: bytearray) -> None:
        """Release a block previously handed out by this zone."""
        self._check_owned(block, "free")
        del self._blocks[id(block)]

    def free_memory(self) -> int:
        """Total number of bytes in blocks that are still allocated."""
        return sum(size for _, size in self._blocks.values())