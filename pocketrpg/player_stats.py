"""Player combat statistics and pure helpers for level, time and map stats."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from pocketrpg.constants import LineFlag, SpriteFlag

STAT_LIMIT = 99

# Line flags that mark a secret wall and a secret that has been opened.
_SECRET_LINE = LineFlag.EAST_SOUTH
_SECRET_FOUND = LineFlag.DOOROPEN

# Sprite and entity info bits that mark a monster as dead.
_SPRITE_CORPSE = SpriteFlag.NOENTITY
_ENTITY_DEAD = 0x20000


@dataclass
class CombatStats:
    """Health, armor and fighting attributes of a combatant."""

    health: int = 0
    max_health: int = 0
    armor: int = 0
    max_armor: int = 0
    defense: int = 0
    strength: int = 0
    agility: int = 0
    accuracy: int = 0
    monster_type: int = -1

    @classmethod
    def starting(cls) -> "CombatStats":
        """The statistics a new player begins the game with."""
        return cls(
            health=30,
            max_health=30,
            armor=0,
            max_armor=20,
            defense=16,
            strength=12,
            agility=14,
            accuracy=16,
            monster_type=-1,
        )


def calc_damage_dir(view_x: int, view_y: int, view_angle: int, src_x: int, src_y: int) -> int:
    """Screen side (0 to 3) from which damage at (src_x, src_y) appears to come."""
    angle = view_angle & 255
    if angle == 0:
        if src_y > view_y:
            return 1
        if src_y < view_y:
            return 3
        if src_x < view_x:
            return 2
        return 0
    if angle == 64:
        if src_y > view_y:
            return 2
        if src_y < view_y:
            return 0
        if src_x < view_x:
            return 3
        return 1 if src_x > view_x else 0
    if angle == 128:
        if src_y > view_y:
            return 3
        if src_y < view_y:
            return 1
        return 2 if src_x > view_x else 0
    if angle == 192:
        if src_y > view_y:
            return 0
        if src_y < view_y:
            return 2
        if src_x < view_x:
            return 1
        return 3 if src_x > view_x else 0
    return 0


def calc_level_xp(level: int) -> int:
    """Experience needed to advance past ``level``."""
    return level * 20 + 60


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


def format_time(time_ms: int) -> str:
    """Milliseconds formatted as hours:minutes:seconds."""
    seconds_total = _trunc_div(time_ms, 1000)
    minutes_total = _trunc_div(seconds_total, 60)
    hours = _trunc_div(minutes_total, 60)
    minutes = minutes_total - hours * 60
    seconds = seconds_total - minutes_total * 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def fill_secret_stats(line_flags: Iterable[int]) -> tuple[int, int]:
    """Count (found, total) secrets among the flags of a map's lines."""
    found = total = 0
    for flags in line_flags:
        if flags & _SECRET_LINE:
            total += 1
            if flags & _SECRET_FOUND:
                found += 1
    return found, total


def fill_monster_stats(monsters: Iterable[tuple[int, int]]) -> tuple[int, int]:
    """Count (dead, total) monsters from (sprite_info, entity_info) pairs."""
    dead = total = 0
    for sprite_info, entity_info in monsters:
        total += 1
        if (sprite_info & _SPRITE_CORPSE) or (entity_info & _ENTITY_DEAD):
            dead += 1
    return dead, total