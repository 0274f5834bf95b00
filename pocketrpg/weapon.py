"""Weapon definitions."""

from dataclasses import dataclass


@dataclass
class Weapon:
    """Static description of a weapon and its ammunition use."""

    str_min: int = 0
    str_max: int = 0
    range_min: int = 0
    range_max: int = 0
    ammo_type: int = 0
    ammo_usage: int = 0
    damage: int = 0
    resource_id: int = 0

    def range_min_to_dist(self) -> int:
        """Squared world distance corresponding to the minimum range, plus one tile."""
        distance = self.range_min * 64
        return distance * distance + 4096