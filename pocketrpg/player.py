"""The player character: inventory, weapons, levelling and damage."""

from __future__ import annotations

import random
import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from pocketrpg.player_stats import CombatStats, calc_level_xp
from pocketrpg.sound import SoundFlag
from pocketrpg.weapon import Weapon

STAT_LIMIT = 99
NUM_WEAPONS = 12
NUM_AMMO_TYPES = 6
NUM_INVENTORY = 5
FIRST_ITEM = 25
DOG_AMMO = 5
DOG_WEAPONS = (9, 10, 11)
DOG_WEAPON_BITS = 0xE00
BERSERKER_TICS = 31

STATUS_HEALTH = 0
STATUS_ARMOR = 1
STATUS_CREDITS = 2
STATUS_XP = 3

ITEM_SMALL_MEDKIT = 25
ITEM_LARGE_MEDKIT = 26
ITEM_SOUL_SPHERE = 27
ITEM_BERSERKER = 28
ITEM_DOG_COLLAR = 29

SND_LEVEL_UP = 5043
SND_DEATH_A = 5058
SND_DEATH_B = 5059
SND_MEGA = 5062
SND_PAIN = 5081
SND_DOG_PAIN = 5089
SND_DOG_DIED = 5090
SND_MEDKIT = 5134

_BYTE = 0xFF


@dataclass
class PlayerEvents:
    """Receives what the player does to the rest of the game and records it."""

    messages: list = field(default_factory=list)
    sounds: list = field(default_factory=list)
    log: list = field(default_factory=list)
    collar_target: Any = None
    critical: bool = False

    def message(self, text: str, force: bool = False) -> None:
        """Show a message on the heads-up display."""
        self.messages.append((text, force))

    def play_sound(self, resource_id: int, flags: SoundFlag, priority: int) -> None:
        """Start a sound or music track."""
        self.sounds.append((resource_id, SoundFlag(flags), priority))

    def shake(self, duration: int, intensity: int, fade: int) -> None:
        """Shake the screen."""
        self.log.append(("shake", duration, intensity, fade))

    def damage_face(self) -> None:
        """Show the status face reacting to a pickup."""
        self.log.append(("damage_face",))

    def hurt(self, direction: int) -> None:
        """Show the damage indicator on side ``direction``."""
        self.log.append(("hurt", direction))

    def dog_bleeds(self) -> None:
        """Spawn blood from the dog that shielded the player."""
        self.log.append(("dog_bleeds",))

    def dog_died(self, weapon: int) -> None:
        """Leave the corpse of the dog held as ``weapon``."""
        self.log.append(("dog_died", weapon))

    def level_up(self, text: str) -> None:
        """Open the level-up dialog."""
        self.log.append(("level_up", text))

    def died(self) -> None:
        """Switch the game into the dying state."""
        self.log.append(("died",))

    def view_changed(self) -> None:
        """Ask for the view to be redrawn."""
        self.log.append(("view_changed",))

    def berserk(self, active: bool) -> None:
        """Tint the view for the berserker effect, or restore it."""
        self.log.append(("berserk", active))

    def attack(self) -> None:
        """Carry out an attack with the current weapon."""
        self.log.append(("attack",))

    def advance_turn(self) -> None:
        """Let the rest of the world take its turn."""
        self.log.append(("advance_turn",))

    def use_collar(self) -> Any:
        """The dog the collar captures, or None if there is none in range."""
        self.log.append(("use_collar",))
        return self.collar_target

    def was_critical(self) -> bool:
        """Whether the hit being taken was a critical one."""
        return self.critical

    def now_ms(self) -> int:
        """Milliseconds on a monotonic clock."""
        return int(time.monotonic() * 1000)


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a >= 0) == (b >= 0) else -quotient


class Player:
    """The player's state and the actions that change it."""

    def __init__(
        self,
        weapons: Sequence[Weapon],
        events: Optional[PlayerEvents] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        if len(weapons) != NUM_WEAPONS:
            raise ValueError(f"expected {NUM_WEAPONS} weapons, got {len(weapons)}")
        self.weapon_info = list(weapons)
        self.events = events if events is not None else PlayerEvents()
        self.rng = rng if rng is not None else random.Random()
        self.god = False
        self.stats = CombatStats()
        self.dying = False
        self.time = 0
        self.moves = 0
        self.xp_gained = 0
        self.berserker_tics = 0
        self.dog_familiar: Any = None
        self.notebook = ""
        self.reset()
        self.total_deaths = 0

    def reset(self) -> None:
        """Return to the state of a new game."""
        self.facing_entity: Any = None
        self.noclip = False
        self.level = 1
        self.current_xp = 0
        self.next_level_xp = 80
        self.keys = 0
        self.credits = 0
        self.ammo = [0] * NUM_AMMO_TYPES
        self.inventory = [0] * NUM_INVENTORY
        self.ammo[1] = 8
        self.weapon = 2
        self.weapons = 4
        self.disabled_weapons = 0
        self.found_secrets_levels = 0
        self.killed_monsters_levels = 0
        self.stats = CombatStats.starting()
        self.total_time = 0
        self.total_moves = 0
        self.completed_levels = 0
        self.dying = False

    def setup(self, now_ms: int) -> None:
        """Prepare for a new map started at ``now_ms``."""
        self.time = now_ms
        self.moves = 0
        self.xp_gained = 0
        self.berserker_tics = 0
        self.dog_familiar = None
        self.notebook = ""
        self.dying = False
        if self.disabled_weapons:
            self.restore_weapons()

    @staticmethod
    def _add_capped(current: int, amount: int) -> Optional[int]:
        if current == STAT_LIMIT:
            return None
        return min(STAT_LIMIT, (current + amount) & _BYTE)

    def add_ammo(self, ammo_type: int, amount: int) -> bool:
        """Add ammunition up to 99; False if already full."""
        value = self._add_capped(self.ammo[ammo_type], amount)
        if value is None:
            return False
        self.ammo[ammo_type] = value
        return True

    def add_item(self, item: int, amount: int) -> bool:
        """Add inventory items up to 99; False if already full."""
        slot = item - FIRST_ITEM
        value = self._add_capped(self.inventory[slot], amount)
        if value is None:
            return False
        self.inventory[slot] = value
        return True

    def add_armor(self, amount: int) -> None:
        """Add armor, not above the maximum."""
        if amount > 0:
            self.events.damage_face()
        before = self.stats.armor
        self.stats.armor = min(before + amount, self.stats.max_armor)
        if self.stats.armor > before:
            self.events.message(f"Gained {self.stats.armor - before} armor")

    def add_health(self, amount: int) -> None:
        """Add (or with a negative amount, remove) health, not above the maximum."""
        if amount > 0:
            self.events.damage_face()
        before = self.stats.health
        self.stats.health = min(before + amount, self.stats.max_health)
        if self.stats.health > before:
            self.events.message(f"Gained {self.stats.health - before} health")

    def add_credits(self, amount: int) -> bool:
        """Add credits."""
        self.credits += amount
        return True

    def _roll(self, base: int, spread: int) -> int:
        return base + (self.rng.getrandbits(8) & 255) % spread

    def _raise_stat(self, name: str, gain: int) -> int:
        current = getattr(self.stats, name)
        if current + gain > STAT_LIMIT:
            gain = STAT_LIMIT - current
        if gain:
            setattr(self.stats, name, current + gain)
        return gain

    def next_level(self) -> None:
        """Advance one level, raising statistics and restoring health."""
        self.level += 1
        self.next_level_xp = calc_level_xp(self.level)
        self.events.play_sound(
            SND_LEVEL_UP,
            SoundFlag.LOOP | SoundFlag.STOP_SOUNDS | SoundFlag.IS_MUSIC,
            6,
        )
        parts = ["Level up!", "|", f"Level: {self.level}|"]

        health_gain = self._roll(3, 3)
        max_health = self.stats.max_health
        if max_health + health_gain > STAT_LIMIT:
            health_gain = STAT_LIMIT - max_health
        if health_gain:
            self.stats.max_health = max_health + health_gain
            parts.append(f"Max Health: +{health_gain}|")
        self.stats.health = max_health + health_gain

        armor_gain = self._raise_stat("max_armor", self._roll(3, 3))
        if armor_gain:
            parts.append(f"Max Armor: +{armor_gain}|")
        defense_gain = self._raise_stat("defense", self._roll(1, 2))
        if defense_gain:
            parts.append(f"Defense: +{defense_gain}|")
        strength_gain = self._raise_stat("strength", self._roll(1, 2))
        if strength_gain:
            parts.append(f"Strength: +{strength_gain}|")
        agility_gain = self._raise_stat("agility", self._roll(1, 2))
        if agility_gain:
            parts.append(f"Agility: +{agility_gain}|")
        accuracy_gain = self._raise_stat("accuracy", self._roll(1, 2))
        if accuracy_gain:
            parts.append(f"Accuracy: +{agility_gain}|")

        parts.append("|Health restored.")
        self.events.level_up("".join(parts))

    def add_xp(self, xp: int) -> None:
        """Gain experience, levelling up as often as it allows."""
        self.events.message(f"Gained {xp} XP!")
        self.current_xp += xp
        self.xp_gained += xp
        while self.current_xp >= self.next_level_xp:
            self.current_xp -= self.next_level_xp
            self.next_level()

    def update_berserker_tics(self) -> None:
        """Count a move and run down the berserker effect."""
        self.moves += 1
        if self.berserker_tics:
            self.berserker_tics -= 1
            if self.berserker_tics == 0:
                self.events.message("Berserker expired!", True)
                self.events.berserk(False)
                self.events.view_changed()

    def died(self, now_ms: int) -> None:
        """Record a death and enter the dying state, once."""
        if self.dying:
            return
        self.dying = True
        self.total_time += now_ms - self.time
        self.total_moves += self.moves
        self.total_deaths += 1
        sound = SND_DEATH_A if self.rng.getrandbits(8) & 1 else SND_DEATH_B
        self.events.play_sound(sound, SoundFlag.NONE, 5)
        self.events.shake(350, 5, 350)
        self.events.died()

    def remove_weapons(self) -> None:
        """Take every weapon away until restored."""
        self.disabled_weapons = self.weapons
        self.weapons = 0
        self.weapon = 0
        self.events.view_changed()

    def restore_weapons(self) -> None:
        """Give back weapons taken by ``remove_weapons``."""
        if self.weapons & DOG_WEAPON_BITS and self.disabled_weapons & DOG_WEAPON_BITS:
            self.disabled_weapons &= ~DOG_WEAPON_BITS
        self.weapons |= self.disabled_weapons
        self.disabled_weapons = 0
        if not self.weapons & (1 << self.weapon):
            self.select_next_weapon()
        self.events.view_changed()

    def fire_weapon(self) -> bool:
        """Spend ammunition and attack; False if the weapon cannot fire."""
        if self.disabled_weapons and not self.weapons & (1 << self.weapon):
            return False
        info = self.weapon_info[self.weapon]
        ammo = self.ammo[info.ammo_type]
        if info.ammo_usage <= 0 or ammo - info.ammo_usage >= 0:
            self.ammo[info.ammo_type] = (ammo - info.ammo_usage) & _BYTE
            self.events.attack()
            return True
        self.events.message("Not enough ammo!", True)
        return False

    def add_status_item(self, kind: int, amount: int) -> None:
        """Change health, armor, credits or experience by ``amount``."""
        if kind == STATUS_HEALTH:
            self.add_health(amount)
            if amount < 0:
                self._pain_event(0)
        elif kind == STATUS_ARMOR:
            self.add_armor(amount)
        elif kind == STATUS_CREDITS:
            self.add_credits(amount)
        elif kind == STATUS_XP:
            self.add_xp(amount)

    def check_status_item(self, kind: int, amount: int) -> bool:
        """Whether the player has at least ``amount`` of a status value."""
        checks = {
            STATUS_HEALTH: (self.stats.health, "Insufficient health!"),
            STATUS_ARMOR: (self.stats.armor, "Insufficient armor!"),
            STATUS_CREDITS: (self.credits, "Insufficient funds!"),
            STATUS_XP: (self.current_xp, "Insufficient XP!"),
        }
        if kind not in checks:
            return True
        value, complaint = checks[kind]
        if value >= amount:
            return True
        self.events.message(complaint)
        return False

    def select_weapon(self, index: int) -> None:
        """Switch to weapon ``index``."""
        if self.weapon != index:
            self.events.view_changed()
        self.weapon = index

    def _usable(self, index: int) -> bool:
        info = self.weapon_info[index]
        return bool(self.weapons & (1 << index)) and (
            self.ammo[info.ammo_type] > 0 or info.ammo_usage == 0
        )

    def select_next_weapon(self) -> None:
        """Switch to the next owned weapon with ammunition, wrapping round."""
        old = self.weapon
        order = list(range(old + 1, NUM_WEAPONS))
        if old != 0:
            order += list(range(old))
        for index in order:
            if self._usable(index):
                self.select_weapon(index)
                return

    def select_prev_weapon(self) -> None:
        """Switch to the previous owned weapon with ammunition, wrapping round."""
        old = self.weapon
        order = list(range(old - 1, -1, -1))
        if old != NUM_WEAPONS - 1:
            order += list(range(NUM_WEAPONS - 1, old, -1))
        for index in order:
            if self._usable(index):
                self.select_weapon(index)
                return

    def _has_dog(self) -> bool:
        return self.weapon in DOG_WEAPONS and self.ammo[DOG_AMMO] > 0

    def _pain_event(self, direction: int) -> None:
        if self.god:
            return
        self.events.hurt(direction)
        if self._has_dog():
            self.events.dog_bleeds()
            self.events.play_sound(SND_DOG_PAIN, SoundFlag.NONE, 3)
        else:
            self.events.play_sound(SND_PAIN, SoundFlag.NONE, 2)
        self.events.shake(500, 2, 150)

    def pain(self, damage: int, armor_damage: int) -> None:
        """Take a hit; a dog familiar absorbs it before armor and health do."""
        if self.god:
            return
        text = "Crit! " if self.events.was_critical() else ""
        total = damage + armor_damage
        dog_died = False

        if self._has_dog():
            text += "Dog took "
            dog_health = max(0, self.ammo[DOG_AMMO] - total)
            self.ammo[DOG_AMMO] = dog_health
            if dog_health == 0:
                self.events.dog_died(self.weapon)
                self.events.play_sound(SND_DOG_DIED, SoundFlag.NONE, 3)
                self.weapons &= ~DOG_WEAPON_BITS
                self.dog_familiar = None
                self.select_next_weapon()
                dog_died = True
            damage = armor_damage = 0
        text += f"{total} damage!"
        if dog_died:
            text += " Dog died!"
        self.events.message(text)

        if damage + armor_damage == 0:
            return

        armor = self.stats.armor
        if armor < armor_damage:
            damage += armor_damage - armor
            self.stats.armor = 0
        else:
            self.stats.armor = armor - armor_damage

        scale = self.stats.max_health << 8
        before = _trunc_div(self.stats.health << 16, scale)
        after = _trunc_div((self.stats.health - damage) << 16, scale)
        if after > 0:
            if before > 26 >= after:
                self.events.message("Near Death!", True)
            elif before > 78 >= after:
                self.events.message("Low Health!", True)
            elif armor > 0 and self.stats.armor == 0:
                self.events.message("Armor Gone!", True)

        self.add_health(-damage)
        if self.stats.health <= 0:
            self.stats.health = 0
            self.died(self.events.now_ms())

    def add_level_stats(
        self,
        now_ms: int,
        completed: bool,
        map_id: int,
        secrets: tuple[int, int],
        monsters: tuple[int, int],
    ) -> None:
        """Add a finished map's time and moves; record completion bonuses."""
        self.total_time += now_ms - self.time
        self.total_moves += self.moves
        if completed and map_id != 2:
            bit = 1 << (map_id - 1)
            self.completed_levels |= bit
            if secrets[0] == secrets[1]:
                self.found_secrets_levels |= bit
            if monsters[0] == monsters[1]:
                self.killed_monsters_levels |= bit
        self.berserker_tics = 0
        self.dog_familiar = None

    def use_item(self, item: int, sub_type: int, parm: int) -> bool:
        """Use one inventory item; returns whether it was consumed."""
        slot = item - FIRST_ITEM
        if not self.inventory[slot]:
            return False

        if sub_type in (ITEM_SMALL_MEDKIT, ITEM_LARGE_MEDKIT):
            self.add_health(parm)
            self.events.play_sound(SND_MEDKIT, SoundFlag.NO_FORCE_STOP, 3)
        elif sub_type == ITEM_SOUL_SPHERE:
            self.add_health(200)
            self.add_armor(200)
            self.events.play_sound(SND_MEGA, SoundFlag.NO_FORCE_STOP, 3)
        elif sub_type == ITEM_BERSERKER:
            self.events.message("Berserker activated!")
            if self.berserker_tics == 0:
                self.events.berserk(True)
            self.berserker_tics += BERSERKER_TICS
            self.events.view_changed()
            self.events.play_sound(SND_MEGA, SoundFlag.NO_FORCE_STOP, 3)
        elif sub_type == ITEM_DOG_COLLAR:
            dog = self.events.use_collar()
            if dog is None:
                return False
            self.dog_familiar = dog
            self.weapons &= ~DOG_WEAPON_BITS
            self.inventory[slot] -= 1
            return True

        self.inventory[slot] -= 1
        self.events.advance_turn()
        return True