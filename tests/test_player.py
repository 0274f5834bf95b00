import random

import pytest

from pocketrpg.player import Player, PlayerEvents
from pocketrpg.player_stats import calc_level_xp
from pocketrpg.sound import SoundFlag
from pocketrpg.weapon import Weapon


def make_weapons():
    weapons = []
    for index in range(12):
        if index < 2:
            weapons.append(Weapon(ammo_type=0, ammo_usage=0))
        elif index == 2:
            weapons.append(Weapon(ammo_type=1, ammo_usage=1))
        elif index in (9, 10, 11):
            weapons.append(Weapon(ammo_type=5, ammo_usage=0))
        else:
            weapons.append(Weapon(ammo_type=2, ammo_usage=1))
    return weapons


class FixedRng:
    def __init__(self, value):
        self.value = value

    def getrandbits(self, bits):
        return self.value


@pytest.fixture
def events():
    return PlayerEvents()


@pytest.fixture
def player(events):
    return Player(make_weapons(), events, random.Random(1))


def test_reset_defaults(player):
    assert player.level == 1
    assert player.next_level_xp == 80
    assert player.ammo[1] == 8
    assert player.weapon == 2
    assert player.weapons == 4
    assert player.stats.health == player.stats.max_health
    assert player.total_deaths == 0


def test_wrong_weapon_count_rejected(events):
    with pytest.raises(ValueError):
        Player(make_weapons()[:5], events)


def test_add_ammo_caps_at_limit(player):
    assert player.add_ammo(2, 200 - 100)
    assert player.ammo[2] == 99
    assert player.add_ammo(2, 1) is False


def test_add_item_caps_and_refuses_when_full(player):
    assert player.add_item(25, 60)
    assert player.add_item(25, 60)
    assert player.inventory[0] == 99
    assert player.add_item(25, 1) is False


def test_add_health_clamps_and_reports(player, events):
    player.stats.health = 20
    player.add_health(5)
    assert player.stats.health == 25
    assert events.messages[-1] == ("Gained 5 health", False)
    player.add_health(1000)
    assert player.stats.health == player.stats.max_health


def test_add_armor_clamps(player):
    player.add_armor(1000)
    assert player.stats.armor == player.stats.max_armor


def test_add_xp_levels_up(player, events):
    player.add_xp(80)
    assert player.level == 2
    assert player.current_xp == 0
    assert player.next_level_xp == calc_level_xp(2)
    assert 3 <= player.stats.max_health - 30 <= 5
    assert player.stats.health == player.stats.max_health
    kind, text = [entry for entry in events.log if entry[0] == "level_up"][0]
    assert text.startswith("Level up!")
    assert text.endswith("|Health restored.")


def test_level_up_respects_stat_limit(events):
    player = Player(make_weapons(), events, FixedRng(0))
    player.stats.max_health = 99
    player.stats.defense = 99
    player.next_level()
    assert player.stats.max_health == 99
    assert player.stats.defense == 99


def test_died_only_once(player, events):
    player.setup(1000)
    player.died(3000)
    player.died(4000)
    assert player.total_deaths == 1
    assert player.total_time == 2000
    assert sum(1 for entry in events.log if entry == ("died",)) == 1


def test_remove_and_restore_weapons(player):
    player.remove_weapons()
    assert player.weapons == 0
    assert player.fire_weapon() is False
    player.restore_weapons()
    assert player.weapons == 4
    assert player.disabled_weapons == 0
    assert player.weapon == 2


def test_fire_weapon_spends_ammo(player, events):
    assert player.fire_weapon()
    assert player.ammo[1] == 7
    player.ammo[1] = 0
    assert player.fire_weapon() is False
    assert events.messages[-1] == ("Not enough ammo!", True)


def test_select_next_and_prev_weapon(player):
    player.weapons |= 1 << 3
    player.ammo[2] = 4
    player.select_next_weapon()
    assert player.weapon == 3
    player.select_next_weapon()
    assert player.weapon == 2
    player.select_prev_weapon()
    assert player.weapon == 3


def test_pain_hits_armor_first(player):
    player.stats.armor = 5
    player.pain(2, 3)
    assert player.stats.armor == 2
    assert player.stats.health == 28


def test_pain_overflow_armor_goes_to_health(player):
    player.stats.armor = 1
    player.pain(0, 4)
    assert player.stats.armor == 0
    assert player.stats.health == 27


def test_god_mode_ignores_pain(player):
    player.god = True
    player.pain(50, 50)
    assert player.stats.health == 30


def test_fatal_pain_kills(player, events):
    player.pain(100, 0)
    assert player.stats.health == 0
    assert player.dying
    assert ("died",) in events.log


def test_dog_absorbs_damage_and_dies(player, events):
    player.weapons |= 1 << 9
    player.ammo[5] = 3
    player.weapon = 9
    player.pain(10, 0)
    assert player.stats.health == 30
    assert player.ammo[5] == 0
    assert player.weapons & 0xE00 == 0
    assert events.messages[0][0].endswith(" Dog died!")
    assert player.weapon == 2


def test_check_status_item(player, events):
    assert player.check_status_item(0, 30)
    assert player.check_status_item(2, 1) is False
    assert events.messages[-1] == ("Insufficient funds!", False)


def test_add_status_item_credits_and_pain(player, events):
    player.add_status_item(2, 40)
    assert player.credits == 40
    player.add_status_item(0, -5)
    assert player.stats.health == 25
    assert ("hurt", 0) in events.log


def test_berserker_runs_down(player, events):
    player.add_item(28, 1)
    assert player.use_item(28, 28, 0)
    assert player.berserker_tics == 31
    for _ in range(31):
        player.update_berserker_tics()
    assert player.berserker_tics == 0
    assert ("Berserker expired!", True) in events.messages
    assert ("berserk", False) in events.log


def test_medkit_heals_and_advances_turn(player, events):
    player.stats.health = 10
    player.add_item(25, 1)
    assert player.use_item(25, 25, 10)
    assert player.stats.health == 20
    assert player.inventory[0] == 0
    assert events.sounds[-1] == (5134, SoundFlag.NO_FORCE_STOP, 3)
    assert ("advance_turn",) in events.log


def test_use_item_without_stock(player):
    assert player.use_item(25, 25, 10) is False


def test_collar_without_target_is_kept(player):
    player.add_item(29, 1)
    assert player.use_item(29, 29, 0) is False
    assert player.inventory[4] == 1


def test_collar_captures_dog(player, events):
    events.collar_target = "dog"
    player.add_item(29, 1)
    assert player.use_item(29, 29, 0)
    assert player.dog_familiar == "dog"
    assert player.inventory[4] == 0


def test_add_level_stats_records_bits(player):
    player.setup(0)
    player.add_level_stats(500, True, 3, (2, 2), (1, 4))
    assert player.completed_levels == 1 << 2
    assert player.found_secrets_levels == 1 << 2
    assert player.killed_monsters_levels == 0
    assert player.total_time == 500


def test_add_level_stats_skips_map_two(player):
    player.add_level_stats(0, True, 2, (0, 0), (0, 0))
    assert player.completed_levels == 0