import pytest

from pocketrpg.sound import (
    MAX_AUDIO_FILES,
    MAX_SOUND_CHANNELS,
    MIX_MAX_VOLUME,
    MemoryAudioBackend,
    SOUND_TABLE,
    SoundFlag,
    SoundSystem,
    resource_index,
)


@pytest.fixture
def backend():
    return MemoryAudioBackend()


@pytest.fixture
def system(backend):
    sound = SoundSystem(backend, True)
    sound.enabled = True
    return sound


def test_sound_table_indexes_every_entry():
    assert [resource_index(resource) for resource in SOUND_TABLE] == list(range(MAX_AUDIO_FILES))


@pytest.mark.parametrize(
    "resource_id, expected", [(5039, 0), (5040, 1), (5043, 3), (5138, 94), (5041, -1)]
)
def test_resource_index(resource_id, expected):
    assert resource_index(resource_id) == expected


def test_initial_state(backend):
    sound = SoundSystem(backend, True)
    assert sound.enabled is False
    assert sound.priority == 3
    assert sound.volume == 100
    assert backend.master_volume == MIX_MAX_VOLUME
    assert backend.music_gain == 1.0


def test_disabled_plays_nothing(backend):
    sound = SoundSystem(backend, True)
    assert sound.play_sound(5081, SoundFlag.NONE, 5) is False
    assert backend.channels == {}


def test_play_effect_uses_first_channel(system, backend):
    assert system.play_sound(5081, SoundFlag.NONE, 3) is True
    assert backend.channels == {0: (5081, False)}
    assert system.channels[0].sound == 5081
    assert system.next_play == 1
    assert system.priority == 3


def test_second_effect_uses_next_channel(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.play_sound(5089, SoundFlag.LOOP, 3)
    assert backend.channels[1] == (5089, True)
    assert system.channels[1].flags == SoundFlag.LOOP


def test_lower_priority_blocked(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 5)
    assert system.play_sound(5089, SoundFlag.NONE, 2) is False
    assert list(backend.channels) == [0]
    assert system.next_play == 1


def test_priority_check_can_be_disabled(backend):
    sound = SoundSystem(backend, False)
    sound.enabled = True
    sound.play_sound(5081, SoundFlag.NONE, 5)
    assert sound.play_sound(5089, SoundFlag.NONE, 2) is True
    assert len(backend.channels) == 2


def test_music_uses_dedicated_channel(system, backend):
    flags = SoundFlag.LOOP | SoundFlag.STOP_SOUNDS | SoundFlag.IS_MUSIC
    assert system.play_sound(5043, flags, 6) is True
    assert backend.music == {5043: True}
    assert system.channel == MAX_SOUND_CHANNELS
    assert system.channels[MAX_SOUND_CHANNELS].music == 5043
    assert system.channels[MAX_SOUND_CHANNELS].flags == SoundFlag.LOOP | SoundFlag.IS_MUSIC


def test_stop_sounds_flag_spares_protected(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.play_sound(5134, SoundFlag.NO_FORCE_STOP, 3)
    system.play_sound(5090, SoundFlag.STOP_SOUNDS, 3)
    assert 1 in backend.channels
    assert backend.channels[1] == (5134, False)
    assert any(resource == 5090 for resource, _ in backend.channels.values())
    assert all(resource != 5081 for resource, _ in backend.channels.values())


def test_stop_sounds_resets_priority(system, backend):
    system.play_sound(5043, SoundFlag.IS_MUSIC, 6)
    system.stop_sounds()
    assert system.priority == 0
    assert backend.music == {}
    assert system.channels[MAX_SOUND_CHANNELS].flags == SoundFlag.NONE


def test_all_channels_busy(system, backend):
    for _ in range(MAX_SOUND_CHANNELS):
        assert system.play_sound(5081, SoundFlag.NONE, 3) is True
    assert system.get_free_channel() == -1
    assert system.play_sound(5089, SoundFlag.NONE, 3) is False


def test_finished_channel_is_reused(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.play_sound(5089, SoundFlag.NONE, 3)
    backend.finish(0)
    assert system.get_free_channel() == 0
    assert system.channels[0].sound is None


def test_get_state_counts_playing(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.play_sound(5089, SoundFlag.NONE, 3)
    assert system.get_state() == system.next_play + len(backend.channels)


def test_unknown_resource_not_played(system, backend):
    assert system.play_sound(1234, SoundFlag.NONE, 3) is False
    assert backend.channels == {}
    assert system.next_play == 1


def test_free_sounds_clears_everything(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.play_sound(5043, SoundFlag.IS_MUSIC, 6)
    system.free_sounds()
    assert backend.channels == {}
    assert backend.music == {}
    assert all(chan.sound is None and chan.music is None for chan in system.channels)


def test_volume_clamped(system):
    assert system.add_volume(500) == 100
    assert system.minus_volume(500) == 0
    assert system.volume == 0


def test_volume_reaches_playing_music(system, backend):
    system.play_sound(5043, SoundFlag.IS_MUSIC, 6)
    system.minus_volume(100)
    assert backend.music_gain == 0.0
    system.add_volume(100)
    assert backend.music_gain == 1.0


def test_volume_reaches_playing_effect(system, backend):
    system.play_sound(5081, SoundFlag.NONE, 3)
    system.minus_volume(100)
    assert backend.sound_volumes[5081] == 0


def test_volume_listener_notified(system):
    seen = []
    system.volume_listener = seen.append
    system.minus_volume(30)
    system.add_volume(10)
    assert seen == [70, 80]