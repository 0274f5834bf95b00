"""Sound effect and music channel management with playback priorities."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import IntFlag
from typing import Callable, Optional

logger = logging.getLogger(__name__)

MAX_SOUND_CHANNELS = 10
MAX_AUDIO_FILES = 95
MUSIC_CHANNEL = MAX_SOUND_CHANNELS
MIX_MAX_VOLUME = 128

SOUND_TABLE: tuple[int, ...] = (
    5039, 5040, 5042, 5043, 5044, 5045, 5046, 5047, 5048, 5049, 5050,
    5051, 5052, 5053, 5054, 5055, 5057, 5058, 5059, 5060, 5061, 5062,
    5063, 5064, 5065, 5066, 5067, 5068, 5069, 5070, 5071, 5072, 5073,
    5074, 5076, 5077, 5078, 5079, 5080, 5081, 5082, 5083, 5084, 5085,
    5086, 5087, 5088, 5089, 5090, 5091, 5092, 5093, 5094, 5095, 5096,
    5097, 5098, 5099, 5100, 5101, 5102, 5103, 5104, 5105, 5106, 5107,
    5108, 5109, 5110, 5111, 5112, 5113, 5114, 5115, 5116, 5117, 5118,
    5119, 5120, 5121, 5122, 5123, 5124, 5125, 5126, 5127, 5128, 5129,
    5130, 5131, 5133, 5134, 5136, 5137, 5138,
)

# Entries of the table that are stored as MIDI rather than WAV.
MIDI_INDEXES = frozenset({0, 1, 3})


def resource_index(resource_id: int) -> int:
    """Position of ``resource_id`` in the sound table, or -1 if unknown."""
    try:
        return SOUND_TABLE.index(resource_id)
    except ValueError:
        return -1


class SoundFlag(IntFlag):
    """Flags passed when starting a sound."""

    NONE = 0
    LOOP = 1
    STOP_SOUNDS = 2
    NO_FORCE_STOP = 4
    IS_MUSIC = 8


_KEPT_FLAGS = SoundFlag.LOOP | SoundFlag.IS_MUSIC | SoundFlag.NO_FORCE_STOP


class AudioBackend(ABC):
    """The mixer and synthesizer the sound system drives."""

    @abstractmethod
    def is_playing(self, channel: int) -> bool:
        """Whether a sound effect is playing on ``channel``."""

    @abstractmethod
    def halt_channel(self, channel: int) -> None:
        """Stop the sound effect on ``channel``."""

    @abstractmethod
    def play_channel(self, channel: int, resource_id: int, loop: bool) -> None:
        """Start a sound effect on ``channel``."""

    @abstractmethod
    def set_sound_volume(self, resource_id: int, volume: int) -> None:
        """Set a sound effect's volume, 0 to MIX_MAX_VOLUME."""

    @abstractmethod
    def set_master_volume(self, volume: int) -> None:
        """Set the volume of every effect channel, 0 to MIX_MAX_VOLUME."""

    @abstractmethod
    def is_music_playing(self, resource_id: int) -> bool:
        """Whether the given music track is playing."""

    @abstractmethod
    def stop_music(self, resource_id: int) -> None:
        """Stop a music track and rewind it to the start."""

    @abstractmethod
    def play_music(self, resource_id: int, loop: bool) -> None:
        """Start a music track."""

    @abstractmethod
    def set_music_gain(self, gain: float) -> None:
        """Set the synthesizer gain."""


class MemoryAudioBackend(AudioBackend):
    """Backend that only records what would be played; no audio output."""

    def __init__(self) -> None:
        self.channels: dict[int, tuple[int, bool]] = {}
        self.music: dict[int, bool] = {}
        self.sound_volumes: dict[int, int] = {}
        self.master_volume: Optional[int] = None
        self.music_gain: Optional[float] = None

    def is_playing(self, channel: int) -> bool:
        return channel in self.channels

    def halt_channel(self, channel: int) -> None:
        self.channels.pop(channel, None)

    def play_channel(self, channel: int, resource_id: int, loop: bool) -> None:
        self.channels[channel] = (resource_id, loop)

    def set_sound_volume(self, resource_id: int, volume: int) -> None:
        self.sound_volumes[resource_id] = volume

    def set_master_volume(self, volume: int) -> None:
        self.master_volume = volume

    def is_music_playing(self, resource_id: int) -> bool:
        return resource_id in self.music

    def stop_music(self, resource_id: int) -> None:
        self.music.pop(resource_id, None)

    def play_music(self, resource_id: int, loop: bool) -> None:
        self.music[resource_id] = loop

    def set_music_gain(self, gain: float) -> None:
        self.music_gain = gain

    def finish(self, channel: int) -> None:
        """Mark the effect on ``channel`` as having played to its end."""
        self.channels.pop(channel, None)


@dataclass
class SoundChannel:
    """What is loaded on one mixer channel."""

    sound: Optional[int] = None
    music: Optional[int] = None
    flags: SoundFlag = field(default=SoundFlag.NONE)


class SoundSystem:
    """Chooses channels for sounds and enforces playback priority."""

    def __init__(self, backend: AudioBackend, priority_enabled: bool = True) -> None:
        self.backend = backend
        self.priority_enabled = priority_enabled
        self.enabled = False
        self.priority = 3
        self.channel = 0
        self.next_play = 0
        self.volume = 100
        self.channels = [SoundChannel() for _ in range(MAX_SOUND_CHANNELS + 1)]
        self.volume_listener: Optional[Callable[[int], None]] = None
        backend.set_master_volume(self._mix_volume())
        backend.set_music_gain(self._gain())

    def _mix_volume(self) -> int:
        return self.volume * MIX_MAX_VOLUME // 100

    def _gain(self) -> float:
        return self._mix_volume() / 128.0

    def stop_sounds(self) -> None:
        """Stop everything except effects marked NO_FORCE_STOP."""
        for index, chan in enumerate(self.channels):
            if chan.flags & SoundFlag.IS_MUSIC:
                if chan.music is not None and self.backend.is_music_playing(chan.music):
                    self.backend.stop_music(chan.music)
                    chan.flags = SoundFlag.NONE
            elif self.backend.is_playing(index) and not chan.flags & SoundFlag.NO_FORCE_STOP:
                self.backend.halt_channel(index)
                chan.flags = SoundFlag.NONE
        self.priority = 0

    def free_sound(self, channel: int) -> None:
        """Stop and unload whatever is on ``channel``."""
        chan = self.channels[channel]
        if chan.sound is not None and self.backend.is_playing(channel):
            self.backend.halt_channel(channel)
        if chan.music is not None and self.backend.is_music_playing(chan.music):
            self.backend.stop_music(chan.music)
        chan.flags = SoundFlag.NONE
        chan.sound = None
        chan.music = None

    def free_sounds(self) -> None:
        """Unload every channel, music included."""
        for index in range(len(self.channels)):
            self.free_sound(index)

    def get_state(self) -> int:
        """Sounds started so far plus effects still playing."""
        playing = sum(
            1 for index in range(MAX_SOUND_CHANNELS) if self.backend.is_playing(index)
        )
        return self.next_play + playing

    def get_free_channel(self) -> int:
        """First idle effect channel, freed for reuse, or -1 if all are busy."""
        free = -1
        for index in range(MAX_SOUND_CHANNELS):
            if self.backend.is_playing(index):
                continue
            if free == -1:
                self.free_sound(index)
                free = index
            else:
                self.backend.halt_channel(index)
        return free

    def load_sound(self, channel: int, resource_id: int) -> None:
        """Attach ``resource_id`` to ``channel``, keeping its flags."""
        if resource_index(resource_id) == -1:
            return
        chan = self.channels[channel]
        flags = chan.flags
        if flags & SoundFlag.IS_MUSIC:
            if chan.music is not None:
                self.free_sound(channel)
            chan.music = resource_id
        else:
            if chan.sound is not None:
                self.free_sound(channel)
            chan.sound = resource_id
        chan.flags = flags

    def ready_sound(self, channel: int) -> None:
        """Apply the current volume to what is loaded on ``channel``."""
        chan = self.channels[channel]
        if chan.flags & SoundFlag.IS_MUSIC:
            self.backend.set_music_gain(self._gain())
        elif chan.sound is not None:
            self.backend.set_sound_volume(chan.sound, self._mix_volume())

    def play_sound(self, resource_id: int, flags: SoundFlag, priority: int) -> bool:
        """Start a sound or music track; returns whether playback began."""
        flags = SoundFlag(flags)
        is_music = bool(flags & SoundFlag.IS_MUSIC)
        if not self.enabled or resource_id < 0:
            return False

        if (
            priority < self.priority
            and self.get_state()
            and not is_music
            and self.priority_enabled
        ):
            logger.info(
                "Dynamic playback of %d prevented by priority (%d < %d)",
                resource_id, priority, self.priority,
            )
            return False

        self.channel = MUSIC_CHANNEL if is_music else self.get_free_channel()
        if self.channel < 0:
            return False

        if flags & SoundFlag.STOP_SOUNDS:
            self.stop_sounds()

        chan = self.channels[self.channel]
        chan.flags = flags & _KEPT_FLAGS
        self.load_sound(self.channel, resource_id)
        self.ready_sound(self.channel)
        self.priority = priority

        loop = bool(flags & SoundFlag.LOOP)
        started = False
        if is_music:
            if chan.music is not None:
                self.backend.play_music(chan.music, loop)
                started = True
        elif chan.sound is not None:
            self.backend.play_channel(self.channel, chan.sound, loop)
            started = True

        self.next_play += 1
        return started

    def update_volume(self) -> None:
        """Push the current volume to everything playing and notify the listener."""
        for index, chan in enumerate(self.channels):
            if chan.flags & SoundFlag.IS_MUSIC:
                if chan.music is not None and self.backend.is_music_playing(chan.music):
                    self.backend.set_music_gain(self._gain())
            elif self.backend.is_playing(index) and chan.sound is not None:
                self.backend.set_sound_volume(chan.sound, self._mix_volume())
        if self.volume_listener is not None:
            self.volume_listener(self.volume)

    def minus_volume(self, amount: int) -> int:
        """Lower the volume, not below 0, and return it."""
        self.volume = max(0, self.volume - amount)
        self.update_volume()
        return self.volume

    def add_volume(self, amount: int) -> int:
        """Raise the volume, not above 100, and return it."""
        self.volume = min(100, self.volume + amount)
        self.update_volume()
        return self.volume