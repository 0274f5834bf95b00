# pocketrpg

The rules and supporting pieces of a small turn-based dungeon role-playing game.
The package uses no windowing, audio or graphics library. Its only dependency is
the Python standard library.

## Modules

- `pocketrpg.constants` holds the shared enumerations: `KeyAction`,
  `ControllerButton`, `MouseButton`, `MenuId`, `LineFlag` and `SpriteFlag`. It
  also holds numeric limits such as `FRACUNIT` and `MAX_MESSAGES`.
- `pocketrpg.weapon` has the `Weapon` dataclass. `Weapon.range_min_to_dist()`
  returns the squared world distance of the minimum range, plus one tile.
- `pocketrpg.zone` has `ZoneAllocator`, which hands out zero-filled
  `bytearray` blocks through `malloc`, `calloc` and `realloc`, and takes them
  back through `free`. `free_memory()` reports how many bytes are still held.
  Calling `realloc(block, 0)` frees the block. A negative size, or a block the
  zone did not allocate, raises `ZoneError`.
- `pocketrpg.ziparchive` has `ZipArchive`, a reader for stored and deflated zip
  entries, which can be used as a context manager.
  - `names()` lists the entries.
  - `read(name)` returns an entry's bytes. Names match without regard to case.
  - A missing entry raises `KeyError`.
  - Malformed, encrypted or unsupported archives raise `ZipFormatError`.
  - `find_end_of_central_directory(data)` locates the end record in raw bytes.
- `pocketrpg.sound` has `SoundSystem`, which handles channel choice, playback
  priority and volume.
  - Playback goes through an `AudioBackend`. `MemoryAudioBackend` only records
    what would play.
  - `SoundFlag` holds the flags a sound is started with.
  - `resource_index()` maps a sound resource id to its table position, or -1.
- `pocketrpg.video` covers display modes and input decoding.
  - `VIDEO_MODES` and `VideoSettings` hold the display modes and user
    preferences.
  - `circle_points()` and `filled_circle_lines()` rasterise circles.
  - `controller_button_id()` and `joystick_button_id()` turn `ControllerState`
    and `JoystickState` snapshots into a `ControllerButton`.
  - `controller_button_name()` and `mouse_button_name()` give display names.
- `pocketrpg.player_stats` has `CombatStats` and pure helpers:
  - `calc_damage_dir()`
  - `calc_level_xp()`
  - `format_time()`
  - `fill_secret_stats()`
  - `fill_monster_stats()`
- `pocketrpg.player` has `Player`, which covers:
  - health, armour and credits
  - experience and levelling up
  - weapon selection and firing
  - ammunition and inventory items
  - the dog familiar
  - end-of-level statistics

  Everything the player does to the rest of the game goes to a `PlayerEvents`
  object. That includes messages, sounds, screen shake, dialogs and death. The
  default `PlayerEvents` records these calls in lists. Subclass it to connect
  them to a real game.

## Installation

```
pip install .
```

## Example

```python
from pocketrpg.player import Player
from pocketrpg.player_stats import calc_level_xp, format_time
from pocketrpg.sound import MemoryAudioBackend, SoundFlag, SoundSystem
from pocketrpg.weapon import Weapon

print(calc_level_xp(2))        # 100
print(format_time(3_723_000))  # "01:02:03"

backend = MemoryAudioBackend()
sounds = SoundSystem(backend)
sounds.enabled = True
sounds.play_sound(5039, SoundFlag.NONE, 3)
print(backend.channels)        # {0: (5039, False)}

player = Player([Weapon() for _ in range(12)])
player.add_xp(80)              # enough to reach level 2
print(player.level, player.events.messages[0])
```

Resources packed in a zip file can be read like this:

```python
from pocketrpg.ziparchive import ZipArchive

with ZipArchive("resources.zip") as archive:
    data = archive.read("5043.mid")
```

## What this package does not do

- It has no game loop, map loading, renderer, menus or heads-up display drawing.
- It has no command to run.
- It does not play audio. `SoundSystem` only decides what should play, and a
  real `AudioBackend` has to be supplied for sound to be heard.
- It has no save-game storage.

## Running the tests

```
pip install .[test]
pytest
```