"""Shared enumerations and numeric limits used across the game."""

from enum import IntEnum, IntFlag

KEYBINDS_MAX = 10
IS_MOUSE_BUTTON = 0x10000
IS_CONTROLLER_BUTTON = 0x20000

FRACBITS = 16
FRACUNIT = 1 << FRACBITS
FRACMASK = FRACUNIT - 1

RANDTABLESIZE = 128

# Heads-up display timing and message buffer limits.
SCROLL_START_DELAY = 750
MSG_DISPLAY_TIME = 1200
MS_PER_CHAR = 64
MAX_MESSAGES = 5

# Automap cell bits.
BIT_AM_WALL = 1
BIT_AM_SECRET = 2
BIT_AM_ENTRANCE = 4
BIT_AM_EVENTS = 8
BIT_AM_VISITED = 16

# Map byte-code layout.
BYTE_CODE_ID = 0
BYTE_CODE_ARG1 = 1
BYTE_CODE_ARG2 = 2
BYTE_CODE_MAX = 3

CHANGEMAP_SHOWSTAT_SHIFT = 31
CHANGEMAP_SHOWSTATS_BIT = 1 << CHANGEMAP_SHOWSTAT_SHIFT

# Tile event execution flags.
EVENT_FLAG_BLOCKINPUT = 1
MCODE_EXEC_ENTER_NORTH = 1
MCODE_EXEC_ENTER_EAST = 2
MCODE_EXEC_ENTER_SOUTH = 4
MCODE_EXEC_ENTER_WEST = 8
MCODE_EXEC_EXIT_SOUTH = 16
MCODE_EXEC_EXIT_WEST = 32
MCODE_EXEC_EXIT_NORTH = 64
MCODE_EXEC_EXIT_EAST = 128
MCODE_EXEC_TRIGGER = 256
MCODE_FLAG_REMOVE = 512


class KeyAction(IntEnum):
    """Abstract key actions produced by the input layer."""

    UNDEFINED = 0
    FIRST = 1
    NUM_0 = 2
    NUM_1 = 3
    NUM_2 = 4
    NUM_3 = 5
    NUM_4 = 6
    NUM_5 = 7
    NUM_6 = 8
    NUM_7 = 9
    NUM_8 = 10
    NUM_9 = 11
    STAR = 12
    POUND = 13
    POWER = 14
    END = 15
    SEND = 16
    CLR = 17
    UP = 18
    DOWN = 19
    LEFT = 20
    RIGHT = 21
    SELECT = 22
    SOFT1 = 23
    SOFT2 = 24
    MENUOPEN = 25
    AUTOMAP = 26
    MOVELEFT = 27
    MOVERIGHT = 28
    PREVWEAPON = 29
    NEXTWEAPON = 30
    PASSTURN = 31
    MENU_UP = 0x40
    MENU_DOWN = 0x80
    MENU_PAGE_UP = 0x100
    MENU_PAGE_DOWN = 0x200
    MENU_SELECT = 0x400
    MENU_OPEN = 0x800


class ControllerButton(IntEnum):
    """Game controller buttons and stick directions."""

    INVALID = -1
    A = 0
    B = 1
    X = 2
    Y = 3
    BACK = 4
    START = 5
    LEFT_STICK = 6
    RIGHT_STICK = 7
    LEFT_BUMPER = 8
    RIGHT_BUMPER = 9
    DPAD_UP = 10
    DPAD_DOWN = 11
    DPAD_LEFT = 12
    DPAD_RIGHT = 13
    LAXIS_UP = 14
    LAXIS_DOWN = 15
    LAXIS_LEFT = 16
    LAXIS_RIGHT = 17
    RAXIS_UP = 18
    RAXIS_DOWN = 19
    RAXIS_LEFT = 20
    RAXIS_RIGHT = 21
    LEFT_TRIGGER = 22
    RIGHT_TRIGGER = 23
    MAX = 24


class MouseButton(IntEnum):
    """Mouse buttons, wheel directions and motion directions."""

    INVALID = -1
    LEFT = 0
    MIDDLE = 1
    RIGHT = 2
    X1 = 3
    X2 = 4
    WHEEL_UP = 5
    WHEEL_DOWN = 6
    MOTION_UP = 7
    MOTION_DOWN = 8
    MOTION_LEFT = 9
    MOTION_RIGHT = 10
    MAX = 11


class MenuId(IntEnum):
    """Identifiers of every menu screen."""

    NONE = 0
    MAIN = 1
    MAIN_HELP_ABOUT = 2
    MAIN_EXIT = 3
    MAIN_ERASE = 4
    MAIN_SURE = 5
    MAIN_CONTINUE = 6
    MAIN_OPTIONS = 7
    VIDEO = 8
    INPUT = 9
    SOUND = 10
    BINDINGS = 11
    MOUSE = 12
    CONTROLLER = 13
    ENABLE_SOUNDS = 14
    MAP_STATS = 15
    MAP_STATS_OVERALL = 16
    INGAME_BEGIN = 17
    GOTO_JUNCTION = 18
    QUIT_TO_MAIN_MENU = 19
    INGAME_NOTEBOOK = 20
    INGAME_HELP_ABOUT = 21
    NONE2 = 22
    NONE3 = 23
    NONE4 = 24
    NONE5 = 25
    INGAME = 26
    NONE6 = 27
    INGAME_STATUS = 28
    INGAME_OPTIONS = 29
    INGAME_EXIT = 30
    ITEMS = 31
    ITEMS_CONFIRM = 32
    INGAME_DEAD = 33
    CONFIRM_LOAD = 34
    DEBUG = 35
    DEVELOPER_VARS = 36
    NONE7 = 37
    DEBUG_MAPS = 38
    DEBUG_CHEATS = 39
    DEBUG_STATS = 40
    STORE_CONFIRM = 41
    STORE = 42
    STORE_BUY = 43
    DEVELOPER = 44
    INGAME_SAVE = 45
    INGAME_LOAD = 46
    INGAME_LOADNOSAVE = 47
    INGAME_VIDEO = 48
    INGAME_INPUT = 49
    INGAME_SOUND = 50
    INGAME_BINDINGS = 51
    INGAME_MOUSE = 52
    INGAME_CONTROLLER = 53


class LineFlag(IntFlag):
    """Flags carried by map lines (walls and doors)."""

    RENDER_SPRITE_TWO_SIDED = 1
    RENDER_SPRITE = 2
    DOORLERP = 4
    EAST_SOUTH = 8
    WEST_NORTH = 16
    HIDDEN = 32
    DOOROPEN = 64
    AUTOMAP_VISIBLE = 128
    VERTICAL = 256
    HORIZONTAL = 512
    DOORLOCKED = 1024
    SOUTH = 2048
    NORTH = 4096
    WEST = 8192
    EAST = 16384
    FLIP_HORIZONTAL = 32768


class SpriteFlag(IntFlag):
    """Flags carried in the info word of map sprites."""

    HIDDEN = 65536
    WALL = 131072
    TILE = 262144
    NORTH = 524288
    SOUTH = 1048576
    EAST = 2097152
    WEST = 4194304
    DECAL = 8388608
    NOENTITY = 16777216
    FLIP_WALL = 33554432
    FOUR_ITEMS = 67108864
    TWO_SIDED = 134217728
    AUTOMAP_VISIBLE = 268435456
    RESERVED_29 = 536870912
    RESERVED_30 = 1073741824
    AUTO_ANIMATE = 2147483648

    ORIENTED = NORTH | SOUTH | EAST | WEST
    HORIZONTAL = NORTH | SOUTH
    VERTICAL = EAST | WEST