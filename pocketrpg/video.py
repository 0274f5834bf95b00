"""Display modes, circle rasterisation and controller input decoding."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from pocketrpg.constants import ControllerButton, MouseButton

# Analog joystick dead zone in raw axis units.
JOYSTICK_DEAD_ZONE = 8000
DEFAULT_DEAD_ZONE = 25
AXIS_SCALE = 32768

Point = tuple[int, int]
Segment = tuple[Point, Point]


@dataclass(frozen=True)
class VideoMode:
    """A selectable window resolution."""

    width: int
    height: int


VIDEO_MODES: tuple[VideoMode, ...] = (
    VideoMode(128, 128),
    VideoMode(128, 160),
    VideoMode(160, 128),
    VideoMode(176, 208),
    VideoMode(176, 220),
    VideoMode(220, 176),
    VideoMode(240, 320),
    VideoMode(320, 200),
    VideoMode(320, 240),
    VideoMode(352, 416),
    VideoMode(416, 352),
    VideoMode(640, 360),
    VideoMode(640, 480),
    VideoMode(800, 600),
)


@dataclass
class VideoSettings:
    """User video preferences with their defaults."""

    full_screen: bool = False
    v_sync: bool = False
    integer_scaling: bool = True
    resolution_index: int = 8
    display_soft_keys: bool = True

    def __post_init__(self) -> None:
        if not 0 <= self.resolution_index < len(VIDEO_MODES):
            raise ValueError(f"invalid resolution index {self.resolution_index}")

    @property
    def mode(self) -> VideoMode:
        """The resolution selected by ``resolution_index``."""
        return VIDEO_MODES[self.resolution_index]


_CONTROLLER_BUTTON_ORDER: tuple[ControllerButton, ...] = (
    ControllerButton.A,
    ControllerButton.B,
    ControllerButton.X,
    ControllerButton.Y,
    ControllerButton.BACK,
    ControllerButton.START,
    ControllerButton.LEFT_STICK,
    ControllerButton.RIGHT_STICK,
    ControllerButton.LEFT_BUMPER,
    ControllerButton.RIGHT_BUMPER,
    ControllerButton.DPAD_UP,
    ControllerButton.DPAD_DOWN,
    ControllerButton.DPAD_LEFT,
    ControllerButton.DPAD_RIGHT,
)

# Raw joystick button index to the controller button it stands for.
_JOYSTICK_BUTTONS: tuple[ControllerButton, ...] = (
    ControllerButton.Y,
    ControllerButton.B,
    ControllerButton.A,
    ControllerButton.X,
    ControllerButton.LEFT_TRIGGER,
    ControllerButton.RIGHT_TRIGGER,
    ControllerButton.LEFT_BUMPER,
    ControllerButton.RIGHT_BUMPER,
    ControllerButton.BACK,
    ControllerButton.START,
)


@dataclass(frozen=True)
class ControllerState:
    """A snapshot of a game controller's buttons and axes."""

    buttons: frozenset[ControllerButton] = field(default_factory=frozenset)
    left_trigger: int = 0
    right_trigger: int = 0
    left_x: int = 0
    left_y: int = 0
    right_x: int = 0
    right_y: int = 0


@dataclass(frozen=True)
class JoystickState:
    """A snapshot of a plain joystick: pressed button indexes and axis values."""

    buttons: frozenset[int] = field(default_factory=frozenset)
    axes: tuple[int, ...] = ()

    def axis(self, index: int) -> int:
        """Value of axis ``index``; axes the device lacks read as 0."""
        return self.axes[index] if 0 <= index < len(self.axes) else 0


def _dead_zone(percent: int) -> int:
    return percent * AXIS_SCALE // 100


def _circle_steps(r: int) -> Iterator[tuple[int, int]]:
    dx, dy = r, 0
    accum = dx - (dy << 1) - 1
    while dy <= dx:
        yield dx, dy
        dy += 1
        accum -= (dy << 1) - 1
        if accum < 0:
            dx -= 1
            accum += dx << 1


def circle_points(x: int, y: int, r: int) -> list[Point]:
    """Outline points of a circle of radius ``r`` centred on (x, y)."""
    points: list[Point] = []
    for dx, dy in _circle_steps(r):
        points.extend(
            (
                (dx + x, dy + y),
                (-dx + x, dy + y),
                (dy + x, dx + y),
                (-dy + x, dx + y),
                (-dx + x, -dy + y),
                (dx + x, -dy + y),
                (-dy + x, -dx + y),
                (dy + x, -dx + y),
            )
        )
    return points


def filled_circle_lines(x: int, y: int, r: int) -> list[Segment]:
    """Horizontal spans that together fill a circle of radius ``r``."""
    lines: list[Segment] = []
    for dx, dy in _circle_steps(r):
        lines.extend(
            (
                ((dx + x, dy + y), (-dx + x, dy + y)),
                ((dy + x, dx + y), (-dy + x, dx + y)),
                ((-dx + x, -dy + y), (dx + x, -dy + y)),
                ((-dy + x, -dx + y), (dy + x, -dx + y)),
            )
        )
    return lines


def _stick_direction(
    value_y: int,
    value_x: int,
    dead_zone: int,
    directions: tuple[ControllerButton, ControllerButton, ControllerButton, ControllerButton],
) -> ControllerButton:
    up, down, left, right = directions
    if value_y < -dead_zone:
        return up
    if value_y > dead_zone:
        return down
    if value_x < -dead_zone:
        return left
    if value_x > dead_zone:
        return right
    return ControllerButton.INVALID


_LEFT_AXIS = (
    ControllerButton.LAXIS_UP,
    ControllerButton.LAXIS_DOWN,
    ControllerButton.LAXIS_LEFT,
    ControllerButton.LAXIS_RIGHT,
)
_RIGHT_AXIS = (
    ControllerButton.RAXIS_UP,
    ControllerButton.RAXIS_DOWN,
    ControllerButton.RAXIS_LEFT,
    ControllerButton.RAXIS_RIGHT,
)
_DPAD = (
    ControllerButton.DPAD_UP,
    ControllerButton.DPAD_DOWN,
    ControllerButton.DPAD_LEFT,
    ControllerButton.DPAD_RIGHT,
)


def controller_button_id(
    state: ControllerState,
    dead_zone_left: int = DEFAULT_DEAD_ZONE,
    dead_zone_right: int = DEFAULT_DEAD_ZONE,
) -> ControllerButton:
    """The first active input of a game controller; dead zones are percentages."""
    for button in _CONTROLLER_BUTTON_ORDER:
        if button in state.buttons:
            return button
    if state.left_trigger:
        return ControllerButton.LEFT_TRIGGER
    if state.right_trigger:
        return ControllerButton.RIGHT_TRIGGER

    found = _stick_direction(
        state.left_y, state.left_x, _dead_zone(dead_zone_left), _LEFT_AXIS
    )
    if found is not ControllerButton.INVALID:
        return found
    return _stick_direction(
        state.right_y, state.right_x, _dead_zone(dead_zone_right), _RIGHT_AXIS
    )


def joystick_button_id(
    state: JoystickState,
    dead_zone_left: int = DEFAULT_DEAD_ZONE,
    dead_zone_right: int = DEFAULT_DEAD_ZONE,
) -> ControllerButton:
    """The first active input of a plain joystick, mapped to controller buttons."""
    for index, button in enumerate(_JOYSTICK_BUTTONS):
        if index in state.buttons:
            return button

    left_directions = _DPAD if len(state.axes) <= 2 else _LEFT_AXIS
    found = _stick_direction(
        state.axis(1), state.axis(0), _dead_zone(dead_zone_left), left_directions
    )
    if found is not ControllerButton.INVALID:
        return found
    return _stick_direction(
        state.axis(2), state.axis(3), _dead_zone(dead_zone_right), _RIGHT_AXIS
    )


_CONTROLLER_BUTTON_NAMES: tuple[str, ...] = (
    "Gamepad A",
    "Gamepad B",
    "Gamepad X",
    "Gamepad Y",
    "Back",
    "Start",
    "Left Stick",
    "Right Stick",
    "Left Bumper",
    "Right Bumper",
    "D-Pad Up",
    "D-Pad Down",
    "D-Pad Left",
    "D-Pad Right",
    "L-Stick Up",
    "L-Stick Down",
    "L-Stick Left",
    "L-Stick Right",
    "R-Stick Up",
    "R-Stick Down",
    "R-Stick Left",
    "R-Stick Right",
    "Left Trigger",
    "Right Trigger",
)

_MOUSE_BUTTON_NAMES: tuple[str, ...] = (
    "Mouse Left",
    "Mouse Middle",
    "Mouse Right",
    "Mouse X1",
    "Mouse X2",
    "Mouse Wheel Up",
    "Mouse Wheel Down",
    "Mouse Motion Up",
    "Mouse Motion Down",
    "Mouse Motion Left",
    "Mouse Motion Right",
)


def _lookup_name(names: tuple[str, ...], button_id: int, invalid: int) -> str:
    if button_id == invalid:
        return ""
    if not 0 <= button_id < len(names):
        raise ValueError(f"unknown button id {button_id}")
    return names[button_id]


def controller_button_name(button_id: int) -> str:
    """Display name of a controller button; empty for the invalid button."""
    return _lookup_name(_CONTROLLER_BUTTON_NAMES, button_id, ControllerButton.INVALID)


def mouse_button_name(button_id: int) -> str:
    """Display name of a mouse input; empty for the invalid button."""
    return _lookup_name(_MOUSE_BUTTON_NAMES, button_id, MouseButton.INVALID)