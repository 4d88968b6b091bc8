"""Core game state: player, ray, drawing parameters, keys and animation."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

WALL = "1"
FLOOR = "0"
HEIGHT = 250
WIDTH = 500
PLAYERS_SPEED = 0.003
ROTATE_SPEED = 0.005
DEFAULT_DOUBLE = 0.01
FRAME_DELAY = 10000
LOAD_SPRITES = True

KEY_W = 119
KEY_S = 115
KEY_A = 97
KEY_D = 100
KEY_UP = 65362
KEY_DOWN = 65364
KEY_LEFT = 65361
KEY_RIGHT = 65363
KEY_ESC = 65307

PLAYER_CHARS = frozenset("NSEW")


class Side(IntEnum):
    """Which face of a wall a ray struck."""

    NORTH = 0
    SOUTH = 1
    WEST = 2
    EAST = 3


_KEY_FIELDS = {
    KEY_W: "w",
    KEY_S: "s",
    KEY_A: "a",
    KEY_D: "d",
    KEY_LEFT: "left",
    KEY_RIGHT: "right",
}


@dataclass
class Keys:
    """Which movement keys are currently held down."""

    w: bool = False
    a: bool = False
    s: bool = False
    d: bool = False
    left: bool = False
    right: bool = False

    def press(self, keycode: int) -> bool:
        """Mark a key as held. Returns True when the key asks the game to quit."""
        name = _KEY_FIELDS.get(keycode)
        if name is not None:
            setattr(self, name, True)
        return keycode == KEY_ESC

    def release(self, keycode: int) -> None:
        """Mark a key as no longer held."""
        name = _KEY_FIELDS.get(keycode)
        if name is not None:
            setattr(self, name, False)


@dataclass
class Ray:
    """State of one ray cast through the grid."""

    camera: float = DEFAULT_DOUBLE
    raydir_x: float = DEFAULT_DOUBLE
    raydir_y: float = DEFAULT_DOUBLE
    map_x: int = 0
    map_y: int = 0
    sidedist_x: float = DEFAULT_DOUBLE
    sidedist_y: float = DEFAULT_DOUBLE
    deltadist_x: float = DEFAULT_DOUBLE
    deltadist_y: float = DEFAULT_DOUBLE
    step_x: int = 0
    step_y: int = 0
    hit: bool = False
    side: Side = Side.NORTH
    walldist: float = DEFAULT_DOUBLE
    start: int = 0
    end: int = 0


@dataclass
class DrawParams:
    """Parameters for drawing one textured wall column."""

    lineh: int = 0
    wallx: float = DEFAULT_DOUBLE
    texx: int = 0
    texy: int = 0
    texpos: float = DEFAULT_DOUBLE
    step: float = DEFAULT_DOUBLE


@dataclass
class Player:
    """Player position, facing direction and camera plane."""

    x: float = 0.0
    y: float = 0.0
    dir_x: float = 0.0
    dir_y: float = 0.0
    vector_x: float = 0.0
    vector_y: float = 0.0
    mouse_x: float = 0.0


@dataclass
class Animation:
    """A looping sequence of frames advanced every ``frame_delay`` updates."""

    frames: list[Any] = field(default_factory=list)
    current_frame: int = 0
    frame_delay: int = 0
    frame_timer: int = 0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def update(self) -> None:
        """Advance the timer and move to the next frame when it runs out."""
        self.frame_timer += 1
        if self.frame_timer >= self.frame_delay:
            self.frame_timer = 0
            self.current_frame += 1
            if self.current_frame >= self.frame_count:
                self.current_frame = 0


@dataclass
class Scene:
    """A parsed scene description: wall textures, colours and map grid."""

    grid: list[str] = field(default_factory=list)
    textures: dict[Side, str] = field(default_factory=dict)
    floor_color: int = 0
    ceiling_color: int = 0

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def length(self) -> int:
        return max((len(row.rstrip("\n")) for row in self.grid), default=0)


@dataclass
class GameState:
    """Everything the game loop needs for one running session."""

    scene: Scene
    player: Player = field(default_factory=Player)
    ray: Ray = field(default_factory=Ray)
    draw: DrawParams = field(default_factory=DrawParams)
    keys: Keys = field(default_factory=Keys)
    animation: Animation = field(default_factory=Animation)
    textures: dict[Side, Any] = field(default_factory=dict)
    mouse_x: int = WIDTH // 2
    width: int = WIDTH
    height: int = HEIGHT


def rgb_to_int(r: int, g: int, b: int) -> int:
    """Pack red, green and blue channels into one integer colour."""
    return (r << 16) | (g << 8) | b


def is_player(c: str) -> bool:
    """True for a player start marker: N, S, E or W."""
    return len(c) == 1 and c in PLAYER_CHARS


def is_space(c: str) -> bool:
    """True for a space or an ASCII whitespace control character."""
    return len(c) == 1 and (c == " " or 8 < ord(c) < 14)


def window_size_is_valid(width: int, height: int) -> bool:
    """Check the window size lies strictly within the allowed bounds."""
    if width >= 1920 or height >= 1080:
        return False
    if height <= 100 or width <= 100:
        return False
    return True