"""Reading and validating ``.cub`` scene description files."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from itertools import takewhile

from .model import (
    FLOOR,
    WALL,
    Player,
    Scene,
    Side,
    is_player,
    is_space,
    rgb_to_int,
)


class MapError(ValueError):
    """Raised when a scene file or its contents are not valid."""


_TEXTURE_KEYS = {
    "NO": Side.NORTH,
    "SO": Side.SOUTH,
    "WE": Side.WEST,
    "EA": Side.EAST,
}

_GRID_CHARS = frozenset("10NSEW ")
_WALL_ROW_CHARS = frozenset("1 \n")
_VOID_CELLS = ("", " ", "\n")

# direction x, direction y, camera plane x, camera plane y
_ORIENTATIONS = {
    "N": (0.0, -1.0, 0.66, 0.0),
    "S": (0.0, 1.0, -0.66, 0.0),
    "E": (1.0, 0.0, 0.0, 0.66),
    "W": (-1.0, 0.0, 0.0, -0.66),
}


def _char_at(text: str, index: int) -> str:
    return text[index] if 0 <= index < len(text) else ""


def _skip_spaces(text: str, start: int = 0) -> int:
    index = start
    while is_space(_char_at(text, index)):
        index += 1
    return index


def _is_letter(c: str) -> bool:
    return len(c) == 1 and c.isascii() and c.isalpha()


def _is_digit(c: str) -> bool:
    return len(c) == 1 and "0" <= c <= "9"


def check_extension(filename: str, extension: str) -> bool:
    """True when the last four characters of ``filename`` match ``extension``."""
    filename = str(filename)
    return len(filename) >= 4 and filename[-4:] == extension[:4]


def check_arguments(argv: Sequence[str]) -> str:
    """Validate the command-line arguments (without the program name).

    Exactly one readable ``.cub`` file is expected; its name is returned.
    """
    args = list(argv)
    if len(args) != 1:
        raise MapError("incorrect input")
    filename = str(args[0])
    try:
        with open(filename, "rb"):
            pass
    except OSError as exc:
        raise MapError("incorrect input") from exc
    if not check_extension(filename, ".cub"):
        raise MapError("incorrect input")
    return filename


def read_lines(path) -> list[str]:
    """Read a file as lines split on ``\\n`` only, keeping the line endings."""
    try:
        with open(
            path, encoding="utf-8", errors="surrogateescape", newline="\n"
        ) as handle:
            return list(handle)
    except OSError as exc:
        raise MapError(f"cannot read {path}") from exc


def remove_newline(text: str) -> str:
    """Return ``text`` with every newline character removed."""
    return text.replace("\n", "")


def _is_channel(part: str) -> bool:
    return all(_is_digit(c) or c == "\n" for c in part)


def _leading_int(part: str) -> int:
    digits = "".join(takewhile(_is_digit, part[_skip_spaces(part):]))
    return int(digits) if digits else 0


def parse_color(line: str) -> tuple[str, int]:
    """Parse an ``F r,g,b`` or ``C r,g,b`` line into its key and packed colour."""
    index = _skip_spaces(line)
    key = _char_at(line, index)
    if key not in ("F", "C"):
        raise MapError("Unknown key")
    rest = line[_skip_spaces(line, index + 1):]
    parts = [part for part in rest.split(",") if part]
    if len(parts) != 3 or not all(_is_channel(part) for part in parts):
        raise MapError("Unknown key")
    channels = [_leading_int(part) for part in parts]
    if any(channel > 255 for channel in channels):
        raise MapError("Unknown key")
    return key, rgb_to_int(*channels)


def find_colors(lines: Iterable[str]) -> tuple[int, int]:
    """Find the floor and ceiling colours above the map grid."""
    found: dict[str, int] = {}
    count = 0
    for line in lines:
        index = _skip_spaces(line)
        head = _char_at(line, index)
        if head == WALL:
            break
        if _is_letter(head) and is_space(_char_at(line, index + 1)):
            try:
                key, color = parse_color(line)
            except MapError as exc:
                raise MapError(f"Invalid colors: {exc}") from exc
            found[key] = color
            count += 1
    floor = found.get("F", 0)
    ceiling = found.get("C", 0)
    if count != 2 or not floor or not ceiling:
        raise MapError("Invalid colors")
    return floor, ceiling


def _accessible_texture(word: str, side: Side) -> str | None:
    path = remove_newline(word)
    if not check_extension(path, ".xpm"):
        return None
    try:
        with open(path, "rb"):
            pass
    except OSError:
        print(f"Invalid path of texture {side.name.lower()}", file=sys.stderr)
        return None
    return path


def find_textures(lines: Iterable[str]) -> dict[Side, str]:
    """Find the four wall texture paths above the map grid."""
    paths: dict[Side, str] = {}
    for line in lines:
        head = _char_at(line, _skip_spaces(line))
        if head == WALL:
            break
        if head in ("F", "C"):
            continue
        words = [word for word in line.split(" ") if word]
        if len(words) != 2:
            continue
        side = _TEXTURE_KEYS.get(words[0])
        if side is None or side in paths:
            raise MapError(f"Invalid textures: unknown key {words[0]!r}")
        path = _accessible_texture(words[1], side)
        if path is not None:
            paths[side] = path
    if any(side not in paths for side in Side):
        raise MapError("Invalid textures")
    return {side: paths[side] for side in Side}


def find_grid(lines: Sequence[str]) -> list[str]:
    """Cut the map grid out of the file: from the first to the last wall row."""
    rows = [i for i, line in enumerate(lines) if line.lstrip(" ").startswith(WALL)]
    if not rows:
        raise MapError("no map grid found")
    start, end = rows[0], rows[-1]
    return [remove_newline(line) for line in lines[start : end + 1]]


def check_top_bottom_walls(line: str) -> bool:
    """True when a row holds only walls and blanks."""
    return all(c in _WALL_ROW_CHARS for c in line)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid):
        return _char_at(grid[row], col)
    return ""


def check_no_output(grid: Sequence[str]) -> bool:
    """True when no floor or player cell touches the void outside the map."""
    for i, row in enumerate(grid):
        for j, c in enumerate(row):
            if c != FLOOR and not is_player(c):
                continue
            if j == 0:
                return False
            neighbours = (
                _cell(grid, i - 1, j),
                _cell(grid, i + 1, j),
                _cell(grid, i, j - 1),
                _cell(grid, i, j + 1),
            )
            if any(n in _VOID_CELLS for n in neighbours):
                return False
    return True


def check_player_other_char(grid: Sequence[str]) -> bool:
    """True when inner rows hold only map characters and there is one player."""
    last = len(grid) - 1
    for i, row in enumerate(grid):
        if i not in (0, last) and not all(c in _GRID_CHARS for c in row):
            return False
    players = sum(1 for row in grid for c in row if is_player(c))
    return players == 1


def find_player(grid: Sequence[str]) -> tuple[Player, list[str]]:
    """Locate the player start and return it with the grid where it becomes floor."""
    player: Player | None = None
    rows = list(grid)
    for y, row in enumerate(rows):
        for x, c in enumerate(row):
            if is_player(c):
                dir_x, dir_y, vector_x, vector_y = _ORIENTATIONS[c]
                player = Player(
                    x=x + 0.01,
                    y=y + 0.01,
                    dir_x=dir_x,
                    dir_y=dir_y,
                    vector_x=vector_x,
                    vector_y=vector_y,
                )
        rows[y] = "".join(FLOOR if is_player(c) else c for c in row)
    if player is None:
        raise MapError("no player start position")
    return player, rows


def _grid_picture(grid: Iterable[str]) -> str:
    symbols = {WALL: "#", FLOOR: " "}
    return "".join(
        "".join(symbols.get(c, c) for c in row) + "\n" for row in grid
    )


def display_grid(grid: Iterable[str]) -> None:
    """Print the grid with walls as ``#`` and floor as blanks."""
    sys.stdout.write(_grid_picture(grid))


def _textures_come_first(lines: Iterable[str]) -> bool:
    for line in lines:
        for c in line:
            if c in (" ", "\n"):
                continue
            if _is_letter(c):
                return True
            if _is_digit(c):
                return False
    return False


def parse_scene(path) -> tuple[Scene, Player]:
    """Read and validate a scene file.

    Returns the scene, whose grid has the player start turned into floor,
    and the player placed at that start.
    """
    lines = read_lines(path)
    if not _textures_come_first(lines):
        raise MapError("map description must follow the textures and colors")
    textures = find_textures(lines)
    floor, ceiling = find_colors(lines)
    grid = find_grid(lines)
    display_grid(grid)
    if len(grid) <= 2:
        raise MapError("map is too small")
    if not (check_top_bottom_walls(grid[0]) and check_top_bottom_walls(grid[-1])):
        raise MapError("map is not closed by walls")
    if not check_no_output(grid):
        raise MapError("map is not closed by walls")
    if not check_player_other_char(grid):
        raise MapError("map needs exactly one player and only valid characters")
    player, grid = find_player(grid)
    scene = Scene(
        grid=grid, textures=textures, floor_color=floor, ceiling_color=ceiling
    )
    return scene, player