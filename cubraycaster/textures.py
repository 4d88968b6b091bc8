"""Pixel images: XPM loading, wall textures and animated sprite frames."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

SPRITE_FRAME_COUNT = 9

_STRING = re.compile(r'"((?:[^"\\]|\\.)*)"')
_COMMENT = re.compile(r"/\*.*?\*/", re.DOTALL)
_COLOR_KEYS = frozenset({"c", "m", "s", "g", "g4"})
_NAMED_COLORS = {"none": 0, "black": 0x000000, "white": 0xFFFFFF}


class XpmError(ValueError):
    """Raised when an XPM image cannot be read or is malformed."""


@dataclass
class Texture:
    """A rectangular image of packed ``0xRRGGBB`` pixels stored row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)
    path: str | None = None

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("texture size must not be negative")
        size = self.width * self.height
        if not self.pixels:
            self.pixels = [0] * size
        elif len(self.pixels) != size:
            raise ValueError(
                f"expected {size} pixels for a {self.width}x{self.height} "
                f"texture, got {len(self.pixels)}"
            )

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & 0xFFFFFFFF

    def pixel(self, x: int, y: int) -> int:
        """Return the colour of one pixel."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the texture")
        return self.pixels[y * self.width + x]


def _parse_color_value(value: str) -> int:
    value = value.strip()
    if value.startswith("#"):
        digits = value[1:]
        if not digits or len(digits) % 3:
            raise XpmError(f"bad colour {value!r}")
        try:
            int(digits, 16)
        except ValueError as exc:
            raise XpmError(f"bad colour {value!r}") from exc
        n = len(digits) // 3
        color = 0
        for part in (digits[i * n : (i + 1) * n] for i in range(3)):
            channel = part * 2 if n == 1 else part[:2]
            color = (color << 8) | int(channel, 16)
        return color
    name = " ".join(value.lower().split())
    if name in _NAMED_COLORS:
        return _NAMED_COLORS[name]
    raise XpmError(f"unknown colour {value!r}")


def _color_of(spec: str) -> int:
    values: dict[str, list[str]] = {}
    current: list[str] | None = None
    for token in spec.split():
        if token in _COLOR_KEYS and (current is None or current):
            current = values.setdefault(token, [])
        elif current is not None:
            current.append(token)
        else:
            raise XpmError(f"bad colour entry {spec!r}")
    chosen = values.get("c") or next((v for v in values.values() if v), None)
    if not chosen:
        raise XpmError(f"colour entry without a value: {spec!r}")
    return _parse_color_value(" ".join(chosen))


def parse_xpm(text: str) -> Texture:
    """Decode the text of an XPM image into a texture."""
    strings = _STRING.findall(_COMMENT.sub("", text))
    if not strings:
        raise XpmError("no XPM data found")
    header = strings[0].split()
    if len(header) < 4:
        raise XpmError(f"bad XPM header {strings[0]!r}")
    try:
        width, height, ncolors, cpp = (int(v) for v in header[:4])
    except ValueError as exc:
        raise XpmError(f"bad XPM header {strings[0]!r}") from exc
    if width <= 0 or height <= 0 or ncolors <= 0 or cpp <= 0:
        raise XpmError(f"bad XPM header {strings[0]!r}")
    if len(strings) < 1 + ncolors + height:
        raise XpmError("XPM data is truncated")

    palette: dict[str, int] = {}
    for entry in strings[1 : 1 + ncolors]:
        if len(entry) < cpp:
            raise XpmError(f"bad colour entry {entry!r}")
        palette[entry[:cpp]] = _color_of(entry[cpp:])

    pixels: list[int] = []
    for row in strings[1 + ncolors : 1 + ncolors + height]:
        if len(row) < width * cpp:
            raise XpmError(f"pixel row too short: {row!r}")
        for start in range(0, width * cpp, cpp):
            key = row[start : start + cpp]
            try:
                pixels.append(palette[key])
            except KeyError as exc:
                raise XpmError(f"undefined pixel key {key!r}") from exc
    return Texture(width=width, height=height, pixels=pixels)


def load_xpm(path) -> Texture:
    """Load an XPM file from disk."""
    try:
        text = Path(path).read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise XpmError(f"cannot load texture {path}") from exc
    texture = parse_xpm(text)
    texture.path = str(path)
    return texture


def load_sprite_frames(directory) -> list[Texture]:
    """Load the animated wall sprite frames ``1.xpm`` to ``9.xpm``."""
    base = Path(directory)
    return [
        load_xpm(base / f"{number}.xpm")
        for number in range(1, SPRITE_FRAME_COUNT + 1)
    ]