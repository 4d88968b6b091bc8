"""Ray casting through the map grid and wall column projection."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence
from typing import Any

from .model import DEFAULT_DOUBLE, WALL, DrawParams, Player, Ray, Side


def _divide(numerator: float, denominator: float) -> float:
    """Floating division that yields infinities or NaN instead of raising."""
    if denominator:
        return numerator / denominator
    if numerator == 0 or math.isnan(numerator):
        return math.nan
    return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)


def _trunc(value: float) -> int:
    return int(value) if math.isfinite(value) else 0


def _fraction(value: float) -> float:
    if not math.isfinite(value):
        return math.nan
    return value - math.floor(value)


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return ""


def init_ray(player: Player, x: int, width: int) -> Ray:
    """Create the ray for screen column ``x``."""
    camera = 2 * x / float(width) - 1
    raydir_x = player.dir_x + player.vector_x * camera
    raydir_y = player.dir_y + player.vector_y * camera
    return Ray(
        camera=camera,
        raydir_x=raydir_x,
        raydir_y=raydir_y,
        map_x=int(player.x),
        map_y=int(player.y),
        deltadist_x=abs(_divide(1.0, raydir_x)),
        deltadist_y=abs(_divide(1.0, raydir_y)),
        hit=False,
    )


def calculate_step(ray: Ray, player: Player) -> None:
    """Set the step direction and the distance to the first grid lines."""
    if ray.raydir_x < 0:
        ray.step_x = -1
        ray.sidedist_x = (player.x - ray.map_x) * ray.deltadist_x
    else:
        ray.step_x = 1
        ray.sidedist_x = (ray.map_x + 1.0 - player.x) * ray.deltadist_x
    if ray.raydir_y < 0:
        ray.step_y = -1
        ray.sidedist_y = (player.y - ray.map_y) * ray.deltadist_y
    else:
        ray.step_y = 1
        ray.sidedist_y = (ray.map_y + 1.0 - player.y) * ray.deltadist_y


def run_dda(ray: Ray, grid: Sequence[str]) -> None:
    """Walk the ray cell by cell until it enters a wall.

    A cell outside the grid also stops the ray.
    """
    while not ray.hit:
        if ray.sidedist_x < ray.sidedist_y:
            ray.sidedist_x += ray.deltadist_x
            ray.map_x += ray.step_x
            if ray.step_x == -1:
                ray.side = Side.WEST
            elif ray.step_x == 1:
                ray.side = Side.EAST
        else:
            ray.sidedist_y += ray.deltadist_y
            ray.map_y += ray.step_y
            if ray.step_y == -1:
                ray.side = Side.NORTH
            elif ray.step_y == 1:
                ray.side = Side.SOUTH
        if _cell(grid, ray.map_y, ray.map_x) in (WALL, ""):
            ray.hit = True


def wall_distance(ray: Ray, player: Player) -> float:
    """Perpendicular distance to the wall that was hit, stored on the ray.

    Distances below the minimum are raised to it.
    """
    if ray.side in (Side.WEST, Side.EAST):
        offset = ray.map_x - player.x + (1 - ray.step_x) // 2
        dist = _divide(offset, ray.raydir_x)
    else:
        offset = ray.map_y - player.y + (1 - ray.step_y) // 2
        dist = _divide(offset, ray.raydir_y)
    ray.walldist = DEFAULT_DOUBLE if dist < DEFAULT_DOUBLE else dist
    return ray.walldist


def project_wall(ray: Ray, draw: DrawParams, height: int) -> None:
    """Compute the wall slice height and its first and last screen rows."""
    if ray.walldist <= 0:
        ray.walldist = DEFAULT_DOUBLE
    line_height = height / ray.walldist
    draw.lineh = int(line_height) if math.isfinite(line_height) else height
    ray.start = max(height // 2 - draw.lineh // 2, 0)
    ray.end = height // 2 + draw.lineh // 2
    if ray.end >= height:
        ray.end = height - 1


def texture_params(
    ray: Ray, player: Player, draw: DrawParams, texture: Any, height: int
) -> None:
    """Set the texture column, step and starting position for a wall slice."""
    if ray.side in (Side.WEST, Side.EAST):
        wallx = player.y + ray.walldist * ray.raydir_y
    else:
        wallx = player.x + ray.walldist * ray.raydir_x
    draw.wallx = _fraction(wallx)

    width = texture.width
    texx = _trunc(draw.wallx * float(width))
    if ray.side in (Side.WEST, Side.EAST) and ray.raydir_x < 0:
        texx = width - texx - 1
    if ray.side in (Side.NORTH, Side.SOUTH) and ray.raydir_y > 0:
        texx = width - texx - 1
    draw.texx = texx

    draw.step = _divide(1.0 * texture.height, draw.lineh)
    draw.texpos = (ray.start - height // 2 + draw.lineh // 2) * draw.step


def texture_color(
    textures: Mapping[Side, Any], side: Side, texx: int, texy: int
) -> int:
    """Colour of the wall texture for ``side`` at texel (``texx``, ``texy``).

    Returns 0 when there is no texture for that side.
    """
    texture = textures.get(side)
    if texture is None:
        return 0
    return texture.pixels[texture.height * texy + texx]