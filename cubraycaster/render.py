"""Drawing a frame: floor and ceiling, textured walls and the mini map."""

from __future__ import annotations

import math

from .model import FLOOR, LOAD_SPRITES, WALL, GameState, Side
from .movement import apply_keys
from .raycast import (
    calculate_step,
    init_ray,
    project_wall,
    run_dda,
    texture_color,
    texture_params,
    wall_distance,
)
from .textures import Texture

_MASK = 0xFFFFFFFF
_TRIANGLE_SIZE = 10


def draw_floor_and_ceiling(canvas: Texture, floor: int, ceiling: int) -> None:
    """Fill the upper half with the ceiling colour and the rest with the floor."""
    half = canvas.height // 2
    canvas.pixels[:] = [ceiling & _MASK] * (half * canvas.width) + [
        floor & _MASK
    ] * ((canvas.height - half) * canvas.width)


def _uses_wall_texture(state: GameState) -> bool:
    """False when the struck wall cell shows the animated sprite instead."""
    ray, grid = state.ray, state.scene.grid
    if 0 <= ray.map_y < len(grid) and 0 <= ray.map_x < len(grid[ray.map_y]):
        cell = grid[ray.map_y][ray.map_x]
    else:
        cell = ""
    return (
        cell != WALL
        or not LOAD_SPRITES
        or (ray.map_x + ray.map_y) % 10 != 0
        or not state.animation.frames
    )


def draw_column(state: GameState, canvas: Texture, x: int) -> None:
    """Draw the wall slice of the current ray into screen column ``x``."""
    ray, draw = state.ray, state.draw
    texture_params(ray, state.player, draw, state.textures[Side.NORTH], state.height)
    frame = None
    if _uses_wall_texture(state):
        height_tex = state.textures[Side.NORTH].height
    else:
        state.animation.update()
        frame = state.animation.frames[state.animation.current_frame]
        height_tex = frame.height
    for y in range(ray.start, ray.end + 1):
        if not 0 <= y < state.height:
            continue
        if not math.isfinite(draw.texpos):
            draw.texpos = 0.0
        draw.texy = int(draw.texpos) & (height_tex - 1)
        draw.texpos += draw.step
        if frame is None:
            color = texture_color(state.textures, ray.side, draw.texx, draw.texy)
        else:
            color = frame.pixel(draw.texx % frame.width, draw.texy % frame.height)
        canvas.put_pixel(x, y, color)


def raycast_frame(state: GameState, canvas: Texture) -> None:
    """Cast one ray per screen column and draw the walls it finds."""
    for x in range(state.width):
        state.ray = init_ray(state.player, x, state.width)
        calculate_step(state.ray, state.player)
        run_dda(state.ray, state.scene.grid)
        wall_distance(state.ray, state.player)
        project_wall(state.ray, state.draw, state.height)
        draw_column(state, canvas, x)


def _draw_square(
    state: GameState, canvas: Texture, x: int, y: int, size: int, color: int
) -> None:
    offset_y = state.height - state.scene.height * size
    for i in range(size):
        for j in range(size):
            canvas.put_pixel(x * size + i + 17, y * size + j - 17 + offset_y, color)


def _draw_triangle(
    canvas: Texture, x: int, y: int, dir_x: float, dir_y: float, color: int
) -> None:
    half = _TRIANGLE_SIZE / 2
    points = (
        (x + dir_x * _TRIANGLE_SIZE, y + dir_y * _TRIANGLE_SIZE),
        (x + dir_x * half - dir_y * half, y + dir_y * half + dir_x * half),
        (x + dir_x * half + dir_y * half, y + dir_y * half - dir_x * half),
    )
    for px, py in points:
        canvas.put_pixel(int(px), int(py), color)


def draw_minimap(state: GameState, canvas: Texture) -> None:
    """Draw the map in the lower left corner with the player and a heading mark."""
    scene, player = state.scene, state.player
    if not scene.grid:
        return
    cell_scale = state.height // scene.height
    size = cell_scale // 5
    colors = {WALL: scene.ceiling_color, FLOOR: scene.floor_color}
    for y, row in enumerate(scene.grid):
        for x, element in enumerate(row):
            color = colors.get(element)
            if color is not None:
                _draw_square(state, canvas, x, y, size, color)
    _draw_square(state, canvas, int(player.x), int(player.y), size, 0x000)
    marker_x = player.x * cell_scale / 5 + 9
    marker_y = (
        player.y * cell_scale / 5
        - 14
        + (state.height - (scene.height * cell_scale) // 5)
    )
    _draw_triangle(
        canvas, int(marker_x), int(marker_y), player.dir_x, player.dir_y, 0x000
    )


def render_frame(state: GameState, canvas: Texture) -> Texture:
    """Apply held keys and draw a complete frame into ``canvas``."""
    apply_keys(state)
    draw_floor_and_ceiling(canvas, state.scene.floor_color, state.scene.ceiling_color)
    raycast_frame(state, canvas)
    draw_minimap(state, canvas)
    return canvas