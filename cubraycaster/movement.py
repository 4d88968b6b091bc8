"""Player movement with wall collisions and camera rotation."""

from __future__ import annotations

import math
from collections.abc import Callable, Sequence

from .model import FLOOR, PLAYERS_SPEED, ROTATE_SPEED, WALL, GameState, Player


def _cell(grid: Sequence[str], row: int, col: int) -> str:
    """Grid character at (row, col); anything outside the grid counts as wall."""
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        return grid[row][col]
    return WALL


def _not_wall(cell: str) -> bool:
    return cell != WALL


def _is_floor(cell: str) -> bool:
    return cell == FLOOR


def _step(
    player: Player,
    grid: Sequence[str],
    dx: float,
    dy: float,
    passable: Callable[[str], bool],
) -> None:
    """Move along each axis separately, only into passable cells."""
    if passable(_cell(grid, int(player.y), int(player.x + dx))):
        player.x += dx
    if passable(_cell(grid, int(player.y + dy), int(player.x))):
        player.y += dy


def move_forward(player: Player, grid: Sequence[str]) -> None:
    """Step along the facing direction unless a wall is in the way."""
    _step(
        player,
        grid,
        player.dir_x * PLAYERS_SPEED,
        player.dir_y * PLAYERS_SPEED,
        _not_wall,
    )


def move_back(player: Player, grid: Sequence[str]) -> None:
    """Step against the facing direction unless a wall is in the way."""
    _step(
        player,
        grid,
        -player.dir_x * PLAYERS_SPEED,
        -player.dir_y * PLAYERS_SPEED,
        _not_wall,
    )


def move_left(player: Player, grid: Sequence[str]) -> None:
    """Strafe left; only floor cells can be entered."""
    _step(
        player,
        grid,
        -player.vector_x * PLAYERS_SPEED,
        -player.vector_y * PLAYERS_SPEED,
        _is_floor,
    )


def move_right(player: Player, grid: Sequence[str]) -> None:
    """Strafe right; only floor cells can be entered."""
    _step(
        player,
        grid,
        player.vector_x * PLAYERS_SPEED,
        player.vector_y * PLAYERS_SPEED,
        _is_floor,
    )


def _rotate(player: Player, angle: float) -> None:
    cos_a, sin_a = math.cos(angle), math.sin(angle)
    player.dir_x, player.dir_y = (
        player.dir_x * cos_a - player.dir_y * sin_a,
        player.dir_x * sin_a + player.dir_y * cos_a,
    )
    player.vector_x, player.vector_y = (
        player.vector_x * cos_a - player.vector_y * sin_a,
        player.vector_x * sin_a + player.vector_y * cos_a,
    )


def look_right(player: Player) -> None:
    """Turn the view clockwise on screen."""
    _rotate(player, ROTATE_SPEED)


def look_left(player: Player) -> None:
    """Turn the view anticlockwise on screen."""
    _rotate(player, -ROTATE_SPEED)


def handle_mouse(player: Player, x: int, width: int) -> None:
    """Turn towards horizontal mouse motion and remember the new position."""
    if player.mouse_x < x <= width:
        look_right(player)
    elif 0 <= x < player.mouse_x:
        look_left(player)
    player.mouse_x = x


def apply_keys(state: GameState) -> None:
    """Apply one frame of movement for every key held down."""
    player, grid, keys = state.player, state.scene.grid, state.keys
    if keys.w:
        move_forward(player, grid)
    if keys.a:
        move_left(player, grid)
    if keys.s:
        move_back(player, grid)
    if keys.d:
        move_right(player, grid)
    if keys.left:
        look_left(player)
    if keys.right:
        look_right(player)