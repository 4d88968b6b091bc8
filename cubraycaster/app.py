"""Start-up, the game window and the main loop."""

from __future__ import annotations

import sys
from array import array
from collections.abc import Sequence
from pathlib import Path

from .model import (
    FRAME_DELAY,
    HEIGHT,
    KEY_A,
    KEY_D,
    KEY_DOWN,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_S,
    KEY_UP,
    KEY_W,
    WIDTH,
    Animation,
    GameState,
    Side,
    window_size_is_valid,
)
from .movement import handle_mouse
from .parsing import MapError, check_arguments, parse_scene
from .render import render_frame
from .textures import Texture, XpmError, load_sprite_frames, load_xpm

SPRITE_DIRECTORY = Path("textures") / "sprites"
WINDOW_TITLE = "Cub3D"

_LOAD_ORDER = (Side.NORTH, Side.EAST, Side.SOUTH, Side.WEST)


class StartupError(RuntimeError):
    """Raised when the game cannot be set up from a scene file."""


def build_state(path) -> GameState:
    """Parse a scene file and load its textures into a fresh game state."""
    if not window_size_is_valid(WIDTH, HEIGHT):
        raise StartupError("initialization failed")
    try:
        scene, player = parse_scene(path)
    except MapError as exc:
        raise StartupError("The map is not valid") from exc
    textures = {}
    for side in _LOAD_ORDER:
        try:
            textures[side] = load_xpm(scene.textures[side])
        except XpmError as exc:
            raise StartupError(f"{side.name.lower()} texture can't loaded") from exc
    try:
        frames = load_sprite_frames(SPRITE_DIRECTORY)
    except XpmError:
        frames = []
    return GameState(
        scene=scene,
        player=player,
        textures=textures,
        animation=Animation(frames=frames, frame_delay=FRAME_DELAY),
        mouse_x=WIDTH // 2,
        width=WIDTH,
        height=HEIGHT,
    )


def _to_surface(pygame, canvas: Texture):
    data = array("I", (0xFF000000 | (p & 0xFFFFFF) for p in canvas.pixels))
    if sys.byteorder == "little":
        data.byteswap()
    return pygame.image.frombuffer(
        data.tobytes(), (canvas.width, canvas.height), "ARGB"
    )


def run(state: GameState) -> None:
    """Open the window and run the game until it is closed or Escape is pressed."""
    import pygame

    keymap = {
        pygame.K_w: KEY_W,
        pygame.K_s: KEY_S,
        pygame.K_a: KEY_A,
        pygame.K_d: KEY_D,
        pygame.K_UP: KEY_UP,
        pygame.K_DOWN: KEY_DOWN,
        pygame.K_LEFT: KEY_LEFT,
        pygame.K_RIGHT: KEY_RIGHT,
        pygame.K_ESCAPE: KEY_ESC,
    }
    pygame.init()
    try:
        screen = pygame.display.set_mode((state.width, state.height))
        pygame.display.set_caption(WINDOW_TITLE)
        canvas = Texture(state.width, state.height)
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                if event.type == pygame.KEYDOWN:
                    code = keymap.get(event.key)
                    if code is not None and state.keys.press(code):
                        return
                elif event.type == pygame.KEYUP:
                    code = keymap.get(event.key)
                    if code is not None:
                        state.keys.release(code)
                elif event.type == pygame.MOUSEMOTION:
                    handle_mouse(state.player, event.pos[0], state.width)
            render_frame(state, canvas)
            screen.blit(_to_surface(pygame, canvas), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()


def _report(message: str) -> None:
    print("Error", file=sys.stderr)
    print(message, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: ``cub3D <scene.cub>``."""
    args = sys.argv[1:] if argv is None else list(argv)
    try:
        filename = check_arguments(args)
    except MapError:
        _report("incorrect input")
        return 1
    try:
        state = build_state(filename)
    except StartupError as exc:
        _report(str(exc))
        return 1
    run(state)
    return 0


if __name__ == "__main__":
    sys.exit(main())