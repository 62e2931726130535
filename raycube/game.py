"""The game: input handling, the frame loop and the window."""

from __future__ import annotations

import sys
from array import array
from enum import Enum
from pathlib import Path
from typing import Optional, Sequence

from raycube.config import ParseError
from raycube.parser import GameMap, PathLike, load_map
from raycube.player import Player
from raycube.render import (
    WINDOW_HEIGHT,
    WINDOW_WIDTH,
    FrameBuffer,
    render_frame,
)
from raycube.textures import Texture, load_textures
from raycube.timing import FrameClock, PerformanceStats
from raycube.xpm import XpmError, read_xpm_file

MOUSE_SENSITIVITY = 0.002
GUN_TEXTURES = (Path("textures/gun.xpm"), Path("textures/gun2.xpm"))
TITLE = "Cub3D"

_RESET = "\033[0m"
_CYAN = "\033[1;36m"
_YELLOW = "\033[1;33m"
_GREEN = "\033[1;32m"
_WHITE = "\033[1;37m"
_BLUE = "\033[1;34m"
_RED = "\033[1;31m"
_MAGENTA = "\033[1;35m"


class Key(Enum):
    """Keys the game reacts to."""

    W = "w"
    S = "s"
    A = "a"
    D = "d"
    LEFT = "left"
    RIGHT = "right"
    SPACE = "space"
    ESC = "escape"


_PLAYER_FLAGS = {
    Key.W: "move_up",
    Key.S: "move_down",
    Key.A: "move_left",
    Key.D: "move_right",
    Key.LEFT: "rotate_left",
    Key.RIGHT: "rotate_right",
}


def _is_transparent(pixel: int) -> bool:
    return (pixel >> 24) & 0xFF == 0xFF


class Game:
    """A running scene: map, player, textures, timing and the frame buffer."""

    def __init__(
        self,
        game_map: GameMap,
        textures: Optional[Sequence[Texture]] = None,
        width: int = WINDOW_WIDTH,
        height: int = WINDOW_HEIGHT,
        now: Optional[float] = None,
    ) -> None:
        self.game_map = game_map
        self.clock = FrameClock(now)
        self.perf = PerformanceStats()
        self.floor_color = game_map.floor.to_int()
        self.ceiling_color = game_map.ceiling.to_int()
        self.fb = FrameBuffer(width, height)
        self.textures = (
            load_textures(game_map) if textures is None else list(textures)
        )
        self.player = Player.from_map(game_map)
        self.mouse_last_x = width // 2
        self.mouse_active = True
        self.guns: Optional[tuple[Texture, Texture]] = None
        self.show_gun2 = False
        self.running = True

    @classmethod
    def from_file(cls, path: PathLike) -> "Game":
        """Load a scene file and start a game on it."""
        return cls(load_map(path))

    def key_press(self, key: object) -> None:
        """Handle a key going down; other keys are ignored."""
        if key in _PLAYER_FLAGS:
            setattr(self.player, _PLAYER_FLAGS[key], True)
        elif key is Key.SPACE:
            self.show_gun2 = True
        elif key is Key.ESC:
            self.close()

    def key_release(self, key: object) -> None:
        """Handle a key going up; other keys are ignored."""
        if key in _PLAYER_FLAGS:
            setattr(self.player, _PLAYER_FLAGS[key], False)
        elif key is Key.SPACE:
            self.show_gun2 = False

    def mouse_move(self, x: int, y: int) -> bool:
        """Turn by the horizontal pointer movement.

        Returns True when the pointer should be put back at the centre of
        the window.
        """
        if not self.mouse_active:
            return False
        delta = x - self.mouse_last_x
        if delta != 0:
            self.player.turn(delta * MOUSE_SENSITIVITY)
        self.mouse_last_x = self.fb.width // 2
        return True

    def _draw_ui(self) -> None:
        if self.guns is None:
            return
        gun = self.guns[1] if self.show_gun2 else self.guns[0]
        left = int((self.fb.width - gun.width) / 2)
        top = self.fb.height - gun.height
        for y in range(gun.height):
            for x in range(gun.width):
                pixel = gun.pixels[y * gun.width + x]
                if not _is_transparent(pixel):
                    self.fb.put_pixel(left + x, top + y, pixel)

    def tick(self, now: Optional[float] = None) -> int:
        """Advance and draw one frame; return the number of rays that hit."""
        if not self.running:
            return 0
        delta = self.clock.update(now)
        self.player.smooth_move(delta)
        self.perf.begin_frame(now)
        hits = render_frame(
            self.fb,
            self.player,
            self.game_map,
            self.textures,
            self.floor_color,
            self.ceiling_color,
        )
        self.perf.ray_cast = hits
        self.perf.end_frame(now)
        self._draw_ui()
        return hits

    def close(self) -> None:
        """Stop the game."""
        self.running = False
        self.mouse_active = False


def usage() -> str:
    """The start-up banner with usage and controls."""
    rule = "=" * 44
    return "".join(
        (
            f"{_CYAN}  C U B 3 D{_RESET}\n",
            f"{_GREEN}{rule}{_RESET}\n",
            f"{_WHITE}           3D RAYCASTING ENGINE{_RESET}\n",
            f"{_GREEN}{rule}{_RESET}\n",
            f"{_BLUE}Usage: raycube [map_file]{_RESET}\n\n",
            f"{_YELLOW}### Movement Controls ###{_RESET}\n",
            f"{_RED}W/S{_RESET}: Forward/Backward  ",
            f"{_RED}A/D{_RESET}: Strafe Left/Right\n",
            f"{_RED}Left/Right{_RESET}: Rotate Left/Right ",
            f"{_RED}ESC{_RESET}: Exit Game\n",
            f"{_RED}SPACE{_RESET}: Toggle Weapon   ",
            f"{_MAGENTA}Press ESC to exit{_RESET}\n",
        )
    )


def _load_gun_textures() -> tuple[Texture, Texture]:
    first, second = (
        Texture.from_image(read_xpm_file(path)) for path in GUN_TEXTURES
    )
    return first, second


def _frame_surface(pygame, fb: FrameBuffer):
    data = array("I", (p | 0xFF000000 for p in fb.pixels))
    fmt = "BGRA" if sys.byteorder == "little" else "ARGB"
    return pygame.image.frombuffer(data.tobytes(), (fb.width, fb.height), fmt)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game on the scene file named in ``argv``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(usage(), end="")
        return 1
    try:
        game = Game.from_file(args[0])
    except ParseError as exc:
        print(f"Error\n{exc}", file=sys.stderr)
        return 1

    import pygame

    pygame.init()
    try:
        screen = pygame.display.set_mode((game.fb.width, game.fb.height))
        pygame.display.set_caption(TITLE)
        try:
            game.guns = _load_gun_textures()
        except XpmError:
            print("Error: Failed to load gun textures", file=sys.stderr)
            return 1
        keys = {
            pygame.K_w: Key.W,
            pygame.K_s: Key.S,
            pygame.K_a: Key.A,
            pygame.K_d: Key.D,
            pygame.K_LEFT: Key.LEFT,
            pygame.K_RIGHT: Key.RIGHT,
            pygame.K_SPACE: Key.SPACE,
            pygame.K_ESCAPE: Key.ESC,
        }
        centre = (game.fb.width // 2, game.fb.height // 2)
        pygame.mouse.set_visible(False)
        pygame.mouse.set_pos(centre)
        while game.running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    game.close()
                elif event.type == pygame.KEYDOWN:
                    game.key_press(keys.get(event.key))
                elif event.type == pygame.KEYUP:
                    game.key_release(keys.get(event.key))
                elif event.type == pygame.MOUSEMOTION:
                    if game.mouse_move(*event.pos):
                        pygame.mouse.set_pos(centre)
            if not game.running:
                break
            game.tick()
            screen.blit(_frame_surface(pygame, game.fb), (0, 0))
            pygame.display.flip()
    finally:
        pygame.quit()
    print("Game closed successfully")
    return 0