"""Drawing the scene into a frame buffer: walls, floor, ceiling and minimap."""

from __future__ import annotations

import math
from array import array
from typing import Sequence

from raycube.parser import GameMap
from raycube.player import BLOCK_SIZE, Player
from raycube.raycasting import RayHit, cast_ray
from raycube.textures import (
    COLOR_BLUE,
    COLOR_GREEN,
    COLOR_RED,
    Texture,
)

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 480
TILE_SIZE = 8
FIELD_OF_VIEW = math.pi / 3
_TEX_POS_MAX = 0.999999


def _trunc_half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


class FrameBuffer:
    """A ``width`` by ``height`` grid of ``0xRRGGBB`` pixels, row by row."""

    def __init__(self, width: int = WINDOW_WIDTH, height: int = WINDOW_HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError("Frame buffer size must be positive")
        self.width = width
        self.height = height
        self.pixels = array("I", [0]) * (width * height)

    def clear(self) -> None:
        """Set every pixel to black."""
        self.pixels = array("I", [0]) * (self.width * self.height)

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points outside the buffer are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self.pixels[y * self.width + x] = color & 0xFFFFFF

    def pixel(self, x: int, y: int) -> int:
        """Colour at ``(x, y)``. Raises :class:`IndexError` outside the buffer."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the frame")
        return self.pixels[y * self.width + x]

    def fill_square(self, x: int, y: int, size: int, color: int) -> None:
        """Fill a ``size`` by ``size`` square whose top-left corner is ``(x, y)``."""
        for row in range(max(y, 0), min(y + size, self.height)):
            for col in range(max(x, 0), min(x + size, self.width)):
                self.put_pixel(col, row, color)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, color: int) -> None:
        """Draw a line between two points, both ends included."""
        dx = abs(x1 - x0)
        dy = abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx - dy
        while True:
            self.put_pixel(x0, y0, color)
            if x0 == x1 and y0 == y1:
                break
            e2 = err * 2
            if e2 > -dy:
                err -= dy
                x0 += sx
            if e2 < dx:
                err += dx
                y0 += sy

    def draw_floor_and_ceiling(
        self, column: int, start_y: int, end_y: int, ceiling: int, floor: int
    ) -> None:
        """Paint ceiling above ``start_y`` and floor from ``end_y`` down."""
        for y in range(0, start_y):
            self.put_pixel(column, y, ceiling)
        for y in range(end_y, self.height):
            self.put_pixel(column, y, floor)


def _column_span(dist: float, screen_height: int) -> tuple[int, int, int]:
    height = int(BLOCK_SIZE / dist * (screen_height // 2))
    start = _trunc_half(screen_height - height)
    end = start + height
    return height, max(start, 0), min(end, screen_height)


def column_span(dist: float) -> tuple[int, int, int]:
    """Wall height and the clamped first and past-last rows on screen."""
    return _column_span(dist, WINDOW_HEIGHT)


def render_column(
    fb: FrameBuffer,
    hit: RayHit,
    column: int,
    textures: Sequence[Texture],
    floor: int,
    ceiling: int,
) -> None:
    """Draw one screen column: ceiling, textured wall slice and floor."""
    height, start, end = _column_span(hit.dist, fb.height)
    fb.draw_floor_and_ceiling(column, start, end, ceiling, floor)
    index = int(hit.texture)
    if not 0 <= index < len(textures):
        index = 0
    texture = textures[index]
    step = texture.height / height if height > 0 else 1.0
    pos = min(max(hit.tex_pos, 0.0), _TEX_POS_MAX)
    tex_x = min(max(int(pos * texture.width), 0), max(texture.width - 1, 0))
    tex_y = 0.0
    for y in range(start, end):
        fb.put_pixel(column, y, texture.color_at(tex_x, int(tex_y)))
        tex_y += step


def draw_minimap(fb: FrameBuffer, game_map: GameMap, player: Player) -> None:
    """Draw the walls, the player and the view direction in the top-left corner."""
    for y, row in enumerate(game_map.grid):
        for x, cell in enumerate(row):
            if cell == "1":
                fb.fill_square(x * TILE_SIZE, y * TILE_SIZE, TILE_SIZE, COLOR_RED)
    px = int(player.x / BLOCK_SIZE * TILE_SIZE)
    py = int(player.y / BLOCK_SIZE * TILE_SIZE)
    fb.fill_square(
        px - TILE_SIZE // 4, py - TILE_SIZE // 4, TILE_SIZE // 2, COLOR_BLUE
    )
    end_x = px + int(player.dx * TILE_SIZE)
    end_y = py + int(player.dy * TILE_SIZE)
    fb.draw_line(px, py, end_x, end_y, COLOR_GREEN)


def render_frame(
    fb: FrameBuffer,
    player: Player,
    game_map: GameMap,
    textures: Sequence[Texture],
    floor: int,
    ceiling: int,
) -> int:
    """Clear ``fb``, draw the view and the minimap; return the rays that hit."""
    fb.clear()
    fraction = FIELD_OF_VIEW / fb.width
    angle = player.angle - FIELD_OF_VIEW / 2
    hits = 0
    for column in range(fb.width):
        hit = cast_ray(player, game_map, angle)
        if hit is not None:
            render_column(fb, hit, column, textures, floor, ceiling)
            hits += 1
        angle += fraction
    draw_minimap(fb, game_map, player)
    return hits