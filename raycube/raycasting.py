"""Casting rays through the map grid with a digital differential analyser."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from raycube.parser import GameMap
from raycube.player import BLOCK_SIZE, Player

FAR = 1e30
_TEX_POS_MAX = 0.999999


class TextureSide(IntEnum):
    """Which wall face a ray hit; the value indexes the texture list."""

    WEST = 0
    EAST = 1
    NORTH = 2
    SOUTH = 3


@dataclass
class Dda:
    """State of a ray walking the grid one cell boundary at a time."""

    map_x: int
    map_y: int
    delta_x: float
    delta_y: float
    step_x: int = 1
    step_y: int = 1
    side_dist_x: float = 0.0
    side_dist_y: float = 0.0
    side: int = 0


@dataclass(frozen=True)
class RayHit:
    """A wall hit: corrected distance, face and horizontal texture position."""

    dist: float
    texture: TextureSide
    tex_pos: float


def _edge_offset(step: int) -> int:
    return (1 - step) // 2


def init_dda(player: Player, ray_dir_x: float, ray_dir_y: float) -> Dda:
    """Start a ray at the player's cell heading along ``(ray_dir_x, ray_dir_y)``."""
    cell_x = player.x / BLOCK_SIZE
    cell_y = player.y / BLOCK_SIZE
    dda = Dda(
        map_x=int(cell_x),
        map_y=int(cell_y),
        delta_x=FAR if ray_dir_x == 0 else abs(1.0 / ray_dir_x),
        delta_y=FAR if ray_dir_y == 0 else abs(1.0 / ray_dir_y),
    )
    if ray_dir_x < 0:
        dda.step_x = -1
        dda.side_dist_x = (cell_x - dda.map_x) * dda.delta_x
    else:
        dda.step_x = 1
        dda.side_dist_x = (dda.map_x + 1.0 - cell_x) * dda.delta_x
    if ray_dir_y < 0:
        dda.step_y = -1
        dda.side_dist_y = (cell_y - dda.map_y) * dda.delta_y
    else:
        dda.step_y = 1
        dda.side_dist_y = (dda.map_y + 1.0 - cell_y) * dda.delta_y
    return dda


def perform_dda(dda: Dda, game_map: GameMap) -> bool:
    """Advance ``dda`` until it enters a wall or leaves the map.

    Gives up after ``width * height`` steps and returns whether it hit.
    """
    for _ in range(game_map.width * game_map.height):
        if dda.side_dist_x < dda.side_dist_y:
            dda.side_dist_x += dda.delta_x
            dda.map_x += dda.step_x
            dda.side = 0
        else:
            dda.side_dist_y += dda.delta_y
            dda.map_y += dda.step_y
            dda.side = 1
        if not (
            0 <= dda.map_x < game_map.width and 0 <= dda.map_y < game_map.height
        ):
            return True
        if game_map.cell(dda.map_x, dda.map_y) == "1":
            return True
    return False


def wall_distance(
    dda: Dda, player: Player, ray_dir_x: float, ray_dir_y: float
) -> float:
    """Distance along the ray to the wall face, in world units."""
    if dda.side == 0:
        cells = (
            dda.map_x - player.x / BLOCK_SIZE + _edge_offset(dda.step_x)
        ) / ray_dir_x
    else:
        cells = (
            dda.map_y - player.y / BLOCK_SIZE + _edge_offset(dda.step_y)
        ) / ray_dir_y
    return cells * BLOCK_SIZE


def _fraction(value: float) -> float:
    value = math.fmod(value, 1.0)
    return value + 1.0 if value < 0.0 else value


def wall_texture(
    dda: Dda, player: Player, ray_dir_x: float, ray_dir_y: float
) -> tuple[TextureSide, float]:
    """Face that was hit and where along it, in ``[0, 1)``."""
    if dda.side == 0:
        side = TextureSide.WEST if dda.step_x < 0 else TextureSide.EAST
        along = (
            dda.map_x - player.x / BLOCK_SIZE + _edge_offset(dda.step_x)
        ) / ray_dir_x
        pos = _fraction(player.y / BLOCK_SIZE + along * ray_dir_y)
    else:
        side = TextureSide.NORTH if dda.step_y < 0 else TextureSide.SOUTH
        along = (
            dda.map_y - player.y / BLOCK_SIZE + _edge_offset(dda.step_y)
        ) / ray_dir_y
        pos = _fraction(player.x / BLOCK_SIZE + along * ray_dir_x)
    if pos < 0.0:
        pos = 0.0
    if pos >= 1.0:
        pos = _TEX_POS_MAX
    return side, pos


def texture_position(wall_x: float) -> float:
    """Position within a block of the world coordinate ``wall_x``, in ``[0, 1)``."""
    normalized = math.fmod(wall_x, BLOCK_SIZE)
    if normalized < 0:
        normalized += BLOCK_SIZE
    pos = normalized / BLOCK_SIZE
    if pos < 0.0:
        pos = 0.0
    if pos >= 1.0:
        pos = 1.0 - 0.000001
    return pos


def cast_ray(player: Player, game_map: GameMap, angle: float) -> Optional[RayHit]:
    """Cast one ray at ``angle`` and return its hit, or ``None`` if none.

    The distance is corrected for the fish-eye effect; a distance that is
    not positive and finite becomes 1.
    """
    ray_dir_x = math.cos(angle)
    ray_dir_y = math.sin(angle)
    dda = init_dda(player, ray_dir_x, ray_dir_y)
    if not perform_dda(dda, game_map):
        return None
    raw = wall_distance(dda, player, ray_dir_x, ray_dir_y)
    dist = raw * math.cos(angle - player.angle)
    if not math.isfinite(dist) or dist <= 0:
        dist = 1.0
    side, tex_pos = wall_texture(dda, player, ray_dir_x, ray_dir_y)
    return RayHit(dist=dist, texture=side, tex_pos=tex_pos)