import math

import pytest

from raycube.config import Rgb
from raycube.parser import GameMap
from raycube.player import BLOCK_SIZE, Player
from raycube.raycasting import (
    FAR,
    TextureSide,
    cast_ray,
    init_dda,
    perform_dda,
    texture_position,
    wall_distance,
    wall_texture,
)

ROOM = (
    "11111",
    "10001",
    "10001",
    "10001",
    "11111",
)


def make_map(grid=ROOM):
    return GameMap(
        grid=tuple(grid),
        width=max(len(r) for r in grid),
        height=len(grid),
        player_x=2,
        player_y=2,
        player_dir="E",
        floor=Rgb(0, 0, 0),
        ceiling=Rgb(0, 0, 0),
    )


def make_player(game_map, angle):
    player = Player(
        x=2.5 * BLOCK_SIZE, y=2.5 * BLOCK_SIZE, angle=angle, game_map=game_map
    )
    player.update_direction()
    return player


@pytest.mark.parametrize(
    "angle, side, face, axis",
    [
        (0.0, TextureSide.EAST, 4, "x"),
        (math.pi, TextureSide.WEST, 1, "x"),
        (math.pi / 2, TextureSide.SOUTH, 4, "y"),
        (3 * math.pi / 2, TextureSide.NORTH, 1, "y"),
    ],
)
def test_cast_ray_hits_facing_wall(angle, side, face, axis):
    game_map = make_map()
    player = make_player(game_map, angle)
    hit = cast_ray(player, game_map, angle)
    coord = player.x if axis == "x" else player.y
    assert hit.texture == side
    assert hit.dist == pytest.approx(abs(face * BLOCK_SIZE - coord))


def test_centre_hit_is_middle_of_texture():
    game_map = make_map()
    player = make_player(game_map, 0.0)
    hit = cast_ray(player, game_map, 0.0)
    assert hit.tex_pos == pytest.approx(0.5)


def test_fisheye_correction_shortens_oblique_rays():
    game_map = make_map()
    player = make_player(game_map, 0.0)
    angle = 0.3
    dda = init_dda(player, math.cos(angle), math.sin(angle))
    assert perform_dda(dda, game_map)
    raw = wall_distance(dda, player, math.cos(angle), math.sin(angle))
    hit = cast_ray(player, game_map, angle)
    assert hit.dist == pytest.approx(raw * math.cos(angle))
    assert hit.dist < raw


@pytest.mark.parametrize("angle", [i * 0.37 for i in range(17)])
def test_hits_are_positive_and_texture_in_range(angle):
    game_map = make_map()
    player = make_player(game_map, angle)
    hit = cast_ray(player, game_map, angle)
    assert hit.dist > 0
    assert 0.0 <= hit.tex_pos < 1.0


def test_zero_direction_uses_far_delta():
    game_map = make_map()
    player = make_player(game_map, 0.0)
    dda = init_dda(player, 0.0, 1.0)
    assert dda.delta_x == FAR
    assert dda.step_y == 1
    assert dda.map_x == 2 and dda.map_y == 2


def test_negative_direction_steps_back():
    game_map = make_map()
    player = make_player(game_map, 0.0)
    dda = init_dda(player, -1.0, -1.0)
    assert (dda.step_x, dda.step_y) == (-1, -1)
    assert dda.side_dist_x == pytest.approx(dda.side_dist_y)


def test_leaving_the_map_counts_as_hit():
    game_map = make_map(("000",))
    player = Player(x=1.5 * BLOCK_SIZE, y=0.5 * BLOCK_SIZE, game_map=game_map)
    dda = init_dda(player, 1.0, 0.0)
    assert perform_dda(dda, game_map)
    assert dda.map_x == game_map.width
    assert dda.side == 0


def test_wall_texture_matches_cast_ray():
    game_map = make_map()
    player = make_player(game_map, 0.0)
    angle = 0.8
    dx, dy = math.cos(angle), math.sin(angle)
    dda = init_dda(player, dx, dy)
    perform_dda(dda, game_map)
    side, pos = wall_texture(dda, player, dx, dy)
    hit = cast_ray(player, game_map, angle)
    assert (side, pos) == (hit.texture, hit.tex_pos)


def test_texture_position_wraps_blocks():
    assert texture_position(3 * BLOCK_SIZE + 16) == pytest.approx(
        texture_position(16)
    )
    assert texture_position(-16) == pytest.approx(texture_position(BLOCK_SIZE - 16))
    assert texture_position(BLOCK_SIZE) == 0.0


@pytest.mark.parametrize("x", [-1000.5, -1.0, 0.0, 17.25, 63.999, 5000.0])
def test_texture_position_in_unit_range(x):
    assert 0.0 <= texture_position(x) < 1.0