"""Loading a ``.cub`` scene file into a :class:`GameMap`."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Union

from raycube.config import (
    Config,
    ParseError,
    Rgb,
    parse_config_elements,
    read_lines,
    validate_file_extension,
)
from raycube.mapcheck import parse_map

PathLike = Union[str, "os.PathLike[str]"]


@dataclass(frozen=True)
class GameMap:
    """A checked scene: the grid, the player start, colours and textures."""

    grid: tuple[str, ...]
    width: int
    height: int
    player_x: int
    player_y: int
    player_dir: str
    floor: Rgb
    ceiling: Rgb
    north: Optional[str] = None
    south: Optional[str] = None
    west: Optional[str] = None
    east: Optional[str] = None

    def cell(self, x: int, y: int) -> str:
        """Cell at column ``x``, row ``y``.

        Past the end of a short row the cell is a space. Outside the map's
        width and height :class:`IndexError` is raised.
        """
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Cell ({x}, {y}) is outside the map")
        row = self.grid[y]
        return row[x] if x < len(row) else " "


def parse_cub_file(filename: PathLike) -> Config:
    """Parse a scene file into a config that also holds the checked map.

    Raises :class:`ParseError` on any problem with the file.
    """
    if not validate_file_extension(filename):
        raise ParseError("File must have .cub extension")
    lines = read_lines(filename)
    config, map_start = parse_config_elements(lines)
    return parse_map(lines[map_start:], config)


def config_to_map(config: Config) -> GameMap:
    """Turn a parsed config into a :class:`GameMap`."""
    board = getattr(config, "board", None)
    if board is None:
        raise ParseError("Failed to convert config to map")
    return GameMap(
        grid=tuple(board),
        width=config.cols,
        height=len(board),
        player_x=config.player_x,
        player_y=config.player_y,
        player_dir=config.player_dir,
        floor=config.floor if config.floor is not None else Rgb(0, 0, 0),
        ceiling=config.ceiling if config.ceiling is not None else Rgb(0, 0, 0),
        north=config.north,
        south=config.south,
        west=config.west,
        east=config.east,
    )


def load_map(filename: PathLike) -> GameMap:
    """Parse ``filename`` and return its map.

    Raises :class:`ParseError` naming the file when parsing fails.
    """
    try:
        config = parse_cub_file(filename)
    except ParseError as exc:
        raise ParseError(
            f"Failed to parse map file: {os.fspath(filename)}: {exc}"
        ) from exc
    return config_to_map(config)