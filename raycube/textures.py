"""Wall textures: loading XPM files, with solid-colour fallbacks."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Union

from raycube.parser import GameMap
from raycube.xpm import Image, XpmError, read_xpm_file

logger = logging.getLogger(__name__)

FALLBACK_SIZE = 64
COLOR_RED = 0xFF0000
COLOR_GREEN = 0x00FF00
COLOR_BLUE = 0x0000FF
COLOR_YELLOW = 0xFFFF00
COLOR_GREY = 0x808080
FALLBACK_COLORS = (COLOR_RED, COLOR_GREEN, COLOR_BLUE, COLOR_YELLOW)
XPM_HEADER = b"/* XPM */"
_HEADER_READ = 14

PathLike = Union[str, "os.PathLike[str]"]


@dataclass
class Texture:
    """A ``width`` by ``height`` grid of colours, row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Texture size must not be negative")
        if len(self.pixels) != self.width * self.height:
            raise ValueError("Pixel count does not match texture size")

    def color_at(self, x: int, y: int) -> int:
        """Colour ``0xRRGGBB`` at ``(x, y)``, with coordinates clamped."""
        if self.width == 0 or self.height == 0:
            return COLOR_GREY
        x = min(max(x, 0), self.width - 1)
        y = min(max(y, 0), self.height - 1)
        return self.pixels[y * self.width + x] & 0xFFFFFF

    @classmethod
    def solid(cls, color: int, size: int = FALLBACK_SIZE) -> "Texture":
        """A square texture of a single colour."""
        return cls(size, size, [color] * (size * size))

    @classmethod
    def from_image(cls, image: Image) -> "Texture":
        """Wrap the pixels of a decoded image."""
        return cls(image.width, image.height, list(image.pixels))


def validate_texture_file(path: Optional[PathLike]) -> bool:
    """True when the file exists and its first line starts with ``/* XPM */``."""
    if path is None:
        return False
    try:
        with open(path, "rb") as handle:
            header = handle.readline(_HEADER_READ)
    except OSError:
        logger.warning("Texture file not found: %s", os.fspath(path))
        return False
    return header.startswith(XPM_HEADER)


def fallback_texture(index: int) -> Texture:
    """The solid fallback texture for slot ``index``."""
    return Texture.solid(FALLBACK_COLORS[index % 4])


def load_texture_file(path: PathLike) -> Texture:
    """Load an XPM texture. Raises :class:`XpmError` if it cannot be used."""
    if not validate_texture_file(path):
        raise XpmError(f"Not an XPM file: {os.fspath(path)}")
    return Texture.from_image(read_xpm_file(path))


def load_textures(game_map: GameMap) -> list[Texture]:
    """Load the west, east, north and south textures, in that order.

    A texture that cannot be loaded is replaced by its fallback.
    """
    paths = (game_map.west, game_map.east, game_map.north, game_map.south)
    textures = []
    for index, path in enumerate(paths):
        try:
            if path is None:
                raise XpmError("No texture path")
            textures.append(load_texture_file(path))
        except XpmError:
            logger.info("Creating fallback texture for index %d", index)
            textures.append(fallback_texture(index))
    return textures