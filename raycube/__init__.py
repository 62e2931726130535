"""A textured raycasting engine for .cub maps, with a pygame front end."""

__version__ = "0.1.0"
__all__ = [
    "colornames",
    "config",
    "game",
    "mapcheck",
    "parser",
    "player",
    "raycasting",
    "render",
    "textures",
    "timing",
    "xpm",
]