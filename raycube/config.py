"""Reading the element section of a ``.cub`` scene description.

A scene file starts with six elements, in any order and separated by any
number of blank lines:

* ``NO``, ``SO``, ``WE`` and ``EA`` name the wall texture files;
* ``F`` and ``C`` give the floor and ceiling colours as ``R,G,B``.

The first line made only of map characters starts the map itself.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

MAP_CHARS = frozenset("01NSEW ")
WALKABLE_CHARS = frozenset("0NSEW")
FILE_EXTENSION = ".cub"

_ATOI_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]*)")


class ParseError(ValueError):
    """Raised when a scene file or one of its parts is malformed."""


@dataclass(frozen=True)
class Rgb:
    """A colour with 8-bit red, green and blue channels."""

    red: int
    green: int
    blue: int

    def to_int(self) -> int:
        """Pack the colour as ``0xRRGGBB``."""
        return (self.red << 16) | (self.green << 8) | self.blue


def skip_whitespace(text: str) -> str:
    """Drop leading spaces and tabs."""
    return text.lstrip(" \t")


def trim_newline(text: str) -> str:
    """Drop a single trailing newline, if there is one."""
    return text[:-1] if text.endswith("\n") else text


def is_empty_line(line: str) -> bool:
    """True when the line holds nothing but spaces, tabs and a newline."""
    trimmed = skip_whitespace(line)
    return not trimmed or trimmed[0] == "\n"


def is_valid_map_char(c: str) -> bool:
    """True for a character allowed in the map grid."""
    return c in MAP_CHARS


def is_walkable(c: str) -> bool:
    """True for a floor cell or a player start cell."""
    return c in WALKABLE_CHARS


def validate_map_line(line: str) -> bool:
    """True when every character up to the first newline is a map character."""
    content = line.split("\n", 1)[0]
    return all(is_valid_map_char(c) for c in content)


def _atoi(text: str) -> int:
    """Leading integer of ``text``, or 0 when there is none."""
    digits = _ATOI_RE.match(text).group(1)
    if digits in ("", "+", "-"):
        return 0
    return int(digits)


def parse_color(text: str) -> Rgb:
    """Parse ``R,G,B`` with every channel in 0..255.

    Empty fields between commas are ignored, and each field is read as its
    leading integer, so ``" 10 , 20,30"`` is accepted.
    """
    parts = [part for part in text.split(",") if part]
    if len(parts) != 3:
        raise ParseError(f"Invalid color: {text!r}")
    red, green, blue = (_atoi(part) for part in parts)
    if not all(0 <= value <= 255 for value in (red, green, blue)):
        raise ParseError(f"Color value out of range: {text!r}")
    return Rgb(red, green, blue)


def parse_texture(text: str) -> str:
    """Return the texture path in ``text`` after checking it can be opened."""
    path = skip_whitespace(text)
    if not path:
        raise ParseError("Missing texture path")
    try:
        fd = os.open(path, os.O_RDONLY)
    except OSError as exc:
        raise ParseError(f"Cannot open texture file: {path}") from exc
    os.close(fd)
    return path


_ELEMENTS: tuple[tuple[str, str, Callable[[str], object]], ...] = (
    ("NO ", "north", parse_texture),
    ("SO ", "south", parse_texture),
    ("WE ", "west", parse_texture),
    ("EA ", "east", parse_texture),
    ("F ", "floor", parse_color),
    ("C ", "ceiling", parse_color),
)


def _is_element_line(trimmed: str) -> bool:
    return any(trimmed.startswith(prefix) for prefix, _, _ in _ELEMENTS)


@dataclass
class Config:
    """The six scene elements, each ``None`` until it has been read."""

    north: Optional[str] = None
    south: Optional[str] = None
    west: Optional[str] = None
    east: Optional[str] = None
    floor: Optional[Rgb] = None
    ceiling: Optional[Rgb] = None

    def parse_element(self, line: str) -> None:
        """Read one element line into this config.

        Blank lines are accepted and ignored. An unknown identifier, a
        repeated element or a bad value raises :class:`ParseError`.
        """
        trimmed = skip_whitespace(line)
        if is_empty_line(trimmed):
            return
        for prefix, field, parse in _ELEMENTS:
            if trimmed.startswith(prefix):
                if getattr(self, field) is not None:
                    raise ParseError(f"Duplicate element: {prefix.strip()}")
                content = trim_newline(skip_whitespace(trimmed[len(prefix):]))
                setattr(self, field, parse(content))
                return
        raise ParseError(f"Unknown element: {trim_newline(trimmed)!r}")

    def is_complete(self) -> bool:
        """True once all six elements have been read."""
        return None not in (
            self.north,
            self.south,
            self.west,
            self.east,
            self.floor,
            self.ceiling,
        )


def validate_file_extension(filename: Union[str, os.PathLike]) -> bool:
    """True when the file name ends in ``.cub``."""
    return os.fspath(filename).endswith(FILE_EXTENSION)


def read_lines(filename: Union[str, os.PathLike]) -> list[str]:
    """Read a file as lines split on ``\\n``, each keeping its newline.

    Raises :class:`ParseError` when the file cannot be read or is empty.
    """
    try:
        with open(filename, "rb") as handle:
            data = handle.read()
    except OSError as exc:
        raise ParseError("Cannot read file or file is empty") from exc
    if not data:
        raise ParseError("Cannot read file or file is empty")
    text = data.decode("utf-8", errors="surrogateescape")
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def parse_config_elements(lines: Sequence[str]) -> tuple[Config, int]:
    """Read the element section of a scene.

    Returns the filled config and the index in ``lines`` where the map
    starts. Raises :class:`ParseError` on an invalid line, a bad element,
    missing elements or a missing map.
    """
    config = Config()
    map_start: Optional[int] = None
    for index, line in enumerate(lines):
        trimmed = trim_newline(skip_whitespace(line))
        if not trimmed:
            continue
        if _is_element_line(trimmed):
            config.parse_element(line)
        elif validate_map_line(trimmed):
            map_start = index
            break
        else:
            raise ParseError("Invalid line in configuration")
    if not config.is_complete():
        raise ParseError("Missing required configuration elements")
    if map_start is None:
        raise ParseError("No map found in file")
    return config, map_start