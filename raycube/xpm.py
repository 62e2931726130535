"""Reading XPM images into 32-bit pixel arrays.

An XPM image is a list of strings. The first holds the width, height,
number of colours and characters per pixel. The colour lines follow, then
one line per pixel row. In a file the strings are the quoted parts of a
C-style source text, which may also hold comments.
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence, Union

from raycube.colornames import lookup_color

TRANSPARENT = 0xFF000000

_WORD_SPLIT = re.compile(r"[ \t]+")
_ATOI_RE = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]*)")
_HEX_RE = re.compile(
    r"[ \t\n\v\f\r]*([+-]?)(?:0[xX](?=[0-9a-fA-F]))?([0-9a-fA-F]*)"
)
_QUOTED_RE = re.compile(r'"([^"]*)"')
_NAME_LIMIT = 63


class XpmError(ValueError):
    """Raised when XPM data cannot be read."""


@dataclass
class Image:
    """A ``width`` by ``height`` image of 32-bit pixels, row by row."""

    width: int
    height: int
    pixels: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Image size must not be negative")
        if not self.pixels:
            self.pixels = [0] * (self.width * self.height)
        elif len(self.pixels) != self.width * self.height:
            raise ValueError("Pixel count does not match image size")

    def _index(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Pixel ({x}, {y}) is outside the image")
        return y * self.width + x

    def pixel(self, x: int, y: int) -> int:
        """Pixel value at column ``x``, row ``y``."""
        return self.pixels[self._index(x, y)]

    def put(self, x: int, y: int, color: int) -> None:
        """Store ``color`` as an unsigned 32-bit value at ``(x, y)``."""
        self.pixels[self._index(x, y)] = color & 0xFFFFFFFF


def split_words(text: str) -> list[str]:
    """Split on runs of spaces and tabs, dropping empty words."""
    return [word for word in _WORD_SPLIT.split(text) if word]


def _blank_comments(text: str, opener: str, closer: str) -> str:
    chars = list(text)
    in_quote = False
    i = 0
    while i < len(chars):
        if chars[i] == '"':
            in_quote = not in_quote
        elif not in_quote and text.startswith(opener, i):
            close = text.find(closer, i + len(opener))
            end = len(chars) if close == -1 else close + len(closer)
            chars[i:end] = " " * (end - i)
            i = end
            continue
        i += 1
    return "".join(chars)


def strip_comments(text: str) -> str:
    """Replace comments outside double quotes with spaces.

    Block comments are handled first, then line comments together with
    the newline that ends them. The text keeps its length.
    """
    text = _blank_comments(text, "/*", "*/")
    return _blank_comments(text, "//", "\n")


def _atoi(text: str) -> int:
    digits = _ATOI_RE.match(text).group(1)
    if digits in ("", "+", "-"):
        return 0
    return int(digits)


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value >= 0x80000000 else value


def text_to_rgb(name: str, end: Optional[str]) -> int:
    """Colour value of an XPM colour word.

    ``#RRGGBB`` is read as hexadecimal. Otherwise ``name``, joined with
    ``end`` when given, is looked up among the X11 colour names; an
    unknown name gives 0 and ``none`` gives -1.
    """
    if name.startswith("#"):
        match = _HEX_RE.match(name, 1)
        sign, digits = match.group(1), match.group(2)
        value = int(digits, 16) if digits else 0
        return _to_int32(-value if sign == "-" else value)
    if end is not None:
        name = f"{name} {end}"[:_NAME_LIMIT]
    color = lookup_color(name)
    return 0 if color is None else color


def parse_xpm(lines: Iterable[str]) -> Image:
    """Build an image from XPM strings, without their quotes.

    Raises :class:`XpmError` on a bad header, a colour line without a
    ``c`` colour, or missing lines.
    """
    it = iter(lines)

    def next_line() -> str:
        try:
            return next(it)
        except StopIteration:
            raise XpmError("Unexpected end of XPM data") from None

    header = split_words(next_line())
    if len(header) < 4:
        raise XpmError("Invalid XPM header")
    width, height, ncolors, cpp = (_atoi(word) for word in header[:4])
    if min(width, height, ncolors, cpp) <= 0:
        raise XpmError("Invalid XPM header")

    colors: dict[str, int] = {}
    for _ in range(ncolors):
        line = next_line()
        key = line[:cpp]
        words = split_words(line[cpp:])
        try:
            index = words.index("c") + 1
        except ValueError:
            raise XpmError(f"No colour in line {line!r}") from None
        if index >= len(words):
            raise XpmError(f"No colour in line {line!r}")
        end = words[index + 1] if index + 1 < len(words) else None
        color = text_to_rgb(words[index], end)
        if cpp <= 2:
            colors[key] = color
        else:
            colors.setdefault(key, color)

    image = Image(width, height)
    for y in range(height):
        line = next_line()
        for x in range(width):
            color = colors.get(line[cpp * x : cpp * (x + 1)], 0)
            image.put(x, y, TRANSPARENT if color == -1 else color)
    return image


def xpm_to_image(data: Sequence[str]) -> Image:
    """Build an image from in-memory XPM strings."""
    return parse_xpm(data)


def read_xpm_file(path: Union[str, "os.PathLike[str]"]) -> Image:
    """Read an XPM file. Raises :class:`XpmError` if it cannot be loaded."""
    try:
        with open(path, "rb") as handle:
            text = handle.read().decode("utf-8", errors="surrogateescape")
    except OSError as exc:
        raise XpmError(f"Cannot read XPM file: {os.fspath(path)}") from exc
    return parse_xpm(_QUOTED_RE.findall(strip_comments(text)))