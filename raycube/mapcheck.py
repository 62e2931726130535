"""Reading and checking the map grid of a ``.cub`` scene.

The map is the last part of a scene file. Its rows may be ragged. Leading
spaces and tabs are dropped from each row. Cells are ``1`` for a wall and
``0`` for floor. ``N``, ``S``, ``E`` or ``W`` marks the one player start, and
a space is void. Every walkable cell must be enclosed by walls.
"""

from __future__ import annotations

from typing import Sequence

from raycube.config import (
    Config,
    ParseError,
    is_valid_map_char,
    is_walkable,
    skip_whitespace,
    trim_newline,
    validate_map_line,
)

PLAYER_CHARS = frozenset("NSEW")
BORDER_CHARS = frozenset("1 ")


def count_map_rows(lines: Sequence[str]) -> int:
    """Number of lines that hold something besides blanks and a newline."""
    return sum(1 for line in lines if trim_newline(skip_whitespace(line)))


def build_board(lines: Sequence[str]) -> list[str]:
    """Collect the map rows from ``lines``.

    At most :func:`count_map_rows` rows are taken. A line holding only a
    newline still fills a row, as an empty one. Raises :class:`ParseError`
    on a character that is not allowed in the map.
    """
    rows = count_map_rows(lines)
    board: list[str] = []
    for line in lines:
        if len(board) >= rows:
            break
        if not skip_whitespace(line):
            continue
        content = trim_newline(skip_whitespace(line))
        if not validate_map_line(content):
            raise ParseError("Invalid character in map")
        board.append(content)
    return board


def find_player(board: Sequence[str]) -> tuple[int, int, str]:
    """Return ``(x, y, direction)`` of the single player start.

    Raises :class:`ParseError` unless there is exactly one.
    """
    starts = [
        (x, y, cell)
        for y, row in enumerate(board)
        for x, cell in enumerate(row)
        if cell in PLAYER_CHARS
    ]
    if len(starts) != 1:
        raise ParseError("Map must contain exactly one player (N, S, E, or W)")
    return starts[0]


def is_row_valid(row: str) -> bool:
    """True when the row holds only walls and spaces."""
    return all(c in BORDER_CHARS for c in row)


def side_columns_valid(board: Sequence[str]) -> bool:
    """True when every non-empty row starts and ends with a wall or a space."""
    return all(
        not row or (row[0] in BORDER_CHARS and row[-1] in BORDER_CHARS)
        for row in board
    )


def cell_at(board: Sequence[str], i: int, j: int) -> str:
    """Cell at row ``i``, column ``j``; a space outside the board or a row."""
    if not 0 <= i < len(board):
        return " "
    row = board[i]
    if not 0 <= j < len(row):
        return " "
    return row[j]


def is_position_valid(board: Sequence[str], i: int, j: int) -> bool:
    """True unless a walkable cell touches void or a foreign character."""
    if not is_walkable(board[i][j]):
        return True
    neighbours = (
        cell_at(board, i - 1, j),
        cell_at(board, i + 1, j),
        cell_at(board, i, j - 1),
        cell_at(board, i, j + 1),
    )
    return all(is_valid_map_char(c) and c != " " for c in neighbours)


def internal_positions_valid(board: Sequence[str]) -> bool:
    """Check every cell that is not on the outer rows or row ends."""
    return all(
        is_position_valid(board, i, j)
        for i in range(1, len(board) - 1)
        for j in range(1, len(board[i]) - 1)
    )


def is_map_closed(board: Sequence[str]) -> bool:
    """True when the map is fully surrounded by walls."""
    if not board:
        return False
    return (
        is_row_valid(board[0])
        and is_row_valid(board[-1])
        and side_columns_valid(board)
        and internal_positions_valid(board)
    )


def parse_map(lines: Sequence[str], config: Config) -> Config:
    """Read the map section into ``config`` and check it.

    ``lines`` start at the first map line. On success ``config`` gains the
    attributes ``board``, ``cols``, ``player_x``, ``player_y`` and
    ``player_dir`` and is returned. Raises :class:`ParseError` on an empty,
    malformed or open map, or one without exactly one player.
    """
    if count_map_rows(lines) == 0:
        raise ParseError("Empty map")
    board = build_board(lines)
    player_x, player_y, player_dir = find_player(board)
    if not is_map_closed(board):
        raise ParseError("Map must be closed/surrounded by walls")
    config.board = board
    config.cols = max(len(row) for row in board)
    config.player_x = player_x
    config.player_y = player_y
    config.player_dir = player_dir
    return config