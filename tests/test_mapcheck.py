import pytest

from raycube.config import Config, ParseError
from raycube.mapcheck import (
    build_board,
    cell_at,
    count_map_rows,
    find_player,
    internal_positions_valid,
    is_map_closed,
    is_position_valid,
    is_row_valid,
    parse_map,
    side_columns_valid,
)

CLOSED = ["111111", "100101", "1000N1", "111111"]
RAGGED = ["1111", "1N01", "111"]


def test_count_map_rows_ignores_blank_lines():
    assert count_map_rows(["111\n", "\n", "  \t\n", "101"]) == 2


def test_count_map_rows_empty():
    assert count_map_rows([]) == 0


def test_build_board_strips_indent_and_newline():
    assert build_board(["  111\n", "\t1N1\n", "111"]) == ["111", "1N1", "111"]


def test_build_board_keeps_inner_newline_only_line_as_empty_row():
    lines = ["111\n", "\n", "1N1\n", "111\n"]
    board = build_board(lines)
    assert board == ["111", "", "1N1"]
    assert len(board) == count_map_rows(lines)


def test_build_board_rejects_bad_character():
    with pytest.raises(ParseError, match="Invalid character in map"):
        build_board(["111\n", "1X1\n", "111\n"])


def test_find_player():
    assert find_player(["111", "1S1", "111"]) == (1, 1, "S")


@pytest.mark.parametrize("board", [["111", "101", "111"], ["1111", "1NE1", "1111"]])
def test_find_player_requires_exactly_one(board):
    with pytest.raises(ParseError, match="exactly one player"):
        find_player(board)


@pytest.mark.parametrize(
    "row, expected", [("1 11", True), ("", True), ("101", False), ("1N1", False)]
)
def test_is_row_valid(row, expected):
    assert is_row_valid(row) is expected


def test_side_columns_valid():
    assert side_columns_valid(["1 1", "", " 01 "]) is False
    assert side_columns_valid(["1 1", "", " 0 1", "10 "]) is False
    assert side_columns_valid(["1 1", "", " 001"]) is True


def test_cell_at_outside_is_space():
    assert cell_at(RAGGED, -1, 0) == " "
    assert cell_at(RAGGED, 3, 0) == " "
    assert cell_at(RAGGED, 2, 3) == " "
    assert cell_at(RAGGED, 1, 1) == "N"


def test_is_position_valid_wall_is_always_fine():
    assert is_position_valid(["1 1", " 1 ", "1 1"], 1, 1) is True


def test_is_position_valid_floor_next_to_void():
    assert is_position_valid(["111", "10 ", "111"], 1, 1) is False
    assert is_position_valid(["111", "101", "111"], 1, 1) is True


def test_internal_positions_valid():
    assert internal_positions_valid(CLOSED) is True
    assert internal_positions_valid(["1111", "10 1", "1111"]) is False


def test_is_map_closed():
    assert is_map_closed(CLOSED) is True
    assert is_map_closed(RAGGED) is True
    assert is_map_closed(["1111", "1N0 ", "1111"]) is False
    assert is_map_closed(["1111", "1N01", "1101"]) is False
    assert is_map_closed([]) is False


def test_is_map_closed_floor_under_short_row():
    assert is_map_closed(["111", "1N01", "1111"]) is False


def test_parse_map_fills_config():
    config = Config()
    result = parse_map([row + "\n" for row in CLOSED], config)
    assert result is config
    assert config.board == CLOSED
    assert config.cols == max(len(row) for row in CLOSED)
    assert (config.player_x, config.player_y, config.player_dir) == find_player(CLOSED)


def test_parse_map_empty():
    with pytest.raises(ParseError, match="Empty map"):
        parse_map(["\n", "   \n"], Config())


def test_parse_map_needs_player():
    with pytest.raises(ParseError, match="exactly one player"):
        parse_map(["111\n", "101\n", "111\n"], Config())


def test_parse_map_must_be_closed():
    with pytest.raises(ParseError, match="closed"):
        parse_map(["1111\n", "1N0\n", "1111\n"], Config())