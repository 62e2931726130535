import pytest

from raycube.config import (
    Config,
    ParseError,
    Rgb,
    is_empty_line,
    is_valid_map_char,
    is_walkable,
    parse_color,
    parse_config_elements,
    parse_texture,
    read_lines,
    skip_whitespace,
    trim_newline,
    validate_file_extension,
    validate_map_line,
)


@pytest.fixture
def textures(tmp_path):
    paths = {}
    for name in ("north", "south", "west", "east"):
        path = tmp_path / f"{name}.xpm"
        path.write_text("/* XPM */\n")
        paths[name] = str(path)
    return paths


def _header(textures):
    return [
        f"NO {textures['north']}\n",
        f"SO {textures['south']}\n",
        "\n",
        f"WE {textures['west']}\n",
        f"EA {textures['east']}\n",
        "F 220,100,0\n",
        "C 225,30,0\n",
    ]


def test_rgb_to_int_packs_channels():
    assert Rgb(255, 0, 0).to_int() == 0xFF0000
    assert Rgb(0, 0, 255).to_int() == 0x0000FF
    assert Rgb(0, 0, 0).to_int() == 0


def test_skip_whitespace_only_leading_blanks():
    assert skip_whitespace(" \t x \n") == "x \n"
    assert skip_whitespace("\nx") == "\nx"
    assert skip_whitespace("") == ""


def test_trim_newline_removes_one():
    assert trim_newline("abc\n") == "abc"
    assert trim_newline("abc\n\n") == "abc\n"
    assert trim_newline("abc") == "abc"
    assert trim_newline("") == ""


@pytest.mark.parametrize("line", ["", "\n", "   \n", "\t \t", "  \nxyz"])
def test_is_empty_line_true(line):
    assert is_empty_line(line) is True


@pytest.mark.parametrize("line", ["x", "  1", "\tNO path"])
def test_is_empty_line_false(line):
    assert is_empty_line(line) is False


@pytest.mark.parametrize("c", list("01NSEW "))
def test_valid_map_chars(c):
    assert is_valid_map_char(c) is True


@pytest.mark.parametrize("c", list("2x\tn\n"))
def test_invalid_map_chars(c):
    assert is_valid_map_char(c) is False


def test_walkable_excludes_walls_and_spaces():
    assert all(is_walkable(c) for c in "0NSEW")
    assert not is_walkable("1")
    assert not is_walkable(" ")


def test_validate_map_line():
    assert validate_map_line("1 0N\n") is True
    assert validate_map_line("") is True
    assert validate_map_line("10\nxyz") is True
    assert validate_map_line("102") is False
    assert validate_map_line("1\t1") is False


def test_parse_color_plain():
    assert parse_color("220,100,0") == Rgb(220, 100, 0)


def test_parse_color_loose_fields():
    assert parse_color(" 1 , 2 ,3") == Rgb(1, 2, 3)
    assert parse_color("1,,2,,3") == Rgb(1, 2, 3)
    assert parse_color("a,b,c") == Rgb(0, 0, 0)


@pytest.mark.parametrize(
    "text", ["256,0,0", "0,-1,0", "1,2", "1,2,3,4", "", ",,,"]
)
def test_parse_color_rejects(text):
    with pytest.raises(ParseError):
        parse_color(text)


def test_parse_texture_returns_path(textures):
    assert parse_texture("  " + textures["north"]) == textures["north"]


def test_parse_texture_missing_file(tmp_path):
    with pytest.raises(ParseError):
        parse_texture(str(tmp_path / "absent.xpm"))


def test_parse_texture_empty():
    with pytest.raises(ParseError):
        parse_texture("   ")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("map.cub", True),
        (".cub", True),
        ("maps/level.cub", True),
        ("cub", False),
        ("map.cub.txt", False),
        ("map.CUB", False),
    ],
)
def test_validate_file_extension(name, expected):
    assert validate_file_extension(name) is expected


def test_read_lines_keeps_newlines(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_bytes(b"first\n\nlast")
    assert read_lines(path) == ["first\n", "\n", "last"]


def test_read_lines_trailing_newline(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_bytes(b"a\r\nb\n")
    assert read_lines(path) == ["a\r\n", "b\n"]


def test_read_lines_empty_file(tmp_path):
    path = tmp_path / "empty.cub"
    path.write_bytes(b"")
    with pytest.raises(ParseError):
        read_lines(path)


def test_read_lines_missing_file(tmp_path):
    with pytest.raises(ParseError):
        read_lines(tmp_path / "missing.cub")


def test_parse_element_fills_fields(textures):
    config = Config()
    config.parse_element(f"  NO   {textures['north']}\n")
    config.parse_element("F 220,100,0\n")
    assert config.north == textures["north"]
    assert config.floor == Rgb(220, 100, 0)
    assert config.is_complete() is False


def test_parse_element_blank_line_is_ignored():
    config = Config()
    config.parse_element("   \n")
    assert config == Config()


def test_parse_element_duplicate(textures):
    config = Config()
    config.parse_element("C 1,2,3")
    with pytest.raises(ParseError):
        config.parse_element("C 4,5,6")
    assert config.ceiling == Rgb(1, 2, 3)


@pytest.mark.parametrize("line", ["XX path", "NO", "F\t1,2,3"])
def test_parse_element_unknown(line):
    with pytest.raises(ParseError):
        Config().parse_element(line)


def test_parse_element_bad_value():
    with pytest.raises(ParseError):
        Config().parse_element("F 300,0,0\n")


def test_parse_config_elements_finds_map(textures):
    lines = _header(textures) + ["\n", "  111\n", "1N1\n", "111\n"]
    config, start = parse_config_elements(lines)
    assert start == len(_header(textures)) + 1
    assert lines[start] == "  111\n"
    assert config.is_complete() is True
    assert config.west == textures["west"]
    assert config.ceiling == Rgb(225, 30, 0)


def test_parse_config_elements_missing_element(textures):
    lines = _header(textures)[1:] + ["111\n"]
    with pytest.raises(ParseError, match="Missing required"):
        parse_config_elements(lines)


def test_parse_config_elements_no_map(textures):
    with pytest.raises(ParseError, match="No map"):
        parse_config_elements(_header(textures) + ["\n"])


def test_parse_config_elements_invalid_line(textures):
    lines = _header(textures) + ["hello\n", "111\n"]
    with pytest.raises(ParseError, match="Invalid line"):
        parse_config_elements(lines)


def test_parse_config_elements_map_before_elements(textures):
    lines = ["111\n"] + _header(textures)
    with pytest.raises(ParseError, match="Missing required"):
        parse_config_elements(lines)