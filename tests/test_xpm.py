import pytest

from raycube.xpm import (
    TRANSPARENT,
    Image,
    XpmError,
    parse_xpm,
    read_xpm_file,
    split_words,
    strip_comments,
    text_to_rgb,
    xpm_to_image,
)

SMALL = ["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"]


def test_split_words():
    assert split_words("  a\tb   c ") == ["a", "b", "c"]
    assert split_words("   ") == []


def test_strip_comments_blanks_block_comment():
    text = '/* XPM */\n"ab"'
    result = strip_comments(text)
    assert len(result) == len(text)
    assert "XPM" not in result
    assert result.endswith('"ab"')


def test_strip_comments_keeps_quoted_text():
    text = '"a /* b */ // c"'
    assert strip_comments(text) == text


def test_strip_comments_line_comment():
    result = strip_comments('x // note\n"y"')
    assert "note" not in result
    assert result.endswith('"y"')


def test_text_to_rgb_hex_and_names():
    assert text_to_rgb("#FF0000", None) == 0xFF0000
    assert text_to_rgb("red", None) == 0xFF0000
    assert text_to_rgb("dark", "red") == 0x8B0000
    assert text_to_rgb("no-such-colour", None) == 0
    assert text_to_rgb("None", None) == -1


def test_parse_small_image():
    image = parse_xpm(SMALL)
    assert (image.width, image.height) == (2, 2)
    assert image.pixel(0, 0) == 0xFF0000
    assert image.pixel(1, 0) == TRANSPARENT
    assert image.pixel(0, 1) == TRANSPARENT
    assert image.pixel(1, 1) == 0xFF0000


def test_xpm_to_image_matches_parse():
    assert xpm_to_image(SMALL).pixels == parse_xpm(SMALL).pixels


def test_three_chars_per_pixel():
    data = ["2 1 2 3", "aaa c blue", "bbb c #00FF00", "bbbaaa"]
    image = parse_xpm(data)
    assert image.pixel(0, 0) == 0x00FF00
    assert image.pixel(1, 0) == 0x0000FF


@pytest.mark.parametrize(
    "data",
    [
        ["0 2 1 1", "a c red", "a", "a"],
        ["2 2"],
        ["1 1 1 1", "a s red", "a"],
        ["1 1 1 1", "a c"],
        ["1 2 1 1", "a c red", "a"],
        [],
    ],
)
def test_invalid_data_raises(data):
    with pytest.raises(XpmError):
        parse_xpm(data)


def test_read_xpm_file(tmp_path):
    path = tmp_path / "img.xpm"
    path.write_text(
        "/* XPM */\n"
        "static char *img[] = {\n"
        "/* columns rows colors chars-per-pixel */\n"
        '"2 1 2 1 ",\n'
        '"x c #0000FF",\n'
        '". c white",\n'
        "// pixels\n"
        '"x."\n'
        "};\n"
    )
    image = read_xpm_file(path)
    assert image.pixels == [0x0000FF, 0xFFFFFF]


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm_file(tmp_path / "missing.xpm")


def test_image_put_and_pixel_round_trip():
    image = Image(3, 2)
    image.put(2, 1, 0x123456)
    assert image.pixel(2, 1) == 0x123456
    assert image.pixel(0, 0) == 0
    with pytest.raises(IndexError):
        image.pixel(3, 0)