import pytest

from cubcaster.xpm import (
    TRANSPARENT,
    XpmError,
    extract_strings,
    find,
    find_unquoted,
    parse_color,
    parse_xpm,
    read_xpm_file,
    split_words,
    strip_comments,
)

SAMPLE = ["2 2 2 1", "a c #FF0000", "b c None", "ab", "ba"]


def test_split_words_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]
    assert split_words(" \t ") == []


def test_find():
    assert find("hello", "ll") == 2
    assert find("abc", "z") == -1


def test_find_unquoted_skips_strings():
    text = '"/*" /*'
    assert find_unquoted(text, "/*") == text.rindex("/*")
    assert find_unquoted('"//"', "//") == -1


def test_strip_comments_keeps_length_and_strings():
    text = '/* note */ "a/*b" // tail\n"c"'
    stripped = strip_comments(text)
    assert len(stripped) == len(text)
    assert extract_strings(stripped) == ["a/*b", "c"]
    assert "note" not in stripped
    assert "tail" not in stripped


def test_extract_strings():
    assert extract_strings('{"ab",\n"cd"}') == ["ab", "cd"]


def test_parse_color_hex_and_names():
    assert parse_color("#FF0000", None) == 0xFF0000
    assert parse_color("red", None) == 0xFF0000
    assert parse_color("None", None) == -1
    assert parse_color("navy", "blue") == 0x80
    assert parse_color("nosuchcolour", None) == 0


def test_parse_xpm_pixels():
    image = parse_xpm(SAMPLE)
    assert (image.width, image.height) == (2, 2)
    assert image.get_pixel(0, 0) == 0xFF0000
    assert image.get_pixel(1, 0) == TRANSPARENT
    assert image.get_pixel(0, 1) == TRANSPARENT
    assert image.get_pixel(1, 1) == 0xFF0000


def test_parse_xpm_multichar_keys():
    lines = ["1 1 2 3", "abc c #000080", "xyz c white", "xyz"]
    image = parse_xpm(lines)
    assert image.get_pixel(0, 0) == parse_color("white", None)


@pytest.mark.parametrize(
    "lines",
    [
        [],
        ["0 2 2 1", "a c red", "b c blue", "ab", "ba"],
        ["2 2"],
        ["2 2 2 1", "a c red"],
        ["2 2 2 1", "a s red", "b c blue", "ab", "ba"],
        ["2 2 2 1", "a c red", "b c blue", "ab"],
        ["2 2 2 1", "a c red", "b c blue", "a", "ba"],
    ],
)
def test_parse_xpm_errors(lines):
    with pytest.raises(XpmError):
        parse_xpm(lines)


def test_read_xpm_file(tmp_path):
    path = tmp_path / "sample.xpm"
    body = ",\n".join(f'"{line}"' for line in SAMPLE)
    path.write_text(f"/* XPM */\nstatic char *sample[] = {{\n// pixels\n{body}}};\n")
    image = read_xpm_file(path)
    assert image.to_bytes() == parse_xpm(SAMPLE).to_bytes()


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm_file(tmp_path / "missing.xpm")