import pytest

from cubcaster.config import (
    Config,
    ConfigError,
    check_rgb_chars,
    combine_rgb,
    copy_map_lines,
    has_cub_extension,
    has_tab,
    is_blank,
    is_element_line,
    is_xmp_extension,
    parse_color_line,
    parse_config,
    parse_rgb_component,
    parse_texture,
    process_element,
    read_cub_file,
)

ELEMENTS = [
    "NO ./textures/north.xpm",
    "SO ./textures/south.xpm",
    "WE ./textures/west.xpm",
    "EA ./textures/east.xpm",
    "F 220,100,0",
    "C 225,30,0",
]

MAP = ["111111", "1N0001", "111111"]


@pytest.mark.parametrize(
    ("name", "expected"),
    [("map.cub", True), (".cub", True), ("map.cu", False), ("cub", False), ("map.cub2", False)],
)
def test_has_cub_extension(name, expected):
    assert has_cub_extension(name) is expected


def test_is_xmp_extension():
    assert is_xmp_extension("wall.xmp") is True
    assert is_xmp_extension("wall.xpm") is False
    assert is_xmp_extension("xmp") is False


def test_has_tab():
    assert has_tab("a\tb") is True
    assert has_tab("a b") is False


def test_is_blank():
    assert is_blank("") is True
    assert is_blank(" \t\r\n") is True
    assert is_blank("  1") is False


def test_is_element_line():
    for line in ELEMENTS:
        assert is_element_line(line) is True
    assert is_element_line("NO") is False
    assert is_element_line("111") is False
    assert is_element_line("F,1") is False


def test_read_cub_file_strips_single_newline(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_bytes(b"a\nb\r\n\nc")
    assert read_cub_file(path) == ["a", "b\r", "", "c"]


def test_read_cub_file_trailing_newline(tmp_path):
    path = tmp_path / "scene.cub"
    path.write_text("x\ny\n")
    assert read_cub_file(path) == ["x", "y"]


def test_read_cub_file_missing(tmp_path):
    with pytest.raises(ConfigError, match="Failed to read"):
        read_cub_file(tmp_path / "absent.cub")


def test_parse_texture_sets_paths():
    config = Config()
    parse_texture("NO ./north.xpm", config)
    parse_texture("EA   east_1.xpm", config)
    assert config.no_path == "./north.xpm"
    assert config.ea_path == "east_1.xpm"
    assert config.so_path is None


def test_parse_texture_invalid_char():
    with pytest.raises(ConfigError, match="Invalid character in texture line"):
        parse_texture("NO ./north-1.xpm", Config())


def test_parse_texture_too_many_tokens():
    with pytest.raises(ConfigError, match="Invalid texture format"):
        parse_texture("NO a.xpm b.xpm", Config())


def test_parse_rgb_component():
    assert parse_rgb_component("255") == 255
    assert parse_rgb_component("0") == 0
    assert parse_rgb_component("42\r") == 42
    with pytest.raises(ConfigError, match="out of range"):
        parse_rgb_component("256")
    with pytest.raises(ConfigError, match="out of range"):
        parse_rgb_component("-1")


def test_combine_rgb():
    assert combine_rgb(255, 0, 0) == 0xFF0000
    assert combine_rgb(0, 0, 255) == 0xFF


def test_check_rgb_chars():
    with pytest.raises(ConfigError, match="Tab is not valid"):
        check_rgb_chars("F\t1,2,3")
    with pytest.raises(ConfigError, match="floor/ceiling"):
        check_rgb_chars("F 1;2;3")


def test_parse_color_line():
    config = Config()
    parse_color_line("F 220,100,0", config)
    parse_color_line("C 225,30,0\r", config)
    assert config.floor_color == combine_rgb(220, 100, 0)
    assert config.ceiling_color == combine_rgb(225, 30, 0)


@pytest.mark.parametrize(
    ("line", "message"),
    [
        ("F 1,2,3 4", "Invalide color format"),
        ("F 1,2", "Invalide RGB format"),
        ("F 1,2,3,4", "Invalide RGB format"),
        ("F 1,2,300", "out of range"),
    ],
)
def test_parse_color_line_errors(line, message):
    with pytest.raises(ConfigError, match=message):
        parse_color_line(line, Config())


def test_process_element():
    config = Config()
    assert process_element("SO south.xpm", config) is True
    assert config.so_path == "south.xpm"
    assert process_element("111", config) is False


def test_copy_map_lines_dimensions():
    config = Config()
    copy_map_lines(["1111", "1N0000001", "1111", "", "  "], config)
    assert config.map_height == 5
    assert config.map_width == len("1N0000001")
    assert config.map_lines[1] == "1N0000001"


def test_copy_map_lines_empty_line_inside():
    with pytest.raises(ConfigError, match="empty line found inside the map"):
        copy_map_lines(["111", "", "111"], Config())


def test_parse_config_full():
    config = parse_config(["", *ELEMENTS, "   ", *MAP])
    assert config.no_path == "./textures/north.xpm"
    assert config.we_path == "./textures/west.xpm"
    assert config.floor_color == combine_rgb(220, 100, 0)
    assert config.map_lines == MAP
    assert config.map_height == len(MAP)
    assert config.map_width == len(MAP[0])


def test_parse_config_duplicate_element():
    lines = [*ELEMENTS, "NO ./again.xpm", *MAP]
    with pytest.raises(ConfigError, match="Missing or duplicate elements"):
        parse_config(lines)


def test_parse_config_missing_element():
    with pytest.raises(ConfigError, match="Missing or duplicate elements"):
        parse_config([*ELEMENTS[:5], *MAP])


def test_parse_config_tab():
    with pytest.raises(ConfigError, match="Tab is not valid in config"):
        parse_config(["NO\t./north.xpm", *ELEMENTS[1:], *MAP])