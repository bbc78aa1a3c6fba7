import pytest

from cubcaster.colornames import lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("white", 0xFFFFFF),
        ("black", 0x0),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("cornflowerblue", 0x6495ED),
        ("gray50", 0x7F7F7F),
        ("lightgreen", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_is_case_insensitive():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")
    assert lookup_color("DarkRed") == 0x8B0000


def test_none_is_transparent():
    assert lookup_color("none") == -1
    assert lookup_color("None") == -1


def test_unknown_name_yields_zero():
    assert lookup_color("no such colour") == 0
    assert lookup_color("") == 0


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


@pytest.mark.parametrize("level", range(101))
def test_gray_and_grey_agree(level):
    assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")


def test_gray_scale_is_monotonic_and_neutral():
    values = [lookup_color(f"gray{level}") for level in range(101)]
    assert values == sorted(values)
    assert values[0] == 0x0
    assert values[-1] == 0xFFFFFF
    for value in values:
        r, g, b = (value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF
        assert r == g == b


@pytest.mark.parametrize(
    "spaced, joined",
    [
        ("ghost white", "ghostwhite"),
        ("misty rose", "mistyrose"),
        ("dodger blue", "dodgerblue"),
        ("orange red", "orangered"),
        ("dark grey", "darkgrey"),
    ],
)
def test_spaced_and_joined_spellings_agree(spaced, joined):
    assert lookup_color(spaced) == lookup_color(joined)


def test_values_fit_in_24_bits():
    for name in ("snow", "thistle4", "yellow", "purple", "azure2"):
        value = lookup_color(name)
        assert 0 <= value <= 0xFFFFFF