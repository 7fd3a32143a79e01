import json
import math
import pathlib
import sys

import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pontifex.profile import STANDARD, TOY, CipherProfile


def test_presets():
    assert (STANDARD.deck_size, STANDARD.group_width, STANDARD.padding) == (54, 5, "X")
    assert TOY.deck_size == 10


def test_settings_loaded_from_json_build_a_profile():
    settings = json.loads('{"deck_size": "10", "group_width": 5, "padding": "x"}')
    assert CipherProfile.from_dict(settings) == TOY


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, STANDARD),
        (TOY, TOY),
        ({"deck_size": 10}, TOY),
        ({}, STANDARD),
    ],
)
def test_resolve_accepts_profiles_and_mappings(value, expected):
    assert CipherProfile.resolve(value) == expected


def test_resolve_rejects_other_types():
    with pytest.raises(TypeError):
        CipherProfile.resolve("toy")


def test_from_dict_ignores_unknown_keys():
    profile = CipherProfile.from_dict({"deck_size": 20, "colour": "blue"})
    assert profile.deck_size == 20
    assert profile.group_width == 5


def test_values_are_normalised():
    profile = CipherProfile(deck_size="54", group_width=4.0, padding=" q ")
    assert profile == CipherProfile(deck_size=54, group_width=4, padding="Q")


def test_codec_uses_profile_padding():
    codec = CipherProfile(padding="Z").codec()
    assert codec.chunk([1], 2) == [[1, 26]]


@pytest.mark.parametrize(
    "field,value,expected_exception",
    [
        ("deck_size", 2, ValueError),
        ("deck_size", "-1", ValueError),
        ("deck_size", "bogus", ValueError),
        ("deck_size", True, TypeError),
        ("deck_size", None, TypeError),
        ("group_width", 0, ValueError),
        ("group_width", 2.5, ValueError),
        ("group_width", math.nan, ValueError),
        ("padding", "XY", ValueError),
        ("padding", "1", ValueError),
        ("padding", 24, TypeError),
    ],
)
def test_invalid_values_raise(field, value, expected_exception):
    with pytest.raises(expected_exception):
        CipherProfile(**{field: value})


def test_profiles_are_frozen():
    with pytest.raises(AttributeError):
        STANDARD.deck_size = 10
