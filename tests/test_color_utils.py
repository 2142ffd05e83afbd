"""Tests for hex/RGB conversion."""

import pytest

from magichome.color_utils import hex_to_rgb, rgb_to_hex


@pytest.mark.parametrize("value", ["ff00aa", "#FF00AA", "0xff00aa", " #ff00aa "])
def test_hex_to_rgb_prefixes(value):
    assert hex_to_rgb(value) == (255, 0, 170)


@pytest.mark.parametrize("value", ["fff", "#ff00aa00", ""])
def test_hex_to_rgb_rejects_bad_length(value):
    with pytest.raises(ValueError):
        hex_to_rgb(value)


def test_hex_to_rgb_rejects_non_hex():
    with pytest.raises(ValueError):
        hex_to_rgb("zz0000")


def test_rgb_to_hex():
    assert rgb_to_hex(255, 24, 0) == "#FF1800"
