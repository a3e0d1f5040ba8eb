"""color_utils 보조 함수 테스트"""
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
import pytest

from color_utils import (
    clamp_chroma,
    contrast_ratio,
    hex_to_oklab,
    hex_to_oklch,
    in_gamut,
    normalize_hex,
    oklab_to_hex,
    oklab_to_oklch,
)
from errors import InvalidColorError


def test_normalize_hex_accepts_plain_hex_without_hash():
    assert normalize_hex("ff6b5c") == "#FF6B5C"


def test_normalize_hex_trims_and_uppercases():
    assert normalize_hex("  #ff2800 ") == "#FF2800"


@pytest.mark.parametrize("value", ["not-a-color", "#FFF", "#GGGGGG", "", None, 123])
def test_normalize_hex_rejects_invalid_input(value):
    with pytest.raises(InvalidColorError):
        normalize_hex(value)


def test_invalid_color_is_value_error():
    with pytest.raises(ValueError):
        normalize_hex("nope")


def test_white_and_black_oklab():
    white = hex_to_oklab("#FFFFFF")
    black = hex_to_oklab("#000000")
    assert white[0] == pytest.approx(1.0, abs=1e-3)
    assert abs(white[1]) < 1e-3 and abs(white[2]) < 1e-3
    assert np.allclose(black, 0.0, atol=1e-9)


@pytest.mark.parametrize("hex_color", ["#FF2800", "#35A16B", "#84919E"])
def test_oklab_to_hex_recovers_source(hex_color):
    assert oklab_to_hex(hex_to_oklab(hex_color)) == hex_color


def test_clamp_chroma_reprojects_into_gamut_keeping_lightness_and_hue():
    lab = np.array([0.7, 0.4, 0.0])
    assert not in_gamut(lab)
    clamped = clamp_chroma(lab)
    assert in_gamut(clamped)
    l, c, h = oklab_to_oklch(clamped)
    assert l == pytest.approx(0.7)
    assert h == pytest.approx(0.0, abs=1e-6)
    assert 0 < c < 0.4


def test_clamp_chroma_is_deterministic():
    lab = np.array([0.55, -0.3, 0.25])
    assert oklab_to_hex(lab) == oklab_to_hex(lab)


def test_gray_is_neutral():
    _, c, _ = hex_to_oklch("#808080")
    assert c < 0.01


def test_contrast_ratio_black_white():
    assert contrast_ratio("#000000", "#FFFFFF") == pytest.approx(21.0, rel=1e-3)
    assert contrast_ratio("#FFFFFF", "#FFFFFF") == pytest.approx(1.0)
