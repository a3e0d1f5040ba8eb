"""색상 변환 유틸"""
from __future__ import annotations

import math
import re
from typing import Tuple

import numpy as np
from skimage import color as skcolor
from skimage.color.colorconv import rgb_from_xyz

from errors import InvalidColorError

HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# XYZ(D65) -> LMS -> OKLab 행렬
XYZ_TO_LMS = np.array(
    [
        [0.8189330101, 0.3618667424, -0.1288597137],
        [0.0329845436, 0.9293118715, 0.0361456387],
        [0.0482003018, 0.2643662691, 0.6338517070],
    ]
)
LMS_TO_OKLAB = np.array(
    [
        [0.2104542553, 0.7936177850, -0.0040720468],
        [1.9779984951, -2.4285922050, 0.4505937099],
        [0.0259040371, 0.7827717662, -0.8086757660],
    ]
)
LMS_TO_XYZ = np.linalg.inv(XYZ_TO_LMS)
OKLAB_TO_LMS = np.linalg.inv(LMS_TO_OKLAB)

GAMUT_EPS = 1e-4
_GAMUT_SEARCH_STEPS = 24


def clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def normalize_hex(s: str) -> str:
    """대소문자/'#' 유무와 상관없이 #RRGGBB 대문자로 정규화한다."""
    if not isinstance(s, str):
        raise InvalidColorError(f"올바른 HEX 형식이 아니야: {s!r} (예: #FF2800)")
    match = HEX_RE.match(s.strip())
    if not match:
        raise InvalidColorError(f"올바른 HEX 형식이 아니야: {s!r} (예: #FF2800)")
    return f"#{match.group(1).upper()}"


def hex_to_rgb(s: str) -> Tuple[int, int, int]:
    val = normalize_hex(s)[1:]
    return int(val[0:2], 16), int(val[2:4], 16), int(val[4:6], 16)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    if not (0 <= r <= 255 and 0 <= g <= 255 and 0 <= b <= 255):
        raise InvalidColorError("RGB 범위는 0~255야.")
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def _srgb_encode(linear: np.ndarray) -> np.ndarray:
    linear = np.clip(np.asarray(linear, dtype=float), 0.0, 1.0)
    high = 1.055 * np.power(np.maximum(linear, 0.0031308), 1.0 / 2.4) - 0.055
    return np.where(linear > 0.0031308, high, 12.92 * linear)


def hex_to_xyz(s: str) -> np.ndarray:
    r, g, b = hex_to_rgb(s)
    arr = np.array([[[r / 255.0, g / 255.0, b / 255.0]]], dtype=float)
    return skcolor.rgb2xyz(arr)[0, 0]


def hex_to_oklab(s: str) -> np.ndarray:
    lms = XYZ_TO_LMS @ hex_to_xyz(s)
    return LMS_TO_OKLAB @ np.cbrt(lms)


def oklab_to_oklch(lab) -> Tuple[float, float, float]:
    l, a, b = (float(v) for v in lab)
    c = math.hypot(a, b)
    if c < 1e-8:
        return l, 0.0, 0.0
    return l, c, math.degrees(math.atan2(b, a)) % 360.0


def oklch_to_oklab(l: float, c: float, h: float) -> np.ndarray:
    rad = math.radians(h)
    return np.array([l, c * math.cos(rad), c * math.sin(rad)], dtype=float)


def hex_to_oklch(s: str) -> Tuple[float, float, float]:
    return oklab_to_oklch(hex_to_oklab(s))


def oklab_to_linear_rgb(lab) -> np.ndarray:
    lms = (OKLAB_TO_LMS @ np.asarray(lab, dtype=float)) ** 3
    return rgb_from_xyz @ (LMS_TO_XYZ @ lms)


def in_gamut(lab) -> bool:
    linear = oklab_to_linear_rgb(lab)
    return bool(np.all(linear >= -GAMUT_EPS) and np.all(linear <= 1.0 + GAMUT_EPS))


def clamp_chroma(lab) -> np.ndarray:
    """sRGB 밖의 색은 L/h를 유지한 채 채도만 이분 탐색으로 줄여 되돌린다."""
    l, c, h = oklab_to_oklch(lab)
    l = clamp(l, 0.0, 1.0)
    candidate = oklch_to_oklab(l, c, h)
    if in_gamut(candidate):
        return candidate
    lo, hi = 0.0, c
    for _ in range(_GAMUT_SEARCH_STEPS):
        mid = (lo + hi) / 2.0
        if in_gamut(oklch_to_oklab(l, mid, h)):
            lo = mid
        else:
            hi = mid
    return oklch_to_oklab(l, lo, h)


def oklab_to_hex(lab) -> str:
    rgb = _srgb_encode(oklab_to_linear_rgb(clamp_chroma(lab)))
    r, g, b = (int(v) for v in np.clip(np.rint(rgb * 255.0), 0, 255))
    return rgb_to_hex(r, g, b)


def oklch_to_hex(l: float, c: float, h: float) -> str:
    return oklab_to_hex(oklch_to_oklab(l, c, h))


def relative_luminance(s: str) -> float:
    # rgb2xyz의 Y 행이 WCAG 상대 휘도와 같다
    return float(hex_to_xyz(s)[1])


def contrast_ratio(hex_a: str, hex_b: str) -> float:
    la = relative_luminance(hex_a)
    lb = relative_luminance(hex_b)
    hi, lo = max(la, lb), min(la, lb)
    return (hi + 0.05) / (lo + 0.05)
