"""CUD 스내퍼

입력 색을 가장 가까운 CUD 추천색 쪽으로 당긴다. 모드별 동작:

- strict: 항상 추천색으로 교체
- prefer: ΔE가 기준 이하일 때만 교체
- soft: 존에 따라 결정 (Safe 유지 / Warning 부분 보간 / Off 경계까지 당김)

보간은 거리 계산과 같은 OKLab 공간에서 하고, sRGB 밖으로 나간 결과는
채도를 줄여 색역 안으로 되돌린다.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List

import numpy as np

from color_metrics.delta_e import delta_e_ok
from color_metrics.zone import OFF, SAFE, WARNING, ZONE_LABELS, classify, ensure_thresholds
from color_utils import hex_to_oklab, normalize_hex, oklab_to_hex
from config import LOGGER_NAME, PREFER_SNAP_THRESHOLD, ZoneThresholds
from errors import InvalidParameterError
from palette_loader import NearestMatch, ReferenceCatalogue, ReferenceColor, default_catalogue

logger = logging.getLogger(LOGGER_NAME)

MODES = ("soft", "strict", "prefer")

DERIVATION_REFERENCE = "reference"
DERIVATION_SOFT = "soft-snap"
DERIVATION_STRICT = "strict-snap"

# Off 색이 반올림 때문에 제자리에 남을 때 추가로 미는 최소 ΔE
_OFF_MIN_STEP = 0.01
_PULL_SEARCH_STEPS = 30

_MESSAGES = {
    "ko": {
        SAFE: "{zone}: CUD 추천색「{name}」과의 ΔE={de}로 충분히 가까워서 원래 색을 그대로 썼어.",
        WARNING: "{zone}: CUD 추천색「{name}」과의 ΔE={de}. 브랜드 색을 살리려고 추천색 쪽으로 {pct}%만 보정했어.",
        "warning_kept": "{zone}: CUD 추천색「{name}」과의 ΔE={de}. 브랜드 색을 살리려고 원래 색을 유지했어.",
        OFF: "{zone}: CUD 추천색「{name}」과의 ΔE={de}로 너무 멀어. 브랜드 색을 최대한 살리면서 Warning 경계(ΔE={limit})까지만 당겼어.",
        "strict": "Strict 모드: {zone}(ΔE={de}) 색을 CUD 추천색「{name}」으로 스냅했어.",
        "prefer_snapped": "Prefer 모드: {zone}(ΔE={de}) 색이 기준 {limit} 이내라 CUD 추천색「{name}」으로 스냅했어.",
        "prefer_kept": "Prefer 모드: {zone}(ΔE={de}) 색이 기준 {limit}를 넘어서 브랜드 색을 유지했어. 가장 가까운 추천색은「{name}」이야.",
    },
    "en": {
        SAFE: "{zone}: ΔE={de} to CUD color '{name}' is close enough, so the original color is kept.",
        WARNING: "{zone}: ΔE={de} to CUD color '{name}'. Moved {pct}% toward it to keep the brand character.",
        "warning_kept": "{zone}: ΔE={de} to CUD color '{name}'. Kept the original to preserve the brand color.",
        OFF: "{zone}: ΔE={de} to CUD color '{name}' is too far. Pulled only to the warning boundary (ΔE={limit}) to preserve the brand color.",
        "strict": "Strict mode: snapped the {zone} color (ΔE={de}) to CUD color '{name}'.",
        "prefer_snapped": "Prefer mode: the {zone} color (ΔE={de}) is within {limit}, snapped to CUD color '{name}'.",
        "prefer_kept": "Prefer mode: the {zone} color (ΔE={de}) exceeds {limit}, brand color kept. Nearest CUD color is '{name}'.",
    },
}


@dataclass(frozen=True)
class Derivation:
    type: str
    reference_id: str
    reference_hex: str
    brand_hex: str


@dataclass(frozen=True)
class SnapResult:
    original_hex: str
    hex: str
    zone: str
    delta_e: float  # 스냅 전 거리
    snapped: bool
    reference: ReferenceColor
    delta_e_change: float  # 스냅 전후 거리 감소량
    derivation: Derivation
    explanation: str


def _validate_return_factor(return_factor: float) -> None:
    if isinstance(return_factor, bool) or not isinstance(return_factor, (int, float)):
        raise InvalidParameterError(f"return_factor는 숫자여야 해: {return_factor!r}")
    if math.isnan(return_factor) or not 0.0 <= return_factor <= 1.0:
        raise InvalidParameterError(f"return_factor는 0~1 사이여야 해: {return_factor}")


def _validate_options(mode: str, return_factor: float, thresholds, prefer_threshold: float, lang: str) -> ZoneThresholds:
    _validate_return_factor(return_factor)
    if mode not in MODES:
        raise InvalidParameterError(f"알 수 없는 스냅 모드야: {mode!r}")
    if prefer_threshold < 0:
        raise InvalidParameterError(f"prefer 기준값은 0 이상이어야 해: {prefer_threshold}")
    if lang not in _MESSAGES:
        raise InvalidParameterError(f"지원하지 않는 언어야: {lang!r}")
    return ensure_thresholds(thresholds)


def interpolate_oklab(original_hex: str, target_hex: str, t: float) -> str:
    """OKLab에서 t만큼 보간한다. t=0은 원래 색, t=1은 목표 색."""
    if t <= 0.0:
        return normalize_hex(original_hex)
    if t >= 1.0:
        return normalize_hex(target_hex)
    src = hex_to_oklab(original_hex)
    dst = hex_to_oklab(target_hex)
    return oklab_to_hex(src + (dst - src) * t)


def _pull_to_boundary(original: str, reference_hex: str, distance: float, limit: float) -> str:
    """결과 hex의 실제 ΔE가 limit 이하가 되는 가장 작은 t를 찾는다.

    hex 반올림과 색역 보정 때문에 t = 1 - limit / distance 만으로는 경계 밖에
    남을 수 있어서, 그 경우 [t, 1) 구간을 이분 탐색한다.
    """
    ref_lab = hex_to_oklab(reference_hex)

    def _distance(hex_color: str) -> float:
        return delta_e_ok(hex_to_oklab(hex_color), ref_lab)

    t = 1.0 - limit / distance
    result = interpolate_oklab(original, reference_hex, t)
    if result == original:
        result = interpolate_oklab(original, reference_hex, min(1.0, t + _OFF_MIN_STEP / distance))
    if _distance(result) <= limit and result != reference_hex:
        return result

    # hi 쪽은 항상 limit 이하 (t=1 이면 추천색 자체)
    lo, hi = t, 1.0
    best = reference_hex
    for _ in range(_PULL_SEARCH_STEPS):
        mid = (lo + hi) / 2.0
        candidate = interpolate_oklab(original, reference_hex, mid)
        if _distance(candidate) <= limit:
            hi = mid
            if candidate != reference_hex:
                best = candidate
        else:
            lo = mid
    return best


def _snap(
    original: str,
    match: NearestMatch,
    mode: str,
    return_factor: float,
    thresholds: ZoneThresholds,
    prefer_threshold: float,
    lang: str,
) -> SnapResult:
    ref = match.reference
    distance = match.distance
    zone = classify(distance, thresholds)
    limit = thresholds.warning_max

    if mode == "strict":
        result_hex, snapped, derivation_type, key = ref.hex, True, DERIVATION_STRICT, "strict"
    elif mode == "prefer":
        limit = prefer_threshold
        if distance <= prefer_threshold:
            result_hex, snapped, derivation_type, key = ref.hex, True, DERIVATION_STRICT, "prefer_snapped"
        else:
            result_hex, snapped, derivation_type, key = original, False, DERIVATION_REFERENCE, "prefer_kept"
    elif zone == SAFE:
        result_hex, snapped, derivation_type, key = original, False, DERIVATION_REFERENCE, SAFE
    elif zone == WARNING:
        result_hex = interpolate_oklab(original, ref.hex, return_factor)
        snapped = return_factor > 0 and result_hex != original
        derivation_type = DERIVATION_SOFT if snapped else DERIVATION_REFERENCE
        key = WARNING if snapped else "warning_kept"
    else:
        result_hex = _pull_to_boundary(original, ref.hex, distance, limit)
        snapped, derivation_type, key = True, DERIVATION_SOFT, OFF

    after = delta_e_ok(hex_to_oklab(result_hex), np.array(ref.oklab))
    explanation = _MESSAGES[lang][key].format(
        zone=ZONE_LABELS[zone],
        name=ref.display_name(lang),
        de=f"{distance:.3f}",
        limit=f"{limit:.3f}",
        pct=f"{return_factor * 100:.0f}",
    )

    logger.debug(
        "[정보] %s 스냅 %s → %s (%s, ΔE=%.3f→%.3f, 기준색=%s)",
        mode,
        original,
        result_hex,
        zone,
        distance,
        after,
        ref.id,
    )

    return SnapResult(
        original_hex=original,
        hex=result_hex,
        zone=zone,
        delta_e=distance,
        snapped=snapped,
        reference=ref,
        delta_e_change=distance - after,
        derivation=Derivation(
            type=derivation_type,
            reference_id=ref.id,
            reference_hex=ref.hex,
            brand_hex=original,
        ),
        explanation=explanation,
    )


def soft_snap(
    hex_color: str,
    mode: str = "soft",
    return_factor: float = 0.5,
    thresholds: ZoneThresholds | None = None,
    prefer_threshold: float = PREFER_SNAP_THRESHOLD,
    lang: str = "ko",
    catalogue: ReferenceCatalogue | None = None,
) -> SnapResult:
    """한 색을 가장 가까운 추천색 기준으로 스냅한다.

    옵션 검증(return_factor 범위 포함)은 존 판정보다 먼저 한다.
    """
    effective = _validate_options(mode, return_factor, thresholds, prefer_threshold, lang)
    original = normalize_hex(hex_color)
    cat = catalogue or default_catalogue()
    return _snap(original, cat.nearest(original), mode, return_factor, effective, prefer_threshold, lang)


def soft_snap_palette(colors: Iterable[str], **options) -> List[SnapResult]:
    """같은 옵션으로 순서대로 스냅한다."""
    return [soft_snap(c, **options) for c in colors]


def snap_palette_unique(
    colors: Iterable[str],
    mode: str = "strict",
    return_factor: float = 0.5,
    thresholds: ZoneThresholds | None = None,
    prefer_threshold: float = PREFER_SNAP_THRESHOLD,
    lang: str = "ko",
    catalogue: ReferenceCatalogue | None = None,
) -> List[SnapResult]:
    """같은 추천색을 두 번 배정하지 않는다. 추천색을 다 쓰면 최근접 색을 다시 쓴다."""
    effective = _validate_options(mode, return_factor, thresholds, prefer_threshold, lang)
    cat = catalogue or default_catalogue()
    used = set()
    results: List[SnapResult] = []
    for c in colors:
        original = normalize_hex(c)
        match = cat.nearest_excluding(original, used) or cat.nearest(original)
        used.add(match.reference.id)
        results.append(_snap(original, match, mode, return_factor, effective, prefer_threshold, lang))
    return results
