"""앵커 색과 팔레트의 조화 점수"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional, Sequence, Tuple, Union

import numpy as np

from color_utils import contrast_ratio, hex_to_oklch, normalize_hex, oklch_to_hex
from config import (
    DEFAULT_WEIGHTS,
    HARMONY_WARNING_THRESHOLD,
    LOGGER_NAME,
    NEUTRAL_CHROMA,
    WCAG_RATIO_AA,
    HarmonyWeights,
)
from errors import EmptyInputError, InvalidParameterError

logger = logging.getLogger(LOGGER_NAME)

NEUTRAL_SCORE = 50.0
IDEAL_LIGHTNESS_STD = 0.25
MAX_LIGHTNESS_DEVIATION = 0.25
HUE_SHIFT_FACTOR = 0.3
LIGHTNESS_GAP = 0.3
LIGHTNESS_PUSH = 0.2
SUGGESTION_CUTOFF = 60.0

WeightsInput = Union[HarmonyWeights, Dict[str, float], None]


@dataclass(frozen=True)
class HarmonyBreakdown:
    hue: float
    lightness: float
    contrast: float


@dataclass(frozen=True)
class HarmonyScoreResult:
    total: float
    breakdown: HarmonyBreakdown
    weights: HarmonyWeights


@dataclass(frozen=True)
class HarmonyWarning:
    message: str
    score: float
    threshold: float
    severity: str
    suggestions: Tuple[str, ...]


@dataclass(frozen=True)
class AlternativePaletteResult:
    suggested_palette: List[str]
    original_score: float
    improved_score: float
    explanations: List[str]


def hue_distance(h1: float, h2: float) -> float:
    """원주 위 최단 색상 거리 (0~180도)"""
    diff = abs(h1 - h2) % 360.0
    return min(diff, 360.0 - diff)


def hue_distance_score(anchor_hex: str, palette: Sequence[str]) -> float:
    if not palette:
        return NEUTRAL_SCORE
    _, anchor_c, anchor_h = hex_to_oklch(anchor_hex)
    if anchor_c < NEUTRAL_CHROMA:
        return NEUTRAL_SCORE

    distances = []
    for hex_color in palette:
        _, c, h = hex_to_oklch(hex_color)
        if c < NEUTRAL_CHROMA:
            continue
        distances.append(hue_distance(anchor_h, h))
    if not distances:
        return NEUTRAL_SCORE

    # 0도 → 100점, 180도(보색) → 30점
    avg = float(np.mean(distances))
    return round(max(0.0, 100.0 - avg / 180.0 * 70.0), 1)


def lightness_distribution_score(palette: Sequence[str]) -> float:
    if len(palette) <= 1:
        return NEUTRAL_SCORE
    lightness = np.array([hex_to_oklch(h)[0] for h in palette], dtype=float)
    deviation = abs(float(np.std(lightness)) - IDEAL_LIGHTNESS_STD)
    return round(max(0.0, 100.0 * (1.0 - deviation / MAX_LIGHTNESS_DEVIATION)), 1)


def contrast_fit_score(anchor_hex: str, palette: Sequence[str]) -> float:
    if not palette:
        return NEUTRAL_SCORE
    passed = sum(1 for h in palette if contrast_ratio(anchor_hex, h) >= WCAG_RATIO_AA)
    return round(passed / len(palette) * 100.0, 1)


def normalize_weights(weights: WeightsInput = None) -> HarmonyWeights:
    if weights is None:
        merged = DEFAULT_WEIGHTS
    elif isinstance(weights, HarmonyWeights):
        merged = weights
    else:
        defaults = asdict(DEFAULT_WEIGHTS)
        unknown = sorted(set(weights) - set(defaults))
        if unknown:
            raise InvalidParameterError(f"알 수 없는 조화 가중치 키야: {unknown}")
        merged = HarmonyWeights(**{**defaults, **weights})
    if min(merged.hue, merged.lightness, merged.contrast) < 0:
        raise InvalidParameterError(f"조화 가중치는 음수일 수 없어: {merged}")
    total = merged.hue + merged.lightness + merged.contrast
    if total == 0:
        merged = DEFAULT_WEIGHTS
        total = merged.hue + merged.lightness + merged.contrast
    return HarmonyWeights(
        hue=merged.hue / total,
        lightness=merged.lightness / total,
        contrast=merged.contrast / total,
    )


def harmony_score(anchor_hex: str, palette: Sequence[str], weights: WeightsInput = None) -> HarmonyScoreResult:
    """앵커 대비 팔레트의 조화 점수(0~100)를 계산한다."""
    palette = list(palette)
    if not palette:
        raise EmptyInputError("팔레트에 색이 하나 이상 있어야 해.")
    anchor = normalize_hex(anchor_hex)
    colors = [normalize_hex(h) for h in palette]
    w = normalize_weights(weights)

    breakdown = HarmonyBreakdown(
        hue=hue_distance_score(anchor, colors),
        lightness=lightness_distribution_score(colors),
        contrast=contrast_fit_score(anchor, colors),
    )
    total = breakdown.hue * w.hue + breakdown.lightness * w.lightness + breakdown.contrast * w.contrast

    logger.debug(
        "[정보] 조화 점수 %.1f (색상=%.1f, 명도=%.1f, 대비=%.1f)",
        total,
        breakdown.hue,
        breakdown.lightness,
        breakdown.contrast,
    )
    return HarmonyScoreResult(total=round(total, 1), breakdown=breakdown, weights=w)


def _severity(score: float, threshold: float) -> str:
    gap = threshold - score
    if gap >= 30:
        return "high"
    if gap >= 15:
        return "medium"
    return "low"


def _suggestions(breakdown: HarmonyBreakdown) -> Tuple[str, ...]:
    suggestions: List[str] = []
    if breakdown.hue < SUGGESTION_CUTOFF:
        suggestions.append("색상을 앵커 색 쪽으로 가까이 하면 조화가 좋아져.")
    if breakdown.lightness < SUGGESTION_CUTOFF:
        suggestions.append("명도 차이를 더 다양하게 주면 균형이 좋아져.")
    if breakdown.contrast < SUGGESTION_CUTOFF:
        suggestions.append("앵커와의 대비를 높이면 접근성이 좋아져.")
    if not suggestions:
        suggestions.append("팔레트 구성을 다시 보면 조화 점수가 오를 수 있어.")
    return tuple(suggestions)


def generate_warning(result: HarmonyScoreResult, threshold: float = HARMONY_WARNING_THRESHOLD) -> Optional[HarmonyWarning]:
    if result.total >= threshold:
        return None
    return HarmonyWarning(
        message=f"조화 점수가 {result.total}점이야 (권장: {threshold:g}점 이상)",
        score=result.total,
        threshold=threshold,
        severity=_severity(result.total, threshold),
        suggestions=_suggestions(result.breakdown),
    )


def _adjust(hex_color: str, anchor_lch: Tuple[float, float, float]) -> Tuple[str, bool, bool]:
    anchor_l, anchor_c, anchor_h = anchor_lch
    l, c, h = hex_to_oklch(hex_color)
    hue_moved = False
    lightness_moved = False

    # 무채색은 색상 조정 생략
    if c >= NEUTRAL_CHROMA and anchor_c >= NEUTRAL_CHROMA:
        diff = (anchor_h - h + 180.0) % 360.0 - 180.0
        if abs(diff) > 1e-6:
            h = (h + diff * HUE_SHIFT_FACTOR) % 360.0
            hue_moved = True

    if abs(l - anchor_l) < LIGHTNESS_GAP:
        l = min(1.0, l + LIGHTNESS_PUSH) if anchor_l < 0.5 else max(0.0, l - LIGHTNESS_PUSH)
        lightness_moved = True

    if not (hue_moved or lightness_moved):
        return hex_color, False, False
    return oklch_to_hex(l, c, h), hue_moved, lightness_moved


def _explain(hue_moved: bool, lightness_moved: bool) -> str:
    if hue_moved and lightness_moved:
        return "색상을 앵커 쪽으로 당기고 명도도 조정했어"
    if hue_moved:
        return "색상을 앵커 쪽으로 당겼어"
    return "명도를 조정해서 대비를 높였어"


def suggest_alternative(anchor_hex: str, palette: Sequence[str]) -> AlternativePaletteResult:
    """조화 점수를 우선한 대체 팔레트를 제안한다.

    색마다 조정안을 만들고, 누적 점수가 내려가지 않을 때만 받아들인다.
    그래서 improved_score >= original_score 가 항상 성립한다.
    """
    palette = list(palette)
    if not palette:
        raise EmptyInputError("팔레트에 색이 하나 이상 있어야 해.")
    anchor = normalize_hex(anchor_hex)
    colors = [normalize_hex(h) for h in palette]
    anchor_lch = hex_to_oklch(anchor)

    original_score = harmony_score(anchor, colors).total
    current = list(colors)
    current_score = original_score
    explanations: List[str] = []

    for i, hex_color in enumerate(colors):
        candidate, hue_moved, lightness_moved = _adjust(hex_color, anchor_lch)
        if candidate == hex_color:
            explanations.append("변경 없음")
            continue
        trial = current[:i] + [candidate] + current[i + 1 :]
        trial_score = harmony_score(anchor, trial).total
        if trial_score < current_score:
            explanations.append("변경 없음 (조정하면 조화 점수가 내려가)")
            continue
        current = trial
        current_score = trial_score
        explanations.append(_explain(hue_moved, lightness_moved))

    return AlternativePaletteResult(
        suggested_palette=current,
        original_score=original_score,
        improved_score=current_score,
        explanations=explanations,
    )
