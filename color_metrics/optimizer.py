"""CUD 최적화

CUD 거리와 조화 점수를 함께 보는 탐욕적(색마다 독립) 팔레트 최적화.

    목적함수 = Σ(CUD 거리) + λ × (1 - 조화 점수 / 100)

값이 낮을수록 좋다. 전역 탐색은 하지 않는다.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from color_metrics.anchor import AnchorState
from color_metrics.harmony import HarmonyScoreResult, harmony_score
from color_metrics.recommend import AlternativeSuggestion, off_zone_warnings, suggest_reference_alternatives
from color_metrics.snapper import Derivation, SnapResult, soft_snap
from color_metrics.zone import OFF, SAFE, WARNING, ensure_thresholds
from color_utils import normalize_hex
from config import DEFAULT_CONFIG, LOGGER_NAME, OptimizationOptions
from errors import EmptyInputError, InvalidParameterError
from palette_loader import ReferenceCatalogue, ReferenceColor, default_catalogue

logger = logging.getLogger(LOGGER_NAME)

OPTIMIZER_MODES = ("soft", "strict")


@dataclass(frozen=True)
class ReferenceRecord:
    token_id: str
    token_hex: str
    delta_e: float
    derivation_type: str
    zone: str


@dataclass(frozen=True)
class BrandTokenReference:
    suggested_id: str
    reference: ReferenceRecord


@dataclass(frozen=True)
class OptimizedColor:
    hex: str
    original_hex: str
    zone: str
    delta_e: float
    snapped: bool
    reference: ReferenceColor
    delta_e_change: float
    derivation: Derivation
    explanation: str
    brand_token: BrandTokenReference


@dataclass(frozen=True)
class OptimizationResult:
    palette: List[OptimizedColor]
    objective_value: float
    compliance_rate: float
    harmony: HarmonyScoreResult
    processing_time_ms: float
    warnings: List[str]
    alternatives: List[AlternativeSuggestion]
    off_zone_count: int


def suggested_id(index: int) -> str:
    return f"brand-color-{index + 1}"


def _to_optimized(snap: SnapResult, index: int) -> OptimizedColor:
    record = ReferenceRecord(
        token_id=snap.derivation.reference_id,
        token_hex=snap.derivation.reference_hex,
        delta_e=snap.delta_e,
        derivation_type=snap.derivation.type,
        zone=snap.zone,
    )
    return OptimizedColor(
        hex=snap.hex,
        original_hex=snap.original_hex,
        zone=snap.zone,
        delta_e=snap.delta_e,
        snapped=snap.snapped,
        reference=snap.reference,
        delta_e_change=snap.delta_e_change,
        derivation=snap.derivation,
        explanation=snap.explanation,
        brand_token=BrandTokenReference(suggested_id=suggested_id(index), reference=record),
    )


def calculate_objective(palette: Iterable[OptimizedColor], harmony_total: float, lambda_: float) -> float:
    total_delta_e = sum(c.delta_e for c in palette)
    return total_delta_e + lambda_ * (1.0 - harmony_total / 100.0)


def compliance_rate(palette: Sequence[OptimizedColor]) -> float:
    """Safe + Warning 색의 비율(%)"""
    if not palette:
        return 0.0
    compliant = sum(1 for c in palette if c.zone in (SAFE, WARNING))
    return compliant / len(palette) * 100.0


def _validate(options: OptimizationOptions) -> None:
    if options.mode not in OPTIMIZER_MODES:
        raise InvalidParameterError(f"최적화 모드는 soft 또는 strict야: {options.mode!r}")
    if options.lambda_ < 0:
        raise InvalidParameterError(f"λ는 0 이상이어야 해: {options.lambda_}")
    ensure_thresholds(options.thresholds)


def optimize_palette(
    candidates: Sequence[str],
    anchor: AnchorState,
    options: OptimizationOptions | None = None,
    lang: str = "ko",
    catalogue: ReferenceCatalogue | None = None,
) -> OptimizationResult:
    start = time.perf_counter()
    candidates = list(candidates)
    if not candidates:
        raise EmptyInputError("후보 색이 하나 이상 있어야 해.")
    opts = options or DEFAULT_CONFIG
    _validate(opts)
    normalized = [normalize_hex(c) for c in candidates]
    cat = catalogue or default_catalogue()

    palette: List[OptimizedColor] = []
    for index, hex_color in enumerate(normalized):
        # strict 모드에서도 zone은 스냅 전 원래 색 기준으로 기록된다
        snap = soft_snap(
            hex_color,
            mode=opts.mode,
            return_factor=opts.return_factor,
            thresholds=opts.thresholds,
            lang=lang,
            catalogue=cat,
        )
        palette.append(_to_optimized(snap, index))

    harmony = harmony_score(anchor.effective_hex, [c.hex for c in palette])
    objective = calculate_objective(palette, harmony.total, opts.lambda_)
    rate = compliance_rate(palette)

    off_colors = [] if opts.mode == "strict" else [c for c in palette if c.zone == OFF]
    warnings = off_zone_warnings(off_colors)
    if off_colors:
        logger.warning("[경고] Off Zone 색 %d개: %s", len(off_colors), ", ".join(c.original_hex for c in off_colors))
    alternatives = suggest_reference_alternatives(off_colors, lang=lang)

    elapsed_ms = (time.perf_counter() - start) * 1000.0
    logger.info(
        "[정보] 최적화 완료: %d색, 모드=%s, 준수율=%.1f%%, 목적함수=%.4f, 조화=%.1f, Off=%d (%.1fms)",
        len(palette),
        opts.mode,
        rate,
        objective,
        harmony.total,
        len(off_colors),
        elapsed_ms,
    )

    return OptimizationResult(
        palette=palette,
        objective_value=objective,
        compliance_rate=rate,
        harmony=harmony,
        processing_time_ms=elapsed_ms,
        warnings=warnings,
        alternatives=alternatives,
        off_zone_count=len(off_colors),
    )
