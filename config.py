"""CUD 최적화 전역 설정과 파라미터"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

LOGGER_NAME = "cud_palette"

PALETTE_DIR = Path(__file__).resolve().parent / "palettes"
DEFAULT_CATALOGUE_ID = "cud_v4"

# 카탈로그 매치 등급 (존 임계값과는 별개의 사다리)
MATCH_CLASS_THRESHOLDS: Dict[str, float] = {
    "exact": 0.03,
    "near": 0.10,
    "moderate": 0.20,
}

PREFER_SNAP_THRESHOLD = 0.15
NEUTRAL_CHROMA = 0.01  # OKLCH 채도가 이보다 낮으면 무채색
WCAG_RATIO_AA = 4.5
HARMONY_WARNING_THRESHOLD = 70.0
CACHE_MAX_SIZE = 100


@dataclass(frozen=True)
class ZoneThresholds:
    safe_max: float = 0.05
    warning_max: float = 0.12


@dataclass(frozen=True)
class HarmonyWeights:
    hue: float = 0.4
    lightness: float = 0.3
    contrast: float = 0.3


@dataclass(frozen=True)
class OptimizationOptions:
    lambda_: float = 0.5  # 높을수록 조화 점수 비중↑
    mode: str = "soft"
    thresholds: ZoneThresholds = field(default_factory=ZoneThresholds)
    return_factor: float = 0.5


DEFAULT_THRESHOLDS = ZoneThresholds()
DEFAULT_WEIGHTS = HarmonyWeights()
DEFAULT_CONFIG = OptimizationOptions()
