"""CUD 허용 존(Safe/Warning/Off) 판정과 임계값 관리"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from config import DEFAULT_THRESHOLDS, ZoneThresholds
from errors import InvalidParameterError

SAFE = "safe"
WARNING = "warning"
OFF = "off"

ZONE_ORDER: Dict[str, int] = {SAFE: 0, WARNING: 1, OFF: 2}

ZONE_LABELS = {SAFE: "Safe Zone", WARNING: "Warning Zone", OFF: "Off Zone"}


@dataclass(frozen=True)
class ZoneClassification:
    zone: str
    distance: float
    thresholds: ZoneThresholds


def zone_rank(zone: str) -> int:
    return ZONE_ORDER[zone]


def validate_thresholds(thresholds: ZoneThresholds) -> bool:
    if thresholds.safe_max <= 0 or thresholds.warning_max <= 0:
        return False
    return thresholds.safe_max < thresholds.warning_max


def ensure_thresholds(thresholds: ZoneThresholds | None) -> ZoneThresholds:
    """잘못된 임계값은 보정하지 않고 거부한다."""
    effective = thresholds or DEFAULT_THRESHOLDS
    if not validate_thresholds(effective):
        raise InvalidParameterError(
            f"존 임계값이 잘못됐어: safe_max={effective.safe_max}, warning_max={effective.warning_max} "
            "(0 < safe_max < warning_max 이어야 해)"
        )
    return effective


def classify(distance: float, thresholds: ZoneThresholds | None = None) -> str:
    """ΔE로 존을 판정한다. 경계값은 아래쪽 존에 포함된다."""
    t = thresholds or DEFAULT_THRESHOLDS
    if distance <= t.safe_max:
        return SAFE
    if distance <= t.warning_max:
        return WARNING
    return OFF


def classify_with_detail(distance: float, thresholds: ZoneThresholds | None = None) -> ZoneClassification:
    t = thresholds or DEFAULT_THRESHOLDS
    return ZoneClassification(zone=classify(distance, t), distance=distance, thresholds=t)
