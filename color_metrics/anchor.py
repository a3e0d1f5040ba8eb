"""브랜드 앵커 색 관리"""
from __future__ import annotations

from dataclasses import dataclass, replace

from color_utils import normalize_hex
from errors import InvalidParameterError
from palette_loader import NearestMatch, ReferenceCatalogue, default_catalogue

PRIORITY_BRAND = "brand"
PRIORITY_REFERENCE = "reference"
PRIORITIES = (PRIORITY_BRAND, PRIORITY_REFERENCE)


@dataclass(frozen=True)
class AnchorState:
    original_hex: str
    nearest: NearestMatch
    priority: str
    effective_hex: str


def _priority_for_match(match_class: str) -> str:
    if match_class in ("exact", "near"):
        return PRIORITY_REFERENCE
    return PRIORITY_BRAND


def _effective_hex(original_hex: str, nearest: NearestMatch, priority: str) -> str:
    return original_hex if priority == PRIORITY_BRAND else nearest.reference.hex


def create_anchor(hex_color: str, catalogue: ReferenceCatalogue | None = None) -> AnchorState:
    cat = catalogue or default_catalogue()
    original = normalize_hex(hex_color)
    nearest = cat.nearest(original)
    priority = _priority_for_match(nearest.match_class)
    return AnchorState(
        original_hex=original,
        nearest=nearest,
        priority=priority,
        effective_hex=_effective_hex(original, nearest, priority),
    )


def set_priority(anchor: AnchorState, priority: str) -> AnchorState:
    """우선순위를 바꾼 새 상태를 돌려준다. 입력은 건드리지 않는다."""
    if priority not in PRIORITIES:
        raise InvalidParameterError(f"알 수 없는 우선순위야: {priority!r}")
    return replace(
        anchor,
        priority=priority,
        effective_hex=_effective_hex(anchor.original_hex, anchor.nearest, priority),
    )


def suggest_priority(anchor: AnchorState) -> str:
    return _priority_for_match(anchor.nearest.match_class)
