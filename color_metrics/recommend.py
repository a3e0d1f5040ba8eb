"""Off Zone 색에 대한 경고와 대체 추천색"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

from color_metrics.harmony import hue_distance
from color_utils import hex_to_oklch
from palette_loader import ReferenceColor


@dataclass(frozen=True)
class AlternativeSuggestion:
    original_hex: str
    suggested_hex: str
    suggested_reference: ReferenceColor
    reason: str


def _reason_phrase(src_lch, candidate_lch) -> str:
    src_l, src_c, src_h = src_lch
    cand_l, cand_c, cand_h = candidate_lch
    phrases: List[str] = []
    if cand_c - src_c > 0.02:
        phrases.append("채도↑")
    elif src_c - cand_c > 0.02:
        phrases.append("채도↓")
    if cand_l - src_l > 0.05:
        phrases.append("명도↑")
    elif src_l - cand_l > 0.05:
        phrases.append("명도↓")
    if src_c > 0.01 and cand_c > 0.01 and hue_distance(src_h, cand_h) > 15:
        phrases.append("색상 이동")
    if not phrases:
        phrases.append("톤 균형 유지")
    return ", ".join(phrases)


def off_zone_warnings(off_colors: Sequence) -> List[str]:
    """요약 경고 1줄 + 색마다 1줄. off_colors는 original_hex/delta_e를 가진 객체."""
    if not off_colors:
        return []
    warnings = [f"CUD 비준수 색이 {len(off_colors)}개 있어. 대체 추천색을 검토해 줘."]
    for color in off_colors:
        warnings.append(f"{color.original_hex}: Off Zone (ΔE={color.delta_e:.3f}) - CUD 추천색으로 바꾸는 걸 추천해")
    return warnings


def suggest_reference_alternatives(off_colors: Sequence, lang: str = "ko") -> List[AlternativeSuggestion]:
    """Off Zone 색마다 최근접 추천색 하나를 제안한다."""
    results: List[AlternativeSuggestion] = []
    for color in off_colors:
        ref: ReferenceColor = color.reference
        phrase = _reason_phrase(hex_to_oklch(color.original_hex), ref.oklch)
        results.append(
            AlternativeSuggestion(
                original_hex=color.original_hex,
                suggested_hex=ref.hex,
                suggested_reference=ref,
                reason=(
                    f"가장 가까운 CUD 추천색「{ref.display_name(lang)}」으로 바꾸는 걸 추천해 "
                    f"(ΔE={color.delta_e:.3f}, {phrase})"
                ),
            )
        )
    return results
