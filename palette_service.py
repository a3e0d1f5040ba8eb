"""앵커 + 최적화를 묶은 상위 API

결과 형태가 둘이라 이름이 다른 두 함수로 나눴다.

- process_palette: 최적화된 팔레트
- process_palette_tokens: 브랜드 토큰 ID와 사용한 추천색 참조까지 포함
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Set, Tuple

from brand_tokens import BrandToken, migrate_optimized_colors
from color_metrics.anchor import AnchorState, create_anchor
from color_metrics.optimizer import OptimizationResult, optimize_palette
from color_metrics.optimizer_cache import OptimizationCache, optimize_palette_with_cache
from config import OptimizationOptions
from palette_loader import ReferenceColor


@dataclass(frozen=True)
class PaletteResult:
    anchor: AnchorState
    optimization: OptimizationResult


@dataclass(frozen=True)
class BrandTokenPaletteResult:
    anchor: AnchorState
    optimization: OptimizationResult
    brand_tokens: List[BrandToken]
    references_used: Tuple[ReferenceColor, ...]


def _run(
    candidates: Sequence[str],
    anchor_hex: str,
    options: Optional[OptimizationOptions],
    cache: Optional[OptimizationCache],
    lang: str,
) -> Tuple[AnchorState, OptimizationResult]:
    anchor = create_anchor(anchor_hex)
    if cache is not None:
        return anchor, optimize_palette_with_cache(candidates, anchor, options, cache, lang=lang)
    return anchor, optimize_palette(candidates, anchor, options, lang=lang)


def process_palette(
    candidates: Sequence[str],
    anchor_hex: str,
    options: Optional[OptimizationOptions] = None,
    cache: Optional[OptimizationCache] = None,
    lang: str = "ko",
) -> PaletteResult:
    anchor, optimization = _run(candidates, anchor_hex, options, cache, lang)
    return PaletteResult(anchor=anchor, optimization=optimization)


def process_palette_tokens(
    candidates: Sequence[str],
    anchor_hex: str,
    options: Optional[OptimizationOptions] = None,
    namespace: Optional[str] = None,
    roles: Optional[Sequence[str]] = None,
    used_ids: Optional[Set[str]] = None,
    cache: Optional[OptimizationCache] = None,
    lang: str = "ko",
) -> BrandTokenPaletteResult:
    anchor, optimization = _run(candidates, anchor_hex, options, cache, lang)
    # 호출자의 used_ids는 건드리지 않는다
    existing = set(used_ids) if used_ids else set()
    migration = migrate_optimized_colors(optimization.palette, brand_prefix=namespace, roles=roles, used_ids=existing)

    seen = set()
    references: List[ReferenceColor] = []
    for color in optimization.palette:
        if color.reference.id not in seen:
            seen.add(color.reference.id)
            references.append(color.reference)

    return BrandTokenPaletteResult(
        anchor=anchor,
        optimization=optimization,
        brand_tokens=migration.brand_tokens,
        references_used=tuple(references),
    )
