"""최적화 결과 캐시 (호출자가 소유)"""
from __future__ import annotations

import logging
import time
from collections import OrderedDict
from dataclasses import replace
from typing import Optional, Sequence

from color_metrics.anchor import AnchorState
from color_metrics.optimizer import OptimizationResult, optimize_palette
from color_utils import normalize_hex
from config import CACHE_MAX_SIZE, DEFAULT_CONFIG, LOGGER_NAME, OptimizationOptions
from errors import InvalidParameterError

logger = logging.getLogger(LOGGER_NAME)


def cache_key(candidates: Sequence[str], anchor: AnchorState, options: OptimizationOptions, lang: str = "ko") -> str:
    palette_part = ",".join(normalize_hex(c) for c in candidates)
    anchor_part = f"{anchor.original_hex}:{anchor.effective_hex}:{anchor.priority}"
    t = options.thresholds
    options_part = "|".join(
        [
            f"mode:{options.mode}",
            f"lambda:{options.lambda_}",
            f"rf:{options.return_factor}",
            f"safe:{t.safe_max}",
            f"warn:{t.warning_max}",
            f"lang:{lang}",
        ]
    )
    return f"{palette_part}::{anchor_part}::{options_part}"


class OptimizationCache:
    """크기 제한 캐시. 가득 차면 가장 먼저 넣은 항목부터 버린다."""

    def __init__(self, max_size: int = CACHE_MAX_SIZE):
        if max_size < 1:
            raise InvalidParameterError(f"캐시 크기는 1 이상이어야 해: {max_size}")
        self.max_size = max_size
        self._entries: "OrderedDict[str, OptimizationResult]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def clear(self) -> None:
        self._entries.clear()

    def get(self, key: str) -> Optional[OptimizationResult]:
        return self._entries.get(key)

    def set(self, key: str, result: OptimizationResult) -> None:
        # 같은 키를 다시 넣으면 가장 최근 삽입으로 취급
        self._entries.pop(key, None)
        self._entries[key] = result
        while len(self._entries) > self.max_size:
            self._entries.popitem(last=False)


def optimize_palette_with_cache(
    candidates: Sequence[str],
    anchor: AnchorState,
    options: OptimizationOptions | None,
    cache: OptimizationCache,
    lang: str = "ko",
) -> OptimizationResult:
    start = time.perf_counter()
    opts = options or DEFAULT_CONFIG
    key = cache_key(list(candidates), anchor, opts, lang)
    cached = cache.get(key)
    if cached is not None:
        logger.debug("[정보] 최적화 캐시 적중 (%d/%d)", len(cache), cache.max_size)
        return replace(cached, processing_time_ms=(time.perf_counter() - start) * 1000.0)

    logger.debug("[정보] 최적화 캐시 미스")
    result = optimize_palette(candidates, anchor, opts, lang=lang)
    cache.set(key, result)
    return result
