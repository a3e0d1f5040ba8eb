from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from color_metrics.anchor import create_anchor
from color_metrics.optimizer_cache import OptimizationCache, cache_key, optimize_palette_with_cache
from config import DEFAULT_CONFIG, OptimizationOptions
from errors import InvalidParameterError

ANCHOR = create_anchor("#FF2800")


def test_cache_hit_returns_fresh_copy():
    cache = OptimizationCache()
    first = optimize_palette_with_cache(["#FF2800", "#123456"], ANCHOR, None, cache)
    second = optimize_palette_with_cache(["#FF2800", "#123456"], ANCHOR, None, cache)
    assert len(cache) == 1
    assert second is not first
    assert second.palette == first.palette
    assert second.objective_value == first.objective_value


def test_cache_key_depends_on_options_and_lang():
    colors = ["#FF2800"]
    base = cache_key(colors, ANCHOR, DEFAULT_CONFIG)
    assert base != cache_key(colors, ANCHOR, OptimizationOptions(mode="strict"))
    assert base != cache_key(colors, ANCHOR, DEFAULT_CONFIG, lang="en")
    assert base != cache_key(["#35A16B"], ANCHOR, DEFAULT_CONFIG)
    assert base == cache_key(colors, ANCHOR, OptimizationOptions())


def test_cache_evicts_oldest_entry():
    cache = OptimizationCache(max_size=2)
    for colors in (["#FF2800"], ["#35A16B"], ["#0041FF"]):
        optimize_palette_with_cache(colors, ANCHOR, None, cache)
    assert len(cache) == 2
    assert cache_key(["#FF2800"], ANCHOR, DEFAULT_CONFIG) not in cache
    assert cache_key(["#0041FF"], ANCHOR, DEFAULT_CONFIG) in cache


def test_cache_clear():
    cache = OptimizationCache()
    optimize_palette_with_cache(["#FF2800"], ANCHOR, None, cache)
    cache.clear()
    assert len(cache) == 0


def test_cache_size_must_be_positive():
    with pytest.raises(InvalidParameterError):
        OptimizationCache(max_size=0)


def test_hex_case_shares_one_entry():
    cache = OptimizationCache()
    first = optimize_palette_with_cache(["#ff2800", "35a16b"], ANCHOR, None, cache)
    second = optimize_palette_with_cache(["#FF2800", "#35A16B"], ANCHOR, None, cache)
    assert len(cache) == 1
    assert second.palette == first.palette
    assert cache_key(["#ff2800"], ANCHOR, DEFAULT_CONFIG) == cache_key(["#FF2800"], ANCHOR, DEFAULT_CONFIG)
