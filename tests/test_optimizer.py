from pathlib import Path
from types import SimpleNamespace
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from color_metrics.anchor import create_anchor
from color_metrics.harmony import harmony_score
from color_metrics.optimizer import calculate_objective, compliance_rate, optimize_palette
from config import OptimizationOptions, ZoneThresholds
from errors import EmptyInputError, InvalidColorError, InvalidParameterError

ANCHOR = create_anchor("#FF2800")
MIXED = ["#FF2800", "#123456", "#006D6F"]


def test_empty_candidates_rejected():
    with pytest.raises(EmptyInputError):
        optimize_palette([], ANCHOR)


def test_invalid_candidate_rejected_before_work():
    with pytest.raises(InvalidColorError):
        optimize_palette(["#FF2800", "bad"], ANCHOR)


@pytest.mark.parametrize(
    "options",
    [
        OptimizationOptions(mode="prefer"),
        OptimizationOptions(lambda_=-0.1),
        OptimizationOptions(thresholds=ZoneThresholds(0.2, 0.1)),
        OptimizationOptions(return_factor=1.5),
    ],
)
def test_invalid_options_rejected(options):
    with pytest.raises(InvalidParameterError):
        optimize_palette(["#FF2800"], ANCHOR, options)


def test_strict_reference_color_is_unchanged_but_marked_snapped():
    result = optimize_palette(["#FF2800"], ANCHOR, OptimizationOptions(mode="strict"))
    color = result.palette[0]
    assert color.hex == "#FF2800"
    assert color.snapped is True
    assert color.zone == "safe"
    assert color.derivation.type == "strict-snap"


def test_strict_mode_has_no_off_zone_feedback():
    result = optimize_palette(MIXED, ANCHOR, OptimizationOptions(mode="strict"))
    assert [c.hex for c in result.palette] == [c.reference.hex for c in result.palette]
    assert result.warnings == []
    assert result.alternatives == []
    assert result.off_zone_count == 0
    # 준수율은 스냅 전 존 기준
    assert result.compliance_rate == pytest.approx(100.0 / 3.0)


def test_soft_mode_reports_off_zone_colors():
    result = optimize_palette(MIXED, ANCHOR)
    zones = [c.zone for c in result.palette]
    assert zones == ["safe", "off", "off"]
    assert result.compliance_rate == pytest.approx(100.0 / 3.0)
    assert result.off_zone_count == 2
    assert len(result.warnings) == 3
    assert "2개" in result.warnings[0]
    assert result.warnings[1].startswith("#123456: Off Zone")
    assert [a.original_hex for a in result.alternatives] == ["#123456", "#006D6F"]
    for alt, color in zip(result.alternatives, result.palette[1:]):
        assert alt.suggested_hex == color.reference.hex


def test_palette_order_and_suggested_ids():
    result = optimize_palette(["#ff2800", "#35a16b", "#0041ff"], ANCHOR)
    assert [c.original_hex for c in result.palette] == ["#FF2800", "#35A16B", "#0041FF"]
    assert [c.brand_token.suggested_id for c in result.palette] == [
        "brand-color-1",
        "brand-color-2",
        "brand-color-3",
    ]
    record = result.palette[1].brand_token.reference
    assert record.token_id == "green"
    assert record.zone == "safe"


def test_objective_matches_formula():
    result = optimize_palette(MIXED, ANCHOR, OptimizationOptions(lambda_=0.7))
    expected = sum(c.delta_e for c in result.palette) + 0.7 * (1 - result.harmony.total / 100)
    assert result.objective_value == pytest.approx(expected)
    assert result.processing_time_ms >= 0


def test_calculate_objective():
    palette = [SimpleNamespace(delta_e=0.05), SimpleNamespace(delta_e=0.05)]
    assert calculate_objective(palette, 100.0, 0.5) == pytest.approx(0.1)
    assert calculate_objective(palette, 80.0, 0.5) == pytest.approx(0.2)
    assert calculate_objective(palette, 10.0, 0.0) == pytest.approx(0.1)


def test_compliance_rate():
    palette = [SimpleNamespace(zone=z) for z in ("safe", "warning", "off", "off")]
    assert compliance_rate(palette) == pytest.approx(50.0)
    assert compliance_rate([]) == 0.0


def test_harmony_uses_anchor_effective_color():
    anchor = create_anchor("#FF0000")
    assert anchor.effective_hex == "#FF2800"
    result = optimize_palette(["#35A16B"], anchor)
    hexes = [c.hex for c in result.palette]
    assert result.harmony == harmony_score(anchor.effective_hex, hexes)
    assert result.harmony.total != harmony_score(anchor.original_hex, hexes).total


def test_brand_priority_anchor_scores_against_original():
    anchor = create_anchor("#123456")
    result = optimize_palette(["#FF2800"], anchor)
    assert anchor.effective_hex == "#123456"
    assert result.harmony == harmony_score("#123456", ["#FF2800"])


def test_english_messages():
    result = optimize_palette(["#123456"], ANCHOR, lang="en")
    assert "Off Zone" in result.palette[0].explanation
