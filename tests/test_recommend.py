from pathlib import Path
from types import SimpleNamespace
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from color_metrics.recommend import off_zone_warnings, suggest_reference_alternatives
from palette_loader import default_catalogue

catalogue = default_catalogue()


def _off(hex_color):
    match = catalogue.nearest(hex_color)
    return SimpleNamespace(original_hex=hex_color, delta_e=match.distance, reference=match.reference)


def test_no_warnings_for_empty_list():
    assert off_zone_warnings([]) == []
    assert suggest_reference_alternatives([]) == []


def test_warnings_have_summary_and_one_line_per_color():
    colors = [_off("#123456"), _off("#006D6F")]
    warnings = off_zone_warnings(colors)
    assert len(warnings) == 3
    assert warnings[0].startswith("CUD 비준수 색이 2개")
    assert warnings[2].startswith("#006D6F: Off Zone (ΔE=")


def test_alternative_points_at_nearest_reference():
    color = _off("#123456")
    [alt] = suggest_reference_alternatives([color])
    assert alt.suggested_hex == color.reference.hex
    assert alt.suggested_reference is color.reference
    assert color.reference.display_name("ko") in alt.reason
    assert f"{color.delta_e:.3f}" in alt.reason
