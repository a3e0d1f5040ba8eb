from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest

from color_metrics.zone import classify
from config import PALETTE_DIR
from palette_loader import CatalogueRepository, default_catalogue, match_class_for

catalogue = default_catalogue()


def test_catalogue_has_twenty_colors_in_three_groups():
    assert len(catalogue) == 20
    assert len(catalogue.by_group("accent")) == 9
    assert len(catalogue.by_group("base")) == 7
    assert len(catalogue.by_group("neutral")) == 4


def test_repository_lists_and_caches():
    repo = CatalogueRepository(PALETTE_DIR)
    assert "cud_v4" in repo.list_catalogues()
    assert repo.load("cud_v4") is repo.load("cud_v4")


def test_reference_hex_is_normalized():
    red = catalogue.get("red")
    assert red.hex == "#FF2800"
    assert red.rgb == (255, 40, 0)
    assert red.display_name("en") == "Red"


def test_nearest_exact_match():
    match = catalogue.nearest("#ff2800")
    assert match.reference.id == "red"
    assert match.distance == pytest.approx(0.0, abs=1e-9)
    assert match.match_class == "exact"


def test_find_exact_is_case_insensitive():
    assert catalogue.find_exact("#35a16b").id == "green"
    assert catalogue.find_exact("#35A16C") is None


@pytest.mark.parametrize(
    "distance, expected",
    [
        (0.0, "exact"),
        (0.03, "exact"),
        (0.031, "near"),
        (0.10, "near"),
        (0.15, "moderate"),
        (0.20, "moderate"),
        (0.21, "off"),
    ],
)
def test_match_class_ladder(distance, expected):
    assert match_class_for(distance) == expected


def test_match_class_and_zone_are_different_ladders():
    # 같은 거리라도 두 분류는 다르다
    assert match_class_for(0.08) == "near"
    assert classify(0.08) == "warning"
    assert match_class_for(0.15) == "moderate"
    assert classify(0.15) == "off"


def test_nearest_excluding_skips_used_and_exhausts():
    first = catalogue.nearest_excluding("#FF2800", set())
    assert first.reference.id == "red"
    second = catalogue.nearest_excluding("#FF2800", {"red"})
    assert second.reference.id != "red"
    all_ids = {c.id for c in catalogue.colors}
    assert catalogue.nearest_excluding("#FF2800", all_ids) is None


def test_catalogue_file_sits_next_to_sources():
    assert PALETTE_DIR == ROOT / "palettes"
    assert (PALETTE_DIR / "cud_v4.json").is_file()
