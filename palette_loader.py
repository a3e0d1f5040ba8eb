"""CUD 추천색 카탈로그 로딩/탐색 유틸"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import numpy as np

from color_metrics.delta_e import delta_e_ok_many
from color_utils import hex_to_oklab, normalize_hex, oklab_to_oklch, rgb_to_hex
from config import DEFAULT_CATALOGUE_ID, LOGGER_NAME, MATCH_CLASS_THRESHOLDS, PALETTE_DIR
from errors import EmptyInputError

logger = logging.getLogger(LOGGER_NAME)

GROUPS = ("accent", "base", "neutral")


@dataclass(frozen=True)
class ReferenceColor:
    id: str
    group: str
    name_ko: str
    name_en: str
    name_ja: str
    hex: str
    rgb: Tuple[int, int, int]
    oklab: Tuple[float, float, float]
    oklch: Tuple[float, float, float]

    def display_name(self, lang: str = "ko") -> str:
        return {"ko": self.name_ko, "en": self.name_en, "ja": self.name_ja}.get(lang, self.name_en)


@dataclass(frozen=True)
class NearestMatch:
    reference: ReferenceColor
    distance: float
    match_class: str


def match_class_for(distance: float) -> str:
    """카탈로그 매치 등급. 존 분류(zone.classify)와 섞어 쓰지 않는다."""
    if distance <= MATCH_CLASS_THRESHOLDS["exact"]:
        return "exact"
    if distance <= MATCH_CLASS_THRESHOLDS["near"]:
        return "near"
    if distance <= MATCH_CLASS_THRESHOLDS["moderate"]:
        return "moderate"
    return "off"


def make_reference_color(id: str, group: str, names: Dict[str, str], rgb) -> ReferenceColor:
    r, g, b = (int(v) for v in rgb)
    hex_color = rgb_to_hex(r, g, b)
    lab = hex_to_oklab(hex_color)
    return ReferenceColor(
        id=id,
        group=group,
        name_ko=names.get("ko", id),
        name_en=names.get("en", id),
        name_ja=names.get("ja", id),
        hex=hex_color,
        rgb=(r, g, b),
        oklab=tuple(float(v) for v in lab),
        oklch=oklab_to_oklch(lab),
    )


class ReferenceCatalogue:
    """고정된 추천색 목록과 최근접 탐색. 생성 후 변경하지 않는다."""

    def __init__(self, catalogue_id: str, display_name: str, colors: Iterable[ReferenceColor]):
        self.catalogue_id = catalogue_id
        self.display_name = display_name
        self._colors: Tuple[ReferenceColor, ...] = tuple(colors)
        if not self._colors:
            raise EmptyInputError("카탈로그에 색상이 없어.")
        self._labs = np.array([c.oklab for c in self._colors], dtype=float)
        self._labs.setflags(write=False)
        self._by_id = {c.id: c for c in self._colors}

    def __len__(self) -> int:
        return len(self._colors)

    @property
    def colors(self) -> Tuple[ReferenceColor, ...]:
        return self._colors

    def by_group(self, group: str) -> List[ReferenceColor]:
        return [c for c in self._colors if c.group == group]

    def get(self, reference_id: str) -> ReferenceColor:
        return self._by_id[reference_id]

    def find_exact(self, hex_color: str) -> Optional[ReferenceColor]:
        target = normalize_hex(hex_color)
        for color in self._colors:
            if color.hex == target:
                return color
        return None

    def distances(self, hex_color: str) -> np.ndarray:
        return delta_e_ok_many(hex_to_oklab(hex_color), self._labs)

    def nearest(self, hex_color: str) -> NearestMatch:
        dists = self.distances(hex_color)
        idx = int(np.argmin(dists))
        dist = float(dists[idx])
        return NearestMatch(reference=self._colors[idx], distance=dist, match_class=match_class_for(dist))

    def nearest_excluding(self, hex_color: str, used_ids) -> Optional[NearestMatch]:
        """used_ids에 없는 것 중 최근접. 전부 사용됐으면 None."""
        dists = self.distances(hex_color)
        best = None
        best_dist = float("inf")
        for color, dist in zip(self._colors, dists):
            if color.id in used_ids:
                continue
            if dist < best_dist:
                best = color
                best_dist = float(dist)
        if best is None:
            return None
        return NearestMatch(reference=best, distance=best_dist, match_class=match_class_for(best_dist))


class CatalogueRepository:
    def __init__(self, base_dir: Path):
        self.base_dir = base_dir
        self._cache: Dict[str, ReferenceCatalogue] = {}

    def list_catalogues(self) -> List[str]:
        return sorted(p.stem for p in self.base_dir.glob("*.json"))

    def load(self, catalogue_id: str = DEFAULT_CATALOGUE_ID) -> ReferenceCatalogue:
        if catalogue_id in self._cache:
            return self._cache[catalogue_id]
        path = self.base_dir / f"{catalogue_id}.json"
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
        colors: List[ReferenceColor] = []
        for group_name in GROUPS:
            for c in raw["groups"].get(group_name, []):
                colors.append(make_reference_color(c["id"], group_name, c.get("names", {}), c["rgb"]))
        catalogue = ReferenceCatalogue(raw["catalogue_id"], raw["display_name"], colors)
        logger.info("[정보] 카탈로그 로드: %s (%d색)", catalogue.catalogue_id, len(catalogue))
        self._cache[catalogue_id] = catalogue
        return catalogue


REPO = CatalogueRepository(PALETTE_DIR)


def default_catalogue() -> ReferenceCatalogue:
    return REPO.load(DEFAULT_CATALOGUE_ID)
