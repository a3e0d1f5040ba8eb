"""브랜드 토큰 ID 생성과 최적화 결과 변환"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Set

from color_metrics.optimizer import OptimizedColor, ReferenceRecord
from errors import InvalidParameterError

_SPACES_RE = re.compile(r"\s+")
_INVALID_RE = re.compile(r"[^a-z0-9-]")
_HYPHENS_RE = re.compile(r"-+")

DEFAULT_SHADE = 500


@dataclass(frozen=True)
class BrandToken:
    id: str
    hex: str
    reference: ReferenceRecord
    original_hex: Optional[str] = None
    source: str = "brand"


@dataclass
class MigrationResult:
    brand_tokens: List[BrandToken] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    unmigrated: List[str] = field(default_factory=list)


def sanitize(value: str) -> str:
    value = _SPACES_RE.sub("-", value.lower())
    value = _INVALID_RE.sub("", value)
    value = _HYPHENS_RE.sub("-", value)
    return value.strip("-")


def generate_brand_token_id(
    role: str,
    namespace: Optional[str] = None,
    shade: int = DEFAULT_SHADE,
    existing_ids: Optional[Set[str]] = None,
) -> str:
    """brand-{namespace}-{role}-{shade} 형식의 ID. 겹치면 -2, -3 ... 을 붙인다."""
    role_part = sanitize(role or "")
    if not role_part:
        raise InvalidParameterError(f"role이 비어 있어: {role!r}")
    parts = ["brand"]
    ns_part = sanitize(namespace) if namespace else ""
    if ns_part:
        parts.append(ns_part)
    parts.extend([role_part, str(shade)])
    base_id = "-".join(parts)

    if not existing_ids or base_id not in existing_ids:
        return base_id
    suffix = 2
    while f"{base_id}-{suffix}" in existing_ids:
        suffix += 1
    return f"{base_id}-{suffix}"


def _reference_of(color: OptimizedColor):
    """(record, inferred). 참조를 알 수 없으면 None."""
    brand_token = getattr(color, "brand_token", None)
    if brand_token is not None:
        return brand_token.reference, False
    reference = getattr(color, "reference", None)
    if reference is None:
        return None
    record = ReferenceRecord(
        token_id=reference.id,
        token_hex=reference.hex,
        delta_e=color.delta_e,
        derivation_type="soft-snap" if color.snapped else "reference",
        zone=color.zone,
    )
    return record, True


def migrate_optimized_colors(
    colors: Iterable[OptimizedColor],
    brand_prefix: Optional[str] = None,
    roles: Optional[Sequence[str]] = None,
    used_ids: Optional[Set[str]] = None,
) -> MigrationResult:
    """최적화된 색 목록을 브랜드 토큰 목록으로 바꾼다.

    used_ids를 주면 그 ID들과 겹치지 않게 만들고, 새로 만든 ID를 거기에 추가한다.
    """
    existing: Set[str] = used_ids if used_ids is not None else set()
    result = MigrationResult()
    converted = 0
    for color in colors:
        found = _reference_of(color)
        if found is None:
            result.unmigrated.append(color.hex)
            continue
        record, inferred = found
        if inferred:
            result.warnings.append(f"{color.hex}: 추천색 참조를 추정했어 (token_id: {record.token_id})")

        role = roles[converted] if roles and converted < len(roles) else f"color-{converted + 1}"
        token_id = generate_brand_token_id(role, namespace=brand_prefix, existing_ids=existing)
        existing.add(token_id)
        result.brand_tokens.append(
            BrandToken(id=token_id, hex=color.hex, reference=record, original_hex=color.original_hex)
        )
        converted += 1
    return result
