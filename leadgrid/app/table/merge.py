from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from leadgrid.app.infrastructure.logging.logger import get_logger, log_action

IS_DERIVED = "is_derived"
ORIGIN_ID = "origin_id"
ORIGIN = "origin"

ProjectionRule = Callable[[dict[str, Any]], dict[str, Any]]

logger = get_logger(__name__)


@dataclass(frozen=True)
class MergeInputs:
    secondary: Sequence[dict[str, Any]]
    rule: ProjectionRule


def project(
    primary: Iterable[dict[str, Any]],
    secondary: Iterable[dict[str, Any]],
    rule: ProjectionRule,
) -> list[dict[str, Any]]:
    """Union primary rows with secondary rows reshaped by ``rule``.

    Primary rows are copied and tagged as not derived. Each secondary row is
    passed to ``rule``; the projected row keeps the source ``id`` and carries a
    back-reference to the source row under ``ORIGIN``. The back-reference is
    for display only and is never used to recompute projected values.
    """
    merged = [_tag_primary(record) for record in primary]
    merged.extend(_project_one(source, rule) for source in secondary)

    collisions = find_identity_collisions(merged)
    if collisions:
        log_action(
            logger,
            module="merge",
            action="identity_collision",
            record_id=None,
            outcome="warning",
            ids=sorted(collisions, key=str),
        )
    return merged


def find_identity_collisions(records: Iterable[dict[str, Any]]) -> set[Any]:
    primary_ids = set()
    derived_ids = set()
    for record in records:
        (derived_ids if record.get(IS_DERIVED) else primary_ids).add(record.get("id"))
    return primary_ids & derived_ids


def record_key(record: dict[str, Any]) -> tuple[bool, Any]:
    """Targeting key for edit and delete: a primary and a derived row may share an id."""
    return bool(record.get(IS_DERIVED, False)), record.get("id")


def _tag_primary(record: dict[str, Any]) -> dict[str, Any]:
    tagged = dict(record)
    tagged[IS_DERIVED] = False
    tagged[ORIGIN_ID] = record.get("id")
    return tagged


def _project_one(source: dict[str, Any], rule: ProjectionRule) -> dict[str, Any]:
    projected = dict(rule(source))
    if projected.get("id") != source.get("id"):
        raise ValueError(f"Projection rule changed record identity: {source.get('id')!r} -> {projected.get('id')!r}")
    projected[IS_DERIVED] = True
    projected[ORIGIN_ID] = source.get("id")
    projected[ORIGIN] = source
    return projected
