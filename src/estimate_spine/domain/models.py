"""
Domain models for the estimate reconciliation run.

Plain dataclasses; no pydantic here. ``WorkItem`` is what the gateway hands
the engine, ``ItemResult`` is what the engine records for every item, and
``RunReport`` aggregates the run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from estimate_spine.core.errors import SpineError

NO_TITLE = "<no title>"


@dataclass(frozen=True)
class FieldDescriptor:
    """A project field as the remote identifies it."""

    id: str
    name: str


@dataclass(frozen=True)
class ProjectFields:
    """Identifiers resolved once per run."""

    project_id: str
    estimate_field: FieldDescriptor


@dataclass(frozen=True)
class WorkItem:
    """
    One item attached to the project.

    ``size_label``, ``risk_label`` and ``current_estimate`` are ``None`` when
    the item has no value for the corresponding field.
    """

    id: str
    title: str = NO_TITLE
    size_label: str | None = None
    risk_label: str | None = None
    current_estimate: float | None = None

    @property
    def has_size(self) -> bool:
        return bool(self.size_label)

    @property
    def has_risk(self) -> bool:
        return bool(self.risk_label)

    @property
    def has_estimate(self) -> bool:
        return self.current_estimate is not None


class ItemOutcome(str, Enum):
    """Terminal state of one item in a run."""

    MISSING_SIZE = "missing_size"
    MISSING_RISK = "missing_risk"
    INVALID_CODE = "invalid_code"
    UNCHANGED = "unchanged"
    UPDATED = "updated"
    UPDATE_FAILED = "update_failed"
    WOULD_UPDATE = "would_update"

    @property
    def is_error(self) -> bool:
        return self in (ItemOutcome.INVALID_CODE, ItemOutcome.UPDATE_FAILED)

    @property
    def is_skip(self) -> bool:
        return self in (ItemOutcome.MISSING_SIZE, ItemOutcome.MISSING_RISK, ItemOutcome.UNCHANGED)


@dataclass(frozen=True)
class ItemResult:
    """What happened to one item."""

    item: WorkItem
    outcome: ItemOutcome
    computed: float | None = None
    error: SpineError | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "item_id": self.item.id,
            "title": self.item.title,
            "outcome": self.outcome.value,
            "size": self.item.size_label,
            "risk": self.item.risk_label,
            "current_estimate": self.item.current_estimate,
            "computed": self.computed,
        }
        if self.error is not None:
            result["error"] = self.error.message
        return result


@dataclass
class RunStatistics:
    """Counters for one run. Only ever incremented."""

    total: int = 0
    changed: int = 0
    errored: int = 0
    missing_size: int = 0
    missing_risk: int = 0
    unchanged: int = 0
    would_change: int = 0

    def record(self, outcome: ItemOutcome) -> None:
        self.total += 1
        if outcome is ItemOutcome.UPDATED:
            self.changed += 1
        elif outcome is ItemOutcome.WOULD_UPDATE:
            self.would_change += 1
        elif outcome.is_error:
            self.errored += 1
        elif outcome is ItemOutcome.MISSING_SIZE:
            self.missing_size += 1
        elif outcome is ItemOutcome.MISSING_RISK:
            self.missing_risk += 1
        elif outcome is ItemOutcome.UNCHANGED:
            self.unchanged += 1

    @property
    def skipped(self) -> int:
        return self.missing_size + self.missing_risk + self.unchanged

    def to_dict(self) -> dict[str, int]:
        return {
            "total": self.total,
            "changed": self.changed,
            "errored": self.errored,
            "skipped": self.skipped,
            "missing_size": self.missing_size,
            "missing_risk": self.missing_risk,
            "unchanged": self.unchanged,
            "would_change": self.would_change,
        }


@dataclass
class RunReport:
    """Statistics plus the per-item results, in gateway order."""

    project: ProjectFields
    statistics: RunStatistics = field(default_factory=RunStatistics)
    results: list[ItemResult] = field(default_factory=list)
    dry_run: bool = False

    def add(self, result: ItemResult) -> None:
        self.results.append(result)
        self.statistics.record(result.outcome)

    def to_dict(self, include_items: bool = False) -> dict[str, Any]:
        result: dict[str, Any] = {
            "project_id": self.project.project_id,
            "estimate_field": self.project.estimate_field.name,
            "dry_run": self.dry_run,
            "statistics": self.statistics.to_dict(),
        }
        if include_items:
            result["items"] = [r.to_dict() for r in self.results]
        return result


__all__ = [
    "NO_TITLE",
    "FieldDescriptor",
    "ProjectFields",
    "WorkItem",
    "ItemOutcome",
    "ItemResult",
    "RunStatistics",
    "RunReport",
]
