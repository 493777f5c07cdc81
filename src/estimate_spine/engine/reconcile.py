"""
Reconciliation engine: keep the estimate field in line with Size x Risk.

Manifesto:
    One bad item must never abort the run. The engine therefore has two
    kinds of failure and treats them differently:

    - **Fatal:** identifier resolution and the paginated fetch. These raise
      out of ``run()`` untouched.
    - **Per item:** unknown Size/Risk codes (``Err`` from the cost model)
      and failed updates (``UpdateError``). These become an ``ItemResult``
      with an error outcome, are logged and counted, and the loop continues.

Architecture:
    ::

        run()
          ├─ gateway.resolve_field_ids()        fatal
          ├─ gateway.fetch_all_items()          fatal
          └─ for item in items (remote order):
               evaluate(item)                    pure
                 ├─ MISSING_SIZE / MISSING_RISK  skip
                 ├─ INVALID_CODE                 error
                 ├─ UNCHANGED                    skip
                 └─ WOULD_UPDATE
                      └─ gateway.update_estimate()
                           ├─ UPDATED            changed += 1
                           └─ UPDATE_FAILED      error

    Every terminal state is reached in at most one attempt; nothing is
    retried. Estimates are compared with ``==``: the table constants and the
    stored numbers are the same decimal literals.

Usage:
    engine = ReconciliationEngine(gateway)
    report = await engine.run()
    report.statistics.changed

Tags:
    reconciliation, engine, per-item-isolation, estimate-spine
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Protocol

from estimate_spine.core.errors import EvaluationError, UpdateError
from estimate_spine.core.logging import LogContext, get_logger
from estimate_spine.core.result import Err
from estimate_spine.domain.cost_model import DEFAULT_COST_MODEL, CostModel
from estimate_spine.domain.models import (
    ItemOutcome,
    ItemResult,
    ProjectFields,
    RunReport,
    WorkItem,
)

logger = get_logger(__name__)


class Board(Protocol):
    """The gateway capabilities the engine depends on."""

    async def resolve_field_ids(self) -> ProjectFields: ...

    async def fetch_all_items(self, project_id: str) -> list[WorkItem]: ...

    async def update_estimate(self, project_id: str, item_id: str, field_id: str, value: float) -> str: ...


@dataclass(frozen=True)
class Evaluation:
    """Decision for one item before any write happens."""

    outcome: ItemOutcome
    computed: float | None = None
    error: EvaluationError | None = None

    @property
    def needs_update(self) -> bool:
        return self.outcome is ItemOutcome.WOULD_UPDATE


class ReconciliationEngine:
    """Runs one reconciliation pass over the target board.

    Args:
        gateway: board access (``BoardGateway`` in production)
        cost_model: estimate lookup, defaults to the fixed table
        dry_run: evaluate and report, but never issue an update
    """

    def __init__(
        self,
        gateway: Board,
        cost_model: CostModel = DEFAULT_COST_MODEL,
        *,
        dry_run: bool = False,
    ):
        self._gateway = gateway
        self._cost_model = cost_model
        self._dry_run = dry_run

    def evaluate(self, item: WorkItem) -> Evaluation:
        """Decide what should happen to ``item``. No I/O."""
        if not item.has_size:
            return Evaluation(ItemOutcome.MISSING_SIZE)
        if not item.has_risk:
            return Evaluation(ItemOutcome.MISSING_RISK)

        result = self._cost_model.lookup(item.size_label, item.risk_label)
        if isinstance(result, Err):
            return Evaluation(ItemOutcome.INVALID_CODE, error=result.error)

        computed = result.value
        if item.has_estimate and item.current_estimate == computed:
            return Evaluation(ItemOutcome.UNCHANGED, computed=computed)
        return Evaluation(ItemOutcome.WOULD_UPDATE, computed=computed)

    async def process_item(self, project: ProjectFields, item: WorkItem) -> ItemResult:
        """Evaluate ``item`` and write the estimate if it differs."""
        logger.info(
            "item_started",
            size=item.size_label or "<unspecified>",
            risk=item.risk_label or "<unspecified>",
            existing_estimate=item.current_estimate,
        )
        evaluation = self.evaluate(item)

        if evaluation.outcome is ItemOutcome.MISSING_SIZE:
            logger.info("item_skipped", reason="missing Size")
            return ItemResult(item, evaluation.outcome)
        if evaluation.outcome is ItemOutcome.MISSING_RISK:
            logger.info("item_skipped", reason="missing Risk")
            return ItemResult(item, evaluation.outcome)
        if evaluation.outcome is ItemOutcome.INVALID_CODE:
            logger.warning("item_error", error=evaluation.error.message)
            return ItemResult(item, evaluation.outcome, error=evaluation.error)

        logger.info(
            "item_evaluated",
            computed_estimate=evaluation.computed,
            existing_estimate=item.current_estimate,
            update_needed=evaluation.needs_update,
        )
        if not evaluation.needs_update:
            return ItemResult(item, ItemOutcome.UNCHANGED, computed=evaluation.computed)

        if self._dry_run:
            logger.info("item_update_skipped", reason="dry run", estimate=evaluation.computed)
            return ItemResult(item, ItemOutcome.WOULD_UPDATE, computed=evaluation.computed)

        try:
            await self._gateway.update_estimate(
                project.project_id,
                item.id,
                project.estimate_field.id,
                evaluation.computed,
            )
        except UpdateError as e:
            e.with_context(item_title=item.title, field_name=project.estimate_field.name)
            logger.warning("item_error", error=e.message, **e.context.to_dict())
            return ItemResult(item, ItemOutcome.UPDATE_FAILED, computed=evaluation.computed, error=e)

        logger.info("item_updated", estimate=evaluation.computed)
        return ItemResult(item, ItemOutcome.UPDATED, computed=evaluation.computed)

    async def run(self) -> RunReport:
        """Resolve ids, fetch the board, reconcile every item.

        Raises:
            RemoteLookupError, TransportError: identifier resolution failed
            FetchError: the item listing failed
        """
        with LogContext(run_id=uuid.uuid4().hex[:12]):
            project = await self._gateway.resolve_field_ids()
            items = await self._gateway.fetch_all_items(project.project_id)

            report = RunReport(project=project, dry_run=self._dry_run)
            with LogContext(project_id=project.project_id):
                for ordinal, item in enumerate(items, start=1):
                    with LogContext(item_number=ordinal, item_id=item.id, item_title=item.title):
                        report.add(await self.process_item(project, item))

            logger.info("run_finished", dry_run=self._dry_run, **report.statistics.to_dict())
            return report


async def reconcile(gateway: Board, *, dry_run: bool = False) -> RunReport:
    """Shortcut for ``ReconciliationEngine(gateway, dry_run=dry_run).run()``."""
    return await ReconciliationEngine(gateway, dry_run=dry_run).run()


__all__ = ["Board", "Evaluation", "ReconciliationEngine", "reconcile"]
