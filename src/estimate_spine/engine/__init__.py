"""Reconciliation engine."""

from estimate_spine.engine.reconcile import Evaluation, ReconciliationEngine, reconcile

__all__ = ["Evaluation", "ReconciliationEngine", "reconcile"]
