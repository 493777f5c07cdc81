"""Domain types and the cost model. STDLIB ONLY."""

from estimate_spine.domain.codes import RiskCode, SizeCode, classify_risk, classify_size
from estimate_spine.domain.cost_model import DEFAULT_COST_MODEL, ESTIMATED_COST_IN_DAYS, CostModel
from estimate_spine.domain.models import (
    FieldDescriptor,
    ItemOutcome,
    ItemResult,
    ProjectFields,
    RunReport,
    RunStatistics,
    WorkItem,
)

__all__ = [
    "RiskCode",
    "SizeCode",
    "classify_risk",
    "classify_size",
    "CostModel",
    "DEFAULT_COST_MODEL",
    "ESTIMATED_COST_IN_DAYS",
    "FieldDescriptor",
    "ItemOutcome",
    "ItemResult",
    "ProjectFields",
    "RunReport",
    "RunStatistics",
    "WorkItem",
]
