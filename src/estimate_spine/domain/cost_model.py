"""
Cost model: (Size, Risk) -> estimated effort in working days.

The table is a fixed 5 x 4 grid. Rows are sizes, columns are risks; risk
multiplies the uncertainty of an item of a given size, so the SEVERE column
grows faster than the others. Values are decimal literals shared with the
numbers already stored on the board, which is why estimates are compared
with exact equality downstream.

    ┌──────┬───────┬───────┬───────┬────────┐
    │ Size │  LOW  │  MID  │ HIGH  │ SEVERE │
    ├──────┼───────┼───────┼───────┼────────┤
    │ XS   │  0.5  │   1   │  1.5  │    4   │
    │ S    │   2   │   3   │  4.5  │   12   │
    │ M    │   4   │   5   │  7.5  │   20   │
    │ L    │  7.5  │  10   │  15   │   40   │
    │ XL   │  15   │  20   │  30   │   80   │
    └──────┴───────┴───────┴───────┴────────┘
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from estimate_spine.core.errors import InternalTableError
from estimate_spine.core.result import Err, Ok, Result
from estimate_spine.domain.codes import RiskCode, SizeCode, classify_risk, classify_size


def _row(low: float, mid: float, high: float, severe: float) -> Mapping[RiskCode, float]:
    return MappingProxyType({
        RiskCode.LOW: low,
        RiskCode.MID: mid,
        RiskCode.HIGH: high,
        RiskCode.SEVERE: severe,
    })


ESTIMATED_COST_IN_DAYS: Mapping[SizeCode, Mapping[RiskCode, float]] = MappingProxyType({
    SizeCode.XS: _row(0.5, 1, 1.5, 4),
    SizeCode.S: _row(2, 3, 4.5, 12),
    SizeCode.M: _row(4, 5, 7.5, 20),
    SizeCode.L: _row(7.5, 10, 15, 40),
    SizeCode.XL: _row(15, 20, 30, 80),
})


def validate_table(table: Mapping[SizeCode, Mapping[RiskCode, float]]) -> None:
    """Raise ``InternalTableError`` unless every (size, risk) cell holds a positive number."""
    for size in SizeCode:
        row = table.get(size)
        if row is None:
            raise InternalTableError(f"Cost table has no row for size {size.value}")
        for risk in RiskCode:
            days = row.get(risk)
            if days is None:
                raise InternalTableError(
                    f"Cost table has no cell for ({size.value}, {risk.value})"
                )
            if not days > 0:
                raise InternalTableError(
                    f"Cost table cell ({size.value}, {risk.value}) is not positive: {days!r}"
                )


class CostModel:
    """Table-driven estimate lookup.

    Stateless apart from the table it is built with; the default instance
    uses ``ESTIMATED_COST_IN_DAYS``.
    """

    def __init__(self, table: Mapping[SizeCode, Mapping[RiskCode, float]] = ESTIMATED_COST_IN_DAYS):
        validate_table(table)
        self._table = table

    def days_for(self, size: SizeCode, risk: RiskCode) -> float:
        """Exact table constant for an already classified pair."""
        return self._table[size][risk]

    def lookup(self, size_label: str, risk_label: str) -> Result[float]:
        """Compute the estimate for a pair of raw labels.

        The size is classified first; the risk is only looked at once the
        size is known to be valid.

        Returns:
            ``Ok(days)`` or ``Err(InvalidSizeError | InvalidRiskError)``
        """
        size_result = classify_size(size_label)
        if isinstance(size_result, Err):
            return Err(size_result.error)
        risk_result = classify_risk(risk_label)
        if isinstance(risk_result, Err):
            return Err(risk_result.error)
        return Ok(self.days_for(size_result.value, risk_result.value))

    def lookup_or_raise(self, size_label: str, risk_label: str) -> float:
        """Like ``lookup`` but raises the ``EvaluationError``."""
        return self.lookup(size_label, risk_label).unwrap()

    def rows(self) -> Iterator[tuple[SizeCode, dict[RiskCode, float]]]:
        """Yield ``(size, {risk: days})`` in table order."""
        for size in SizeCode:
            yield size, {risk: self._table[size][risk] for risk in RiskCode}


DEFAULT_COST_MODEL = CostModel()


__all__ = [
    "ESTIMATED_COST_IN_DAYS",
    "CostModel",
    "DEFAULT_COST_MODEL",
    "validate_table",
]
