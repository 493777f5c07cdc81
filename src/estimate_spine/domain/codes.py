"""
Size and Risk codes and their label classifiers.

Board items carry Size and Risk as free-text single-select labels with an
explanation after the code:

    Size: "Code (explanation)"   e.g. "XS (≤ 1 day)"
    Risk: "Code: explanation"    e.g. "Low: well-understood"

The classifiers take the text before the separator, trim it and upper-case
it, then match it against the enumerated codes. A label that does not match
is an expected branch, so it comes back as ``Err`` rather than raising.

STDLIB ONLY - NO PYDANTIC.
"""

from __future__ import annotations

from enum import Enum

from estimate_spine.core.errors import InvalidRiskError, InvalidSizeError
from estimate_spine.core.result import Err, Ok, Result

SIZE_SEPARATOR = "("
RISK_SEPARATOR = ":"


class SizeCode(str, Enum):
    """T-shirt size of a work item."""

    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"


class RiskCode(str, Enum):
    """Uncertainty attached to a work item."""

    LOW = "LOW"
    MID = "MID"
    HIGH = "HIGH"
    SEVERE = "SEVERE"


def label_key(label: str, separator: str) -> str:
    """Return the upper-cased, trimmed text before the first ``separator``."""
    return label.split(separator, 1)[0].strip().upper()


def classify_size(label: str) -> Result[SizeCode]:
    """Classify a Size label.

    >>> classify_size("xs(whatever)").unwrap()
    <SizeCode.XS: 'XS'>
    >>> classify_size("Tiny (< 1h)").is_err()
    True
    """
    key = label_key(label, SIZE_SEPARATOR)
    try:
        return Ok(SizeCode(key))
    except ValueError:
        return Err(InvalidSizeError(label, key))


def classify_risk(label: str) -> Result[RiskCode]:
    """Classify a Risk label.

    >>> classify_risk("High: significant unknowns").unwrap()
    <RiskCode.HIGH: 'HIGH'>
    """
    key = label_key(label, RISK_SEPARATOR)
    try:
        return Ok(RiskCode(key))
    except ValueError:
        return Err(InvalidRiskError(label, key))


__all__ = [
    "SizeCode",
    "RiskCode",
    "label_key",
    "classify_size",
    "classify_risk",
]
