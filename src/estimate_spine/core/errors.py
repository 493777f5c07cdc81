"""
Structured error types for estimate-spine.

Provides a typed hierarchy of errors with metadata for categorisation,
logging and root cause analysis through error chaining. The hierarchy is
split along one line that matters to the reconciliation run: errors that
abort the whole run (configuration, remote lookup, fetch) and errors that
are recovered at the per-item boundary (evaluation, update).

Manifesto:
    - **Typed Error Hierarchy:** Different error types for different phases
    - **Fatal vs recoverable is a type:** ``fatal`` is a class attribute
    - **Rich Context:** Errors carry item and project metadata for logging
    - **Error Chaining:** Preserve original exceptions while adding context

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────────┐
        │                       SpineError                                 │
        │  (category, fatal, context, cause)                               │
        ├─────────────────────────────────────────────────────────────────┤
        │                                                                  │
        │  ConfigError        RemoteLookupError     TransportError         │
        │  (CONFIG, fatal)    (SOURCE, fatal)       (NETWORK)              │
        │       │                  │                     │                 │
        │  MissingConfig      ProjectNotFound       NetworkError           │
        │  InvalidConfig      FieldNotFound         GraphQLError           │
        │                                                                  │
        │  FetchError         EvaluationError       UpdateError            │
        │  (SOURCE, fatal)    (VALIDATION)          (SOURCE)               │
        │                          │                                       │
        │                     InvalidSize                                  │
        │                     InvalidRisk                                  │
        └─────────────────────────────────────────────────────────────────┘

Examples:
    Adding context to an error:

    >>> error = UpdateError("mutation failed")
    >>> error.with_context(item_id="PVTI_1", item_title="Fix login")
    UpdateError('mutation failed', category=SOURCE)
    >>> error.context.item_id
    'PVTI_1'

    Chaining errors for root cause:

    >>> try:
    ...     raise ConnectionError("DNS failure")
    ... except ConnectionError as e:
    ...     raise FetchError("Failed to read page", cause=e)
    Traceback (most recent call last):
    ...
    FetchError: Failed to read page

Guardrails:
    ❌ DON'T: Raise EvaluationError out of the per-item loop
    ✅ DO: Carry it in an ``Err`` and record it on the item result

    ❌ DON'T: Swallow the original transport exception
    ✅ DO: Pass it as cause= when wrapping

Tags:
    error-handling, exception-hierarchy, error-context, estimate-spine
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and log routing."""

    NETWORK = "NETWORK"           # Connection, timeout, DNS
    SOURCE = "SOURCE"             # Remote board lookups and writes
    PARSE = "PARSE"               # Malformed responses
    VALIDATION = "VALIDATION"     # Unknown Size/Risk codes
    CONFIG = "CONFIG"             # Missing or invalid settings
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata context for errors.

    Typed fields cover the metadata the reconciliation run knows about
    (project, item, field, request); anything else goes into ``metadata``.
    ``to_dict()`` serialises only the fields that are set.

    Examples:
        >>> ctx = ErrorContext(item_id="PVTI_1", field_name="Days Estimate")
        >>> ctx.to_dict()
        {'item_id': 'PVTI_1', 'field_name': 'Days Estimate'}
    """

    # Board context
    project_id: str | None = None
    item_id: str | None = None
    item_title: str | None = None
    field_name: str | None = None

    # Request context
    url: str | None = None
    http_status: int | None = None

    # Additional metadata
    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["project_id", "item_id", "item_title", "field_name",
                    "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class SpineError(Exception):
    """
    Base exception for all estimate-spine errors.

    Every SpineError carries:
    - **category:** ErrorCategory for classification
    - **fatal:** whether the error aborts the whole reconciliation run
    - **context:** ErrorContext with structured metadata
    - **cause:** optional underlying exception, also set as ``__cause__``

    Subclasses set ``default_category`` and ``default_fatal``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_fatal: bool = True

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        fatal: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.fatal = fatal if fatal is not None else self.default_fatal
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> SpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise UpdateError("Failed").with_context(
                item_id="PVTI_1",
                project_id="PVT_1",
            )
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Serialise for structured logging."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "fatal": self.fatal,
        }
        context = self.context.to_dict()
        if context:
            result["context"] = context
        if self.cause is not None:
            result["cause"] = f"{type(self.cause).__name__}: {self.cause}"
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIG ERRORS
# =============================================================================


class ConfigError(SpineError):
    """A required setting is missing or malformed. Raised before the run starts."""

    default_category = ErrorCategory.CONFIG
    default_fatal = True


class MissingConfigError(ConfigError):
    """Required configuration is missing."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(message or f"`{key}` is missing.")


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"`{key}` is invalid: {value!r}.")


# =============================================================================
# TRANSPORT ERRORS
# =============================================================================


class TransportError(SpineError):
    """
    A GraphQL call failed below the board semantics.

    The gateway decides whether this is fatal (item listing) or recoverable
    (single update) by wrapping it.
    """

    default_category = ErrorCategory.NETWORK


class NetworkError(TransportError):
    """Connection, timeout or non-2xx HTTP status."""

    pass


class GraphQLError(TransportError):
    """The endpoint answered, but the response carries ``errors`` or is not valid JSON."""

    default_category = ErrorCategory.PARSE

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        super().__init__(message, **kwargs)
        self.errors = errors or []

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.errors:
            result["errors"] = self.errors
        return result


# =============================================================================
# REMOTE LOOKUP ERRORS
# =============================================================================


class RemoteLookupError(SpineError):
    """Identifier resolution could not locate the project or target field."""

    default_category = ErrorCategory.SOURCE
    default_fatal = True


class ProjectNotFoundError(RemoteLookupError):
    """The owner/project lookup returned no usable project data."""

    def __init__(self, owner_type: str, owner_name: str, project_number: int, **kwargs: Any):
        self.owner_type = owner_type
        self.owner_name = owner_name
        self.project_number = project_number
        super().__init__(
            f"Project #{project_number} not found for {owner_type} '{owner_name}'.",
            **kwargs,
        )


class FieldNotFoundError(RemoteLookupError):
    """The target field is absent from the project's field list."""

    def __init__(self, field_name: str, **kwargs: Any):
        self.field_name = field_name
        super().__init__(f'Field "{field_name}" not found', **kwargs)
        self.context.field_name = field_name


# =============================================================================
# FETCH / UPDATE ERRORS
# =============================================================================


class FetchError(SpineError):
    """
    Paginated item retrieval failed.

    Always fatal: pagination state is lost mid-stream, so a partial item
    list is never processed.
    """

    default_category = ErrorCategory.SOURCE
    default_fatal = True


class UpdateError(SpineError):
    """The estimate mutation failed for a single item."""

    default_category = ErrorCategory.SOURCE
    default_fatal = False


# =============================================================================
# EVALUATION ERRORS
# =============================================================================


class EvaluationError(SpineError):
    """An item's Size/Risk label does not parse to a known code."""

    default_category = ErrorCategory.VALIDATION
    default_fatal = False

    def __init__(self, message: str, *, label: str | None = None, key: str | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.label = label
        self.key = key

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["label"] = self.label
        result["key"] = self.key
        return result


class InvalidSizeError(EvaluationError):
    """The Size label's code is not one of XS, S, M, L, XL."""

    def __init__(self, label: str | None, key: str | None, **kwargs: Any):
        super().__init__(
            f'Invalid Size specifier: original value: "{label}"; key: "{key}".',
            label=label,
            key=key,
            **kwargs,
        )


class InvalidRiskError(EvaluationError):
    """The Risk label's code is not one of Low, Mid, High, Severe."""

    def __init__(self, label: str | None, key: str | None, **kwargs: Any):
        super().__init__(
            f'Invalid Risk specifier: original value: "{label}"; key: "{key}".',
            label=label,
            key=key,
            **kwargs,
        )


class InternalTableError(SpineError):
    """The cost table is missing a cell. A defect in the table, never an item error."""

    default_category = ErrorCategory.INTERNAL
    default_fatal = True


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "SpineError",
    "ConfigError",
    "MissingConfigError",
    "InvalidConfigError",
    "TransportError",
    "NetworkError",
    "GraphQLError",
    "RemoteLookupError",
    "ProjectNotFoundError",
    "FieldNotFoundError",
    "FetchError",
    "UpdateError",
    "EvaluationError",
    "InvalidSizeError",
    "InvalidRiskError",
    "InternalTableError",
]
