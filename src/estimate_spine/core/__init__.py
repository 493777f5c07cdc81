"""Core primitives: errors, results, logging and settings."""

from estimate_spine.core.errors import (
    ConfigError,
    ErrorCategory,
    ErrorContext,
    EvaluationError,
    FetchError,
    FieldNotFoundError,
    GraphQLError,
    InvalidConfigError,
    InvalidRiskError,
    InvalidSizeError,
    MissingConfigError,
    NetworkError,
    ProjectNotFoundError,
    RemoteLookupError,
    SpineError,
    TransportError,
    UpdateError,
)
from estimate_spine.core.result import Err, Ok, Result

__all__ = [
    "ConfigError",
    "ErrorCategory",
    "ErrorContext",
    "EvaluationError",
    "FetchError",
    "FieldNotFoundError",
    "GraphQLError",
    "InvalidConfigError",
    "InvalidRiskError",
    "InvalidSizeError",
    "MissingConfigError",
    "NetworkError",
    "ProjectNotFoundError",
    "RemoteLookupError",
    "SpineError",
    "TransportError",
    "UpdateError",
    "Err",
    "Ok",
    "Result",
]
