"""Core infrastructure shared across the character builder."""

from .error_handling import (
    BaseError,
    ConfigurationError,
    ErrorCategory,
    ErrorSeverity,
    ValidationError,
)

__all__ = [
    "BaseError",
    "ConfigurationError",
    "ErrorCategory",
    "ErrorSeverity",
    "ValidationError",
]
