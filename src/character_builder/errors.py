"""Errors raised by the selection engine."""

from typing import Any, Optional

from src.core.error_handling import BaseError, ErrorCategory, ErrorSeverity


class SelectionError(BaseError):
    """Base class for sampling and choice resolution failures."""

    def __init__(
        self,
        message: str,
        surface: Optional[str] = None,
        severity: ErrorSeverity = ErrorSeverity.HIGH,
        **kwargs: Any,
    ) -> None:
        context = kwargs.pop("context", {})
        if surface:
            context["surface"] = surface
        super().__init__(
            message,
            severity=severity,
            category=ErrorCategory.SELECTION,
            context=context,
            recoverable=False,
            **kwargs,
        )


class SamplingError(SelectionError):
    """A draw could not be made: bad weights, or a mandatory draw from nothing."""


class CandidatesExhaustedError(SelectionError):
    """Even the widened candidate universe cannot satisfy a request."""

    def __init__(
        self, message: str, requested: int, picked: int, **kwargs: Any
    ) -> None:
        context = kwargs.pop("context", {})
        context.update({"requested": requested, "picked": picked})
        super().__init__(message, context=context, **kwargs)
        self.requested = requested
        self.picked = picked


class ResolutionDepthError(SelectionError):
    """A recursive resolution chain went deeper than the configured limit."""

    def __init__(self, message: str, depth: int, **kwargs: Any) -> None:
        context = kwargs.pop("context", {})
        context["depth"] = depth
        super().__init__(message, severity=ErrorSeverity.CRITICAL, context=context, **kwargs)
        self.depth = depth
