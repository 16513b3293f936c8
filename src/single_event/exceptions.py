"""Domain exception hierarchy for single-topic events."""

from __future__ import annotations


class SingleEventError(RuntimeError):
    """Base class for all errors raised by this package."""


class InvalidTakeCountError(SingleEventError, ValueError):
    """Raised when ``take`` is called with a negative or non-integer count."""


class ConfigValidationError(SingleEventError):
    """Raised when configuration cannot be validated safely."""
