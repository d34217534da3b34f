"""Domain exception hierarchy for the tessera component framework."""

from __future__ import annotations


class TesseraError(RuntimeError):
    """Base class for all framework-level errors."""


class InvalidListenerError(TesseraError, TypeError):
    """Raised when an adapter is asked to bind something it cannot call."""


class AdapterError(TesseraError):
    """Raised when an element cannot be driven by the selected adapter."""


class ConfigValidationError(TesseraError):
    """Raised when configuration cannot be validated safely."""
