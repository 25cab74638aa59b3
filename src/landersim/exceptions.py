"""
Exception and warning types raised by landersim.

Contract violations raise; recoverable numerical anomalies warn via
``warnings.warn`` so the driver can keep stepping.
"""
from __future__ import annotations


class LanderError(Exception):
    """Base class for landersim errors."""


class ConfigurationError(LanderError, ValueError):
    """Invalid scenario index, controller name or option value."""


class InvalidStateError(LanderError, RuntimeError):
    """Physics state that no scenario should produce (e.g. lander at the planet centre)."""


class FuelDepletedWarning(RuntimeWarning):
    """Lander mass fell to zero or below and was floored."""


class InvariantViolation(RuntimeWarning):
    """A value outside its documented range was clamped."""
