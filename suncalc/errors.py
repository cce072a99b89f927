"""Exceptions raised by the computation core."""

from __future__ import annotations


class SunCalcError(RuntimeError):
    """Base class for failures of a Sun or Moon computation."""


class ConvergenceError(SunCalcError, ArithmeticError):
    """Raised when a numerical solver cannot produce a result."""


class DateError(SunCalcError, ValueError):
    """Raised when a calendar date or time zone cannot be resolved."""
