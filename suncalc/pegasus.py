"""Pegasus root finder, a modified regula falsi."""

from __future__ import annotations

from typing import Callable

from .errors import ConvergenceError

__all__ = ["MAX_ITERATIONS", "calculate"]

MAX_ITERATIONS = 30


def calculate(
    lower: float,
    upper: float,
    accuracy: float,
    f: Callable[[float], float],
) -> float:
    """Find the root of *f* between *lower* and *upper*.

    Parameters
    ----------
    lower, upper:
        Interval borders. ``f(lower)`` and ``f(upper)`` must have opposite
        signs.
    accuracy:
        Desired width of the final interval.
    f:
        Function to solve.

    Returns
    -------
    float
        The interval border with the smaller absolute function value.

    Raises
    ------
    ConvergenceError
        If the interval holds no sign change, or if the accuracy is not
        reached within :data:`MAX_ITERATIONS` steps.
    """

    x1 = lower
    x2 = upper
    f1 = f(x1)
    f2 = f(x2)

    if f1 * f2 >= 0.0:
        raise ConvergenceError("No root within the given boundaries")

    for _ in range(MAX_ITERATIONS):
        x3 = x2 - f2 / ((f2 - f1) / (x2 - x1))
        f3 = f(x3)

        if f3 * f2 <= 0.0:
            x1, f1 = x2, f2
            x2, f2 = x3, f3
        else:
            f1 = f1 * f2 / (f2 + f3)
            x2, f2 = x3, f3

        if abs(x2 - x1) <= accuracy:
            return x1 if abs(f1) < abs(f2) else x2

    raise ConvergenceError("Maximum number of iterations exceeded")
