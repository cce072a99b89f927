"""Quadratic interpolation through three equally spaced samples."""

from __future__ import annotations

import math

import numpy as np

__all__ = ["QuadraticInterpolation"]


class QuadraticInterpolation:
    """Parabola through the samples at ``x = -1``, ``0`` and ``+1``.

    Attributes
    ----------
    xe:
        X of the extremum. May lie outside ``[-1, 1]``.
    ye:
        Y of the extremum.
    is_maximum:
        ``True`` if the extremum is a maximum.
    number_of_roots:
        Number of roots found within ``[-1, 1]``.
    """

    __slots__ = ("xe", "ye", "is_maximum", "number_of_roots", "_root1", "_root2")

    def __init__(self, y_minus: float, y0: float, y_plus: float) -> None:
        a = 0.5 * (y_plus + y_minus) - y0
        b = 0.5 * (y_plus - y_minus)
        c = y0

        # A flat parabola (a == 0) yields an infinite or undefined extremum.
        with np.errstate(divide="ignore", invalid="ignore"):
            xe = float(np.float64(-b) / np.float64(2.0 * a))
            ye = (a * xe + b) * xe + c
            dis = b * b - 4.0 * a * c

            root_count = 0
            if dis >= 0.0:
                dx = float(np.float64(0.5 * math.sqrt(dis)) / np.float64(abs(a)))
                root1 = xe - dx
                root2 = xe + dx
                if abs(root1) <= 1.0:
                    root_count += 1
                if abs(root2) <= 1.0:
                    root_count += 1
            else:
                root1 = math.nan
                root2 = math.nan

        self.xe = xe
        self.ye = ye
        self.is_maximum = a < 0.0
        self.number_of_roots = root_count
        self._root1 = root1
        self._root2 = root2

    @property
    def root1(self) -> float:
        """X of the first root, falling back to the second one below ``-1``."""
        return self._root2 if self._root1 < -1.0 else self._root1

    @property
    def root2(self) -> float:
        return self._root2

    def __repr__(self) -> str:
        return (
            f"QuadraticInterpolation(xe={self.xe}, ye={self.ye}, "
            f"is_maximum={self.is_maximum}, roots={self.number_of_roots})"
        )
