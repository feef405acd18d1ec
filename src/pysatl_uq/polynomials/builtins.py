"""
Built-in orthogonal polynomial families.

Each ``configure_*_family`` function defines one family variant with its
orthogonality measure and closed-form recurrence, and registers it in the
global :class:`~pysatl_uq.polynomials.registry.PolynomialFamilyRegister`.

All measures are probability measures, so every family has zeroth moment 1 and
Gauss weights sum to 1.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import cast

import numpy as np

from pysatl_uq.polynomials.family import PolynomialFamily, RecurrenceTriple
from pysatl_uq.polynomials.registry import PolynomialFamilyRegister
from pysatl_uq.types import FloatArray, Interval1D, PolynomialFamilyName


def configure_chebychev_family() -> None:
    """
    Configure and register the Chebychev (first kind) family.

    Orthogonal on ``[-1, 1]`` with respect to the arcsine measure
    ``w(x) = 1 / (pi * sqrt(1 - x^2))``. Recurrence:
    ``T_1 = x T_0`` and ``T_{n+1} = 2x T_n - T_{n-1}`` for ``n >= 1``.
    """

    def weight(x: FloatArray) -> FloatArray:
        x = np.asarray(x, dtype=np.float64)
        inside = np.abs(x) < 1.0
        safe = np.where(inside, x, 0.0)
        return cast(FloatArray, np.where(inside, 1.0 / (math.pi * np.sqrt(1.0 - safe**2)), 0.0))

    def coefficients(n: int) -> RecurrenceTriple:
        if n == 0:
            return RecurrenceTriple(1.0, 0.0, 0.0)
        return RecurrenceTriple(2.0, 0.0, -1.0)

    PolynomialFamilyRegister.register(
        PolynomialFamily(
            name=PolynomialFamilyName.CHEBYCHEV,
            support=Interval1D(-1.0, 1.0, left_closed=False, right_closed=False),
            zeroth_moment=1.0,
            weight=weight,
            coefficients=coefficients,
        )
    )


def configure_legendre_family() -> None:
    """
    Configure and register the Legendre family.

    Orthogonal on ``[-1, 1]`` with respect to the uniform probability measure.
    Recurrence: ``(n + 1) P_{n+1} = (2n + 1) x P_n - n P_{n-1}``.
    """

    def weight(x: FloatArray) -> FloatArray:
        x = np.asarray(x, dtype=np.float64)
        return cast(FloatArray, np.where(np.abs(x) <= 1.0, 0.5, 0.0))

    def coefficients(n: int) -> RecurrenceTriple:
        return RecurrenceTriple((2.0 * n + 1.0) / (n + 1.0), 0.0, -n / (n + 1.0))

    PolynomialFamilyRegister.register(
        PolynomialFamily(
            name=PolynomialFamilyName.LEGENDRE,
            support=Interval1D(-1.0, 1.0),
            zeroth_moment=1.0,
            weight=weight,
            coefficients=coefficients,
        )
    )


def configure_hermite_family() -> None:
    """
    Configure and register the (probabilists') Hermite family.

    Orthogonal on the real line with respect to the standard normal measure.
    Recurrence: ``He_{n+1} = x He_n - n He_{n-1}``.
    """

    def weight(x: FloatArray) -> FloatArray:
        x = np.asarray(x, dtype=np.float64)
        return cast(FloatArray, np.exp(-0.5 * x**2) / math.sqrt(2.0 * math.pi))

    def coefficients(n: int) -> RecurrenceTriple:
        return RecurrenceTriple(1.0, 0.0, -float(n))

    PolynomialFamilyRegister.register(
        PolynomialFamily(
            name=PolynomialFamilyName.HERMITE,
            support=Interval1D(),
            zeroth_moment=1.0,
            weight=weight,
            coefficients=coefficients,
        )
    )


def configure_laguerre_family() -> None:
    """
    Configure and register the Laguerre family.

    Orthogonal on ``[0, inf)`` with respect to the standard exponential measure.
    Recurrence: ``(n + 1) L_{n+1} = (2n + 1 - x) L_n - n L_{n-1}``.
    """

    def weight(x: FloatArray) -> FloatArray:
        x = np.asarray(x, dtype=np.float64)
        return cast(FloatArray, np.where(x >= 0.0, np.exp(-np.maximum(x, 0.0)), 0.0))

    def coefficients(n: int) -> RecurrenceTriple:
        return RecurrenceTriple(-1.0 / (n + 1.0), (2.0 * n + 1.0) / (n + 1.0), -n / (n + 1.0))

    PolynomialFamilyRegister.register(
        PolynomialFamily(
            name=PolynomialFamilyName.LAGUERRE,
            support=Interval1D(left=0.0),
            zeroth_moment=1.0,
            weight=weight,
            coefficients=coefficients,
        )
    )


__all__ = [
    "configure_chebychev_family",
    "configure_legendre_family",
    "configure_hermite_family",
    "configure_laguerre_family",
]
