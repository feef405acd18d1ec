"""
Orthogonal polynomial family variants.

A family is a tagged variant: a :class:`~pysatl_uq.types.PolynomialFamilyName`
plus the data that identifies it (orthogonality measure, its support and
zeroth moment) and a closed-form provider of recurrence coefficients.
Concrete families are registered in
:class:`~pysatl_uq.polynomials.registry.PolynomialFamilyRegister`.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING

from pysatl_uq.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from pysatl_uq.types import FloatArray, Interval1D, PolynomialFamilyName


@dataclass(frozen=True, slots=True)
class RecurrenceTriple:
    """
    Three-term recurrence coefficients of degree ``n``.

    The polynomials satisfy
    ``P_{n+1}(x) = (a0 * x + a1) * P_n(x) + a2 * P_{n-1}(x)``
    with ``P_0 = 1`` and ``P_{-1} = 0``.
    """

    a0: float
    a1: float
    a2: float

    def __iter__(self) -> Iterator[float]:
        yield self.a0
        yield self.a1
        yield self.a2


@dataclass(frozen=True, slots=True)
class PolynomialFamily:
    """
    A family of polynomials orthogonal with respect to a measure.

    Parameters
    ----------
    name : PolynomialFamilyName
        Variant tag.
    support : Interval1D
        Support of the orthogonality measure.
    zeroth_moment : float
        Total mass of the orthogonality measure (1 for probability measures).
    weight : Callable[[FloatArray], FloatArray]
        Density of the orthogonality measure.
    coefficients : Callable[[int], RecurrenceTriple]
        Closed-form recurrence coefficients, called with ``n >= 0`` only.
    """

    name: PolynomialFamilyName
    support: Interval1D
    zeroth_moment: float
    weight: Callable[[FloatArray], FloatArray]
    coefficients: Callable[[int], RecurrenceTriple]

    def recurrence(self, n: int) -> RecurrenceTriple:
        """
        Recurrence coefficients of degree ``n``.

        Raises
        ------
        InvalidArgumentError
            If ``n`` is negative.
        """
        if n < 0:
            raise InvalidArgumentError(f"Polynomial degree must be non-negative, got {n}.")
        return self.coefficients(n)


__all__ = [
    "RecurrenceTriple",
    "PolynomialFamily",
]
