"""
Orthogonal polynomial factory.

Object facade over the recurrence, Jacobi and quadrature functions bound to
one family, for consumers that hold a factory rather than a family name.

Examples
--------
>>> from pysatl_uq.polynomials import OrthogonalPolynomialFactory
>>> factory = OrthogonalPolynomialFactory("Chebychev")
>>> rule = factory.get_nodes_and_weights(4)
>>> float(rule.weights.sum())  # doctest: +SKIP
1.0
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np
from numpy.polynomial import polynomial as P

from pysatl_uq.polynomials.quadrature import nodes_and_weights, roots
from pysatl_uq.polynomials.recurrence import (
    polynomial_coefficients,
    recurrence,
    resolve_family,
)

if TYPE_CHECKING:
    from pysatl_uq.polynomials.family import PolynomialFamily, RecurrenceTriple
    from pysatl_uq.polynomials.quadrature import QuadratureResult
    from pysatl_uq.polynomials.recurrence import FamilyArg
    from pysatl_uq.types import FloatArray, Number, NumericArray


@dataclass(frozen=True, slots=True)
class UniVariatePolynomial:
    """
    Polynomial in the monomial basis.

    Parameters
    ----------
    coefficients : FloatArray
        Coefficients in ascending order of powers.
    """

    coefficients: FloatArray

    @property
    def degree(self) -> int:
        """Formal degree (length of the coefficient array minus one)."""
        return int(self.coefficients.size) - 1

    def __call__(self, x: Number | NumericArray) -> FloatArray:
        """Evaluate the polynomial at ``x``."""
        return cast("FloatArray", P.polyval(np.asarray(x, dtype=np.float64), self.coefficients))

    def roots(self) -> FloatArray:
        """Real parts of the roots from the companion matrix, ascending."""
        return np.sort(np.real(P.polyroots(self.coefficients)))


class OrthogonalPolynomialFactory:
    """
    Factory of the orthogonal polynomials of one family.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    """

    def __init__(self, family: FamilyArg) -> None:
        self._family = resolve_family(family)

    @property
    def family(self) -> PolynomialFamily:
        """The family this factory builds."""
        return self._family

    def get_recurrence_coefficients(self, n: int) -> RecurrenceTriple:
        """Recurrence coefficients of degree ``n``."""
        return recurrence(self._family, n)

    def get_roots(self, n: int) -> FloatArray:
        """Ascending roots of the polynomial of degree ``n``."""
        return roots(self._family, n)

    def get_nodes_and_weights(self, n: int) -> QuadratureResult:
        """Gauss rule with ``n`` nodes."""
        return nodes_and_weights(self._family, n)

    def build(self, n: int) -> UniVariatePolynomial:
        """Polynomial of degree ``n`` in the monomial basis."""
        return UniVariatePolynomial(polynomial_coefficients(self._family, n))

    def __repr__(self) -> str:
        return f"class=OrthogonalPolynomialFactory family={self._family.name}"


__all__ = [
    "UniVariatePolynomial",
    "OrthogonalPolynomialFactory",
]
