"""
Three-term recurrence engine.

Pure functions over a :class:`~pysatl_uq.polynomials.family.PolynomialFamily`
(or the name of a registered one):

- :func:`recurrence` — the recurrence triple of degree ``n``;
- :func:`evaluate` — values of ``P_n`` by forward recurrence;
- :func:`polynomial_coefficients` — monomial coefficients of ``P_n``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, cast

import numpy as np
from numpy.polynomial import polynomial as P

from pysatl_uq.exceptions import InvalidArgumentError
from pysatl_uq.polynomials.configuration import configure_polynomial_families_register
from pysatl_uq.polynomials.family import PolynomialFamily

if TYPE_CHECKING:
    from pysatl_uq.polynomials.family import RecurrenceTriple
    from pysatl_uq.types import FloatArray, Number, NumericArray

type FamilyArg = PolynomialFamily | str


def resolve_family(family: FamilyArg) -> PolynomialFamily:
    """
    Return ``family`` itself or the registered family of that name.

    Raises
    ------
    InvalidArgumentError
        If a name is given and no such family is registered.
    """
    if isinstance(family, PolynomialFamily):
        return family
    return configure_polynomial_families_register().get(str(family))


def _check_degree(n: int) -> None:
    if n < 0:
        raise InvalidArgumentError(f"Polynomial degree must be non-negative, got {n}.")


def recurrence(family: FamilyArg, n: int) -> RecurrenceTriple:
    """
    Recurrence coefficients ``(a0, a1, a2)`` of degree ``n``.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    n : int
        Degree, ``n >= 0``.

    Returns
    -------
    RecurrenceTriple
        Coefficients such that
        ``P_{n+1}(x) = (a0 x + a1) P_n(x) + a2 P_{n-1}(x)``.

    Raises
    ------
    InvalidArgumentError
        If ``n`` is negative or the family name is unknown.
    """
    _check_degree(n)
    return resolve_family(family).recurrence(n)


def evaluate(family: FamilyArg, n: int, x: Number | NumericArray) -> FloatArray:
    """
    Evaluate ``P_n`` at ``x`` by forward recurrence.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    n : int
        Degree, ``n >= 0``.
    x : Number or NumericArray
        Evaluation point(s).

    Returns
    -------
    FloatArray
        ``P_n(x)``, shaped like ``x``.
    """
    _check_degree(n)
    fam = resolve_family(family)
    x_arr = np.asarray(x, dtype=np.float64)

    previous = np.zeros_like(x_arr)
    current = np.ones_like(x_arr)
    for k in range(n):
        a0, a1, a2 = fam.recurrence(k)
        previous, current = current, (a0 * x_arr + a1) * current + a2 * previous
    return cast("FloatArray", current)


def polynomial_coefficients(family: FamilyArg, n: int) -> FloatArray:
    """
    Monomial coefficients of ``P_n`` in ascending order of powers.

    Returns
    -------
    FloatArray
        Array of length ``n + 1``; entry ``k`` multiplies ``x**k``.
    """
    _check_degree(n)
    fam = resolve_family(family)

    previous = np.zeros(1)
    current = np.ones(1)
    for k in range(n):
        a0, a1, a2 = fam.recurrence(k)
        following = P.polyadd(P.polyadd(a0 * P.polymulx(current), a1 * current), a2 * previous)
        previous, current = current, following
    return cast("FloatArray", np.asarray(current, dtype=np.float64))


__all__ = [
    "FamilyArg",
    "resolve_family",
    "recurrence",
    "evaluate",
    "polynomial_coefficients",
]
