"""
Jacobi matrix assembly.

The recurrence ``P_{k+1} = (a0_k x + a1_k) P_k + a2_k P_{k-1}`` can be read as
``x P_k = P_{k+1} / a0_k - (a1_k / a0_k) P_k - (a2_k / a0_k) P_{k-1}``, a
tridiagonal operator whose symmetrization has

- diagonal ``-a1_k / a0_k``;
- off-diagonal ``sqrt(-a2_{k+1} / (a0_k a0_{k+1}))``.

Its eigenvalues are the roots of ``P_n``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_uq.exceptions import InvalidArgumentError, NumericalError
from pysatl_uq.polynomials.recurrence import resolve_family

if TYPE_CHECKING:
    from pysatl_uq.polynomials.recurrence import FamilyArg
    from pysatl_uq.types import FloatArray


@dataclass(frozen=True, slots=True)
class JacobiMatrix:
    """
    Symmetric tridiagonal matrix stored by its diagonals.

    Parameters
    ----------
    diagonal : FloatArray
        Main diagonal, length ``n``.
    off_diagonal : FloatArray
        First super- (and sub-) diagonal, length ``n - 1``.
    """

    diagonal: FloatArray
    off_diagonal: FloatArray

    @property
    def size(self) -> int:
        """Matrix order ``n``."""
        return int(self.diagonal.size)

    def to_dense(self) -> FloatArray:
        """Return the full ``(n, n)`` array."""
        dense = np.diag(self.diagonal)
        if self.off_diagonal.size:
            dense += np.diag(self.off_diagonal, k=1) + np.diag(self.off_diagonal, k=-1)
        return cast("FloatArray", dense)


def build_jacobi(family: FamilyArg, n: int) -> JacobiMatrix:
    """
    Assemble the ``n x n`` Jacobi matrix of ``family``.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    n : int
        Matrix order, ``n >= 1``.

    Returns
    -------
    JacobiMatrix
        Matrix built from recurrence coefficients of degrees ``0 .. n - 1``.

    Raises
    ------
    InvalidArgumentError
        If ``n < 1``.
    NumericalError
        If a leading coefficient vanishes or a radicand is negative, which
        means the recurrence does not describe an orthogonal family.
    """
    if n < 1:
        raise InvalidArgumentError(f"Jacobi matrix order must be at least 1, got {n}.")
    fam = resolve_family(family)

    triples = [fam.recurrence(k) for k in range(n)]
    a0 = np.array([t.a0 for t in triples], dtype=np.float64)
    a1 = np.array([t.a1 for t in triples], dtype=np.float64)
    a2 = np.array([t.a2 for t in triples], dtype=np.float64)

    if np.any(a0 == 0.0):
        degree = int(np.flatnonzero(a0 == 0.0)[0])
        raise NumericalError(f"Leading recurrence coefficient a0 vanishes at degree {degree}.")

    diagonal = -a1 / a0
    radicand = -a2[1:] / (a0[:-1] * a0[1:])
    if np.any(radicand < 0.0):
        degree = int(np.flatnonzero(radicand < 0.0)[0]) + 1
        raise NumericalError(
            f"Negative radicand {radicand[degree - 1]:g} at degree {degree}: "
            f"the recurrence of {fam.name} is not that of an orthogonal family."
        )
    return JacobiMatrix(diagonal=diagonal, off_diagonal=np.sqrt(radicand))


__all__ = [
    "JacobiMatrix",
    "build_jacobi",
]
