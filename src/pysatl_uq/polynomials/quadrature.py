"""
Gauss Quadrature
================

Roots of orthogonal polynomials and Gauss quadrature rules obtained from the
eigen-decomposition of the Jacobi matrix (Golub–Welsch):

- nodes are the eigenvalues, in ascending order;
- weight ``i`` is ``mu0 * v_i[0] ** 2`` where ``v_i`` is the ``i``-th
  normalized eigenvector and ``mu0`` the zeroth moment of the measure.

Notes
-----
The symmetric tridiagonal eigensolver is LAPACK's, reached through
:func:`scipy.linalg.eigh_tridiagonal`. Its failures are reported as
:class:`~pysatl_uq.exceptions.NumericalError` and never retried.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from scipy.linalg import LinAlgError, eigh_tridiagonal

from pysatl_uq.exceptions import NumericalError
from pysatl_uq.polynomials.jacobi import build_jacobi
from pysatl_uq.polynomials.recurrence import resolve_family

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator
    from typing import Any

    from pysatl_uq.polynomials.recurrence import FamilyArg
    from pysatl_uq.types import FloatArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class QuadratureResult:
    """
    Gauss quadrature rule.

    Parameters
    ----------
    nodes : FloatArray
        Ascending roots of the polynomial of degree ``n``.
    weights : FloatArray
        Positive weights paired with ``nodes``; they sum to the zeroth moment.
    """

    nodes: FloatArray
    weights: FloatArray

    def __iter__(self) -> Iterator[FloatArray]:
        yield self.nodes
        yield self.weights

    def integrate(self, func: Callable[[FloatArray], Any]) -> float:
        """Apply the rule to a vectorized callable."""
        return float(np.dot(self.weights, np.asarray(func(self.nodes), dtype=np.float64)))


def roots(family: FamilyArg, n: int) -> FloatArray:
    """
    Roots of the polynomial of degree ``n``.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    n : int
        Degree, ``n >= 1``.

    Returns
    -------
    FloatArray
        The ``n`` real roots in ascending order.

    Raises
    ------
    InvalidArgumentError
        If ``n < 1``.
    NumericalError
        If the Jacobi matrix cannot be built or the eigensolver fails.
    """
    jacobi = build_jacobi(family, n)
    if n == 1:
        return jacobi.diagonal.copy()
    try:
        eigenvalues = eigh_tridiagonal(jacobi.diagonal, jacobi.off_diagonal, eigvals_only=True)
    except LinAlgError as exc:
        raise NumericalError(
            f"Eigenvalues of the order {n} Jacobi matrix did not converge."
        ) from exc
    return np.sort(eigenvalues)


def nodes_and_weights(family: FamilyArg, n: int) -> QuadratureResult:
    """
    Gauss quadrature nodes and weights with ``n`` points.

    Parameters
    ----------
    family : PolynomialFamily or str
        Family variant or registered family name.
    n : int
        Number of nodes, ``n >= 1``.

    Returns
    -------
    QuadratureResult
        Ascending nodes and matching positive weights.

    Raises
    ------
    InvalidArgumentError
        If ``n < 1``.
    NumericalError
        If the Jacobi matrix cannot be built or the eigensolver fails.
    """
    fam = resolve_family(family)
    jacobi = build_jacobi(fam, n)
    logger.debug("Computing %d-point Gauss rule for %s", n, fam.name)

    if n == 1:
        return QuadratureResult(jacobi.diagonal.copy(), np.array([fam.zeroth_moment]))
    try:
        eigenvalues, eigenvectors = eigh_tridiagonal(jacobi.diagonal, jacobi.off_diagonal)
    except LinAlgError as exc:
        raise NumericalError(
            f"Eigenvectors of the order {n} Jacobi matrix did not converge."
        ) from exc

    order = np.argsort(eigenvalues)
    nodes = eigenvalues[order]
    weights = fam.zeroth_moment * eigenvectors[0, order] ** 2
    return QuadratureResult(nodes=nodes, weights=weights)


__all__ = [
    "QuadratureResult",
    "roots",
    "nodes_and_weights",
]
