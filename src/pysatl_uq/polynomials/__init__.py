"""
Orthogonal polynomials subpackage.

Recurrence coefficients, Jacobi matrices, roots and Gauss quadrature rules of
orthogonal polynomial families:

- family variants and their registry (:mod:`.family`, :mod:`.registry`);
- built-in families (:mod:`.builtins`, :mod:`.configuration`);
- recurrence engine (:mod:`.recurrence`);
- Jacobi matrix builder (:mod:`.jacobi`);
- quadrature solver (:mod:`.quadrature`);
- factory facade (:mod:`.factory`).
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .configuration import (
    configure_polynomial_families_register,
    reset_polynomial_families_register,
)
from .factory import OrthogonalPolynomialFactory, UniVariatePolynomial
from .family import PolynomialFamily, RecurrenceTriple
from .jacobi import JacobiMatrix, build_jacobi
from .quadrature import QuadratureResult, nodes_and_weights, roots
from .recurrence import evaluate, polynomial_coefficients, recurrence, resolve_family
from .registry import PolynomialFamilyRegister

__all__ = [
    # families
    "PolynomialFamily",
    "RecurrenceTriple",
    "PolynomialFamilyRegister",
    "configure_polynomial_families_register",
    "reset_polynomial_families_register",
    # recurrence
    "recurrence",
    "evaluate",
    "polynomial_coefficients",
    "resolve_family",
    # jacobi
    "JacobiMatrix",
    "build_jacobi",
    # quadrature
    "QuadratureResult",
    "roots",
    "nodes_and_weights",
    # factory
    "OrthogonalPolynomialFactory",
    "UniVariatePolynomial",
]
