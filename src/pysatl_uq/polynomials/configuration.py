"""
Polynomial Families Configuration
=================================

This module registers the built-in orthogonal polynomial families:

- Chebychev (first kind) — arcsine measure on ``[-1, 1]``.
- Legendre — uniform measure on ``[-1, 1]``.
- Hermite — standard normal measure.
- Laguerre — standard exponential measure.

Notes
-----
- All families are registered in the global PolynomialFamilyRegister.
- Functions that accept a family name configure the register on first use.
"""

from __future__ import annotations

__author__ = "Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from functools import lru_cache

from pysatl_uq.polynomials.builtins import (
    configure_chebychev_family,
    configure_hermite_family,
    configure_laguerre_family,
    configure_legendre_family,
)
from pysatl_uq.polynomials.registry import PolynomialFamilyRegister


@lru_cache(maxsize=1)
def configure_polynomial_families_register() -> PolynomialFamilyRegister:
    """
    Configure and register all built-in polynomial families.

    Returns
    -------
    PolynomialFamilyRegister
        The global registry of polynomial families.
    """
    configure_chebychev_family()
    configure_legendre_family()
    configure_hermite_family()
    configure_laguerre_family()
    return PolynomialFamilyRegister()


def reset_polynomial_families_register() -> None:
    """
    Reset the cached polynomial families registry.
    """
    configure_polynomial_families_register.cache_clear()
    PolynomialFamilyRegister._reset()
