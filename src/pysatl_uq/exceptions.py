"""
Error taxonomy shared by the polynomial and the distribution subpackages.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


class InvalidArgumentError(ValueError):
    """
    Raised for malformed or inconsistent inputs.

    Examples are mismatched dimension counts, a probability table of the wrong
    length, negative probabilities, a probability outside ``[0, 1]`` passed to
    a quantile, or a negative polynomial degree.
    """


class NumericalError(RuntimeError):
    """
    Raised when a numerical procedure cannot produce a valid result.

    Examples are a non-converging eigen-decomposition or a recurrence that
    yields a negative radicand in the Jacobi matrix.
    """


class NonPositiveMassError(InvalidArgumentError, NumericalError):
    """Raised when a probability table sums to a non-positive total mass."""


__all__ = [
    "InvalidArgumentError",
    "NumericalError",
    "NonPositiveMassError",
]
