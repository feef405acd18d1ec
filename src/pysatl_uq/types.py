"""
Core Type Definitions
=====================

Fundamental types and data structures shared by the polynomial and the
distribution subpackages.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from enum import StrEnum
from math import inf
from typing import Any, cast, overload

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Discrete probability distribution (or a discrete histogram dimension).
    CONTINUOUS : str
        Continuous probability distribution (or a piecewise-uniform dimension).
    MIXED : str
        Multivariate distribution with both discrete and continuous dimensions.
        Never valid as the kind of a single histogram dimension.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"
    MIXED = "mixed"


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType:
    """
    Distribution type for Euclidean space distributions.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete, continuous or mixed).
    dimension : int
        Spatial dimension (e.g., 1 for univariate).
    """

    kind: Kind
    dimension: int


NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

FloatArray = NDArray[np.float64]
"""Type alias for float64 arrays."""

IntArray = NDArray[np.intp]
"""Type alias for index arrays."""

ComplexArray = NDArray[np.complexfloating[Any]]
"""Type alias for complex arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""


@dataclass(frozen=True, slots=True)
class Interval1D:
    """
    1D interval with configurable closure.

    Used both as the support of an orthogonality measure and as the support of
    a continuous histogram dimension.

    Parameters
    ----------
    left : float, default=-inf
        Left endpoint of the interval.
    right : float, default=inf
        Right endpoint of the interval.
    left_closed : bool, default=True
        Whether left endpoint is included (ignored if left = -inf).
    right_closed : bool, default=True
        Whether right endpoint is included (ignored if right = inf).
    """

    left: float = -inf
    right: float = inf
    left_closed: bool = True
    right_closed: bool = True

    def __post_init__(self) -> None:
        """Adjust closure for infinite endpoints."""
        if self.left == -inf and self.left_closed:
            object.__setattr__(self, "left_closed", False)
        if self.right == inf and self.right_closed:
            object.__setattr__(self, "right_closed", False)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        """
        Check if point(s) are contained in the interval.

        Parameters
        ----------
        x : Number or NumericArray
            Point(s) to check.

        Returns
        -------
        bool or BoolArray
            True for points within the interval, False otherwise.
        """
        arr = np.asarray(x)

        left_ok = (arr > self.left) | (self.left_closed & (arr >= self.left))
        right_ok = (arr < self.right) | (self.right_closed & (arr <= self.right))
        result = left_ok & right_ok

        if np.ndim(arr) == 0:
            return bool(result)

        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        """Check if a single point is in the interval."""
        return bool(self.contains(cast(Number, x)))


type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'pdf', 'cdf')."""


class CharacteristicName(StrEnum):
    """
    Enumeration of statistical distribution characteristics.

    These names key the analytical computations exposed by distributions of
    this package.
    """

    PDF = "pdf"
    CDF = "cdf"
    PPF = "ppf"
    PMF = "pmf"
    CF = "cf"
    SF = "sf"
    MEAN = "mean"
    VAR = "var"
    STD = "std"
    SKEW = "skewness"
    KURT = "kurtosis"
    STANDARD_MOMENT = "standardized_moment"


class PolynomialFamilyName(StrEnum):
    """Names of the built-in orthogonal polynomial families."""

    CHEBYCHEV = "Chebychev"
    LEGENDRE = "Legendre"
    HERMITE = "Hermite"
    LAGUERRE = "Laguerre"


__all__ = [
    "Kind",
    "EuclideanDistributionType",
    "GenericCharacteristicName",
    "Interval1D",
    "BoolArray",
    "ComplexArray",
    "FloatArray",
    "IntArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "PolynomialFamilyName",
]
