"""
Mixture View
============

Finite mixture representation of a mixed histogram: one product component per
cell with positive mass, each dimension of which is either a point mass at a
tick or a uniform distribution on a bin.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_uq.exceptions import InvalidArgumentError, NonPositiveMassError
from pysatl_uq.types import Kind

if TYPE_CHECKING:
    from pysatl_uq.types import FloatArray, Number, NumericArray


def _as_point(x: Number | NumericArray, dimension: int) -> FloatArray:
    point = np.atleast_1d(np.asarray(x, dtype=np.float64))
    if point.shape != (dimension,):
        raise InvalidArgumentError(
            f"Expected a point of dimension {dimension}, got shape {point.shape}."
        )
    return point


@dataclass(frozen=True, slots=True)
class CellComponent:
    """
    Product of one-dimensional atoms and uniform bins.

    Parameters
    ----------
    kinds : tuple of Kind
        Kind of every dimension.
    lower, upper : FloatArray
        Bin bounds per dimension; equal for atoms.
    right_closed : tuple of bool
        Whether each bin includes its upper bound (the last bin of a
        histogram dimension does).
    """

    kinds: tuple[Kind, ...]
    lower: FloatArray
    upper: FloatArray
    right_closed: tuple[bool, ...]

    @property
    def dimension(self) -> int:
        return len(self.kinds)

    def compute_pdf(self, x: Number | NumericArray) -> float:
        point = _as_point(x, self.dimension)
        density = 1.0
        for d, kind in enumerate(self.kinds):
            a, b, xd = self.lower[d], self.upper[d], point[d]
            if kind is Kind.DISCRETE:
                if xd != a:
                    return 0.0
            elif a <= xd < b or (self.right_closed[d] and xd == b):
                density /= b - a
            else:
                return 0.0
        return density

    def compute_cdf(self, x: Number | NumericArray) -> float:
        point = _as_point(x, self.dimension)
        value = 1.0
        for d, kind in enumerate(self.kinds):
            a, b, xd = self.lower[d], self.upper[d], point[d]
            if kind is Kind.DISCRETE:
                value *= float(a <= xd)
            else:
                value *= min(max((xd - a) / (b - a), 0.0), 1.0)
        return value

    def mean(self) -> FloatArray:
        return cast("FloatArray", 0.5 * (self.lower + self.upper))


class Mixture:
    """
    Weighted finite mixture of :class:`CellComponent` objects.

    Parameters
    ----------
    weights : sequence of float
        Non-negative weights, normalized on construction.
    components : sequence of CellComponent
        Components of a common dimension, one per weight.
    """

    def __init__(
        self, weights: Sequence[float] | NumericArray, components: Sequence[CellComponent]
    ):
        w = np.asarray(weights, dtype=np.float64)
        if w.ndim != 1 or w.size != len(components) or not components:
            raise InvalidArgumentError(
                "A mixture needs one weight per component and at least one component."
            )
        if np.any(w < 0.0) or not np.all(np.isfinite(w)):
            raise InvalidArgumentError("Mixture weights must be finite and non-negative.")
        total = float(w.sum())
        if total <= 0.0:
            raise NonPositiveMassError("Mixture weights must have a positive sum.")
        dimensions = {c.dimension for c in components}
        if len(dimensions) != 1:
            raise InvalidArgumentError(f"Components have different dimensions: {dimensions}.")

        self._weights = w / total
        self._components = tuple(components)
        self._dimension = dimensions.pop()

    @property
    def weights(self) -> FloatArray:
        return self._weights.copy()

    @property
    def components(self) -> tuple[CellComponent, ...]:
        return self._components

    @property
    def dimension(self) -> int:
        return self._dimension

    def __len__(self) -> int:
        return len(self._components)

    def compute_pdf(self, x: Number | NumericArray) -> float:
        return float(
            sum(w * c.compute_pdf(x) for w, c in zip(self._weights, self._components, strict=True))
        )

    def compute_cdf(self, x: Number | NumericArray) -> float:
        return float(
            sum(w * c.compute_cdf(x) for w, c in zip(self._weights, self._components, strict=True))
        )

    def mean(self) -> FloatArray:
        means = np.array([c.mean() for c in self._components])
        return cast("FloatArray", self._weights @ means)

    def __repr__(self) -> str:
        return f"Mixture(dimension={self._dimension}, components={len(self._components)})"


__all__ = [
    "CellComponent",
    "Mixture",
]
