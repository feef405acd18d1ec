from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol, cast, overload, runtime_checkable

import numpy as np

from pysatl_uq.types import BoolArray, Interval1D, Number, NumericArray

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence


@runtime_checkable
class Support(Protocol):
    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...


class ContinuousSupport(Interval1D, Support): ...


class ExplicitTableDiscreteSupport(Support):
    """Finite, sorted set of support points (the ticks of a discrete dimension)."""

    __slots__ = ("_points",)

    def __init__(self, points: Iterable[Number], assume_sorted: bool = False) -> None:
        arr = np.array(points, dtype=np.float64)

        if arr.size == 0:
            raise ValueError("Points must be non-empty")

        if not assume_sorted:
            arr.sort()

        unique_mask = np.empty(arr.size, dtype=bool)
        unique_mask[0] = True
        unique_mask[1:] = arr[1:] != arr[:-1]

        self._points = arr[unique_mask]

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x)
        idx = np.searchsorted(self._points, arr, side="left")

        size = self._points.size
        in_bounds = (idx >= 0) & (idx < size)

        idx_clipped = np.minimum(idx, size - 1)
        eq = self._points[idx_clipped] == arr

        result = in_bounds & eq

        if np.ndim(arr) == 0:
            return bool(result)
        return cast(BoolArray, result)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(Number, x)))

    def iter_points(self) -> Iterator[Number]:
        return iter(self._points)

    @property
    def points(self) -> NumericArray:
        return cast(NumericArray, self._points.copy())

    __iter__ = iter_points


class ProductSupport(Support):
    """
    Cartesian product of one-dimensional supports.

    A point belongs to the product when each coordinate belongs to the support
    of its dimension. Points are given as arrays of shape ``(d,)`` or
    ``(n, d)``.
    """

    __slots__ = ("_components",)

    def __init__(self, components: Sequence[ContinuousSupport | ExplicitTableDiscreteSupport]):
        if not components:
            raise ValueError("ProductSupport needs at least one component")
        self._components = tuple(components)

    @property
    def components(self) -> tuple[ContinuousSupport | ExplicitTableDiscreteSupport, ...]:
        return self._components

    @property
    def dimension(self) -> int:
        return len(self._components)

    @overload
    def contains(self, x: Number) -> bool: ...
    @overload
    def contains(self, x: NumericArray) -> BoolArray: ...

    def contains(self, x: Number | NumericArray) -> bool | BoolArray:
        arr = np.asarray(x, dtype=np.float64)
        points = np.atleast_2d(arr) if arr.ndim <= 1 else arr
        if points.shape[-1] != self.dimension:
            raise ValueError(
                f"Expected points of dimension {self.dimension}, got {points.shape[-1]}"
            )

        mask = np.ones(points.shape[0], dtype=bool)
        for d, component in enumerate(self._components):
            mask &= np.asarray(component.contains(points[:, d]), dtype=bool)

        if arr.ndim <= 1:
            return bool(mask[0])
        return cast(BoolArray, mask)

    def __contains__(self, x: object) -> bool:
        return bool(self.contains(cast(NumericArray, x)))


__all__ = [
    "Support",
    "ContinuousSupport",
    "ExplicitTableDiscreteSupport",
    "ProductSupport",
]
