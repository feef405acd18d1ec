"""
Alias Method
============

Walker's alias method with Vose's O(K) table construction.

After building :class:`AliasTables` from ``K`` non-negative weights, each draw
costs two uniforms and one comparison:

1. ``u1`` picks a column ``j = floor(u1 * K)`` uniformly;
2. ``u2`` keeps ``j`` when ``u2 < base[j]``, otherwise returns ``alias[j]``.

Index ``i`` is then returned with probability ``weights[i] / sum(weights)``.

Notes
-----
Uniforms are expected in ``[0, 1)``. The acceptance test is strict, so a
column whose weight is zero (``base == 0``) is never returned.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_uq.exceptions import InvalidArgumentError, NonPositiveMassError

if TYPE_CHECKING:
    from pysatl_uq.types import FloatArray, IntArray, NumericArray

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class AliasTables:
    """
    Alias method tables.

    Parameters
    ----------
    base : FloatArray
        Acceptance probability of each column, in ``[0, 1]``.
    alias : IntArray
        Fallback index of each column.
    """

    base: FloatArray
    alias: IntArray

    @property
    def size(self) -> int:
        """Number of columns ``K``."""
        return int(self.base.size)

    def probabilities(self) -> FloatArray:
        """
        Reconstruct the normalized weights encoded by the tables.

        Column ``j`` gives ``base[j] / K`` to itself and ``(1 - base[j]) / K``
        to ``alias[j]``.
        """
        k = self.size
        result = self.base / k
        np.add.at(result, self.alias, (1.0 - self.base) / k)
        return cast("FloatArray", result)


def build_alias_tables(weights: NumericArray | list[float]) -> AliasTables:
    """
    Build alias tables with Vose's algorithm.

    Parameters
    ----------
    weights : array_like
        ``K >= 1`` finite, non-negative weights, not all zero. They need not
        be normalized.

    Returns
    -------
    AliasTables
        Tables reproducing ``weights / sum(weights)``.

    Raises
    ------
    InvalidArgumentError
        If ``weights`` is empty, not one-dimensional, or contains negative or
        non-finite entries.
    NonPositiveMassError
        If the weights sum to zero.
    """
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1 or w.size == 0:
        raise InvalidArgumentError("Alias tables need a non-empty one-dimensional weight vector.")
    if not np.all(np.isfinite(w)):
        raise InvalidArgumentError("Alias weights must be finite.")
    if np.any(w < 0.0):
        raise InvalidArgumentError("Alias weights must be non-negative.")
    total = float(w.sum())
    if total <= 0.0:
        raise NonPositiveMassError("Alias weights must have a positive sum.")

    k = w.size
    # Mean of the scaled weights is exactly 1
    scaled = w * (k / total)
    base = np.ones(k, dtype=np.float64)
    alias = np.arange(k, dtype=np.intp)

    small = [i for i in range(k) if scaled[i] < 1.0]
    large = [i for i in range(k) if scaled[i] >= 1.0]

    while small and large:
        s = small.pop()
        g = large.pop()
        base[s] = scaled[s]
        alias[s] = g
        scaled[g] = (scaled[g] + scaled[s]) - 1.0
        if scaled[g] < 1.0:
            small.append(g)
        else:
            large.append(g)

    # Leftovers are saturated up to rounding
    for i in large:
        base[i] = 1.0
    for i in small:
        base[i] = 1.0

    logger.debug("Built alias tables for %d cells", k)
    return AliasTables(base=base, alias=alias)


def draw(tables: AliasTables, uniform1: float, uniform2: float) -> int:
    """
    Draw one index.

    Parameters
    ----------
    tables : AliasTables
        Tables from :func:`build_alias_tables`.
    uniform1, uniform2 : float
        Independent uniforms in ``[0, 1)``.

    Returns
    -------
    int
        The drawn index.
    """
    column = min(int(uniform1 * tables.size), tables.size - 1)
    if uniform2 < tables.base[column]:
        return column
    return int(tables.alias[column])


def draw_many(tables: AliasTables, uniform1: NumericArray, uniform2: NumericArray) -> IntArray:
    """
    Vectorized :func:`draw` over paired uniform arrays.

    Returns
    -------
    IntArray
        Drawn indices, shaped like ``uniform1``.
    """
    u1 = np.asarray(uniform1, dtype=np.float64)
    u2 = np.asarray(uniform2, dtype=np.float64)
    columns = np.minimum((u1 * tables.size).astype(np.intp), tables.size - 1)
    return cast("IntArray", np.where(u2 < tables.base[columns], columns, tables.alias[columns]))


__all__ = [
    "AliasTables",
    "build_alias_tables",
    "draw",
    "draw_many",
]
