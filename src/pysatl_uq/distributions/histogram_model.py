"""
Mixed Histogram Model
=====================

Data model of a multivariate histogram whose dimensions are each either
discrete (a finite set of ticks carrying atoms) or continuous (bins between
consecutive ticks carrying uniform mass), joined by an explicit joint
probability table.

Conventions
-----------
- A *cell* picks one tick in every discrete dimension and one bin in every
  continuous dimension.
- The flat probability table lists cells in C (row-major) order: dimension 0
  is the outermost, slowest varying index.
- Continuous bins are half-open ``[t_j, t_{j+1})`` except the last one, which
  is closed.
- The table is normalized once per construction or mutation; the raw table is
  kept for round-tripping.

All evaluations (PDF, CDF, characteristic function) reduce to a contraction
of the normalized table, reshaped to the cell grid, with one factor vector
per dimension.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import math
import threading
import warnings
from collections.abc import Sequence
from typing import TYPE_CHECKING, cast

import numpy as np

from pysatl_uq.config import get_settings
from pysatl_uq.exceptions import InvalidArgumentError, NonPositiveMassError
from pysatl_uq.types import Kind

if TYPE_CHECKING:
    from collections.abc import Callable
    from typing import Any

    from pysatl_uq.types import ComplexArray, FloatArray, Number, NumericArray

    type TicksArg = Sequence[Sequence[float] | NumericArray]
    type KindArg = Sequence[Kind | str]
    type TableArg = Sequence[float] | NumericArray

logger = logging.getLogger(__name__)


def _parse_kind(value: Kind | str) -> Kind:
    try:
        kind = Kind(value)
    except ValueError as exc:
        raise InvalidArgumentError(f"Unknown dimension kind {value!r}.") from exc
    if kind is Kind.MIXED:
        raise InvalidArgumentError("A histogram dimension is either discrete or continuous.")
    return kind


def _bin_moments(left: FloatArray, right: FloatArray, order: int, center: float) -> FloatArray:
    """``E[(X - center)**order]`` for ``X`` uniform on each ``[left, right]``."""
    hi = (right - center) ** (order + 1)
    lo = (left - center) ** (order + 1)
    return cast("FloatArray", (hi - lo) / ((order + 1) * (right - left)))


class MixedHistogramModel:
    """
    Joint table of a mixed discrete/continuous histogram.

    Parameters
    ----------
    ticks_collection : sequence of sequences of float, optional
        One strictly increasing tick sequence per dimension: the support
        points of a discrete dimension (at least one), or the bin boundaries
        of a continuous dimension (at least two).
    kind : sequence of Kind, optional
        ``Kind.DISCRETE`` or ``Kind.CONTINUOUS`` per dimension.
    probability_table : sequence of float, optional
        Non-negative cell masses in C order, not necessarily normalized.

    Notes
    -----
    Without arguments the model is a single continuous cell on ``[0, 1]``,
    i.e. the standard uniform distribution. The three arguments are given
    together or not at all.

    Raises
    ------
    InvalidArgumentError
        If the arguments are inconsistent (see :meth:`set_parameters`).
    """

    def __init__(
        self,
        ticks_collection: TicksArg | None = None,
        kind: KindArg | None = None,
        probability_table: TableArg | None = None,
    ) -> None:
        given = (ticks_collection is not None, kind is not None, probability_table is not None)
        if not any(given):
            ticks_collection, kind, probability_table = [[0.0, 1.0]], [Kind.CONTINUOUS], [1.0]
        elif not all(given):
            raise InvalidArgumentError(
                "ticks_collection, kind and probability_table must be given together."
            )

        self._lock = threading.RLock()
        self._version = 0
        self._mean: FloatArray | None = None
        self._covariance: FloatArray | None = None
        self.set_parameters(
            cast("TicksArg", ticks_collection),
            cast("KindArg", kind),
            cast("TableArg", probability_table),
        )

    # ------------------------------------------------------------------ #
    # Parameters
    # ------------------------------------------------------------------ #

    def set_parameters(
        self, ticks_collection: TicksArg, kind: KindArg, probability_table: TableArg
    ) -> None:
        """
        Replace ticks, kinds and table at once.

        Raises
        ------
        InvalidArgumentError
            If the numbers of tick sequences and kinds differ or are zero, a
            kind is invalid, ticks are not finite and strictly increasing, a
            dimension has too few ticks, the table length is not the number
            of cells, or an entry is negative or not finite.
        NonPositiveMassError
            If the table sums to zero.
        """
        kinds = tuple(_parse_kind(k) for k in kind)
        if len(ticks_collection) != len(kinds):
            raise InvalidArgumentError(
                f"Got {len(ticks_collection)} tick sequences for {len(kinds)} kinds."
            )
        if not kinds:
            raise InvalidArgumentError("A mixed histogram needs at least one dimension.")

        ticks: list[FloatArray] = []
        for d, (raw, k) in enumerate(zip(ticks_collection, kinds, strict=True)):
            arr = np.array(raw, dtype=np.float64).ravel()
            minimum = 1 if k is Kind.DISCRETE else 2
            if arr.size < minimum:
                raise InvalidArgumentError(
                    f"Dimension {d} is {k} and needs at least {minimum} ticks, got {arr.size}."
                )
            if not np.all(np.isfinite(arr)):
                raise InvalidArgumentError(f"Ticks of dimension {d} must be finite.")
            if np.any(np.diff(arr) <= 0.0):
                raise InvalidArgumentError(f"Ticks of dimension {d} must be strictly increasing.")
            arr.setflags(write=False)
            ticks.append(arr)

        shape = tuple(
            t.size if k is Kind.DISCRETE else t.size - 1 for t, k in zip(ticks, kinds, strict=True)
        )
        table = np.array(probability_table, dtype=np.float64)
        if table.ndim > 1 and table.shape == shape:
            table = table.ravel()
        if table.ndim != 1 or table.size != math.prod(shape):
            raise InvalidArgumentError(
                f"Probability table has {table.size} entries, expected {math.prod(shape)} "
                f"for cell grid {shape}."
            )
        if not np.all(np.isfinite(table)):
            raise InvalidArgumentError("Probabilities must be finite.")
        if np.any(table < 0.0):
            raise InvalidArgumentError("Probabilities must be non-negative.")
        total = float(table.sum())
        if total <= 0.0:
            raise NonPositiveMassError("Probability table must have a positive sum.")

        normalized = table / total
        table.setflags(write=False)
        normalized.setflags(write=False)

        with self._lock:
            self._ticks = tuple(ticks)
            self._kinds = kinds
            self._table = table
            self._normalized = normalized
            self._shape = shape
            self._grid = normalized.reshape(shape)
            self._discrete_indices = tuple(i for i, k in enumerate(kinds) if k is Kind.DISCRETE)
            self._continuous_indices = tuple(
                i for i, k in enumerate(kinds) if k is Kind.CONTINUOUS
            )
            self._lower = np.array([t[0] for t in ticks])
            self._upper = np.array([t[-1] for t in ticks])
            self._mean = None
            self._covariance = None
            self._version += 1
        logger.debug("Mixed histogram set to cell grid %s (version %d)", shape, self._version)

    def set_ticks_collection(self, ticks_collection: TicksArg) -> None:
        """Replace the ticks; the kinds and table must stay consistent."""
        self.set_parameters(ticks_collection, self._kinds, self._table)

    def set_kind(self, kind: KindArg) -> None:
        """Replace the kinds; the ticks and table must stay consistent."""
        self.set_parameters(self._ticks, kind, self._table)

    def set_probability_table(self, probability_table: TableArg) -> None:
        """Replace the table; its length must match the cell grid."""
        self.set_parameters(self._ticks, self._kinds, probability_table)

    @property
    def ticks_collection(self) -> list[FloatArray]:
        """Tick sequence of every dimension."""
        return [t.copy() for t in self._ticks]

    @property
    def kind(self) -> list[Kind]:
        """Kind of every dimension."""
        return list(self._kinds)

    @property
    def probability_table(self) -> FloatArray:
        """Table as given, before normalization."""
        return self._table.copy()

    @property
    def normalized_probability_table(self) -> FloatArray:
        """Table divided by its sum (read-only view)."""
        return self._normalized

    @property
    def dimension(self) -> int:
        return len(self._kinds)

    @property
    def shape(self) -> tuple[int, ...]:
        """Number of choices (ticks or bins) per dimension."""
        return self._shape

    @property
    def cell_count(self) -> int:
        return int(self._normalized.size)

    @property
    def discrete_indices(self) -> tuple[int, ...]:
        return self._discrete_indices

    @property
    def continuous_indices(self) -> tuple[int, ...]:
        return self._continuous_indices

    @property
    def version(self) -> int:
        """Counter bumped by every successful mutation."""
        return self._version

    @property
    def range(self) -> tuple[FloatArray, FloatArray]:
        """Smallest and largest tick of every dimension."""
        return self._lower.copy(), self._upper.copy()

    def is_continuous(self) -> bool:
        return not self._discrete_indices

    def is_discrete(self) -> bool:
        return not self._continuous_indices

    def is_integral(self) -> bool:
        """Discrete with integer-valued ticks only."""
        return self.is_discrete() and all(bool(np.all(t == np.round(t))) for t in self._ticks)

    # ------------------------------------------------------------------ #
    # Evaluation kernels
    # ------------------------------------------------------------------ #

    def _evaluate(
        self, x: Number | NumericArray, kernel: Callable[[FloatArray], Any]
    ) -> Any:
        """Apply a single-point kernel to one point or to each row of a batch."""
        arr = np.asarray(x, dtype=np.float64)
        dim = self.dimension
        if arr.ndim == 0 and dim == 1:
            return kernel(arr.reshape(1))
        if arr.ndim == 1 and arr.size == dim:
            return kernel(arr)
        if arr.ndim == 1 and dim == 1:
            return np.array([kernel(row) for row in arr.reshape(-1, 1)])
        if arr.ndim == 2 and arr.shape[1] == dim:
            return np.array([kernel(row) for row in arr])
        raise InvalidArgumentError(
            f"Expected a point of dimension {dim} or an (n, {dim}) array, got shape {arr.shape}."
        )

    def _contract(self, factors: Sequence[NumericArray]) -> Any:
        """``sum_cells P(cell) * prod_d factors[d][cell_d]``."""
        result: Any = self._grid
        for factor in factors:
            result = np.tensordot(factor, result, axes=([0], [0]))
        return result[()]

    def _pdf_point(self, point: FloatArray) -> float:
        index: list[int] = []
        volume = 1.0
        for d, (ticks, kind) in enumerate(zip(self._ticks, self._kinds, strict=True)):
            xd = point[d]
            if kind is Kind.DISCRETE:
                j = int(np.searchsorted(ticks, xd))
                if j == ticks.size or ticks[j] != xd:
                    return 0.0
            else:
                if not ticks[0] <= xd <= ticks[-1]:
                    return 0.0
                j = min(int(np.searchsorted(ticks, xd, side="right")) - 1, ticks.size - 2)
                volume *= ticks[j + 1] - ticks[j]
            index.append(j)
        return float(self._grid[tuple(index)] / volume)

    def _cdf_point(self, point: FloatArray) -> float:
        factors: list[FloatArray] = []
        for d, (ticks, kind) in enumerate(zip(self._ticks, self._kinds, strict=True)):
            if kind is Kind.DISCRETE:
                factors.append((ticks <= point[d]).astype(np.float64))
            else:
                fraction = (point[d] - ticks[:-1]) / np.diff(ticks)
                factors.append(np.clip(fraction, 0.0, 1.0))
        return float(self._contract(factors))

    def _cf_point(self, u: FloatArray) -> complex:
        factors: list[ComplexArray] = []
        for d, (ticks, kind) in enumerate(zip(self._ticks, self._kinds, strict=True)):
            ud = u[d]
            if kind is Kind.DISCRETE:
                factors.append(np.exp(1j * ud * ticks))
            elif ud == 0.0:
                factors.append(np.ones(ticks.size - 1, dtype=np.complex128))
            else:
                left, right = ticks[:-1], ticks[1:]
                factors.append(
                    (np.exp(1j * ud * right) - np.exp(1j * ud * left)) / (1j * ud * (right - left))
                )
        return complex(self._contract(factors))

    def compute_pdf(self, x: Number | NumericArray) -> Any:
        """
        Density with respect to counting measure on discrete dimensions and
        Lebesgue measure on continuous ones.

        Discrete coordinates must equal a tick exactly; the value is the mass
        of the single matching cell divided by the volume of its bins.
        Points outside the range have density 0.
        """
        return self._evaluate(x, self._pdf_point)

    def compute_cdf(self, x: Number | NumericArray) -> Any:
        """
        ``P(X <= x)``: full mass of the cells below ``x`` plus, for cells
        straddling ``x`` in continuous dimensions, the product of the
        fractional positions of ``x`` inside their bins.
        """
        return self._evaluate(x, self._cdf_point)

    def compute_complementary_cdf(self, x: Number | NumericArray) -> Any:
        """``1 - CDF(x)``."""
        return self._evaluate(x, lambda p: 1.0 - self._cdf_point(p))

    def compute_characteristic_function(self, u: Number | NumericArray) -> Any:
        """``E[exp(i <u, X>)]``."""
        return self._evaluate(u, self._cf_point)

    def _path_scale(self, span: FloatArray) -> float:
        # Narrowest tick gap relative to the path length, over non-degenerate dimensions
        scales = [
            float(np.min(np.diff(ticks))) / width
            for ticks, width in zip(self._ticks, span, strict=True)
            if width > 0.0
        ]
        return min(scales, default=1.0)

    def compute_quantile(self, prob: float, tail: bool = False) -> FloatArray:
        """
        Point ``x`` on the diagonal path from the lower to the upper range
        corner such that ``CDF(x) = prob``.

        The path is ``x(t) = lower + t * (upper - lower)``. Bisection on ``t``
        returns the smallest path point with ``CDF >= prob`` (inclusive lower
        bound), so a probability landing on the cumulative boundary of an
        atom returns the atom itself. Discrete coordinates are then snapped
        down to their tick.

        Bisection stops once the bracket in ``t`` is narrower than
        ``quantile_epsilon`` times the narrowest tick gap along the path, so
        narrow bins next to wide ones are resolved as well.

        Parameters
        ----------
        prob : float
            Probability in ``[0, 1]``.
        tail : bool, default False
            If True, return the quantile of ``1 - prob``.

        Raises
        ------
        InvalidArgumentError
            If ``prob`` is not in ``[0, 1]``.
        """
        p = float(prob)
        if not 0.0 <= p <= 1.0:
            raise InvalidArgumentError(f"Probability must be in [0, 1], got {prob}.")
        if tail:
            p = 1.0 - p

        settings = get_settings()
        lower, span = self._lower, self._upper - self._lower
        # Rounding may keep the total below 1
        target = min(p, self._cdf_point(self._upper))

        if self._cdf_point(lower) >= target:
            t = 0.0
        else:
            lo, hi = 0.0, 1.0
            iterations = 0
            max_iterations = settings.quantile_max_iterations
            resolution = settings.quantile_epsilon * self._path_scale(span)
            while hi - lo > resolution and iterations < max_iterations:
                mid = 0.5 * (lo + hi)
                if not lo < mid < hi:
                    break
                if self._cdf_point(lower + mid * span) >= target:
                    hi = mid
                else:
                    lo = mid
                iterations += 1
            t = hi

        point = lower + t * span
        for d in self._discrete_indices:
            ticks = self._ticks[d]
            j = max(int(np.searchsorted(ticks, point[d], side="right")) - 1, 0)
            point[d] = ticks[j]
        return point

    # ------------------------------------------------------------------ #
    # Moments
    # ------------------------------------------------------------------ #

    def _marginal_masses(self, d: int) -> FloatArray:
        axes = tuple(a for a in range(self.dimension) if a != d)
        return cast("FloatArray", self._grid.sum(axis=axes) if axes else self._grid)

    def _choice_moments(self, d: int, order: int, center: float = 0.0) -> FloatArray:
        """``E[(X_d - center)**order]`` inside every choice of dimension ``d``."""
        ticks = self._ticks[d]
        if self._kinds[d] is Kind.DISCRETE:
            return cast("FloatArray", (ticks - center) ** order)
        return _bin_moments(ticks[:-1], ticks[1:], order, center)

    def _central_moment(self, order: int) -> FloatArray:
        mean = self.mean()
        return np.array(
            [
                float(self._marginal_masses(d) @ self._choice_moments(d, order, mean[d]))
                for d in range(self.dimension)
            ]
        )

    def mean(self) -> FloatArray:
        """Mean vector (cached until the next mutation)."""
        with self._lock:
            if self._mean is None:
                self._mean = np.array(
                    [
                        float(self._marginal_masses(d) @ self._choice_moments(d, 1))
                        for d in range(self.dimension)
                    ]
                )
            return self._mean.copy()

    def covariance(self) -> FloatArray:
        """
        Covariance matrix (cached until the next mutation).

        Within a cell the coordinates are independent, so off-diagonal terms
        only involve cell means while diagonal terms add the bin variances.
        """
        with self._lock:
            if self._covariance is None:
                dim = self.dimension
                mean = self.mean()
                cov = np.diag(self._central_moment(2))
                centered = [self._choice_moments(d, 1) - mean[d] for d in range(dim)]
                for d in range(dim):
                    for e in range(d + 1, dim):
                        others = tuple(a for a in range(dim) if a not in (d, e))
                        pair = self._grid.sum(axis=others) if others else self._grid
                        cov[d, e] = cov[e, d] = float(centered[d] @ pair @ centered[e])
                self._covariance = cov
            return self._covariance.copy()

    def standard_deviation(self) -> FloatArray:
        return cast("FloatArray", np.sqrt(np.diag(self.covariance())))

    def _normalized_central_moment(self, order: int, name: str) -> FloatArray:
        sigma = self.standard_deviation()
        if np.any(sigma == 0.0):
            warnings.warn(
                f"{name} is undefined for dimensions with zero variance; returning nan there.",
                RuntimeWarning,
                stacklevel=3,
            )
        with np.errstate(divide="ignore", invalid="ignore"):
            result = self._central_moment(order) / sigma**order
        return cast("FloatArray", np.where(sigma == 0.0, np.nan, result))

    def skewness(self) -> FloatArray:
        """Per-dimension skewness ``E[(X - mu)^3] / sigma^3``."""
        return self._normalized_central_moment(3, "Skewness")

    def kurtosis(self) -> FloatArray:
        """Per-dimension (non-excess) kurtosis ``E[(X - mu)^4] / sigma^4``."""
        return self._normalized_central_moment(4, "Kurtosis")

    def standard_moment(self, n: int) -> FloatArray:
        """
        Per-dimension raw moment ``E[X_d^n]``.

        The distribution is its own standard representative, so its standard
        moments are its raw moments.
        """
        if n < 0:
            raise InvalidArgumentError(f"Moment order must be non-negative, got {n}.")
        return np.array(
            [
                float(self._marginal_masses(d) @ self._choice_moments(d, n))
                for d in range(self.dimension)
            ]
        )

    # ------------------------------------------------------------------ #
    # Structure
    # ------------------------------------------------------------------ #

    def _check_indices(self, indices: int | Sequence[int]) -> list[int]:
        if isinstance(indices, int | np.integer):
            chosen = [int(indices)]
        else:
            chosen = [int(i) for i in indices]
        if not chosen:
            raise InvalidArgumentError("Marginal indices must not be empty.")
        if len(set(chosen)) != len(chosen):
            raise InvalidArgumentError(f"Marginal indices must be distinct, got {chosen}.")
        for i in chosen:
            if not 0 <= i < self.dimension:
                raise InvalidArgumentError(
                    f"Marginal index {i} is out of range for dimension {self.dimension}."
                )
        return chosen

    def marginal(self, indices: int | Sequence[int]) -> MixedHistogramModel:
        """
        Model of the sub-vector ``X[indices]``, in the requested order.

        The joint table is summed over the dropped dimensions.
        """
        chosen = self._check_indices(indices)
        dropped = tuple(d for d in range(self.dimension) if d not in chosen)
        table = self._grid.sum(axis=dropped) if dropped else self._grid
        kept = sorted(chosen)
        table = np.transpose(table, [kept.index(i) for i in chosen])
        return MixedHistogramModel(
            [self._ticks[i] for i in chosen],
            [self._kinds[i] for i in chosen],
            np.ascontiguousarray(table).ravel(),
        )

    def cell_choices(self, cells: NumericArray) -> tuple[NumericArray, ...]:
        """Per-dimension choice index (tick or bin) of flat cell indices."""
        return np.unravel_index(np.asarray(cells, dtype=np.intp), self._shape)

    def tick_arrays(self) -> tuple[FloatArray, ...]:
        """Internal read-only tick arrays."""
        return self._ticks

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MixedHistogramModel):
            return NotImplemented
        if self is other:
            return True
        if self._kinds != other._kinds:
            return False
        if not all(np.array_equal(a, b) for a, b in zip(self._ticks, other._ticks, strict=True)):
            return False
        tolerance = get_settings().table_tolerance
        return bool(np.allclose(self._normalized, other._normalized, rtol=0.0, atol=tolerance))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        ticks = [t.tolist() for t in self._ticks]
        kinds = [str(k) for k in self._kinds]
        return (
            f"{type(self).__name__}(ticks_collection={ticks}, kind={kinds}, "
            f"probability_table={self._table.tolist()})"
        )


__all__ = [
    "MixedHistogramModel",
]
