"""
Mixed Histogram Distribution
============================

Public distribution built on :class:`MixedHistogramModel`. It exposes the
model's evaluations and moments as analytical computations, draws samples
with the alias method and converts to a finite mixture.

Notes
-----
- Alias tables are built lazily, at most once per model version; concurrent
  samplers share one build.
- Mutators change the underlying model in place; the next sample rebuilds the
  alias tables.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
import threading
from typing import TYPE_CHECKING, Any

import numpy as np

from pysatl_uq.distributions.alias import AliasTables, build_alias_tables
from pysatl_uq.distributions.computation import AnalyticalComputation
from pysatl_uq.distributions.histogram_model import MixedHistogramModel
from pysatl_uq.distributions.mixture import CellComponent, Mixture
from pysatl_uq.distributions.persistence import (
    deserialize_mixed_histogram,
    serialize_mixed_histogram,
)
from pysatl_uq.distributions.strategies import (
    AliasSamplingStrategy,
    DefaultComputationStrategy,
)
from pysatl_uq.distributions.support import (
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
    ProductSupport,
)
from pysatl_uq.types import CharacteristicName, EuclideanDistributionType, Kind

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from pysatl_uq.distributions.histogram_model import KindArg, TableArg, TicksArg
    from pysatl_uq.distributions.sampling import ArraySample
    from pysatl_uq.distributions.strategies import ComputationStrategy, SamplingStrategy
    from pysatl_uq.types import FloatArray, GenericCharacteristicName, Number, NumericArray

logger = logging.getLogger(__name__)


class MixedHistogramDistribution:
    """
    Multivariate distribution with discrete and continuous dimensions joined
    by a probability table.

    Parameters
    ----------
    ticks_collection, kind, probability_table : optional
        Model parameters, see :class:`MixedHistogramModel`. Omitted together,
        they give the uniform distribution on ``[0, 1]``.
    model : MixedHistogramModel, optional
        Existing model to wrap instead of the parameters.
    sampling_strategy : SamplingStrategy, optional
        Defaults to :class:`AliasSamplingStrategy`.
    computation_strategy : ComputationStrategy, optional
        Defaults to :class:`DefaultComputationStrategy`.

    Examples
    --------
    >>> d = MixedHistogramDistribution([[0.0, 1.0, 2.0]], ["discrete"], [0.2, 0.3, 0.5])
    >>> d.compute_cdf(1.0)
    0.5
    """

    def __init__(
        self,
        ticks_collection: TicksArg | None = None,
        kind: KindArg | None = None,
        probability_table: TableArg | None = None,
        *,
        model: MixedHistogramModel | None = None,
        sampling_strategy: SamplingStrategy | None = None,
        computation_strategy: ComputationStrategy[Any, Any] | None = None,
    ) -> None:
        if model is None:
            model = MixedHistogramModel(ticks_collection, kind, probability_table)
        elif any(arg is not None for arg in (ticks_collection, kind, probability_table)):
            raise TypeError("Pass either a model or its parameters, not both.")
        self._model = model
        self._sampling_strategy = sampling_strategy or AliasSamplingStrategy()
        self._computation_strategy: ComputationStrategy[Any, Any] = (
            computation_strategy or DefaultComputationStrategy()
        )
        self._alias_lock = threading.Lock()
        self._alias: tuple[int, AliasTables] | None = None

    # ------------------------------------------------------------------ #
    # Distribution protocol
    # ------------------------------------------------------------------ #

    @property
    def model(self) -> MixedHistogramModel:
        return self._model

    @property
    def distribution_type(self) -> EuclideanDistributionType:
        if self._model.is_discrete():
            kind = Kind.DISCRETE
        elif self._model.is_continuous():
            kind = Kind.CONTINUOUS
        else:
            kind = Kind.MIXED
        return EuclideanDistributionType(kind, self._model.dimension)

    @property
    def analytical_computations(
        self,
    ) -> Mapping[GenericCharacteristicName, AnalyticalComputation[Any, Any]]:
        """
        Closed-form characteristics.

        Point characteristics take a point, ``ppf`` a probability (and the
        ``tail`` option), ``standardized_moment`` an order; moment summaries
        ignore their argument. ``pmf`` is only provided when every dimension
        is discrete.
        """
        m = self._model
        funcs: dict[str, Any] = {
            CharacteristicName.PDF: lambda x, **_: m.compute_pdf(x),
            CharacteristicName.CDF: lambda x, **_: m.compute_cdf(x),
            CharacteristicName.SF: lambda x, **_: m.compute_complementary_cdf(x),
            CharacteristicName.PPF: lambda p, **kw: m.compute_quantile(
                p, tail=kw.get("tail", False)
            ),
            CharacteristicName.CF: lambda u, **_: m.compute_characteristic_function(u),
            CharacteristicName.MEAN: lambda _=None, **__: m.mean(),
            CharacteristicName.VAR: lambda _=None, **__: np.diag(m.covariance()),
            CharacteristicName.STD: lambda _=None, **__: m.standard_deviation(),
            CharacteristicName.SKEW: lambda _=None, **__: m.skewness(),
            CharacteristicName.KURT: lambda _=None, **__: m.kurtosis(),
            CharacteristicName.STANDARD_MOMENT: lambda n, **_: m.standard_moment(int(n)),
        }
        if m.is_discrete():
            funcs[CharacteristicName.PMF] = lambda x, **_: m.compute_pdf(x)
        return {
            str(name): AnalyticalComputation(target=str(name), func=func)
            for name, func in funcs.items()
        }

    @property
    def sampling_strategy(self) -> SamplingStrategy:
        return self._sampling_strategy

    @property
    def computation_strategy(self) -> ComputationStrategy[Any, Any]:
        return self._computation_strategy

    @property
    def support(self) -> ProductSupport:
        components: list[ContinuousSupport | ExplicitTableDiscreteSupport] = []
        for ticks, kind in zip(self._model.tick_arrays(), self._model.kind, strict=True):
            if kind is Kind.DISCRETE:
                components.append(ExplicitTableDiscreteSupport(ticks, assume_sorted=True))
            else:
                components.append(ContinuousSupport(float(ticks[0]), float(ticks[-1])))
        return ProductSupport(components)

    def query_method(
        self, characteristic_name: GenericCharacteristicName, **options: Any
    ) -> AnalyticalComputation[Any, Any]:
        return self._computation_strategy.query_method(characteristic_name, self, **options)

    def calculate_characteristic(
        self, characteristic_name: GenericCharacteristicName, value: Any, **options: Any
    ) -> Any:
        return self.query_method(characteristic_name)(value, **options)

    def sample(self, n: int, **options: Any) -> ArraySample:
        sample = self._sampling_strategy.sample(n, distr=self, **options)
        return sample  # type: ignore[return-value]

    # ------------------------------------------------------------------ #
    # Sampling
    # ------------------------------------------------------------------ #

    def alias_tables(self) -> AliasTables:
        """Alias tables of the current table, built once per model version."""
        version = self._model.version
        cached = self._alias
        if cached is not None and cached[0] == version:
            return cached[1]
        with self._alias_lock:
            cached = self._alias
            if cached is None or cached[0] != version:
                tables = build_alias_tables(self._model.normalized_probability_table)
                cached = self._alias = (version, tables)
                logger.debug("Rebuilt alias tables for model version %d", version)
            return cached[1]

    def get_sample(self, size: int, rng: np.random.Generator | None = None) -> ArraySample:
        """``size`` independent realizations as an ``(size, d)`` sample."""
        return self.sample(size, rng=rng)

    def get_realization(self, rng: np.random.Generator | None = None) -> FloatArray:
        """One realization as a point of dimension ``d``."""
        return self.get_sample(1, rng=rng)[0]

    def as_mixture(self) -> Mixture:
        """Finite mixture of the cells with positive mass."""
        model = self._model
        table = model.normalized_probability_table
        cells = np.flatnonzero(table > 0.0)
        choices = model.cell_choices(cells)
        ticks = model.tick_arrays()
        kinds = tuple(model.kind)

        components = []
        for c in range(cells.size):
            lower = np.empty(model.dimension)
            upper = np.empty(model.dimension)
            closed = []
            for d, kind in enumerate(kinds):
                j = int(choices[d][c])
                if kind is Kind.DISCRETE:
                    lower[d] = upper[d] = ticks[d][j]
                    closed.append(True)
                else:
                    lower[d], upper[d] = ticks[d][j], ticks[d][j + 1]
                    closed.append(j == ticks[d].size - 2)
            components.append(CellComponent(kinds, lower, upper, tuple(closed)))
        return Mixture(table[cells], components)

    # ------------------------------------------------------------------ #
    # Model delegation
    # ------------------------------------------------------------------ #

    @property
    def dimension(self) -> int:
        return self._model.dimension

    @property
    def ticks_collection(self) -> list[FloatArray]:
        return self._model.ticks_collection

    @property
    def kind(self) -> list[Kind]:
        return self._model.kind

    @property
    def probability_table(self) -> FloatArray:
        return self._model.probability_table

    @property
    def range(self) -> tuple[FloatArray, FloatArray]:
        return self._model.range

    def set_ticks_collection(self, ticks_collection: TicksArg) -> None:
        self._model.set_ticks_collection(ticks_collection)

    def set_kind(self, kind: KindArg) -> None:
        self._model.set_kind(kind)

    def set_probability_table(self, probability_table: TableArg) -> None:
        self._model.set_probability_table(probability_table)

    def set_parameters(
        self, ticks_collection: TicksArg, kind: KindArg, probability_table: TableArg
    ) -> None:
        self._model.set_parameters(ticks_collection, kind, probability_table)

    def compute_pdf(self, x: Number | NumericArray) -> Any:
        return self._model.compute_pdf(x)

    def compute_cdf(self, x: Number | NumericArray) -> Any:
        return self._model.compute_cdf(x)

    def compute_complementary_cdf(self, x: Number | NumericArray) -> Any:
        return self._model.compute_complementary_cdf(x)

    def compute_quantile(self, prob: float, tail: bool = False) -> FloatArray:
        return self._model.compute_quantile(prob, tail=tail)

    def compute_characteristic_function(self, u: Number | NumericArray) -> Any:
        return self._model.compute_characteristic_function(u)

    def mean(self) -> FloatArray:
        return self._model.mean()

    def covariance(self) -> FloatArray:
        return self._model.covariance()

    def standard_deviation(self) -> FloatArray:
        return self._model.standard_deviation()

    def skewness(self) -> FloatArray:
        return self._model.skewness()

    def kurtosis(self) -> FloatArray:
        return self._model.kurtosis()

    def standard_moment(self, n: int) -> FloatArray:
        return self._model.standard_moment(n)

    def standard_representative(self) -> MixedHistogramDistribution:
        """The distribution itself: it is already in standard form."""
        return self

    def is_continuous(self) -> bool:
        return self._model.is_continuous()

    def is_discrete(self) -> bool:
        return self._model.is_discrete()

    def is_integral(self) -> bool:
        return self._model.is_integral()

    def marginal(self, indices: int | Sequence[int]) -> MixedHistogramDistribution:
        """Distribution of ``X[indices]``, sharing this distribution's strategies."""
        return MixedHistogramDistribution(
            model=self._model.marginal(indices),
            sampling_strategy=self._sampling_strategy,
            computation_strategy=self._computation_strategy,
        )

    # ------------------------------------------------------------------ #
    # Persistence and representation
    # ------------------------------------------------------------------ #

    def save(self) -> dict[str, Any]:
        """Versioned, JSON-compatible description of the distribution."""
        return serialize_mixed_histogram(self._model)

    @classmethod
    def load(cls, data: Mapping[str, Any]) -> MixedHistogramDistribution:
        """Inverse of :meth:`save`."""
        return cls(model=deserialize_mixed_histogram(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MixedHistogramDistribution):
            return NotImplemented
        return self._model == other._model

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._model!r})"

    def __str__(self) -> str:
        kinds = ", ".join(str(k) for k in self._model.kind)
        return (
            f"{type(self).__name__}(dimension={self.dimension}, kind=[{kinds}], "
            f"cells={self._model.cell_count})"
        )


__all__ = [
    "MixedHistogramDistribution",
]
