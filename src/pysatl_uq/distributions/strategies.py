"""
Computation and Sampling Strategies
===================================

This module defines the pluggable strategy interfaces and default implementations:

- :class:`ComputationStrategy` — resolves characteristic methods.
- :class:`DefaultComputationStrategy` — resolves analytical computations,
  optionally memoizing the lookup per characteristic.
- :class:`SamplingStrategy` — draws samples from a distribution.
- :class:`AliasSamplingStrategy` — draws ``(n, d)`` samples from a mixed
  histogram with the alias method: one cell per realization, then exact ticks
  in discrete dimensions and uniform draws inside bins in continuous ones.
"""

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from typing import TYPE_CHECKING, Any, Protocol

import numpy as np

from pysatl_uq.distributions.alias import draw_many
from pysatl_uq.distributions.computation import AnalyticalComputation
from pysatl_uq.exceptions import InvalidArgumentError
from pysatl_uq.types import GenericCharacteristicName, Kind

from .sampling import ArraySample, Sample

if TYPE_CHECKING:
    from .alias import AliasTables
    from .distribution import Distribution
    from .histogram_model import MixedHistogramModel

type Method[In, Out] = AnalyticalComputation[In, Out]

logger = logging.getLogger(__name__)


class ComputationStrategy[In, Out](Protocol):
    """Protocol for characteristic resolution strategies."""

    enable_caching: bool

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]: ...


class DefaultComputationStrategy[In, Out]:
    """
    Default characteristic resolver.

    Returns the analytical implementation the distribution provides for the
    requested characteristic.

    Parameters
    ----------
    enable_caching : bool, default False
        If ``True``, remember resolved methods keyed by characteristic and
        distribution identity.

    Raises
    ------
    InvalidArgumentError
        If the distribution does not provide the characteristic.
    """

    def __init__(self, enable_caching: bool = False) -> None:
        self.enable_caching = enable_caching
        self._cache: dict[tuple[int, GenericCharacteristicName], Method[In, Out]] = {}

    def query_method(
        self, state: GenericCharacteristicName, distr: "Distribution", **options: Any
    ) -> Method[In, Out]:
        """
        Resolve the analytical method for ``state``.

        Parameters
        ----------
        state : str
            Target characteristic name to resolve.
        distr : Distribution
            The distribution providing the analytical computations.
        **options
            Unused; accepted for interface compatibility.

        Returns
        -------
        Method
            Analytical callable implementing ``state``.
        """
        key = (id(distr), state)
        if self.enable_caching and key in self._cache:
            return self._cache[key]

        computations = distr.analytical_computations
        if state not in computations:
            available = ", ".join(sorted(computations))
            raise InvalidArgumentError(
                f"Characteristic '{state}' is not available; known characteristics: {available}."
            )

        method: Method[In, Out] = computations[state]
        if self.enable_caching:
            self._cache[key] = method
        return method


class SamplingStrategy(Protocol):
    """Protocol for sampling strategies (return a :class:`Sample`)."""

    def sample(self, n: int, distr: "Distribution", **options: Any) -> Sample: ...


class AliasSampled(Protocol):
    """What :class:`AliasSamplingStrategy` needs from a distribution."""

    @property
    def model(self) -> "MixedHistogramModel": ...

    def alias_tables(self) -> "AliasTables": ...


class AliasSamplingStrategy(SamplingStrategy):
    """
    Alias-method sampler for mixed histograms.

    Every realization consumes two uniforms to pick a cell and one uniform per
    continuous dimension to place the point inside the cell's bin.

    Options
    -------
    rng : numpy.random.Generator, optional
        Source of uniforms; ``np.random.default_rng()`` by default.

    Returns
    -------
    ArraySample
        A 2D sample of shape ``(n, d)``.
    """

    def sample(self, n: int, distr: "Distribution", **options: Any) -> ArraySample:
        if n < 0:
            raise InvalidArgumentError(f"Sample size must be non-negative, got {n}.")
        if not hasattr(distr, "alias_tables"):
            raise InvalidArgumentError(
                f"{type(distr).__name__} does not provide alias tables for sampling."
            )
        sampled: AliasSampled = distr  # type: ignore[assignment]
        rng: np.random.Generator | None = options.get("rng")
        if rng is None:
            rng = np.random.default_rng()

        model = sampled.model
        tables = sampled.alias_tables()
        uniforms = rng.random((2, n))
        cells = draw_many(tables, uniforms[0], uniforms[1])
        choices = model.cell_choices(cells)

        values = np.empty((n, model.dimension), dtype=np.float64)
        ticks = model.tick_arrays()
        for d, kind in enumerate(model.kind):
            j = choices[d]
            if kind is Kind.DISCRETE:
                values[:, d] = ticks[d][j]
            else:
                left, right = ticks[d][j], ticks[d][j + 1]
                values[:, d] = left + rng.random(n) * (right - left)

        logger.debug("Drew %d realizations from %d cells", n, tables.size)
        return ArraySample(values)


__all__ = [
    "Method",
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "AliasSamplingStrategy",
]
