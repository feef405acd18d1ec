"""
Common fixtures and utilities for mixed histogram tests.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import math
from typing import Any

import numpy as np

from pysatl_uq.distributions import MixedHistogramDistribution, MixedHistogramModel
from pysatl_uq.types import Kind


class BaseHistogramTest:
    """Base class for mixed histogram tests"""

    # Precision for floating point comparisons
    CALCULATION_PRECISION = 1e-10

    @staticmethod
    def assert_arrays_almost_equal(
        actual: np.ndarray[Any, Any], expected: np.ndarray[Any, Any], precision: float | None = None
    ) -> None:
        """Helper method to assert arrays are almost equal."""
        if precision is None:
            precision = BaseHistogramTest.CALCULATION_PRECISION

        np.testing.assert_array_almost_equal(actual, expected, decimal=int(-math.log10(precision)))

    @staticmethod
    def discrete_model() -> MixedHistogramModel:
        """Atoms 0, 1, 2 with masses 0.2, 0.3, 0.5."""
        return MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.DISCRETE], [0.2, 0.3, 0.5])

    @staticmethod
    def continuous_model() -> MixedHistogramModel:
        """Bins [0, 1) and [1, 2] with masses 0.4 and 0.6."""
        return MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.CONTINUOUS], [0.4, 0.6])

    @staticmethod
    def mixed_model() -> MixedHistogramModel:
        """
        Discrete dimension {0, 1} outermost, continuous bins [0, 1), [1, 3]
        innermost; table unnormalized (sum 10).
        """
        return MixedHistogramModel(
            [[0.0, 1.0], [0.0, 1.0, 3.0]],
            [Kind.DISCRETE, Kind.CONTINUOUS],
            [1.0, 3.0, 4.0, 2.0],
        )

    @staticmethod
    def three_dimensional_model() -> MixedHistogramModel:
        rng = np.random.default_rng(7)
        return MixedHistogramModel(
            [[0.0, 1.0, 2.0], [0.0, 0.5, 1.0], [-1.0, 1.0]],
            [Kind.DISCRETE, Kind.CONTINUOUS, Kind.DISCRETE],
            rng.random(3 * 2 * 2),
        )

    @classmethod
    def mixed_distribution(cls) -> MixedHistogramDistribution:
        return MixedHistogramDistribution(model=cls.mixed_model())
