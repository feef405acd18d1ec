"""
Distributions subpackage

Interfaces and implementations of the mixed discrete/continuous histogram
distribution:

- distribution protocol (:mod:`.distribution`);
- histogram data model (:mod:`.histogram_model`);
- alias-method tables (:mod:`.alias`);
- the public distribution (:mod:`.mixed_histogram`);
- mixture view and persistence (:mod:`.mixture`, :mod:`.persistence`);
- sampling protocol and array-backed samples (:mod:`.sampling`);
- supports (:mod:`.support`);
- pluggable strategies (:mod:`.strategies`).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"
from .alias import AliasTables, build_alias_tables, draw, draw_many
from .characteristics import GenericCharacteristic
from .computation import AnalyticalComputation, Computation
from .distribution import Distribution
from .histogram_model import MixedHistogramModel
from .mixed_histogram import MixedHistogramDistribution
from .mixture import CellComponent, Mixture
from .persistence import (
    deserialize_mixed_histogram,
    dumps,
    loads,
    serialize_mixed_histogram,
)
from .sampling import ArraySample, Sample
from .strategies import (
    AliasSamplingStrategy,
    ComputationStrategy,
    DefaultComputationStrategy,
    SamplingStrategy,
)
from .support import (
    ContinuousSupport,
    ExplicitTableDiscreteSupport,
    ProductSupport,
    Support,
)

__all__ = [
    # computation primitives
    "AnalyticalComputation",
    "Computation",
    "GenericCharacteristic",
    # distribution
    "Distribution",
    "MixedHistogramModel",
    "MixedHistogramDistribution",
    # alias method
    "AliasTables",
    "build_alias_tables",
    "draw",
    "draw_many",
    # mixture and persistence
    "CellComponent",
    "Mixture",
    "serialize_mixed_histogram",
    "deserialize_mixed_histogram",
    "dumps",
    "loads",
    # sampling
    "Sample",
    "ArraySample",
    # strategies
    "ComputationStrategy",
    "DefaultComputationStrategy",
    "SamplingStrategy",
    "AliasSamplingStrategy",
    # supports
    "Support",
    "ContinuousSupport",
    "ExplicitTableDiscreteSupport",
    "ProductSupport",
]
