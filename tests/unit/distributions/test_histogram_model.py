"""
Tests for the mixed histogram data model: validation, evaluation kernels,
quantiles, moments, marginals and equality.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import cmath

import numpy as np
import pytest

from pysatl_uq.config import configure_settings
from pysatl_uq.distributions import MixedHistogramModel
from pysatl_uq.exceptions import InvalidArgumentError, NonPositiveMassError, NumericalError
from pysatl_uq.types import Kind

from .base import BaseHistogramTest


class TestValidation:
    def test_default_is_standard_uniform(self):
        model = MixedHistogramModel()
        assert model.dimension == 1
        assert model.kind == [Kind.CONTINUOUS]
        np.testing.assert_array_equal(model.ticks_collection[0], [0.0, 1.0])
        assert model.compute_pdf(0.3) == pytest.approx(1.0)
        assert model.compute_cdf(0.3) == pytest.approx(0.3)

    def test_partial_arguments_rejected(self):
        with pytest.raises(InvalidArgumentError, match="together"):
            MixedHistogramModel([[0.0, 1.0]], [Kind.CONTINUOUS])

    def test_kinds_from_strings(self):
        model = MixedHistogramModel([[0.0, 1.0]], ["discrete"], [1.0, 1.0])
        assert model.kind == [Kind.DISCRETE]

    @pytest.mark.parametrize(
        "ticks, kinds, table, match",
        [
            ([[0.0, 1.0]], [], [1.0], "tick sequences"),
            ([], [], [], "at least one dimension"),
            ([[0.0, 1.0]], ["mixed"], [1.0], "either discrete or continuous"),
            ([[0.0, 1.0]], ["ordinal"], [1.0], "Unknown dimension kind"),
            ([[0.0]], [Kind.CONTINUOUS], [1.0], "at least 2 ticks"),
            ([[]], [Kind.DISCRETE], [], "at least 1 ticks"),
            ([[0.0, 0.0, 1.0]], [Kind.DISCRETE], [1.0, 1.0, 1.0], "strictly increasing"),
            ([[1.0, 0.0]], [Kind.CONTINUOUS], [1.0], "strictly increasing"),
            ([[0.0, np.inf]], [Kind.DISCRETE], [1.0, 1.0], "finite"),
            ([[0.0, 1.0, 2.0]], [Kind.CONTINUOUS], [1.0, 1.0, 1.0], "expected 2"),
            ([[0.0, 1.0]], [Kind.DISCRETE], [1.0, -0.5], "non-negative"),
            ([[0.0, 1.0]], [Kind.DISCRETE], [1.0, np.nan], "finite"),
        ],
        ids=[
            "kinds_length_mismatch",
            "no_dimensions",
            "mixed_kind_per_dimension",
            "unknown_kind",
            "continuous_needs_two_ticks",
            "discrete_needs_one_tick",
            "repeated_tick",
            "decreasing_ticks",
            "infinite_tick",
            "table_length",
            "negative_probability",
            "nan_probability",
        ],
    )
    def test_invalid_parameters(self, ticks, kinds, table, match):
        with pytest.raises(InvalidArgumentError, match=match):
            MixedHistogramModel(ticks, kinds, table)

    def test_zero_mass(self):
        with pytest.raises(NonPositiveMassError) as info:
            MixedHistogramModel([[0.0, 1.0]], [Kind.DISCRETE], [0.0, 0.0])
        assert isinstance(info.value, InvalidArgumentError)
        assert isinstance(info.value, NumericalError)

    def test_table_given_on_cell_grid(self):
        model = MixedHistogramModel(
            [[0.0, 1.0], [0.0, 1.0, 3.0]],
            [Kind.DISCRETE, Kind.CONTINUOUS],
            np.array([[1.0, 3.0], [4.0, 2.0]]),
        )
        assert model == BaseHistogramTest.mixed_model()

    def test_failed_mutation_keeps_state(self):
        model = BaseHistogramTest.discrete_model()
        version = model.version
        with pytest.raises(InvalidArgumentError):
            model.set_probability_table([1.0, 2.0])
        assert model.version == version
        assert model.compute_cdf(1.0) == pytest.approx(0.5)


class TestScenarios(BaseHistogramTest):
    def test_discrete(self):
        model = self.discrete_model()
        assert model.compute_cdf(1.0) == pytest.approx(0.5)
        assert model.compute_pdf(2.0) == pytest.approx(0.5)
        assert model.mean()[0] == pytest.approx(1.3)

    def test_discrete_pdf_requires_exact_tick(self):
        model = self.discrete_model()
        assert model.compute_pdf(1.5) == 0.0
        assert model.compute_pdf(-1.0) == 0.0
        assert model.compute_pdf(3.0) == 0.0

    def test_continuous(self):
        model = self.continuous_model()
        assert model.compute_pdf(0.5) == pytest.approx(0.4)
        assert model.compute_cdf(1.5) == pytest.approx(0.7)

    @pytest.mark.parametrize(
        "x, pdf",
        [(-0.1, 0.0), (0.0, 0.4), (1.0, 0.6), (2.0, 0.6), (2.1, 0.0)],
        ids=["below", "left_edge", "inner_edge", "last_edge_closed", "above"],
    )
    def test_continuous_bin_edges(self, x, pdf):
        assert self.continuous_model().compute_pdf(x) == pytest.approx(pdf)

    def test_complementary_cdf(self):
        model = self.continuous_model()
        assert model.compute_complementary_cdf(1.5) == pytest.approx(0.3)

    def test_batch_evaluation(self):
        model = self.continuous_model()
        self.assert_arrays_almost_equal(
            model.compute_cdf(np.array([-1.0, 0.5, 1.5, 5.0])), np.array([0.0, 0.2, 0.7, 1.0])
        )

    def test_mixed_pdf(self):
        model = self.mixed_model()
        assert model.compute_pdf([1.0, 2.0]) == pytest.approx(0.1)
        assert model.compute_pdf([0.0, 3.0]) == pytest.approx(0.15)
        assert model.compute_pdf([0.5, 0.5]) == 0.0

    def test_mixed_cdf(self):
        model = self.mixed_model()
        assert model.compute_cdf([0.0, 2.0]) == pytest.approx(0.25)
        assert model.compute_cdf([0.5, 0.5]) == pytest.approx(0.05)
        assert model.compute_cdf([1.0, 3.0]) == pytest.approx(1.0)

    def test_batch_points_of_wrong_dimension(self):
        with pytest.raises(InvalidArgumentError, match="dimension 2"):
            self.mixed_model().compute_cdf([0.0, 1.0, 2.0])


class TestTableProperties(BaseHistogramTest):
    @pytest.mark.parametrize(
        "factory", ["discrete_model", "continuous_model", "mixed_model", "three_dimensional_model"]
    )
    def test_normalized_sum_and_extreme_cdf(self, factory):
        model = getattr(self, factory)()
        lower, upper = model.range
        table = model.normalized_probability_table
        assert table.sum() == pytest.approx(1.0, abs=1e-12)
        assert model.compute_cdf(upper) == pytest.approx(1.0, abs=1e-12)
        assert model.compute_cdf(lower) <= table[0] + 1e-15

    def test_raw_table_kept(self):
        model = self.mixed_model()
        self.assert_arrays_almost_equal(model.probability_table, np.array([1.0, 3.0, 4.0, 2.0]))
        self.assert_arrays_almost_equal(
            model.normalized_probability_table, np.array([0.1, 0.3, 0.4, 0.2])
        )

    def test_partitions(self):
        model = self.three_dimensional_model()
        assert model.discrete_indices == (0, 2)
        assert model.continuous_indices == (1,)
        assert model.shape == (3, 2, 2)
        assert model.cell_count == 12


class TestQuantile(BaseHistogramTest):
    @pytest.mark.parametrize("prob", [0.05, 0.4, 0.5, 0.7, 0.99])
    def test_continuous_round_trip(self, prob):
        model = self.continuous_model()
        assert model.compute_cdf(model.compute_quantile(prob)) == pytest.approx(prob, abs=1e-12)

    def test_continuous_median(self):
        model = self.continuous_model()
        assert model.compute_quantile(0.5)[0] == pytest.approx(1.0 + 1.0 / 6.0, abs=1e-12)

    @pytest.mark.parametrize(
        "prob, expected",
        [(0.0, 0.0), (0.2, 0.0), (0.2 + 1e-9, 1.0), (0.5, 1.0), (0.75, 2.0), (1.0, 2.0)],
        ids=["zero", "first_atom_boundary", "just_above", "second_atom_boundary", "inner", "one"],
    )
    def test_atom_boundaries_use_inclusive_lower_bound(self, prob, expected):
        assert self.discrete_model().compute_quantile(prob)[0] == expected

    def test_tail(self):
        model = self.continuous_model()
        self.assert_arrays_almost_equal(
            model.compute_quantile(0.3, tail=True), model.compute_quantile(0.7)
        )

    def test_mixed_path(self):
        model = self.mixed_model()
        point = model.compute_quantile(0.25)
        self.assert_arrays_almost_equal(point, np.array([0.0, 2.0]))
        assert model.compute_cdf(point) == pytest.approx(0.25, abs=1e-12)
        self.assert_arrays_almost_equal(model.compute_quantile(0.7), np.array([1.0, 3.0]))

    def test_discrete_coordinates_are_ticks(self):
        model = self.three_dimensional_model()
        for prob in np.linspace(0.0, 1.0, 11):
            point = model.compute_quantile(prob)
            assert point[0] in model.ticks_collection[0]
            assert point[2] in model.ticks_collection[2]

    @pytest.mark.parametrize("prob", [-0.1, 1.1, float("nan")])
    def test_invalid_probability(self, prob):
        with pytest.raises(InvalidArgumentError, match=r"\[0, 1\]"):
            self.discrete_model().compute_quantile(prob)

    def test_coarser_settings(self):
        configure_settings(quantile_epsilon=1e-3)
        point = self.continuous_model().compute_quantile(0.5)
        assert point[0] == pytest.approx(1.0 + 1.0 / 6.0, abs=5e-3)

    @pytest.mark.parametrize(
        "ticks, expected",
        [([0.0, 1.0, 1e13], 0.5), ([0.0, 1e-3, 1e9], 5e-4), ([0.0, 1e-6, 1e9], 5e-7)],
        ids=["wide_range", "narrow_first_bin", "tiny_first_bin"],
    )
    def test_narrow_bin_next_to_wide_one(self, ticks, expected):
        model = MixedHistogramModel([ticks], [Kind.CONTINUOUS], [0.5, 0.5])
        point = model.compute_quantile(0.25)
        assert point[0] == pytest.approx(expected, rel=1e-9)
        assert model.compute_cdf(point) == pytest.approx(0.25, abs=1e-12)


class TestCharacteristicFunction(BaseHistogramTest):
    def test_at_zero(self):
        assert self.mixed_model().compute_characteristic_function([0.0, 0.0]) == pytest.approx(1.0)

    def test_discrete(self):
        u = 0.7
        expected = sum(
            p * cmath.exp(1j * u * t) for p, t in zip([0.2, 0.3, 0.5], [0.0, 1.0, 2.0])
        )
        assert self.discrete_model().compute_characteristic_function(u) == pytest.approx(expected)

    def test_standard_uniform(self):
        u = 1.3
        expected = (cmath.exp(1j * u) - 1.0) / (1j * u)
        assert MixedHistogramModel().compute_characteristic_function(u) == pytest.approx(expected)


class TestMoments(BaseHistogramTest):
    def test_mixed_mean_and_covariance(self):
        model = self.mixed_model()
        self.assert_arrays_almost_equal(model.mean(), np.array([0.6, 1.25]))
        expected = np.array([[0.24, -0.15], [-0.15, 7.0 / 3.0 - 1.5625]])
        self.assert_arrays_almost_equal(model.covariance(), expected)
        self.assert_arrays_almost_equal(model.standard_deviation(), np.sqrt(np.diag(expected)))

    def test_uniform_moments(self):
        model = MixedHistogramModel([[2.0, 5.0]], [Kind.CONTINUOUS], [1.0])
        assert model.mean()[0] == pytest.approx(3.5)
        assert model.covariance()[0, 0] == pytest.approx(0.75)
        assert model.skewness()[0] == pytest.approx(0.0, abs=1e-12)
        assert model.kurtosis()[0] == pytest.approx(1.8)

    def test_discrete_skewness_and_kurtosis(self):
        model = self.discrete_model()
        ticks = np.array([0.0, 1.0, 2.0])
        probs = np.array([0.2, 0.3, 0.5])
        mu = probs @ ticks
        sigma = np.sqrt(probs @ (ticks - mu) ** 2)
        assert model.skewness()[0] == pytest.approx(probs @ (ticks - mu) ** 3 / sigma**3)
        assert model.kurtosis()[0] == pytest.approx(probs @ (ticks - mu) ** 4 / sigma**4)

    def test_zero_variance_warns(self):
        model = MixedHistogramModel([[1.0, 2.0]], [Kind.DISCRETE], [1.0, 0.0])
        with pytest.warns(RuntimeWarning, match="zero variance"):
            assert np.isnan(model.skewness()[0])
        with pytest.warns(RuntimeWarning, match="zero variance"):
            assert np.isnan(model.kurtosis()[0])

    def test_standard_moments_are_raw_moments(self):
        model = self.mixed_model()
        self.assert_arrays_almost_equal(model.standard_moment(0), np.array([1.0, 1.0]))
        self.assert_arrays_almost_equal(model.standard_moment(1), model.mean())
        self.assert_arrays_almost_equal(model.standard_moment(2), np.array([0.6, 7.0 / 3.0]))
        with pytest.raises(InvalidArgumentError):
            model.standard_moment(-1)

    def test_cache_dropped_on_mutation(self):
        model = self.discrete_model()
        assert model.mean()[0] == pytest.approx(1.3)
        model.set_probability_table([1.0, 0.0, 0.0])
        assert model.mean()[0] == pytest.approx(0.0)
        model.set_ticks_collection([[10.0, 11.0, 12.0]])
        assert model.mean()[0] == pytest.approx(10.0)

    def test_returned_arrays_are_copies(self):
        model = self.discrete_model()
        model.mean()[0] = 100.0
        assert model.mean()[0] == pytest.approx(1.3)


class TestMarginal(BaseHistogramTest):
    def test_single_index(self):
        marginal = self.mixed_model().marginal(1)
        expected = MixedHistogramModel([[0.0, 1.0, 3.0]], [Kind.CONTINUOUS], [0.5, 0.5])
        assert marginal == expected

    def test_all_indices_round_trip(self):
        model = self.three_dimensional_model()
        assert model.marginal([0, 1, 2]) == model

    def test_reordering(self):
        model = self.mixed_model()
        swapped = model.marginal([1, 0])
        assert swapped.kind == [Kind.CONTINUOUS, Kind.DISCRETE]
        assert swapped.compute_pdf([2.0, 1.0]) == pytest.approx(model.compute_pdf([1.0, 2.0]))
        assert swapped.marginal([1, 0]) == model

    def test_associativity(self):
        model = self.three_dimensional_model()
        assert model.marginal([0, 2]).marginal(1) == model.marginal(2)
        assert model.marginal([2, 1, 0]).marginal([2, 0]) == model.marginal([0, 2])

    def test_marginal_cdf_is_joint_cdf_at_upper(self):
        model = self.three_dimensional_model()
        _, upper = model.range
        point = np.array([1.0, 0.7, upper[2]])
        assert model.marginal([0, 1]).compute_cdf(point[:2]) == pytest.approx(
            model.compute_cdf(point)
        )

    @pytest.mark.parametrize(
        "indices, match",
        [([], "empty"), ([0, 0], "distinct"), ([3], "out of range"), (-1, "out of range")],
    )
    def test_invalid_indices(self, indices, match):
        with pytest.raises(InvalidArgumentError, match=match):
            self.three_dimensional_model().marginal(indices)


class TestEquality(BaseHistogramTest):
    def test_scaled_tables_are_equal(self):
        scaled = MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.DISCRETE], [2.0, 3.0, 5.0])
        assert scaled == self.discrete_model()

    def test_kind_matters(self):
        other = MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.CONTINUOUS], [0.4, 0.6])
        assert other != MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.DISCRETE], [0.2, 0.3, 0.5])

    def test_ticks_matter(self):
        shifted = MixedHistogramModel([[0.0, 1.0, 2.5]], [Kind.DISCRETE], [0.2, 0.3, 0.5])
        assert shifted != self.discrete_model()

    def test_tolerance(self):
        nearby = MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.DISCRETE], [0.2, 0.3 + 1e-9, 0.5])
        assert nearby != self.discrete_model()
        configure_settings(table_tolerance=1e-6)
        assert nearby == self.discrete_model()

    def test_not_hashable(self):
        with pytest.raises(TypeError):
            hash(self.discrete_model())


class TestPredicatesAndMutators(BaseHistogramTest):
    def test_predicates(self):
        assert self.discrete_model().is_discrete()
        assert self.discrete_model().is_integral()
        assert not self.discrete_model().is_continuous()
        assert self.continuous_model().is_continuous()
        assert not self.continuous_model().is_integral()
        mixed = self.mixed_model()
        assert not mixed.is_discrete()
        assert not mixed.is_continuous()

    def test_non_integral_ticks(self):
        model = MixedHistogramModel([[0.5, 1.0]], [Kind.DISCRETE], [1.0, 1.0])
        assert model.is_discrete()
        assert not model.is_integral()

    def test_set_kind(self):
        model = MixedHistogramModel([[0.0, 1.0, 2.0]], [Kind.CONTINUOUS], [1.0, 1.0])
        with pytest.raises(InvalidArgumentError, match="expected 3"):
            model.set_kind([Kind.DISCRETE])
        assert model.is_continuous()

    def test_swap_kinds_with_same_cell_count(self):
        model = MixedHistogramModel(
            [[0.0, 1.0, 2.0], [0.0, 1.0, 2.0]],
            [Kind.DISCRETE, Kind.CONTINUOUS],
            np.arange(1.0, 7.0),
        )
        model.set_kind([Kind.CONTINUOUS, Kind.DISCRETE])
        assert model.kind == [Kind.CONTINUOUS, Kind.DISCRETE]
        assert model.compute_pdf([0.5, 2.0]) == pytest.approx(3.0 / 21.0)

    def test_set_parameters_bumps_version(self):
        model = MixedHistogramModel()
        version = model.version
        model.set_parameters([[0.0, 1.0, 2.0]], [Kind.DISCRETE], [1.0, 1.0, 2.0])
        assert model.version == version + 1
        assert model.compute_cdf(1.0) == pytest.approx(0.5)

    def test_repr(self):
        text = repr(self.discrete_model())
        assert text.startswith("MixedHistogramModel(")
        assert "discrete" in text
