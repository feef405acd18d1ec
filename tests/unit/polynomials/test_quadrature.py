from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from unittest.mock import patch

import numpy as np
import pytest
from scipy.linalg import LinAlgError
from scipy.special import roots_hermitenorm, roots_laguerre, roots_legendre

from pysatl_uq.exceptions import InvalidArgumentError, NumericalError
from pysatl_uq.polynomials import QuadratureResult, nodes_and_weights, roots


def chebychev_roots(n: int) -> np.ndarray:
    return np.sort(np.cos((2.0 * np.arange(n) + 1.0) * math.pi / (2.0 * n)))


class TestChebychevQuadrature:
    @pytest.mark.parametrize("n", [1, 2, 5, 64, 300])
    def test_roots_closed_form(self, n):
        np.testing.assert_allclose(roots("Chebychev", n), chebychev_roots(n), atol=1e-12)

    @pytest.mark.parametrize("n", [1, 3, 17, 200])
    def test_weights_are_uniform(self, n):
        result = nodes_and_weights("Chebychev", n)
        np.testing.assert_allclose(result.nodes, chebychev_roots(n), atol=1e-12)
        np.testing.assert_allclose(result.weights, np.full(n, 1.0 / n), rtol=1e-8)

    def test_integrates_even_moments_exactly(self):
        rule = nodes_and_weights("Chebychev", 6)
        # arcsine measure: E[x^2] = 1/2, E[x^4] = 3/8
        assert rule.integrate(lambda x: x**2) == pytest.approx(0.5, abs=1e-13)
        assert rule.integrate(lambda x: x**4) == pytest.approx(0.375, abs=1e-13)


class TestReferenceRules:
    @pytest.mark.parametrize("n", [2, 10, 40])
    def test_legendre(self, n):
        x, w = roots_legendre(n)
        result = nodes_and_weights("Legendre", n)
        np.testing.assert_allclose(result.nodes, x, atol=1e-13)
        np.testing.assert_allclose(result.weights, w / 2.0, rtol=1e-9)

    @pytest.mark.parametrize("n", [2, 10, 30])
    def test_hermite(self, n):
        x, w = roots_hermitenorm(n)
        result = nodes_and_weights("Hermite", n)
        np.testing.assert_allclose(result.nodes, x, atol=1e-11)
        np.testing.assert_allclose(result.weights, w / math.sqrt(2.0 * math.pi), atol=1e-12)

    @pytest.mark.parametrize("n", [2, 10, 30])
    def test_laguerre(self, n):
        x, w = roots_laguerre(n)
        result = nodes_and_weights("Laguerre", n)
        np.testing.assert_allclose(result.nodes, x, rtol=1e-10)
        np.testing.assert_allclose(result.weights, w, atol=1e-12)

    def test_legendre_roots_large_order(self):
        x, _ = roots_legendre(400)
        np.testing.assert_allclose(roots("Legendre", 400), x, atol=1e-12)


class TestQuadratureProperties:
    @pytest.mark.parametrize("family", ["Chebychev", "Legendre", "Hermite", "Laguerre"])
    @pytest.mark.parametrize("n", [1, 4, 25])
    def test_positive_weights_summing_to_zeroth_moment(self, family, n):
        result = nodes_and_weights(family, n)
        assert np.all(result.weights > 0.0)
        assert result.weights.sum() == pytest.approx(1.0, rel=1e-12)

    @pytest.mark.parametrize("family", ["Legendre", "Hermite", "Laguerre"])
    def test_nodes_ascending(self, family):
        nodes = roots(family, 20)
        assert np.all(np.diff(nodes) > 0.0)

    def test_exact_for_polynomials_up_to_degree_2n_minus_1(self):
        rule = nodes_and_weights("Hermite", 4)
        # standard normal: E[x^6] = 15
        assert rule.integrate(lambda x: x**6) == pytest.approx(15.0, rel=1e-12)
        assert rule.integrate(lambda x: x**7) == pytest.approx(0.0, abs=1e-10)

    def test_unpacks_as_pair(self):
        nodes, weights = nodes_and_weights("Legendre", 3)
        assert isinstance(nodes_and_weights("Legendre", 3), QuadratureResult)
        np.testing.assert_allclose(nodes, [-math.sqrt(0.6), 0.0, math.sqrt(0.6)], atol=1e-14)
        np.testing.assert_allclose(weights, [5.0 / 18.0, 8.0 / 18.0, 5.0 / 18.0], rtol=1e-12)

    @pytest.mark.parametrize("n", [0, -1])
    def test_invalid_order(self, n):
        with pytest.raises(InvalidArgumentError):
            nodes_and_weights("Legendre", n)
        with pytest.raises(InvalidArgumentError):
            roots("Legendre", n)


class TestEigensolverFailure:
    def test_nodes_and_weights_wraps_linalg_error(self):
        with patch(
            "pysatl_uq.polynomials.quadrature.eigh_tridiagonal",
            side_effect=LinAlgError("no convergence"),
        ):
            with pytest.raises(NumericalError, match="did not converge") as info:
                nodes_and_weights("Legendre", 5)
        assert isinstance(info.value.__cause__, LinAlgError)

    def test_roots_wraps_linalg_error(self):
        with patch(
            "pysatl_uq.polynomials.quadrature.eigh_tridiagonal",
            side_effect=LinAlgError("no convergence"),
        ):
            with pytest.raises(NumericalError):
                roots("Hermite", 5)
