from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math

import numpy as np
import pytest

from pysatl_uq.exceptions import InvalidArgumentError
from pysatl_uq.polynomials import (
    OrthogonalPolynomialFactory,
    RecurrenceTriple,
    configure_polynomial_families_register,
)
from pysatl_uq.types import PolynomialFamilyName


class TestOrthogonalPolynomialFactory:
    def setup_method(self):
        self.factory = OrthogonalPolynomialFactory(PolynomialFamilyName.CHEBYCHEV)

    def test_accepts_family_object(self):
        family = configure_polynomial_families_register().get("Legendre")
        assert OrthogonalPolynomialFactory(family).family is family

    def test_unknown_family(self):
        with pytest.raises(InvalidArgumentError):
            OrthogonalPolynomialFactory("Jacobi")

    def test_recurrence_coefficients(self):
        assert self.factory.get_recurrence_coefficients(0) == RecurrenceTriple(1.0, 0.0, 0.0)
        assert self.factory.get_recurrence_coefficients(5) == RecurrenceTriple(2.0, 0.0, -1.0)

    def test_roots(self):
        n = 8
        expected = np.sort(np.cos((2.0 * np.arange(n) + 1.0) * math.pi / (2.0 * n)))
        np.testing.assert_allclose(self.factory.get_roots(n), expected, atol=1e-13)

    def test_nodes_and_weights(self):
        rule = self.factory.get_nodes_and_weights(4)
        np.testing.assert_allclose(rule.weights, np.full(4, 0.25), rtol=1e-12)

    def test_build(self):
        t3 = self.factory.build(3)
        assert t3.degree == 3
        np.testing.assert_allclose(t3.coefficients, [0.0, -3.0, 0.0, 4.0], atol=1e-14)
        x = np.linspace(-1.0, 1.0, 9)
        np.testing.assert_allclose(t3(x), np.cos(3.0 * np.arccos(x)), atol=1e-13)

    def test_built_polynomial_roots_match_eigenvalues(self):
        np.testing.assert_allclose(
            self.factory.build(6).roots(), self.factory.get_roots(6), atol=1e-10
        )

    def test_repr(self):
        assert repr(self.factory) == "class=OrthogonalPolynomialFactory family=Chebychev"

    @pytest.mark.parametrize("family", ["Legendre", "Hermite", "Laguerre"])
    def test_built_polynomials_are_orthogonal(self, family):
        factory = OrthogonalPolynomialFactory(family)
        rule = factory.get_nodes_and_weights(12)
        p3, p5 = factory.build(3), factory.build(5)
        assert rule.integrate(lambda x: p3(x) * p5(x)) == pytest.approx(0.0, abs=1e-9)
        assert rule.integrate(lambda x: p3(x) ** 2) > 0.0
