from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_uq.config import (
    NumericalSettings,
    configure_settings,
    get_settings,
    reset_settings,
)
from pysatl_uq.exceptions import InvalidArgumentError


class TestNumericalSettings:
    def test_defaults(self) -> None:
        settings = get_settings()
        assert settings == NumericalSettings()
        assert settings.quantile_epsilon == 1e-14
        assert settings.quantile_max_iterations == 200
        assert settings.table_tolerance == 1e-12

    def test_accessor_is_cached(self) -> None:
        assert get_settings() is get_settings()

    def test_configure_and_reset(self) -> None:
        updated = configure_settings(quantile_max_iterations=50)
        assert updated.quantile_max_iterations == 50
        assert get_settings() == updated
        configure_settings(table_tolerance=1e-6)
        assert get_settings().quantile_max_iterations == 50
        reset_settings()
        assert get_settings() == NumericalSettings()

    def test_unknown_field(self) -> None:
        with pytest.raises(InvalidArgumentError, match="Unknown numerical settings"):
            configure_settings(tolerance=1.0)

    @pytest.mark.parametrize(
        "changes",
        [
            {"quantile_epsilon": 0.0},
            {"quantile_max_iterations": 0},
            {"table_tolerance": -1.0},
        ],
    )
    def test_invalid_values_are_not_committed(self, changes) -> None:
        with pytest.raises(InvalidArgumentError):
            configure_settings(**changes)
        assert get_settings() == NumericalSettings()

    def test_settings_are_immutable(self) -> None:
        with pytest.raises(AttributeError):
            get_settings().table_tolerance = 0.5  # type: ignore[misc]
