"""
Numerical Settings
==================

Process-wide numerical tolerances used by the histogram engine.

- :class:`NumericalSettings` — immutable bundle of tolerances.
- :func:`get_settings` — cached accessor for the active settings.
- :func:`configure_settings` — replace selected fields.
- :func:`reset_settings` — drop overrides and return to defaults.

Notes
-----
Settings are read on every call that needs them, so a change applies to
already constructed distributions as well.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import logging
from dataclasses import dataclass, fields, replace
from functools import lru_cache
from typing import TYPE_CHECKING

from pysatl_uq.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NumericalSettings:
    """
    Numerical tolerances.

    Parameters
    ----------
    quantile_epsilon : float, default 1e-14
        Width of the path-parameter bracket at which quantile bisection stops.
    quantile_max_iterations : int, default 200
        Hard cap on quantile bisection steps.
    table_tolerance : float, default 1e-12
        Absolute tolerance used when comparing normalized probability tables.
    """

    quantile_epsilon: float = 1e-14
    quantile_max_iterations: int = 200
    table_tolerance: float = 1e-12

    def __post_init__(self) -> None:
        if not self.quantile_epsilon > 0.0:
            raise InvalidArgumentError("quantile_epsilon must be positive.")
        if self.quantile_max_iterations < 1:
            raise InvalidArgumentError("quantile_max_iterations must be at least 1.")
        if self.table_tolerance < 0.0:
            raise InvalidArgumentError("table_tolerance must be non-negative.")


_overrides: dict[str, Any] = {}


@lru_cache(maxsize=1)
def get_settings() -> NumericalSettings:
    """
    Return the active numerical settings.

    Returns
    -------
    NumericalSettings
        Defaults updated with the overrides set by :func:`configure_settings`.
    """
    return replace(NumericalSettings(), **_overrides)


def configure_settings(**changes: Any) -> NumericalSettings:
    """
    Override selected numerical settings.

    Parameters
    ----------
    **changes
        Field names of :class:`NumericalSettings` and their new values.

    Returns
    -------
    NumericalSettings
        The new active settings.

    Raises
    ------
    InvalidArgumentError
        If an unknown field is given or a value is out of range.
    """
    known = {f.name for f in fields(NumericalSettings)}
    unknown = set(changes) - known
    if unknown:
        raise InvalidArgumentError(f"Unknown numerical settings: {sorted(unknown)}")

    # Validate before committing
    candidate = replace(get_settings(), **changes)
    _overrides.update(changes)
    get_settings.cache_clear()
    logger.debug("Numerical settings changed: %s", changes)
    return candidate


def reset_settings() -> None:
    """Drop every override and return to the default settings."""
    _overrides.clear()
    get_settings.cache_clear()


__all__ = [
    "NumericalSettings",
    "get_settings",
    "configure_settings",
    "reset_settings",
]
