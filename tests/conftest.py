from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Generator
from typing import Any

import pytest

from pysatl_uq.config import reset_settings
from pysatl_uq.polynomials.configuration import reset_polynomial_families_register

pytest.importorskip("scipy")


@pytest.fixture(autouse=True)
def _fresh_registries() -> Generator[None, Any, None]:
    reset_polynomial_families_register()
    reset_settings()
    yield
    reset_settings()
