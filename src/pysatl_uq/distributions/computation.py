"""
Computation Primitives
======================

Building blocks used to expose distribution characteristics:

- :class:`Computation` — protocol of a callable bound to a single
  characteristic.
- :class:`AnalyticalComputation` — a closed-form callable provided by a
  distribution directly.

Notes
-----
- Callables accept a point (or a probability, or a moment order) and free-form
  ``**options`` such as ``tail=True`` for quantiles.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from mypy_extensions import KwArg

from pysatl_uq.types import GenericCharacteristicName


@runtime_checkable
class Computation[In, Out](Protocol):
    """Callable for a single characteristic.

    Attributes
    ----------
    target : str
        The characteristic name this computation represents.

    Methods
    -------
    __call__(data, **options)
        Evaluate the characteristic at ``data``.
    """

    @property
    def target(self) -> GenericCharacteristicName: ...
    def __call__(self, data: In, **options: Any) -> Out: ...


@dataclass(frozen=True, slots=True)
class AnalyticalComputation[In, Out]:
    """Analytical computation provided directly by the distribution.

    Parameters
    ----------
    target : str
        Characteristic name (e.g., ``"pdf"``).
    func : Callable[[In, KwArg(Any)], Out]
        Analytical callable.
    """

    target: GenericCharacteristicName
    func: Callable[[In, KwArg(Any)], Out]

    def __call__(self, data: In, **options: Any) -> Out:
        """Evaluate the analytical function."""
        return self.func(data, **options)
