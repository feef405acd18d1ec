"""
Characteristics API
===================

Lightweight wrapper for calling a distribution's characteristic (e.g., ``pdf``,
``cdf``, ``ppf``) resolved by the current computation strategy.

Notes
-----
- The characteristic name controls *what* to compute (e.g., "pdf").
- ``**options`` control *how* to compute it (e.g., ``tail=True`` for ``ppf``).
"""

__author__ = "Leonid Elkin, Mikhail, Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, cast

from pysatl_uq.distributions.strategies import Method
from pysatl_uq.types import CharacteristicName, GenericCharacteristicName

if TYPE_CHECKING:
    from pysatl_uq.distributions.distribution import Distribution


@dataclass(slots=True, frozen=True)
class GenericCharacteristic[In, Out]:
    """
    Callable characteristic descriptor.

    Parameters
    ----------
    name : str
        Characteristic identifier (e.g., ``"pdf"``, ``"cdf"`` or ``"ppf"``).

    Examples
    --------
    >>> PPF: GenericCharacteristic[float, object] = GenericCharacteristic("ppf")
    >>> # Later:
    >>> # point = PPF(dist, 0.5)  # resolves dist's ppf(0.5)
    """

    name: GenericCharacteristicName

    def __call__(self, distribution: "Distribution", data: In, **options: Any) -> Out:
        """
        Evaluate the characteristic on the given data.

        Parameters
        ----------
        distribution : Distribution
            Distribution instance providing the computation strategy.
        data : Any
            Point, probability or moment order, depending on the characteristic.
        **options
            Characteristic-specific options.

        Returns
        -------
        Any
            Characteristic value at ``data``.
        """
        method = cast(
            Method[In, Out],
            distribution.computation_strategy.query_method(self.name, distribution, **options),
        )
        return method(data, **options)


PDF: GenericCharacteristic[Any, Any] = GenericCharacteristic(CharacteristicName.PDF)
CDF: GenericCharacteristic[Any, Any] = GenericCharacteristic(CharacteristicName.CDF)
PPF: GenericCharacteristic[float, Any] = GenericCharacteristic(CharacteristicName.PPF)
MEAN: GenericCharacteristic[Any, Any] = GenericCharacteristic(CharacteristicName.MEAN)

__all__ = [
    "GenericCharacteristic",
    "PDF",
    "CDF",
    "PPF",
    "MEAN",
]
