"""
Sampling Interfaces
===================

This module defines the protocol and the array-backed implementation of the
sample containers returned by distribution sampling.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING, Protocol

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import Any

    import numpy.typing as npt


class Sample(Protocol):
    """
    Protocol for sample containers.

    Attributes
    ----------
    array : numpy.ndarray
        Array representation of the samples.
    shape : tuple[int, ...]
        Shape of the sample array.
    """

    def __len__(self) -> int: ...
    @property
    def array(self) -> npt.NDArray[np.floating[Any]]: ...
    @property
    def shape(self) -> tuple[int, ...]: ...


class ArraySample:
    """
    Array-backed sample container of multivariate realizations.

    Rows are realizations, columns are dimensions. Discrete columns hold tick
    values exactly, continuous columns hold draws inside their bins.

    Parameters
    ----------
    data : numpy.ndarray
        2D floating-point array of shape (n, d).

    Raises
    ------
    ValueError
        If data is not 2D.
    """

    dimension: int
    data: npt.NDArray[np.floating[Any]]

    def __init__(self, data: npt.NDArray[np.floating[Any]]) -> None:
        if data.ndim != 2:
            raise ValueError("ArraySample expects 2D array of shape (n, d).")
        self.data = data
        self.dimension = int(data.shape[1])

    def __len__(self) -> int:
        """Return the number of realizations (n)."""
        return int(self.data.shape[0])

    def __iter__(self) -> Iterator[npt.NDArray[np.floating[Any]]]:
        """Iterate over realizations (rows of the array)."""
        yield from self.data

    def __getitem__(self, index: int) -> npt.NDArray[np.floating[Any]]:
        """Return one realization."""
        return self.data[index]

    @property
    def array(self) -> npt.NDArray[np.floating[Any]]:
        """Return the backing array."""
        return self.data

    @property
    def shape(self) -> tuple[int, ...]:
        """Return the shape of the sample array (n, d)."""
        n, d = self.data.shape
        return int(n), int(d)

    def column(self, index: int) -> npt.NDArray[np.floating[Any]]:
        """Return the values of one dimension across all realizations."""
        return self.data[:, index]

    def mean(self) -> npt.NDArray[np.floating[Any]]:
        """Empirical mean per dimension."""
        return np.asarray(self.data.mean(axis=0))
