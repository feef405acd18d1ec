"""
Global registry for orthogonal polynomial families using singleton pattern.

This module implements a centralized registry that maintains references to all
defined polynomial families, so they can be resolved by name wherever a family
argument is accepted.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

from pysatl_uq.exceptions import InvalidArgumentError

if TYPE_CHECKING:
    from typing import ClassVar

    from pysatl_uq.polynomials.family import PolynomialFamily


class PolynomialFamilyRegister:
    """
    Singleton registry for orthogonal polynomial families.

    Maintains a global registry of all polynomial families, allowing
    them to be accessed by name.
    """

    _instance: ClassVar[PolynomialFamilyRegister | None] = None
    _registered_families: dict[str, PolynomialFamily]

    def __new__(cls) -> PolynomialFamilyRegister:
        """Create or return the singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._registered_families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> PolynomialFamily:
        """
        Retrieve a polynomial family by name.

        Parameters
        ----------
        name : str
            Name of the family to retrieve.

        Returns
        -------
        PolynomialFamily
            The requested family.

        Raises
        ------
        InvalidArgumentError
            If no family with the given name exists.
        """
        self = cls()
        if name not in self._registered_families:
            raise InvalidArgumentError(f"No polynomial family {name} found in register")
        return self._registered_families[name]

    @classmethod
    def register(cls, family: PolynomialFamily) -> None:
        """
        Register a new polynomial family.

        Parameters
        ----------
        family : PolynomialFamily
            The family to register.

        Raises
        ------
        InvalidArgumentError
            If a family with the same name is already registered.
        """
        self = cls()
        if family.name in self._registered_families:
            raise InvalidArgumentError(f"Polynomial family {family.name} already found in register")
        self._registered_families[family.name] = family

    @classmethod
    def names(cls) -> list[str]:
        """Names of every registered family, in registration order."""
        return list(cls()._registered_families)

    @classmethod
    def _reset(cls) -> None:
        """Drop the singleton together with every registered family."""
        cls._instance = None
