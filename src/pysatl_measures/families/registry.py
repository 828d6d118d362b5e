"""
Process-wide register of parametric families.

Families are registered once by their ``configure_*_family`` functions (see
:mod:`pysatl_measures.families.configuration`) and looked up by
:class:`~pysatl_measures.types.FamilyName` afterwards. The register is never
mutated after configuration, so concurrent lookups need no locking.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator
    from typing import ClassVar

    from pysatl_measures.families.parametric_family import ParametricFamily
    from pysatl_measures.types import VariantKey


class ParametricFamilyRegister:
    """
    Singleton mapping family names to :class:`ParametricFamily` objects.

    All accessors are classmethods operating on the single instance, so
    ``ParametricFamilyRegister.get(FamilyName.LAPLACE)`` and
    ``ParametricFamilyRegister().get(...)`` are equivalent.
    """

    _instance: ClassVar[ParametricFamilyRegister | None] = None
    _families: dict[str, ParametricFamily]

    def __new__(cls) -> ParametricFamilyRegister:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._families = {}
        return cls._instance

    @classmethod
    def get(cls, name: str) -> ParametricFamily:
        """
        Look up a registered family.

        Parameters
        ----------
        name : str
            Family name, usually a :class:`FamilyName` member.

        Raises
        ------
        ValueError
            If the family is not registered; the message lists the known ones.
        """
        families = cls()._families
        try:
            return families[name]
        except KeyError:
            known = ", ".join(families) or "none"
            raise ValueError(f"Unknown family {name!r}; registered families: {known}") from None

    @classmethod
    def contains(cls, name: str) -> bool:
        return name in cls()._families

    @classmethod
    def register(cls, family: ParametricFamily) -> None:
        """
        Add ``family`` under its name.

        Raises
        ------
        ValueError
            If a family of that name is registered already; families are
            configured once per process.
        """
        families = cls()._families
        if family.name in families:
            raise ValueError(f"Family {family.name!r} is registered already")
        families[family.name] = family

    @classmethod
    def list_registered_families(cls) -> list[str]:
        """Names of all registered families, in registration order."""
        return list(cls()._families)

    @classmethod
    def variants(cls) -> Iterator[VariantKey]:
        """Every registered ``(family, parametrization)`` pair."""
        for family in cls()._families.values():
            for pname in family.parametrizations:
                yield (family.name, pname)

    @classmethod
    def _reset(cls) -> None:
        cls._instance = None
