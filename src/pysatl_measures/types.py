"""
Core Type Definitions
=====================

Fundamental types and data structures used throughout PySATL Measures.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

import numpy as np
from numpy.typing import NDArray


class Kind(StrEnum):
    """
    Enumeration of distribution kinds.

    Attributes
    ----------
    DISCRETE : str
        Distribution dominated by a counting measure.
    CONTINUOUS : str
        Distribution dominated by a Lebesgue (or pushforward of Lebesgue) measure.
    """

    DISCRETE = "discrete"
    CONTINUOUS = "continuous"


class DistributionType:
    """
    Base class for distribution type descriptors.

    Describes the shape of the space a distribution lives on, independently of
    its parameter values.
    """

    __slots__ = ()

    @property
    def features(self) -> Mapping[str, Any]:
        """
        Get the public features of the type.

        Returns
        -------
        Mapping[str, Any]
            Dictionary of feature names to values.

        Notes
        -----
        Default implementation exposes public dataclass fields.
        """
        data: dict[str, Any] = {}

        fields = getattr(self, "__dataclass_fields__", None)
        if fields is not None:
            for name in fields:
                data[name] = getattr(self, name)

        return data


@dataclass(frozen=True, slots=True)
class EuclideanDistributionType(DistributionType):
    """
    Distribution type for distributions on (a subset of) ``R^dimension``.

    Parameters
    ----------
    kind : Kind
        Distribution kind (discrete or continuous).
    dimension : int
        Length of a point (1 for scalars).
    """

    kind: Kind
    dimension: int


@dataclass(frozen=True, slots=True)
class MatrixDistributionType(DistributionType):
    """
    Distribution type for matrix-valued distributions.

    Parameters
    ----------
    kind : Kind
        Distribution kind.
    shape : tuple[int, int]
        Shape of a point.
    """

    kind: Kind
    shape: tuple[int, int]


UnivariateContinuous = EuclideanDistributionType(kind=Kind.CONTINUOUS, dimension=1)
"""Type for univariate continuous distributions."""

NumPyNumber = np.floating[Any] | np.integer[Any]
"""Type alias for NumPy numeric types."""

Number = NumPyNumber | int | float
"""Type alias for all numeric types."""

NumericArray = NDArray[NumPyNumber]
"""Type alias for numeric arrays."""

BoolArray = NDArray[np.bool_]
"""Type alias for boolean arrays."""

type GenericCharacteristicName = str
"""Type alias for characteristic names (e.g., 'logdensity', 'sample')."""

type ParametrizationName = str
"""Type alias for parametrization names."""

type VariantKey = tuple[str, ParametrizationName]
"""A ``(family name, parametrization name)`` pair identifying a variant."""


class CharacteristicName(StrEnum):
    """
    Enumeration of the operations every measure supports.

    A family provides implementations of these per parametrization; whatever
    is missing is resolved through the parametrization's proxy.
    """

    LOGDENSITY = "logdensity"
    BASEMEASURE = "basemeasure"
    INSUPPORT = "insupport"
    SAMPLE = "sample"
    TESTVALUE = "testvalue"
    AS_TRANSFORM = "as_transform"


class FamilyName(StrEnum):
    LKJ_CHOLESKY = "LKJCholesky"
    MULTINOMIAL = "Multinomial"
    LAPLACE = "Laplace"


__all__ = [
    "Kind",
    "DistributionType",
    "EuclideanDistributionType",
    "MatrixDistributionType",
    "UnivariateContinuous",
    "GenericCharacteristicName",
    "ParametrizationName",
    "VariantKey",
    "BoolArray",
    "NumPyNumber",
    "Number",
    "NumericArray",
    "CharacteristicName",
    "FamilyName",
]
