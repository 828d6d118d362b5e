"""
Bijective Transforms
====================

Transforms between unconstrained real coordinates and constrained domains.
They are used for two purposes:

- describing the admissible domain of a parameter (``asparams``),
- describing the domain of a distribution (``as_transform``) and building
  pushforward base measures on it.

Every transform exposes ``dimension`` (number of unconstrained coordinates),
``transform``, ``inverse`` and ``log_abs_det_jacobian``.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import numpy as np

from pysatl_measures.linalg import Cholesky

if TYPE_CHECKING:
    from collections.abc import Mapping

    import numpy.typing as npt


@runtime_checkable
class Transform(Protocol):
    """Protocol for bijections from ``R^dimension`` onto a constrained domain."""

    @property
    def dimension(self) -> int: ...
    def transform(self, y: Any) -> Any: ...
    def inverse(self, x: Any) -> Any: ...
    def log_abs_det_jacobian(self, y: Any) -> float: ...


@dataclass(frozen=True, slots=True)
class IdentityTransform:
    """Identity on the real line."""

    @property
    def dimension(self) -> int:
        return 1

    def transform(self, y: Any) -> Any:
        return y

    def inverse(self, x: Any) -> Any:
        return x

    def log_abs_det_jacobian(self, y: Any) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class ExpTransform:
    """``y -> exp(y)``, onto the positive reals."""

    @property
    def dimension(self) -> int:
        return 1

    def transform(self, y: Any) -> Any:
        return np.exp(y)

    def inverse(self, x: Any) -> Any:
        return np.log(x)

    def log_abs_det_jacobian(self, y: Any) -> float:
        return float(np.sum(y))


as_real = IdentityTransform()
"""Domain transform for unconstrained real parameters."""

as_positive_real = ExpTransform()
"""Domain transform for strictly positive parameters."""


@dataclass(frozen=True, slots=True, eq=False)
class AffineTransform:
    """
    Location-scale map ``z -> mu + sigma * z``.

    Parameters
    ----------
    mu : float
        Location.
    sigma : float
        Scale, non-zero.
    """

    mu: Any = 0.0
    sigma: Any = 1.0

    def __post_init__(self) -> None:
        if np.any(np.asarray(self.sigma) == 0):
            raise ValueError("AffineTransform requires a non-zero scale")

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> AffineTransform:
        """
        Build the transform from named location/scale parameters.

        Recognized names are ``mu`` (location), ``sigma`` (scale) and
        ``lambda_`` (rate, i.e. inverse scale). Missing ones default to the
        identity map.

        Raises
        ------
        ValueError
            If both ``sigma`` and ``lambda_`` are given, or unknown names occur.
        """
        unknown = set(params) - {"mu", "sigma", "lambda_"}
        if unknown:
            raise ValueError(f"Unknown affine parameters: {sorted(unknown)}")
        if "sigma" in params and "lambda_" in params:
            raise ValueError("Specify either a scale (sigma) or a rate (lambda_), not both")

        mu = params.get("mu", 0.0)
        if "lambda_" in params:
            sigma = 1.0 / np.asarray(params["lambda_"], dtype=np.float64)
            if sigma.ndim == 0:
                sigma = float(sigma)
        else:
            sigma = params.get("sigma", 1.0)
        return cls(mu=mu, sigma=sigma)

    @property
    def dimension(self) -> int:
        return int(np.broadcast(self.mu, self.sigma).size)

    def transform(self, y: Any) -> Any:
        return self.mu + self.sigma * y

    def inverse(self, x: Any) -> Any:
        return (x - self.mu) / self.sigma

    def log_abs_det_jacobian(self, y: Any = None) -> float:
        return float(np.sum(np.log(np.abs(self.sigma))))


@dataclass(frozen=True, slots=True)
class CorrCholeskyTransform:
    """
    Map ``R^(k(k-1)/2)`` onto upper Cholesky factors of ``k x k`` correlation matrices.

    Column ``j`` of the factor ``U`` is built from ``j`` unconstrained
    coordinates: each is squashed with ``tanh`` into a partial correlation
    ``z`` and takes the fraction ``z`` of the remaining squared norm; the
    diagonal entry receives what is left, so every column has unit norm.
    The zero vector maps to the identity.

    Parameters
    ----------
    k : int
        Matrix dimension.
    """

    k: int

    def __post_init__(self) -> None:
        if int(self.k) != self.k or self.k < 1:
            raise ValueError(f"CorrCholeskyTransform requires an integer k >= 1, got {self.k}")

    @property
    def dimension(self) -> int:
        return self.k * (self.k - 1) // 2

    def _check(self, y: Any) -> npt.NDArray[np.float64]:
        arr = np.asarray(y, dtype=np.float64)
        if arr.shape != (self.dimension,):
            raise ValueError(
                f"Expected a vector of length {self.dimension}, got shape {arr.shape}"
            )
        return arr

    def transform(self, y: Any) -> Cholesky:
        """Return the correlation Cholesky factor (as an upper factor) for ``y``."""
        arr = self._check(y)
        U = np.zeros((self.k, self.k))
        index = 0
        for col in range(self.k):
            remainder = 1.0
            for row in range(col):
                z = math.tanh(arr[index])
                index += 1
                U[row, col] = z * math.sqrt(remainder)
                remainder *= 1.0 - z * z
            U[col, col] = math.sqrt(remainder)
        return Cholesky(U, "U")

    def inverse(self, x: Cholesky | npt.ArrayLike) -> npt.NDArray[np.float64]:
        """Recover the unconstrained vector from a factor (or an upper matrix)."""
        U = x.U if isinstance(x, Cholesky) else np.asarray(x, dtype=np.float64)
        if U.shape != (self.k, self.k):
            raise ValueError(f"Expected a {self.k}x{self.k} factor, got shape {U.shape}")
        y = np.empty(self.dimension)
        index = 0
        for col in range(self.k):
            remainder = 1.0
            for row in range(col):
                z = U[row, col] / math.sqrt(remainder)
                y[index] = math.atanh(z)
                index += 1
                remainder -= U[row, col] ** 2
        return y

    def log_abs_det_jacobian(self, y: Any) -> float:
        arr = self._check(y)
        logjac = 0.0
        index = 0
        for col in range(self.k):
            remainder = 1.0
            for row in range(col):
                z = math.tanh(arr[index])
                index += 1
                one_minus_z2 = 1.0 - z * z
                logjac += 0.5 * math.log(remainder) + math.log(one_minus_z2)
                remainder *= one_minus_z2
        return logjac


__all__ = [
    "Transform",
    "IdentityTransform",
    "ExpTransform",
    "AffineTransform",
    "CorrCholeskyTransform",
    "as_real",
    "as_positive_real",
]
