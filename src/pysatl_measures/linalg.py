"""
Linear algebra helpers
======================

- :class:`Cholesky` — a factored representation of a symmetric positive
  definite matrix keeping a single triangular factor.
- :func:`cholesky_positive_safe` — a Cholesky factorization that tolerates
  mildly indefinite input (e.g. sampled correlation matrices with rounding
  noise) by moving it to the nearest positive definite matrix.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

import numpy as np
import scipy.linalg

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

POSITIVE_SAFE_EPS = 1e-10
"""Relative eigenvalue floor used when repairing an indefinite matrix."""


@dataclass(frozen=True, slots=True, eq=False)
class Cholesky:
    """
    Cholesky factorization ``A = L @ U`` with ``U = L.T``.

    Only one triangular factor is stored; the other one is a transposed view,
    so both share the same diagonal.

    Parameters
    ----------
    factors : numpy.ndarray
        The stored triangular factor.
    uplo : {"L", "U"}
        Which triangle ``factors`` holds.
    """

    factors: npt.NDArray[np.float64]
    uplo: Literal["L", "U"] = "L"

    def __post_init__(self) -> None:
        if self.uplo not in ("L", "U"):
            raise ValueError(f"uplo must be 'L' or 'U', got {self.uplo!r}")
        arr = np.array(self.factors, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise ValueError("Cholesky factor must be a square matrix")
        arr.setflags(write=False)
        object.__setattr__(self, "factors", arr)

    @property
    def L(self) -> npt.NDArray[np.float64]:
        """Lower triangular factor."""
        return self.factors if self.uplo == "L" else self.factors.T

    @property
    def U(self) -> npt.NDArray[np.float64]:
        """Upper triangular factor."""
        return self.factors if self.uplo == "U" else self.factors.T

    @property
    def UL(self) -> npt.NDArray[np.float64]:
        """The stored factor, whichever triangle it is."""
        return self.factors

    @property
    def size(self) -> int:
        """Dimension of the factored matrix."""
        return int(self.factors.shape[0])

    @property
    def matrix(self) -> npt.NDArray[np.float64]:
        """Reconstruct ``L @ U``."""
        return self.L @ self.U

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Cholesky):
            return NotImplemented
        return np.array_equal(self.L, other.L)

    __hash__ = None  # type: ignore[assignment]


def _nearest_positive_definite(
    matrix: npt.NDArray[np.float64], eps: float
) -> npt.NDArray[np.float64]:
    """Clip eigenvalues of a symmetric matrix from below and rebuild it."""
    eigenvalues, eigenvectors = np.linalg.eigh(matrix)
    floor = eps * max(float(np.max(np.abs(eigenvalues))), 1.0)
    clipped = np.clip(eigenvalues, floor, None)
    repaired = (eigenvectors * clipped) @ eigenvectors.T
    return 0.5 * (repaired + repaired.T)


def cholesky_positive_safe(
    matrix: npt.ArrayLike,
    *,
    unit_diagonal: bool = False,
    eps: float = POSITIVE_SAFE_EPS,
) -> Cholesky:
    """
    Cholesky factorization robust to near-singular or slightly indefinite input.

    Parameters
    ----------
    matrix : array_like
        Square, (approximately) symmetric matrix.
    unit_diagonal : bool, default False
        Rescale the repaired matrix to unit diagonal (for correlation matrices).
    eps : float
        Relative eigenvalue floor for the repair step.

    Returns
    -------
    Cholesky
        Lower factor of ``matrix`` or of its nearest positive definite neighbour.

    Raises
    ------
    ValueError
        If ``matrix`` is not square or contains non-finite values.
    """
    arr = np.asarray(matrix, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
        raise ValueError("cholesky_positive_safe expects a square matrix")
    if not np.all(np.isfinite(arr)):
        raise ValueError("cholesky_positive_safe expects finite entries")

    symmetric = 0.5 * (arr + arr.T)
    try:
        lower = scipy.linalg.cholesky(symmetric, lower=True)
    except np.linalg.LinAlgError:
        repaired = _nearest_positive_definite(symmetric, eps)
        if unit_diagonal:
            scale = 1.0 / np.sqrt(np.diag(repaired))
            repaired = repaired * np.outer(scale, scale)
        lower = scipy.linalg.cholesky(repaired, lower=True)
    return Cholesky(lower, "L")


__all__ = ["Cholesky", "cholesky_positive_safe", "POSITIVE_SAFE_EPS"]
