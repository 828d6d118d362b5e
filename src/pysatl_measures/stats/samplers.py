"""
Random Variate Primitives
=========================

Stochastic primitives consumed by the family samplers. All of them draw from
an explicitly passed :class:`numpy.random.Generator`; nothing here touches a
global generator, so equal seeds give equal variates and distinct generators
can be used from different threads.

- :func:`as_generator` — normalize a generator or seed into a ``Generator``.
- :func:`sample_lkj` — ``k x k`` correlation matrix from the LKJ distribution.
- :func:`sample_multinomial` — count vector from a multinomial distribution.
- :func:`sample_laplace` — standard Laplace variate.
"""

from __future__ import annotations

__author__ = "Artem Romanyuk"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from typing import Any

    import numpy.typing as npt

    type RandomSource = np.random.Generator | int | np.random.SeedSequence


def as_generator(rng: RandomSource | None) -> np.random.Generator:
    """
    Return ``rng`` as a :class:`numpy.random.Generator`.

    Parameters
    ----------
    rng : Generator | int | SeedSequence
        A generator is returned unchanged; a seed creates a fresh generator.

    Raises
    ------
    TypeError
        If ``rng`` is ``None``: a random source must always be explicit.
    """
    if isinstance(rng, np.random.Generator):
        return rng
    if rng is None:
        raise TypeError("An explicit random generator or seed is required for sampling")
    return np.random.default_rng(rng)


def _lkj_onion_cholesky(
    rng: np.random.Generator, k: int, eta: float
) -> npt.NDArray[np.float64]:
    """
    Lower Cholesky factor of an LKJ(k, eta) correlation matrix, onion method.

    Follows Section 3.2 of Lewandowski, Kurowicka & Joe (2009): row ``i`` of the
    factor is a uniformly random direction in ``R^i`` scaled by the square root
    of a Beta variate, the diagonal takes the remaining norm.
    """
    L = np.zeros((k, k))
    L[0, 0] = 1.0
    if k == 1:
        return L

    marginal_concentration = eta + 0.5 * (k - 2)
    offset = 0.5 * np.arange(k - 1)
    beta_sample = rng.beta(offset + 0.5, marginal_concentration - offset)
    for row in range(1, k):
        direction = rng.standard_normal(row)
        direction /= np.linalg.norm(direction)
        y = beta_sample[row - 1]
        L[row, :row] = np.sqrt(y) * direction
        L[row, row] = np.sqrt(1.0 - y)
    return L


def sample_lkj(rng: RandomSource, k: int, eta: float) -> npt.NDArray[np.float64]:
    """
    Draw a ``k x k`` correlation matrix with density proportional to ``det(R)^(eta - 1)``.

    Parameters
    ----------
    rng : Generator | int | SeedSequence
        Random source.
    k : int
        Matrix dimension, ``k >= 1``.
    eta : float
        Concentration, ``eta > 0``.

    Returns
    -------
    numpy.ndarray
        Symmetric matrix with unit diagonal.
    """
    if k < 1:
        raise ValueError(f"LKJ dimension must be at least 1, got {k}")
    if not eta > 0:
        raise ValueError(f"LKJ concentration must be positive, got {eta}")
    L = _lkj_onion_cholesky(as_generator(rng), int(k), float(eta))
    corr = L @ L.T
    corr = 0.5 * (corr + corr.T)
    np.fill_diagonal(corr, 1.0)
    return corr


def sample_multinomial(
    rng: RandomSource, n: int, p: npt.ArrayLike
) -> npt.NDArray[np.int64]:
    """Draw category counts of ``n`` trials with probabilities ``p``."""
    return np.asarray(as_generator(rng).multinomial(int(n), np.asarray(p, dtype=np.float64)))


def sample_laplace(rng: RandomSource, size: Any = None) -> Any:
    """Draw from the standard Laplace distribution (location 0, scale 1)."""
    return as_generator(rng).laplace(0.0, 1.0, size=size)


__all__ = ["as_generator", "sample_lkj", "sample_multinomial", "sample_laplace"]
