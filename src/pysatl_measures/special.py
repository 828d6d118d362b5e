"""
Special functions
=================

Numerically careful primitives used by the density evaluators.

- ``xlogy`` — ``x * log(y)`` with the convention ``0 * log(y) = 0``.
- ``expm1`` — ``exp(x) - 1`` without cancellation for small ``x``.
- :func:`logabsbinomial` — logarithm of the absolute binomial coefficient and its sign.
- :func:`logmultinomial` — logarithm of the multinomial coefficient.
- :func:`lkj_logc0` — log normalizing constant of the LKJ distribution.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import math
from typing import TYPE_CHECKING

from numpy import expm1
from scipy.special import betaln, gammaln, gammasgn, xlogy

if TYPE_CHECKING:
    from collections.abc import Iterable

LOG_PI = math.log(math.pi)
LOG_TWO = math.log(2.0)


def logabsbinomial(n: float, k: int) -> tuple[float, int]:
    """
    Logarithm of ``|C(n, k)|`` together with the sign of ``C(n, k)``.

    Parameters
    ----------
    n : float
        Upper argument; may be any real number.
    k : int
        Lower argument (an integer).

    Returns
    -------
    tuple[float, int]
        ``(log|C(n, k)|, sign)``. A zero coefficient is reported as ``(-inf, 0)``.
    """
    k = int(k)
    if k < 0:
        return -math.inf, 0

    n_is_integer = float(n).is_integer()
    if n_is_integer and n < 0:
        # C(n, k) = (-1)^k C(k - n - 1, k)
        logval, _ = logabsbinomial(k - n - 1, k)
        return logval, -1 if k % 2 else 1
    if n_is_integer and k > n:
        return -math.inf, 0

    logval = float(gammaln(n + 1) - gammaln(k + 1) - gammaln(n - k + 1))
    sign = int(gammasgn(n + 1) * gammasgn(n - k + 1))
    return logval, sign


def logmultinomial(counts: Iterable[int]) -> float:
    """
    Logarithm of the multinomial coefficient ``(sum k)! / prod(k_i!)``.

    Built as a telescoping sum of binomial coefficients, which stays finite for
    large counts.
    """
    total = 0
    result = 0.0
    for count in counts:
        total += int(count)
        logval, _ = logabsbinomial(total, int(count))
        result += logval
    return result


def _lkj_loginvconst(d: int, eta: float) -> float:
    """Equation (17) in Lewandowski, Kurowicka & Joe (2009)."""
    alpha = eta + 0.5 * d - 1
    loginvconst = (
        (2 * eta + d - 3) * LOG_TWO
        + (LOG_PI / 4) * (d * (d - 1) - 2)
        + float(betaln(alpha, alpha))
        - (d - 2) * float(gammaln(eta + 0.5 * (d - 1)))
    )
    for k in range(2, d):
        loginvconst += float(gammaln(eta + 0.5 * (d - 1 - k)))
    return loginvconst


def _lkj_loginvconst_uniform_odd(d: int) -> float:
    """Theorem 5 in Lewandowski, Kurowicka & Joe (2009), odd ``d``."""
    loginvconst = (d - 1) * (
        (d + 1) * (LOG_PI / 4) - (d - 1) * (LOG_TWO / 4) - float(gammaln(0.5 * (d + 1)))
    )
    for k in range(2, d, 2):
        loginvconst += float(gammaln(k))
    return loginvconst


def _lkj_loginvconst_uniform_even(d: int) -> float:
    """Theorem 5 in Lewandowski, Kurowicka & Joe (2009), even ``d``."""
    loginvconst = d * (
        (d - 2) * (LOG_PI / 4) + (3 * d - 4) * (LOG_TWO / 4) + float(gammaln(0.5 * d))
    ) - (d - 1) * float(gammaln(d))
    for k in range(2, d - 1, 2):
        loginvconst += float(gammaln(k))
    return loginvconst


def lkj_logc0(d: int, eta: float) -> float:
    """
    Log normalizing constant of the ``d x d`` LKJ distribution.

    Parameters
    ----------
    d : int
        Matrix dimension.
    eta : float
        Concentration, ``eta > 0``.

    Returns
    -------
    float
        ``log c0`` such that ``c0 * det(R)^(eta - 1)`` integrates to one over
        the ``d x d`` correlation matrices.
    """
    if d <= 1:
        return 0.0
    if eta == 1.0:
        if d % 2 == 0:
            return -_lkj_loginvconst_uniform_even(d)
        return -_lkj_loginvconst_uniform_odd(d)
    return -_lkj_loginvconst(d, eta)


__all__ = [
    "xlogy",
    "expm1",
    "logabsbinomial",
    "logmultinomial",
    "lkj_logc0",
]
