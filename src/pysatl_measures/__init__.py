"""
PySATL Measures
===============

Parametric probability measures with a uniform contract: construction from
named parameters, local log-densities relative to base measures, explicit
random sampling, support predicates and canonicalization of alternate
parameterizations through proxies.

The built-in families are available as ``LKJCholesky``, ``Multinomial`` and
``Laplace``; they are registered on first access.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version
from typing import Any

from .distributions import *
from .distributions import __all__ as _distr_all
from .exceptions import *
from .exceptions import __all__ as _exceptions_all
from .families import *
from .families import __all__ as _family_all
from .linalg import Cholesky
from .measures import *
from .measures import __all__ as _measures_all
from .transforms import *
from .transforms import __all__ as _transforms_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-measures")

_BUILTIN_FAMILIES = {name.value: name for name in FamilyName}


def __getattr__(name: str) -> Any:
    """Resolve built-in family accessors (``pysatl_measures.Laplace`` etc.)."""
    if name in _BUILTIN_FAMILIES:
        return configure_families_register().get(_BUILTIN_FAMILIES[name])
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "__version__",
    "Cholesky",
    *_BUILTIN_FAMILIES,
    *_distr_all,
    *_exceptions_all,
    *_family_all,
    *_measures_all,
    *_transforms_all,
    *_types_all,
]

del _distr_all
del _exceptions_all
del _family_all
del _measures_all
del _transforms_all
del _types_all
