"""
Parameterization classes and specifications for distribution families.

This module provides the core abstractions for defining different parameterizations
of distribution families: constraint validation, per-parameter domain
transforms and proxy declarations (rewriting a parametrization into an
equivalent measure built on another variant).
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from abc import ABC
from dataclasses import MISSING, dataclass, fields, is_dataclass
from functools import wraps
from inspect import isfunction
from typing import TYPE_CHECKING, ParamSpec

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.types import ParametrizationName, VariantKey

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import Any, ClassVar

    from pysatl_measures.families.parametric_family import ParametricFamily
    from pysatl_measures.measures.measure import Measure
    from pysatl_measures.transforms import Transform


@dataclass(slots=True, frozen=True)
class ParametrizationConstraint:
    """
    Constraint on parameter values for a parametrization.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.
    check : Callable[[Any], bool]
        Validation function that returns True if constraint is satisfied.
    """

    description: str
    check: Callable[[Any], bool]


class Parametrization(ABC):
    """
    Abstract base class for distribution parametrizations.

    This class defines the interface for parametrizations, including
    parameter validation and the optional proxy to another variant.
    """

    # These attributes are set by the @parametrization decorator
    __family__: ClassVar[ParametricFamily]
    __param_name__: ClassVar[ParametrizationName]
    __proxy_target__: ClassVar[VariantKey | None] = None
    __asparams__: ClassVar[Mapping[str, Transform]] = {}

    _constraints: ClassVar[list[ParametrizationConstraint]] = []

    @property
    def name(self) -> str:
        """Get the name of this parametrization."""
        return self.__class__.__param_name__

    @property
    def parameters(self) -> dict[str, Any]:
        """Get parameters as a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}  # type: ignore[arg-type]

    @classmethod
    def parameter_names(cls) -> tuple[str, ...]:
        """All parameter names, in declaration order."""
        return tuple(f.name for f in fields(cls))  # type: ignore[arg-type]

    @classmethod
    def required_names(cls) -> frozenset[str]:
        """Parameter names without a default value."""
        return frozenset(
            f.name
            for f in fields(cls)  # type: ignore[arg-type]
            if f.default is MISSING and f.default_factory is MISSING
        )

    @property
    def constraints(self) -> list[ParametrizationConstraint]:
        """Get constraints for this parametrization."""
        return self._constraints

    def validate(self) -> None:
        """
        Validate all constraints for this parametrization.

        Raises
        ------
        ValueError
            If any constraint is not satisfied.
        """
        for constraint in self._constraints:
            if not constraint.check(self):
                raise ValueError(f'Constraint "{constraint.description}" does not hold')

    def proxy(self) -> Measure:
        """
        Rewrite these parameters into an equivalent measure on another variant.

        Raises
        ------
        DispatchError
            If the parametrization declares no proxy (see :func:`proxy_to`).
        """
        raise DispatchError(f"Parametrization '{self.name}' declares no proxy")


P = ParamSpec("P")


def constraint(description: str) -> Callable[[Callable[P, bool]], Callable[P, bool]]:
    """
    Decorator to mark an instance method as a parameter constraint.

    Parameters
    ----------
    description : str
        Human-readable description of the constraint.

    Returns
    -------
    Callable[[Callable[P, bool]], Callable[P, bool]]
        Decorator that marks the function as a constraint.

    Notes
    -----
    The decorated function must be a predicate; its result is converted with
    ``bool`` so NumPy scalars are accepted.
    Sets marker attributes on the function:
    - __is_constraint: True
    - __constraint_description: description
    """

    def decorator(func: Callable[P, bool]) -> Callable[P, bool]:
        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> bool:
            return bool(func(*args, **kwargs))

        setattr(wrapper, "__is_constraint", True)
        setattr(wrapper, "__constraint_description", description)
        return wrapper

    return decorator


def proxy_to(
    family_name: str, parametrization_name: ParametrizationName
) -> Callable[[Callable[P, Measure]], Callable[P, Measure]]:
    """
    Decorator to mark the ``proxy`` method of a parametrization.

    Parameters
    ----------
    family_name : str
        Family of the variant the proxy is built on.
    parametrization_name : str
        Parametrization of that variant.

    Notes
    -----
    The target is recorded in the global proxy graph when the parametrization
    is registered; a target that would close a cycle is rejected there.
    """

    def decorator(func: Callable[P, Measure]) -> Callable[P, Measure]:
        if func.__name__ != "proxy":
            raise TypeError(f"@proxy_to must decorate a method named 'proxy', got '{func.__name__}'")
        setattr(func, "__proxy_target", (family_name, parametrization_name))
        return func

    return decorator


def parametrization(
    *,
    family: ParametricFamily,
    name: str,
    asparams: Mapping[str, Transform] | None = None,
) -> Callable[[type[Parametrization]], type[Parametrization]]:
    """
    Decorator to register a class as a parametrization for a family.

    Parameters
    ----------
    family : ParametricFamily
        Family to register the parametrization with.
    name : str
        Name of the parametrization.
    asparams : Mapping[str, Transform], optional
        Transform from the real line onto the domain of each parameter.

    Returns
    -------
    Callable[[type[Parametrization]], type[Parametrization]]
        Class decorator that registers the parametrization.

    Notes
    -----
    Automatically converts the class to a dataclass if not already one.
    Collects constraint methods marked with @constraint and the proxy
    marked with @proxy_to.
    """

    def _collect_constraints(
        cls: type[Parametrization],
    ) -> list[ParametrizationConstraint]:
        """Collect constraint methods from the class."""
        constraints: list[ParametrizationConstraint] = []
        for name, attr in cls.__dict__.items():
            if isinstance(attr, staticmethod):
                raise TypeError(
                    f"@constraint '{name}' must be an instance method, not @staticmethod"
                )
            if isinstance(attr, classmethod):
                raise TypeError(
                    f"@constraint '{name}' must be an instance method, not @classmethod"
                )

            func = attr if callable(attr) and isfunction(attr) else None
            if not func:
                continue
            if getattr(func, "__is_constraint", False):
                desc = getattr(func, "__constraint_description", func.__name__)
                constraints.append(ParametrizationConstraint(description=desc, check=func))
        return constraints

    def decorator(cls: type[Parametrization]) -> type[Parametrization]:
        if not is_dataclass(cls):
            cls = dataclass(slots=True, frozen=True)(cls)

        unknown = set(asparams or {}) - set(cls.parameter_names())
        if unknown:
            raise ValueError(
                f"asparams of '{name}' names undeclared parameters: {sorted(unknown)}"
            )

        # Attach metadata
        cls.__family__ = family
        cls.__param_name__ = name
        cls.__asparams__ = dict(asparams or {})
        cls.__proxy_target__ = getattr(getattr(cls, "proxy", None), "__proxy_target", None)

        cls._constraints = _collect_constraints(cls)

        # Register in the family
        family.register_parametrization(name, cls)
        return cls

    return decorator
