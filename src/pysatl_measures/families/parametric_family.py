"""
Parametric family definitions and management infrastructure.

This module contains the main class for defining parametric families of
distributions, including support for multiple parameterizations, resolution
of a parametrization from supplied parameter names, the operations each
parametrization implements and the dispatch strategy used for the rest.
"""

from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov, Fedor Myznikov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"


import warnings
from functools import partial
from typing import TYPE_CHECKING, Literal, dataclass_transform

from pysatl_measures.distributions.computation import AnalyticalComputation
from pysatl_measures.distributions.registry import proxy_graph
from pysatl_measures.distributions.strategies import DefaultComputationStrategy
from pysatl_measures.exceptions import DispatchError, UnknownParameterizationError
from pysatl_measures.families.distribution import ParametricFamilyDistribution
from pysatl_measures.types import CharacteristicName, DistributionType

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping
    from typing import Any

    from pysatl_measures.distributions.strategies import ComputationStrategy
    from pysatl_measures.families.parametrizations import Parametrization
    from pysatl_measures.transforms import Transform
    from pysatl_measures.types import (
        GenericCharacteristicName,
        ParametrizationName,
        VariantKey,
    )

    type ParametrizedFunction = Callable[..., Any]

type Provision = Literal["analytical", "proxy"]


class ParametricFamily:
    """
    A family of distributions with multiple parametrizations.

    Represents a parametric family of distributions (e.g., Laplace, LKJCholesky)
    that can be parameterized in different ways. Manages parametrizations,
    their operations, and provides factory methods for creating distribution
    instances.

    Parameters
    ----------
    name : str
        Name of the distribution family.
    distr_type : DistributionType or Callable[[Parametrization], DistributionType]
        Distribution type or function that infers type from the parameters.
    distr_parametrizations : list[ParametrizationName]
        List of parametrization names (first is the canonical parametrization).
    distr_characteristics : dict[str, dict[str, Callable] or Callable]
        Mapping from operation names to implementations ``func(params, *args)``.
        Single functions are treated as defined for the first parametrization.
    computation_strategy : ComputationStrategy, optional
        Strategy for resolving operations (defaults to proxy walking).
    """

    def __init__(
        self,
        name: str,
        distr_type: DistributionType | Callable[[Parametrization], DistributionType],
        distr_parametrizations: list[ParametrizationName],
        distr_characteristics: dict[
            GenericCharacteristicName,
            dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ],
        computation_strategy: ComputationStrategy[Any] | None = None,
    ):
        if not distr_parametrizations:
            raise ValueError(f"Family {name} must declare at least one parametrization.")

        self._name = name
        self._distr_type: Callable[[Parametrization], DistributionType] = (
            (lambda params: distr_type) if isinstance(distr_type, DistributionType) else distr_type
        )

        self.computation_strategy = (
            DefaultComputationStrategy() if computation_strategy is None else computation_strategy
        )

        # Ordered names; the first one is the canonical parametrization name
        self.parametrization_names: list[ParametrizationName] = list(distr_parametrizations)
        self.base_parametrization_name: ParametrizationName = self.parametrization_names[0]

        # Runtime registry of parametrization classes
        self._parametrizations: dict[ParametrizationName, type[Parametrization]] = {}

        def _process_char_val(
            value: dict[ParametrizationName, ParametrizedFunction] | ParametrizedFunction,
        ) -> dict[ParametrizationName, ParametrizedFunction]:
            return value if isinstance(value, dict) else {self.base_parametrization_name: value}

        self.distr_characteristics: dict[
            GenericCharacteristicName, dict[ParametrizationName, ParametrizedFunction]
        ] = {key: _process_char_val(val) for key, val in distr_characteristics.items()}

        for characteristic, forms in self.distr_characteristics.items():
            unknown = set(forms) - set(self.parametrization_names)
            if unknown:
                raise ValueError(
                    f"Operation '{characteristic}' of {name} is given for undeclared "
                    f"parametrizations: {sorted(unknown)}"
                )

        # Precompute analytical plan: operations implemented directly per parametrization
        self._analytical_plan: dict[ParametrizationName, frozenset[GenericCharacteristicName]] = {
            pname: frozenset(
                characteristic
                for characteristic, forms in self.distr_characteristics.items()
                if pname in forms
            )
            for pname in self.parametrization_names
        }

    @property
    def name(self) -> str:
        """Get the family name."""
        return self._name

    @property
    def parametrizations(self) -> dict[ParametrizationName, type[Parametrization]]:
        """Get mapping from parametrization names to classes."""
        return self._parametrizations

    @property
    def base(self) -> type[Parametrization]:
        """
        Get the canonical parametrization class.

        Raises
        ------
        ValueError
            If the canonical parametrization is not registered.
        """
        try:
            return self._parametrizations[self.base_parametrization_name]
        except KeyError as exc:
            raise ValueError(
                f"Base parametrization '{self.base_parametrization_name}' is not registered."
            ) from exc

    def variant(self, name: ParametrizationName) -> VariantKey:
        """Key of a parametrization in the global proxy graph."""
        return (self._name, name)

    def register_parametrization(
        self,
        name: ParametrizationName,
        parametrization_class: type[Parametrization],
    ) -> None:
        """
        Register a parametrization class.

        The variant and its proxy (if any) are added to the global proxy graph.

        Parameters
        ----------
        name : ParametrizationName
            Unique parametrization name, one of ``parametrization_names``.
        parametrization_class : type[Parametrization]
            Parametrization class to register.

        Raises
        ------
        ValueError
            If the name is undeclared or already registered, or another
            parametrization takes the same set of parameter names.
        ProxyCycleError
            If the declared proxy would close a cycle.
        """
        if name not in self.parametrization_names:
            raise ValueError(f"Parametrization '{name}' is not declared by family {self.name}.")
        if name in self._parametrizations:
            raise ValueError(f"Parametrization '{name}' is already registered.")

        names = frozenset(parametrization_class.parameter_names())
        for other, cls in self._parametrizations.items():
            if frozenset(cls.parameter_names()) == names:
                raise ValueError(
                    f"Parametrizations '{other}' and '{name}' of {self.name} take the same "
                    f"parameters {sorted(names)}."
                )

        graph = proxy_graph()
        graph.add_variant(self.variant(name))
        target = parametrization_class.__proxy_target__
        if target is not None:
            graph.add_proxy(self.variant(name), target)
        elif not self._analytical_plan[name]:
            warnings.warn(
                f"Parametrization '{name}' of {self.name} implements no operations and "
                f"declares no proxy.",
                UserWarning,
                stacklevel=3,
            )

        self._parametrizations[name] = parametrization_class

    def get_parametrization(self, name: ParametrizationName) -> type[Parametrization]:
        """
        Fetch a parametrization class by name.

        Raises
        ------
        KeyError
            If name is not registered.
        """
        return self._parametrizations[name]

    def resolve_parametrization(self, names: Iterable[str]) -> ParametrizationName:
        """
        Find the parametrization accepting exactly the supplied parameter names.

        A parametrization whose full set of names equals ``names`` wins;
        otherwise the single parametrization for which ``names`` covers every
        parameter without a default is chosen.

        Raises
        ------
        UnknownParameterizationError
            If no parametrization (or more than one) matches.
        """
        supplied = frozenset(names)
        ordered = [
            (pname, self._parametrizations[pname])
            for pname in self.parametrization_names
            if pname in self._parametrizations
        ]

        for pname, cls in ordered:
            if frozenset(cls.parameter_names()) == supplied:
                return pname

        candidates = [
            pname
            for pname, cls in ordered
            if cls.required_names() <= supplied <= frozenset(cls.parameter_names())
        ]
        if len(candidates) == 1:
            return candidates[0]

        raise UnknownParameterizationError(
            self.name, supplied, [cls.parameter_names() for _, cls in ordered]
        )

    def _build_analytical_computations(
        self, parameters: Parametrization
    ) -> dict[GenericCharacteristicName, AnalyticalComputation[Any]]:
        """
        Build analytical computations for given parameters.

        Uses precomputed provider plan for efficient computation.
        """
        return {
            characteristic: AnalyticalComputation(
                target=characteristic,
                func=partial(self.distr_characteristics[characteristic][parameters.name], parameters),
            )
            for characteristic in self._analytical_plan.get(parameters.name, frozenset())
        }

    def dispatch_plan(self, name: ParametrizationName) -> dict[GenericCharacteristicName, Provision]:
        """
        How a parametrization provides each known operation.

        Returns
        -------
        dict[str, {"analytical", "proxy"}]
            Operations absent from the mapping are not available at all.
        """
        direct = self._analytical_plan[name]
        has_proxy = self.get_parametrization(name).__proxy_target__ is not None
        plan: dict[GenericCharacteristicName, Provision] = {}
        for characteristic in CharacteristicName:
            if characteristic in direct:
                plan[characteristic] = "analytical"
            elif has_proxy:
                plan[characteristic] = "proxy"
        return plan

    def proxy_chain(self, name: ParametrizationName) -> list[VariantKey]:
        """Variants visited when canonicalizing ``name`` (starting with itself)."""
        return proxy_graph().proxy_chain(self.variant(name))

    def asparams(self, name: ParametrizationName, param: str) -> Transform:
        """
        Transform from the real line onto the domain of parameter ``param``.

        Raises
        ------
        KeyError
            If ``param`` is not a parameter of parametrization ``name``.
        DispatchError
            If the parameter has no continuous domain transform.
        """
        cls = self.get_parametrization(name)
        if param not in cls.parameter_names():
            raise KeyError(f"Parametrization '{name}' of {self.name} has no parameter '{param}'")
        try:
            return cls.__asparams__[param]
        except KeyError:
            raise DispatchError(
                f"Parameter '{param}' of {self.name} ({name}) has no domain transform"
            ) from None

    def distribution(
        self,
        parametrization_name: str | None = None,
        **parameters_values: Any,
    ) -> ParametricFamilyDistribution:
        """
        Create a distribution instance with given parameters.

        Parameters
        ----------
        parametrization_name : str, optional
            Name of parametrization to use (resolved from the parameter names
            when omitted).
        **parameters_values
            Parameter values for the distribution.

        Returns
        -------
        ParametricFamilyDistribution
            Distribution instance with specified parameters.

        Raises
        ------
        UnknownParameterizationError
            If the parameter names match no registered parametrization.
        KeyError
            If parametrization name is not registered.
        ValueError
            If parameters don't satisfy constraints.
        """
        if parametrization_name is None:
            parametrization_name = self.resolve_parametrization(parameters_values)
        parametrization_class = self._parametrizations[parametrization_name]

        supplied = frozenset(parameters_values)
        if not (parametrization_class.required_names() <= supplied <= set(
            parametrization_class.parameter_names()
        )):
            raise UnknownParameterizationError(
                self.name, supplied, [parametrization_class.parameter_names()]
            )

        parameters = parametrization_class(**parameters_values)
        parameters.validate()
        return ParametricFamilyDistribution(self.name, self._distr_type(parameters), parameters)

    @dataclass_transform()
    def parametrization(
        self, *, name: str, asparams: Mapping[str, Transform] | None = None
    ) -> Callable[[type[Parametrization]], type[Parametrization]]:
        """
        Create a class decorator that registers a parametrization.

        If you want to use this syntax and so that Mypy doesn't swear,
        you should mark your class as a dataclass.
        At the moment, Mypy cannot identify dataclass_transform if the decorator is a class method.

        Parameters
        ----------
        name : str
            Name of the parametrization.
        asparams : Mapping[str, Transform], optional
            Domain transforms of the parameters.

        Returns
        -------
        Callable[[type[Parametrization]], type[Parametrization]]
            Class decorator for registering parametrizations.
        """
        from pysatl_measures.families.parametrizations import parametrization as _param_deco

        return _param_deco(family=self, name=name, asparams=asparams)

    def __repr__(self) -> str:
        return f"ParametricFamily({self.name!r}, parametrizations={self.parametrization_names})"

    __call__ = distribution
