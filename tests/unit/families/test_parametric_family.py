from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

import pytest

from pysatl_measures.distributions.registry import ProxyCycleError, proxy_graph
from pysatl_measures.exceptions import DispatchError, UnknownParameterizationError
from pysatl_measures.families import ParametricFamily, Parametrization, parametrization, proxy_to
from pysatl_measures.transforms import as_positive_real
from pysatl_measures.types import CharacteristicName, UnivariateContinuous
from tests.utils.mocks import make_toy_family


def _family(name: str = "Fam", parametrizations: list[str] | None = None) -> ParametricFamily:
    names = parametrizations or ["base"]
    return ParametricFamily(
        name=name,
        distr_type=UnivariateContinuous,
        distr_parametrizations=names,
        distr_characteristics={CharacteristicName.LOGDENSITY: {n: lambda p, x: 0.0 for n in names}},
    )


class TestFamilyConstruction:
    def test_base_is_first_parametrization(self):
        family = make_toy_family()
        assert family.base_parametrization_name == "base"
        assert family.base is family.parametrizations["base"]
        assert family.parametrization_names == ["base", "doubled"]

    def test_requires_parametrizations(self):
        with pytest.raises(ValueError, match="at least one"):
            ParametricFamily("Empty", UnivariateContinuous, [], {})

    def test_characteristics_for_undeclared_parametrizations_rejected(self):
        with pytest.raises(ValueError, match="undeclared"):
            ParametricFamily(
                "Bad",
                UnivariateContinuous,
                ["base"],
                {CharacteristicName.LOGDENSITY: {"other": lambda p, x: 0.0}},
            )

    def test_base_missing_raises(self):
        with pytest.raises(ValueError, match="not registered"):
            _ = _family().base


class TestRegistration:
    def test_variants_added_to_proxy_graph(self):
        make_toy_family("Toy")
        graph = proxy_graph()
        assert {("Toy", "base"), ("Toy", "doubled")} <= graph.variants
        assert graph.proxy_target(("Toy", "doubled")) == ("Toy", "base")
        assert graph.proxy_target(("Toy", "base")) is None

    def test_undeclared_name_rejected(self):
        family = _family()
        with pytest.raises(ValueError, match="not declared"):

            @parametrization(family=family, name="other")
            class Other(Parametrization):
                value: float

    def test_duplicate_name_rejected(self):
        family = _family()

        @parametrization(family=family, name="base")
        class First(Parametrization):
            value: float

        with pytest.raises(ValueError, match="already registered"):
            family.register_parametrization("base", First)

    def test_same_parameter_names_rejected(self):
        family = _family(parametrizations=["a", "b"])

        @parametrization(family=family, name="a")
        class A(Parametrization):
            value: float

        with pytest.raises(ValueError, match="same parameters"):

            @parametrization(family=family, name="b")
            class B(Parametrization):
                value: float

    def test_parametrization_without_operations_or_proxy_warns(self):
        family = ParametricFamily("Bare", UnivariateContinuous, ["base"], {})
        with pytest.warns(UserWarning, match="no operations"):

            @parametrization(family=family, name="base")
            class Base(Parametrization):
                value: float

    def test_self_proxy_rejected(self):
        family = ParametricFamily("Cyc", UnivariateContinuous, ["a"], {})
        with pytest.raises(ProxyCycleError):

            @parametrization(family=family, name="a")
            class A(Parametrization):
                x: float

                @proxy_to("Cyc", "a")
                def proxy(self):
                    return family.distribution("a", x=self.x)

    def test_proxy_to_unregistered_variant_rejected(self):
        family = ParametricFamily("Fwd", UnivariateContinuous, ["a", "b"], {})
        with pytest.raises(ValueError, match="declared first"):

            @parametrization(family=family, name="a")
            class A(Parametrization):
                x: float

                @proxy_to("Fwd", "b")
                def proxy(self):
                    return family.distribution("b", y=self.x)

    def test_proxy_to_requires_proxy_method(self):
        with pytest.raises(TypeError, match="named 'proxy'"):

            @proxy_to("Fam", "base")
            def rewrite(self):
                return self


class TestResolveParametrization:
    def setup_method(self):
        self.family = ParametricFamily(
            "Res",
            UnivariateContinuous,
            ["none", "one", "two", "with_default"],
            {CharacteristicName.LOGDENSITY: lambda p, x: 0.0},
        )

        @parametrization(family=self.family, name="none")
        class NoParams(Parametrization):
            pass

        @parametrization(family=self.family, name="one")
        class One(Parametrization):
            a: float

            @proxy_to("Res", "none")
            def proxy(self):
                return self.__family__.distribution("none")

        @parametrization(family=self.family, name="two")
        class Two(Parametrization):
            a: float
            b: float

            @proxy_to("Res", "none")
            def proxy(self):
                return self.__family__.distribution("none")

        @parametrization(family=self.family, name="with_default")
        class WithDefault(Parametrization):
            c: float
            d: float = 1.0

            @proxy_to("Res", "none")
            def proxy(self):
                return self.__family__.distribution("none")

    @pytest.mark.parametrize(
        "names, expected",
        [
            ((), "none"),
            (("a",), "one"),
            (("a", "b"), "two"),
            (("b", "a"), "two"),
            (("c", "d"), "with_default"),
            (("c",), "with_default"),
        ],
    )
    def test_resolution(self, names, expected):
        assert self.family.resolve_parametrization(names) == expected

    @pytest.mark.parametrize("names", [("b",), ("a", "c"), ("d",), ("a", "b", "z")])
    def test_unknown_names(self, names):
        with pytest.raises(UnknownParameterizationError) as info:
            self.family.resolve_parametrization(names)
        assert info.value.family_name == "Res"
        assert info.value.supplied == tuple(sorted(names))
        assert ("a", "b") in info.value.registered

    def test_unknown_names_is_key_error(self):
        with pytest.raises(KeyError):
            self.family(z=1.0)

    def test_call_resolves_and_constructs(self):
        d = self.family(a=1.0, b=2.0)
        assert d.parametrization_name == "two"
        assert d.parameters.parameters == {"a": 1.0, "b": 2.0}

    def test_default_is_filled(self):
        d = self.family(c=3.0)
        assert d.parameters.parameters == {"c": 3.0, "d": 1.0}

    def test_explicit_parametrization_checks_names(self):
        with pytest.raises(UnknownParameterizationError):
            self.family.distribution("two", a=1.0)


class TestFamilyIntrospection:
    def test_dispatch_plan(self):
        family = make_toy_family()
        plan = family.dispatch_plan("doubled")
        assert plan[CharacteristicName.TESTVALUE] == "analytical"
        assert plan[CharacteristicName.LOGDENSITY] == "proxy"
        assert family.dispatch_plan("base")[CharacteristicName.LOGDENSITY] == "analytical"
        assert CharacteristicName.AS_TRANSFORM not in family.dispatch_plan("base")

    def test_proxy_chain(self):
        family = make_toy_family("Toy")
        assert family.proxy_chain("doubled") == [("Toy", "doubled"), ("Toy", "base")]

    def test_asparams(self):
        family = _family()

        @family.parametrization(name="base", asparams={"scale": as_positive_real})
        class Base(Parametrization):
            scale: float
            count: int

        assert family.asparams("base", "scale") is as_positive_real
        with pytest.raises(KeyError):
            family.asparams("base", "missing")
        with pytest.raises(DispatchError):
            family.asparams("base", "count")

    def test_asparams_for_undeclared_parameter_rejected(self):
        family = _family()
        with pytest.raises(ValueError, match="undeclared parameters"):

            @family.parametrization(name="base", asparams={"other": as_positive_real})
            class Base(Parametrization):
                scale: float
