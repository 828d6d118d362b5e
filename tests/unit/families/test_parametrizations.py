from __future__ import annotations

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from typing import Any

import pytest

from pysatl_measures.exceptions import DispatchError
from pysatl_measures.families import (
    ParametricFamily,
    Parametrization,
    ParametrizationConstraint,
    constraint,
)
from pysatl_measures.types import CharacteristicName, UnivariateContinuous
from tests.utils.mocks import make_toy_family


class TestParametrizationAPI:
    def test_constraint_is_a_simple_holder(self) -> None:
        def is_positive(obj: object) -> bool:
            return getattr(obj, "value", 0) > 0

        c = ParametrizationConstraint(description="Value must be positive", check=is_positive)
        assert c.description == "Value must be positive"
        assert c.check is is_positive

    def test_constraint_decorator_marks_function(self) -> None:
        @constraint("Value must be positive")
        def check_positive(self: Any) -> bool:
            return getattr(self, "value", 0) > 0

        assert getattr(check_positive, "__is_constraint", None) is True
        assert getattr(check_positive, "__constraint_description", None) == "Value must be positive"

    def test_constraint_result_is_coerced_to_bool(self) -> None:
        @constraint("non-empty")
        def check(self: Any) -> bool:
            return self

        assert check([1]) is True
        assert check([]) is False

    def test_decorator_builds_frozen_dataclass(self) -> None:
        family = ParametricFamily(
            name="FreeDecoratorFamily",
            distr_type=UnivariateContinuous,
            distr_parametrizations=["kind"],
            distr_characteristics={CharacteristicName.LOGDENSITY: lambda p, x: 0.0},
        )

        @family.parametrization(name="kind")
        class Kind(Parametrization):
            value: float

        obj = Kind(value=1.25)  # type: ignore[call-arg]
        assert obj.name == "kind"
        assert obj.parameters == {"value": 1.25}
        assert Kind.parameter_names() == ("value",)
        assert Kind.required_names() == frozenset({"value"})
        assert getattr(Kind, "__family__", None) is family
        assert getattr(Kind, "__param_name__", None) == "kind"
        assert Kind.__proxy_target__ is None
        with pytest.raises(AttributeError):
            obj.value = 2.0  # type: ignore[misc]

    def test_validate_reports_failed_constraint(self) -> None:
        family = make_toy_family()
        with pytest.raises(ValueError, match='Constraint "value > 0" does not hold'):
            family.distribution("base", value=-1.0)

    def test_proxy_target_recorded(self) -> None:
        family = make_toy_family("Toy")
        assert family.parametrizations["doubled"].__proxy_target__ == ("Toy", "base")

    def test_parametrization_without_proxy_raises(self) -> None:
        family = make_toy_family()
        params = family.parametrizations["base"](value=1.0)  # type: ignore[call-arg]
        with pytest.raises(DispatchError, match="declares no proxy"):
            params.proxy()

    def test_static_constraint_rejected(self) -> None:
        family = ParametricFamily(
            "Static", UnivariateContinuous, ["base"], {CharacteristicName.LOGDENSITY: lambda p, x: 0}
        )
        with pytest.raises(TypeError, match="staticmethod"):

            @family.parametrization(name="base")
            class Base(Parametrization):
                value: float

                @staticmethod
                def helper() -> bool:
                    return True
