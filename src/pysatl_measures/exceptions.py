"""
Exceptions raised by PySATL Measures.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from collections.abc import Iterable


class UnknownParameterizationError(KeyError):
    """
    Raised when supplied parameter names match no registered parametrization.

    Parameters
    ----------
    family_name : str
        Name of the family that was asked to resolve the names.
    supplied : Iterable[str]
        Parameter names supplied by the caller.
    registered : Iterable[tuple[str, ...]]
        Parameter-name tuples the family accepts.
    """

    def __init__(
        self,
        family_name: str,
        supplied: Iterable[str],
        registered: Iterable[tuple[str, ...]] = (),
    ) -> None:
        self.family_name = family_name
        self.supplied = tuple(sorted(supplied))
        self.registered = tuple(registered)
        options = ", ".join(f"({', '.join(names)})" for names in self.registered) or "none"
        super().__init__(
            f"Family {family_name} has no parametrization with parameters "
            f"({', '.join(self.supplied)}); registered: {options}"
        )

    def __str__(self) -> str:
        # KeyError quotes its argument otherwise
        return str(self.args[0])


class DispatchError(LookupError):
    """
    Raised when an operation has no implementation and no proxy to delegate to.

    This indicates a registration bug in a family, a proxy chain longer than
    the allowed depth, or a point of a kind the family does not handle.
    """


__all__ = ["UnknownParameterizationError", "DispatchError"]
