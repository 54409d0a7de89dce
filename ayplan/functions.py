"""Numeric planning functions and their ground invocations."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any

from ayplan.action import Constant, Term, Variable


@dataclass(frozen=True)
class Function:
    """A predicate-like symbol that maps its arguments to a value of ``range_type``.

    Two functions with the same name and arguments but different range
    types are different functions.
    """

    name: str
    parameters: tuple[Term, ...] = ()
    range_type: type = int

    def __post_init__(self) -> None:
        parameters = tuple(self.parameters)
        for parameter in parameters:
            if not isinstance(parameter, (Variable, Constant)):
                raise TypeError(f"function argument {parameter!r} is not a term")
        object.__setattr__(self, "parameters", parameters)

    def __str__(self) -> str:
        head = "(" + " ".join([self.name, *map(str, self.parameters)]) + ")"
        return f"{head} - {self.range_type.__name__}"


@dataclass(frozen=True, init=False)
class Invocation(Function):
    """A function applied to constants only, together with its value."""

    range_value: Any = None

    def __init__(
        self,
        name: str,
        parameters: tuple[Constant, ...] = (),
        range_type: type = int,
        range_value: Any = None,
    ) -> None:
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "parameters", parameters)
        object.__setattr__(self, "range_type", range_type)
        if range_value is None:
            range_value = range_type()
        object.__setattr__(self, "range_value", range_value)
        self.__post_init__()

    def __post_init__(self) -> None:
        super().__post_init__()
        for parameter in self.parameters:
            if not isinstance(parameter, Constant):
                raise TypeError(f"invocation argument {parameter} is not a constant")

    def with_range_value(self, range_value: Any) -> Invocation:
        """A copy of this invocation holding ``range_value``."""
        return dataclasses.replace(self, range_value=range_value)