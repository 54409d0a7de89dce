"""PDDL terms, propositions, signed predicates and action schemas."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from functools import cached_property

logger = logging.getLogger(__name__)

EQUALITY = "="
"""Name of the built-in equality predicate."""


@dataclass(frozen=True, order=True)
class Variable:
    """A schema variable such as ``?b``."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, order=True)
class Constant:
    """A domain or problem object such as ``o1``."""

    name: str

    def __str__(self) -> str:
        return self.name


Term = Variable | Constant


def _render(name: str, parameters: Sequence[Term]) -> str:
    return "(" + " ".join([name, *map(str, parameters)]) + ")"


@dataclass(frozen=True, order=True)
class Proposition:
    """A predicate symbol applied to constants only."""

    name: str
    parameters: tuple[Constant, ...] = ()

    def __post_init__(self) -> None:
        parameters = tuple(self.parameters)
        for parameter in parameters:
            if not isinstance(parameter, Constant):
                raise TypeError(f"proposition argument {parameter!r} is not a constant")
        object.__setattr__(self, "parameters", parameters)

    def __str__(self) -> str:
        return _render(self.name, self.parameters)


@dataclass(frozen=True)
class SignedPredicate:
    """A predicate symbol over terms, either asserted or negated."""

    name: str
    parameters: tuple[Term, ...] = ()
    positive: bool = True

    def __post_init__(self) -> None:
        parameters = tuple(self.parameters)
        for parameter in parameters:
            if not isinstance(parameter, (Variable, Constant)):
                raise TypeError(f"predicate argument {parameter!r} is not a term")
        object.__setattr__(self, "parameters", parameters)

    @property
    def variables(self) -> tuple[Variable, ...]:
        """The variable arguments, in order."""
        return tuple(p for p in self.parameters if isinstance(p, Variable))

    def ground(self, assignment: Mapping[Variable, Constant]) -> Proposition:
        """The unsigned proposition obtained by substituting ``assignment``."""
        grounded = []
        for parameter in self.parameters:
            if isinstance(parameter, Variable):
                try:
                    grounded.append(assignment[parameter])
                except KeyError:
                    raise KeyError(
                        f"no constant assigned to {parameter} in {self}"
                    ) from None
            else:
                grounded.append(parameter)
        return Proposition(self.name, tuple(grounded))

    def __str__(self) -> str:
        text = _render(self.name, self.parameters)
        return text if self.positive else f"(not {text})"


@dataclass(eq=False)
class Action:
    """A PDDL action schema with a fixed cost or a cost evaluator."""

    name: str
    arguments: Sequence[Variable] = ()
    preconditions: Sequence[SignedPredicate] = ()
    effects: Sequence[SignedPredicate] = ()
    cost: int = 0
    cost_evaluator: SignedPredicate | None = field(default=None)

    def __post_init__(self) -> None:
        self.arguments = tuple(self.arguments)
        self.preconditions = tuple(self.preconditions)
        self.effects = tuple(self.effects)
        for argument in self.arguments:
            if not isinstance(argument, Variable):
                raise TypeError(f"action argument {argument!r} is not a variable")
        if len(set(self.arguments)) != len(self.arguments):
            raise ValueError(f"action {self.name} repeats an argument")

    @cached_property
    def variables_in_order(self) -> tuple[Variable, ...]:
        """The variable arguments in the order they were declared."""
        return tuple(self.arguments)

    @cached_property
    def variable_index(self) -> dict[Variable, int]:
        """Each argument variable mapped to its position."""
        return {variable: i for i, variable in enumerate(self.variables_in_order)}

    def variable_choices(self, is_constant: Callable[[str], bool]) -> list[bool]:
        """For each argument, can it be chosen freely?

        A variable cannot be chosen freely when it is an argument of a
        precondition whose predicate symbol ``is_constant`` reports as
        constant (never changed by any action).
        """
        bound: set[Variable] = set()
        for precondition in self.preconditions:
            if is_constant(precondition.name):
                bound.update(precondition.variables)
        return [variable not in bound for variable in self.variables_in_order]

    def __str__(self) -> str:
        return _render(self.name, self.arguments)


@dataclass(frozen=True)
class AssignmentCompletion:
    """How models of a precondition complete a partial assignment.

    ``constrained`` marks the predicate arguments whose value was already
    fixed. ``completions`` maps the constants at those fixed positions to
    every assignment of the remaining variables that a model allows.
    """

    constrained: tuple[bool, ...]
    completions: dict[tuple[Constant, ...], list[dict[Variable, Constant]]]


def cache_assignment_completion(
    assignment: Mapping[Variable, Constant],
    predicate: SignedPredicate,
    models: Sequence[Proposition],
    lower: int,
    upper: int,
    variable_index: Mapping[Variable, int],
    arguments_to_check: Sequence[set[Constant] | frozenset[Constant]],
) -> AssignmentCompletion:
    """Collect how ``models[lower:upper]`` can extend ``assignment``.

    Arguments of ``predicate`` already assigned are keys; the other
    variables are filled from each model, provided the constant is among
    ``arguments_to_check`` for that variable. Models that give a variable
    a disallowed constant are skipped.
    """
    parameters = predicate.parameters
    for parameter in parameters:
        if not isinstance(parameter, Variable):
            raise TypeError(f"{predicate} has a non-variable argument {parameter}")

    constrained = tuple(parameter in assignment for parameter in parameters)

    if upper <= lower:
        logger.warning(
            "no models of %s between %d and %d, yet it is an action precondition",
            predicate,
            lower,
            upper,
        )

    completions: dict[tuple[Constant, ...], list[dict[Variable, Constant]]] = {}
    for proposition in models[lower:upper]:
        if proposition.name != predicate.name and predicate.name != EQUALITY:
            raise ValueError(
                f"expected a model of {predicate.name}, got {proposition}"
            )
        if len(proposition.parameters) != len(parameters):
            raise ValueError(f"{proposition} does not match the arity of {predicate}")

        fixed: list[Constant] = []
        completed: dict[Variable, Constant] = {}
        for is_fixed, variable, constant in zip(
            constrained, parameters, proposition.parameters
        ):
            if is_fixed:
                fixed.append(constant)
            elif constant in arguments_to_check[variable_index[variable]]:
                completed[variable] = constant
            else:
                logger.debug("%s is not a good argument for %s", constant, variable)
                break
        else:
            completions.setdefault(tuple(fixed), []).append(completed)

    return AssignmentCompletion(constrained, completions)