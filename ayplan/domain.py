"""Propositional PDDL domains with action costs."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, fields

from ayplan.action import Action, SignedPredicate, Term, Variable
from ayplan.domain_types import TypeHierarchy
from ayplan.functions import Function


class FunctionKind(enum.Enum):
    """Which list of functions a numeric function belongs to."""

    POSITIVE_INTEGER = "positive_integer"
    INTEGER = "integer"
    REAL = "real"


_RANGE_TYPES = {
    FunctionKind.POSITIVE_INTEGER: int,
    FunctionKind.INTEGER: int,
    FunctionKind.REAL: float,
}


@dataclass
class Requires:
    """The PDDL requirement flags a domain may declare."""

    equality: bool = False
    strips: bool = False
    typing: bool = False
    disjunctive_preconditions: bool = False
    existentially_quantified_preconditions: bool = False
    universally_quantified_preconditions: bool = False
    conditional_effects: bool = False
    fluents: bool = False
    durative_actions: bool = False
    time: bool = False
    duration_inequalities: bool = False
    continuous_effects: bool = False
    negative_preconditions: bool = False
    derived_predicates: bool = False
    timed_initial_literals: bool = False
    preferences: bool = False
    constraints: bool = False
    action_costs: bool = False

    _KEYWORDS = (
        ("action_costs", ":action-costs "),
        ("equality", ":equality "),
        ("strips", "strips: "),
        ("typing", ":typing "),
        ("disjunctive_preconditions", ":disjunctive-preconditions "),
        ("existentially_quantified_preconditions", ":existential-preconditions "),
        ("universally_quantified_preconditions", ":universal-preconditions "),
        ("conditional_effects", ":conditional-effects "),
        ("fluents", ":fluents "),
        ("durative_actions", ":durative-actions "),
        ("time", ":time "),
        ("duration_inequalities", ":duration-inequalities "),
        ("continuous_effects", ":continuous-effects "),
        ("negative_preconditions", ":negative-preconditions "),
        ("derived_predicates", "derived-predicates: "),
        ("timed_initial_literals", ":timed-initial-literals "),
        ("preferences", ":preferences "),
        ("constraints", ":constraints "),
    )

    def __str__(self) -> str:
        parts = ["(:requirements "]
        parts += [text + "\n" for flag, text in self._KEYWORDS if getattr(self, flag)]
        parts.append(" ) ")
        return "".join(parts)


# The keyword table is class data, not a dataclass field.
assert "_KEYWORDS" not in {f.name for f in fields(Requires)}


def _symbol(predicate: str | SignedPredicate | Function) -> str:
    return predicate if isinstance(predicate, str) else predicate.name


def _mirror_lines(mirror: list[list[int]]) -> list[str]:
    return [
        f"{i} := :" + "".join(f"{value}, " for value in values)
        for i, values in enumerate(mirror)
    ]


_RULE = "*" * 69


class Domain:
    """A PDDL domain: predicates, functions, actions, types and constants.

    After :meth:`process_actions_for_symbol_types`, every predicate symbol
    is classified as constant (never in an effect), fluent to positive
    (only added), fluent to negative (only deleted) or fluent (both).
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.requires = Requires()
        self.predicates: set[str] = set()
        self.predicate_specifications: list[SignedPredicate] = []
        self.actions: list[Action] = []

        self.positive_integer_functions: list[Function] = []
        self.integer_functions: list[Function] = []
        self.real_functions: list[Function] = []

        self.constant_symbols: set[str] = set()
        self.increase_one_time_fluent_symbols: set[str] = set()
        self.decrease_one_time_fluent_symbols: set[str] = set()
        self.many_time_fluent_symbols: set[str] = set()

        self.type_hierarchy = TypeHierarchy()

    def add_function(
        self,
        name: str,
        parameters: Sequence[Term] = (),
        kind: FunctionKind = FunctionKind.POSITIVE_INTEGER,
    ) -> Function:
        """Add a numeric function to the list chosen by ``kind``."""
        kind = FunctionKind(kind)
        function = Function(name, tuple(parameters), _RANGE_TYPES[kind])
        {
            FunctionKind.POSITIVE_INTEGER: self.positive_integer_functions,
            FunctionKind.INTEGER: self.integer_functions,
            FunctionKind.REAL: self.real_functions,
        }[kind].append(function)
        return function

    def add_action(
        self,
        name: str,
        arguments: Iterable[Variable] = (),
        preconditions: Iterable[SignedPredicate] = (),
        effects: Iterable[SignedPredicate] = (),
        cost: int = 0,
        cost_evaluator: SignedPredicate | None = None,
    ) -> Action:
        """Add an action schema; arguments keep their declared order."""
        action = Action(
            name,
            tuple(arguments),
            tuple(preconditions),
            tuple(effects),
            cost,
            cost_evaluator,
        )
        self.actions.append(action)
        return action

    def process_actions_for_symbol_types(self) -> None:
        """Classify predicate symbols by how action effects change them."""
        if not self.predicates:
            raise ValueError("the domain has no predicate symbols")

        for action in self.actions:
            for effect in action.effects:
                symbol = effect.name
                if symbol in self.many_time_fluent_symbols:
                    continue
                if effect.positive:
                    if symbol in self.decrease_one_time_fluent_symbols:
                        self.decrease_one_time_fluent_symbols.discard(symbol)
                        self.many_time_fluent_symbols.add(symbol)
                    else:
                        self.increase_one_time_fluent_symbols.add(symbol)
                else:
                    if symbol in self.increase_one_time_fluent_symbols:
                        self.increase_one_time_fluent_symbols.discard(symbol)
                        self.many_time_fluent_symbols.add(symbol)
                    else:
                        self.decrease_one_time_fluent_symbols.add(symbol)

        changing = (
            self.many_time_fluent_symbols
            | self.decrease_one_time_fluent_symbols
            | self.increase_one_time_fluent_symbols
        )
        self.constant_symbols.update(self.predicates - changing)

    def is_constant(self, predicate: str | SignedPredicate | Function) -> bool:
        """Is the symbol never changed by an action?"""
        return _symbol(predicate) in self.constant_symbols

    def is_fluent(self, predicate: str | SignedPredicate | Function) -> bool:
        """Can the symbol's truth value change in both directions?"""
        return _symbol(predicate) in self.many_time_fluent_symbols

    def is_fluent_to_negative(self, predicate: str | SignedPredicate | Function) -> bool:
        """Can the symbol's truth value only change to false?"""
        return _symbol(predicate) in self.decrease_one_time_fluent_symbols

    def is_fluent_to_positive(self, predicate: str | SignedPredicate | Function) -> bool:
        """Can the symbol's truth value only change to true?"""
        return _symbol(predicate) in self.increase_one_time_fluent_symbols

    def __str__(self) -> str:
        hierarchy = self.type_hierarchy
        out = [f"(define (domain {self.name})", str(self.requires), "\n"]

        if hierarchy.parsed_types is not None:
            out.append("(:types \n")
            for parents, members in hierarchy.parsed_types:
                out.append(" ".join(members))
                if parents:
                    out.append(" - " + " ".join(parents))
                out.append("\n")
            out.append("\n  ) ")

        if hierarchy.parsed_constants is not None:
            out.append("(:constants \n")
            for kinds, members in hierarchy.parsed_constants:
                out.append(" ".join(map(str, members)))
                if kinds:
                    out.append(" - " + " ".join(kinds))
                out.append("\n")
            out.append("\n ) ")

        out.append("(:predicates \n")
        out.append(" ".join(map(str, self.predicate_specifications)) + "\n")
        out.append(" ) \n")

        out.append("(:functions \n")
        out.append(" ".join(map(str, self.positive_integer_functions)) + "\n")
        out.append(" ) \n")

        out.append(" ".join(map(str, self.actions)) + "\n")
        out.append(" ) ")

        out.append(_RULE + "\n")
        out.append("\n\n Type indices :: \n ")
        out.append(
            "".join(f"{n} : {i}, " for n, i in sorted(hierarchy.type_index.items()))
        )
        out.append("\n\nType of types :: \n")
        out += [line + "\n" for line in _mirror_lines(hierarchy.mirror_types_to_types)]

        out.append(_RULE + "\n")
        out.append("\n\n Constant indices :: \n ")
        out.append(
            "".join(
                f"{c} : {i}, "
                for c, i in sorted(hierarchy.constant_index.items())
            )
        )
        out.append("\n\nType of constants :: \n")
        out += [
            line + "\n" for line in _mirror_lines(hierarchy.mirror_types_to_constants)
        ]
        out.append("\n\nConstant of types :: \n")
        out += [
            line + "\n" for line in _mirror_lines(hierarchy.mirror_constants_to_types)
        ]
        out.append(_RULE + "\n")
        out.append("\n")
        return "".join(out)