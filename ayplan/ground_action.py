"""Ground actions: action schema instances over constants, with optional costs."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from typing import ClassVar

from ayplan.action import EQUALITY, Constant, Proposition, SignedPredicate, Variable

logger = logging.getLogger(__name__)


def _render_list(propositions: Iterable[Proposition]) -> str:
    return " ".join(map(str, propositions))


class GroundAction:
    """An action that can be executed at a state.

    It keeps its STRIPS lists twice: as propositions, and, once
    :meth:`generate_integer_representation` has run, as proposition
    indices. Equality, ordering and hashing depend on :attr:`name` alone.
    """

    encountered_propositions: ClassVar[set[Proposition]] = set()
    """Every proposition met while building ground actions."""

    def __init__(
        self,
        name: str,
        arguments: Sequence[Constant],
        preconditions: Iterable[SignedPredicate],
        effects: Iterable[SignedPredicate],
        assignment: Mapping[Variable, Constant],
    ) -> None:
        self.name = Proposition(name, tuple(arguments))

        self.precondition_propositions: list[Proposition] = []
        self.add_propositions: list[Proposition] = []
        self.delete_propositions: list[Proposition] = []

        self.precondition: list[int] = []
        self.add: list[int] = []
        self.delete: list[int] = []

        for precondition in preconditions:
            if precondition.positive:
                self.precondition_propositions.append(precondition.ground(assignment))
            elif precondition.name == EQUALITY:
                logger.debug("equality symbol in the precondition of %s", self.name)
            else:
                raise ValueError(
                    f"negative precondition {precondition} in action {self.name}"
                )

        for effect in effects:
            target = self.add_propositions if effect.positive else self.delete_propositions
            target.append(effect.ground(assignment))

        GroundAction.encountered_propositions.update(self.add_propositions)
        GroundAction.encountered_propositions.update(self.precondition_propositions)
        GroundAction.encountered_propositions.update(self.delete_propositions)

    def generate_integer_representation(
        self, proposition_index: Mapping[Proposition, int]
    ) -> None:
        """Fill :attr:`add`, :attr:`delete` and :attr:`precondition` with indices.

        Every added or deleted proposition must be indexed. Preconditions
        that are not indexed are left out, as is proper for invariants.
        """
        if not proposition_index:
            raise ValueError("the proposition index is empty")

        def lookup(proposition: Proposition, role: str) -> int:
            try:
                return proposition_index[proposition]
            except KeyError:
                raise KeyError(
                    f"proposition ({role}) {proposition} was not indexed"
                ) from None

        self.add = [lookup(p, "add") for p in self.add_propositions]
        self.delete = [lookup(p, "delete") for p in self.delete_propositions]

        self.precondition = []
        for proposition in self.precondition_propositions:
            index = proposition_index.get(proposition)
            if index is None:
                logger.debug("precondition %s is not indexed", proposition)
            else:
                self.precondition.append(index)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroundAction):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other: GroundAction) -> bool:
        # Ordered by name, from the greatest to the least.
        if not isinstance(other, GroundAction):
            return NotImplemented
        return other.name < self.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return (
            f"{self.name}( "
            f" prec[ {_render_list(self.precondition_propositions)} ] "
            f" add[ {_render_list(self.add_propositions)} ] "
            f" del[ {_render_list(self.delete_propositions)} ] "
            " )"
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name})"


class GroundActionWithCost(GroundAction):
    """A ground action that costs :attr:`cost` to execute.

    Equality needs equal costs as well as equal names; ordering is by cost
    first and then as for :class:`GroundAction`.
    """

    def __init__(
        self,
        name: str,
        arguments: Sequence[Constant],
        preconditions: Iterable[SignedPredicate],
        effects: Iterable[SignedPredicate],
        assignment: Mapping[Variable, Constant],
        cost: int = 0,
    ) -> None:
        if cost < 0:
            raise ValueError(f"action cost must not be negative, got {cost}")
        super().__init__(name, arguments, preconditions, effects, assignment)
        self.cost = cost

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroundActionWithCost):
            return NotImplemented
        return self.cost == other.cost and super().__eq__(other)

    def __lt__(self, other: GroundActionWithCost) -> bool:
        if not isinstance(other, GroundActionWithCost):
            return NotImplemented
        if self.cost != other.cost:
            return self.cost < other.cost
        return super().__lt__(other)

    def __hash__(self) -> int:
        return hash((self.name, self.cost))