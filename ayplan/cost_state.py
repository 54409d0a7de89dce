"""Search states that carry the best known action cost of reaching them."""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from typing import Protocol


class _Costed(Protocol):
    cost: int


class CostSearch:
    """Shared bookkeeping for cost propagation between states.

    ``actions`` are the planner's ground actions, each with a ``cost``;
    ``cost_limit`` is the best known cost of reaching a goal;
    ``candidates`` holds states marked for expansion, in the order they
    were marked; ``best_goal_traversed`` is the cheapest goal state found
    while propagating costs.
    """

    def __init__(self, actions: Sequence[_Costed], cost_limit: int) -> None:
        self.actions = actions
        self.cost_limit = cost_limit
        self.candidates: list[CostState] = []
        self.best_goal_traversed: CostState | None = None


class CostState:
    """A planning state with the best known cost of reaching it.

    States are equal and hash alike when their ``key`` is equal.
    ``successor_to_action`` maps each known successor to the index of the
    cheapest action known to reach it.
    """

    def __init__(self, key: Hashable, cost: int = 0, is_goal_state: bool = False) -> None:
        self.key = key
        self.cost = cost
        self.is_goal_state = is_goal_state
        self.marked_for_expansion = False
        self.parent: CostState | None = None
        self.successor_to_action: dict[CostState, int] = {}

    def action_yields(self, action_index: int, successor: CostState, search: CostSearch) -> None:
        """Record that action ``action_index`` leads to ``successor``.

        An existing entry is only replaced by a strictly cheaper action.
        """
        actions = search.actions
        if not 0 <= action_index < len(actions):
            raise IndexError(f"action index {action_index} is out of range")
        current = self.successor_to_action.get(successor)
        if current is None or actions[action_index].cost < actions[current].cost:
            self.successor_to_action[successor] = action_index

    def update_cost_because(self, parent: CostState, new_cost: int, search: CostSearch) -> None:
        """``parent`` reaches this state for ``new_cost``, which is cheaper.

        A goal state under the cost limit becomes the best goal traversed
        and tightens the limit; any other state under the limit is marked
        for expansion. The new cost is then propagated to successors.
        """
        if new_cost >= self.cost:
            raise ValueError(
                f"new cost {new_cost} does not improve on the current cost {self.cost}"
            )
        self.cost = new_cost

        if self.cost < search.cost_limit:
            if self.is_goal_state:
                search.best_goal_traversed = self
                search.cost_limit = self.cost
            elif not self.marked_for_expansion:
                self.marked_for_expansion = True
                search.candidates.append(self)

        self.parent = parent
        self.propagate_delta(search)

    def propagate_delta(self, search: CostSearch) -> None:
        """Pass this state's cost on to every successor it reaches more cheaply."""
        for successor, action_index in list(self.successor_to_action.items()):
            if successor is self:
                continue
            new_cost = self.cost + search.actions[action_index].cost
            if new_cost < successor.cost:
                successor.update_cost_because(self, new_cost, search)

    def remove_state_references(self, deleted: Iterable[CostState]) -> None:
        """Forget transitions to any of the ``deleted`` states."""
        for state in set(deleted):
            self.successor_to_action.pop(state, None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CostState):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"CostState({self.key!r}, cost={self.cost})"