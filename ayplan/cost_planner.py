"""Cost-optimal planning over states that carry action costs."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ayplan.cost_state import CostSearch, CostState, _Costed

logger = logging.getLogger(__name__)


class CostPlanner:
    """Bookkeeping for a search that looks for a goal of least action cost.

    Only states cheaper than :attr:`cost_limit` are considered for
    expansion. The limit is tightened whenever a cheaper goal state is
    found, either by the search itself (:meth:`record_goal`) or while
    costs are propagated between states
    (:attr:`CostSearch.best_goal_traversed`).
    """

    def __init__(
        self,
        actions: Sequence[_Costed],
        cost_limit: int,
        starting_state: CostState,
    ) -> None:
        self.search = CostSearch(actions, cost_limit)
        self.starting_state = starting_state
        starting_state.marked_for_expansion = True
        self.states: set[CostState] = {starting_state}
        self.goal_state: CostState | None = None
        self.optimal_goal_state: CostState | None = None

    @property
    def cost_limit(self) -> int:
        """The best known cost of reaching a goal."""
        return self.search.cost_limit

    @cost_limit.setter
    def cost_limit(self, value: int) -> None:
        self.search.cost_limit = value

    @property
    def unexpanded(self) -> list[CostState]:
        """States marked for expansion and not yet taken."""
        return self.search.candidates

    def plan_cost(self) -> int:
        """The cost of the best plan found, which is the current cost limit."""
        return self.cost_limit

    def consider_state_for_expansion(self, successor: CostState) -> bool:
        """Mark ``successor`` for expansion if it is cheaper than the limit."""
        result = successor.cost < self.cost_limit
        if result:
            successor.marked_for_expansion = True
        return result

    def reconsider_state_for_expansion(
        self,
        successor: CostState,
        current_state: CostState,
        old_successor: CostState,
    ) -> bool:
        """``successor``, reached from ``current_state``, repeats ``old_successor``.

        If it reaches that state more cheaply, the old state takes the new
        cost and parent. A goal state under the limit tightens the limit and
        is never re-expanded; any other state under the limit passes its
        cost on and is marked for expansion. Returns whether the old state
        was newly marked.
        """
        if old_successor.parent is None and old_successor is not self.starting_state:
            raise ValueError(f"{old_successor!r} has no parent and is not the start")

        result = False
        if successor.cost < old_successor.cost:
            old_successor.cost = successor.cost
            old_successor.parent = current_state

            if old_successor.cost < self.cost_limit:
                if old_successor.is_goal_state:
                    self.cost_limit = old_successor.cost
                    self.search.best_goal_traversed = old_successor
                    return False

                old_successor.propagate_delta(self.search)

                if not old_successor.marked_for_expansion:
                    old_successor.marked_for_expansion = True
                    result = True
        return result

    def redraw(self, state: CostState) -> bool:
        """Should ``state``, just drawn for expansion, be rejected?

        It is rejected, and unmarked, when it costs more than the limit.
        """
        if not state.marked_for_expansion:
            raise ValueError(f"{state!r} was drawn without being marked for expansion")
        result = state.cost > self.cost_limit
        if result:
            state.marked_for_expansion = False
            logger.debug("redraw: %d < %d", self.cost_limit, state.cost)
        return result

    def clean_up_state_hash(self) -> None:
        """Drop every state that costs more than the limit.

        Does nothing until a goal state within the limit is known. Dropped
        states leave :attr:`states` and :attr:`unexpanded`, and the kept
        states forget their transitions to them. If anything was dropped,
        every kept state is marked for expansion again.
        """
        if self.goal_state is None or self.goal_state.cost > self.cost_limit:
            return

        deleted: set[CostState] = set()
        kept: list[CostState] = []
        for state in self.states:
            if state.cost > self.cost_limit:
                self.search.candidates[:] = [
                    s for s in self.search.candidates if s is not state
                ]
                if state is self.search.best_goal_traversed:
                    self.search.best_goal_traversed = self.goal_state
                deleted.add(state)
            else:
                kept.append(state)

        self.states = set()
        for state in kept:
            state.remove_state_references(deleted)
            if deleted:
                state.marked_for_expansion = True
                if not any(s is state for s in self.search.candidates):
                    self.search.candidates.append(state)
            self.states.add(state)

    def record_goal(self, goal_state: CostState | None) -> CostState | None:
        """Take the goal found by one round of search (or ``None``).

        A cheaper goal met while propagating costs takes its place. The
        cheapest goal so far is kept as the optimal goal and tightens the
        limit. Returns the optimal goal state.
        """
        best = self.search.best_goal_traversed
        if goal_state is None and best is not None:
            goal_state = best
        elif best is not None and goal_state is not None and best.cost < goal_state.cost:
            goal_state = best

        if goal_state is not None:
            if not goal_state.is_goal_state:
                raise ValueError(f"{goal_state!r} is not a goal state")
            if self.optimal_goal_state is None or goal_state.cost < self.optimal_goal_state.cost:
                self.optimal_goal_state = goal_state
            if self.optimal_goal_state.cost < self.cost_limit:
                self.cost_limit = self.optimal_goal_state.cost

        self.goal_state = self.optimal_goal_state
        return self.optimal_goal_state