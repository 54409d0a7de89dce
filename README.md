# ayplan

Building blocks for cost-optimal, forward state-space planning over
propositional PDDL domains with action costs, and a generator for
benchmark problems.

## Installing

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Generating benchmark problems

The `ayplan-generate` command writes a random instance of the
`ytilanoitisoporp` domain. Give it the number of boolean objects:

```
ayplan-generate 12
```

This writes `problem-12.pddl` and `domain-12.pddl` to the current
directory. Each object starts `off`, has a random switch cost from 0 to
9, and is related to the next object in line (the last one is
`unrelated`). Each object is, with even chance, required to be `on` or
`off` in the goal. The domain also holds a `super-switch` action that
reaches the goal in one step at a cost of 1000, so every instance has a
plan.

The same work is available from Python through `ayplan.generator`:

- `problem_text(object_count, switch_costs, goals, timestamp)` and
  `domain_text(object_count, goals)` return the PDDL text for the given
  costs and goal objects (numbered from 1).
- `generate(object_count, directory=".", rng=None, timestamp=None)`
  draws costs and goals from `rng` (a `random.Random`, seeded with the
  timestamp when not given), writes both files to `directory` and
  returns their paths.

## Modules

- `ayplan.arguments`: `Arguments`, a small command-line reader. Any
  word longer than one character that starts with `-` is a key, and the
  word after it is its value; a key with no value after it raises
  `ValueError`. `got_guard(key)` checks for a key and remembers it;
  `get_int`, `get_float`, `get_bool` and `get_string` read the value of
  the key given, or of the last key checked. `is_argument` and
  `is_nmap` ask whether a word appears at all, and whether it appears
  without being a key.
- `ayplan.action`: `Variable`, `Constant`, `Proposition`,
  `SignedPredicate` (with `ground` to substitute an assignment) and the
  action schema `Action`, together with `cache_assignment_completion`,
  which collects how the models of a precondition can complete a
  partial variable assignment.
- `ayplan.functions`: `Function` and `Invocation`, numeric planning
  functions and their ground values.
- `ayplan.domain_types`: `TypeHierarchy`, which indexes declared types
  and constants, closes the subtype relation transitively
  (`unwind_types`, `unwind_constants`) and builds sorted list mirrors
  of the relations.
- `ayplan.domain`: `Domain`, its `Requires` flags and `FunctionKind`.
  After actions are added, `process_actions_for_symbol_types` sorts
  predicate symbols into constant, one-time fluent (to positive or to
  negative) and many-time fluent symbols, which `is_constant`,
  `is_fluent`, `is_fluent_to_positive` and `is_fluent_to_negative`
  then report. A domain's types and constants live in its
  `type_hierarchy`.
- `ayplan.ground_action`: `GroundAction` and `GroundActionWithCost`,
  instances of action schemas with their precondition, add and delete
  lists, as propositions and, after `generate_integer_representation`,
  as proposition indices.
- `ayplan.cost_state`: `CostState` and `CostSearch`: states that carry
  the best known cost of reaching them, and the propagation of cost
  improvements to their successors, which may tighten the cost limit
  and record the cheapest goal met on the way.
- `ayplan.cost_planner`: `CostPlanner`, the bookkeeping of a search
  for a goal of least cost: which states to consider, reconsider or
  reject for expansion, pruning of states dearer than the limit
  (`clean_up_state_hash`), and keeping the cheapest goal found
  (`record_goal`, `plan_cost`).

## What the package does not do

There is no PDDL reader: domains, actions and problems are built in
Python from the classes above. The package does not ground a problem
into its full set of propositions and actions, and it has no search
loop of its own that expands states and returns a plan; `CostPlanner`
supplies the cost decisions such a loop needs, and the caller drives
the search. The only command is `ayplan-generate`.

## Example

```python
from ayplan.arguments import Arguments

args = Arguments(["ayplan", "--limit", "40", "-v", "2"])
if args.got_guard("--limit"):
    limit = args.get_int()          # 40
verbosity = args.get_int("-v")      # 2
```