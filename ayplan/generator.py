"""Writes random instances of the ytilanoitisoporp switch domain."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Collection, Sequence
from pathlib import Path

MAX_COST = 10
"""Switch costs are drawn from ``0 .. MAX_COST - 1``."""


def _check_count(object_count: int) -> None:
    if object_count < 1:
        raise ValueError("the number of objects must be positive")


def problem_text(
    object_count: int,
    switch_costs: Sequence[int],
    goals: Collection[int],
    timestamp: int,
) -> str:
    """The problem file for the given costs and goal objects (numbered from 1)."""
    _check_count(object_count)
    if len(switch_costs) != object_count:
        raise ValueError("need exactly one switch cost per object")

    lines = [
        f"(define (problem ytilanoitisoporp-{timestamp} )",
        "(:domain ytilanoitisoporp)",
        "(:objects ",
    ]
    lines += [f"o{i} - boolean" for i in range(1, object_count + 1)]
    lines.append(")")

    lines.append("(:init ")
    for i, cost in enumerate(switch_costs, start=1):
        lines.append(f"(off o{i} )")
        lines.append(f"(= (switch-cost o{i} ) {cost} )")
        if i < object_count:
            lines.append(f"(related o{i} o{i + 1} )")
        else:
            lines.append(f"(unrelated o{i} )")
    lines.append("(= (total-cost) 0)")
    lines.append(")")

    lines.append("(:goal ")
    lines.append("(and ")
    for i in range(1, object_count + 1):
        state = "on" if i in goals else "off"
        lines.append(f"({state} o{i} )")
    lines.append(")")
    lines.append(")")

    lines.append(" (:metric minimize (total-cost))")
    lines.append(")")
    return "\n".join(lines) + "\n"


_DOMAIN_HEAD = """(define (domain ytilanoitisoporp)
(:requirements :action-costs :typing)
(:types boolean - object)
(:predicates (on ?b - boolean)
(off ?b - boolean)
(related ?b1 ?b2 - boolean)
(unrelated ?b - boolean))
(:functions (total-cost) - number
(switch-cost ?b - boolean) - number )
(:action switch-on
:parameters (?b1 ?b2 - boolean)
:precondition (and (off ?b1) (related ?b1 ?b2) )
:effect (and (not (off ?b1)) 
(off ?b2)
 (not (on ?b2))
(on ?b1)
(increase (total-cost) (switch-cost ?b1))
)
)
(:action unrelated-switch-on
:parameters (?b - boolean)
:precondition (and (off ?b) (unrelated ?b) )
:effect (and (not (off ?b)) 
(on ?b)
(increase (total-cost) (switch-cost ?b))
)
)
(:action switch-off
:parameters (?b - boolean)
:precondition (and (on ?b) )
:effect (and (not (on ?b))
(off ?b)
(increase (total-cost) (switch-cost ?b))
)
)
(:action super-switch
:parameters ()
:precondition ()
:effect (and 
"""


def domain_text(object_count: int, goals: Collection[int]) -> str:
    """The domain file, whose super-switch jumps straight to the goal."""
    _check_count(object_count)
    lines = []
    for i in range(1, object_count + 1):
        if i in goals:
            lines.append(f"(on o{i} )")
            lines.append(f"(not (off o{i} ))")
        else:
            lines.append(f"(not (on o{i} ))")
            lines.append(f"(off o{i} )")
    lines.append("(increase (total-cost) 1000))) ")
    lines.append(")")
    return _DOMAIN_HEAD + "\n".join(lines) + "\n"


def generate(
    object_count: int,
    directory: str | Path = ".",
    rng: random.Random | None = None,
    timestamp: int | None = None,
) -> tuple[Path, Path]:
    """Write ``problem-N.pddl`` and ``domain-N.pddl``; return their paths."""
    _check_count(object_count)
    if timestamp is None:
        timestamp = int(time.time())
    if rng is None:
        rng = random.Random(timestamp)

    costs = [rng.randrange(MAX_COST) for _ in range(object_count)]
    goals = {i for i in range(1, object_count + 1) if rng.randrange(2) == 0}

    directory = Path(directory)
    problem_path = directory / f"problem-{object_count}.pddl"
    domain_path = directory / f"domain-{object_count}.pddl"
    problem_path.write_text(problem_text(object_count, costs, goals, timestamp))
    domain_path.write_text(domain_text(object_count, goals))
    return problem_path, domain_path


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Generate a random ytilanoitisoporp domain and problem."
    )
    parser.add_argument("objects", type=int, help="number of objects")
    args = parser.parse_args(argv)
    if args.objects < 1:
        parser.error("the number of objects must be positive")
    generate(args.objects)
    return 0