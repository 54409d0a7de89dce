"""Building blocks for cost-optimal planning over propositional PDDL domains."""

__version__ = "0.1.0"