[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "ayplan"
version = "0.1.0"
description = "Building blocks for cost-optimal planning over propositional PDDL domains with action costs"
requires-python = ">=3.10"
dependencies = []
keywords = ["planning", "pddl", "ai-planning", "state-space-search", "action-costs"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ayplan-generate = "ayplan.generator:main"

[tool.setuptools.packages.find]
include = ["ayplan*"]

[tool.pytest.ini_options]
addopts = "-ra"
