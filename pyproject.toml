[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "puffsearch"
version = "0.1.0"
description = "Subgraph search for undirected graphs with valued nodes, built on layered cluster structures (puffs)"
requires-python = ">=3.10"
dependencies = [
    "networkx",
]
keywords = [
    "graph",
    "subgraph",
    "subgraph-isomorphism",
    "graph-search",
    "pattern-matching",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["puffsearch"]

[tool.hatch.build.targets.sdist]
include = [
    "puffsearch",
    "tests",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
