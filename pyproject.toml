[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "irrigplan"
version = "0.1.0"
description = "Irrigation scheduling over a crop cycle: exact MILP model, constructive and refinement heuristics"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy>=1.9",
]
keywords = [
    "irrigation",
    "scheduling",
    "optimization",
    "mixed-integer programming",
    "heuristics",
    "simulated annealing",
    "monte carlo tree search",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
irrigplan = "irrigplan.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["irrigplan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
