[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "nbodysim"
version = "0.1.0"
description = "Two-dimensional gravitational N-body simulations: direct summation, thread-parallel direct summation and Barnes-Hut."
requires-python = ">=3.10"
dependencies = []
keywords = ["n-body", "gravity", "barnes-hut", "quadtree", "simulation", "physics"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
nbodysim-serial = "nbodysim.serial:main"
nbodysim-parallel = "nbodysim.direct_parallel:main"
nbodysim-barnes-hut = "nbodysim.barnes_hut:main"

[tool.hatch.build.targets.wheel]
packages = ["nbodysim"]

[tool.hatch.build.targets.sdist]
include = ["nbodysim", "tests", "README.md"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
