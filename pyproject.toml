[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ridethebus"
version = "0.1.0"
description = "Monte Carlo tree search advisor for the Ride the Bus card game"
requires-python = ">=3.10"
keywords = ["card game", "ride the bus", "mcts", "monte carlo tree search", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Simulation",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ridethebus = "ridethebus.app:main"

[tool.hatch.build.targets.wheel]
packages = ["ridethebus"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
