[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dvsim"
version = "0.1.0"
description = "Discrete-event simulator for distance-vector routing across a four-node network"
requires-python = ">=3.10"
dependencies = []
keywords = ["routing", "distance-vector", "bellman-ford", "simulation", "networking"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dvsim = "dvsim.simulator:main"

[tool.hatch.build.targets.wheel]
packages = ["dvsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
