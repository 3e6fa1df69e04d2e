[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinychess"
version = "0.1.0"
description = "A small terminal chess game with an optional UCI engine opponent"
requires-python = ">=3.10"
dependencies = []
keywords = ["chess", "game", "terminal", "uci", "stockfish", "fen"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinychess = "tinychess.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["tinychess"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
