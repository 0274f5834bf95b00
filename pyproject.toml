[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pocketrpg"
version = "0.1.0"
description = "Game rules for a turn-based dungeon role-playing game: player stats, weapons, sound channel logic, zip resources and input mapping."
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "rpg", "dungeon", "turn-based", "zip"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Role-Playing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pocketrpg"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
