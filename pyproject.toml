[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "othellocord"
version = "0.1.0"
description = "Othello game service core: board rules, game storage, Elo ratings, challenges, simulations, message embeds and board rendering"
requires-python = ">=3.10"
keywords = ["othello", "reversi", "board-game", "elo", "leaderboard", "sqlite"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Board Games",
]
dependencies = [
    "cachetools",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
othellocord-schema = "othellocord.db:main"
othellocord-render = "othellocord.render:main"

[tool.hatch.build.targets.wheel]
packages = ["othellocord"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
