[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "makedonia"
version = "0.1.0"
description = "Ancient Greek dictionary search services: exact, phrase and partial lookups, text analysis with caching, and word-usage counters"
requires-python = ">=3.10"
dependencies = []
keywords = ["greek", "ancient-greek", "dictionary", "lexicon", "search", "linguistics"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Natural Language :: Greek",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Linguistic",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["makedonia"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
