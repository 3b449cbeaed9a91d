[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "shardql"
version = "0.1.0"
description = "Building blocks of a small distributed SQL query engine: query models, sharding strategies, coordinator and worker state, a web dashboard and a client library."
requires-python = ">=3.10"
keywords = ["sql", "distributed", "query-engine", "sharding", "dashboard"]
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
    "Framework :: AsyncIO",
    "Framework :: aiohttp",
    "Topic :: Database :: Database Engines/Servers",
]
dependencies = [
    "aiohttp>=3.9",
]

[project.optional-dependencies]
test = [
    "pytest>=7.4",
    "pytest-asyncio>=0.23",
]

[project.scripts]
shardql-visualizer = "shardql.web:main"

[tool.hatch.build.targets.wheel]
packages = ["shardql"]

[tool.hatch.build.targets.sdist]
include = ["shardql", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
