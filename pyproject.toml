[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "boiltypes"
version = "0.1.0"
description = "PostgreSQL-flavoured column value types: arrays, decimals, hstore, JSON, bytes, timestamps and geometric shapes"
requires-python = ">=3.10"
dependencies = []
keywords = ["postgresql", "sql", "arrays", "hstore", "geometry", "decimal", "database"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Database",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["boiltypes"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
