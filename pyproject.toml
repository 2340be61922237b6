[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lexgraph"
version = "0.1.0"
description = "State-graph building blocks for byte-level lexers, with small lexing and interpreting tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["lexer", "tokenizer", "state machine", "graph", "json", "brainfuck"]
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
    "Topic :: Software Development :: Compilers",
    "Topic :: Text Processing :: General",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
lexgraph-brainfuck = "lexgraph.brainfuck:main"
lexgraph-custom-error = "lexgraph.custom_error:main"
lexgraph-extras = "lexgraph.extras:main"
lexgraph-json = "lexgraph.json_parser:main"

[tool.hatch.build.targets.wheel]
packages = ["lexgraph"]

[tool.hatch.build.targets.sdist]
include = ["lexgraph", "tests", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
