[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "artree"
version = "0.1.0"
description = "An adaptive radix tree keyed by byte strings: lookup, insert, delete, min/max and ordered iteration."
requires-python = ">=3.10"
dependencies = []
keywords = ["radix tree", "trie", "adaptive radix tree", "ART", "data structures"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["artree"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
