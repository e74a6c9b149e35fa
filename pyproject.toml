[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "slotsearch"
version = "0.1.0"
description = "Preprocess trade CSV exports into binary indexes and query them by slot over named pipes"
requires-python = ">=3.10"
dependencies = []
keywords = ["search", "index", "fifo", "binary", "csv", "slot"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Database",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
slotsearch-preprocess = "slotsearch.preprocess:main"
slotsearch-server = "slotsearch.server:main"
slotsearch-client = "slotsearch.client:main"

[tool.setuptools.packages.find]
include = ["slotsearch*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
