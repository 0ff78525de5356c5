[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "janscompat"
version = "1.3.0"
description = "A small JSON value model and serializer, with UTF-8 checks, getopt-style option parsing and time helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["json", "serialization", "utf-8", "getopt", "hashtable"]
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
    "Topic :: File Formats :: JSON",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["janscompat"]

[tool.pytest.ini_options]
addopts = "-ra"
