[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "minishex"
version = "0.1.0"
description = "Building blocks of a small POSIX-style shell: environment, builtins, heredocs, command resolution and child processes"
requires-python = ">=3.10"
dependencies = []
keywords = ["shell", "builtins", "heredoc", "environment", "cd"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.setuptools.packages.find]
include = ["minishex*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
