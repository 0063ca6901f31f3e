[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "alex"
version = "0.1.0"
description = "A compiler for a tiny line-oriented language that emits x86-64 FASM assembly"
requires-python = ">=3.10"
keywords = ["compiler", "assembly", "fasm", "x86-64", "toy-language"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Compilers",
]
dependencies = []

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
alex = "alex.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["alex"]

[tool.pytest.ini_options]
addopts = "-ra"
