[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "armlab"
version = "0.1.0"
description = "A small expression language, an ARM instruction emulator with cache simulation, instruction analysis and reference routines"
requires-python = ">=3.10"
dependencies = []
keywords = ["arm", "emulator", "interpreter", "scanner", "parser", "cache"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Software Development :: Interpreters",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ntlang = "armlab.ntlang:main"

[tool.hatch.build.targets.wheel]
packages = ["armlab"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
