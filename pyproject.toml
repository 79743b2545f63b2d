[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mitra"
version = "2.3.0"
description = "A command-line tool for working with Persian (Jalali/Shamsi) dates and times"
requires-python = ">=3.10"
dependencies = []
keywords = ["persian", "jalali", "shamsi", "calendar", "date", "cli"]
classifiers = [
    "Development Status :: 5 - Production/Stable",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Natural Language :: Persian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
mitra = "mitra.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["mitra"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
