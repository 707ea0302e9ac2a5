[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rfswitch"
version = "0.1.0"
description = "Encode, time and decode 433 MHz remote-switch codes (tri-state and binary) in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["rf", "433mhz", "remote switch", "tri-state", "ook", "home automation"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Environment :: Console",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rfswitch = "rfswitch.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["rfswitch"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
