[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tinyfmt"
version = "0.1.0"
description = "A small printf-style formatter with C-like conversion rules and a levelled console logger"
requires-python = ">=3.10"
dependencies = []
keywords = ["printf", "sprintf", "snprintf", "format", "logging", "embedded"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: General",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: System :: Logging",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tinyfmt-demo = "tinyfmt.log:main"

[tool.hatch.build.targets.wheel]
packages = ["tinyfmt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
