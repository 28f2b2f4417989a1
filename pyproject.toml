[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "paneplex"
version = "0.1.0"
description = "Building blocks for a terminal workspace: status and tab bars, a file browser pane, input dispatch, terminal access and session discovery"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "multiplexer", "status-bar", "tab-bar", "tui", "sessions"]
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
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["paneplex"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
