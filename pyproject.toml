[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pointerflow"
version = "0.1.0"
description = "Pointer input processing behaviors: listeners, scalers, layer toggles and movement-to-keypress conversion"
requires-python = ">=3.10"
dependencies = []
keywords = ["keyboard", "pointer", "input", "mouse", "trackball", "keymap", "behavior"]
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
    "Topic :: Software Development :: Embedded Systems",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pointerflow"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
