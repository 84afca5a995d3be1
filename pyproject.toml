[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gravitygame"
version = "0.1.0"
description = "A small side-scrolling platformer where the player can flip gravity and edit platforms with the mouse."
requires-python = ">=3.10"
keywords = ["game", "platformer", "gravity", "pygame", "json", "level"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: MacOS X",
    "Environment :: Win32 (MS Windows)",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment :: Side-Scrolling/Arcade Games",
]
dependencies = [
    "pygame",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gravitygame = "gravitygame.app:main"

[tool.hatch.build.targets.wheel]
packages = ["gravitygame"]

[tool.pytest.ini_options]
addopts = "-ra"
