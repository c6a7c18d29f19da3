[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pfmmonitor"
version = "0.1.0"
description = "Serial-port monitor that plots pulse-frequency-modulated sensor signals as frequency curves or an oscilloscope view"
requires-python = ">=3.10"
keywords = ["serial", "pfm", "frequency", "oscilloscope", "sensors", "monitoring", "plotting"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: X11 Applications",
    "Intended Audience :: Science/Research",
    "Natural Language :: Russian",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Visualization",
    "Topic :: Terminals :: Serial",
]
dependencies = [
    "pyserial>=3.5",
    "matplotlib>=3.5",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
]

[project.scripts]
pfmmonitor = "pfmmonitor.gui:main"

[tool.hatch.build.targets.wheel]
packages = ["pfmmonitor"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]
