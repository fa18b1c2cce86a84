[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "floatplan"
version = "0.1.0"
description = "Task network editor that computes start times, float and the critical path"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "project management",
    "critical path",
    "float",
    "slack",
    "scheduling",
    "activity network",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Office/Business :: Scheduling",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
floatplan = "floatplan.app:main"

[tool.hatch.build.targets.wheel]
packages = ["floatplan"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
