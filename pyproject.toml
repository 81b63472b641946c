[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtkernel"
version = "0.1.0"
description = "An OSEK/AUTOSAR-style kernel model: ready-queue scheduling, schedule tables, status codes and system log formatting"
requires-python = ">=3.10"
dependencies = []
keywords = ["rtos", "osek", "autosar", "scheduler", "schedule-table", "syslog", "embedded"]
classifiers = [
    "Development Status :: 3 - Alpha",
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
packages = ["rtkernel"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
