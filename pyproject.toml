[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "apolloconf"
version = "0.1.0"
description = "Client-side building blocks for an Apollo-style configuration service: app settings, notifications, server selection, in-memory caching and local backups"
requires-python = ">=3.10"
dependencies = []
keywords = ["configuration", "apollo", "config-center", "cache", "backup"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["apolloconf"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
