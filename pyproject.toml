[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "assetkit"
version = "0.1.0"
description = "Read external resources by dotted id from directories, zip archives or memory, with loaders for common formats and building blocks for hot-reloading."
requires-python = ">=3.11"
keywords = ["assets", "resources", "loader", "hot-reloading", "zip", "games"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Games/Entertainment",
]
dependencies = [
    "watchdog",
    "pyyaml",
    "msgpack",
    "cbor2",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["assetkit"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
