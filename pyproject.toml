[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sessiondemo"
version = "0.1.0"
description = "A small account service over HTTP with registration, login, listing, editing and closing of accounts stored in SQLite"
requires-python = ">=3.10"
keywords = ["flask", "accounts", "session", "web", "sqlite", "json-api"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sessiondemo = "sessiondemo.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sessiondemo"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
