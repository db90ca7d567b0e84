[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "deslopify"
version = "0.3.0"
description = "Codebase friction analysis: naming, searchability, dead code, duplication, import graphs, layering and anti-patterns"
requires-python = ">=3.10"
dependencies = []
keywords = ["code-quality", "static-analysis", "duplication", "dead-code", "developer-tools"]
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
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["deslopify"]

[tool.pytest.ini_options]
addopts = "-ra"
