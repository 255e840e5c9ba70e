[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rtbuiltins"
version = "0.1.0"
description = "Bit-exact software floating-point, integer conversion, memory and atomic runtime helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["soft-float", "ieee-754", "runtime", "builtins", "atomics", "floating-point"]
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
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["rtbuiltins"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
