[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fuzzgauntlet"
version = "0.1.0"
description = "Fuzzing benchmark targets: byte-level puzzles that a fuzzer must solve to reach a marked goal."
requires-python = ">=3.10"
dependencies = []
keywords = ["fuzzing", "benchmark", "fuzzer", "testing", "puzzles", "coverage"]
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
    "Topic :: Software Development :: Testing",
    "Topic :: Security",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[project.scripts]
fuzzgauntlet = "fuzzgauntlet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["fuzzgauntlet"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
