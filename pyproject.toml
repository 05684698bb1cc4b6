[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cspnet"
version = "0.1.0"
description = "Cubesat Space Protocol building blocks: headers, checksums, authentication, buffers and connections"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "csp",
    "cubesat",
    "space protocol",
    "networking",
    "crc32c",
    "hmac",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["cspnet"]

[tool.hatch.build.targets.sdist]
include = [
    "cspnet",
    "tests",
    "pyproject.toml",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
