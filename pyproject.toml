[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "aeinet"
version = "0.1.0"
description = "Event-sourced dynamic neural networks and adaptive memory with random structural mutation."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "neural-network",
    "event-sourcing",
    "cqrs",
    "neuroevolution",
    "adaptive-memory",
    "curiosity",
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
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
aeinet = "aeinet.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["aeinet"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
