[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "savedata"
version = "0.1.0"
description = "Game player save-data model with seeded random generation and a protobuf-compatible binary codec"
requires-python = ">=3.10"
dependencies = []
keywords = ["savedata", "protobuf", "serialization", "dataset", "varint"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: File Formats",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["savedata"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
