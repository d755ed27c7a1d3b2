[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hiporecords"
version = "0.1.0"
description = "File headers, LZ4 records, record builders, data frames and event indexes for HIPO data files"
requires-python = ">=3.10"
keywords = ["hipo", "physics", "data format", "records", "lz4", "histogram"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
]
dependencies = [
    "lz4",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["hiporecords"]

[tool.pytest.ini_options]
addopts = "-ra"
