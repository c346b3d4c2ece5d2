[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mlgutil"
version = "0.1.0"
description = "Matrix file formats (plain text, Harwell-Boeing, MATLAB), binary serialization, logging, indented output and bounded thread banks for numerical code"
requires-python = ">=3.10"
dependencies = [
    "numpy",
    "scipy",
]
keywords = [
    "sparse matrix",
    "harwell-boeing",
    "matlab",
    "matrix market",
    "serialization",
    "binary format",
    "thread pool",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mlgutil"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
