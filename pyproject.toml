[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dilithium_kara"
version = "0.1.0"
description = "Dilithium lattice-based digital signatures with Karatsuba polynomial multiplication, in pure Python"
requires-python = ">=3.10"
dependencies = []
keywords = ["dilithium", "post-quantum", "signature", "lattice", "karatsuba", "cryptography"]
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
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["dilithium_kara"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
