[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "compiler_builder"
version = "1.0.0"
description = "Download, build and install the LLVM and GCC (libgccjit) backends used by a compiler toolchain."
requires-python = ">=3.10"
dependencies = []
keywords = ["llvm", "gcc", "libgccjit", "cmake", "ninja", "build", "toolchain"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: Microsoft :: Windows",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Build Tools",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
compiler-builder = "compiler_builder.cli:main"

[tool.setuptools.packages.find]
include = ["compiler_builder*"]

[tool.pytest.ini_options]
addopts = "-ra"
