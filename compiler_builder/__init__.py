"""Download, build and install the LLVM and GCC (libgccjit) compiler backends."""

__version__ = "1.0.0"