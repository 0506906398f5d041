"""Drives the download, build and installation of the backends."""

from __future__ import annotations

import contextlib

from . import gcc, llvm
from .options import BuildOptions
from .output import LoggingType, OutputIn, log, write
from .utils import BuildError, get_compiler_dependencies_build_path


class CompilerBuilderDependencies:
    """Builds the compiler backends selected in the options."""

    def __init__(self, options: BuildOptions) -> None:
        self.options = options

    def build(self) -> None:
        """Build LLVM and, if requested, GCC; a failure ends the program."""
        try:
            self._build_llvm()
        except BuildError as err:
            log(LoggingType.PANIC, str(err))

        write(OutputIn.STDOUT, "LLVM backend installed.\n\n")

        if self.options.build_gcc_backend:
            try:
                self._build_gcc()
            except BuildError as err:
                log(LoggingType.PANIC, str(err))

            write(OutputIn.STDOUT, "GCC backend installed.\n\n")

    def _build_llvm(self) -> None:
        llvm_build = self.options.llvm_build

        install_path = get_compiler_dependencies_build_path()
        with contextlib.suppress(OSError):
            install_path.rmdir()
        with contextlib.suppress(OSError):
            install_path.mkdir(parents=True, exist_ok=True)

        write(OutputIn.STDOUT, "Downloading LLVM...\n")

        downloaded = llvm.download_llvm(llvm_build)
        source = llvm.decompress_llvm(llvm_build, downloaded)

        write(OutputIn.STDOUT, "Building LLVM...\n")

        llvm.prepare_build_directory(source)
        llvm.build_and_install(llvm_build, downloaded, source)

    def _build_gcc(self) -> None:
        gcc_build = self.options.gcc_build

        write(OutputIn.STDOUT, "Downloading GCC...\n")

        downloaded = gcc.download_gcc(gcc_build)
        source = gcc.decompress_gcc(gcc_build, downloaded)

        write(OutputIn.STDOUT, "Building GCC...\n")

        gcc.prepare_build_directory(source)
        gcc.build_and_install(gcc_build, downloaded, source)