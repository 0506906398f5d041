"""Command-line parsing and the program entry point."""

from __future__ import annotations

import os
import re
import sys
from collections.abc import Callable, Sequence
from typing import Any, NoReturn, Optional

from .builder import CompilerBuilderDependencies
from .help import show_help
from .llvm import LLVMReleaseType
from .options import BuildOptions
from .output import LoggingType, OutputIn, log, write
from .utils import (
    COMPILER_BUILDER_VERSION,
    cmake_is_available,
    ninja_is_available,
    tar_is_available,
)

_U32_MAX = 0xFFFFFFFF
_U32_PATTERN = re.compile(r"\+?[0-9]+")


def _parse_u32(default: int) -> Callable[[str], int]:
    def convert(text: str) -> int:
        if _U32_PATTERN.fullmatch(text):
            number = int(text)
            if number <= _U32_MAX:
                return number
        return default

    return convert


def _parse_bool(default: bool) -> Callable[[str], bool]:
    def convert(text: str) -> bool:
        if text == "true":
            return True
        if text == "false":
            return False
        return default

    return convert


def _as_text(text: str) -> str:
    return text


def _parse_release_type(text: str) -> LLVMReleaseType:
    try:
        return LLVMReleaseType(text)
    except ValueError:
        return LLVMReleaseType.RELEASE


# Flags that take a value: flag -> (build section, attribute, converter).
_VALUE_FLAGS: dict[str, tuple[str, str, Callable[[str], Any]]] = {
    "--llvm-major": ("llvm_build", "major", _parse_u32(17)),
    "--llvm-minor": ("llvm_build", "minor", _parse_u32(0)),
    "--llvm-patch": ("llvm_build", "patch", _parse_u32(0)),
    "--llvm-c-compiler": ("llvm_build", "c_compiler", _as_text),
    "--llvm-cpp-compiler": ("llvm_build", "cpp_compiler", _as_text),
    "--llvm-cpp-flags": ("llvm_build", "cpp_flags", _as_text),
    "--llvm-c-flags": ("llvm_build", "c_flags", _as_text),
    "--llvm-release-type": ("llvm_build", "release_type", _parse_release_type),
    "--llvm-build-share-libs": ("llvm_build", "build_share_libs", _parse_bool(True)),
    "--llvm-build-x86-libs": ("llvm_build", "build_x86_libs", _parse_bool(True)),
    "--llvm-build-dylib": ("llvm_build", "build_llvm_dylib", _parse_bool(True)),
    "--llvm-link-statically-libcpp": (
        "llvm_build",
        "static_link_libcpp",
        _parse_bool(True),
    ),
    "--llvm-use-linker": ("llvm_build", "use_linker", _as_text),
    "--llvm-use-llvm-libc": ("llvm_build", "llvm_libc", _parse_bool(False)),
    "--llvm-pic": ("llvm_build", "enable_pic", _parse_bool(True)),
    "--llvm-libcpp": ("llvm_build", "enable_libcpp", _parse_bool(False)),
    "--llvm-clang-modules": ("llvm_build", "enable_clang_modules", _parse_bool(False)),
    "--llvm-pdb": ("llvm_build", "enable_pdb", _parse_bool(False)),
    "--llvm-temporarily-old-toolchain": (
        "llvm_build",
        "temporarily_allow_old_toolchain",
        _parse_bool(False),
    ),
    "--llvm-optimize-tblgen": ("llvm_build", "optimize_tblgen", _parse_bool(False)),
    "--gcc-major": ("gcc_build", "major", _parse_u32(15)),
    "--gcc-minor": ("gcc_build", "minor", _parse_u32(2)),
    "--gcc-patch": ("gcc_build", "patch", _parse_u32(0)),
    "--gcc-host-shared": ("gcc_build", "host_shared", _parse_bool(True)),
    "--gcc-c-compiler-flags": ("gcc_build", "c_compiler_flags", _as_text),
    "--gcc-cpp-compiler-flags": ("gcc_build", "cpp_compiler_flags", _as_text),
    "--gcc-c-compiler-command": ("gcc_build", "c_compiler_command", _as_text),
    "--gcc-cpp-compiler-command": ("gcc_build", "cpp_compiler_command", _as_text),
}

_HELP_FLAGS = frozenset({"-h", "--help", "help"})
_VERSION_FLAGS = frozenset({"-v", "--version", "version"})


def split_argument(arg: str) -> tuple[str, Optional[str]]:
    """Split ``key=value`` (or, failing that, ``key:value``) into its parts."""
    for separator in ("=", ":"):
        key, found, value = arg.partition(separator)
        if found:
            return key, value
    return arg, None


def preprocess_args(args: Sequence[str]) -> list[str]:
    """Drop the program name and break joined ``key=value`` arguments apart."""
    processed: list[str] = []
    for arg in list(args)[1:]:
        key, value = split_argument(arg)
        processed.append(key)
        if value is not None:
            processed.append(value)
    return processed


def _report_missing_value() -> NoReturn:
    log(LoggingType.ERROR, "Expected value after flag.")
    raise SystemExit(1)


def parse_args(args: Sequence[str]) -> BuildOptions:
    """Build the options from a full argument vector, program name first.

    Help, version and unknown flags end the program, as does a flag
    missing its value. The returned builds are already set up.
    """
    options = BuildOptions()
    arguments = iter(preprocess_args(args))

    for argument in arguments:
        if argument in _HELP_FLAGS:
            show_help()
        elif argument in _VERSION_FLAGS:
            write(OutputIn.STDOUT, COMPILER_BUILDER_VERSION)
            raise SystemExit(0)
        elif argument in _VALUE_FLAGS:
            section, attribute, convert = _VALUE_FLAGS[argument]
            value = next(arguments, None)
            if value is None:
                _report_missing_value()
            setattr(getattr(options, section), attribute, convert(value))
        elif argument == "-gcc":
            options.build_gcc_backend = True
        elif argument == "--debug-llvm":
            options.llvm_build.debug_commands = True
        elif argument == "--debug-gcc":
            options.gcc_build.debug_commands = True
        else:
            show_help()

    options.llvm_build.setup_all()
    if options.build_gcc_backend:
        options.gcc_build.setup_all()
    return options


def check_requirements() -> None:
    """Report each missing build tool; exit with status 1 if any is missing."""
    tools = (
        ("tar", tar_is_available()),
        ("cmake", cmake_is_available()),
        ("ninja", ninja_is_available()),
    )
    for name, available in tools:
        if not available:
            log(LoggingType.ERROR, f"{name} is not installed.\n")

    if not all(available for _, available in tools):
        log(LoggingType.PANIC, "Requirements aren't ok!\n\n")


def main(argv: Optional[Sequence[str]] = None) -> None:
    """Parse the command line, check the tools and build the backends."""
    os.environ["CARGO_TERM_VERBOSE"] = "true"
    args = sys.argv if argv is None else argv
    options = parse_args(args)
    check_requirements()
    CompilerBuilderDependencies(options).build()