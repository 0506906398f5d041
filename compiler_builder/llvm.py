"""Download, unpack, configure and install the LLVM backend."""

from __future__ import annotations

import enum
import os
import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from .output import LoggingType, log
from .utils import (
    BuildError,
    PathLike,
    download_file,
    get_compiler_dependencies_build_path,
    get_system_temp_dir,
    run_command_with_live_output,
)

DEFAULT_LLVM_SOURCE_URL = (
    "https://github.com/llvm/llvm-project/releases/download/"
    "llvmorg-17.0.6/llvm-project-17.0.6.src.tar.xz"
)

_LLVM_URL_TEMPLATE = (
    "https://github.com/llvm/llvm-project/releases/download/"
    "llvmorg-{version}/llvm-project-{version}.src.tar.xz"
)

_FIXED_CMAKE_OPTIONS = (
    "-DCMAKE_DISABLE_FIND_PACKAGE_LibXml2=TRUE",
    "-DLLVM_ENABLE_LIBXML2=0",
    "-DLLVM_TARGETS_TO_BUILD=all",
    "-DLLVM_ENABLE_PROJECTS=llvm",
    "-DLLVM_ENABLE_TERMINFO=OFF",
    "-DLLVM_ENABLE_ZLIB=OFF",
)

_TEST_CMAKE_OPTIONS = (
    "-DLLVM_INCLUDE_BENCHMARKS=OFF",
    "-DLLVM_BUILD_TESTS=OFF",
    "-DLLVM_BUILD_EXAMPLES=OFF",
    "-DLLVM_INCLUDE_TESTS=OFF",
)


class LLVMReleaseType(enum.Enum):
    """CMake build type used for LLVM."""

    DEBUG = "Debug"
    RELEASE = "Release"
    MIN_SIZE_REL = "MinSizeRel"

    def __str__(self) -> str:
        return self.value


@dataclass
class LLVMBuild:
    """Settings for one LLVM build."""

    major: int = 17
    minor: int = 0
    patch: int = 6

    c_compiler: str = "gcc"
    cpp_compiler: str = "g++"

    c_flags: str = ""
    cpp_flags: str = ""

    release_type: LLVMReleaseType = LLVMReleaseType.RELEASE

    url: str = DEFAULT_LLVM_SOURCE_URL

    build_share_libs: bool = False
    build_x86_libs: bool = False
    build_llvm_dylib: bool = False
    static_link_libcpp: bool = False
    llvm_libc: bool = False
    enable_clang_modules: bool = False
    enable_libcpp: bool = False
    enable_pic: bool = True
    enable_pdb: bool = False
    optimize_tblgen: bool = False
    temporarily_allow_old_toolchain: bool = False

    use_linker: str = ""

    debug_commands: bool = False

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def setup_all(self) -> None:
        """Point the download URL at the configured version."""
        self.url = _LLVM_URL_TEMPLATE.format(version=self.version)

    def archive_name(self) -> str:
        """File name of the downloaded source archive."""
        return f"llvm-project-{self.version}.src.tar.xz"

    def decompressed_folder_name(self) -> str:
        """Name of the directory the archive unpacks into."""
        return f"llvm-project-{self.version}.src"

    def cmake_command(
        self, source_dir: PathLike, build_dir: PathLike, install_dir: PathLike
    ) -> list[str]:
        """The CMake configure command for this build."""
        command = [
            "cmake",
            "-G",
            "Ninja",
            "-S",
            os.fspath(source_dir),
            "-B",
            os.fspath(build_dir),
            f"-DCMAKE_BUILD_TYPE={self.release_type.value}",
            f"-DCMAKE_C_COMPILER={self.c_compiler}",
            f"-DCMAKE_CXX_COMPILER={self.cpp_compiler}",
            f"-DCMAKE_C_FLAGS={self.c_flags}",
            f"-DCMAKE_CXX_FLAGS={self.cpp_flags}",
            *_FIXED_CMAKE_OPTIONS,
            f"-DCMAKE_INSTALL_PREFIX={os.fspath(install_dir)}",
            *_TEST_CMAKE_OPTIONS,
        ]

        if self.use_linker:
            command.append(f"-DLLVM_USE_LINKER={self.use_linker}")

        conditional = (
            (not self.enable_pic, "-DLLVM_ENABLE_PIC=OFF"),
            (
                self.temporarily_allow_old_toolchain,
                "-DLLVM_TEMPORARILY_ALLOW_OLD_TOOLCHAIN=ON",
            ),
            (self.optimize_tblgen, "-DLLVM_OPTIMIZED_TABLEGEN=ON"),
            (self.enable_pdb, "-DLLVM_ENABLE_PDB=ON"),
            (self.enable_clang_modules, "-DLLVM_ENABLE_CLANG_MDDULES=ON"),
            (self.enable_libcpp, "-DLLVM_ENABLE_LIBCXX=ON"),
            (self.llvm_libc, "-DLLVM_ENABLE_LLVM_LIBC=TRUE"),
            (self.static_link_libcpp, "-DLLVM_STATIC_LINK_CXX_STDLIB=ON"),
            (self.build_share_libs, "-DBUILD_SHARED_LIBS=ON"),
            (self.build_x86_libs, "-DLLVM_BUILD_32_BITS=ON"),
            (self.build_llvm_dylib, "-DLLVM_BUILD_LLVM_DYLIB=ON"),
        )
        command.extend(option for enabled, option in conditional if enabled)
        return command


def _debug_command(llvm_build: LLVMBuild, label: str, command: Sequence[str]) -> None:
    if llvm_build.debug_commands:
        log(
            LoggingType.DEBUG,
            f"Executing {label} command: {shlex.join(command)}\n",
        )


def download_llvm(llvm_build: LLVMBuild) -> Path:
    """Download the LLVM source archive into the temporary directory."""
    destination = get_system_temp_dir() / llvm_build.archive_name()
    return download_file(llvm_build.url, destination)


def decompress_llvm(llvm_build: LLVMBuild, llvm_archive_path: PathLike) -> Path:
    """Unpack the archive with tar and return the source directory."""
    temp_dir = get_system_temp_dir()
    command = ["tar", "-xf", os.fspath(llvm_archive_path), "-C", os.fspath(temp_dir)]
    _debug_command(llvm_build, "tar", command)

    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise BuildError(f"Failed to execute tar: {exc}") from exc

    if completed.returncode != 0:
        raise BuildError("Failed to decompress LLVM archive")
    return temp_dir / llvm_build.decompressed_folder_name()


def _build_dir(llvm_source: PathLike) -> Path:
    return Path(llvm_source) / "llvm" / "build"


def prepare_build_directory(llvm_source: PathLike) -> None:
    """Create the build directory inside the unpacked sources."""
    try:
        _build_dir(llvm_source).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError("Failed to create llvm build directory!") from exc


def build_and_install(
    llvm_build: LLVMBuild, llvm_archive_path: PathLike, llvm_source: PathLike
) -> None:
    """Configure with CMake, build with Ninja and install."""
    build_dir = _build_dir(llvm_source)
    source_dir = build_dir.parent
    install_dir = get_compiler_dependencies_build_path()

    cmake = llvm_build.cmake_command(source_dir, build_dir, install_dir)
    _debug_command(llvm_build, "CMake", cmake)
    run_command_with_live_output(cmake, llvm_archive_path, llvm_source)

    ninja_build = ["ninja", "-C", os.fspath(build_dir)]
    _debug_command(llvm_build, "Ninja", ninja_build)
    run_command_with_live_output(ninja_build, llvm_archive_path, llvm_source)

    ninja_install = ["ninja", "-C", os.fspath(build_dir), "install"]
    _debug_command(llvm_build, "Ninja", ninja_install)
    run_command_with_live_output(ninja_install, llvm_archive_path, llvm_source)