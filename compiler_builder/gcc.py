"""Download, unpack, configure and build the GCC (libgccjit) backend."""

from __future__ import annotations

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
    get_system_temp_dir,
    run_command_with_live_output,
)

DEFAULT_GCC_SOURCE_URL = (
    "https://github.com/gcc-mirror/gcc/archive/refs/tags/releases/gcc-15.2.0.tar.gz"
)

_GCC_URL_TEMPLATE = (
    "https://github.com/gcc-mirror/gcc/archive/refs/tags/releases/gcc-{version}.tar.gz"
)


@dataclass
class GCCBuild:
    """Settings for one GCC build."""

    major: int = 15
    minor: int = 2
    patch: int = 0

    url: str = DEFAULT_GCC_SOURCE_URL
    host_shared: bool = True

    c_compiler_command: str = ""
    cpp_compiler_command: str = ""

    c_compiler_flags: str = ""
    cpp_compiler_flags: str = ""

    debug_commands: bool = False

    @property
    def version(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    def setup_all(self) -> None:
        """Point the URL at the configured version and export compiler settings."""
        self.url = _GCC_URL_TEMPLATE.format(version=self.version)

        exported = (
            ("CC", self.c_compiler_command),
            ("CXX", self.cpp_compiler_command),
            ("CFLAGS", self.c_compiler_flags),
            ("CXXFLAGS", self.cpp_compiler_flags),
        )
        for variable, value in exported:
            if value:
                os.environ[variable] = value

    def archive_name(self) -> str:
        """File name of the downloaded source archive."""
        return f"gcc-releases-gcc-{self.version}.tar.gz"

    def decompressed_folder_name(self) -> str:
        """Name of the directory the archive unpacks into."""
        return f"gcc-releases-gcc-{self.version}"

    def configure_command(self) -> list[str]:
        """The configure invocation, run from the build directory."""
        command = ["../configure", "--enable-languages=jit", "--disable-bootstrap"]
        if self.host_shared:
            command.append("--enable-host-shared")
        return command


def _debug_command(gcc_build: GCCBuild, label: str, command: Sequence[str]) -> None:
    if gcc_build.debug_commands:
        log(
            LoggingType.DEBUG,
            f"Executing {label} command: {shlex.join(command)}\n",
        )


def download_gcc(gcc_build: GCCBuild) -> Path:
    """Download the GCC source archive into the temporary directory."""
    destination = get_system_temp_dir() / gcc_build.archive_name()
    return download_file(gcc_build.url, destination)


def decompress_gcc(gcc_build: GCCBuild, gcc_archive_path: PathLike) -> Path:
    """Unpack the archive with tar and return the source directory."""
    temp_dir = get_system_temp_dir()
    command = ["tar", "-xf", os.fspath(gcc_archive_path), "-C", os.fspath(temp_dir)]
    _debug_command(gcc_build, "tar", command)

    try:
        completed = subprocess.run(command, check=False)
    except OSError as exc:
        raise BuildError(f"Failed to execute tar: {exc}") from exc

    if completed.returncode != 0:
        raise BuildError("Failed to decompress GCC archive")
    return temp_dir / gcc_build.decompressed_folder_name()


def _build_dir(gcc_source: PathLike) -> Path:
    return Path(gcc_source) / "build"


def prepare_build_directory(gcc_source: PathLike) -> None:
    """Create the build directory inside the unpacked sources."""
    try:
        _build_dir(gcc_source).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError("Failed to create gcc build directory!") from exc


def build_and_install(
    gcc_build: GCCBuild, gcc_archive_path: PathLike, gcc_source: PathLike
) -> None:
    """Run configure and make inside the build directory."""
    build_dir = _build_dir(gcc_source)
    if not build_dir.is_dir():
        raise BuildError("Failed to set current dir!")

    configure = gcc_build.configure_command()
    _debug_command(gcc_build, "GNU configure", configure)

    make = ["make"]
    _debug_command(gcc_build, "GNU make", make)

    run_command_with_live_output(configure, gcc_archive_path, gcc_source, cwd=build_dir)
    run_command_with_live_output(make, gcc_archive_path, gcc_source, cwd=build_dir)