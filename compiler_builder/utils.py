"""Tool checks, install paths, downloads and child processes."""

from __future__ import annotations

import contextlib
import os
import shutil
import subprocess
import threading
import urllib.error
import urllib.request
from collections.abc import Sequence
from pathlib import Path
from typing import IO, Optional, Union

from .output import LoggingType, OutputIn, log, write

COMPILER_BUILDER_VERSION = "1.0.0"

_BACKEND_BUILD_SUBDIR = Path(".thrushlang") / "backends" / "llvm" / "build"
_TEMP_DIR_VARIABLES = ("TMPDIR", "TMP", "TEMP", "TEMPDIR")

PathLike = Union[str, "os.PathLike[str]"]


class BuildError(Exception):
    """A step of a backend build failed."""


def _tool_runs(name: str) -> bool:
    try:
        subprocess.run(
            [name, "--version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return True


def tar_is_available() -> bool:
    """Whether a ``tar`` executable can be started."""
    return _tool_runs("tar")


def cmake_is_available() -> bool:
    """Whether a ``cmake`` executable can be started."""
    return _tool_runs("cmake")


def ninja_is_available() -> bool:
    """Whether a ``ninja`` executable can be started."""
    return _tool_runs("ninja")


def get_compiler_dependencies_build_path() -> Path:
    """Directory the compiler backends are installed into.

    Exits the program if the required environment variable is missing or
    the operating system is not supported.
    """
    if os.name == "posix":
        variable = "HOME"
    elif os.name == "nt":
        variable = "APPDATA"
    else:
        log(
            LoggingType.PANIC,
            "Unsopported OS for build Thrush Programming Language backend build.",
        )
        raise SystemExit(1)

    base = os.environ.get(variable)
    if base is None:
        log(LoggingType.PANIC, f"Missing ${variable} environment variable.\n")
        raise SystemExit(1)
    return Path(base) / _BACKEND_BUILD_SUBDIR


def get_system_temp_dir() -> Path:
    """The system temporary directory, as named by the usual variables."""
    for variable in _TEMP_DIR_VARIABLES:
        value = os.environ.get(variable)
        if value is not None:
            return Path(value)

    if os.name == "nt":
        profile = os.environ.get("USERPROFILE")
        if profile is not None:
            return Path(profile) / "AppData" / "Local" / "Temp"
        return Path("C:\\Temp")
    return Path("/tmp")


def download_file(url: str, destination: PathLike) -> Path:
    """Fetch ``url``, following redirects, and store the body at ``destination``."""
    destination = Path(destination)
    try:
        response = urllib.request.urlopen(url)
    except urllib.error.HTTPError as exc:
        raise BuildError(
            f"Failed to download {url}: HTTP {exc.code} {exc.reason}"
        ) from exc
    except (urllib.error.URLError, OSError, ValueError) as exc:
        raise BuildError(f"Failed to download {url}: {exc}") from exc

    with response:
        status = getattr(response, "status", 200)
        if not 200 <= status < 300:
            raise BuildError(
                f"Failed to download {url}: HTTP {status} {response.reason}"
            )
        try:
            data = response.read()
        except OSError as exc:
            raise BuildError(f"Failed to read response for {url}: {exc}") from exc

    try:
        handle = destination.open("wb")
    except OSError as exc:
        raise BuildError(f"Failed to create file {destination}: {exc}") from exc
    with handle:
        try:
            handle.write(data)
        except OSError as exc:
            raise BuildError(f"Failed to write to file {destination}: {exc}") from exc
    return destination


def _forward_lines(stream: IO[str], output_in: OutputIn) -> None:
    with stream:
        for line in stream:
            write(output_in, line.rstrip("\r\n") + "\n")


def _describe_status(returncode: int) -> str:
    if returncode < 0:
        return f"signal: {-returncode}"
    return f"exit status: {returncode}"


def _clear_build(archive_path: PathLike, source_path: PathLike) -> None:
    with contextlib.suppress(OSError):
        Path(archive_path).unlink()
    shutil.rmtree(source_path, ignore_errors=True)


def run_command_with_live_output(
    command: Sequence[PathLike],
    archive_path: PathLike,
    source_path: PathLike,
    cwd: Optional[PathLike] = None,
) -> None:
    """Run ``command``, echoing its output line by line as it arrives.

    If the command fails, the downloaded archive and the unpacked sources
    are removed before :class:`BuildError` is raised.
    """
    args = [os.fspath(part) for part in command]
    try:
        process = subprocess.Popen(
            args,
            cwd=cwd,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            errors="replace",
        )
    except OSError as exc:
        raise BuildError(f"Failed to spawn process: {exc}") from exc

    forwarders = [
        threading.Thread(
            target=_forward_lines, args=(process.stdout, OutputIn.STDOUT), daemon=True
        ),
        threading.Thread(
            target=_forward_lines, args=(process.stderr, OutputIn.STDERR), daemon=True
        ),
    ]
    for forwarder in forwarders:
        forwarder.start()

    returncode = process.wait()
    for forwarder in forwarders:
        forwarder.join()

    if returncode != 0:
        _clear_build(archive_path, source_path)
        raise BuildError(f"Command failed with status: {_describe_status(returncode)}")