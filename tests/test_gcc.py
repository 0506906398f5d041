import os
import subprocess

import pytest

from compiler_builder import gcc
from compiler_builder.gcc import (
    DEFAULT_GCC_SOURCE_URL,
    GCCBuild,
    build_and_install,
    decompress_gcc,
    prepare_build_directory,
)
from compiler_builder.utils import BuildError


def test_defaults():
    build = GCCBuild()
    assert (build.major, build.minor, build.patch) == (15, 2, 0)
    assert build.url == DEFAULT_GCC_SOURCE_URL
    assert build.host_shared is True
    assert build.c_compiler_command == ""
    assert build.debug_commands is False


def test_setup_all_with_defaults_keeps_default_url(monkeypatch):
    for variable in ("CC", "CXX", "CFLAGS", "CXXFLAGS"):
        monkeypatch.delenv(variable, raising=False)
    build = GCCBuild()
    build.setup_all()
    assert build.url == DEFAULT_GCC_SOURCE_URL
    assert "CC" not in os.environ
    assert "CXXFLAGS" not in os.environ


def test_setup_all_uses_version_in_url(monkeypatch):
    for variable in ("CC", "CXX", "CFLAGS", "CXXFLAGS"):
        monkeypatch.delenv(variable, raising=False)
    build = GCCBuild(major=14, minor=1, patch=3)
    build.setup_all()
    assert build.url.endswith("/gcc-14.1.3.tar.gz")
    assert build.url.startswith(
        "https://github.com/gcc-mirror/gcc/archive/refs/tags/releases/"
    )


def test_setup_all_exports_compiler_settings(monkeypatch):
    for variable in ("CC", "CXX", "CFLAGS", "CXXFLAGS"):
        monkeypatch.delenv(variable, raising=False)
    build = GCCBuild(
        c_compiler_command="mycc",
        cpp_compiler_command="mycxx",
        c_compiler_flags="-O2 -g",
        cpp_compiler_flags="-O1",
    )
    build.setup_all()
    assert build.url == DEFAULT_GCC_SOURCE_URL
    assert build.c_compiler_command == "mycc"
    assert os.environ["CC"] == build.c_compiler_command
    assert os.environ["CXX"] == "mycxx"
    assert os.environ["CFLAGS"] == "-O2 -g"
    assert os.environ["CXXFLAGS"] == "-O1"


def test_names_follow_version():
    build = GCCBuild(major=13, minor=4, patch=1)
    assert build.archive_name() == build.decompressed_folder_name() + ".tar.gz"
    assert build.decompressed_folder_name().startswith("gcc-releases-gcc-")
    assert "13.4.1" in build.decompressed_folder_name()


def test_configure_command_host_shared():
    assert GCCBuild().configure_command() == [
        "../configure",
        "--enable-languages=jit",
        "--disable-bootstrap",
        "--enable-host-shared",
    ]
    assert "--enable-host-shared" not in GCCBuild(host_shared=False).configure_command()


def test_prepare_build_directory(tmp_path):
    source = tmp_path / "src"
    prepare_build_directory(source)
    assert (source / "build").is_dir()
    prepare_build_directory(source)
    assert (source / "build").is_dir()


def test_prepare_build_directory_failure(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(BuildError, match="Failed to create gcc build directory!"):
        prepare_build_directory(blocker)


def test_decompress_success(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    calls = []

    def fake_run(command, check):
        calls.append(command)
        return subprocess.CompletedProcess(command, 0)

    monkeypatch.setattr(gcc.subprocess, "run", fake_run)
    build = GCCBuild()
    archive = tmp_path / build.archive_name()
    result = decompress_gcc(build, archive)
    assert result == tmp_path / build.decompressed_folder_name()
    assert calls == [["tar", "-xf", str(archive), "-C", str(tmp_path)]]


def test_decompress_failure(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))
    monkeypatch.setattr(
        gcc.subprocess,
        "run",
        lambda command, check: subprocess.CompletedProcess(command, 2),
    )
    with pytest.raises(BuildError, match="Failed to decompress GCC archive"):
        decompress_gcc(GCCBuild(), tmp_path / "a.tar.gz")


def test_decompress_tar_missing(tmp_path, monkeypatch):
    monkeypatch.setenv("TMPDIR", str(tmp_path))

    def fake_run(command, check):
        raise FileNotFoundError("tar")

    monkeypatch.setattr(gcc.subprocess, "run", fake_run)
    with pytest.raises(BuildError, match="Failed to execute tar"):
        decompress_gcc(GCCBuild(), tmp_path / "a.tar.gz")


def test_build_without_build_dir(tmp_path):
    with pytest.raises(BuildError, match="Failed to set current dir!"):
        build_and_install(GCCBuild(), tmp_path / "a.tar.gz", tmp_path / "missing")


def _failing_source(tmp_path):
    source = tmp_path / "gcc-src"
    prepare_build_directory(source)
    configure = source / "configure"
    configure.write_text("#!/bin/sh\nexit 3\n")
    configure.chmod(0o755)
    archive = tmp_path / "gcc.tar.gz"
    archive.write_bytes(b"data")
    return source, archive


def test_failed_configure_clears_build(tmp_path):
    source, archive = _failing_source(tmp_path)
    with pytest.raises(BuildError, match="exit status: 3"):
        build_and_install(GCCBuild(), archive, source)
    assert not source.exists()
    assert not archive.exists()


def test_debug_commands_are_logged(tmp_path, capsys):
    source, archive = _failing_source(tmp_path)
    with pytest.raises(BuildError):
        build_and_install(GCCBuild(debug_commands=True), archive, source)
    out = capsys.readouterr().out
    assert (
        "DEBUG Executing GNU configure command: ../configure "
        "--enable-languages=jit --disable-bootstrap --enable-host-shared\n"
    ) in out
    assert "DEBUG Executing GNU make command: make\n" in out