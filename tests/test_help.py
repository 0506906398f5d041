import pytest

from compiler_builder.help import help_text, show_help

ALL_FLAGS = [
    "--llvm-major",
    "--llvm-minor",
    "--llvm-patch",
    "--llvm-c-compiler",
    "--llvm-cpp-compiler",
    "--llvm-c-flags",
    "--llvm-cpp-flags",
    "--llvm-release-type",
    "--llvm-build-share-libs",
    "--llvm-build-x86-libs",
    "--llvm-build-dylib",
    "--llvm-link-statically-libcpp",
    "--llvm-use-linker",
    "--llvm-use-llvm-libc",
    "--llvm-pic",
    "--llvm-libcpp",
    "--llvm-clang-modules",
    "--llvm-pdb",
    "--llvm-temporarily-old-toolchain",
    "--llvm-optimize-tblgen",
    "-gcc",
    "--gcc-major",
    "--gcc-minor",
    "--gcc-patch",
    "--gcc-host-shared",
    "--gcc-c-compiler-flags",
    "--gcc-cpp-compiler-flags",
    "--gcc-c-compiler-command",
    "--gcc-cpp-compiler-command",
    "--debug-llvm",
    "--debug-gcc",
]


def test_header_and_usage():
    text = help_text()
    assert text.startswith("The Compiler Builder\n\nUsage: compiler-builder [-flag|--flags]\n\n")


def test_sections_in_order():
    text = help_text()
    positions = [
        text.index(title)
        for title in ("Commands:", "LLVM build flags:", "GCC build flags:", "Useful flags:")
    ]
    assert positions == sorted(positions)


@pytest.mark.parametrize("flag", ALL_FLAGS)
def test_every_flag_listed_as_bullet(flag):
    lines = help_text().splitlines()
    assert any(line.startswith(f"\u2022 {flag} ") for line in lines)


def test_command_entries():
    text = help_text()
    assert "-h, --help, help Show help message." in text
    assert "-v, --version, version Show the version." in text


def test_flag_with_argument_placeholder():
    assert "--llvm-release-type [Debug|Release|MinSizeRel] " in help_text()


def test_ends_with_blank_line():
    assert help_text().endswith("Debug GCC build commands.\n\n")


def test_show_help_writes_stderr_and_exits(capsys):
    with pytest.raises(SystemExit) as excinfo:
        show_help()
    assert excinfo.value.code == 1
    captured = capsys.readouterr()
    assert captured.err == help_text()
    assert captured.out == ""