# compiler_builder

A command-line tool that downloads and builds the compiler backends a
toolchain depends on:

- **LLVM**. It downloads the `llvm-project` source release and extracts it
  with `tar`. It configures the build with CMake, using the Ninja generator,
  then builds it and installs it with `ninja`. The install location is
  `~/.thrushlang/backends/llvm/build`. On Windows, `%APPDATA%` takes the place
  of the home directory.
- **GCC** (optional). It downloads a GCC release, then runs
  `../configure --enable-languages=jit --disable-bootstrap` and `make` in the
  source's `build` directory.

## Requirements

`tar`, `cmake` and `ninja` must be on your `PATH`. Before it starts, the tool
checks that each of them can be run. It reports every one that is missing,
then stops with exit status 1. Building GCC also needs `make` and a working
C/C++ toolchain.

The package has no third-party dependencies. Downloads use the standard
library.

## Installation

```
pip install .
```

## Usage

```
compiler-builder [-flag|--flags]
```

A flag's value can follow as the next argument. It can also be joined to the
flag with `=`, or with `:` if the argument has no `=`:

```
compiler-builder --llvm-major 18 --llvm-minor 1 --llvm-patch 8
compiler-builder --llvm-release-type=MinSizeRel --llvm-use-linker:lld
compiler-builder -gcc --gcc-major 15 --gcc-minor 2 --gcc-patch 0
```

The tool ends with exit status 1 in these cases:

- an unknown argument: it prints the help message first;
- a flag with no value after it: it prints `ERROR Expected value after flag.`;
- a failed build step: it prints `PANIC` followed by the error.

### General

- `-h`, `--help`, `help`: print the help message to stderr and exit with
  status 1.
- `-v`, `--version`, `version`: print the version (`1.0.0`) and exit with
  status 0.

### LLVM flags

- `--llvm-major`, `--llvm-minor`, `--llvm-patch`: set the LLVM version. The
  default is 17.0.6. If a value is not a valid number, the flag uses 17, 0 and
  0 respectively.
- `--llvm-c-compiler`, `--llvm-cpp-compiler`: set the host compilers. The
  defaults are `gcc` and `g++`.
- `--llvm-c-flags`, `--llvm-cpp-flags`: set `CMAKE_C_FLAGS` and
  `CMAKE_CXX_FLAGS`.
- `--llvm-release-type [Debug|Release|MinSizeRel]`: set the CMake build type.
  Any other value gives `Release`.
- `--llvm-use-linker [lld]`: pass `-DLLVM_USE_LINKER=<value>`.

These flags take `true` or `false`. Any other value falls back to the default
shown in brackets:

| Flag | CMake option | Default if the value is invalid |
| --- | --- | --- |
| `--llvm-build-share-libs` | `-DBUILD_SHARED_LIBS=ON` | true |
| `--llvm-build-x86-libs` | `-DLLVM_BUILD_32_BITS=ON` | true |
| `--llvm-build-dylib` | `-DLLVM_BUILD_LLVM_DYLIB=ON` | true |
| `--llvm-link-statically-libcpp` | `-DLLVM_STATIC_LINK_CXX_STDLIB=ON` | true |
| `--llvm-use-llvm-libc` | `-DLLVM_ENABLE_LLVM_LIBC=TRUE` | false |
| `--llvm-pic` | `-DLLVM_ENABLE_PIC=OFF` when false | true |
| `--llvm-libcpp` | `-DLLVM_ENABLE_LIBCXX=ON` | false |
| `--llvm-clang-modules` | `-DLLVM_ENABLE_CLANG_MDDULES=ON` | false |
| `--llvm-pdb` | `-DLLVM_ENABLE_PDB=ON` | false |
| `--llvm-temporarily-old-toolchain` | `-DLLVM_TEMPORARILY_ALLOW_OLD_TOOLCHAIN=ON` | false |
| `--llvm-optimize-tblgen` | `-DLLVM_OPTIMIZED_TABLEGEN=ON` | false |

If a flag is not given, its option is off. The exception is PIC, which is on.

### GCC flags

- `-gcc`: also build the GCC backend.
- `--gcc-major`, `--gcc-minor`, `--gcc-patch`: set the GCC version. The
  default is 15.2.0.
- `--gcc-host-shared [true|false]`: pass `--enable-host-shared`. The default
  is `true`.
- `--gcc-c-compiler-flags`, `--gcc-cpp-compiler-flags`: exported as `CFLAGS`
  and `CXXFLAGS`.
- `--gcc-c-compiler-command`, `--gcc-cpp-compiler-command`: exported as `CC`
  and `CXX`.

### Debugging

- `--debug-llvm`, `--debug-gcc`: print each external command before it runs.

## Files and cleanup

Archives are downloaded to the system temporary directory and extracted there.
That directory is taken from the first of `TMPDIR`, `TMP`, `TEMP` and
`TEMPDIR` that is set. If none is set, it is `/tmp`, or on Windows
`%USERPROFILE%\AppData\Local\Temp`.

If a configure, build or install command exits with an error, the tool deletes
the downloaded archive and the extracted sources. While each command runs, its
output is echoed line by line.

## What it does not do

- The GCC backend is configured and built, but not installed. The tool runs
  no `make install`.
- It does not check archive checksums or signatures.
- It keeps no record of earlier builds. Each run downloads and builds again.

## Use from Python

```python
from compiler_builder.options import BuildOptions
from compiler_builder.builder import CompilerBuilderDependencies

options = BuildOptions()
options.llvm_build.major = 18
options.llvm_build.setup_all()
CompilerBuilderDependencies(options).build()
```

Other parts of the package can be used on their own:

- `compiler_builder.cli.parse_args(argv)` turns an argument vector, program
  name first, into a `BuildOptions`.
- `LLVMBuild.cmake_command(source_dir, build_dir, install_dir)` returns the
  CMake invocation as a list.
- `GCCBuild.configure_command()` returns the configure invocation as a list.
- A failed step raises `compiler_builder.utils.BuildError`.