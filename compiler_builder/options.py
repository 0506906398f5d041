"""Settings gathered from the command line."""

from __future__ import annotations

from dataclasses import dataclass, field

from .gcc import GCCBuild
from .llvm import LLVMBuild


@dataclass
class BuildOptions:
    """What to build and how."""

    llvm_build: LLVMBuild = field(default_factory=LLVMBuild)
    gcc_build: GCCBuild = field(default_factory=GCCBuild)
    build_gcc_backend: bool = False