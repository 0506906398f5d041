from compiler_builder.gcc import GCCBuild
from compiler_builder.llvm import LLVMBuild
from compiler_builder.options import BuildOptions


def test_defaults():
    options = BuildOptions()
    assert options.build_gcc_backend is False
    assert options.llvm_build == LLVMBuild()
    assert options.gcc_build == GCCBuild()


def test_instances_do_not_share_builds():
    first = BuildOptions()
    second = BuildOptions()
    first.llvm_build.major = 18
    first.gcc_build.host_shared = False
    assert second.llvm_build.major == LLVMBuild().major
    assert second.gcc_build.host_shared is True


def test_gcc_backend_toggle():
    options = BuildOptions()
    options.build_gcc_backend = True
    assert options.build_gcc_backend is True