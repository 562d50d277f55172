"""CMake configuration for the AWS-LC build.

Deterministic from linkage, OPT_LEVEL bucket, ssl/asan features, target platform,
prefix, and the generated-include dir. The result is read-only once built.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType

from aws_lc_sys_builder.errors import ConfigurationError
from aws_lc_sys_builder.probe import Features, LinkageMode, TargetInfo, build_type_for_opt_level

CONFIGURE_ARGS = ("--no-warn-unused-cli",)

# Toolchain known to support AddressSanitizer instrumentation; replaces CC/CXX/ASM outright.
ASAN_TOOLCHAIN: dict[str, str] = {
    "C": "/usr/bin/clang",
    "CXX": "/usr/bin/clang++",
    "ASM": "/usr/bin/clang",
}
_TOOLCHAIN_ENV = {"C": "CC", "CXX": "CXX", "ASM": "ASM"}


@dataclass(frozen=True)
class BuildConfiguration:
    defines: Mapping[str, str]
    env: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    configure_args: tuple[str, ...] = CONFIGURE_ARGS

    @property
    def build_type(self) -> str | None:
        return self.defines.get("CMAKE_BUILD_TYPE")

    def cmake_define_args(self) -> list[str]:
        return [f"-D{k}={v}" for k, v in self.defines.items()]


def _shared_libs_flag(linkage: LinkageMode) -> str:
    if linkage is LinkageMode.DYNAMIC:
        return "1"
    if linkage is LinkageMode.STATIC:
        return "0"
    msg = f"Unhandled linkage mode: {linkage!r}"
    raise ConfigurationError(msg)


def _apple_defines(target: TargetInfo) -> dict[str, str]:
    """iOS system name / simulator sysroot, and forced arm64 arch for aarch64 Apple targets."""
    defines: dict[str, str] = {}
    if target.platform.vendor != "apple":
        return defines
    if target.platform.os == "ios":
        defines["CMAKE_SYSTEM_NAME"] = "iOS"
        if target.triple.endswith("-ios-sim"):
            defines["CMAKE_OSX_SYSROOT"] = "iphonesimulator"
    if target.platform.arch == "aarch64":
        defines["CMAKE_OSX_ARCHITECTURES"] = "arm64"
    return defines


def prepare_cmake_build(
    linkage: LinkageMode,
    target: TargetInfo,
    features: Features,
    build_prefix: str,
    generated_include_dir: Path,
) -> BuildConfiguration:
    """Build the CMake cache variables and toolchain env overrides for one invocation."""
    defines: dict[str, str] = {"BUILD_SHARED_LIBS": _shared_libs_flag(linkage)}

    build_type = build_type_for_opt_level(target.opt_level)
    if build_type is not None:
        defines["CMAKE_BUILD_TYPE"] = build_type

    defines["BORINGSSL_PREFIX"] = build_prefix
    defines["BORINGSSL_PREFIX_HEADERS"] = str(generated_include_dir)

    # Crate size.
    defines["BUILD_TESTING"] = "OFF"
    defines["BUILD_LIBSSL"] = "ON" if features.ssl else "OFF"
    # Build dependencies.
    defines["DISABLE_PERL"] = "ON"
    defines["DISABLE_GO"] = "ON"

    defines.update(_apple_defines(target))

    env: dict[str, str] = {}
    if features.asan:
        for lang, compiler in ASAN_TOOLCHAIN.items():
            defines[f"CMAKE_{lang}_COMPILER"] = compiler
            env[_TOOLCHAIN_ENV[lang]] = compiler
        defines["ASAN"] = "1"

    return BuildConfiguration(
        defines=MappingProxyType(defines),
        env=MappingProxyType(env),
    )
