"""Read target-triple facts, feature toggles, and env overrides from the Cargo build-script environment.

Nothing here writes to the environment: every reader takes an explicit env mapping
(default: os.environ) so callers and tests can thread their own.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from aws_lc_sys_builder.errors import MissingEnvironmentError
from aws_lc_sys_builder.helpers import environ, is_env_flag_enabled, split_include_paths

log = logging.getLogger(__name__)

STATIC_ENV = "AWS_LC_SYS_STATIC"
INCLUDES_ENV = "AWS_LC_SYS_INCLUDES"
INTERNAL_BINDGEN_ENV = "AWS_LC_RUST_INTERNAL_BINDGEN"
PRIVATE_INTERNALS_ENV = "AWS_LC_RUST_PRIVATE_INTERNALS"

REQUIRED_TARGET_VARS = (
    "CARGO_CFG_TARGET_OS",
    "CARGO_CFG_TARGET_ARCH",
    "CARGO_CFG_TARGET_VENDOR",
    "TARGET",
)


@dataclass(frozen=True)
class PlatformKey:
    """(os, arch, vendor) of a target. Pregenerated-binding matching compares os and arch."""

    os: str
    arch: str
    vendor: str = "unknown"

    def matches(self, other: PlatformKey) -> bool:
        return self.os == other.os and self.arch == other.arch

    @property
    def cfg_name(self) -> str:
        """rustc cfg emitted when pregenerated bindings exist for this platform (e.g. linux_x86_64)."""
        return f"{self.os}_{self.arch}"


@dataclass(frozen=True)
class TargetInfo:
    platform: PlatformKey
    triple: str
    opt_level: str = "0"


class LinkageMode(Enum):
    """Static or dynamic output; the value is the Cargo link kind."""

    STATIC = "static"
    DYNAMIC = "dylib"

    @property
    def rust_lib_type(self) -> str:
        return self.value

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> LinkageMode:
        """AWS_LC_SYS_STATIC starting with 0, n or off (any case) -> DYNAMIC; unset or anything else -> STATIC."""
        value = environ(env).get(STATIC_ENV)
        if value is None:
            return cls.STATIC
        log.info("%s=%s", STATIC_ENV, value)
        lowered = value.lower()
        if lowered.startswith(("0", "n", "off")):
            return cls.DYNAMIC
        return cls.STATIC


@dataclass(frozen=True)
class Features:
    """Cargo features of the consuming crate (CARGO_FEATURE_<NAME>)."""

    bindgen: bool = False
    ssl: bool = False
    asan: bool = False

    @classmethod
    def from_env(cls, env: Mapping[str, str] | None = None) -> Features:
        e = environ(env)
        return cls(
            bindgen="CARGO_FEATURE_BINDGEN" in e,
            ssl="CARGO_FEATURE_SSL" in e,
            asan="CARGO_FEATURE_ASAN" in e,
        )


@dataclass(frozen=True)
class BuildEnvironment:
    """Everything downstream stages need, captured once at the start of a build."""

    target: TargetInfo
    linkage: LinkageMode
    features: Features
    manifest_dir: Path
    out_dir: Path
    version: str
    internal_generate: bool = False
    private_internals: bool = False
    extra_includes: tuple[Path, ...] | None = None
    num_jobs: str | None = None


def _require(env: Mapping[str, str], key: str) -> str:
    value = env.get(key)
    if value is None:
        raise MissingEnvironmentError(key)
    return value


def probe_target(env: Mapping[str, str] | None = None) -> TargetInfo:
    """Read target os/arch/vendor/triple and OPT_LEVEL. Raises MissingEnvironmentError if any target var is absent."""
    e = environ(env)
    os_name, arch, vendor, triple = (_require(e, k) for k in REQUIRED_TARGET_VARS)
    return TargetInfo(
        platform=PlatformKey(os_name.strip(), arch.strip(), vendor.strip()),
        triple=triple.strip(),
        opt_level=e.get("OPT_LEVEL", "0"),
    )


def build_type_for_opt_level(opt_level: str) -> str | None:
    """0 (the unset default) -> None (CMake default); 1-2 -> relwithdebinfo; anything else (3, s, z, "") -> release."""
    if opt_level == "0":
        return None
    if opt_level in ("1", "2"):
        return "relwithdebinfo"
    return "release"


def extra_include_paths(env: Mapping[str, str] | None = None) -> tuple[Path, ...] | None:
    paths = split_include_paths(environ(env).get(INCLUDES_ENV))
    return tuple(paths) if paths is not None else None


def probe_environment(
    env: Mapping[str, str] | None = None,
    manifest_dir: Path | None = None,
) -> BuildEnvironment:
    """Capture target facts, linkage, features, toggles and paths. Fatal on any missing required variable."""
    e = environ(env)
    target = probe_target(e)
    out_dir = Path(_require(e, "OUT_DIR"))
    version = _require(e, "CARGO_PKG_VERSION")
    if manifest_dir is None:
        manifest_dir = Path(e.get("CARGO_MANIFEST_DIR") or Path.cwd())
    probed = BuildEnvironment(
        target=target,
        linkage=LinkageMode.from_env(e),
        features=Features.from_env(e),
        manifest_dir=Path(manifest_dir).resolve(),
        out_dir=out_dir,
        version=version,
        internal_generate=is_env_flag_enabled(INTERNAL_BINDGEN_ENV, e),
        private_internals=is_env_flag_enabled(PRIVATE_INTERNALS_ENV, e),
        extra_includes=extra_include_paths(e),
        num_jobs=e.get("NUM_JOBS"),
    )
    log.debug("Probed target %s (%s)", target.triple, target.platform)
    return probed
