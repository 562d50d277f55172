"""Environment and platform probe: target facts, features, and env toggles."""

from .environment import (
    BuildEnvironment,
    Features,
    LinkageMode,
    PlatformKey,
    TargetInfo,
    build_type_for_opt_level,
    probe_environment,
    probe_target,
)

__all__ = [
    "BuildEnvironment",
    "Features",
    "LinkageMode",
    "PlatformKey",
    "TargetInfo",
    "build_type_for_opt_level",
    "probe_environment",
    "probe_target",
]
