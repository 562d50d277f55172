"""Build-time orchestrator for aws-lc-sys: binding strategy, CMake build, and Cargo link metadata."""

from aws_lc_sys_builder.errors import (
    BindingGenerationError,
    BuildError,
    ConfigurationError,
    MissingDependencyError,
    MissingEnvironmentError,
    NativeBuildError,
)
from aws_lc_sys_builder.orchestrator import build, run

__all__ = [
    "BindingGenerationError",
    "BuildError",
    "ConfigurationError",
    "MissingDependencyError",
    "MissingEnvironmentError",
    "NativeBuildError",
    "build",
    "run",
]
