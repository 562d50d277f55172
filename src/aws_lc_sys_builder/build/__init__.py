"""Native build: CMake configuration and invocation."""

from .config import BuildConfiguration, prepare_cmake_build
from .invoke import artifact_output_dir, run_cmake_build

__all__ = [
    "BuildConfiguration",
    "artifact_output_dir",
    "prepare_cmake_build",
    "run_cmake_build",
]
