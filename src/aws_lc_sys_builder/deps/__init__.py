"""Dependency checker: locate a usable CMake executable."""

from .checker import (
    Toolchain,
    ToolResult,
    ToolStatus,
    check_dependencies,
    find_cmake_command,
    probe_command,
)

__all__ = [
    "ToolResult",
    "ToolStatus",
    "Toolchain",
    "check_dependencies",
    "find_cmake_command",
    "probe_command",
]
