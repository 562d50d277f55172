"""Probe for a usable CMake before any build work starts.

Tries cmake3, then cmake, each with a no-op `--version`. The chosen executable is
returned as a Toolchain value and passed explicitly to the build invoker.
"""

from __future__ import annotations

import logging
import subprocess
import sys
from dataclasses import dataclass
from enum import Enum

from aws_lc_sys_builder.errors import MissingDependencyError

log = logging.getLogger(__name__)

CMAKE_CANDIDATES = ("cmake3", "cmake")


class ToolStatus(Enum):
    NOT_FOUND = "not-found"
    FAILED = "failed"
    OK = "ok"


@dataclass(frozen=True)
class ToolResult:
    executable: str
    status: ToolStatus
    returncode: int | None = None

    @property
    def ok(self) -> bool:
        return self.status is ToolStatus.OK


@dataclass(frozen=True)
class Toolchain:
    cmake: str


def probe_command(executable: str, args: list[str]) -> ToolResult:
    """Run executable with args, capturing output. NOT_FOUND if it cannot start, FAILED on non-zero exit."""
    try:
        r = subprocess.run([executable, *args], capture_output=True, text=True, check=False)
    except OSError as e:
        log.debug("%s not runnable: %s", executable, e)
        return ToolResult(executable, ToolStatus.NOT_FOUND)
    if r.returncode != 0:
        log.debug("%s %s exited %s", executable, " ".join(args), r.returncode)
        return ToolResult(executable, ToolStatus.FAILED, r.returncode)
    return ToolResult(executable, ToolStatus.OK, 0)


def find_cmake_command(candidates: tuple[str, ...] = CMAKE_CANDIDATES) -> str | None:
    """First candidate whose `--version` succeeds, else None."""
    for name in candidates:
        if probe_command(name, ["--version"]).ok:
            return name
    return None


def check_dependencies() -> Toolchain:
    """Return the Toolchain to build with. Raises MissingDependencyError when no cmake is usable."""
    cmake = find_cmake_command()
    if cmake is None:
        print("Missing dependency: cmake", file=sys.stderr)
        msg = "Required build dependency is missing. Halting build."
        raise MissingDependencyError(msg)
    log.info("Using %s", cmake)
    return Toolchain(cmake=cmake)
