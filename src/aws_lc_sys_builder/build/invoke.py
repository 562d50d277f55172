"""Drive CMake configure + build/install into OUT_DIR.

Blocks until CMake finishes; there is no timeout. CMake's own output goes straight to
the terminal. Layout under out_dir: build/ (CMake binary dir, link artifacts under
build/artifacts) and the install prefix itself (include/, lib/).
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path

from aws_lc_sys_builder.build.config import BuildConfiguration
from aws_lc_sys_builder.deps import Toolchain
from aws_lc_sys_builder.errors import NativeBuildError

log = logging.getLogger(__name__)

DEFAULT_CONFIG = "Debug"


def artifact_output_dir(out_dir: Path) -> Path:
    """Directory holding the built libraries (link search path)."""
    return out_dir / "build" / "artifacts"


def _process_env(config: BuildConfiguration) -> dict[str, str] | None:
    if not config.env:
        return None
    env = os.environ.copy()
    env.update(config.env)
    return env


def _run(step: str, cmd: list[str], cwd: Path, env: dict[str, str] | None) -> None:
    log.info("Running cmake %s: %s", step, " ".join(cmd))
    try:
        r = subprocess.run(cmd, cwd=str(cwd), env=env, check=False)
    except OSError as e:
        raise NativeBuildError(step, None, cmd, reason=str(e)) from e
    if r.returncode != 0:
        raise NativeBuildError(step, r.returncode, cmd)


def configure_command(
    toolchain: Toolchain, config: BuildConfiguration, source_dir: Path, out_dir: Path
) -> list[str]:
    return [
        toolchain.cmake,
        str(source_dir),
        *config.configure_args,
        *config.cmake_define_args(),
        f"-DCMAKE_INSTALL_PREFIX={out_dir}",
    ]


def build_command(
    toolchain: Toolchain,
    config: BuildConfiguration,
    build_dir: Path,
    num_jobs: str | None = None,
) -> list[str]:
    cmd = [
        toolchain.cmake,
        "--build",
        str(build_dir),
        "--target",
        "install",
        "--config",
        config.build_type or DEFAULT_CONFIG,
    ]
    if num_jobs:
        cmd += ["--parallel", num_jobs]
    return cmd


def run_cmake_build(
    toolchain: Toolchain,
    config: BuildConfiguration,
    source_dir: Path,
    out_dir: Path,
    num_jobs: str | None = None,
) -> Path:
    """Configure and build/install source_dir into out_dir. Returns out_dir; raises NativeBuildError on failure."""
    build_dir = out_dir / "build"
    build_dir.mkdir(parents=True, exist_ok=True)
    env = _process_env(config)
    _run("configure", configure_command(toolchain, config, source_dir, out_dir), build_dir, env)
    _run("build", build_command(toolchain, config, build_dir, num_jobs), build_dir, env)
    return out_dir
