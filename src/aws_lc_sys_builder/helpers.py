"""Shared helpers for aws_lc_sys_builder (env flags, prefix naming, path lists, YAML).

Used by probe, build, bindings, and publish modules.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

# --- Env ---


def environ(env: Mapping[str, str] | None) -> Mapping[str, str]:
    """Return env, or the process environment when env is None."""
    return os.environ if env is None else env


def get_env_flag(key: str, default: str = "0", env: Mapping[str, str] | None = None) -> str:
    """Value of key in env, else default."""
    return environ(env).get(key, default)


def is_env_flag_enabled(key: str, env: Mapping[str, str] | None = None) -> bool:
    """True only when key is set to exactly "1"."""
    return get_env_flag(key, "0", env) == "1"


def split_include_paths(value: str | None) -> list[Path] | None:
    """Split a colon-delimited path list (e.g. AWS_LC_SYS_INCLUDES). None when unset; empty segments dropped."""
    if value is None:
        return None
    return [Path(p) for p in value.split(":") if p]


# --- Naming ---


def prefix_string(version: str) -> str:
    """Version-derived symbol prefix: 1.2.3 -> aws_lc_1_2_3."""
    return f"aws_lc_{version.replace('.', '_')}"


def platform_file_stem(os_name: str, arch: str, name: str) -> str:
    """Platform-named binding file stem, e.g. linux_x86_64_crypto."""
    return f"{os_name}_{arch}_{name}"


# --- YAML ---


def load_yaml(p: Path) -> dict[str, Any]:
    """Load a YAML mapping from path; empty file -> {}."""
    with p.open() as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a mapping in {p}"
        raise ValueError(msg)
    return data


def dump_yaml(p: Path, data: dict[str, Any]) -> None:
    """Write data to path as block-style YAML, keeping key order."""
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
