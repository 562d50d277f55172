"""Manifest-relative path layout (aws-lc-sys style). All paths relative to manifest_dir.

A builder-layout.yaml next to the crate manifest may override any key below.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from aws_lc_sys_builder.errors import ConfigurationError
from aws_lc_sys_builder.helpers import load_yaml

log = logging.getLogger(__name__)

LAYOUT_FILE_NAME = "builder-layout.yaml"

DEFAULT_LAYOUT: dict[str, str] = {
    "include_dir": "include",
    "generated_include_dir": "generated-include",
    "aws_lc_dir": "aws-lc",
    "bindings_src_dir": "src",
    "wrapper_header": "include/rust_wrapper.h",
}


def resolve_layout(layout: dict[str, Any] | None) -> dict[str, str]:
    """Return layout dict with defaults filled; unknown keys are dropped."""
    if layout is None:
        return dict(DEFAULT_LAYOUT)
    out = dict(DEFAULT_LAYOUT)
    out.update({k: str(v) for k, v in layout.items() if k in out})
    return out


def load_layout(manifest_dir: Path) -> dict[str, str]:
    """Layout for manifest_dir: builder-layout.yaml overrides if present, else defaults.

    Raises ConfigurationError if the file cannot be read or is not a YAML mapping.
    """
    path = manifest_dir / LAYOUT_FILE_NAME
    if not path.is_file():
        return resolve_layout(None)
    log.debug("Loading layout overrides from %s", path)
    try:
        data = load_yaml(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise ConfigurationError(f"Invalid {LAYOUT_FILE_NAME}: {e}") from e
    return resolve_layout(data)


def rust_include_path(manifest_dir: Path, layout: dict[str, str]) -> Path:
    return manifest_dir / layout["include_dir"]


def generated_include_path(manifest_dir: Path, layout: dict[str, str]) -> Path:
    return manifest_dir / layout["generated_include_dir"]


def aws_lc_include_path(manifest_dir: Path, layout: dict[str, str]) -> Path:
    return manifest_dir / layout["aws_lc_dir"] / "include"


def aws_lc_rand_extra_path(manifest_dir: Path, layout: dict[str, str]) -> Path:
    """Internal randomness-support headers; only published with private internals."""
    return manifest_dir / layout["aws_lc_dir"] / "crypto" / "rand_extra"
