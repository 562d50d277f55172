"""Stage every include root into one directory under OUT_DIR.

Roots are merged in order and nothing already present is overwritten, so the
earliest-listed root wins on a name clash (first-party headers shadow vendored ones).
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from aws_lc_sys_builder.errors import ConfigurationError
from aws_lc_sys_builder.layout import (
    aws_lc_include_path,
    generated_include_path,
    rust_include_path,
)

log = logging.getLogger(__name__)


def include_path_set(
    manifest_dir: Path,
    layout: dict[str, str],
    extra_includes: Iterable[Path] | None = None,
) -> list[Path]:
    """Rust include, generated include, AWS-LC include, then AWS_LC_SYS_INCLUDES entries."""
    paths = [
        rust_include_path(manifest_dir, layout),
        generated_include_path(manifest_dir, layout),
        aws_lc_include_path(manifest_dir, layout),
    ]
    if extra_includes:
        paths.extend(extra_includes)
    return paths


def _copy_if_absent(src: str, dst: str) -> str:
    if not Path(dst).exists():
        shutil.copy2(src, dst)
    return dst


def merge_into(src_dir: Path, dest_dir: Path) -> None:
    """Copy src_dir's children into dest_dir, skipping anything already present."""
    for child in sorted(src_dir.iterdir()):
        target = dest_dir / child.name
        if child.is_file():
            _copy_if_absent(str(child), str(target))
        elif child.is_dir():
            shutil.copytree(child, target, copy_function=_copy_if_absent, dirs_exist_ok=True)
        else:
            log.debug("Skipping %s: not a file or directory", child)


def setup_include_paths(out_dir: Path, include_paths: Iterable[Path]) -> Path:
    """Merge include_paths (first wins) into out_dir/include and return it. Missing roots are skipped.

    Raises ConfigurationError when a root cannot be staged (unreadable, or a file and a
    directory share a name).
    """
    include_dir = out_dir / "include"
    try:
        include_dir.mkdir(parents=True, exist_ok=True)
        for path in include_paths:
            if not path.is_dir():
                log.debug("Skipping missing include root %s", path)
                continue
            merge_into(path, include_dir)
    except OSError as e:
        raise ConfigurationError(f"Failed to stage include paths into {include_dir}: {e}") from e
    return include_dir
