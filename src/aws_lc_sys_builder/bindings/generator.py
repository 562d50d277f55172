"""Binding generator contract and the bindgen CLI implementation of it.

Input: the crate manifest dir and BindingOptions (prefix, include_ssl, disable_prelude).
Output: Bindings that can be written to a file. Failures raise BindingGenerationError.
"""

from __future__ import annotations

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from aws_lc_sys_builder.errors import BindingGenerationError
from aws_lc_sys_builder.layout import (
    DEFAULT_LAYOUT,
    aws_lc_include_path,
    generated_include_path,
    rust_include_path,
)

log = logging.getLogger(__name__)

PRELUDE = """\
// Copyright Amazon.com Inc. or its affiliates. All Rights Reserved.
// SPDX-License-Identifier: Apache-2.0 OR ISC

#![allow(unused_imports, non_camel_case_types, non_snake_case, non_upper_case_globals, improper_ctypes)]

"""

ALLOWLIST_FILES = (
    r".*(/|\\)openssl((/|\\)[^/\\]+)+\.h",
    r".*(/|\\)rust_wrapper\.h",
)


@dataclass(frozen=True)
class BindingOptions:
    build_prefix: str
    include_ssl: bool = False
    disable_prelude: bool = False


@dataclass(frozen=True)
class Bindings:
    text: str

    def write(self, path: Path) -> Path:
        """Write bindings to path (parents created). Raises BindingGenerationError on OSError."""
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.text)
        except OSError as e:
            msg = f"Failed to write bindings to {path}: {e}"
            raise BindingGenerationError(msg) from e
        log.info("Wrote bindings %s", path)
        return path


class BindingGenerator(Protocol):
    def generate(self, manifest_dir: Path, options: BindingOptions) -> Bindings: ...


class BindgenCli:
    """Runs the `bindgen` executable against the crate's wrapper header."""

    def __init__(self, layout: dict[str, str] | None = None, executable: str = "bindgen") -> None:
        self.executable = executable
        self.layout = dict(layout) if layout is not None else dict(DEFAULT_LAYOUT)

    def command(self, manifest_dir: Path, options: BindingOptions) -> list[str]:
        header = manifest_dir / self.layout["wrapper_header"]
        cmd = [
            self.executable,
            str(header),
            "--no-layout-tests",
            "--no-doc-comments",
            "--default-enum-style",
            "rust",
        ]
        for pattern in ALLOWLIST_FILES:
            cmd += ["--allowlist-file", pattern]
        cmd.append("--")
        for include in (
            rust_include_path(manifest_dir, self.layout),
            generated_include_path(manifest_dir, self.layout),
            aws_lc_include_path(manifest_dir, self.layout),
        ):
            cmd.append(f"-I{include}")
        cmd.append(f"-DBORINGSSL_PREFIX={options.build_prefix}")
        if options.include_ssl:
            cmd.append("-DAWS_LC_RUST_INCLUDE_SSL")
        return cmd

    def generate(self, manifest_dir: Path, options: BindingOptions) -> Bindings:
        cmd = self.command(manifest_dir, options)
        log.debug("Running %s", " ".join(cmd))
        try:
            r = subprocess.run(cmd, cwd=str(manifest_dir), capture_output=True, text=True, check=False)
        except OSError as e:
            msg = f"Unable to run {self.executable}: {e}"
            raise BindingGenerationError(msg) from e
        if r.returncode != 0:
            msg = f"{self.executable} exited with code {r.returncode}: {(r.stderr or '').strip()}"
            raise BindingGenerationError(msg)
        text = r.stdout or ""
        if not options.disable_prelude:
            text = PRELUDE + text
        return Bindings(text)
