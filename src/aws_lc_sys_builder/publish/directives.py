"""Cargo build-script directives (cargo:...) and the library units they link."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import TextIO

from aws_lc_sys_builder.probe import LinkageMode

RERUN_IF_CHANGED = ("builder/", "aws-lc/")


class LibraryUnit(Enum):
    """Linkable outputs of the native build."""

    RUST_WRAPPER = "rust_wrapper"
    CRYPTO = "crypto"
    SSL = "ssl"

    def libname(self, prefix: str | None = None) -> str:
        """{prefix}_{name}, or the bare name without a prefix."""
        if prefix:
            return f"{prefix}_{self.value}"
        return self.value


def produced_units(include_ssl: bool) -> list[LibraryUnit]:
    """Units to link, in link order: crypto, ssl (only with the ssl feature), rust_wrapper."""
    units = [LibraryUnit.CRYPTO]
    if include_ssl:
        units.append(LibraryUnit.SSL)
    units.append(LibraryUnit.RUST_WRAPPER)
    return units


class DirectiveSink:
    """Writes cargo: lines to a stream (stdout by default) and keeps a copy for inspection."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.lines: list[str] = []

    def emit(self, key: str, value: str) -> None:
        line = f"cargo:{key}={value}"
        self.lines.append(line)
        print(line, file=self._stream if self._stream is not None else sys.stdout)

    def rustc_cfg(self, cfg: str) -> None:
        self.emit("rustc-cfg", cfg)

    def link_search(self, path: Path) -> None:
        self.emit("rustc-link-search", f"native={path}")

    def link_lib(self, linkage: LinkageMode, name: str) -> None:
        self.emit("rustc-link-lib", f"{linkage.rust_lib_type}={name}")

    def include(self, path: Path) -> None:
        self.emit("include", str(path))

    def rerun_if_changed(self, path: str) -> None:
        self.emit("rerun-if-changed", path)

    def rerun_if_env_changed(self, key: str) -> None:
        self.emit("rerun-if-env-changed", key)

    def values(self, key: str) -> list[str]:
        """Values of every emitted directive with this key, in order."""
        marker = f"cargo:{key}="
        return [line[len(marker) :] for line in self.lines if line.startswith(marker)]


def emit_link_directives(
    sink: DirectiveSink,
    search_dir: Path,
    linkage: LinkageMode,
    prefix: str,
    include_ssl: bool,
) -> list[str]:
    """Search path plus one rustc-link-lib per produced unit. Returns the linked names."""
    sink.link_search(search_dir)
    names = []
    for unit in produced_units(include_ssl):
        name = unit.libname(prefix)
        sink.link_lib(linkage, name)
        names.append(name)
    return names


def emit_include_directives(
    sink: DirectiveSink,
    staging_dir: Path,
    rand_extra_dir: Path | None,
    extra_includes: Iterable[Path] | None,
) -> list[Path]:
    """Staging dir, then rand_extra (private internals only), then each extra include path."""
    published = [staging_dir]
    if rand_extra_dir is not None:
        published.append(rand_extra_dir)
    if extra_includes:
        published.extend(extra_includes)
    for p in published:
        sink.include(p)
    return published


def emit_rerun_triggers(sink: DirectiveSink, static_env: str) -> None:
    for path in RERUN_IF_CHANGED:
        sink.rerun_if_changed(path)
    sink.rerun_if_env_changed(static_env)
