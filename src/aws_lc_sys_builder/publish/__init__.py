"""Publish staged includes and link metadata to the consuming Cargo build."""

from .directives import (
    DirectiveSink,
    LibraryUnit,
    emit_include_directives,
    emit_link_directives,
    emit_rerun_triggers,
    produced_units,
)
from .includes import include_path_set, merge_into, setup_include_paths

__all__ = [
    "DirectiveSink",
    "LibraryUnit",
    "emit_include_directives",
    "emit_link_directives",
    "emit_rerun_triggers",
    "include_path_set",
    "merge_into",
    "produced_units",
    "setup_include_paths",
]
