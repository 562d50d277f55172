"""Build entrypoint: probe -> dependency check -> strategy -> cmake -> bindings -> publish.

Stages run strictly in order; each one's output feeds the next. Any BuildError stops
the build: run() reports it on stderr and returns 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from aws_lc_sys_builder.bindings import (
    BindgenCli,
    BindingGenerator,
    generator_available,
    materialize_bindings,
    resolve_binding_strategy,
)
from aws_lc_sys_builder.build import artifact_output_dir, prepare_cmake_build, run_cmake_build
from aws_lc_sys_builder.deps import Toolchain, check_dependencies
from aws_lc_sys_builder.errors import BuildError
from aws_lc_sys_builder.helpers import dump_yaml, prefix_string
from aws_lc_sys_builder.layout import aws_lc_rand_extra_path, generated_include_path, load_layout
from aws_lc_sys_builder.probe import probe_environment
from aws_lc_sys_builder.probe.environment import STATIC_ENV
from aws_lc_sys_builder.publish import (
    DirectiveSink,
    emit_include_directives,
    emit_link_directives,
    emit_rerun_triggers,
    include_path_set,
    setup_include_paths,
)

log = logging.getLogger(__name__)

REPORT_FILE_NAME = "aws-lc-sys-build.yaml"


def build(
    env: Mapping[str, str] | None = None,
    manifest_dir: Path | None = None,
    sink: DirectiveSink | None = None,
    find_toolchain: Callable[[], Toolchain] = check_dependencies,
    make_generator: Callable[[dict[str, str]], BindingGenerator] = BindgenCli,
) -> dict[str, Any]:
    """Run every stage. Returns the build report (also written to OUT_DIR). Raises BuildError."""
    if sink is None:
        sink = DirectiveSink()

    probed = probe_environment(env, manifest_dir)
    toolchain = find_toolchain()

    resolution = resolve_binding_strategy(
        sink,
        probed.target.platform,
        bindgen_requested=probed.features.bindgen,
        internal_generate=probed.internal_generate,
        private_internals=probed.private_internals,
    )

    layout = load_layout(probed.manifest_dir)
    prefix = prefix_string(probed.version)
    config = prepare_cmake_build(
        probed.linkage,
        probed.target,
        probed.features,
        build_prefix=prefix + "_",
        generated_include_dir=generated_include_path(probed.manifest_dir, layout),
    )
    out_dir = run_cmake_build(
        toolchain, config, probed.manifest_dir, probed.out_dir, num_jobs=probed.num_jobs
    )

    generator = None
    if generator_available(probed.features, probed.target.platform, resolution.strategy):
        generator = make_generator(layout)
    written = materialize_bindings(
        resolution.strategy,
        generator,
        probed.manifest_dir,
        prefix,
        include_ssl=probed.features.ssl,
        out_dir=probed.out_dir,
        src_bindings_dir=probed.manifest_dir / layout["bindings_src_dir"],
        platform=probed.target.platform,
    )

    search_dir = artifact_output_dir(out_dir)
    libs = emit_link_directives(sink, search_dir, probed.linkage, prefix, probed.features.ssl)
    staging = setup_include_paths(
        out_dir, include_path_set(probed.manifest_dir, layout, probed.extra_includes)
    )
    rand_extra = (
        aws_lc_rand_extra_path(probed.manifest_dir, layout) if probed.private_internals else None
    )
    includes = emit_include_directives(sink, staging, rand_extra, probed.extra_includes)
    emit_rerun_triggers(sink, STATIC_ENV)

    report: dict[str, Any] = {
        "target": probed.target.triple,
        "strategy": resolution.strategy.value,
        "matched_platform": resolution.matched_platform.cfg_name
        if resolution.matched_platform
        else None,
        "linkage": probed.linkage.rust_lib_type,
        "cmake": toolchain.cmake,
        "prefix": prefix,
        "link_search": str(search_dir),
        "libraries": libs,
        "includes": [str(p) for p in includes],
        "generated_bindings": [str(p) for p in written],
    }
    dump_yaml(probed.out_dir / REPORT_FILE_NAME, report)
    return report


def run(env: Mapping[str, str] | None = None, manifest_dir: Path | None = None) -> int:
    """Build and return 0, or print the failure to stderr and return 1."""
    try:
        build(env, manifest_dir)
    except (BuildError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    return 0
