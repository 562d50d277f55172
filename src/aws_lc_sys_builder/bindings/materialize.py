"""Make bindings available through exactly one mechanism, chosen by BindingStrategy."""

from __future__ import annotations

import logging
from pathlib import Path

from aws_lc_sys_builder.bindings.generator import BindingGenerator, BindingOptions
from aws_lc_sys_builder.bindings.strategy import BindingStrategy, is_supported_platform
from aws_lc_sys_builder.errors import BindingGenerationError, ConfigurationError
from aws_lc_sys_builder.helpers import platform_file_stem
from aws_lc_sys_builder.probe import Features, PlatformKey

log = logging.getLogger(__name__)

BUILD_BINDINGS_FILE = "bindings.rs"

BINDINGS_UNAVAILABLE_MSG = (
    "aws-lc-sys build failed. Please enable the 'bindgen' feature on aws-lc-rs or aws-lc-sys"
)


def generator_available(
    features: Features, platform: PlatformKey, strategy: BindingStrategy
) -> bool:
    """Whether a generator may run for strategy.

    Source-tree generation needs the bindgen feature. Build-time generation also works
    without it for targets that have no pregenerated bindings.
    """
    if strategy is BindingStrategy.GENERATE_INTO_SOURCE_TREE:
        return features.bindgen
    return features.bindgen or not is_supported_platform(platform)


def generate_bindings(
    generator: BindingGenerator,
    manifest_dir: Path,
    prefix: str,
    include_ssl: bool,
    bindings_path: Path,
) -> Path:
    """Build-local bindings for the current ssl setting, no prelude."""
    options = BindingOptions(build_prefix=prefix, include_ssl=include_ssl, disable_prelude=True)
    return generator.generate(manifest_dir, options).write(bindings_path)


def generate_src_bindings(
    generator: BindingGenerator,
    manifest_dir: Path,
    prefix: str,
    src_bindings_dir: Path,
    platform: PlatformKey,
) -> list[Path]:
    """Crypto-only and crypto+ssl bindings into the crate's platform-named source files."""
    written = []
    for name, include_ssl in (("crypto", False), ("crypto_ssl", True)):
        bindings = generator.generate(
            manifest_dir, BindingOptions(build_prefix=prefix, include_ssl=include_ssl)
        )
        path = src_bindings_dir / f"{platform_file_stem(platform.os, platform.arch, name)}.rs"
        written.append(bindings.write(path))
    return written


def materialize_bindings(
    strategy: BindingStrategy,
    generator: BindingGenerator | None,
    manifest_dir: Path,
    prefix: str,
    include_ssl: bool,
    out_dir: Path,
    src_bindings_dir: Path,
    platform: PlatformKey,
) -> list[Path]:
    """Run the action for strategy; returns files written (none for PREGENERATED).

    Raises BindingGenerationError when generation is needed but no generator is available.
    """
    if strategy is BindingStrategy.PREGENERATED:
        log.debug("Using pregenerated bindings")
        return []
    if strategy is BindingStrategy.GENERATE_AT_BUILD_TIME:
        if generator is None:
            raise BindingGenerationError(BINDINGS_UNAVAILABLE_MSG)
        return [
            generate_bindings(
                generator, manifest_dir, prefix, include_ssl, out_dir / BUILD_BINDINGS_FILE
            )
        ]
    if strategy is BindingStrategy.GENERATE_INTO_SOURCE_TREE:
        if generator is None:
            raise BindingGenerationError(BINDINGS_UNAVAILABLE_MSG)
        return generate_src_bindings(generator, manifest_dir, prefix, src_bindings_dir, platform)
    msg = f"Unhandled binding strategy: {strategy!r}"
    raise ConfigurationError(msg)
