"""Decide how FFI bindings are obtained for this build.

pregenerated = not bindgen-feature or internal-generate. A supported platform with
pregenerated bindings emits a rustc cfg named after it (e.g. linux_x86_64); no match
emits use_bindgen_generated and forces generation regardless of the bindgen feature.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from aws_lc_sys_builder.errors import ConfigurationError
from aws_lc_sys_builder.probe import PlatformKey
from aws_lc_sys_builder.probe.environment import INTERNAL_BINDGEN_ENV, PRIVATE_INTERNALS_ENV
from aws_lc_sys_builder.publish.directives import DirectiveSink

log = logging.getLogger(__name__)

# Targets with pregenerated bindings shipped in the crate.
SUPPORTED_PLATFORMS: tuple[PlatformKey, ...] = (
    PlatformKey("linux", "x86", "unknown"),
    PlatformKey("linux", "x86_64", "unknown"),
    PlatformKey("linux", "aarch64", "unknown"),
    PlatformKey("macos", "x86_64", "apple"),
)

FALLBACK_CFG = "use_bindgen_generated"


class BindingStrategy(Enum):
    PREGENERATED = "pregenerated"
    GENERATE_AT_BUILD_TIME = "generate-at-build-time"
    GENERATE_INTO_SOURCE_TREE = "generate-into-source-tree"


@dataclass(frozen=True)
class StrategyResolution:
    strategy: BindingStrategy
    matched_platform: PlatformKey | None
    fallback: bool


def is_supported_platform(platform: PlatformKey) -> bool:
    return any(p.matches(platform) for p in SUPPORTED_PLATFORMS)


def check_exclusive_toggles(internal_generate: bool, private_internals: bool) -> None:
    """Raise ConfigurationError when internal bindgen and private internals are both active."""
    if internal_generate and private_internals:
        msg = f"{PRIVATE_INTERNALS_ENV}=1 is not supported when {INTERNAL_BINDGEN_ENV}=1"
        raise ConfigurationError(msg)


def resolve_binding_strategy(
    sink: DirectiveSink,
    platform: PlatformKey,
    bindgen_requested: bool,
    internal_generate: bool,
    private_internals: bool,
) -> StrategyResolution:
    """Resolve exactly one BindingStrategy, emitting platform or fallback cfg to sink."""
    check_exclusive_toggles(internal_generate, private_internals)

    pregenerated = not bindgen_requested or internal_generate
    matched: PlatformKey | None = None
    for supported in SUPPORTED_PLATFORMS:
        if supported.matches(platform) and pregenerated:
            sink.rustc_cfg(supported.cfg_name)
            matched = supported
            break

    bindgen_required = bindgen_requested
    fallback = matched is None
    if fallback:
        sink.rustc_cfg(FALLBACK_CFG)
        bindgen_required = True

    if internal_generate:
        strategy = BindingStrategy.GENERATE_INTO_SOURCE_TREE
    elif bindgen_required:
        strategy = BindingStrategy.GENERATE_AT_BUILD_TIME
    else:
        strategy = BindingStrategy.PREGENERATED
    log.info("Binding strategy: %s", strategy.value)
    return StrategyResolution(strategy=strategy, matched_platform=matched, fallback=fallback)
