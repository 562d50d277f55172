"""Binding strategy resolution, the bindgen generator contract, and materialization."""

from .generator import BindgenCli, BindingGenerator, BindingOptions, Bindings
from .materialize import generator_available, materialize_bindings
from .strategy import (
    SUPPORTED_PLATFORMS,
    BindingStrategy,
    StrategyResolution,
    resolve_binding_strategy,
)

__all__ = [
    "SUPPORTED_PLATFORMS",
    "BindgenCli",
    "BindingGenerator",
    "BindingOptions",
    "BindingStrategy",
    "Bindings",
    "StrategyResolution",
    "generator_available",
    "materialize_bindings",
    "resolve_binding_strategy",
]
