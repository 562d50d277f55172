"""Pytest fixtures for aws-lc-sys-builder tests."""

from pathlib import Path

import pytest


@pytest.fixture
def manifest_dir(tmp_path: Path) -> Path:
    """Crate-like tree: include/, generated-include/, aws-lc/include, aws-lc/crypto/rand_extra, src/."""
    root = tmp_path / "aws-lc-sys"
    (root / "include").mkdir(parents=True)
    (root / "include" / "rust_wrapper.h").write_text("// rust wrapper\n")
    (root / "generated-include" / "openssl").mkdir(parents=True)
    (root / "generated-include" / "openssl" / "boringssl_prefix_symbols.h").write_text("// prefix\n")
    (root / "aws-lc" / "include" / "openssl").mkdir(parents=True)
    (root / "aws-lc" / "include" / "openssl" / "base.h").write_text("// base\n")
    (root / "aws-lc" / "crypto" / "rand_extra").mkdir(parents=True)
    (root / "src").mkdir()
    return root


@pytest.fixture
def cargo_env(tmp_path: Path, manifest_dir: Path) -> dict[str, str]:
    """Minimal build-script environment for a linux x86_64 target, no features."""
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    return {
        "CARGO_CFG_TARGET_OS": "linux",
        "CARGO_CFG_TARGET_ARCH": "x86_64",
        "CARGO_CFG_TARGET_VENDOR": "unknown",
        "TARGET": "x86_64-unknown-linux-gnu",
        "OUT_DIR": str(out_dir),
        "CARGO_PKG_VERSION": "0.14.1",
        "CARGO_MANIFEST_DIR": str(manifest_dir),
    }
