"""`aws-lc-sys-builder build` — run the full orchestration with the current environment."""

import sys
from pathlib import Path

from aws_lc_sys_builder.orchestrator import run as run_build


def run_build_argv(argv: list[str] | None = None) -> None:
    """Parse argv (--manifest-dir) and run the build; exits with its status."""
    import argparse

    if argv is None:
        argv = sys.argv[2:] if len(sys.argv) > 2 else []  # skip 'aws-lc-sys-builder build'
    ap = argparse.ArgumentParser(description="Build AWS-LC and publish Cargo link metadata")
    ap.add_argument(
        "--manifest-dir",
        type=Path,
        default=None,
        help="Crate manifest directory (default: $CARGO_MANIFEST_DIR or cwd)",
    )
    args = ap.parse_args(argv)
    sys.exit(run_build(manifest_dir=args.manifest_dir))
