"""Main CLI entry point for aws-lc-sys-builder."""

import logging
import os
import sys

from aws_lc_sys_builder.cli import build as build_cli

LOG_LEVEL_ENV = "AWS_LC_SYS_BUILDER_LOG"


def configure_logging() -> None:
    """Log to stderr (stdout carries cargo: directives) at $AWS_LC_SYS_BUILDER_LOG, default WARNING."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Main CLI entry point."""
    configure_logging()
    if len(sys.argv) < 2:
        print("Usage: aws-lc-sys-builder <command> [args...]", file=sys.stderr)
        print("Commands:", file=sys.stderr)
        print(
            "  build [--manifest-dir DIR]  - Build AWS-LC and emit Cargo link/include directives",
            file=sys.stderr,
        )
        sys.exit(1)

    command = sys.argv[1]
    if command == "build":
        build_cli.run_build_argv()
    else:
        print(f"Error: Unknown command: {command}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
