"""Build-stopping error conditions. None of them is recoverable: every one aborts the outer build."""

from __future__ import annotations


class BuildError(RuntimeError):
    """Base class for every fatal orchestration failure."""


class MissingEnvironmentError(BuildError):
    """A required Cargo/target environment variable is absent."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Required environment variable {key} is not set")
        self.key = key


class MissingDependencyError(BuildError):
    """No usable native build tool (cmake3/cmake) was found."""


class ConfigurationError(BuildError):
    """Mutually exclusive settings, an unhandled variant, or unusable configured inputs."""


class NativeBuildError(BuildError):
    """CMake configure or build exited non-zero, or could not be started (returncode None)."""

    def __init__(
        self, step: str, returncode: int | None, cmd: list[str], reason: str | None = None
    ) -> None:
        if returncode is None:
            msg = f"cmake {step} could not be started ({reason}): {' '.join(cmd)}"
        else:
            msg = f"cmake {step} failed with exit code {returncode}: {' '.join(cmd)}"
        super().__init__(msg)
        self.step = step
        self.returncode = returncode
        self.cmd = cmd


class BindingGenerationError(BuildError):
    """Bindings could not be generated, written, or were never made available."""
