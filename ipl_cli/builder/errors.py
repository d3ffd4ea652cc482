"""Error taxonomy for build orchestration.

Every error renders to a one-line diagnostic via ``str()`` and keeps the
structured details as attributes so callers and tests can inspect them.
"""

from __future__ import annotations

from pathlib import Path


class IplError(Exception):
    """Base class for every error raised by the IPL CLI."""


class NotAProject(IplError):
    """Raised when the working directory has no project descriptor."""

    def __init__(self, root: Path, descriptor: str):
        self.root = root
        self.descriptor = descriptor
        super().__init__(
            f"No IPL project found ({descriptor} not found in {root}). "
            "Are you in an IPL project directory?"
        )


class SourceNotFound(IplError):
    """Raised when the entry source file is missing."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Main IPL file not found: {path}")


class ToolchainNotFound(IplError):
    """Raised when no compiler executable exists anywhere in the search order."""

    def __init__(self, compiler_name: str, attempts: list[Path]):
        self.compiler_name = compiler_name
        self.attempts = list(attempts)
        super().__init__(
            f"IPL compiler ({compiler_name}) not found after checking "
            f"{len(self.attempts)} location(s). Please build the IStudio project first."
        )


class CompileFailed(IplError):
    """Raised when the compiler exits non-zero or cannot be launched.

    ``stderr`` holds the compiler's diagnostic text exactly as captured.
    """

    def __init__(self, stderr: str, exit_code: int = -1, command: list[str] | None = None):
        self.stderr = stderr
        self.exit_code = exit_code
        self.command = command or []
        super().__init__(f"IPL compiler failed: {stderr}")


class RunError(IplError):
    """Raised when the built program cannot be executed."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.cause = cause
        super().__init__(message)


class CleanError(IplError):
    """Raised when removing build outputs fails."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not remove {path}: {cause}")
