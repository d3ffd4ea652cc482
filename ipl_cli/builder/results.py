"""Result types passed between the orchestrators and the CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .targets import Target
from .toolchain import ToolchainHandle


@dataclass(frozen=True)
class BuildRequest:
    """What to build.  ``None`` selects the configured default target."""

    target: str | None = None


@dataclass
class ExecutionResult:
    """Outcome of running a child program (the built artifact or the compiler)."""

    exit_code: int
    stdout: bytes = b""
    stderr: bytes = b""
    command: list[str] = field(default_factory=list)
    source: str = "artifact"

    @property
    def success(self) -> bool:
        return self.exit_code == 0


@dataclass
class BuildOutput:
    """Everything a successful build produced."""

    build_dir: Path
    target: Target
    artifact: Path
    toolchain: ToolchainHandle
    compiler: ExecutionResult
    duration_seconds: float = 0.0

    def report(self) -> list[str]:
        return self.target.report(self.artifact)


@dataclass
class PatternMatch:
    """Files in the project root matching one auxiliary clean pattern."""

    pattern: str
    matches: list[Path] = field(default_factory=list)
    removed: bool = False


@dataclass
class CleanReport:
    """What ``clean`` did, and what it would clean with ``--all``."""

    build_dir: Path
    removed_build_dir: bool
    patterns: list[PatternMatch] = field(default_factory=list)

    @property
    def noop(self) -> bool:
        """True when there was no build directory to remove."""
        return not self.removed_build_dir
