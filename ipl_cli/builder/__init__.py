"""IPL CLI build orchestration.

Locates the IPL compiler, validates the project root, and drives the build,
run and clean actions.

Key classes:
    ToolchainLocator   - Ordered compiler discovery (local build, system, PATH)
    BuildOrchestrator  - One compiler invocation per build, per target
    RunOrchestrator    - Rebuild, then execute the produced program
    CleanOrchestrator  - Build directory removal and artifact pattern survey
"""

from .cleaner import CleanOrchestrator
from .compiler import BuildOrchestrator
from .context import ProjectContext, require_project_context
from .errors import (
    CleanError,
    CompileFailed,
    IplError,
    NotAProject,
    RunError,
    SourceNotFound,
    ToolchainNotFound,
)
from .results import BuildOutput, BuildRequest, CleanReport, ExecutionResult, PatternMatch
from .runner import RunOrchestrator
from .targets import Target, TargetKind
from .toolchain import ToolchainHandle, ToolchainLocator, ToolchainProbe

__all__ = [
    # Orchestrators
    "BuildOrchestrator",
    "RunOrchestrator",
    "CleanOrchestrator",
    # Project context
    "ProjectContext",
    "require_project_context",
    # Toolchain
    "ToolchainLocator",
    "ToolchainHandle",
    "ToolchainProbe",
    # Targets and results
    "Target",
    "TargetKind",
    "BuildRequest",
    "BuildOutput",
    "ExecutionResult",
    "CleanReport",
    "PatternMatch",
    # Errors
    "IplError",
    "NotAProject",
    "SourceNotFound",
    "ToolchainNotFound",
    "CompileFailed",
    "RunError",
    "CleanError",
]
