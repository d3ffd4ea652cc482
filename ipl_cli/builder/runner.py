"""Build-then-execute pipeline for ``ipl run``.

``run`` is the composition of two steps: a fresh default-target build, then
execution of the artifact that build produced.  The build result is passed
explicitly into the execute step, so a stale artifact is never executed.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from ipl_cli.config import Config
from ipl_cli.utils import run_process

from .compiler import BuildOrchestrator
from .context import require_project_context
from .errors import RunError
from .results import BuildOutput, BuildRequest, ExecutionResult


class RunOrchestrator:
    """Builds the default target and runs it."""

    def __init__(
        self,
        config: Config,
        root: Path | None = None,
        env: Mapping[str, str] | None = None,
        builder: BuildOrchestrator | None = None,
    ):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()
        self.builder = builder or BuildOrchestrator(config, self.root, env)
        self.last_build: BuildOutput | None = None

    async def run(self) -> ExecutionResult:
        """Rebuild, then execute ``build/main`` with no arguments.

        Build errors propagate unchanged.  If the build succeeded but left no
        executable behind, the entry file is compiled once more and the
        compiler's own result is returned instead.

        Raises:
            NotAProject, SourceNotFound, ToolchainNotFound, CompileFailed:
                From the build step.
            RunError: The executable exists but could not be started.
        """
        require_project_context(self.root, self.config)
        build = await self.builder.build(BuildRequest(target=None))
        self.last_build = build
        return await self.execute(build)

    async def execute(self, build: BuildOutput) -> ExecutionResult:
        executable = build.artifact
        if not executable.is_file():
            return await self._recompile(build)

        cmd = [str(executable)]
        try:
            exit_code, stdout, stderr = await run_process(cmd, cwd=self.root)
        except OSError as exc:
            raise RunError(f"Could not execute {executable}: {exc}", cause=exc) from exc

        return ExecutionResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            command=cmd,
            source="artifact",
        )

    async def _recompile(self, build: BuildOutput) -> ExecutionResult:
        _, compiler = await self.builder.compile_source(build.artifact.name)
        return compiler
