"""Build orchestration.

Drives one compilation of ``src/main.ipl`` per ``build`` call:

    validate project -> ensure build/ -> resolve target -> require source
    -> locate compiler -> <compiler> src/main.ipl -o build/<artifact>

Each step short-circuits with a typed error.  A failed compile is reported
with the compiler's stderr, never retried.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from pathlib import Path

from ipl_cli.config import Config
from ipl_cli.utils import decode_output, run_process

from .context import require_project_context
from .errors import CompileFailed, SourceNotFound
from .results import BuildOutput, BuildRequest, ExecutionResult
from .targets import Target
from .toolchain import ToolchainHandle, ToolchainLocator


class BuildOrchestrator:
    """Compiles an IPL project rooted at *root*."""

    def __init__(
        self,
        config: Config,
        root: Path | None = None,
        env: Mapping[str, str] | None = None,
    ):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()
        self.env = env

    @property
    def build_dir(self) -> Path:
        return self.config.build_path(self.root)

    def ensure_build_dir(self) -> Path:
        """Create the build directory if absent; reuse it untouched otherwise."""
        self.build_dir.mkdir(parents=True, exist_ok=True)
        return self.build_dir

    def require_entry_file(self) -> Path:
        entry = self.config.main_file_path(self.root)
        if not entry.is_file():
            raise SourceNotFound(Path(self.config.main_file))
        return entry

    def locate_toolchain(self) -> ToolchainHandle:
        # A fresh locator per call; the search is never cached.
        return ToolchainLocator(self.config, self.root, self.env).locate()

    async def build(self, request: BuildRequest | None = None) -> BuildOutput:
        """Build the project for ``request.target``.

        Raises:
            NotAProject: No descriptor in the project root.
            SourceNotFound: The entry file is missing.
            ToolchainNotFound: The compiler could not be located.
            CompileFailed: The compiler exited non-zero or failed to start.
        """
        request = request or BuildRequest()
        require_project_context(self.root, self.config)

        start = time.monotonic()
        build_dir = self.ensure_build_dir()
        target = Target.parse(request.target, self.config.default_target)
        artifact_name = target.artifact_name(self.config.artifact_stem)

        toolchain, compiler = await self.compile_source(artifact_name)

        return BuildOutput(
            build_dir=build_dir,
            target=target,
            artifact=build_dir / artifact_name,
            toolchain=toolchain,
            compiler=compiler,
            duration_seconds=time.monotonic() - start,
        )

    async def compile_source(self, artifact_name: str) -> tuple[ToolchainHandle, ExecutionResult]:
        """Run the compiler once on the entry file.

        The command is ``<compiler> <main_file> -o <build_dir>/<artifact_name>``,
        executed from the project root.
        """
        self.require_entry_file()
        toolchain = self.locate_toolchain()

        output = Path(self.config.build_dir) / artifact_name
        cmd = [str(toolchain.path), self.config.main_file, "-o", str(output)]

        try:
            exit_code, stdout, stderr = await run_process(cmd, cwd=self.root)
        except OSError as exc:
            raise CompileFailed(
                f"could not start {toolchain.path}: {exc}", command=cmd
            ) from exc

        if exit_code != 0:
            raise CompileFailed(decode_output(stderr), exit_code=exit_code, command=cmd)

        return toolchain, ExecutionResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            command=cmd,
            source="compiler",
        )
