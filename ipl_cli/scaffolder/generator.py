"""Project scaffolding for ``ipl create``.

Generates a new project directory containing the ``ipl.yaml`` descriptor,
the ``src/main.ipl`` entry file, a README and a ``.gitignore``.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ipl_cli.builder.errors import IplError
from ipl_cli.config import Config
from ipl_cli.project import ProjectManifest

from .templates import TemplateRenderer

# Template -> output path relative to the project root.
_STATIC_FILES: dict[str, str] = {
    "README.md.j2": "README.md",
    "gitignore.j2": ".gitignore",
}


class ScaffoldError(IplError):
    """Raised when a project cannot be created."""


def build_manifest(name: str, org: str, description: str) -> ProjectManifest:
    """Validate the ``create`` arguments into a manifest.

    Raises:
        ScaffoldError: If the name (or any other field) is invalid.
    """
    try:
        return ProjectManifest(name=name, org=org, description=description)
    except ValidationError as exc:
        messages = "; ".join(err["msg"] for err in exc.errors())
        raise ScaffoldError(f"Invalid project name '{name}': {messages}")


class ProjectScaffolder:
    """Creates the on-disk layout of a new IPL project."""

    def __init__(
        self,
        manifest: ProjectManifest,
        config: Config | None = None,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.manifest = manifest
        self.config = config or Config()
        self.renderer = renderer or TemplateRenderer()

    def _build_context(self) -> dict[str, Any]:
        return {
            "name": self.manifest.name,
            "org": self.manifest.org,
            "description": self.manifest.description,
            "version": self.manifest.version,
            "main_file": self.config.main_file,
            "build_dir": self.config.build_dir,
        }

    async def generate(self, parent_dir: str | Path) -> Path:
        """Create ``<parent_dir>/<name>/`` and populate it.

        Returns:
            Path to the new project root.

        Raises:
            ScaffoldError: If the target exists and is not an empty directory.
        """
        project_root = Path(parent_dir) / self.manifest.name
        if project_root.exists():
            if not project_root.is_dir() or any(project_root.iterdir()):
                raise ScaffoldError(f"Directory '{project_root}' already exists and is not empty")

        await asyncio.to_thread(project_root.mkdir, parents=True, exist_ok=True)
        context = self._build_context()

        await asyncio.to_thread(
            self.manifest.save, self.config.descriptor_path(project_root)
        )
        await self.renderer.render_to_file(
            "src/main.ipl.j2", self.config.main_file_path(project_root), context
        )
        for template, relative in _STATIC_FILES.items():
            await self.renderer.render_to_file(template, project_root / relative, context)

        return project_root
