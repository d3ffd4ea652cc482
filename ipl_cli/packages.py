"""Dependency list management for ``ipl add/remove/list/get``.

Dependencies live in the ``dependencies`` mapping of ``ipl.yaml``.  No
version resolution happens here: ``get`` records each dependency with its
requested constraint in ``ipl.lock`` so later tooling has a stable input.
"""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

from ipl_cli.builder.context import require_project_context
from ipl_cli.builder.errors import IplError
from ipl_cli.config import Config
from ipl_cli.project import ProjectManifest
from ipl_cli.utils import save_yaml

ANY_VERSION = "*"


class PackageError(IplError):
    """Raised when a dependency operation cannot be applied."""


class PackageManager:
    """Reads and updates the dependency list of the project at *root*."""

    def __init__(self, config: Config, root: Path | None = None):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()

    def _load(self) -> tuple[Path, ProjectManifest]:
        context = require_project_context(self.root, self.config)
        return context.descriptor, ProjectManifest.load(context.descriptor)

    def add_dependency(self, package: str, version: str = ANY_VERSION) -> ProjectManifest:
        """Add *package* to the manifest.

        Raises:
            PackageError: If the name is blank or already listed.
        """
        name = package.strip()
        if not name:
            raise PackageError("Package name must not be empty")

        path, manifest = self._load()
        if name in manifest.dependencies:
            raise PackageError(
                f"Dependency '{name}' is already listed ({manifest.dependencies[name]})"
            )
        manifest.dependencies[name] = version or ANY_VERSION
        manifest.save(path)
        return manifest

    def remove_dependency(self, package: str) -> ProjectManifest:
        """Remove *package* from the manifest.

        Raises:
            PackageError: If the package is not listed.
        """
        path, manifest = self._load()
        if package not in manifest.dependencies:
            raise PackageError(f"Dependency '{package}' is not listed in {self.config.descriptor}")
        del manifest.dependencies[package]
        manifest.save(path)
        return manifest

    def list_dependencies(self) -> list[tuple[str, str]]:
        """Return ``(name, constraint)`` pairs sorted by name."""
        _, manifest = self._load()
        return sorted(manifest.dependencies.items())

    def get_dependencies(self) -> Path:
        """Write ``ipl.lock`` for the current dependency list and return its path."""
        _, manifest = self._load()
        lock = {
            "project": manifest.name,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "dependencies": [
                {"name": name, "requested": constraint}
                for name, constraint in sorted(manifest.dependencies.items())
            ],
        }
        return save_yaml(lock, self.config.lock_path(self.root))
