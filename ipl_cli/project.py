"""The ``ipl.yaml`` project manifest.

The build core only checks that the descriptor exists.  The scaffolder writes
it and the dependency manager reads and rewrites its ``dependencies``
mapping; both go through :class:`ProjectManifest`.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ipl_cli.builder.errors import IplError
from ipl_cli.utils import load_yaml, save_yaml

_PROJECT_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


class ManifestError(IplError):
    """Raised when ``ipl.yaml`` cannot be read, parsed or validated."""

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ProjectManifest(BaseModel):
    """Validated content of ``ipl.yaml``."""

    name: str = Field(..., description="Project name, also the project directory name")
    version: str = Field(default="0.1.0")
    org: str = Field(default="com.example", description="Reverse-domain organisation id")
    description: str = Field(default="A new IPL project")
    dependencies: dict[str, str] = Field(
        default_factory=dict,
        description="Dependency name -> version constraint ('*' when unconstrained)",
    )

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        if not _PROJECT_NAME_RE.match(value):
            raise ValueError(
                "must start with a letter and contain only letters, digits, '-' or '_'"
            )
        return value

    @field_validator("dependencies", mode="before")
    @classmethod
    def _coerce_dependencies(cls, value: Any) -> Any:
        # An empty ``dependencies:`` key loads as None; versions may load as numbers.
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(k): "*" if v is None else str(v) for k, v in value.items()}
        return value

    @classmethod
    def load(cls, path: Path) -> "ProjectManifest":
        """Read and validate a manifest file.

        Raises:
            ManifestError: If the file is missing, malformed, or invalid.
        """
        try:
            data = load_yaml(path)
        except FileNotFoundError:
            raise ManifestError(path, "file not found")
        except (yaml.YAMLError, ValueError) as exc:
            raise ManifestError(path, f"invalid YAML: {exc}")

        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = "; ".join(
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()
            )
            raise ManifestError(path, errors)

    def save(self, path: Path) -> Path:
        """Write the manifest as YAML, keeping a stable key order."""
        return save_yaml(self.model_dump(), path)
