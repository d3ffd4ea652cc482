"""Project context validation.

A directory is an IPL project root when it holds the project descriptor.
Only the descriptor's presence matters here; its content is never parsed.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ipl_cli.config import Config

from .errors import NotAProject


@dataclass(frozen=True)
class ProjectContext:
    """Proof that *root* is a project root."""

    root: Path
    descriptor: Path


def require_project_context(root: Path, config: Config) -> ProjectContext:
    """Return the project context for *root* or raise :class:`NotAProject`.

    Performs no side effects: nothing is created, nothing is spawned.
    """
    descriptor = config.descriptor_path(root)
    if not descriptor.is_file():
        raise NotAProject(root, config.descriptor)
    return ProjectContext(root=root, descriptor=descriptor)
