"""Build output removal for ``ipl clean``.

The build directory is always removed when present.  Auxiliary artifact
patterns (alternate output directories, native objects and libraries) are
matched against the project root and reported; they are only deleted when
the caller opts in with ``remove_patterns=True``.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from ipl_cli.config import Config

from .context import require_project_context
from .errors import CleanError
from .results import CleanReport, PatternMatch


def match_pattern(root: Path, pattern: str) -> list[Path]:
    """Entries directly under *root* matching *pattern*.

    A trailing ``/`` restricts the pattern to directories.
    """
    dirs_only = pattern.endswith("/")
    glob = pattern.rstrip("/")
    matches = sorted(root.glob(glob))
    if dirs_only:
        matches = [m for m in matches if m.is_dir()]
    return matches


def _remove(path: Path) -> None:
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        else:
            path.unlink()
    except OSError as exc:
        raise CleanError(path, exc) from exc


class CleanOrchestrator:
    """Removes build outputs of the project rooted at *root*."""

    def __init__(self, config: Config, root: Path | None = None):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()

    def clean(self, remove_patterns: bool = False) -> CleanReport:
        """Remove ``build/`` and survey the auxiliary patterns.

        Args:
            remove_patterns: Also delete whatever the auxiliary patterns match.

        Raises:
            NotAProject: No descriptor in the project root.
            CleanError: A removal failed.
        """
        require_project_context(self.root, self.config)

        build_dir = self.config.build_path(self.root)
        removed = False
        if build_dir.exists():
            _remove(build_dir)
            removed = True

        report = CleanReport(build_dir=build_dir, removed_build_dir=removed)
        for pattern in self.config.clean_patterns:
            entry = PatternMatch(pattern=pattern, matches=match_pattern(self.root, pattern))
            if remove_patterns and entry.matches:
                for path in entry.matches:
                    _remove(path)
                entry.removed = True
            report.patterns.append(entry)

        return report
