"""IPL compiler discovery.

The compiler is looked up through an ordered list of independent probes:

1. ``local-build`` - the sibling ``../build/`` directory of an IStudio checkout.
2. ``system``      - standard install locations, most system-global first.
3. ``path``        - every directory listed in ``PATH``, in order.

The first probe that finds an existing file wins; later probes are not
consulted.  Nothing is cached, so installing the compiler between two
invocations is picked up by the next one.  Probing only checks the
filesystem; nothing is executed.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from ipl_cli.config import Config

from .errors import ToolchainNotFound


@dataclass(frozen=True)
class ToolchainHandle:
    """A resolved compiler executable and the probe that found it."""

    path: Path
    probe: str


@dataclass(frozen=True)
class ToolchainProbe:
    """One search location strategy.

    ``candidates`` is called lazily so that every lookup sees the current
    state of the environment and filesystem.
    """

    label: str
    candidates: Callable[[], list[Path]]

    def probe(self, attempts: list[Path]) -> Path | None:
        """Return the first existing candidate, recording every path tried."""
        for candidate in self.candidates():
            attempts.append(candidate)
            if candidate.is_file():
                return candidate
        return None


def first_match(probes: Sequence[ToolchainProbe]) -> tuple[ToolchainHandle | None, list[Path]]:
    """Run *probes* in order and stop at the first hit.

    Returns:
        ``(handle, attempts)`` where *handle* is ``None`` when no probe
        matched and *attempts* lists every path that was checked.
    """
    attempts: list[Path] = []
    for probe in probes:
        found = probe.probe(attempts)
        if found is not None:
            return ToolchainHandle(path=found, probe=probe.label), attempts
    return None, attempts


class ToolchainLocator:
    """Finds the IPL compiler for a project rooted at *root*."""

    def __init__(
        self,
        config: Config,
        root: Path | None = None,
        env: Mapping[str, str] | None = None,
    ):
        self.config = config
        self.root = Path(root) if root is not None else Path.cwd()
        self.env = env if env is not None else os.environ

    @property
    def compiler_name(self) -> str:
        return self.config.toolchain.compiler_name

    def _anchor(self, directory: str) -> Path:
        path = Path(directory)
        return path if path.is_absolute() else self.root / path

    def _local_build_candidates(self) -> list[Path]:
        return [self._anchor(self.config.toolchain.local_build_dir) / self.compiler_name]

    def _system_candidates(self) -> list[Path]:
        return [self._anchor(d) / self.compiler_name for d in self.config.toolchain.system_paths]

    def _path_candidates(self) -> list[Path]:
        search_path = self.env.get(self.config.toolchain.path_variable, "")
        return [
            self._anchor(entry) / self.compiler_name
            for entry in search_path.split(os.pathsep)
            if entry
        ]

    def probes(self) -> list[ToolchainProbe]:
        """The search order.  Adding a location is a list edit here."""
        return [
            ToolchainProbe("local-build", self._local_build_candidates),
            ToolchainProbe("system", self._system_candidates),
            ToolchainProbe("path", self._path_candidates),
        ]

    def locate(self) -> ToolchainHandle:
        """Resolve the compiler.

        Raises:
            ToolchainNotFound: If no probe finds the executable.  The error
                lists every path that was checked.
        """
        handle, attempts = first_match(self.probes())
        if handle is None:
            raise ToolchainNotFound(self.compiler_name, attempts)
        return handle
