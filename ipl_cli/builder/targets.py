"""Compilation targets.

The target namespace is open: ``executable``, ``wasm`` and ``js`` are
canonical and get their own artifact naming and report, while any other name
is accepted verbatim as a ``CUSTOM`` target.  The target only affects the
artifact file name and the report; the artifact bytes are whatever the
compiler writes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ipl_cli.utils import sanitize_name


class TargetKind(str, Enum):
    EXECUTABLE = "executable"
    WASM = "wasm"
    JS = "js"
    CUSTOM = "custom"


_CANONICAL: dict[str, TargetKind] = {
    TargetKind.EXECUTABLE.value: TargetKind.EXECUTABLE,
    TargetKind.WASM.value: TargetKind.WASM,
    TargetKind.JS.value: TargetKind.JS,
}

_SUFFIXES: dict[TargetKind, str] = {
    TargetKind.EXECUTABLE: "",
    TargetKind.WASM: ".wasm",
    TargetKind.JS: ".js",
}


@dataclass(frozen=True)
class Target:
    """A target kind plus the name the user asked for."""

    kind: TargetKind
    name: str

    @classmethod
    def parse(cls, name: str | None, default: str = TargetKind.EXECUTABLE.value) -> "Target":
        """Map a requested name to a target.  Never rejects a name."""
        requested = default if name is None else name
        return cls(kind=_CANONICAL.get(requested, TargetKind.CUSTOM), name=requested)

    def artifact_name(self, stem: str) -> str:
        """File name of the artifact this target produces in the build directory."""
        if self.kind is TargetKind.CUSTOM:
            suffix = sanitize_name(self.name)
            return f"{stem}.{suffix}" if suffix else stem
        return stem + _SUFFIXES[self.kind]

    def report(self, artifact: Path) -> list[str]:
        """User-facing lines describing a successful build of this target."""
        if self.kind is TargetKind.EXECUTABLE:
            return [
                "Compiling to executable...",
                f"Compilation completed. Output: {artifact}",
            ]
        if self.kind is TargetKind.WASM:
            return [
                "Compiling to WebAssembly...",
                f"WASM compilation completed. Output: {artifact}",
            ]
        if self.kind is TargetKind.JS:
            return [
                "Compiling to JavaScript...",
                f"JavaScript compilation completed. Output: {artifact}",
            ]
        return [
            f"Compiling to target: {self.name}",
            f"Compilation completed for target: {self.name}",
        ]
