"""Shared pytest fixtures for the IPL CLI test suite.

Provides reusable fixtures for:
- Temporary IPL project directories (with and without a descriptor)
- Stub ``ipl_compiler`` executables (succeeding, failing, no-artifact)
- A Config whose system search paths cannot see a real installation
"""

from __future__ import annotations

import stat
import sys
import textwrap
from pathlib import Path

import pytest

from ipl_cli.config import Config, ToolchainConfig

POSIX_ONLY = pytest.mark.skipif(
    sys.platform == "win32", reason="stub compilers are POSIX shell scripts"
)


# ---------------------------------------------------------------------------
# Stub compilers
# ---------------------------------------------------------------------------

# Writes an executable artifact that prints a greeting, like a real compile.
SUCCESS_COMPILER = r"""#!/bin/sh
out=a.out
src=
while [ $# -gt 0 ]; do
  case "$1" in
    -o) out="$2"; shift 2 ;;
    *) src="$1"; shift ;;
  esac
done
printf '#!/bin/sh\necho "Hello from IPL"\necho "warning: demo" >&2\n' > "$out"
chmod +x "$out"
echo "Compiled $src -> $out"
"""

FAILING_COMPILER = r"""#!/bin/sh
echo "src/main.ipl:3:5: error: unexpected token '}'" >&2
echo "1 error generated." >&2
exit 2
"""

# Exits 0 without writing anything.
SILENT_COMPILER = r"""#!/bin/sh
echo "nothing to do"
"""


def write_executable(path: Path, script: str) -> Path:
    """Write *script* to *path* and mark it executable."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(script), encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


@pytest.fixture
def ipl_config() -> Config:
    """Default Config with no system install locations."""
    return Config(toolchain=ToolchainConfig(system_paths=[]))


@pytest.fixture
def empty_env() -> dict[str, str]:
    """An environment whose PATH finds nothing."""
    return {"PATH": ""}


# ---------------------------------------------------------------------------
# Projects
# ---------------------------------------------------------------------------

@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Parent directory of the test project (its ``build/`` is the local probe)."""
    ws = tmp_path / "workspace"
    ws.mkdir()
    return ws


@pytest.fixture
def project_dir(workspace: Path) -> Path:
    """A minimal IPL project: descriptor plus entry file."""
    root = workspace / "hello"
    (root / "src").mkdir(parents=True)
    (root / "ipl.yaml").write_text(
        "name: hello\nversion: 0.1.0\norg: com.example\n"
        "description: A new IPL project\ndependencies: {}\n",
        encoding="utf-8",
    )
    (root / "src" / "main.ipl").write_text(
        'func main() {\n    print("Hello from IPL")\n}\n', encoding="utf-8"
    )
    return root


@pytest.fixture
def bare_dir(workspace: Path) -> Path:
    """A directory that is not an IPL project (has sources, no descriptor)."""
    root = workspace / "not-a-project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.ipl").write_text("func main() {}\n", encoding="utf-8")
    return root


@pytest.fixture
def tools_dir(tmp_path: Path) -> Path:
    tools = tmp_path / "tools"
    tools.mkdir()
    return tools


@pytest.fixture
def stub_compiler(tools_dir: Path) -> Path:
    return write_executable(tools_dir / "ipl_compiler", SUCCESS_COMPILER)


@pytest.fixture
def failing_compiler(tools_dir: Path) -> Path:
    return write_executable(tools_dir / "ipl_compiler", FAILING_COMPILER)


@pytest.fixture
def silent_compiler(tools_dir: Path) -> Path:
    return write_executable(tools_dir / "ipl_compiler", SILENT_COMPILER)


@pytest.fixture
def tools_env(tools_dir: Path) -> dict[str, str]:
    """An environment whose PATH only contains the stub tools directory."""
    return {"PATH": str(tools_dir)}


def snapshot(root: Path) -> set[str]:
    """Every path under *root*, relative, for before/after comparisons."""
    return {p.relative_to(root).as_posix() for p in root.rglob("*")}
