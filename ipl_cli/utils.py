"""Shared utility functions for the IPL CLI.

Provides async process execution, YAML I/O, name helpers, and Rich-based
console reporting.  The orchestrators never print; the CLI layer renders
their results through the helpers at the bottom of this module.
"""

from __future__ import annotations

import asyncio
import os
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

console = Console()
err_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Async process execution
# ---------------------------------------------------------------------------


async def run_process(
    cmd: list[str],
    cwd: str | Path | None = None,
    env: dict[str, str] | None = None,
) -> tuple[int, bytes, bytes]:
    """Run a program and wait for it to exit.

    There is no timeout: the caller blocks until the child process exits.

    Args:
        cmd: Program and arguments.  No shell is involved.
        cwd: Working directory for the child process.
        env: Optional extra environment variables merged on top of ``os.environ``.

    Returns:
        A ``(returncode, stdout, stderr)`` tuple with the raw captured bytes.

    Raises:
        OSError: If the program cannot be started (missing, not executable).
    """
    merged_env: dict[str, str] | None = None
    if env:
        merged_env = {**os.environ, **env}

    process = await asyncio.create_subprocess_exec(
        *cmd,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=str(cwd) if cwd else None,
        env=merged_env,
    )
    stdout_bytes, stderr_bytes = await process.communicate()
    returncode = process.returncode if process.returncode is not None else -1
    return (returncode, stdout_bytes or b"", stderr_bytes or b"")


def decode_output(data: bytes) -> str:
    """Decode captured process output, replacing undecodable bytes."""
    return data.decode("utf-8", errors="replace")


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def sanitize_name(name: str) -> str:
    """Convert an arbitrary name to a safe file-name fragment.

    * Lowercases the input.
    * Replaces anything except letters, digits, hyphens and underscores
      with hyphens.
    * Collapses consecutive hyphens and strips leading/trailing hyphens.

    Examples::

        sanitize_name("Web Assembly") -> "web-assembly"
        sanitize_name("  arm64/linux ") -> "arm64-linux"
    """
    result = re.sub(r"[^a-zA-Z0-9_-]", "-", name.strip().lower())
    result = re.sub(r"-+", "-", result)
    return result.strip("-")


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.42)  -> "0.4s"
        format_duration(65.2)  -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load and parse a YAML mapping.

    An empty file yields an empty dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the top-level node is not a mapping.
    """
    raw = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a mapping at the top level")
    return data


def save_yaml(data: dict[str, Any], path: str | Path) -> Path:
    """Write *data* as block-style YAML, preserving key order."""
    file_path = Path(path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(
        yaml.safe_dump(data, default_flow_style=False, sort_keys=False),
        encoding="utf-8",
    )
    return file_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_info(message: str) -> None:
    console.print(escape(message), highlight=False, soft_wrap=True, emoji=False)


def print_error(message: str) -> None:
    """Print a red error message to stderr.

    Compiler diagnostics pass through as-is: no re-wrapping, no emoji codes.
    """
    err_console.print(
        f"[bold red]{escape(message)}[/bold red]", highlight=False, soft_wrap=True, emoji=False
    )


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def relay_output(stdout: bytes, stderr: bytes) -> None:
    """Relay a child program's captured streams to the user.

    Stdout is always written; stderr only when it is non-empty.  Both go
    straight to the underlying streams, bypassing Rich rendering, so tabs,
    carriage returns and other control characters arrive unchanged.
    """
    _write_raw(console, decode_output(stdout))
    if stderr:
        _write_raw(err_console, decode_output(stderr))


def _write_raw(target: Console, text: str) -> None:
    target.file.write(text)
    target.file.flush()
