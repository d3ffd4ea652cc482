"""IPL command-line interface.

Usage::

    ipl create <project_name> [org] [description]
    ipl build [target]
    ipl run
    ipl clean [--all]
    ipl add <package> [--version CONSTRAINT]
    ipl remove <package>
    ipl list
    ipl get

Each command runs in a single control flow.  Errors are printed as one-line
diagnostics and turn into a non-zero exit status.
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from collections.abc import Callable
from pathlib import Path

from rich.markup import escape

from ipl_cli import __version__
from ipl_cli.builder import (
    BuildOrchestrator,
    BuildOutput,
    BuildRequest,
    CleanOrchestrator,
    IplError,
    RunOrchestrator,
    ToolchainNotFound,
)
from ipl_cli.config import Config
from ipl_cli.packages import ANY_VERSION, PackageManager
from ipl_cli.scaffolder import ProjectScaffolder, build_manifest
from ipl_cli.utils import (
    err_console,
    format_duration,
    print_error,
    print_info,
    print_success,
    print_summary_table,
    print_warning,
    relay_output,
)

# ---------------------------------------------------------------------------
# Command handlers
# ---------------------------------------------------------------------------


def cmd_create(args: argparse.Namespace, config: Config) -> int:
    manifest = build_manifest(args.name, args.org, args.description)
    project_root = asyncio.run(ProjectScaffolder(manifest, config).generate(Path.cwd()))

    print_success(f"Successfully created project '{manifest.name}'")
    print_info(f"Project location: {project_root}")
    print_info("")
    print_info("To get started:")
    print_info(f"  cd {manifest.name}")
    print_info("  ipl get          # Get dependencies")
    print_info("  ipl run          # Run the project")
    return 0


def cmd_get(args: argparse.Namespace, config: Config) -> int:
    lock_path = PackageManager(config).get_dependencies()
    print_success("Dependencies updated successfully")
    print_info(f"Lock file: {lock_path.name}")
    return 0


def _print_build(build: BuildOutput, config: Config) -> None:
    print_info(f"Using IPL compiler: {build.toolchain.path}")
    print_info(f"Successfully compiled IPL source: {config.main_file}")
    for line in build.report():
        print_info(line)


def cmd_build(args: argparse.Namespace, config: Config) -> int:
    build = asyncio.run(BuildOrchestrator(config).build(BuildRequest(target=args.target)))

    print_info(f"Building IPL project for target: {build.target.name}")
    _print_build(build, config)
    print_success(f"Build completed successfully in {format_duration(build.duration_seconds)}")
    if args.target is not None:
        print_info(f"Target: {args.target}")
    return 0


def cmd_run(args: argparse.Namespace, config: Config) -> int:
    runner = RunOrchestrator(config)
    result = asyncio.run(runner.run())

    if runner.last_build is not None:
        _print_build(runner.last_build, config)

    if result.source == "compiler":
        print_warning("No executable found. Building...")
        relay_output(result.stdout, result.stderr)
        return 0

    print_info("Running IPL project...")
    relay_output(result.stdout, result.stderr)
    return result.exit_code


def cmd_clean(args: argparse.Namespace, config: Config) -> int:
    report = CleanOrchestrator(config).clean(remove_patterns=args.all)

    if report.removed_build_dir:
        print_info(f"Build directory cleaned: {config.build_dir}")
    else:
        print_info(f"Build directory does not exist: {config.build_dir}")

    for entry in report.patterns:
        if entry.removed:
            print_info(f"Cleaned pattern: {entry.pattern} ({len(entry.matches)} removed)")
        elif entry.matches:
            print_info(f"Would clean pattern: {entry.pattern} ({len(entry.matches)} match(es))")
        else:
            print_info(f"Would clean pattern: {entry.pattern}")

    print_success("Build artifacts cleaned successfully")
    return 0


def cmd_add(args: argparse.Namespace, config: Config) -> int:
    PackageManager(config).add_dependency(args.package, args.version)
    print_success(f"Added dependency: {args.package}")
    return 0


def cmd_remove(args: argparse.Namespace, config: Config) -> int:
    PackageManager(config).remove_dependency(args.package)
    print_success(f"Removed dependency: {args.package}")
    return 0


def cmd_list(args: argparse.Namespace, config: Config) -> int:
    dependencies = PackageManager(config).list_dependencies()
    if not dependencies:
        print_info("No dependencies.")
        return 0
    print_summary_table(dict(dependencies), title="Project dependencies")
    return 0


def cmd_version(args: argparse.Namespace, config: Config) -> int:
    print_info(f"IPL Command Line Manager v{__version__}")
    return 0


# Command name -> (handler, verb used in failure messages)
COMMANDS: dict[str, tuple[Callable[[argparse.Namespace, Config], int], str]] = {
    "create": (cmd_create, "create project"),
    "get": (cmd_get, "get dependencies"),
    "run": (cmd_run, "run project"),
    "build": (cmd_build, "build project"),
    "clean": (cmd_clean, "clean build artifacts"),
    "add": (cmd_add, "add dependency"),
    "remove": (cmd_remove, "remove dependency"),
    "list": (cmd_list, "list dependencies"),
    "version": (cmd_version, "print version"),
}


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ipl",
        description="IPL - Impossible Programming Language Command Line Interface",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  ipl create hello\n"
            "  ipl build wasm\n"
            "  ipl run\n"
        ),
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"IPL Command Line Manager v{__version__}",
    )

    sub = parser.add_subparsers(dest="command", metavar="<command>")

    create = sub.add_parser("create", help="Create a new IPL project")
    create.add_argument("name", help="Project name (also the directory name)")
    create.add_argument("org", nargs="?", default="com.example", help="Organisation id (default: com.example)")
    create.add_argument(
        "description", nargs="?", default="A new IPL project", help="Short project description"
    )

    sub.add_parser("get", help="Get project dependencies")
    sub.add_parser("run", help="Build and run the current project")

    build = sub.add_parser("build", help="Build the project for the specified target")
    build.add_argument(
        "target", nargs="?", default=None, help="executable (default), wasm, js, or any other target name"
    )

    clean = sub.add_parser("clean", help="Clean build artifacts")
    clean.add_argument(
        "--all",
        action="store_true",
        help="Also delete files matching the auxiliary artifact patterns",
    )

    add = sub.add_parser("add", help="Add a dependency")
    add.add_argument("package")
    add.add_argument("--version", default=ANY_VERSION, help="Version constraint (default: *)")

    remove = sub.add_parser("remove", help="Remove a dependency")
    remove.add_argument("package")

    sub.add_parser("list", help="List all dependencies")
    sub.add_parser("help", help="Print this help message")
    sub.add_parser("version", help="Print the application version")

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for ``ipl`` and ``python -m ipl_cli``."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0

    handler, action = COMMANDS[args.command]
    config = Config.from_env()

    try:
        return handler(args, config)
    except ToolchainNotFound as exc:
        print_error(f"Failed to {action}: {exc}")
        for attempt in exc.attempts:
            err_console.print(
                f"  [dim]checked {escape(str(attempt))}[/dim]", highlight=False, soft_wrap=True
            )
        return 1
    except (IplError, OSError) as exc:
        print_error(f"Failed to {action}: {exc}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
