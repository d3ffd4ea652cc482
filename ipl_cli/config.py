"""IPL CLI configuration.

Centralised, typed configuration for the command-line front end. All settings
use Pydantic v2 models so they can be validated at construction time and
overridden from environment variables without boiler-plate.

The defaults are the project conventions every IPL project relies on: the
``ipl.yaml`` descriptor, the ``src/main.ipl`` entry file, the ``build/``
output directory and the ``ipl_compiler`` toolchain executable.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

DEFAULT_SYSTEM_PATHS: list[str] = [
    "/usr/local/bin",
    "/usr/bin",
    ".",
]

DEFAULT_CLEAN_PATTERNS: list[str] = [
    "target/",
    "dist/",
    "*.o",
    "*.obj",
    "*.a",
    "*.lib",
    "*.so",
    "*.dylib",
    "*.dll",
]


class ToolchainConfig(BaseModel):
    """Where and how to look for the IPL compiler."""

    compiler_name: str = Field(default="ipl_compiler", min_length=1)
    local_build_dir: str = Field(
        default="../build",
        description="Sibling build directory of the enclosing checkout, relative to the project root",
    )
    system_paths: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SYSTEM_PATHS),
        description="Install locations, most system-global first; relative entries resolve against the project root",
    )
    path_variable: str = Field(default="PATH")


class Config(BaseModel):
    """Global IPL CLI configuration.

    Instances are typically created once by the CLI entry point and passed to
    every orchestrator and collaborator.
    """

    descriptor: str = Field(default="ipl.yaml", min_length=1)
    main_file: str = Field(default="src/main.ipl", min_length=1)
    build_dir: str = Field(default="build", min_length=1)
    artifact_stem: str = Field(default="main", min_length=1)
    default_target: str = Field(default="executable", min_length=1)
    lock_file: str = Field(default="ipl.lock", min_length=1)
    clean_patterns: list[str] = Field(default_factory=lambda: list(DEFAULT_CLEAN_PATTERNS))
    toolchain: ToolchainConfig = Field(default_factory=ToolchainConfig)

    # ------------------------------------------------------------------
    # Derived paths
    # ------------------------------------------------------------------

    def descriptor_path(self, root: Path) -> Path:
        """Path to the project descriptor inside *root*."""
        return root / self.descriptor

    def main_file_path(self, root: Path) -> Path:
        """Path to the entry source file inside *root*."""
        return root / self.main_file

    def build_path(self, root: Path) -> Path:
        """Path to the build output directory inside *root*."""
        return root / self.build_dir

    def lock_path(self, root: Path) -> Path:
        """Path to the dependency lock file written by ``ipl get``."""
        return root / self.lock_file

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            IPL_DESCRIPTOR, IPL_MAIN_FILE, IPL_BUILD_DIR, IPL_COMPILER_NAME.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("IPL_DESCRIPTOR"):
            kwargs["descriptor"] = os.environ["IPL_DESCRIPTOR"]
        if os.environ.get("IPL_MAIN_FILE"):
            kwargs["main_file"] = os.environ["IPL_MAIN_FILE"]
        if os.environ.get("IPL_BUILD_DIR"):
            kwargs["build_dir"] = os.environ["IPL_BUILD_DIR"]

        toolchain_kwargs: dict[str, Any] = {}
        if os.environ.get("IPL_COMPILER_NAME"):
            toolchain_kwargs["compiler_name"] = os.environ["IPL_COMPILER_NAME"]

        return cls(toolchain=ToolchainConfig(**toolchain_kwargs), **kwargs)
