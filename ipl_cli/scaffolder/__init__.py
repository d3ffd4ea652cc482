"""IPL CLI scaffolder -- generates new project directories.

Quick usage::

    from ipl_cli.scaffolder import ProjectScaffolder, build_manifest

    manifest = build_manifest("hello", "com.example", "A new IPL project")
    project_root = await ProjectScaffolder(manifest).generate(".")
"""

from ipl_cli.scaffolder.generator import ProjectScaffolder, ScaffoldError, build_manifest
from ipl_cli.scaffolder.templates import TemplateRenderer

__all__ = [
    "ProjectScaffolder",
    "ScaffoldError",
    "TemplateRenderer",
    "build_manifest",
]
