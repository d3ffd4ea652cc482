"""Tests for project scaffolding (ipl_cli.scaffolder.generator).

Covers:
- Manifest validation of the ``create`` arguments
- The generated layout and descriptor content
- Refusal to overwrite a non-empty directory
- A custom Config changing the generated entry file location
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest
import yaml

from ipl_cli.builder.context import require_project_context
from ipl_cli.config import Config
from ipl_cli.project import ProjectManifest
from ipl_cli.scaffolder import ProjectScaffolder, ScaffoldError, TemplateRenderer, build_manifest

pytestmark = pytest.mark.unit


@pytest.fixture
def manifest() -> ProjectManifest:
    return build_manifest("hello", "com.acme", "Says hello")


class TestBuildManifest:
    def test_valid(self, manifest: ProjectManifest):
        assert manifest.name == "hello"
        assert manifest.org == "com.acme"
        assert manifest.description == "Says hello"

    @pytest.mark.parametrize("name", ["", "9lives", "with space", "../up"])
    def test_invalid_name(self, name: str):
        with pytest.raises(ScaffoldError, match="Invalid project name"):
            build_manifest(name, "com.example", "x")


class TestGenerate:
    @pytest.mark.asyncio
    async def test_layout(self, manifest: ProjectManifest, tmp_path: Path):
        root = await ProjectScaffolder(manifest).generate(tmp_path)

        assert root == tmp_path / "hello"
        files = sorted(p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file())
        assert files == [".gitignore", "README.md", "ipl.yaml", "src/main.ipl"]

    @pytest.mark.asyncio
    async def test_descriptor_content(self, manifest: ProjectManifest, tmp_path: Path):
        root = await ProjectScaffolder(manifest).generate(tmp_path)

        data = yaml.safe_load((root / "ipl.yaml").read_text(encoding="utf-8"))
        assert data == {
            "name": "hello",
            "version": "0.1.0",
            "org": "com.acme",
            "description": "Says hello",
            "dependencies": {},
        }

    @pytest.mark.asyncio
    async def test_generated_project_is_recognised(self, manifest: ProjectManifest, tmp_path: Path):
        root = await ProjectScaffolder(manifest).generate(tmp_path)
        context = require_project_context(root, Config())
        assert context.root == root

    @pytest.mark.asyncio
    async def test_entry_file(self, manifest: ProjectManifest, tmp_path: Path):
        root = await ProjectScaffolder(manifest).generate(tmp_path)
        source = (root / "src" / "main.ipl").read_text(encoding="utf-8")
        assert "func main()" in source
        assert 'print("Hello from hello!")' in source

    @pytest.mark.asyncio
    async def test_existing_empty_dir_is_reused(self, manifest: ProjectManifest, tmp_path: Path):
        (tmp_path / "hello").mkdir()
        root = await ProjectScaffolder(manifest).generate(tmp_path)
        assert (root / "ipl.yaml").is_file()

    @pytest.mark.asyncio
    async def test_non_empty_dir_refused(self, manifest: ProjectManifest, tmp_path: Path):
        (tmp_path / "hello").mkdir()
        (tmp_path / "hello" / "keep.txt").write_text("mine", encoding="utf-8")

        with pytest.raises(ScaffoldError, match="already exists"):
            await ProjectScaffolder(manifest).generate(tmp_path)

        assert not (tmp_path / "hello" / "ipl.yaml").exists()
        assert (tmp_path / "hello" / "keep.txt").read_text(encoding="utf-8") == "mine"

    @pytest.mark.asyncio
    async def test_existing_file_refused(self, manifest: ProjectManifest, tmp_path: Path):
        (tmp_path / "hello").write_text("x", encoding="utf-8")
        with pytest.raises(ScaffoldError):
            await ProjectScaffolder(manifest).generate(tmp_path)

    @pytest.mark.asyncio
    async def test_custom_config(self, manifest: ProjectManifest, tmp_path: Path):
        config = Config(descriptor="project.yaml", main_file="app/entry.ipl", build_dir="out")
        root = await ProjectScaffolder(manifest, config).generate(tmp_path)

        assert (root / "project.yaml").is_file()
        assert (root / "app" / "entry.ipl").is_file()
        assert (root / ".gitignore").read_text(encoding="utf-8").startswith("/out/\n")


class TestWithMockRenderer:
    @pytest.mark.asyncio
    async def test_renders_every_template(self, manifest: ProjectManifest, tmp_path: Path):
        renderer = MagicMock(spec=TemplateRenderer)

        async def fake_render(template_path, output_path, context):
            out = Path(output_path)
            out.parent.mkdir(parents=True, exist_ok=True)
            out.write_text(f"# Rendered from {template_path}\n", encoding="utf-8")
            return out

        renderer.render_to_file = AsyncMock(side_effect=fake_render)

        root = await ProjectScaffolder(manifest, renderer=renderer).generate(tmp_path)

        rendered = [c.args[0] for c in renderer.render_to_file.call_args_list]
        assert rendered == ["src/main.ipl.j2", "README.md.j2", "gitignore.j2"]
        context = renderer.render_to_file.call_args_list[0].args[2]
        assert context["name"] == "hello"
        assert context["build_dir"] == "build"
        assert (root / "src" / "main.ipl").read_text(encoding="utf-8") == "# Rendered from src/main.ipl.j2\n"
