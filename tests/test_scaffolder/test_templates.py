"""Tests for the Jinja2 TemplateRenderer.

Covers:
- Single and inline rendering
- render_to_file / render_tree (structure, dotfiles)
- Strict undefined handling
- Custom filters
- The packaged init and server templates
"""

from __future__ import annotations

from pathlib import Path

import pytest
from jinja2 import UndefinedError

from freakend.scaffolder.templates import TemplateRenderer, camel_case, pascal_case


pytestmark = pytest.mark.unit


@pytest.fixture
def renderer_dir(tmp_path: Path) -> Path:
    root = tmp_path / "j2"
    files = {
        "hello.txt.j2": "Hello {{ name }}!\n",
        "tree/app.js.j2": "const port = {{ port }};\n",
        "tree/.env.j2": "PORT={{ port }}\n",
        "tree/nested/deep.js.j2": "// {{ name | pascal_case }}\n",
        "tree/notes.md": "not a template\n",
    }
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def renderer(renderer_dir: Path) -> TemplateRenderer:
    return TemplateRenderer(renderer_dir)


class TestRender:
    def test_render(self, renderer: TemplateRenderer):
        assert renderer.render("hello.txt.j2", {"name": "fxp"}) == "Hello fxp!\n"

    def test_render_string(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ x | camel_case }}", {"x": "email-verify"}) == "emailVerify"

    def test_undefined_variable_raises(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("hello.txt.j2", {})

    def test_no_html_escaping(self, renderer: TemplateRenderer):
        assert renderer.render_string("{{ s }}", {"s": "a < b && 'c'"}) == "a < b && 'c'"


class TestFileRendering:
    async def test_render_to_file_creates_parents(self, renderer: TemplateRenderer, tmp_path: Path):
        out = tmp_path / "out" / "sub" / "hello.txt"
        path = await renderer.render_to_file("hello.txt.j2", out, {"name": "x"})
        assert path == out
        assert out.read_text(encoding="utf-8") == "Hello x!\n"

    async def test_render_tree(self, renderer: TemplateRenderer, tmp_path: Path):
        out = tmp_path / "project"
        written = await renderer.render_tree("tree", out, {"port": 5000, "name": "my-app"})

        assert [p.relative_to(out).as_posix() for p in written] == [
            ".env",
            "app.js",
            "nested/deep.js",
        ]
        assert (out / ".env").read_text() == "PORT=5000\n"
        assert (out / "nested" / "deep.js").read_text() == "// MyApp\n"
        assert not (out / "notes.md").exists()

    async def test_render_tree_missing_prefix(self, renderer: TemplateRenderer, tmp_path: Path):
        assert await renderer.render_tree("nope", tmp_path, {}) == []


class TestFilters:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [("email-verify", "emailVerify"), ("login", "login"), ("otp_2fa", "otp2fa"), ("", "")],
    )
    def test_camel_case(self, value, expected):
        assert camel_case(value) == expected

    def test_pascal_case(self):
        assert pascal_case("admin-pannel") == "AdminPannel"


class TestPackagedTemplates:
    async def test_init_set(self, tmp_path: Path):
        context = {"project_name": "app", "port": 5000, "mongo_uri": "mongodb://db"}
        written = await TemplateRenderer().render_tree("init/node-express", tmp_path, context)
        assert [p.relative_to(tmp_path).as_posix() for p in written] == [
            ".env",
            "config/db.js",
            "controllers/loginController.js",
            "models/userModel.js",
            "routes/login.js",
            "server.js",
        ]

    def test_server_template_has_marker(self):
        content = TemplateRenderer().render(
            "server/freakend.server.js.j2",
            {"inject_marker": "// MARK", "port": 5001},
        )
        assert "// MARK" in content
        assert "app.listen(5001" in content
