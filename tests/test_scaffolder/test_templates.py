"""Tests for the Jinja2 TemplateRenderer."""

from __future__ import annotations

from pathlib import Path

import jinja2
import pytest

from expressgen.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def renderer() -> TemplateRenderer:
    return TemplateRenderer()


class TestTemplateRenderer:
    def test_render_file(self, renderer):
        out = renderer.render("stub.j2", {"title": "Routes", "concern": "routes"})
        assert out == "// Routes\n// Add your routes here.\n"

    def test_render_string(self, renderer):
        assert renderer.render_string("PORT = {{ port }}", {"port": 3000}) == "PORT = 3000"

    def test_render_variant_picks_language_file(self, renderer):
        context = {"db_uri_env": "DB_URI", "db_uri": "mongodb://localhost:27017/x"}
        assert "module.exports = connectDB;" in renderer.render_variant("configs/db", "js", context)
        assert "export default connectDB;" in renderer.render_variant("configs/db", "ts", context)

    def test_render_variant_unknown_language(self, renderer):
        with pytest.raises(jinja2.TemplateNotFound):
            renderer.render_variant("configs/db", "py", {})

    def test_inline_templates_cached(self, renderer):
        renderer.render_string("{{ a }}", {"a": 1})
        renderer.render_string("{{ a }}", {"a": 2})
        assert list(renderer._inline) == ["{{ a }}"]

    def test_missing_variable_raises(self, renderer):
        with pytest.raises(jinja2.UndefinedError):
            renderer.render("stub.j2", {"title": "Routes"})

    def test_no_html_escaping(self, renderer):
        assert renderer.render_string("{{ v }}", {"v": "<a & b>"}) == "<a & b>"

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "hello.txt.j2").write_text("hi {{ name }}\n", encoding="utf-8")
        custom = TemplateRenderer(tmp_path)
        assert custom.render("hello.txt.j2", {"name": "there"}) == "hi there\n"
