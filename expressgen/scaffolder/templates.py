"""Jinja2 rendering for the files expressgen generates.

Template files live in ``expressgen/scaffolder/templates/``.  Files that
differ per language come in pairs named ``<stem>.js.j2`` and ``<stem>.ts.j2``
and are looked up with :meth:`TemplateRenderer.render_variant`.

Templates only substitute variables.  Which file, fragment or line appears
is decided in Python before rendering.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

TEMPLATE_SUFFIX = ".j2"

_BUNDLED_DIR = Path(__file__).parent / "templates"


class TemplateRenderer:
    """Renders bundled templates and inline entry-file fragments.

    Missing context keys raise :class:`jinja2.UndefinedError`.  Output is
    never HTML-escaped: everything rendered here is source code or config.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        self.template_dir = Path(template_dir) if template_dir is not None else _BUNDLED_DIR
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self._inline: dict[str, Template] = {}

    def render(self, name: str, context: dict[str, Any]) -> str:
        """Render the template file *name* (relative to the template dir)."""
        return self.env.get_template(name).render(**context)

    def render_variant(self, stem: str, ext: str, context: dict[str, Any]) -> str:
        """Render the *ext* flavour of a per-language template.

        ``render_variant("configs/db", "ts", ctx)`` renders
        ``configs/db.ts.j2``.
        """
        return self.render(f"{stem}.{ext}{TEMPLATE_SUFFIX}", context)

    def render_string(self, source: str, context: dict[str, Any]) -> str:
        # compiled fragments are cached by source text
        template = self._inline.get(source)
        if template is None:
            template = self._inline[source] = self.env.from_string(source)
        return template.render(**context)
