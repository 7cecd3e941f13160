"""Turns a :class:`FeatureSelection` into the files of a scaffold.

The entry file is not a template.  It is assembled from a decision table of
small fragments, each gated by a predicate over the selection and tagged with
the section it belongs to.  Sections are always emitted in the same order,
and fragments keep their table order inside a section, so a flag can add or
remove a line but can never move one:

1. imports: framework, cors, persistence module, local config modules
2. environment bootstrap (dotenv)
3. application object
4. middleware: cors before the JSON body parser
5. routes: root route, then the catch-all 404 handler
6. startup: port resolution, database connect, listen

Everything else (stubs, db helper, tsconfig, Dockerfile, README) is rendered
from variable-only Jinja2 templates with contexts computed here.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum
from typing import Any

from expressgen.config import FeatureSelection

from .docker_gen import DockerGenerator
from .models import (
    BUILD_DIR,
    DB_URI_ENV,
    DEFAULT_PORT,
    ENTRY_NAME,
    PORT_ENV,
    SOURCE_DIR,
    Artifact,
)
from .templates import TemplateRenderer


class Section(IntEnum):
    IMPORTS = 1
    BOOTSTRAP = 2
    APP = 3
    MIDDLEWARE = 4
    ROUTES = 5
    STARTUP = 6


Predicate = Callable[[FeatureSelection], bool]


def _always(_: FeatureSelection) -> bool:
    return True


@dataclass(frozen=True)
class Fragment:
    """A gated piece of the entry file in both language variants."""

    name: str
    section: Section
    js: str
    ts: str
    when: Predicate = _always

    def source(self, selection: FeatureSelection) -> str:
        return self.ts if selection.is_typescript else self.js


_JS_START_WITH_DB = """\
const start = async () => {
  try {
    await connectDB();
    console.log(`Database connected: ${mongoose.connection.host}`);
    app.listen(PORT, () => console.log(`Server running on port ${PORT}`));
  } catch (err) {
    console.error('Failed to start server:', err);
    process.exit(1);
  }
};

start();"""

_TS_START_WITH_DB = """\
const start = async (): Promise<void> => {
  try {
    await connectDB();
    console.log(`Database connected: ${mongoose.connection.host}`);
    app.listen(PORT, () => console.log(`Server running on port ${PORT}`));
  } catch (err) {
    console.error('Failed to start server:', err);
    process.exit(1);
  }
};

start();"""

_LISTEN = "app.listen(PORT, () => console.log(`Server running on port ${PORT}`));"

ENTRY_FRAGMENTS: tuple[Fragment, ...] = (
    Fragment(
        "framework-import",
        Section.IMPORTS,
        js="const express = require('express');",
        ts="import express, { Request, Response } from 'express';",
    ),
    Fragment(
        "cors-import",
        Section.IMPORTS,
        js="const cors = require('cors');",
        ts="import cors from 'cors';",
        when=lambda s: s.enable_cors,
    ),
    Fragment(
        "persistence-import",
        Section.IMPORTS,
        js="const mongoose = require('mongoose');",
        ts="import mongoose from 'mongoose';",
        when=lambda s: s.database,
    ),
    Fragment(
        "db-config-import",
        Section.IMPORTS,
        js="const connectDB = require('./configs/db');",
        ts="import connectDB from './configs/db';",
        when=lambda s: s.database,
    ),
    Fragment(
        "env-bootstrap",
        Section.BOOTSTRAP,
        js="require('dotenv').config();",
        ts="import dotenv from 'dotenv';\n\ndotenv.config();",
        when=lambda s: s.env_file,
    ),
    Fragment(
        "app",
        Section.APP,
        js="const app = express();",
        ts="const app = express();",
    ),
    Fragment(
        "cors-middleware",
        Section.MIDDLEWARE,
        js="app.use(cors());",
        ts="app.use(cors());",
        when=lambda s: s.enable_cors,
    ),
    Fragment(
        "body-parser-middleware",
        Section.MIDDLEWARE,
        js="app.use(express.json());",
        ts="app.use(express.json());",
    ),
    Fragment(
        "root-route",
        Section.ROUTES,
        js="app.get('/', (req, res) => res.send('{{ greeting }}'));",
        ts="app.get('/', (req: Request, res: Response) => res.send('{{ greeting }}'));",
    ),
    Fragment(
        "not-found-handler",
        Section.ROUTES,
        js="app.use((req, res) => res.status(404).json({ message: 'Not Found' }));",
        ts="app.use((req: Request, res: Response) => res.status(404).json({ message: 'Not Found' }));",
    ),
    Fragment(
        "port",
        Section.STARTUP,
        js="const PORT = process.env.{{ port_env }} || {{ port }};",
        ts="const PORT = Number(process.env.{{ port_env }}) || {{ port }};",
    ),
    Fragment(
        "listen",
        Section.STARTUP,
        js=_LISTEN,
        ts=_LISTEN,
        when=lambda s: not s.database,
    ),
    Fragment(
        "connect-then-listen",
        Section.STARTUP,
        js=_JS_START_WITH_DB,
        ts=_TS_START_WITH_DB,
        when=lambda s: s.database,
    ),
)

GREETING = "Hello World!, This was created using Express CLI"

# (folder, concern shown in the placeholder comment)
_STUBS: tuple[tuple[str, str], ...] = (
    ("routes", "routes"),
    ("controllers", "controllers"),
    ("models", "models"),
    ("middlewares", "middlewares"),
)


class TemplateComposer:
    """Renders every artifact of a scaffold for one feature selection.

    The composer is pure: it never touches the filesystem and never looks at
    the process working directory.  The same selection always produces the
    same artifacts in the same order.
    """

    def __init__(
        self,
        selection: FeatureSelection,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.selection = selection
        self.renderer = renderer or TemplateRenderer()
        self.docker_gen = DockerGenerator(self.renderer)

    # -- Public API --------------------------------------------------------

    def compose(self) -> list[Artifact]:
        """Return all artifacts for the selection, entry file first."""
        sel = self.selection
        ext = sel.ext
        artifacts = [
            Artifact(f"{SOURCE_DIR}/{ENTRY_NAME}.{ext}", self.render_entry()),
            Artifact(f"{SOURCE_DIR}/configs/db.{ext}", self.render_db_config()),
        ]
        for folder, concern in _STUBS:
            content = self.render_model() if folder == "models" else self.render_stub(concern)
            artifacts.append(Artifact(f"{SOURCE_DIR}/{folder}/index.{ext}", content))

        if sel.env_file:
            artifacts.append(Artifact(".env", self.render_env()))
        if sel.gitignore:
            artifacts.append(Artifact(".gitignore", self.render_gitignore()))
        if sel.ts_config:
            artifacts.append(Artifact("tsconfig.json", self.render_tsconfig()))
        artifacts.extend(self.docker_gen.generate(sel))
        artifacts.append(Artifact("README.md", self.render_readme()))
        return artifacts

    def entry_fragments(self) -> list[Fragment]:
        """Fragments active for the selection, in canonical order."""
        active = [f for f in ENTRY_FRAGMENTS if f.when(self.selection)]
        # sorted() is stable, so table order survives within a section
        return sorted(active, key=lambda f: f.section)

    # -- Entry file --------------------------------------------------------

    def render_entry(self) -> str:
        context = {"greeting": GREETING, "port_env": PORT_ENV, "port": DEFAULT_PORT}
        blocks: list[str] = []
        current: Section | None = None
        for fragment in self.entry_fragments():
            text = self.renderer.render_string(fragment.source(self.selection), context)
            if fragment.section == current and fragment.section != Section.STARTUP:
                blocks[-1] = f"{blocks[-1]}\n{text}"
            else:
                blocks.append(text)
            current = fragment.section
        return "\n\n".join(blocks) + "\n"

    # -- Per-concern stubs -------------------------------------------------

    def render_stub(self, concern: str) -> str:
        return self.renderer.render(
            "stub.j2",
            {"title": concern.capitalize(), "concern": concern},
        )

    def render_db_config(self) -> str:
        if not self.selection.database:
            return self.render_stub("database configuration")
        return self.renderer.render_variant(
            "configs/db",
            self.selection.ext,
            {"db_uri_env": DB_URI_ENV, "db_uri": default_db_uri(self.selection)},
        )

    def render_model(self) -> str:
        if not self.selection.database:
            return self.render_stub("models")
        return self.renderer.render_variant(
            "models/model",
            self.selection.ext,
            {"model_name": "Example", "model_var": "example"},
        )

    # -- Project files -----------------------------------------------------

    def render_env(self) -> str:
        pairs = [(PORT_ENV, str(DEFAULT_PORT))]
        if self.selection.database:
            pairs.append((DB_URI_ENV, default_db_uri(self.selection)))
        return "".join(f"{key} = {value}\n" for key, value in pairs)

    def render_gitignore(self) -> str:
        entries = ["node_modules", ".env", "package-lock.json"]
        if self.selection.is_typescript:
            entries.append(BUILD_DIR)
        return "\n".join(entries) + "\n"

    def render_tsconfig(self) -> str:
        return self.renderer.render(
            "tsconfig.json.j2",
            {"source_dir": SOURCE_DIR, "build_dir": BUILD_DIR},
        )

    def render_readme(self) -> str:
        return self.renderer.render("README.md.j2", self._readme_context())

    def _readme_context(self) -> dict[str, Any]:
        sel = self.selection
        features = [f"- Language: {sel.language.value}"]
        if sel.enable_cors:
            features.append("- CORS enabled")
        if sel.database:
            features.append(f"- MongoDB via mongoose (`{DB_URI_ENV}` in the environment)")
        if sel.env_file:
            features.append("- Environment loaded from `.env` with dotenv")
        if sel.nodemon:
            features.append("- Live reload with nodemon")
        if sel.dockerfile:
            features.append("- Dockerfile")

        commands = []
        if sel.is_typescript:
            commands.append("npm run build")
        commands.append("npm start")
        if sel.is_typescript or sel.nodemon:
            commands.append("npm run dev")

        return {
            "title": project_title(sel),
            "language": sel.language.value,
            "features": "\n".join(features),
            "run_commands": "\n".join(commands),
            "port_env": PORT_ENV,
            "port": DEFAULT_PORT,
        }


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def project_title(selection: FeatureSelection) -> str:
    if selection.uses_current_dir:
        return "Express App"
    return selection.project_name


def default_db_uri(selection: FeatureSelection) -> str:
    """Local MongoDB URI whose database name is derived from the project name."""
    name = "myapp"
    if not selection.uses_current_dir:
        name = re.sub(r"[^a-z0-9]+", "_", selection.project_name.lower()).strip("_") or name
    return f"mongodb://localhost:27017/{name}"
