"""Container build file generation.

Renders ``Dockerfile.j2`` for the generated project and builds a matching
``.dockerignore``.  JavaScript projects run the entry file directly;
TypeScript projects compile during the image build and start from the
compiled output.
"""

from __future__ import annotations

import json

from expressgen.config import FeatureSelection

from .models import BUILD_DIR, DEFAULT_PORT, ENTRY_NAME, PORT_ENV, SOURCE_DIR, Artifact
from .templates import TemplateRenderer


class DockerGenerator:
    """Generates the Dockerfile and .dockerignore for a feature selection."""

    BASE_IMAGE = "node:20-alpine"

    def __init__(self, renderer: TemplateRenderer) -> None:
        self.renderer = renderer

    def generate(self, selection: FeatureSelection) -> list[Artifact]:
        """Return the container artifacts, or an empty list when not requested."""
        if not selection.dockerfile:
            return []
        return [
            Artifact("Dockerfile", self.renderer.render("Dockerfile.j2", self._context(selection))),
            Artifact(".dockerignore", "\n".join(dockerignore_entries(selection)) + "\n"),
        ]

    def _context(self, selection: FeatureSelection) -> dict[str, object]:
        if selection.is_typescript:
            install_command = "npm install"
            build_step = "RUN npm run build\n"
        else:
            install_command = "npm install --omit=dev"
            build_step = ""
        return {
            "base_image": self.BASE_IMAGE,
            "install_command": install_command,
            "build_step": build_step,
            "port_env": PORT_ENV,
            "port": DEFAULT_PORT,
            "start_command": json.dumps(start_command(selection)),
        }


def start_command(selection: FeatureSelection) -> list[str]:
    """Container start command: compiled output for TypeScript, raw entry for JavaScript."""
    if selection.is_typescript:
        return ["node", f"{BUILD_DIR}/{ENTRY_NAME}.js"]
    return ["node", f"{SOURCE_DIR}/{ENTRY_NAME}.js"]


def dockerignore_entries(selection: FeatureSelection) -> list[str]:
    entries = ["node_modules", "npm-debug.log", ".env", ".git"]
    if selection.is_typescript:
        entries.append(BUILD_DIR)
    return entries
