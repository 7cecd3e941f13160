"""Tests for container build file generation.

Covers:
- No artifacts when the Dockerfile is not requested
- JavaScript image runs the entry file directly
- TypeScript image builds and runs the compiled output
- Exposed port and .dockerignore content
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from expressgen.scaffolder.docker_gen import DockerGenerator, dockerignore_entries, start_command
from expressgen.scaffolder.templates import TemplateRenderer

pytestmark = pytest.mark.unit


@pytest.fixture
def docker_gen() -> DockerGenerator:
    return DockerGenerator(TemplateRenderer())


def _files(docker_gen, selection) -> dict[str, str]:
    return {a.relative_path: a.content for a in docker_gen.generate(selection)}


class TestDockerGeneratorInit:
    def test_creates_with_renderer(self):
        renderer = MagicMock(spec=TemplateRenderer)
        assert DockerGenerator(renderer).renderer is renderer


class TestGenerate:
    def test_nothing_without_flag(self, docker_gen, make_selection):
        assert docker_gen.generate(make_selection(dockerfile=False)) == []

    def test_two_files(self, docker_gen, make_selection):
        assert set(_files(docker_gen, make_selection(dockerfile=True))) == {"Dockerfile", ".dockerignore"}

    def test_javascript_dockerfile(self, docker_gen, make_selection):
        dockerfile = _files(docker_gen, make_selection(dockerfile=True))["Dockerfile"]
        assert dockerfile.startswith("FROM node:20-alpine")
        assert "COPY package*.json ./" in dockerfile
        assert "RUN npm install --omit=dev" in dockerfile
        assert "COPY . ." in dockerfile
        assert "EXPOSE 3000" in dockerfile
        assert 'CMD ["node", "src/app.js"]' in dockerfile
        assert "npm run build" not in dockerfile

    def test_typescript_dockerfile(self, docker_gen, make_selection):
        dockerfile = _files(docker_gen, make_selection(language="TypeScript", dockerfile=True))["Dockerfile"]
        assert "RUN npm install\n" in dockerfile
        assert "RUN npm run build" in dockerfile
        assert dockerfile.index("COPY . .") < dockerfile.index("RUN npm run build")
        assert 'CMD ["node", "dist/app.js"]' in dockerfile

    def test_dependencies_installed_before_source_copy(self, docker_gen, make_selection):
        dockerfile = _files(docker_gen, make_selection(dockerfile=True))["Dockerfile"]
        assert dockerfile.index("RUN npm install") < dockerfile.index("COPY . .")


class TestHelpers:
    def test_start_command(self, make_selection):
        assert start_command(make_selection()) == ["node", "src/app.js"]
        assert start_command(make_selection(language="TypeScript")) == ["node", "dist/app.js"]

    def test_dockerignore_entries(self, make_selection):
        assert "node_modules" in dockerignore_entries(make_selection())
        assert ".env" in dockerignore_entries(make_selection())
        assert "dist" not in dockerignore_entries(make_selection())
        assert "dist" in dockerignore_entries(make_selection(language="TypeScript"))
