"""Shared pytest fixtures for the expressgen test suite.

Provides reusable fixtures for:
- Feature selections (a factory plus the two reference scenarios)
- Run configuration that never spawns the real installer
- A mocked installer
- Temporary project directories
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest

from expressgen.config import Config, FeatureSelection
from expressgen.installer import NpmInstaller


# ---------------------------------------------------------------------------
# Feature selections
# ---------------------------------------------------------------------------

_ALL_OFF: dict[str, Any] = {
    "project_name": ".",
    "language": "JavaScript",
    "env_file": False,
    "enable_cors": False,
    "database": False,
    "gitignore": False,
    "nodemon": False,
    "dockerfile": False,
    "ts_config": False,
}


@pytest.fixture
def make_selection() -> Callable[..., FeatureSelection]:
    """Factory: every flag off, JavaScript, overridable by keyword."""

    def _make(**overrides: Any) -> FeatureSelection:
        return FeatureSelection.from_answers({**_ALL_OFF, **overrides})

    return _make


@pytest.fixture
def scenario_a() -> FeatureSelection:
    """JavaScript with CORS, .env and .gitignore; no database, nodemon or Docker."""
    return FeatureSelection.from_answers({
        "language": "JavaScript",
        "database": False,
        "enable_cors": True,
        "env_file": True,
        "gitignore": True,
        "nodemon": False,
        "dockerfile": False,
    })


@pytest.fixture
def scenario_b() -> FeatureSelection:
    """TypeScript with a database and a Dockerfile; other flags at their defaults."""
    return FeatureSelection.from_answers({
        "language": "TypeScript",
        "database": True,
        "dockerfile": True,
    })


# ---------------------------------------------------------------------------
# Run configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def tmp_project_dir(tmp_path: Path) -> Path:
    """Empty project directory (auto-cleanup)."""
    project_dir = tmp_path / "test-project"
    project_dir.mkdir()
    yield project_dir


@pytest.fixture
def offline_config(tmp_project_dir: Path) -> Config:
    """Config writing into ``tmp_project_dir`` with the installer disabled."""
    return Config(output_dir=tmp_project_dir, install=False)


@pytest.fixture
def mock_installer() -> MagicMock:
    """An NpmInstaller whose ``install`` succeeds without running anything."""
    installer = MagicMock(spec=NpmInstaller)
    installer.install.return_value = True
    return installer


@pytest.fixture
def existing_manifest() -> dict[str, Any]:
    """A hand-written package.json with keys the scaffolder does not manage."""
    return {
        "name": "legacy-service",
        "version": "2.3.4",
        "description": "Keeps running in production",
        "main": "index.js",
        "author": "ops@example.com",
        "scripts": {"test": "jest", "lint": "eslint ."},
        "dependencies": {"lodash": "^4.17.21"},
        "devDependencies": {"jest": "^29.7.0"},
        "engines": {"node": ">=18"},
    }
