"""Shared types and constants for the scaffolder package."""

from __future__ import annotations

from dataclasses import dataclass

SOURCE_DIR = "src"
BUILD_DIR = "dist"
ENTRY_NAME = "app"
DEFAULT_PORT = 3000

# Read by the generated entry file and db helper, written to the .env file.
PORT_ENV = "PORT"
DB_URI_ENV = "DB_URI"

CANONICAL_DIRS: tuple[str, ...] = (
    "src",
    "src/configs",
    "src/middlewares",
    "src/routes",
    "src/controllers",
    "src/models",
)


@dataclass(frozen=True)
class Artifact:
    """One generated file: a POSIX path relative to the project root plus its text."""

    relative_path: str
    content: str
