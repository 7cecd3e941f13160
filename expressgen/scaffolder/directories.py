"""Creation of the canonical source folder skeleton."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from expressgen.errors import FileSystemError
from expressgen.utils import print_error

from .models import CANONICAL_DIRS


class DirectoryBuilder:
    """Creates the project folders, ancestors included.

    Creating a folder that already exists is a no-op.  A failing folder is
    reported and skipped; the others are still attempted.
    """

    def __init__(self, directories: Iterable[str] = CANONICAL_DIRS) -> None:
        self.directories = tuple(directories)
        self.errors: list[FileSystemError] = []

    def build(self, project_dir: str | Path) -> dict[str, bool]:
        """Create every folder under *project_dir*; returns ``{folder: created_ok}``."""
        root = Path(project_dir)
        status: dict[str, bool] = {}
        for rel in self.directories:
            target = root / rel
            try:
                target.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                error = FileSystemError(target, exc.strerror or str(exc))
                self.errors.append(error)
                print_error(f"Error creating {target}: {exc.strerror or exc}")
                status[rel] = False
            else:
                status[rel] = True
        return status
