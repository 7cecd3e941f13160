"""Persistence of generated artifacts.

Each write is isolated: a failure is reported and recorded, never raised, so
the rest of the scaffold still gets written.  There is no atomic rename; the
last successful write wins.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from expressgen.errors import FileSystemError
from expressgen.utils import print_error, print_success


@dataclass(frozen=True)
class WriteResult:
    path: Path
    error: FileSystemError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class FileWriter:
    """Writes files and keeps a log of every outcome."""

    def __init__(self, verb: str = "Created") -> None:
        self.verb = verb
        self.results: list[WriteResult] = []

    def write(self, path: str | Path, content: str, *, verb: str | None = None) -> WriteResult:
        """Create or overwrite *path* with *content* and report the outcome."""
        target = Path(path)
        label = verb or self.verb
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as exc:
            error = FileSystemError(target, exc.strerror or str(exc))
            print_error(f"Error writing {target}: {exc.strerror or exc}")
            result = WriteResult(target, error)
        else:
            print_success(f"{label} {target}")
            result = WriteResult(target)
        self.results.append(result)
        return result

    @property
    def written(self) -> list[Path]:
        return [r.path for r in self.results if r.ok]

    @property
    def failed(self) -> list[WriteResult]:
        return [r for r in self.results if not r.ok]
