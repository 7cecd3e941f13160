"""Exception taxonomy for expressgen.

Only :class:`ValidationError` aborts a run.  The others describe failures the
owning component recovers from: the writer, the manifest loader, and the
installer record them, report them on the console, and let the pipeline
continue.
"""

from __future__ import annotations

from pathlib import Path


class ScaffoldError(Exception):
    """Base class for every error raised by expressgen."""


class ValidationError(ScaffoldError, ValueError):
    """The collected feature selection is not usable."""


class FileSystemError(ScaffoldError):
    """A directory or file could not be created, read, or written."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"{self.path}: {message}")


class ManifestParseError(ScaffoldError):
    """An existing ``package.json`` is not a JSON object."""

    def __init__(self, path: str | Path, message: str) -> None:
        self.path = Path(path)
        super().__init__(f"Error reading {self.path}: {message}")


class ExternalProcessError(ScaffoldError):
    """An external command (e.g. ``npm install``) failed or could not start."""

    def __init__(self, command: list[str], returncode: int | None, message: str = "") -> None:
        self.command = command
        self.returncode = returncode
        detail = f" (exit code {returncode})" if returncode is not None else ""
        text = f"Command failed{detail}: {' '.join(command)}"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)
