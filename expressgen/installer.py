"""Package installer invocation.

One blocking call per run, with no timeout, no retry and no cancellation.  A
failure is reported but never undoes the files already written.
"""

from __future__ import annotations

from pathlib import Path

from expressgen.errors import ExternalProcessError
from expressgen.utils import print_error, print_info, print_success, run_command


class NpmInstaller:
    """Runs the configured install command (``npm install`` by default) in a project."""

    def __init__(self, command: list[str] | None = None) -> None:
        self.command = list(command) if command else ["npm", "install"]
        self.last_error: ExternalProcessError | None = None

    def install(self, cwd: str | Path) -> bool:
        """Install the manifest's dependencies in *cwd*; returns ``True`` on success."""
        self.last_error = None
        print_info("Installing dependencies...")
        try:
            returncode = run_command(self.command, cwd=cwd)
        except OSError as exc:
            self.last_error = ExternalProcessError(self.command, None, exc.strerror or str(exc))
        else:
            if returncode != 0:
                self.last_error = ExternalProcessError(self.command, returncode)

        if self.last_error is not None:
            print_error(f"Error installing dependencies: {self.last_error}")
            return False
        print_success("Dependencies installed")
        return True
