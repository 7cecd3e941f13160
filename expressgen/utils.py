"""Shared utility functions for expressgen.

Provides Rich-based console reporting, synchronous command execution, the
published-version lookup used by ``--version``, and small string helpers.
"""

from __future__ import annotations

import re
import subprocess
from pathlib import Path

import httpx
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[green]{escape(message)}[/green]", highlight=False)


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]", highlight=False)


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]", highlight=False)


def print_info(message: str) -> None:
    """Print a blue informational message."""
    console.print(f"[blue]{escape(message)}[/blue]", highlight=False)


def print_banner(title: str = "Express CLI") -> None:
    """Print the tool banner shown before the interactive prompts."""
    console.print(Panel(f"[bold]{title}[/bold]", style="blue", expand=False))


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


def run_command(cmd: list[str], cwd: str | Path | None = None) -> int:
    """Run *cmd* to completion with inherited stdio and return its exit code.

    There is no timeout: installers are expected to block until done.

    Raises:
        FileNotFoundError: If the executable cannot be found.
    """
    completed = subprocess.run(cmd, cwd=str(cwd) if cwd else None, check=False)
    return completed.returncode


# ---------------------------------------------------------------------------
# Version lookup
# ---------------------------------------------------------------------------


def fetch_latest_version(url: str, timeout: float = 5.0) -> str | None:
    """Return the latest published version from a PyPI-style JSON endpoint.

    Any network, HTTP, or payload error yields ``None``.
    """
    try:
        response = httpx.get(url, timeout=timeout, follow_redirects=True)
        response.raise_for_status()
        payload = response.json()
    except (httpx.HTTPError, ValueError):
        return None
    if not isinstance(payload, dict):
        return None
    info = payload.get("info")
    if isinstance(info, dict) and info.get("version"):
        return str(info["version"])
    version = payload.get("version")
    return str(version) if version else None


# ---------------------------------------------------------------------------
# String helpers
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    """Convert text to an npm-safe package name (lowercase, hyphenated)."""
    slug = re.sub(r"[^a-z0-9._]+", "-", text.lower().strip())
    return slug.strip("-._")
