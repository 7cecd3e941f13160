"""Loading and merging ``package.json``.

The merger owns a fixed set of *managed* keys (the ``start``/``dev``/``build``
scripts and the packages listed in :data:`MANAGED_DEPENDENCIES` and
:data:`MANAGED_DEV_DEPENDENCIES`).  Everything else in an existing manifest,
top-level or nested, is carried through untouched.

Overlays run in the order of :attr:`ManifestMerger.OVERLAYS`.  The two
``dev`` overlays compete for the same key; the watcher overlay runs last, so
when nodemon is enabled it always wins.  For TypeScript the watcher wraps the
TypeScript runner instead of replacing it, so ``npm run dev`` keeps working
on ``.ts`` sources.

``dependencies`` and ``devDependencies`` are written sorted by package name,
the order ``npm install`` itself produces.  A hand-ordered manifest therefore
shows a one-time reorder on the first run; no entry or version is changed.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from expressgen.config import FeatureSelection
from expressgen.errors import ManifestParseError
from expressgen.utils import slugify

from .models import BUILD_DIR, ENTRY_NAME, SOURCE_DIR

MANIFEST_NAME = "package.json"
DEFAULT_NAME = "my-express-app"
DEFAULT_VERSION = "1.0.0"

MANAGED_DEPENDENCIES: dict[str, str] = {
    "express": "^4.19.2",
    "cors": "^2.8.5",
    "mongoose": "^8.5.1",
    "dotenv": "^16.4.5",
}

MANAGED_DEV_DEPENDENCIES: dict[str, str] = {
    "typescript": "^5.5.4",
    "ts-node": "^10.9.2",
    "@types/node": "^20.14.10",
    "@types/express": "^4.17.21",
    "@types/cors": "^2.8.17",
    "nodemon": "^3.1.4",
}

MANAGED_SCRIPTS: tuple[str, ...] = ("start", "dev", "build")


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------


class LoadStatus(str, Enum):
    LOADED = "loaded"
    ABSENT = "absent"
    MALFORMED = "malformed"


@dataclass
class ManifestLoadResult:
    """Outcome of reading a manifest from disk.

    ``data`` is only set for ``LOADED``; ``error`` only for ``MALFORMED``.
    """

    status: LoadStatus
    path: Path
    data: dict[str, Any] | None = None
    error: ManifestParseError | None = None


def load_manifest(path: str | Path) -> ManifestLoadResult:
    """Read *path* without raising for the absent or malformed cases.

    Raises:
        OSError: If the file exists but cannot be read.
    """
    manifest_path = Path(path)
    if not manifest_path.is_file():
        return ManifestLoadResult(LoadStatus.ABSENT, manifest_path)

    try:
        data = json.loads(manifest_path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return ManifestLoadResult(
            LoadStatus.MALFORMED, manifest_path, error=ManifestParseError(manifest_path, str(exc))
        )
    if not isinstance(data, dict):
        return ManifestLoadResult(
            LoadStatus.MALFORMED,
            manifest_path,
            error=ManifestParseError(manifest_path, "top-level value is not an object"),
        )
    return ManifestLoadResult(LoadStatus.LOADED, manifest_path, data=data)


def default_manifest(project_dir: str | Path, selection: FeatureSelection) -> dict[str, Any]:
    """Fresh manifest named after the project directory."""
    name = slugify(Path(project_dir).name) or DEFAULT_NAME
    return {
        "name": name,
        "version": DEFAULT_VERSION,
        "main": f"{SOURCE_DIR}/{ENTRY_NAME}.{selection.ext}",
        "scripts": {},
        "dependencies": {},
        "devDependencies": {},
    }


def dump_manifest(manifest: dict[str, Any]) -> str:
    """Serialize with 2-space indentation and a trailing newline."""
    return json.dumps(manifest, indent=2, ensure_ascii=False) + "\n"


# ---------------------------------------------------------------------------
# Merging
# ---------------------------------------------------------------------------


class ManifestMerger:
    """Overlays the scripts and dependencies a selection needs onto a manifest."""

    OVERLAYS: tuple[str, ...] = (
        "apply_start_script",
        "apply_typescript_dev_script",
        "apply_watcher_dev_script",
        "apply_build_script",
        "apply_dependencies",
        "apply_dev_dependencies",
    )

    def __init__(self, selection: FeatureSelection) -> None:
        self.selection = selection

    def merge(self, manifest: dict[str, Any]) -> dict[str, Any]:
        """Return a merged copy of *manifest*; the input is not modified."""
        merged = json.loads(json.dumps(manifest))
        for section in ("scripts", "dependencies", "devDependencies"):
            if not isinstance(merged.get(section), dict):
                merged[section] = {}
        for overlay in self.OVERLAYS:
            getattr(self, overlay)(merged)
        merged["dependencies"] = _sorted(merged["dependencies"])
        merged["devDependencies"] = _sorted(merged["devDependencies"])
        return merged

    # -- Scripts -----------------------------------------------------------

    def apply_start_script(self, manifest: dict[str, Any]) -> None:
        if self.selection.is_typescript:
            manifest["scripts"]["start"] = f"node {BUILD_DIR}/{ENTRY_NAME}.js"
        else:
            manifest["scripts"]["start"] = f"node {self._entry()}"

    def apply_typescript_dev_script(self, manifest: dict[str, Any]) -> None:
        if self.selection.is_typescript:
            manifest["scripts"]["dev"] = f"ts-node {self._entry()}"

    def apply_watcher_dev_script(self, manifest: dict[str, Any]) -> None:
        if not self.selection.nodemon:
            return
        if self.selection.is_typescript:
            manifest["scripts"]["dev"] = (
                f"nodemon --watch {SOURCE_DIR} --ext ts --exec ts-node {self._entry()}"
            )
        else:
            manifest["scripts"]["dev"] = f"nodemon {self._entry()}"

    def apply_build_script(self, manifest: dict[str, Any]) -> None:
        if not self.selection.is_typescript:
            return
        if self.selection.ts_config:
            manifest["scripts"]["build"] = "tsc"
        else:
            manifest["scripts"]["build"] = f"tsc {self._entry()} --outDir {BUILD_DIR} --esModuleInterop"

    # -- Dependencies ------------------------------------------------------

    def apply_dependencies(self, manifest: dict[str, Any]) -> None:
        deps = manifest["dependencies"]
        for name in self.required_dependencies():
            deps[name] = MANAGED_DEPENDENCIES[name]

    def apply_dev_dependencies(self, manifest: dict[str, Any]) -> None:
        dev_deps = manifest["devDependencies"]
        for name in self.required_dev_dependencies():
            dev_deps[name] = MANAGED_DEV_DEPENDENCIES[name]

    def required_dependencies(self) -> list[str]:
        sel = self.selection
        names = ["express"]
        if sel.enable_cors:
            names.append("cors")
        if sel.database:
            names.append("mongoose")
        if sel.env_file:
            names.append("dotenv")
        return names

    def required_dev_dependencies(self) -> list[str]:
        sel = self.selection
        names: list[str] = []
        if sel.is_typescript:
            names.extend(["typescript", "ts-node", "@types/node", "@types/express"])
            if sel.enable_cors:
                names.append("@types/cors")
        if sel.nodemon:
            names.append("nodemon")
        return names

    def _entry(self) -> str:
        return f"{SOURCE_DIR}/{ENTRY_NAME}.{self.selection.ext}"


def managed_subset(manifest: dict[str, Any]) -> dict[str, Any]:
    """Extract the keys the merger is responsible for (used to check idempotence)."""
    scripts = manifest.get("scripts") or {}
    deps = manifest.get("dependencies") or {}
    dev_deps = manifest.get("devDependencies") or {}
    return {
        "scripts": {k: scripts[k] for k in MANAGED_SCRIPTS if k in scripts},
        "dependencies": {k: deps[k] for k in MANAGED_DEPENDENCIES if k in deps},
        "devDependencies": {k: dev_deps[k] for k in MANAGED_DEV_DEPENDENCIES if k in dev_deps},
    }


def _sorted(mapping: dict[str, Any]) -> dict[str, Any]:
    return {key: mapping[key] for key in sorted(mapping)}
