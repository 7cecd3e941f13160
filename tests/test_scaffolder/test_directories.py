"""Tests for DirectoryBuilder: canonical set, idempotence, isolated failures."""

from __future__ import annotations

from pathlib import Path

import pytest

from expressgen.scaffolder.directories import DirectoryBuilder
from expressgen.scaffolder.models import CANONICAL_DIRS

pytestmark = pytest.mark.unit


def _dirs_under(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_dir()}


class TestDirectoryBuilder:
    def test_creates_exactly_canonical_set(self, tmp_path: Path):
        status = DirectoryBuilder().build(tmp_path)
        assert set(status) == set(CANONICAL_DIRS)
        assert all(status.values())
        assert _dirs_under(tmp_path) == set(CANONICAL_DIRS)

    def test_creates_missing_ancestors(self, tmp_path: Path):
        root = tmp_path / "deep" / "project"
        DirectoryBuilder().build(root)
        assert (root / "src" / "models").is_dir()

    def test_idempotent(self, tmp_path: Path):
        builder = DirectoryBuilder()
        builder.build(tmp_path)
        (tmp_path / "src" / "routes" / "keep.js").write_text("// mine", encoding="utf-8")
        status = builder.build(tmp_path)
        assert all(status.values())
        assert builder.errors == []
        assert _dirs_under(tmp_path) == set(CANONICAL_DIRS)
        assert (tmp_path / "src" / "routes" / "keep.js").read_text(encoding="utf-8") == "// mine"

    def test_one_failure_does_not_stop_others(self, tmp_path: Path):
        (tmp_path / "src").mkdir()
        (tmp_path / "src" / "routes").write_text("not a folder", encoding="utf-8")
        builder = DirectoryBuilder()
        status = builder.build(tmp_path)
        assert status["src/routes"] is False
        assert all(ok for rel, ok in status.items() if rel != "src/routes")
        assert len(builder.errors) == 1
        assert builder.errors[0].path == tmp_path / "src" / "routes"

    def test_custom_directory_list(self, tmp_path: Path):
        status = DirectoryBuilder(["lib", "lib/util"]).build(tmp_path)
        assert status == {"lib": True, "lib/util": True}
