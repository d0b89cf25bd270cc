"""Tests for marker fingerprints."""
from __future__ import annotations

import os
from pathlib import Path

import pytest


def _rule(path: Path, name: str = "A", **attributes):
    from depvendor.core.fetch import RepositoryName, RepositoryRule

    return RepositoryRule(name=RepositoryName(name), path=path, attributes=attributes)


class TestComputeMarker:
    def test_same_inputs_same_marker(self, tmp_path: Path) -> None:
        """Unchanged inputs produce the same marker."""
        from depvendor.core.fetch import compute_marker

        (tmp_path / "f.txt").write_text("x", encoding="utf-8")

        assert compute_marker(_rule(tmp_path)) == compute_marker(_rule(tmp_path))

    def test_content_change_changes_marker(self, tmp_path: Path) -> None:
        """Editing a source file changes the marker."""
        from depvendor.core.fetch import compute_marker

        (tmp_path / "f.txt").write_text("x", encoding="utf-8")
        before = compute_marker(_rule(tmp_path))
        (tmp_path / "f.txt").write_text("y", encoding="utf-8")

        assert compute_marker(_rule(tmp_path)) != before

    def test_attributes_are_recorded(self, tmp_path: Path) -> None:
        """The marker lists the name and each attribute on its own line."""
        from depvendor.core.fetch import compute_marker

        marker = compute_marker(_rule(tmp_path, version="1.3")).decode("utf-8")

        lines = marker.splitlines()
        assert lines[1] == "NAME A"
        assert lines[2] == 'ATTR version "1.3"'
        assert marker != compute_marker(_rule(tmp_path, version="1.4")).decode("utf-8")

    def test_symlink_target_is_hashed_not_followed(self, tmp_path: Path) -> None:
        """Symlinks contribute their target string, not the linked content."""
        from depvendor.core.fetch import compute_marker

        src = tmp_path / "src"
        src.mkdir()
        target = tmp_path / "target.txt"
        target.write_text("one", encoding="utf-8")
        os.symlink(target, src / "link")
        before = compute_marker(_rule(src))

        target.write_text("two", encoding="utf-8")

        assert compute_marker(_rule(src)) == before

    def test_missing_source_raises(self, tmp_path: Path) -> None:
        """Fingerprinting a missing source raises FileNotFoundError."""
        from depvendor.core.fetch import compute_marker

        with pytest.raises(FileNotFoundError):
            compute_marker(_rule(tmp_path / "missing"))
