"""Tests for the .vendorignore list."""
from __future__ import annotations

from pathlib import Path

import pytest


class TestIgnoreListLoad:
    def test_missing_file_is_created_empty(self, tmp_path: Path) -> None:
        """A missing ignore file is created empty on first load."""
        from depvendor.core.vendors import VENDOR_IGNORE, IgnoreList

        ignore_list = IgnoreList.load(tmp_path)

        assert ignore_list.names == frozenset()
        assert (tmp_path / VENDOR_IGNORE).is_file()
        assert (tmp_path / VENDOR_IGNORE).read_bytes() == b""

    def test_missing_file_not_created_when_disabled(self, tmp_path: Path) -> None:
        """create=False loads an empty list without touching the directory."""
        from depvendor.core.vendors import VENDOR_IGNORE, IgnoreList

        ignore_list = IgnoreList.load(tmp_path, create=False)

        assert ignore_list.names == frozenset()
        assert not (tmp_path / VENDOR_IGNORE).exists()

    def test_existing_file_is_not_rewritten(self, tmp_path: Path) -> None:
        """Loading an existing ignore file leaves its content alone."""
        from depvendor.core.vendors import VENDOR_IGNORE, IgnoreList

        path = tmp_path / VENDOR_IGNORE
        path.write_text("B\n", encoding="utf-8")

        IgnoreList.load(tmp_path)

        assert path.read_text(encoding="utf-8") == "B\n"

    def test_lines_are_exact_names(self, tmp_path: Path) -> None:
        """Each line is compared verbatim against repository names."""
        from depvendor.core.fetch import RepositoryName
        from depvendor.core.vendors import VENDOR_IGNORE, IgnoreList

        (tmp_path / VENDOR_IGNORE).write_text("B\n  C\n@D\n\n", encoding="utf-8")

        ignore_list = IgnoreList.load(tmp_path)

        assert ignore_list.is_ignored(RepositoryName("B"))
        # No trimming and no '@' stripping.
        assert not ignore_list.is_ignored(RepositoryName("C"))
        assert not ignore_list.is_ignored(RepositoryName("D"))

    def test_undecodable_file_raises_ignore_list_error(self, tmp_path: Path) -> None:
        """A file that is not UTF-8 raises IgnoreListError naming the path."""
        from depvendor.core.vendors import VENDOR_IGNORE, IgnoreList, IgnoreListError

        path = tmp_path / VENDOR_IGNORE
        path.write_bytes(b"\xff\xfeB\n")

        with pytest.raises(IgnoreListError) as exc_info:
            IgnoreList.load(tmp_path)

        assert exc_info.value.error_code == "vendor_dir_error"
        assert exc_info.value.context["path"] == str(path)
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


class TestIgnoreListFilter:
    def test_filter_keeps_order_and_duplicates(self) -> None:
        """Filtering drops ignored names and keeps everything else as given."""
        from depvendor.core.fetch import RepositoryName
        from depvendor.core.vendors import IgnoreList

        a, b, c = RepositoryName("A"), RepositoryName("B"), RepositoryName("C")
        ignore_list = IgnoreList(["B"])

        assert ignore_list.filter([c, b, a, c]) == [c, a, c]
