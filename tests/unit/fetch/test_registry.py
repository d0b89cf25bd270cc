"""Tests for repositories.yaml loading."""
from __future__ import annotations

from pathlib import Path

import pytest

from helpers.workspace import write_yaml


class TestRepositoryName:
    def test_leading_at_is_optional(self) -> None:
        """'@zlib' and 'zlib' parse to the same name."""
        from depvendor.core.fetch import RepositoryName

        assert RepositoryName.parse("@zlib") == RepositoryName.parse("zlib")

    def test_display_and_marker_names(self) -> None:
        """Names render with '@' for display and as marker file names."""
        from depvendor.core.fetch import RepositoryName

        repo = RepositoryName.parse("com_google_absl")

        assert repo.display_name == "@com_google_absl"
        assert repo.marker_name == "@com_google_absl.marker"
        assert str(repo) == "com_google_absl"

    @pytest.mark.parametrize("raw", ["", "@", "a/b", "..", "-x", "a b"])
    def test_invalid_names(self, raw: str) -> None:
        """Names that are empty or contain path separators are rejected."""
        from depvendor.core.fetch import InvalidRepositoryNameError, RepositoryName

        with pytest.raises(InvalidRepositoryNameError) as exc_info:
            RepositoryName.parse(raw)

        assert exc_info.value.context == {"name": raw}


class TestRepositoryRegistry:
    def test_missing_file_declares_nothing(self, tmp_path: Path) -> None:
        """Without repositories.yaml no repository is declared."""
        from depvendor.core.fetch import RepositoryRegistry

        assert RepositoryRegistry(tmp_path).get_rules() == []

    def test_loads_sorted_rules(self, tmp_path: Path) -> None:
        """Rules are returned sorted by name with paths resolved against the root."""
        from depvendor.core.fetch import RepositoryName, RepositoryRegistry

        write_yaml(
            tmp_path / ".depvendor" / "repositories.yaml",
            """
            repositories:
              - name: zlib
                path: third_party/zlib
                attributes:
                  version: "1.3"
              - name: "@abseil"
                path: /opt/abseil
            """,
        )

        rules = RepositoryRegistry(tmp_path).get_rules()

        assert [r.name.name for r in rules] == ["abseil", "zlib"]
        assert rules[0].path == Path("/opt/abseil")
        assert rules[1].path == tmp_path / "third_party" / "zlib"
        assert rules[1].attributes == {"version": "1.3"}
        assert RepositoryRegistry(tmp_path).get_rule(RepositoryName("nope")) is None

    def test_duplicate_declaration_fails(self, tmp_path: Path) -> None:
        """Declaring the same repository twice is a configuration error."""
        from depvendor.core.fetch import FetchConfigError, RepositoryRegistry

        write_yaml(
            tmp_path / ".depvendor" / "repositories.yaml",
            """
            repositories:
              - {name: a, path: x}
              - {name: "@a", path: y}
            """,
        )

        with pytest.raises(FetchConfigError, match="declared twice"):
            RepositoryRegistry(tmp_path).get_rules()

    @pytest.mark.parametrize(
        "content",
        [
            "repositories: {a: 1}\n",
            "repositories:\n  - just-a-string\n",
            "repositories:\n  - {name: a}\n",
            "repositories:\n  - {name: 'a/b', path: x}\n",
            "repositories:\n  - {name: a, path: x, attributes: [1]}\n",
            "repositories: [\n",
        ],
    )
    def test_invalid_content(self, tmp_path: Path, content: str) -> None:
        """Malformed repository files raise FetchConfigError."""
        from depvendor.core.fetch import FetchConfigError, RepositoryRegistry

        path = tmp_path / ".depvendor" / "repositories.yaml"
        path.parent.mkdir(parents=True)
        path.write_text(content, encoding="utf-8")

        with pytest.raises(FetchConfigError):
            RepositoryRegistry(tmp_path).get_rules()
