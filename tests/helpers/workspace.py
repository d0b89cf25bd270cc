"""Project scaffolding shared by the test suite."""
from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any

import yaml

from depvendor.core.config import VendorOptions
from depvendor.core.fetch import RepositoryName


def write_yaml(path: Path, content: str) -> None:
    """Helper to write YAML content to a file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")


class Workspace:
    """A throwaway project with declared repositories under ``sources/``."""

    def __init__(self, root: Path) -> None:
        self.root = root
        self.external_dir = root / ".depvendor" / "external"
        self.vendor_dir = root / "vendor"
        self._repos: list[dict[str, Any]] = []

    def add_repo(
        self,
        name: str,
        files: dict[str, str] | None = None,
        *,
        attributes: dict[str, Any] | None = None,
    ) -> Path:
        """Declare a repository and create its source tree."""
        source = self.root / "sources" / name
        source.mkdir(parents=True, exist_ok=True)
        for rel, content in (files or {"BUILD": f"# {name}\n"}).items():
            path = source / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")

        entry: dict[str, Any] = {"name": name, "path": f"sources/{name}"}
        if attributes:
            entry["attributes"] = attributes
        self._repos = [r for r in self._repos if r["name"] != name] + [entry]
        self._write_registry()
        return source

    def _write_registry(self) -> None:
        path = self.root / ".depvendor" / "repositories.yaml"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump({"repositories": self._repos}), encoding="utf-8")

    def options(self, **overrides: Any) -> VendorOptions:
        values: dict[str, Any] = {
            "repo_root": self.root,
            "vendor_dir": self.vendor_dir,
            "external_dir": self.external_dir,
            "threads": 2,
        }
        values.update(overrides)
        return VendorOptions(**values)

    def populate_cache(self, name: str, files: dict[str, str], marker: bytes) -> None:
        """Place a repository directly into the external cache."""
        repo_dir = self.external_dir / name
        repo_dir.mkdir(parents=True, exist_ok=True)
        for rel, content in files.items():
            path = repo_dir / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        (self.external_dir / RepositoryName(name).marker_name).write_bytes(marker)


__all__ = ["Workspace", "write_yaml"]
