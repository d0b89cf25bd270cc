"""Repository rule loading.

Loads the external repositories reachable from the project from
.depvendor/repositories.yaml.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from depvendor.core.fetch.exceptions import FetchConfigError, InvalidRepositoryNameError
from depvendor.core.fetch.models import RepositoryName, RepositoryRule


class RepositoryRegistry:
    """Load and look up declared repository rules.

    Rules are read from .depvendor/repositories.yaml in the project:

        repositories:
          - name: zlib
            path: third_party/zlib
            attributes:
              version: "1.3"
    """

    def __init__(self, repo_root: Path) -> None:
        """Initialize registry.

        Args:
            repo_root: Path to repository root
        """
        self.repo_root = repo_root
        self._rules: dict[RepositoryName, RepositoryRule] | None = None

    @property
    def config_path(self) -> Path:
        """Path to repositories.yaml."""
        return self.repo_root / ".depvendor" / "repositories.yaml"

    def _load(self) -> dict[RepositoryName, RepositoryRule]:
        if self._rules is not None:
            return self._rules

        if not self.config_path.exists():
            self._rules = {}
            return self._rules

        try:
            data = yaml.safe_load(self.config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise FetchConfigError(f"Invalid YAML in {self.config_path}: {e}") from e

        items = (data.get("repositories") or []) if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise FetchConfigError(f"'repositories' in {self.config_path} must be a list")

        rules: dict[RepositoryName, RepositoryRule] = {}
        for item in items:
            rule = self._parse_rule(item)
            if rule.name in rules:
                raise FetchConfigError(f"Repository declared twice: {rule.name.display_name}")
            rules[rule.name] = rule

        self._rules = rules
        return rules

    def _parse_rule(self, item: Any) -> RepositoryRule:
        if not isinstance(item, dict):
            raise FetchConfigError("Repository entries must be mappings")

        missing = [f for f in ("name", "path") if not item.get(f)]
        if missing:
            raise FetchConfigError(
                f"Repository entry missing required fields: {', '.join(missing)}"
            )

        try:
            name = RepositoryName.parse(str(item["name"]))
        except InvalidRepositoryNameError as e:
            raise FetchConfigError(str(e), context=e.context) from e

        attributes = item.get("attributes") or {}
        if not isinstance(attributes, dict):
            raise FetchConfigError(
                f"Repository {name.display_name} has invalid attributes (must be a mapping)."
            )

        path = Path(str(item["path"])).expanduser()
        if not path.is_absolute():
            path = self.repo_root / path

        return RepositoryRule(name=name, path=path, attributes=attributes)

    def get_rules(self) -> list[RepositoryRule]:
        """Get all declared rules, sorted by name."""
        return [self._load()[name] for name in sorted(self._load())]

    def get_rule(self, name: RepositoryName) -> RepositoryRule | None:
        """Get a rule by repository name.

        Args:
            name: Repository to find

        Returns:
            RepositoryRule if declared, None otherwise
        """
        return self._load().get(name)


__all__ = ["RepositoryRegistry"]
