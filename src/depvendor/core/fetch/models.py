"""Fetch data models.

Provides immutable dataclasses exchanged between the fetch engine and its
callers.
"""
from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from depvendor.core.fetch.exceptions import InvalidRepositoryNameError

_NAME_RE = re.compile(r"[A-Za-z0-9][A-Za-z0-9._+~-]*")


@dataclass(frozen=True, slots=True, order=True)
class RepositoryName:
    """Identifies one external repository within an invocation.

    Attributes:
        name: Plain repository name (no leading '@')
    """

    name: str

    @classmethod
    def parse(cls, text: str) -> RepositoryName:
        """Parse a user-supplied repository name.

        A single leading '@' is accepted and dropped, so ``@foo`` and ``foo``
        name the same repository.

        Args:
            text: Raw repository name

        Returns:
            RepositoryName instance

        Raises:
            InvalidRepositoryNameError: If the name has invalid characters
        """
        raw = text.strip()
        name = raw[1:] if raw.startswith("@") else raw
        if not _NAME_RE.fullmatch(name):
            raise InvalidRepositoryNameError(
                f"'{text}' is not a valid repository name",
                context={"name": text},
            )
        return cls(name)

    @property
    def display_name(self) -> str:
        """Name in '@name' form, as shown to users."""
        return f"@{self.name}"

    @property
    def marker_name(self) -> str:
        """File name of the repository's marker (``@<name>.marker``)."""
        return f"@{self.name}.marker"

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class RepositoryRule:
    """A declared external repository.

    Attributes:
        name: Repository name
        path: Absolute path of the local source tree
        attributes: Free-form attributes that feed the marker fingerprint
    """

    name: RepositoryName
    path: Path
    attributes: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class RepositoryDirectory:
    """Outcome of resolving one requested repository.

    Attributes:
        repo: Requested repository
        path: Directory under the external cache (None if not found)
        exists: Whether the repository resolved to an existing directory
        error_msg: Why the repository does not exist
    """

    repo: RepositoryName
    path: Path | None = None
    exists: bool = True
    error_msg: str | None = None


@dataclass(frozen=True, slots=True)
class EvaluationContext:
    """Per-evaluation settings handed to the fetch engine.

    Attributes:
        parallelism: Maximum number of repositories fetched concurrently
        on_repo_resolved: Called once per fetched or cache-hit repository,
            possibly from worker threads
    """

    parallelism: int = 1
    on_repo_resolved: Callable[[RepositoryName], None] | None = None

    def notify_resolved(self, repo: RepositoryName) -> None:
        if self.on_repo_resolved is not None:
            self.on_repo_resolved(repo)


@dataclass(frozen=True, slots=True)
class EvaluationResult:
    """Result of a batch evaluation.

    Attributes:
        values: Cache directory per successfully fetched repository
        errors: Exception per failed repository
    """

    values: dict[RepositoryName, Path] = field(default_factory=dict)
    errors: dict[RepositoryName, Exception] = field(default_factory=dict)

    def has_error(self) -> bool:
        return bool(self.errors)

    def first_error(self) -> Exception | None:
        """Return the error of the first failed repository in name order."""
        if not self.errors:
            return None
        return self.errors[min(self.errors)]


__all__ = [
    "RepositoryName",
    "RepositoryRule",
    "RepositoryDirectory",
    "EvaluationContext",
    "EvaluationResult",
]
