"""Read-only vendor status reporting."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from depvendor.core.fetch.exceptions import InvalidRepositoryNameError
from depvendor.core.fetch.models import RepositoryName
from depvendor.core.vendors.exceptions import MarkerReadError
from depvendor.core.vendors.ignore import IgnoreList
from depvendor.core.vendors.markers import MarkerStore

logger = logging.getLogger(__name__)

MARKER_SUFFIX = ".marker"

UP_TO_DATE = "up-to-date"
STALE = "stale"
NOT_VENDORED = "not-vendored"
IGNORED = "ignored"
MISSING_FROM_CACHE = "missing-from-cache"


@dataclass(frozen=True, slots=True)
class RepoStatus:
    """Vendor state of one repository."""

    repo: RepositoryName
    status: str
    detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"repo": self.repo.name, "status": self.status, "detail": self.detail}


def vendored_repos(vendor_dir: Path) -> list[RepositoryName]:
    """List repositories that have a marker in ``vendor_dir``."""
    if not vendor_dir.is_dir():
        return []
    repos: list[RepositoryName] = []
    for entry in vendor_dir.iterdir():
        if not (entry.name.startswith("@") and entry.name.endswith(MARKER_SUFFIX)):
            continue
        try:
            repos.append(RepositoryName.parse(entry.name[: -len(MARKER_SUFFIX)]))
        except InvalidRepositoryNameError:
            logger.warning(f"Ignoring unexpected marker file {entry}")
    return repos


def collect_status(
    external_dir: Path,
    vendor_dir: Path,
    declared: list[RepositoryName],
) -> list[RepoStatus]:
    """Report the state of declared and already vendored repositories.

    Never writes to disk: a missing ``.vendorignore`` is treated as empty
    and is not created.

    Args:
        external_dir: External cache directory
        vendor_dir: Vendor directory
        declared: Repositories known to the fetch engine

    Returns:
        One RepoStatus per repository, sorted by name
    """
    ignore_list = IgnoreList.load(vendor_dir, create=False) if vendor_dir.is_dir() else IgnoreList()
    markers = MarkerStore(external_dir, vendor_dir)

    report: list[RepoStatus] = []
    for repo in sorted(set(declared) | set(vendored_repos(vendor_dir))):
        if ignore_list.is_ignored(repo):
            report.append(RepoStatus(repo, IGNORED))
        elif not markers.cache_marker_path(repo).is_file():
            report.append(RepoStatus(repo, MISSING_FROM_CACHE))
        elif not markers.is_vendored(repo):
            report.append(RepoStatus(repo, NOT_VENDORED))
        else:
            try:
                current = markers.is_up_to_date(repo)
            except MarkerReadError as e:
                report.append(RepoStatus(repo, STALE, detail=str(e)))
                continue
            report.append(RepoStatus(repo, UP_TO_DATE if current else STALE))
    return report


__all__ = [
    "RepoStatus",
    "collect_status",
    "vendored_repos",
    "UP_TO_DATE",
    "STALE",
    "NOT_VENDORED",
    "IGNORED",
    "MISSING_FROM_CACHE",
]
