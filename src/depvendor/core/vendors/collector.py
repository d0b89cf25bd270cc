"""Collects repositories resolved during one vendor invocation."""
from __future__ import annotations

import threading

from depvendor.core.fetch.models import RepositoryName
from depvendor.core.vendors.exceptions import VendorError


class RepoEventCollector:
    """Accumulates resolved repositories for a single invocation.

    ``on_repo_resolved`` is handed to the fetch engine and may be called from
    several worker threads. Names are kept in arrival order and are not
    deduplicated. ``drain`` hands the sequence over exactly once; a new
    collector is created for every invocation.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._repos: list[RepositoryName] = []
        self._drained = False

    def on_repo_resolved(self, repo: RepositoryName) -> None:
        with self._lock:
            if self._drained:
                raise VendorError(
                    f"Repository {repo.display_name} reported after collection finished"
                )
            self._repos.append(repo)

    def drain(self) -> tuple[RepositoryName, ...]:
        """Return the collected repositories and close the collector.

        Raises:
            VendorError: If the collector was already drained
        """
        with self._lock:
            if self._drained:
                raise VendorError("Repository collector was already drained")
            self._drained = True
            repos = tuple(self._repos)
            self._repos.clear()
        return repos

    def __len__(self) -> int:
        with self._lock:
            return len(self._repos)


__all__ = ["RepoEventCollector"]
