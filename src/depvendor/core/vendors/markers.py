"""Marker file comparison.

A repository's marker under the vendor directory is copied from the external
cache only after its tree was copied completely, so a matching marker means the
vendored copy is complete and current.
"""
from __future__ import annotations

from pathlib import Path

from depvendor.core.fetch.models import RepositoryName
from depvendor.core.vendors.exceptions import CacheMarkerError, MarkerReadError


class MarkerStore:
    """Reads and compares per-repository markers in the cache and vendor directory."""

    def __init__(self, external_dir: Path, vendor_dir: Path) -> None:
        """Initialize marker store.

        Args:
            external_dir: External cache directory
            vendor_dir: Vendor directory
        """
        self.external_dir = external_dir
        self.vendor_dir = vendor_dir

    def cache_marker_path(self, repo: RepositoryName) -> Path:
        return self.external_dir / repo.marker_name

    def vendor_marker_path(self, repo: RepositoryName) -> Path:
        return self.vendor_dir / repo.marker_name

    def is_vendored(self, repo: RepositoryName) -> bool:
        """Whether the repository has ever been vendored successfully."""
        return self.vendor_marker_path(repo).is_file()

    def is_up_to_date(self, repo: RepositoryName) -> bool:
        """Return whether the vendored copy matches the external cache.

        Args:
            repo: Repository to check

        Returns:
            False if the repository was never vendored, otherwise whether both
            markers are byte-identical

        Raises:
            MarkerReadError: If the vendor marker exists but cannot be read
            CacheMarkerError: If the cache marker cannot be read
        """
        vendor_marker = self.vendor_marker_path(repo)
        if not vendor_marker.exists():
            return False

        try:
            vendor_content = vendor_marker.read_bytes()
        except OSError as e:
            raise MarkerReadError(
                f"Cannot read vendor marker for {repo.display_name}: {e}",
                context={"repo": repo.name, "path": str(vendor_marker)},
            ) from e

        cache_marker = self.cache_marker_path(repo)
        try:
            cache_content = cache_marker.read_bytes()
        except OSError as e:
            raise CacheMarkerError(
                f"External cache marker for {repo.display_name} is unreadable: {e}",
                context={"repo": repo.name, "path": str(cache_marker)},
            ) from e

        return vendor_content == cache_content


__all__ = ["MarkerStore"]
