"""Directory synchronization.

Copies one repository's tree and marker from the external cache into the
vendor directory. The marker is copied last and acts as the commit record of
the copy: a crash before it lands leaves the repository classified as stale.
"""
from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

from depvendor.core.fetch.models import RepositoryName
from depvendor.core.vendors.exceptions import VendorSyncError
from depvendor.core.vendors.models import SyncResult, SyncStatus

logger = logging.getLogger(__name__)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def copy_tree_below(src: Path, dst: Path) -> None:
    """Copy everything below ``src`` into the existing directory ``dst``.

    Symlinks are recreated as links with the same target and are never
    followed. Destination entries whose kind differs from the source entry are
    replaced. Entries that exist only in ``dst`` are left alone.

    Raises:
        OSError: On the first entry that cannot be copied
    """
    with os.scandir(src) as it:
        entries = list(it)

    for entry in entries:
        source = Path(entry.path)
        target = dst / entry.name

        if entry.is_symlink():
            if target.exists() or target.is_symlink():
                _remove(target)
            os.symlink(os.readlink(source), target)
        elif entry.is_dir(follow_symlinks=False):
            if target.is_symlink() or (target.exists() and not target.is_dir()):
                _remove(target)
            target.mkdir(exist_ok=True)
            copy_tree_below(source, target)
        else:
            if target.is_symlink() or target.is_dir():
                _remove(target)
            shutil.copy2(source, target, follow_symlinks=False)


class DirectorySynchronizer:
    """Copies repositories from the external cache into the vendor directory."""

    def __init__(self, external_dir: Path, vendor_dir: Path) -> None:
        """Initialize synchronizer.

        Args:
            external_dir: External cache directory
            vendor_dir: Vendor directory
        """
        self.external_dir = external_dir
        self.vendor_dir = vendor_dir

    def sync(self, repo: RepositoryName) -> SyncResult:
        """Vendor one repository.

        Callers check the ignore list and the marker store first; this method
        copies unconditionally.

        Args:
            repo: Repository to copy

        Returns:
            SyncResult, with status FAILED and the error text on I/O errors
        """
        try:
            self._copy(repo)
        except (OSError, VendorSyncError) as e:
            logger.error(f"Failed to vendor {repo.display_name}: {e}")
            return SyncResult(
                repo=repo,
                status=SyncStatus.FAILED,
                error=str(e),
                error_code=getattr(e, "error_code", VendorSyncError.error_code),
            )

        logger.info(f"Vendored {repo.display_name}")
        return SyncResult(repo=repo, status=SyncStatus.SYNCED)

    def _copy(self, repo: RepositoryName) -> None:
        source = self.external_dir / repo.name
        if not source.is_dir():
            raise VendorSyncError(
                f"{repo.display_name} is missing from the external cache: {source}"
            )

        # Drop the old marker so a partial copy is never classified as current.
        (self.vendor_dir / repo.marker_name).unlink(missing_ok=True)

        target = self.vendor_dir / repo.name
        if target.is_symlink() or (target.exists() and not target.is_dir()):
            _remove(target)
        target.mkdir(parents=True, exist_ok=True)

        copy_tree_below(source, target)

        shutil.copyfile(
            self.external_dir / repo.marker_name,
            self.vendor_dir / repo.marker_name,
        )


__all__ = ["DirectorySynchronizer", "copy_tree_below"]
