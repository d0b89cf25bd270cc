"""Vendor ignore list.

The ignore list lives at <vendor_dir>/.vendorignore and holds one repository
name per line. Names are matched exactly; there are no comments or patterns.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from depvendor.core.fetch.models import RepositoryName
from depvendor.core.vendors.exceptions import IgnoreListError

logger = logging.getLogger(__name__)

VENDOR_IGNORE = ".vendorignore"


class IgnoreList:
    """Set of repository names excluded from vendoring."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self.names = frozenset(names)

    @classmethod
    def path_for(cls, vendor_dir: Path) -> Path:
        return vendor_dir / VENDOR_IGNORE

    @classmethod
    def load(cls, vendor_dir: Path, *, create: bool = True) -> IgnoreList:
        """Load the ignore list of a vendor directory.

        A missing file is created empty on first use (when ``create`` is set)
        and yields an empty list.

        Args:
            vendor_dir: Vendor directory holding the ignore file
            create: Create an empty ignore file if none exists

        Returns:
            IgnoreList instance

        Raises:
            IgnoreListError: If the file is not valid UTF-8
        """
        path = cls.path_for(vendor_dir)
        if not path.exists():
            if create:
                path.touch()
                logger.info(f"Created empty {VENDOR_IGNORE} in {vendor_dir}")
            return cls()

        try:
            content = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise IgnoreListError(
                f"Cannot decode {path}: {e}",
                context={"path": str(path)},
            ) from e
        return cls(content.splitlines())

    def is_ignored(self, repo: RepositoryName) -> bool:
        return repo.name in self.names

    def filter(self, repos: Iterable[RepositoryName]) -> list[RepositoryName]:
        """Drop ignored repositories, keeping order and duplicates of the rest."""
        return [repo for repo in repos if not self.is_ignored(repo)]


__all__ = ["IgnoreList", "VENDOR_IGNORE"]
