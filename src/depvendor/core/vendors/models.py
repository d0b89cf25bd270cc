"""Vendor data models.

Provides immutable dataclasses for vendoring results.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from depvendor.core.fetch.models import RepositoryName


class VendorState(str, Enum):
    """Phases of one vendor invocation."""

    VALIDATING_OPTIONS = "validating-options"
    FETCHING = "fetching"
    FILTERING = "filtering"
    SYNCING = "syncing"
    DONE = "done"
    FAILED = "failed"


class SyncStatus(str, Enum):
    """Per-repository vendoring status."""

    SYNCED = "synced"
    UP_TO_DATE = "up-to-date"
    IGNORED = "ignored"
    WOULD_SYNC = "would-sync"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class SyncResult:
    """Result of vendoring one repository.

    Attributes:
        repo: Repository name
        status: What happened to the repository
        error: Error message if failed
        error_code: Machine-readable failure category if failed
    """

    repo: RepositoryName
    status: SyncStatus
    error: str | None = None
    error_code: str | None = None

    @property
    def success(self) -> bool:
        return self.status is not SyncStatus.FAILED

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "repo": self.repo.name,
            "status": self.status.value,
            "error": self.error,
            "errorCode": self.error_code,
        }


@dataclass(frozen=True, slots=True)
class VendorOutcome:
    """Final result of a vendor invocation.

    Attributes:
        success: Whether the command succeeded
        state: State the orchestrator finished in (DONE or FAILED)
        message: Aggregated error message, empty on success
        results: Per-repository results, in processing order
        errors: Individual error messages that make up ``message``
        error_code: Machine-readable failure category
        exit_code: Process exit code (0, 1, or 130 when interrupted)
    """

    success: bool
    state: VendorState
    message: str = ""
    results: tuple[SyncResult, ...] = ()
    errors: tuple[str, ...] = ()
    error_code: str | None = None
    exit_code: int = 0

    def count(self, status: SyncStatus) -> int:
        return sum(1 for r in self.results if r.status is status)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "success": self.success,
            "state": self.state.value,
            "message": self.message,
            "errorCode": self.error_code,
            "errors": list(self.errors),
            "results": [r.to_dict() for r in self.results],
        }


__all__ = [
    "VendorState",
    "SyncStatus",
    "SyncResult",
    "VendorOutcome",
]
