"""depvendor vendor subsystem.

Mirrors repositories fetched into the external cache into a persistent vendor
directory.

Key components:
- MarkerStore: Decide staleness by comparing cache and vendor markers
- IgnoreList: Load <vendor_dir>/.vendorignore
- RepoEventCollector: Accumulate repositories resolved during one fetch
- DirectorySynchronizer: Copy a repository tree, then its marker
- VendorOrchestrator: Validate, fetch, filter, sync, and aggregate results
"""
from __future__ import annotations

from depvendor.core.vendors.collector import RepoEventCollector
from depvendor.core.vendors.exceptions import (
    CacheMarkerError,
    DepsDisabledError,
    FetchDisabledError,
    IgnoreListError,
    MarkerReadError,
    MissingVendorDirError,
    VendorError,
    VendorOptionsError,
    VendorSyncError,
)
from depvendor.core.vendors.ignore import VENDOR_IGNORE, IgnoreList
from depvendor.core.vendors.markers import MarkerStore
from depvendor.core.vendors.models import SyncResult, SyncStatus, VendorOutcome, VendorState
from depvendor.core.vendors.orchestrator import VendorOrchestrator, validate_options
from depvendor.core.vendors.status import RepoStatus, collect_status
from depvendor.core.vendors.sync import DirectorySynchronizer, copy_tree_below

__all__ = [
    # Components
    "MarkerStore",
    "IgnoreList",
    "VENDOR_IGNORE",
    "RepoEventCollector",
    "DirectorySynchronizer",
    "copy_tree_below",
    "collect_status",
    "VendorOrchestrator",
    "validate_options",
    # Models
    "SyncResult",
    "SyncStatus",
    "VendorOutcome",
    "VendorState",
    "RepoStatus",
    # Exceptions
    "VendorError",
    "VendorOptionsError",
    "DepsDisabledError",
    "MissingVendorDirError",
    "FetchDisabledError",
    "VendorSyncError",
    "IgnoreListError",
    "MarkerReadError",
    "CacheMarkerError",
]
