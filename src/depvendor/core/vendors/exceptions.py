"""Vendor subsystem exceptions.

Provides custom exceptions for vendor operations to enable
proper error handling and user-friendly error messages.
"""
from __future__ import annotations

from depvendor.core.exceptions import DepVendorError


class VendorError(DepVendorError):
    """Base exception for vendor subsystem errors."""

    error_code = "vendor_error"


class VendorOptionsError(VendorError):
    """Raised when the options required by the vendor command are not satisfied."""

    error_code = "options_invalid"


class DepsDisabledError(VendorOptionsError):
    """Raised when the dependency subsystem is disabled."""

    error_code = "deps_disabled"


class MissingVendorDirError(VendorOptionsError):
    """Raised when no vendor directory is configured."""

    error_code = "vendor_dir_missing"


class FetchDisabledError(VendorOptionsError):
    """Raised when fetching is disabled."""

    error_code = "fetch_disabled"


class VendorSyncError(VendorError):
    """Raised when copying a repository into the vendor directory fails."""

    error_code = "vendor_sync_error"


class IgnoreListError(VendorError):
    """Raised when .vendorignore exists but cannot be decoded."""

    error_code = "vendor_dir_error"


class MarkerReadError(VendorError):
    """Raised when a marker file exists but cannot be read."""

    error_code = "marker_read_error"


class CacheMarkerError(MarkerReadError):
    """Raised when the external cache marker of a fetched repository is unreadable."""

    error_code = "cache_corrupt"


__all__ = [
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
