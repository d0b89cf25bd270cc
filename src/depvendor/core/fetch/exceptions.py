"""Fetch engine exceptions."""
from __future__ import annotations

from depvendor.core.exceptions import DepVendorError


class FetchError(DepVendorError):
    """Base exception for repository fetch errors."""


class FetchConfigError(FetchError):
    """Raised when repositories.yaml is invalid or missing required fields."""


class InvalidRepositoryNameError(FetchError):
    """Raised when a repository name does not match the allowed syntax."""


class FetchInterruptedError(FetchError):
    """Raised when an evaluation is interrupted before it completes."""


__all__ = [
    "FetchError",
    "FetchConfigError",
    "InvalidRepositoryNameError",
    "FetchInterruptedError",
]
