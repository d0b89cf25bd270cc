"""Repository fetch engine.

The vendoring core consumes a fetch engine through two calls: fetch everything
reachable from the project, or fetch a named subset. This package provides the
types exchanged across that seam and a local implementation:

- RepositoryRegistry: Load declared rules from .depvendor/repositories.yaml
- LocalFetchEngine: Copy rule sources into the external cache with markers
- EvaluationContext: Parallelism and the repository-resolved callback
"""
from __future__ import annotations

from depvendor.core.fetch.engine import FetchEngine, LocalFetchEngine
from depvendor.core.fetch.exceptions import (
    FetchConfigError,
    FetchError,
    FetchInterruptedError,
    InvalidRepositoryNameError,
)
from depvendor.core.fetch.fingerprint import compute_marker
from depvendor.core.fetch.models import (
    EvaluationContext,
    EvaluationResult,
    RepositoryDirectory,
    RepositoryName,
    RepositoryRule,
)
from depvendor.core.fetch.registry import RepositoryRegistry

__all__ = [
    # Engine
    "FetchEngine",
    "LocalFetchEngine",
    "RepositoryRegistry",
    "compute_marker",
    # Models
    "RepositoryName",
    "RepositoryRule",
    "RepositoryDirectory",
    "EvaluationContext",
    "EvaluationResult",
    # Exceptions
    "FetchError",
    "FetchConfigError",
    "InvalidRepositoryNameError",
    "FetchInterruptedError",
]
