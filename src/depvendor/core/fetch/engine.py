"""Local fetch engine.

Materializes declared repositories from local source trees into the external
cache, writing one marker per repository. Repositories whose cache marker
already matches their inputs are cache hits and are not copied again.
"""
from __future__ import annotations

import concurrent.futures
import logging
import shutil
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from depvendor.core.fetch.exceptions import FetchError, FetchInterruptedError
from depvendor.core.fetch.fingerprint import compute_marker
from depvendor.core.fetch.models import (
    EvaluationContext,
    EvaluationResult,
    RepositoryDirectory,
    RepositoryName,
    RepositoryRule,
)
from depvendor.core.fetch.registry import RepositoryRegistry

logger = logging.getLogger(__name__)


class FetchEngine(Protocol):
    """What the vendoring core needs from a fetch engine."""

    def fetch_all(self, context: EvaluationContext) -> EvaluationResult:
        ...

    def fetch_repos(
        self, names: Sequence[RepositoryName], context: EvaluationContext
    ) -> dict[RepositoryName, RepositoryDirectory]:
        ...


class LocalFetchEngine:
    """Fetch engine backed by local source directories."""

    def __init__(self, registry: RepositoryRegistry, external_dir: Path) -> None:
        """Initialize fetch engine.

        Args:
            registry: Declared repository rules
            external_dir: External cache directory
        """
        self.registry = registry
        self.external_dir = external_dir

    def fetch_all(self, context: EvaluationContext) -> EvaluationResult:
        """Fetch every declared repository.

        Args:
            context: Evaluation settings and resolution callback

        Returns:
            EvaluationResult with a cache path or an error per repository

        Raises:
            FetchInterruptedError: If interrupted while waiting for workers
        """
        return self._evaluate(self.registry.get_rules(), context)

    def fetch_repos(
        self, names: Sequence[RepositoryName], context: EvaluationContext
    ) -> dict[RepositoryName, RepositoryDirectory]:
        """Fetch a named subset of repositories.

        Undeclared names are reported as non-existent directories instead of
        failing the whole request.

        Args:
            names: Requested repositories
            context: Evaluation settings and resolution callback

        Returns:
            Mapping of each requested name to its resolved directory

        Raises:
            FetchError: If a declared repository fails to fetch
            FetchInterruptedError: If interrupted while waiting for workers
        """
        requested = list(dict.fromkeys(names))
        rules: list[RepositoryRule] = []
        for name in requested:
            rule = self.registry.get_rule(name)
            if rule is not None:
                rules.append(rule)

        result = self._evaluate(rules, context)
        if result.has_error():
            error = result.first_error()
            raise FetchError(f"Fetching repositories failed: {error}") from error

        directories: dict[RepositoryName, RepositoryDirectory] = {}
        for name in requested:
            path = result.values.get(name)
            if path is not None:
                directories[name] = RepositoryDirectory(repo=name, path=path)
            else:
                directories[name] = RepositoryDirectory(
                    repo=name,
                    exists=False,
                    error_msg=f"Repository '{name.display_name}' is not defined",
                )
        return directories

    def _evaluate(
        self, rules: list[RepositoryRule], context: EvaluationContext
    ) -> EvaluationResult:
        result = EvaluationResult()
        if not rules:
            return result

        self.external_dir.mkdir(parents=True, exist_ok=True)

        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=max(1, context.parallelism)
        )
        try:
            futures = {
                executor.submit(self._fetch_one, rule, context): rule for rule in rules
            }
            for future in concurrent.futures.as_completed(futures):
                rule = futures[future]
                try:
                    result.values[rule.name] = future.result()
                except (OSError, FetchError) as e:
                    logger.error(f"Fetching {rule.name.display_name} failed: {e}")
                    result.errors[rule.name] = e
        except KeyboardInterrupt as e:
            raise FetchInterruptedError("fetch was interrupted by the user") from e
        finally:
            executor.shutdown(wait=True, cancel_futures=True)

        return result

    def _fetch_one(self, rule: RepositoryRule, context: EvaluationContext) -> Path:
        marker = compute_marker(rule)
        repo_dir = self.external_dir / rule.name.name
        marker_path = self.external_dir / rule.name.marker_name

        if repo_dir.is_dir() and marker_path.is_file() and marker_path.read_bytes() == marker:
            logger.debug(f"{rule.name.display_name} is up to date in the external cache")
        else:
            logger.info(f"Fetching {rule.name.display_name} from {rule.path}")
            # Marker goes first so an interrupted copy is fetched again next time.
            marker_path.unlink(missing_ok=True)
            if repo_dir.is_symlink() or repo_dir.is_file():
                repo_dir.unlink()
            elif repo_dir.exists():
                shutil.rmtree(repo_dir)
            shutil.copytree(rule.path, repo_dir, symlinks=True)
            marker_path.write_bytes(marker)

        context.notify_resolved(rule.name)
        return repo_dir


__all__ = ["FetchEngine", "LocalFetchEngine"]
