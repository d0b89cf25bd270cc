"""Vendor command orchestration.

Drives one vendor invocation through its phases:

    VALIDATING_OPTIONS -> FETCHING -> FILTERING -> SYNCING -> DONE

Any phase may end in FAILED. Expected failures never raise; they are
returned as a VendorOutcome carrying the aggregated error text.
"""
from __future__ import annotations

import concurrent.futures
import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from depvendor.core.config import VendorOptions
from depvendor.core.fetch.engine import FetchEngine
from depvendor.core.fetch.exceptions import (
    FetchError,
    FetchInterruptedError,
    InvalidRepositoryNameError,
)
from depvendor.core.fetch.models import EvaluationContext, RepositoryName
from depvendor.core.vendors.collector import RepoEventCollector
from depvendor.core.vendors.exceptions import (
    DepsDisabledError,
    FetchDisabledError,
    IgnoreListError,
    MarkerReadError,
    MissingVendorDirError,
    VendorOptionsError,
)
from depvendor.core.vendors.ignore import IgnoreList
from depvendor.core.vendors.markers import MarkerStore
from depvendor.core.vendors.models import SyncResult, SyncStatus, VendorOutcome, VendorState
from depvendor.core.vendors.sync import DirectorySynchronizer

logger = logging.getLogger(__name__)

INTERRUPTED_EXIT_CODE = 130


def validate_options(options: VendorOptions) -> None:
    """Check the options the vendor command cannot run without.

    Raises:
        DepsDisabledError: If the dependency subsystem is disabled
        MissingVendorDirError: If no vendor directory is configured
        FetchDisabledError: If fetching is disabled
    """
    if not options.enable_deps:
        raise DepsDisabledError(
            "Dependency management has to be enabled for vendoring to work, "
            "run with --enable-deps"
        )
    if options.vendor_dir is None:
        raise MissingVendorDirError("You cannot run vendor without specifying --vendor-dir")
    if not options.fetch:
        raise FetchDisabledError("You cannot run vendor with --nofetch")


class VendorOrchestrator:
    """Runs the vendor command for one invocation.

    Vendoring everything routes the fetch engine's resolution callbacks into a
    fresh RepoEventCollector, then filters the collected repositories through
    the ignore list. Vendoring named repositories syncs what the engine found
    directly; explicitly requested repositories are not filtered.
    """

    def __init__(
        self,
        options: VendorOptions,
        engine: FetchEngine,
        *,
        dry_run: bool = False,
    ) -> None:
        """Initialize orchestrator.

        Args:
            options: Resolved command options
            engine: Fetch engine to evaluate requests with
            dry_run: Report stale repositories instead of copying them
        """
        self.options = options
        self.engine = engine
        self.dry_run = dry_run
        self.state = VendorState.VALIDATING_OPTIONS

    @property
    def vendor_dir(self) -> Path:
        if self.options.vendor_dir is None:
            raise MissingVendorDirError("You cannot run vendor without specifying --vendor-dir")
        return self.options.vendor_dir

    @property
    def markers(self) -> MarkerStore:
        return MarkerStore(self.options.external_dir, self.vendor_dir)

    @property
    def synchronizer(self) -> DirectorySynchronizer:
        return DirectorySynchronizer(self.options.external_dir, self.vendor_dir)

    def run(self, repos: Sequence[str] = ()) -> VendorOutcome:
        """Vendor all reachable repositories, or only ``repos`` when given.

        Args:
            repos: Repository names as typed by the user (``@`` prefix optional)

        Returns:
            VendorOutcome describing the invocation
        """
        self._transition(VendorState.VALIDATING_OPTIONS)
        try:
            validate_options(self.options)
        except VendorOptionsError as e:
            return self._fail([str(e)], error_code=e.error_code)

        if repos:
            return self._vendor_repos(repos)
        return self._vendor_all()

    def _vendor_all(self) -> VendorOutcome:
        collector = RepoEventCollector()
        context = EvaluationContext(
            parallelism=self.options.threads,
            on_repo_resolved=collector.on_repo_resolved,
        )

        self._transition(VendorState.FETCHING)
        try:
            result = self.engine.fetch_all(context)
        except (FetchInterruptedError, KeyboardInterrupt) as e:
            return self._interrupted(e)
        except FetchError as e:
            return self._fail([str(e)], error_code="fetch_error")

        if result.has_error():
            error = result.first_error()
            message = str(error) if error is not None and str(error) else (
                "Unexpected error during fetching all external deps."
            )
            return self._fail([message], error_code="fetch_error")

        pending = collector.drain()
        logger.debug(f"Collected {len(pending)} resolved repositories")

        self._transition(VendorState.FILTERING)
        try:
            ignore_list = self._prepare_vendor_dir()
        except (OSError, IgnoreListError) as e:
            return self._fail(
                [f"Cannot prepare vendor directory {self.vendor_dir}: {e}"],
                error_code="vendor_dir_error",
            )

        ignored = [
            SyncResult(repo=repo, status=SyncStatus.IGNORED)
            for repo in _unique(pending)
            if ignore_list.is_ignored(repo)
        ]
        for skipped in ignored:
            logger.info(f"Skipping {skipped.repo.display_name}: listed in .vendorignore")

        results = self._sync_repos(ignore_list.filter(pending))
        return self._finish(ignored + results)

    def _vendor_repos(self, raw_names: Sequence[str]) -> VendorOutcome:
        try:
            names = [RepositoryName.parse(raw) for raw in raw_names]
        except InvalidRepositoryNameError as e:
            return self._fail([f"Invalid repo name: {e}"], error_code="invalid_repo_name")

        context = EvaluationContext(parallelism=self.options.threads)

        self._transition(VendorState.FETCHING)
        try:
            directories = self.engine.fetch_repos(names, context)
        except (FetchInterruptedError, KeyboardInterrupt) as e:
            return self._interrupted(e)
        except FetchError as e:
            return self._fail([str(e)], error_code="fetch_error")

        not_found: list[str] = []
        found: list[RepositoryName] = []
        for directory in directories.values():
            if directory.exists:
                found.append(directory.repo)
            else:
                not_found.append(
                    directory.error_msg or f"Repository '{directory.repo.display_name}' not found"
                )

        try:
            self._prepare_vendor_dir()
        except (OSError, IgnoreListError) as e:
            return self._fail(
                [f"Cannot prepare vendor directory {self.vendor_dir}: {e}"],
                error_code="vendor_dir_error",
            )

        results = self._sync_repos(found)

        errors: list[str] = []
        if not_found:
            errors.append(f"Vendoring some repos failed with errors: [{', '.join(not_found)}]")
        return self._finish(results, errors, error_code="repos_not_found" if not_found else None)

    def _prepare_vendor_dir(self) -> IgnoreList:
        """Create the vendor directory and its ignore list on first use."""
        if self.dry_run:
            if not self.vendor_dir.is_dir():
                return IgnoreList()
            return IgnoreList.load(self.vendor_dir, create=False)

        if not self.vendor_dir.exists():
            logger.info(f"Creating vendor directory {self.vendor_dir}")
        self.vendor_dir.mkdir(parents=True, exist_ok=True)
        return IgnoreList.load(self.vendor_dir)

    def _sync_repos(self, repos: Iterable[RepositoryName]) -> list[SyncResult]:
        self._transition(VendorState.SYNCING)
        unique = _unique(repos)

        if self.options.sync_jobs > 1 and len(unique) > 1:
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.options.sync_jobs
            ) as executor:
                return list(executor.map(self._sync_one, unique))

        return [self._sync_one(repo) for repo in unique]

    def _sync_one(self, repo: RepositoryName) -> SyncResult:
        try:
            if self.markers.is_up_to_date(repo):
                logger.debug(f"{repo.display_name} is up to date under {self.vendor_dir}")
                return SyncResult(repo=repo, status=SyncStatus.UP_TO_DATE)
        except MarkerReadError as e:
            logger.error(str(e))
            return SyncResult(
                repo=repo, status=SyncStatus.FAILED, error=str(e), error_code=e.error_code
            )

        if self.dry_run:
            return SyncResult(repo=repo, status=SyncStatus.WOULD_SYNC)
        return self.synchronizer.sync(repo)

    def _finish(
        self,
        results: list[SyncResult],
        errors: Sequence[str] = (),
        *,
        error_code: str | None = None,
    ) -> VendorOutcome:
        messages = list(errors)
        failed = [r for r in results if r.status is SyncStatus.FAILED]
        if failed:
            details = "; ".join(f"{r.repo.display_name}: {r.error}" for r in failed)
            messages.append(f"Vendoring failed for {len(failed)} repositories: {details}")
            error_code = error_code or failed[0].error_code or "vendor_sync_error"

        if messages:
            return self._fail(messages, error_code=error_code, results=results)

        self._transition(VendorState.DONE)
        return VendorOutcome(success=True, state=self.state, results=tuple(results))

    def _interrupted(self, error: BaseException) -> VendorOutcome:
        reason = str(error)
        message = f"Vendor interrupted: {reason}" if reason else "Vendor interrupted"
        return self._fail(
            [message],
            error_code="interrupted",
            exit_code=INTERRUPTED_EXIT_CODE,
        )

    def _fail(
        self,
        errors: Sequence[str],
        *,
        error_code: str | None = None,
        results: Sequence[SyncResult] = (),
        exit_code: int = 1,
    ) -> VendorOutcome:
        self._transition(VendorState.FAILED)
        return VendorOutcome(
            success=False,
            state=self.state,
            message="\n".join(errors),
            results=tuple(results),
            errors=tuple(errors),
            error_code=error_code or "vendor_error",
            exit_code=exit_code,
        )

    def _transition(self, state: VendorState) -> None:
        if state is not self.state:
            logger.debug(f"vendor: {self.state.value} -> {state.value}")
        self.state = state


def _unique(repos: Iterable[RepositoryName]) -> list[RepositoryName]:
    """Collapse duplicates, keeping the first occurrence."""
    return list(dict.fromkeys(repos))


__all__ = ["VendorOrchestrator", "validate_options", "INTERRUPTED_EXIT_CODE"]
