"""
depvendor vendor command.

SUMMARY: Fetch external repositories and mirror them into the vendor directory
"""
from __future__ import annotations

import argparse

from depvendor.cli import (
    OutputFormatter,
    add_dir_flags,
    add_dry_run_flag,
    add_fetch_flags,
    add_repos_arg,
    add_standard_flags,
    add_sync_jobs_flag,
    resolve_options,
)

SUMMARY = "Fetch external repositories and mirror them into the vendor directory"

_LABELS = {
    "synced": "vendored",
    "up-to-date": "up to date",
    "ignored": "ignored",
    "would-sync": "would vendor",
    "failed": "FAILED",
}


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_repos_arg(parser, "Repositories to vendor (all if omitted)")
    add_dir_flags(parser)
    add_fetch_flags(parser)
    add_sync_jobs_flag(parser)
    add_dry_run_flag(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Vendor external repositories."""
    from depvendor.core.exceptions import DepVendorError
    from depvendor.core.fetch import LocalFetchEngine, RepositoryRegistry
    from depvendor.core.vendors import SyncStatus, VendorOrchestrator

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        options = resolve_options(args)
        engine = LocalFetchEngine(RepositoryRegistry(options.repo_root), options.external_dir)
        orchestrator = VendorOrchestrator(options, engine, dry_run=args.dry_run)
        outcome = orchestrator.run(args.repos)
    except DepVendorError as e:
        formatter.error(e, error_code="vendor_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(outcome.to_dict())
        return outcome.exit_code

    for result in outcome.results:
        line = f"  {result.repo.display_name}: {_LABELS[result.status.value]}"
        if result.error:
            line += f" ({result.error})"
        formatter.text(line)

    if not outcome.success:
        formatter.error(outcome.message, error_code=outcome.error_code or "vendor_error")
        return outcome.exit_code

    if not outcome.results:
        formatter.text("Nothing to vendor.")
    elif args.dry_run:
        formatter.text(
            f"Dry run: {outcome.count(SyncStatus.WOULD_SYNC)} would be vendored, "
            f"{outcome.count(SyncStatus.UP_TO_DATE)} up to date, "
            f"{outcome.count(SyncStatus.IGNORED)} ignored; nothing written."
        )
    else:
        formatter.text(
            f"Vendored {outcome.count(SyncStatus.SYNCED)} repositories into {options.vendor_dir} "
            f"({outcome.count(SyncStatus.UP_TO_DATE)} up to date, "
            f"{outcome.count(SyncStatus.IGNORED)} ignored)"
        )
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    raise SystemExit(main(parsed))
