"""Common CLI argument registration utilities.

This module provides reusable argument registration functions shared by the
vendor, fetch and status commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --repo-root flag for repository root override."""
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override repository root path",
    )


def add_dry_run_flag(parser: argparse.ArgumentParser) -> None:
    """Add --dry-run flag."""
    parser.add_argument(
        "--dry-run",
        "-n",
        action="store_true",
        help="Show what would be done without making changes",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )


def add_repos_arg(parser: argparse.ArgumentParser, help_text: str) -> None:
    """Add the optional list of repository names."""
    parser.add_argument(
        "repos",
        nargs="*",
        metavar="REPO",
        help=help_text,
    )


def add_dir_flags(parser: argparse.ArgumentParser) -> None:
    """Add --vendor-dir and --external-dir.

    Both default to None so that config file and environment values apply
    unless the flag is given.
    """
    parser.add_argument(
        "--vendor-dir",
        dest="vendor_dir",
        default=None,
        help="Vendor directory (relative paths resolve against the repo root)",
    )
    parser.add_argument(
        "--external-dir",
        dest="external_dir",
        default=None,
        help="External cache directory (default: .depvendor/external)",
    )


def add_fetch_flags(parser: argparse.ArgumentParser) -> None:
    """Add flags controlling the fetch phase.

    Adds: --enable-deps/--noenable-deps, --fetch/--nofetch, --threads
    """
    parser.add_argument(
        "--enable-deps",
        dest="enable_deps",
        action="store_const",
        const=True,
        default=None,
        help="Enable external dependency management",
    )
    parser.add_argument(
        "--noenable-deps",
        dest="enable_deps",
        action="store_const",
        const=False,
        help="Disable external dependency management",
    )
    parser.add_argument(
        "--fetch",
        dest="fetch",
        action="store_const",
        const=True,
        default=None,
        help="Allow fetching external repositories",
    )
    parser.add_argument(
        "--nofetch",
        dest="fetch",
        action="store_const",
        const=False,
        help="Do not fetch external repositories",
    )
    parser.add_argument(
        "--threads",
        type=int,
        default=None,
        help="Number of repositories fetched in parallel",
    )


def add_sync_jobs_flag(parser: argparse.ArgumentParser) -> None:
    """Add --sync-jobs flag."""
    parser.add_argument(
        "--sync-jobs",
        dest="sync_jobs",
        type=int,
        default=None,
        help="Number of repositories copied into the vendor directory concurrently",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Add standard flags that every command uses.

    Adds: --json, --repo-root, --verbose
    """
    add_json_flag(parser)
    add_repo_root_flag(parser)
    add_verbose_flag(parser)


__all__ = [
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_repos_arg",
    "add_dir_flags",
    "add_fetch_flags",
    "add_sync_jobs_flag",
    "add_standard_flags",
]
