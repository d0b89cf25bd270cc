"""depvendor CLI package.

Commands live in cli/commands and are discovered by the dispatcher.
"""
from __future__ import annotations

from depvendor.cli._args import (
    add_dir_flags,
    add_dry_run_flag,
    add_fetch_flags,
    add_json_flag,
    add_repo_root_flag,
    add_repos_arg,
    add_standard_flags,
    add_sync_jobs_flag,
    add_verbose_flag,
)
from depvendor.cli._output import OutputFormatter
from depvendor.cli._utils import get_repo_root, option_overrides, resolve_options

__all__ = [
    "OutputFormatter",
    "add_json_flag",
    "add_repo_root_flag",
    "add_dry_run_flag",
    "add_verbose_flag",
    "add_repos_arg",
    "add_dir_flags",
    "add_fetch_flags",
    "add_sync_jobs_flag",
    "add_standard_flags",
    "get_repo_root",
    "option_overrides",
    "resolve_options",
]
