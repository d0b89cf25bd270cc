"""Shared CLI utility functions.

This module provides common utilities used across CLI commands to reduce
duplication and ensure consistent behavior.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict

from depvendor.core.config import VendorOptions, load_options
from depvendor.core.stdlib_logging import configure_logging, suppress_lastresort_in_json_mode

PROJECT_MARKER = ".depvendor"


def find_repo_root(start: Path | None = None) -> Path:
    """Walk upwards from ``start`` to the first directory holding ``.depvendor``.

    Falls back to ``start`` (the current directory by default) when no
    ancestor carries the marker directory.
    """
    origin = (start or Path.cwd()).resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / PROJECT_MARKER).is_dir():
            return candidate
    return origin


def get_repo_root(args: argparse.Namespace) -> Path:
    """Get repository root from args or auto-detect.

    Args:
        args: Parsed arguments with optional repo_root attribute

    Returns:
        Path: Repository root path
    """
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return find_repo_root()


def option_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """Collect option values given on the command line.

    Flags left at their ``None`` default are omitted so that config file and
    environment values still apply.
    """
    overrides: Dict[str, Any] = {}
    for key in ("enable_deps", "vendor_dir", "external_dir", "fetch", "threads", "sync_jobs"):
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    if getattr(args, "verbose", False):
        overrides["log_level"] = "DEBUG"
    return overrides


def resolve_options(args: argparse.Namespace) -> VendorOptions:
    """Resolve options for a command and configure logging from them."""
    options = load_options(get_repo_root(args), option_overrides(args))
    quiet_json = getattr(args, "json", False) and not getattr(args, "verbose", False)
    if quiet_json and options.log_file is None:
        suppress_lastresort_in_json_mode()
    else:
        configure_logging(level=options.log_level, log_path=options.log_file)
    return options


__all__ = [
    "PROJECT_MARKER",
    "find_repo_root",
    "get_repo_root",
    "option_overrides",
    "resolve_options",
]
