"""
depvendor status command.

SUMMARY: Show which repositories are vendored and whether they are current
"""
from __future__ import annotations

import argparse

from depvendor.cli import OutputFormatter, add_dir_flags, add_standard_flags, resolve_options

SUMMARY = "Show which repositories are vendored and whether they are current"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_dir_flags(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Report vendor status without writing anything."""
    from depvendor.core.exceptions import DepVendorError
    from depvendor.core.fetch import RepositoryRegistry
    from depvendor.core.vendors import collect_status

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        options = resolve_options(args)
        if options.vendor_dir is None:
            formatter.error(
                "You cannot run status without specifying --vendor-dir",
                error_code="vendor_dir_missing",
            )
            return 1
        declared = [rule.name for rule in RepositoryRegistry(options.repo_root).get_rules()]
        report = collect_status(options.external_dir, options.vendor_dir, declared)
    except DepVendorError as e:
        formatter.error(e, error_code="status_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "vendorDir": str(options.vendor_dir),
                "externalDir": str(options.external_dir),
                "repositories": [entry.to_dict() for entry in report],
            }
        )
        return 0

    if not report:
        formatter.text("No repositories declared or vendored.")
        return 0

    formatter.text(f"Vendor directory: {options.vendor_dir}")
    for entry in report:
        formatter.text_kv(entry.repo.display_name, entry.status)
        if entry.detail:
            formatter.text(f"    {entry.detail}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    raise SystemExit(main(parsed))
