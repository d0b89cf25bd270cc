"""
depvendor fetch command.

SUMMARY: Fetch external repositories into the cache without vendoring
"""
from __future__ import annotations

import argparse

from depvendor.cli import (
    OutputFormatter,
    add_dir_flags,
    add_fetch_flags,
    add_repos_arg,
    add_standard_flags,
    resolve_options,
)

SUMMARY = "Fetch external repositories into the cache without vendoring"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_repos_arg(parser, "Repositories to fetch (all if omitted)")
    add_dir_flags(parser)
    add_fetch_flags(parser)
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    """Fetch external repositories."""
    from depvendor.core.exceptions import DepVendorError
    from depvendor.core.fetch import (
        EvaluationContext,
        FetchInterruptedError,
        LocalFetchEngine,
        RepositoryName,
        RepositoryRegistry,
    )

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        options = resolve_options(args)
        if not options.enable_deps:
            formatter.error(
                "Dependency management is disabled, run with --enable-deps",
                error_code="deps_disabled",
            )
            return 1
        if not options.fetch:
            formatter.error("You cannot run fetch with --nofetch", error_code="fetch_disabled")
            return 1

        engine = LocalFetchEngine(RepositoryRegistry(options.repo_root), options.external_dir)
        context = EvaluationContext(parallelism=options.threads)

        if args.repos:
            names = [RepositoryName.parse(raw) for raw in args.repos]
            directories = engine.fetch_repos(names, context)
            fetched = [d.repo for d in directories.values() if d.exists]
            errors = [d.error_msg or d.repo.display_name for d in directories.values() if not d.exists]
        else:
            result = engine.fetch_all(context)
            fetched = sorted(result.values)
            errors = [f"{repo.display_name}: {err}" for repo, err in sorted(result.errors.items())]
    except FetchInterruptedError as e:
        formatter.error(e, error_code="interrupted")
        return 130
    except DepVendorError as e:
        formatter.error(e, error_code="fetch_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "success": not errors,
                "fetched": [repo.name for repo in fetched],
                "errors": errors,
            }
        )
        return 1 if errors else 0

    for repo in fetched:
        formatter.text(f"  {repo.display_name}: {options.external_dir / repo.name}")
    if errors:
        formatter.error(f"Fetching some repos failed with errors: [{', '.join(errors)}]")
        return 1
    formatter.text(f"Fetched {len(fetched)} repositories into {options.external_dir}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    raise SystemExit(main(parsed))
