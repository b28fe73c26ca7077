"""Fill a repository's activity graph with backdated commits."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable

from .config import FillConfig, load_config_file
from .driver import CommitDriver
from .errors import CommitFillError, ConfigError
from .git import GitBackend

EXIT_OK = 0
EXIT_INCOMPLETE = 1
EXIT_FATAL = 2


def _resolve_config(args: argparse.Namespace) -> FillConfig:
    config = FillConfig()
    if args.config is not None:
        config = load_config_file(args.config, config)
    return config.merged(
        {
            "commit_count": args.count,
            "branch": args.branch,
            "remote": args.remote,
            "status_file": args.status_file,
            "repo_path": args.repo,
            "seed": args.seed,
        }
    )


def _run(args: argparse.Namespace) -> int:
    try:
        config = _resolve_config(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL

    try:
        backend = GitBackend(config.repo_path)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL
    config = config.merged({"repo_path": backend.repo_path})

    active = backend.active_branch
    if active is not None and active != config.branch:
        print(
            f"Warning: checked-out branch is '{active}', pushing '{config.branch}'",
            file=sys.stderr,
        )

    print(f"Creating {config.commit_count} commits in {backend.repo_path}")
    print(f"  Remote: {config.remote}  Branch: {config.branch}")
    print(f"  Status file: {config.resolved_status_path()}")

    driver = CommitDriver(config, backend)
    try:
        result = driver.run()
    except CommitFillError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_FATAL

    print(f"\nPushed {result.pushed} of {result.requested} commits")
    return EXIT_OK if result.ok else EXIT_INCOMPLETE


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="commitfill", description=__doc__)
    parser.add_argument(
        "--config",
        type=Path,
        help="YAML or JSON file with default settings",
    )
    parser.add_argument(
        "--repo",
        type=Path,
        help="Path to the git working copy (defaults to the current directory)",
    )
    parser.add_argument(
        "-n",
        "--count",
        type=int,
        help="Number of commits to create (default: 120)",
    )
    parser.add_argument("--branch", help="Branch to push (default: master)")
    parser.add_argument("--remote", help="Remote to push to (default: origin)")
    parser.add_argument(
        "--status-file",
        type=Path,
        help="File rewritten before each commit, relative to the repository (default: data.json)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for the random date offsets",
    )
    parser.set_defaults(func=_run)
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    return args.func(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
