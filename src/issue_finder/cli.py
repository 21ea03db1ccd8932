"""CLI entry point for issue-finder."""

import argparse
import asyncio
import json
import sys
from typing import Optional, Sequence

from pydantic import ValidationError

from issue_finder import __version__
from issue_finder.config import LOG_LEVELS, Settings


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="issue-finder",
        description="List GitHub issues for the projects checked out under a directory.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        help="logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    list_cmd = sub.add_parser("list", help="list issues as a JSON array")
    list_cmd.add_argument("--root", help="projects directory to scan")
    list_cmd.add_argument("--concurrency", type=int, help="repositories fetched at once")
    list_cmd.add_argument("--timeout", type=float, help="per-repository timeout in seconds")
    list_cmd.add_argument("--backend", choices=("gh", "rest"), help="how issues are fetched")

    gh_cmd = sub.add_parser("gh", help="run a gh command and print its output")
    gh_cmd.add_argument("args", nargs=argparse.REMAINDER, help="arguments passed to gh")
    return parser


def _run_list(args: argparse.Namespace, settings: Settings) -> int:
    from issue_finder.aggregator import list_issues
    from issue_finder.errors import IssueFinderError

    overrides = {
        key: value
        for key, value in (
            ("concurrency", args.concurrency),
            ("timeout", args.timeout),
            ("backend", args.backend),
        )
        if value is not None
    }
    try:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})
    except ValidationError as exc:
        print(f"error: invalid option: {exc}", file=sys.stderr)
        return 2

    try:
        issues = asyncio.run(list_issues(args.root, settings))
    except IssueFinderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    json.dump([issue.model_dump() for issue in issues], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


def _run_gh(args: argparse.Namespace, settings: Settings) -> int:
    from issue_finder.errors import CommandError, GhNotFoundError
    from issue_finder.fetcher import run_gh_command

    gh_args = args.args[1:] if args.args[:1] == ["--"] else args.args
    try:
        output = asyncio.run(run_gh_command(gh_args, gh_path=settings.gh_path))
    except (CommandError, GhNotFoundError) as exc:
        print(str(exc).rstrip(), file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the issue-finder CLI and return its exit status."""
    from dotenv import load_dotenv

    load_dotenv()  # Load .env file (e.g. CLAUDE_CONFIG_DIR, GITHUB_TOKEN)

    from issue_finder.log import configure_logging

    args = build_parser().parse_args(argv)
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"error: invalid configuration: {exc}", file=sys.stderr)
        return 2
    configure_logging(args.log_level or settings.log_level)

    if args.command == "gh":
        return _run_gh(args, settings)
    return _run_list(args, settings)


if __name__ == "__main__":
    sys.exit(main())
