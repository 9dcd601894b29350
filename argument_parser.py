#!/usr/bin/env python3
"""Command line argument parsing and configuration building."""

from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional

from config import (DEFAULT_BRANCH, DEFAULT_GITHUB_API, DEFAULT_REMOTE,
                    MigrationOptions, PushMethod)
from logging_utils import Logger
from security import SecurityValidator

# Exit codes
EXIT_INVALID_ARGUMENTS = 2


def _create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser."""
    parser = argparse.ArgumentParser(
        prog="codecommit-to-github",
        description="Migrate an AWS CodeCommit repository to GitHub",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --token <your_token> ./path/to/my/repo
  %(prog)s -t <your_token> -o my-org --public ./path/to/my/repo
  %(prog)s -t <your_token> -a work-profile --dry --verbose
  %(prog)s -t <your_token> --all-branches --push-method https
        """,
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Path of the local clone to migrate (default: current directory)",
    )
    return parser


def _add_github_arguments(parser: argparse.ArgumentParser) -> None:
    """Add GitHub-related arguments to parser."""
    parser.add_argument(
        "-t",
        "--token",
        dest="token",
        default="",
        help="GitHub personal access token",
    )
    parser.add_argument(
        "-o",
        "--organization",
        dest="organization",
        help="Name of organization to create repo for instead of user",
    )
    parser.add_argument(
        "-p",
        "--public",
        action="store_true",
        dest="make_public",
        help="Whether the GitHub repo should be public (default: private)",
    )
    parser.add_argument(
        "--gh-api",
        dest="api_url",
        default=DEFAULT_GITHUB_API,
        help=f"Base URL of the GitHub API (default: {DEFAULT_GITHUB_API})",
    )


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    """Add CodeCommit and git related arguments to parser."""
    parser.add_argument(
        "-r",
        "--remote",
        dest="remote",
        default=DEFAULT_REMOTE,
        help=f"Remote name to migrate (default: '{DEFAULT_REMOTE}')",
    )
    parser.add_argument(
        "-a",
        "--aws-profile",
        dest="aws_profile",
        help="AWS profile name (default: the default credential chain)",
    )
    parser.add_argument(
        "-b",
        "--branch",
        dest="branch",
        default=DEFAULT_BRANCH,
        help=f"Primary branch to push along with all tags (default: '{DEFAULT_BRANCH}')",
    )
    parser.add_argument(
        "--all-branches",
        action="store_true",
        dest="all_branches",
        help="Push every local branch instead of only the primary branch",
    )
    parser.add_argument(
        "--push-method",
        dest="push_method",
        choices=[method.value for method in PushMethod],
        default=PushMethod.SSH.value,
        help="Transport for pushing to GitHub: ssh or https (default: ssh)",
    )


def _add_behavior_arguments(parser: argparse.ArgumentParser) -> None:
    """Add behavior arguments to parser."""
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        dest="verbose",
        help="Verbose output",
    )
    parser.add_argument(
        "-d",
        "--dry",
        action="store_true",
        dest="dry_run",
        help="Perform a dry run: nothing is created or pushed",
    )


def _validate_parsed_arguments(args: argparse.Namespace) -> argparse.Namespace:
    """Validate and sanitize parsed arguments for security."""
    try:
        args.api_url = SecurityValidator.validate_url(args.api_url, ["https"])
        if args.organization:
            args.organization = SecurityValidator.validate_login(args.organization)
        args.remote = SecurityValidator.validate_ref_name(args.remote, "remote name")
        args.branch = SecurityValidator.validate_ref_name(args.branch, "branch name")
    except ValueError as e:
        Logger.error(f"configuration validation error: {e}")
        sys.exit(EXIT_INVALID_ARGUMENTS)
    return args


def parse_arguments(argv: Optional[List[str]] = None) -> MigrationOptions:
    """Parse command line arguments and return the migration options.

    ``--help`` prints usage and exits with status 0 from inside argparse.
    """
    parser = _create_argument_parser()
    _add_github_arguments(parser)
    _add_source_arguments(parser)
    _add_behavior_arguments(parser)

    args = _validate_parsed_arguments(parser.parse_args(argv))

    return MigrationOptions(
        source_path=args.path or os.getcwd(),
        token=args.token or "",
        remote=args.remote,
        organization=args.organization or None,
        make_public=args.make_public,
        aws_profile=args.aws_profile or None,
        verbose=args.verbose,
        dry_run=args.dry_run,
        branch=args.branch,
        all_branches=args.all_branches,
        push_method=PushMethod(args.push_method),
        api_url=args.api_url,
    )
