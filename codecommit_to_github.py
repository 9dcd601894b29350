#!/usr/bin/env python3
"""
codecommit-to-github - Migrate an AWS CodeCommit repository to GitHub.

Reads the CodeCommit remote of a local clone, creates a matching repository
on GitHub (under the authenticated user or an organization), repoints the
remote at it and pushes the primary branch with all tags.
"""

from __future__ import annotations

import sys
from typing import List, Optional

from argument_parser import parse_arguments
from migration_orchestrator import MigrationOrchestrator


def main(argv: Optional[List[str]] = None) -> int:
    options = parse_arguments(argv)
    orchestrator = MigrationOrchestrator(options)
    return orchestrator.run()


if __name__ == "__main__":
    sys.exit(main())
