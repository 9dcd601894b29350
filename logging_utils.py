#!/usr/bin/env python3
"""Console output for codecommit-to-github: colored, pid-tagged, credential-scrubbed."""

import os
import pprint
import sys
from typing import Any, List, Tuple

import colorama

from security import SecurityValidator

# Resets color after every write, also on Windows consoles
colorama.init(autoreset=True)


class Logger:
    """Progress on stdout, failures on stderr; every message is scrubbed of secrets first.

    ``debug`` lines only appear once ``set_verbose(True)`` was called for the run.
    """

    PROCESS_NAME = "codecommit-to-github"
    verbose = False

    @classmethod
    def set_verbose(cls, verbose: bool) -> None:
        cls.verbose = verbose

    @staticmethod
    def _scrub(messages: Tuple[Any, ...]) -> List[str]:
        return [SecurityValidator.sanitize_for_logging(str(msg)) for msg in messages]

    @classmethod
    def debug(cls, *messages: Any) -> None:
        if cls.verbose:
            cls._write_stdout(colorama.Fore.LIGHTBLACK_EX, *cls._scrub(messages))

    @classmethod
    def info(cls, *messages: Any) -> None:
        cls._write_stdout(colorama.Fore.CYAN, *cls._scrub(messages))

    @classmethod
    def warn(cls, *messages: Any) -> None:
        cls._write_stdout(colorama.Fore.YELLOW, *cls._scrub(messages))

    @classmethod
    def error(cls, *messages: Any) -> None:
        cls._write_stderr(colorama.Fore.RED, *cls._scrub(messages))

    @classmethod
    def dump(cls, title: str, data: Any) -> None:
        """Print a titled, pretty-formatted structure such as repository metadata."""
        body = SecurityValidator.sanitize_for_logging(
            pprint.pformat(data, width=100, sort_dicts=True)
        )
        cls._write_stdout(colorama.Fore.GREEN, title)
        sys.stdout.write(body + "\n")

    @classmethod
    def _write_stdout(cls, color: str, *messages: str) -> None:
        sys.stdout.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _write_stderr(cls, color: str, *messages: str) -> None:
        sys.stderr.write(cls._format_line(color, *messages) + "\n")

    @classmethod
    def _get_header(cls) -> str:
        return f"[{cls.PROCESS_NAME}:{os.getpid()}]"

    @classmethod
    def _format_line(cls, color: str, *messages: str) -> str:
        header = cls._get_header()
        message = " ".join(str(m) for m in messages)
        return f"{color}{header}{colorama.Style.RESET_ALL} {message}"
