#!/usr/bin/env python3
"""Local git client wrapper: read and repoint a remote, push to it."""

from __future__ import annotations

import os
import shlex
import subprocess
import tempfile
from typing import Dict, List, Optional

from errors import NoRepositoryError, PushError, RemoteUpdateError
from logging_utils import Logger
from security import SecurityValidator

GIT_TIMEOUT_S = 60
PUSH_TIMEOUT_S = 600
ASKPASS_USERNAME = "x-access-token"


class GitRemote:
    """Runs the three git operations a migration needs inside the current directory."""

    def __init__(self, git: str = "git", token: Optional[str] = None) -> None:
        self.git = git
        # Only set for HTTPS pushes; handed to git through GIT_ASKPASS
        self.token = token

    def _run(
        self,
        args: List[str],
        timeout: int = GIT_TIMEOUT_S,
        env: Optional[Dict[str, str]] = None,
    ) -> subprocess.CompletedProcess:
        Logger.debug(f"running: {self.git} {' '.join(args)}")
        return subprocess.run(
            [self.git, *args],
            check=True,
            capture_output=True,
            text=True,
            timeout=timeout,
            env=env,
        )

    @staticmethod
    def _describe(error: Exception) -> str:
        if isinstance(error, subprocess.CalledProcessError):
            output = (error.stderr or error.stdout or "").strip()
            detail = output or f"exit status {error.returncode}"
        else:
            detail = str(error)
        return SecurityValidator.sanitize_for_logging(detail)

    def get_push_url(self, remote: str) -> str:
        """Return the push URL configured for ``remote``."""
        try:
            result = self._run(["remote", "get-url", "--push", remote])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise NoRepositoryError(
                f"no git repository with remote '{remote}' in path: {os.getcwd()} "
                f"({self._describe(e)})"
            ) from e

        url = (result.stdout or "").strip()
        if not url:
            raise NoRepositoryError(
                f"remote '{remote}' has no push URL in path: {os.getcwd()}"
            )
        return url

    def set_url(self, remote: str, url: str) -> None:
        """Point ``remote`` at ``url``."""
        try:
            self._run(["remote", "set-url", remote, url])
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise RemoteUpdateError(
                f"failed to set url of remote '{remote}': {self._describe(e)}"
            ) from e
        Logger.info(f"remote '{remote}' now points at {url}")

    def push(self, remote: str, branch: str, all_branches: bool = False) -> str:
        """Push the primary branch (or every branch) and all tags to ``remote``."""
        if all_branches:
            args = ["push", remote, "refs/heads/*:refs/heads/*", "refs/tags/*:refs/tags/*"]
        else:
            args = ["push", remote, branch, "--tags"]

        env = os.environ.copy()
        askpass_script: Optional[str] = None
        try:
            if self.token:
                askpass_script = self._create_askpass_script(ASKPASS_USERNAME, self.token)
                env.update(
                    {
                        "GIT_ASKPASS": askpass_script,
                        "GIT_TERMINAL_PROMPT": "0",
                    }
                )
            result = self._run(args, timeout=PUSH_TIMEOUT_S, env=env)
        except (subprocess.CalledProcessError, subprocess.TimeoutExpired, OSError) as e:
            raise PushError(
                f"git push to remote '{remote}' failed: {self._describe(e)}"
            ) from e
        finally:
            self._cleanup_askpass_script(askpass_script)

        # git reports push progress on stderr
        return (result.stderr or result.stdout or "").strip()

    @staticmethod
    def _create_askpass_script(username: str, password: str) -> str:
        """Create a temporary askpass script for secure credential injection."""
        fd, path = tempfile.mkstemp(prefix="cc2gh_askpass_", text=True)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as script:
                script.write("#!/bin/sh\n")
                script.write("case \"$1\" in\n")
                script.write(f"  *Username*) echo {shlex.quote(username)} ;;\n")
                script.write(f"  *Password*) echo {shlex.quote(password)} ;;\n")
                script.write("  *) exit 1 ;;\n")
                script.write("esac\n")
            os.chmod(path, 0o700)
        except OSError:
            os.unlink(path)
            raise
        return path

    @staticmethod
    def _cleanup_askpass_script(path: Optional[str]) -> None:
        """Remove temporary askpass script if it exists."""
        if not path:
            return
        try:
            if os.path.exists(path):
                os.remove(path)
        except OSError as error:
            Logger.warn(f"failed to clean up temporary credential helper: {error}")
