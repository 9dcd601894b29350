#!/usr/bin/env python3
"""Main orchestrator for migrating a CodeCommit repository to GitHub."""

from __future__ import annotations

import os
import traceback
from typing import Any, Dict, Optional, Protocol

from codecommit_source import AwsCredentialProvider, CodeCommitSource, parse_codecommit_url
from config import (CreateRepoRequest, DestinationRepository, MigrationOptions,
                    PushMethod, SourceRepositoryInfo)
from errors import MigrationError, NoRepositoryError, RemoteUpdateError
from git_remote import GitRemote
from github_target import GitHubTarget, build_request
from logging_utils import Logger

# Exit codes
EXIT_SUCCESS = 0
EXIT_EXECUTION_ERROR = 1


class RemoteInspector(Protocol):
    def get_push_url(self, remote: str) -> str: ...


class RepositoryReader(Protocol):
    def get_repository(
        self, name: str, region: Optional[str], profile: Optional[str] = None
    ) -> Dict[str, Any]: ...


class RepositoryCreator(Protocol):
    def create_repo(self, request: CreateRepoRequest) -> DestinationRepository: ...


class Pusher(Protocol):
    def set_url(self, remote: str, url: str) -> None: ...

    def push(self, remote: str, branch: str, all_branches: bool = False) -> str: ...


class MigrationOrchestrator:
    def __init__(
        self,
        options: MigrationOptions,
        inspector: Optional[RemoteInspector] = None,
        reader: Optional[RepositoryReader] = None,
        creator: Optional[RepositoryCreator] = None,
        pusher: Optional[Pusher] = None,
    ) -> None:
        self.options = options
        git = GitRemote(
            token=options.token if options.push_method == PushMethod.HTTPS else None
        )
        self.inspector = inspector or git
        self.reader = reader or CodeCommitSource(
            AwsCredentialProvider(options.aws_profile)
        )
        self.creator = creator or GitHubTarget(
            options.token, api_url=options.api_url, dry_run=options.dry_run
        )
        self.pusher = pusher or git

    def run(self) -> int:
        previous = Logger.verbose
        Logger.set_verbose(self.options.verbose)
        try:
            return self._run()
        finally:
            Logger.set_verbose(previous)

    def _run(self) -> int:
        try:
            self._enter_source_path()
            source = self.inspect_source()
            if self.options.verbose:
                Logger.dump(f"source repository: {source.name}", dict(source.metadata))

            destination = self.provision_destination(source)
            self.push_mirror(destination)

            if self.options.verbose:
                Logger.dump(
                    f"destination repository: {destination.full_name}", destination.as_dict()
                )
            Logger.info("migration completed" if not destination.dry_run else "dry-run completed")
            return EXIT_SUCCESS
        except MigrationError as e:
            self._report(e)
            return EXIT_EXECUTION_ERROR
        except Exception as e:
            Logger.error(f"unexpected error: {e}")
            if self.options.verbose:
                Logger.error(traceback.format_exc().rstrip())
            return EXIT_EXECUTION_ERROR

    def _enter_source_path(self) -> None:
        path = self.options.source_path
        if not path:
            return
        try:
            os.chdir(path)
        except OSError as e:
            raise NoRepositoryError(f"no git repository in path: {path} ({e.strerror})") from e

    def inspect_source(self) -> SourceRepositoryInfo:
        """Resolve the CodeCommit repository behind the configured remote."""
        remote_url = self.inspector.get_push_url(self.options.remote)
        parsed, region, name, url_profile = parse_codecommit_url(remote_url)
        Logger.debug(f"remote '{self.options.remote}': {remote_url}")

        metadata = self.reader.get_repository(name, region, url_profile)
        return SourceRepositoryInfo(
            remote_url=parsed,
            region=region,
            name=metadata.get("repositoryName") or name,
            description=metadata.get("repositoryDescription"),
            metadata=metadata,
        )

    def provision_destination(self, source: SourceRepositoryInfo) -> DestinationRepository:
        request = build_request(source, self.options)
        owner = request.namespace or "user account"
        Logger.info(
            f"creating {self.options.visibility.value} repository '{request.name}' "
            f"under {owner}"
        )
        return self.creator.create_repo(request)

    def push_mirror(self, destination: DestinationRepository) -> None:
        """Repoint the remote at the new repository and push branches and tags."""
        remote = self.options.remote
        what = "all branches" if self.options.all_branches else f"'{self.options.branch}'"
        if destination.dry_run:
            Logger.info(
                f"dry run: would repoint remote '{remote}' to {destination.full_name} "
                f"and push {what} with tags"
            )
            return

        url = destination.push_url(self.options.push_method)
        if not url:
            raise RemoteUpdateError(
                f"GitHub returned no {self.options.push_method.value} URL for "
                f"{destination.full_name}"
            )
        Logger.debug(f"pushing to new repository: {url}")
        self.pusher.set_url(remote, url)
        output = self.pusher.push(remote, self.options.branch, self.options.all_branches)
        if output:
            Logger.debug(output)
        Logger.info(f"pushed {what} and tags to {destination.full_name}")

    def _report(self, error: MigrationError) -> None:
        Logger.error(f"{type(error).__name__}: {error}")
        if self.options.verbose:
            for line in traceback.format_exception(type(error), error, error.__traceback__):
                Logger.error(line.rstrip())
