#!/usr/bin/env python3
"""GitHub API wrapper for creating the destination repository."""

from __future__ import annotations

from typing import Any, Optional

import github
import requests
from github.GithubObject import NotSet

from config import (DEFAULT_GITHUB_API, CreateRepoRequest, DestinationRepository,
                    MigrationOptions, SourceRepositoryInfo)
from errors import DestinationAPIError, MissingCredentialsError
from logging_utils import Logger


def build_request(
    source: SourceRepositoryInfo, options: MigrationOptions
) -> CreateRepoRequest:
    """Describe the GitHub repository mirroring ``source``."""
    return CreateRepoRequest(
        name=source.name,
        description=source.description,
        private=not options.make_public,
        namespace=options.organization or None,
    )


class GitHubTarget:
    """Wrapper around GitHub API to create the repository under a user or org."""

    def __init__(
        self,
        token: Optional[str],
        api_url: str = DEFAULT_GITHUB_API,
        dry_run: bool = False,
    ) -> None:
        self.token = token or ""
        self.api_url = api_url.rstrip("/")
        self.dry_run = dry_run
        self.api: Optional[github.Github] = None

    def _get_api_headers(self) -> dict:
        """Get standard API headers for GitHub requests."""
        return {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {self.token}",
            "X-GitHub-Api-Version": "2022-11-28",
        }

    def connect(self) -> github.Github:
        if self.api is None:
            Logger.debug(f"init github API: {self.api_url}")
            auth = github.Auth.Token(self.token)
            self.api = github.Github(base_url=self.api_url, auth=auth)
        return self.api

    def _check_org_visibility(self, org_name: str) -> None:
        """Check the organization exists and is visible to the token."""
        org_url = f"{self.api_url}/orgs/{org_name}"
        try:
            r_org = requests.get(org_url, headers=self._get_api_headers(), timeout=30)
        except requests.RequestException as e:
            raise DestinationAPIError(f"failed to contact github api: {e}") from e

        if r_org.status_code == 401:
            raise DestinationAPIError(
                "unauthorized (401): token invalid or not authorized for GitHub API"
            )
        if r_org.status_code == 403:
            raise DestinationAPIError(
                "forbidden (403): token lacks permission to access the organization. "
                "Possible causes: missing read:org scope, "
                "fine-grained token not granted to the org, "
                "or SAML SSO not authorized for this token."
            )
        if r_org.status_code == 404:
            raise DestinationAPIError(
                f"not found (404): organization '{org_name}' does not "
                "exist or is not visible to this token (not a member)."
            )
        if r_org.status_code != 200:
            Logger.warn(
                f"unexpected response checking org visibility: {r_org.status_code}"
            )

    def _namespace(self, request: CreateRepoRequest) -> Any:
        api = self.connect()
        if request.namespace:
            self._check_org_visibility(request.namespace)
            return api.get_organization(request.namespace)
        return api.get_user()

    def create_repo(self, request: CreateRepoRequest) -> DestinationRepository:
        """Create the repository, or echo the request back on a dry run."""
        if not self.token:
            raise MissingCredentialsError()

        owner = request.namespace or "authenticated user"
        if self.dry_run:
            Logger.debug(f"dry run: would create {owner}/{request.name}", str(request.as_payload()))
            full_name = f"{request.namespace}/{request.name}" if request.namespace else request.name
            return DestinationRepository(
                full_name=full_name,
                private=request.private,
                description=request.description,
                dry_run=True,
                raw=request.as_payload(),
            )

        try:
            entity = self._namespace(request)
            repo = entity.create_repo(
                name=request.name,
                description=request.description if request.description is not None else NotSet,
                private=request.private,
                auto_init=False,
            )
        except github.BadCredentialsException as e:
            raise DestinationAPIError("authentication failed (github): invalid token") from e
        except github.GithubException as e:
            raise DestinationAPIError(
                f"failed to create repo '{request.name}' for {owner}: {e}"
            ) from e
        except requests.RequestException as e:
            raise DestinationAPIError(f"failed to contact github api: {e}") from e

        Logger.info(f"created repo: {repo.full_name}")
        return DestinationRepository(
            full_name=repo.full_name,
            private=repo.private,
            description=repo.description,
            ssh_url=repo.ssh_url,
            clone_url=repo.clone_url,
            html_url=repo.html_url,
            raw=dict(repo.raw_data),
        )
