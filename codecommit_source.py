#!/usr/bin/env python3
"""AWS CodeCommit wrapper: recognise CodeCommit remotes and fetch repository metadata."""

from __future__ import annotations

import re
from typing import Any, Dict, Optional, Tuple
from urllib.parse import SplitResult, unquote, urlsplit

import boto3
from botocore.exceptions import BotoCoreError, ClientError, ProfileNotFound

from errors import NotSourceProviderError, SourceAPIError
from logging_utils import Logger

# git-codecommit.us-east-1.amazonaws.com, git-codecommit-fips.us-gov-west-1...,
# git-codecommit.cn-north-1.amazonaws.com.cn
CODECOMMIT_HOST_PATTERN = re.compile(
    r"^git-codecommit(?:-fips)?\.([a-z0-9-]+)\.amazonaws\.com(?:\.cn)?$",
    re.IGNORECASE,
)
# codecommit::us-east-1://repo, codecommit::us-east-1://profile@repo,
# codecommit://repo (git-remote-codecommit helper)
GRC_URL_PATTERN = re.compile(
    r"^codecommit(?:::(?P<region>[a-z0-9-]+))?://(?:(?P<profile>[^@/]+)@)?(?P<name>[^/]+)/?$",
    re.IGNORECASE,
)


def _strip_name(segment: str) -> str:
    name = unquote(segment)
    if name.endswith(".git"):
        name = name[: -len(".git")]
    return name


def parse_codecommit_url(url: str) -> Tuple[SplitResult, Optional[str], str, Optional[str]]:
    """Split a CodeCommit remote URL into (parsed url, region, repository name, profile).

    Region and name come from the hostname and the last path segment of the
    HTTPS/SSH clone URLs. The git-remote-codecommit form carries them (and an
    optional profile) directly; its region may be absent, leaving the choice to
    the AWS configuration.
    """
    url = url.strip()
    grc = GRC_URL_PATTERN.match(url)
    if grc:
        name = _strip_name(grc.group("name"))
        if not name:
            raise NotSourceProviderError(f"no repository name in remote URL: {url}")
        return urlsplit(url), grc.group("region"), name, grc.group("profile")

    parsed = urlsplit(url)
    host = parsed.hostname or ""
    match = CODECOMMIT_HOST_PATTERN.match(host)
    if not match:
        raise NotSourceProviderError(f"not an AWS CodeCommit repository: {url}")

    segments = [s for s in parsed.path.split("/") if s]
    name = _strip_name(segments[-1]) if segments else ""
    if not name:
        raise NotSourceProviderError(f"no repository name in remote URL: {url}")

    return parsed, match.group(1).lower(), name, None


class AwsCredentialProvider:
    """Builds boto3 sessions from a named profile or the default credential chain."""

    def __init__(self, profile: Optional[str] = None) -> None:
        self.profile = profile or None

    def with_fallback_profile(self, profile: Optional[str]) -> "AwsCredentialProvider":
        """Return a provider using ``profile`` unless one was already chosen."""
        if self.profile or not profile:
            return self
        return AwsCredentialProvider(profile)

    def session(self) -> boto3.session.Session:
        try:
            if self.profile:
                return boto3.session.Session(profile_name=self.profile)
            return boto3.session.Session()
        except ProfileNotFound as e:
            raise SourceAPIError(f"AWS profile not found: {self.profile}") from e


class CodeCommitSource:
    """Reads repository metadata from CodeCommit."""

    def __init__(self, credentials: Optional[AwsCredentialProvider] = None) -> None:
        self.credentials = credentials or AwsCredentialProvider()

    def get_repository(
        self,
        name: str,
        region: Optional[str],
        profile: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Return the ``repositoryMetadata`` mapping for ``name``."""
        credentials = self.credentials.with_fallback_profile(profile)
        where = region or "default region"
        profile_label = credentials.profile or "default"
        Logger.info(f"reading CodeCommit repository '{name}' ({where}, profile {profile_label})")
        try:
            client = credentials.session().client("codecommit", region_name=region)
            response = client.get_repository(repositoryName=name)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            raise SourceAPIError(
                f"CodeCommit lookup of '{name}' failed ({code}): {e}"
            ) from e
        except BotoCoreError as e:
            raise SourceAPIError(f"CodeCommit lookup of '{name}' failed: {e}") from e

        return response["repositoryMetadata"]
