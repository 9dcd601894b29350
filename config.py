#!/usr/bin/env python3
"""Configuration dataclasses for codecommit-to-github."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional
from urllib.parse import SplitResult

DEFAULT_REMOTE = "origin"
DEFAULT_BRANCH = "master"
DEFAULT_GITHUB_API = "https://api.github.com"


class PushMethod(Enum):
    """Enumeration for git push transports."""
    SSH = "ssh"
    HTTPS = "https"


class Visibility(Enum):
    """Enumeration for repository visibility levels."""
    PRIVATE = "private"
    PUBLIC = "public"


@dataclass(frozen=True)
class MigrationOptions:
    """Options for a single migration run, built once from the command line."""
    source_path: str
    token: str = ""
    remote: str = DEFAULT_REMOTE
    organization: Optional[str] = None
    make_public: bool = False
    aws_profile: Optional[str] = None
    verbose: bool = False
    dry_run: bool = False
    branch: str = DEFAULT_BRANCH
    all_branches: bool = False
    push_method: PushMethod = PushMethod.SSH
    api_url: str = DEFAULT_GITHUB_API

    @property
    def visibility(self) -> Visibility:
        return Visibility.PUBLIC if self.make_public else Visibility.PRIVATE


@dataclass(frozen=True)
class SourceRepositoryInfo:
    """CodeCommit repository as seen through the local remote and the API."""
    remote_url: SplitResult
    region: Optional[str]
    name: str
    description: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass
class CreateRepoRequest:
    """Repository creation request for GitHub."""
    name: str
    description: Optional[str]
    private: bool
    namespace: Optional[str] = None

    def as_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "private": self.private,
        }


@dataclass
class DestinationRepository:
    """Repository created on GitHub (or the request echoed back on a dry run)."""
    full_name: str
    private: bool
    description: Optional[str] = None
    ssh_url: Optional[str] = None
    clone_url: Optional[str] = None
    html_url: Optional[str] = None
    dry_run: bool = False
    raw: Dict[str, Any] = field(default_factory=dict)

    def push_url(self, method: PushMethod) -> Optional[str]:
        if method == PushMethod.HTTPS:
            return self.clone_url
        return self.ssh_url

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data.pop("raw")
        return data
