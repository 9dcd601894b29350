#!/usr/bin/env python3
"""Exception hierarchy for codecommit-to-github."""

from __future__ import annotations

TOKEN_HELP_URL = (
    "https://docs.github.com/en/authentication/keeping-your-account-and-data-secure/"
    "managing-your-personal-access-tokens"
)


class MigrationError(Exception):
    """Base exception for migration errors. Every subclass is terminal."""


class NoRepositoryError(MigrationError):
    """Raised when the path holds no git repository or the remote is missing."""


class NotSourceProviderError(MigrationError):
    """Raised when the remote URL does not point at AWS CodeCommit."""


class SourceAPIError(MigrationError):
    """Raised when the CodeCommit lookup fails."""


class MissingCredentialsError(MigrationError):
    """Raised when no GitHub token was supplied."""

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or f"personal access token required (use --token): {TOKEN_HELP_URL}"
        )


class DestinationAPIError(MigrationError):
    """Raised when GitHub rejects or fails the repository creation."""


class RemoteUpdateError(MigrationError):
    """Raised when git refuses to change the remote URL."""


class PushError(MigrationError):
    """Raised when pushing to the new remote fails."""
