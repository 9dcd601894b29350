#!/usr/bin/env python3
"""Security validation utilities for codecommit-to-github."""

import re
from typing import List, Optional


class SecurityValidator:
    """Security validation utilities for input sanitization and validation."""

    MAX_URL_LENGTH = 2048
    MAX_LOGIN_LENGTH = 39
    MAX_REF_NAME_LENGTH = 255

    # GitHub logins: alphanumerics and single hyphens, no leading/trailing hyphen
    SAFE_LOGIN_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9]|-(?=[A-Za-z0-9]))*$")

    @classmethod
    def validate_url(cls, url: str, allowed_schemes: Optional[List[str]] = None) -> str:
        """Validate an API URL and return it without a trailing slash."""
        if not url or not isinstance(url, str):
            raise ValueError("URL must be a non-empty string")

        if len(url) > cls.MAX_URL_LENGTH:
            raise ValueError(f"URL exceeds maximum length of {cls.MAX_URL_LENGTH}")

        if "\x00" in url or any(ord(c) < 32 for c in url):
            raise ValueError("URL contains null bytes or control characters")

        if "://" not in url:
            raise ValueError(f"URL has no scheme: {url}")

        scheme = url.split("://")[0].lower()
        if allowed_schemes and scheme not in allowed_schemes:
            raise ValueError(
                f"URL scheme '{scheme}' not in allowed schemes: {allowed_schemes}"
            )

        return url.rstrip("/")

    @classmethod
    def validate_login(cls, login: str) -> str:
        """Validate a GitHub user or organization login."""
        if not login or not isinstance(login, str):
            raise ValueError("Organization must be a non-empty string")

        if len(login) > cls.MAX_LOGIN_LENGTH:
            raise ValueError(
                f"Organization exceeds maximum length of {cls.MAX_LOGIN_LENGTH}"
            )

        if not cls.SAFE_LOGIN_PATTERN.match(login):
            raise ValueError(f"Organization contains invalid characters: {login}")

        return login

    @classmethod
    def validate_ref_name(cls, name: str, kind: str = "name") -> str:
        """Validate a remote or branch name before it reaches a git command line."""
        if not name or not isinstance(name, str):
            raise ValueError(f"{kind} must be a non-empty string")

        if len(name) > cls.MAX_REF_NAME_LENGTH:
            raise ValueError(
                f"{kind} exceeds maximum length of {cls.MAX_REF_NAME_LENGTH}"
            )

        if name.startswith("-"):
            raise ValueError(f"{kind} must not start with '-': {name}")

        if any(ord(c) < 33 or ord(c) == 127 for c in name):
            raise ValueError(f"{kind} contains whitespace or control characters")

        return name

    @classmethod
    def sanitize_for_logging(cls, message: str) -> str:
        """Sanitize message for safe logging by removing potential credentials."""
        if not message:
            return message

        # Patterns to redact
        patterns = [
            (r"(https?|ssh)://[^/@\s]+@", r"\1://[REDACTED]@"),  # URLs with userinfo
            (r"token[=:]\s*[^\s]+", "token=[REDACTED]"),  # Token assignments
            (r"password[=:]\s*[^\s]+", "password=[REDACTED]"),  # Password assignments
            (r"gh[pousr]_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # GitHub tokens
            (r"github_pat_[A-Za-z0-9_]+", "[GITHUB_TOKEN_REDACTED]"),  # Fine-grained
            (r"\b(AKIA|ASIA)[0-9A-Z]{16}\b", "[AWS_KEY_REDACTED]"),  # AWS key ids
        ]

        sanitized = message
        for pattern, replacement in patterns:
            sanitized = re.sub(pattern, replacement, sanitized, flags=re.IGNORECASE)

        return sanitized
