"""Errors raised by organization gateways."""

from __future__ import annotations


class GitHubError(Exception):
    """Base exception for GitHub API errors."""


class TransportError(GitHubError):
    """Network or I/O failure while talking to GitHub."""


class FormatError(GitHubError):
    """GitHub answered with an unexpected shape.

    Probably the API has changed and the client needs to be updated.
    """


class RejectedError(GitHubError):
    """GitHub refused the operation (permissions, policy, validation...)."""

    def __init__(self, message: str, status_code: int | None = None, response: str | None = None):
        full_message = message
        if status_code is not None:
            full_message = f"{message}. Status: {status_code}"
        if response:
            full_message = f"{full_message}. Response: {response[:500]}"
        super().__init__(full_message)
        self.status_code = status_code
        self.response = response
