"""GitHub organization gateway."""

from .client import GitHubClient
from .dry_run import DryRunGateway
from .errors import FormatError, GitHubError, RejectedError, TransportError
from .gateway import OrganizationGateway
from .models import Team

__all__ = [
    "DryRunGateway",
    "FormatError",
    "GitHubClient",
    "GitHubError",
    "OrganizationGateway",
    "RejectedError",
    "Team",
    "TransportError",
]
