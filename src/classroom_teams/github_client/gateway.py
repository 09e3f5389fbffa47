"""Contract between the reconciliation engine and the remote organization."""

from __future__ import annotations

from typing import Protocol

from .models import Team


class OrganizationGateway(Protocol):
    """Operations on teams and memberships of a GitHub organization.

    Every method may raise :class:`~classroom_teams.github_client.errors.TransportError`,
    :class:`~classroom_teams.github_client.errors.FormatError` or
    :class:`~classroom_teams.github_client.errors.RejectedError`.
    Write operations are idempotent.
    """

    def list_teams(self, org: str) -> list[Team]:
        """Return every team of *org*."""
        ...

    def create_team(self, org: str, display_name: str) -> str | None:
        """Create a team and return its slug, or None if nothing was created."""
        ...

    def delete_team(self, org: str, slug: str) -> None:
        """Delete a team. Deleting a missing team is not an error."""
        ...

    def list_team_members(self, org: str, slug: str) -> list[str]:
        """Return the logins of the accepted members of a team."""
        ...

    def list_team_invitations(self, org: str, slug: str) -> list[str]:
        """Return the logins with a pending invitation to a team."""
        ...

    def invite_to_team(self, org: str, slug: str, login: str) -> None:
        """Invite a user to a team. No-op if already a member or invitee."""
        ...

    def remove_from_team(self, org: str, slug: str, login: str) -> None:
        """Remove a member or cancel an invitation. No-op if not present."""
        ...

    def remove_from_organization(self, org: str, login: str) -> None:
        """Remove a user from the organization. No-op if not a member."""
        ...
