"""Gateway wrapper that reads the organization but never changes it."""

from __future__ import annotations

import logging

from .gateway import OrganizationGateway
from .models import Team

logger = logging.getLogger(__name__)


class DryRunGateway:
    """Forwards read operations and turns write operations into no-ops.

    Used for ``--dry-run``: the engine sees the real organization and reports
    every action it would take, but nothing reaches GitHub.
    """

    def __init__(self, delegate: OrganizationGateway):
        if delegate is None:
            raise ValueError("Delegate gateway cannot be None")
        self.delegate = delegate

    # Reads

    def list_teams(self, org: str) -> list[Team]:
        return self.delegate.list_teams(org)

    def list_team_members(self, org: str, slug: str) -> list[str]:
        return self.delegate.list_team_members(org, slug)

    def list_team_invitations(self, org: str, slug: str) -> list[str]:
        return self.delegate.list_team_invitations(org, slug)

    # Writes

    def create_team(self, org: str, display_name: str) -> str | None:
        # no real team, so no slug
        logger.debug("[DRY RUN] Skipping creation of team '%s'", display_name)
        return None

    def delete_team(self, org: str, slug: str) -> None:
        logger.debug("[DRY RUN] Skipping deletion of team '%s'", slug)

    def invite_to_team(self, org: str, slug: str, login: str) -> None:
        logger.debug("[DRY RUN] Skipping invitation of '%s' to team '%s'", login, slug)

    def remove_from_team(self, org: str, slug: str, login: str) -> None:
        logger.debug("[DRY RUN] Skipping removal of '%s' from team '%s'", login, slug)

    def remove_from_organization(self, org: str, login: str) -> None:
        logger.debug("[DRY RUN] Skipping removal of '%s' from organization '%s'", login, org)
