"""Reconciles the group teams of a GitHub organization with a roster."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from .github_client import OrganizationGateway, RejectedError
from .naming import is_group_team, to_group, to_team_name
from .roster import Student

# Observer notified once per action taken (or skipped after a failure)
ActionLogger = Callable[[str], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupTeam:
    """A team that follows the group naming convention."""

    display_name: str
    slug: str
    group: str


@dataclass
class ReconcileResult:
    """Result of a sync run."""

    teams_created: list[str] = field(default_factory=list)
    teams_deleted: list[str] = field(default_factory=list)
    students_invited: list[str] = field(default_factory=list)
    students_removed: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def total_changes(self) -> int:
        return (
            len(self.teams_created)
            + len(self.teams_deleted)
            + len(self.students_invited)
            + len(self.students_removed)
        )

    @property
    def success(self) -> bool:
        return len(self.failures) == 0


@dataclass
class CleanResult:
    """Result of a clean run."""

    members_removed: list[str] = field(default_factory=list)
    teams_deleted: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def success(self) -> bool:
        return len(self.failures) == 0


class Organization:
    """
    A GitHub organization whose group teams mirror a classroom roster.

    Only teams named after a group (see :mod:`classroom_teams.naming`) are
    created, changed or deleted; any other team is left alone.

    Remote state is read again before every decision, nothing is cached
    between calls. Listing, creating and deleting teams is fail-fast.
    Inviting or removing a single user is fail-soft: a ``RejectedError`` is
    reported, recorded in the result and the run goes on.
    """

    def __init__(
        self,
        name: str,
        gateway: OrganizationGateway,
        log: ActionLogger | None = None,
        dry_run: bool = False,
    ):
        if gateway is None:
            raise ValueError("Gateway cannot be None")
        if not name or name.isspace():
            raise ValueError("Organization name cannot be blank")

        self.name = name
        self.gateway = gateway
        self.log = log or logger.info
        self.dry_run = dry_run

    def reconcile(self, students: list[Student]) -> ReconcileResult:
        """
        Update teams and memberships so they match *students*.

        Creates a team for every group in the roster, deletes group teams
        whose group is gone, then converges the membership of every group
        team to the students of its group.

        Args:
            students: Roster of students, each with its group

        Returns:
            ReconcileResult with every action taken and any skipped failure

        Raises:
            GitHubError: If a team listing, creation or deletion fails, or
                a transport/format error happens at any point
        """
        result = ReconcileResult(dry_run=self.dry_run)
        required_groups = list(dict.fromkeys(student.group for student in students))

        existing_teams = self._group_teams()
        self._create_missing_teams(required_groups, existing_teams, result)
        self._delete_stale_teams(required_groups, existing_teams, result)

        # Fresh snapshot: new teams only get a slug once created
        for team in self._group_teams():
            team_students = [s for s in students if s.group == team.group]
            if team_students:
                self._converge_members(team, team_students, result)

        return result

    def clean_all(self) -> CleanResult:
        """
        Remove every group team and, best effort, its users from the organization.

        The members and pending invitees of all group teams are collected
        first, each of them is removed from the organization, and only then
        are the teams deleted (a deleted team can no longer be queried).

        Raises:
            GitHubError: If listing or deleting teams fails, or a
                transport/format error happens at any point
        """
        result = CleanResult(dry_run=self.dry_run)

        teams = self._group_teams()
        if not teams:
            return result

        logins: dict[str, None] = {}
        for team in teams:
            logins.update(dict.fromkeys(self._reached_logins(team)))

        for login in logins:
            try:
                self.gateway.remove_from_organization(self.name, login)
            except RejectedError as e:
                self._fail(result.failures, f"could not remove '{login}' from organization", e)
                continue
            result.members_removed.append(login)
            self.log(f"[Removed from organization] '{login}'")

        for team in teams:
            self.gateway.delete_team(self.name, team.slug)
            result.teams_deleted.append(team.display_name)
            self.log(f"[Deleted team] '{team.display_name}'")

        return result

    def _create_missing_teams(
        self, groups: list[str], existing: list[GroupTeam], result: ReconcileResult
    ) -> None:
        existing_names = {team.display_name for team in existing}
        for team_name in map(to_team_name, groups):
            if team_name in existing_names:
                continue
            self.gateway.create_team(self.name, team_name)
            result.teams_created.append(team_name)
            self.log(f"[Created team] '{team_name}'")

    def _delete_stale_teams(
        self, groups: list[str], existing: list[GroupTeam], result: ReconcileResult
    ) -> None:
        required = set(groups)
        for team in existing:
            if team.group in required:
                continue
            self.gateway.delete_team(self.name, team.slug)
            result.teams_deleted.append(team.display_name)
            self.log(f"[Deleted team] '{team.display_name}'")

    def _converge_members(
        self, team: GroupTeam, students: list[Student], result: ReconcileResult
    ) -> None:
        already_reached = self._reached_logins(team)
        desired_logins = {student.login for student in students}

        for student in students:
            if student.login in already_reached:
                continue
            try:
                self.gateway.invite_to_team(self.name, team.slug, student.login)
            except RejectedError as e:
                self._fail(
                    result.failures,
                    f"could not invite '{student.login}' to team '{team.display_name}'",
                    e,
                )
                continue
            result.students_invited.append(student.login)
            self.log(f"[Invited student] '{student.name}' to team '{team.display_name}'")

        for login in already_reached:
            if login in desired_logins:
                continue
            try:
                self.gateway.remove_from_team(self.name, team.slug, login)
            except RejectedError as e:
                self._fail(
                    result.failures,
                    f"could not remove '{login}' from team '{team.display_name}'",
                    e,
                )
                continue
            result.students_removed.append(login)
            self.log(f"[Removed student] '{login}' from team '{team.display_name}'")

    def _reached_logins(self, team: GroupTeam) -> list[str]:
        """Members plus pending invitees of *team*, without duplicates."""
        members = self.gateway.list_team_members(self.name, team.slug)
        invitees = self.gateway.list_team_invitations(self.name, team.slug)
        return list(dict.fromkeys([*members, *invitees]))

    def _group_teams(self) -> list[GroupTeam]:
        """Teams of the organization that correspond to groups."""
        return [
            GroupTeam(team.display_name, team.slug, to_group(team.display_name))
            for team in self.gateway.list_teams(self.name)
            if is_group_team(team.display_name)
        ]

    def _fail(self, failures: list[str], what: str, error: Exception) -> None:
        failures.append(f"{what}: {error}")
        self.log(f"[Warning] {what}: {error}")

