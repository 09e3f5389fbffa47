"""Shared fixtures: an in-memory GitHub organization."""

from __future__ import annotations

from typing import Any

import pytest

from classroom_teams.github_client import Team
from classroom_teams.roster import Student
from classroom_teams.roster.roster_naming import generate_roster_id

ORG = "org"

WRITE_OPERATIONS = {
    "create_team",
    "delete_team",
    "invite_to_team",
    "remove_from_team",
    "remove_from_organization",
}


class FakeGitHub:
    """In-memory organization implementing the gateway contract.

    Every call is recorded in ``calls`` as a tuple ``(operation, *args)``.
    Calls listed in ``fail_on`` raise the given exception instead.
    """

    def __init__(
        self,
        teams: dict[str, str] | None = None,
        members: dict[str, list[str]] | None = None,
        invitations: dict[str, list[str]] | None = None,
    ):
        # slug -> display name
        self.teams: dict[str, str] = dict(teams or {})
        self.members: dict[str, list[str]] = {slug: [] for slug in self.teams}
        self.members.update({k: list(v) for k, v in (members or {}).items()})
        self.invitations: dict[str, list[str]] = {slug: [] for slug in self.teams}
        self.invitations.update({k: list(v) for k, v in (invitations or {}).items()})
        self.calls: list[tuple[Any, ...]] = []
        self.fail_on: dict[tuple[Any, ...], Exception] = {}

    def __enter__(self) -> FakeGitHub:
        return self

    def __exit__(self, *exc: Any) -> None:
        pass

    @property
    def mutations(self) -> list[tuple[Any, ...]]:
        return [call for call in self.calls if call[0] in WRITE_OPERATIONS]

    def count(self, *call: Any) -> int:
        return self.calls.count(call)

    def _record(self, *call: Any) -> None:
        self.calls.append(call)
        if call in self.fail_on:
            raise self.fail_on[call]

    def list_teams(self, org: str) -> list[Team]:
        self._record("list_teams", org)
        return [Team(display_name=name, slug=slug) for slug, name in self.teams.items()]

    def create_team(self, org: str, display_name: str) -> str | None:
        self._record("create_team", org, display_name)
        if display_name in self.teams.values():
            return None
        slug = display_name.lower().replace(" ", "-")
        self.teams[slug] = display_name
        self.members[slug] = []
        self.invitations[slug] = []
        return slug

    def delete_team(self, org: str, slug: str) -> None:
        self._record("delete_team", org, slug)
        self.teams.pop(slug, None)
        self.members.pop(slug, None)
        self.invitations.pop(slug, None)

    def list_team_members(self, org: str, slug: str) -> list[str]:
        self._record("list_team_members", org, slug)
        return list(self.members.get(slug, []))

    def list_team_invitations(self, org: str, slug: str) -> list[str]:
        self._record("list_team_invitations", org, slug)
        return list(self.invitations.get(slug, []))

    def invite_to_team(self, org: str, slug: str, login: str) -> None:
        self._record("invite_to_team", org, slug, login)
        if login not in self.members[slug] and login not in self.invitations[slug]:
            self.invitations[slug].append(login)

    def remove_from_team(self, org: str, slug: str, login: str) -> None:
        self._record("remove_from_team", org, slug, login)
        for relation in (self.members, self.invitations):
            if login in relation.get(slug, []):
                relation[slug].remove(login)

    def remove_from_organization(self, org: str, login: str) -> None:
        self._record("remove_from_organization", org, login)
        for relation in (self.members, self.invitations):
            for logins in relation.values():
                if login in logins:
                    logins.remove(login)


def make_student(name: str, group: str, login: str) -> Student:
    return Student(
        name=name,
        group=group,
        roster_id=generate_roster_id(name, group),
        login=login,
    )


@pytest.fixture
def messages() -> list[str]:
    """Collects the actions reported by the organization."""
    return []
