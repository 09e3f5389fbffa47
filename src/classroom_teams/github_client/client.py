"""GitHub REST API client for organization teams."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .errors import FormatError, RejectedError, TransportError
from .models import Team

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
PAGE_SIZE = 100

# Phrases GitHub uses in a 422 body when the team name is taken
NAME_CONFLICT_MARKERS = ("must be unique", "already exists", "already_exists")


class GitHubClient:
    """Client for the team and membership endpoints of the GitHub API.

    Implements :class:`~classroom_teams.github_client.gateway.OrganizationGateway`.
    Calls are synchronous and never retried.
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub API token with ``admin:org`` scope
            api_url: Base URL of the REST API
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        if not token or token.isspace():
            raise ValueError("Token cannot be blank")

        self.api_url = api_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                base_url=self.api_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": API_VERSION,
                },
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()
            self._client = None

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()

    # -- Teams ----------------------------------------------------------------

    def list_teams(self, org: str) -> list[Team]:
        """Fetch all teams of the organization."""
        items = self._paginate(
            f"/orgs/{org}/teams", f"get existing teams for organization '{org}'"
        )

        teams: list[Team] = []
        for item in items:
            name = item.get("name") if isinstance(item, dict) else None
            slug = item.get("slug") if isinstance(item, dict) else None
            if not _is_filled(name) or not _is_filled(slug):
                raise FormatError(
                    "Expected non-blank 'name' and 'slug' string fields in each team object, "
                    f"got: {item}"
                )
            teams.append(Team(display_name=name, slug=slug))
        return teams

    def create_team(self, org: str, display_name: str) -> str | None:
        """Create a closed team. Returns its slug, or None if it already exists."""
        response = self._request(
            "POST",
            f"/orgs/{org}/teams",
            json={"name": display_name, "privacy": "closed"},
        )

        if response.status_code == 422:
            if _is_name_conflict(response):
                logger.debug("Team '%s' already exists in '%s'", display_name, org)
            else:
                logger.warning(
                    "GitHub did not create team '%s' in '%s': %s",
                    display_name,
                    org,
                    response.text[:500],
                )
            return None

        action = f"create team '{display_name}' in organization '{org}'"
        self._expect(response, {201}, action)

        body = self._json(response, action)
        slug = body.get("slug") if isinstance(body, dict) else None
        if not isinstance(slug, str):
            raise FormatError(
                f"Expected 'slug' field of type string in created team object, got: {body}"
            )
        return slug

    def delete_team(self, org: str, slug: str) -> None:
        """Delete a team. A missing team (404) counts as deleted."""
        response = self._request("DELETE", f"/orgs/{org}/teams/{slug}")
        self._expect(
            response, {204, 404}, f"delete team (slug) '{slug}' in organization '{org}'"
        )

    # -- Team memberships -------------------------------------------------------

    def list_team_members(self, org: str, slug: str) -> list[str]:
        """Fetch the logins of the members of a team."""
        items = self._paginate(
            f"/orgs/{org}/teams/{slug}/members",
            f"get members of team (slug) '{slug}' in organization '{org}'",
        )
        return [self._login(item, "member") for item in items]

    def list_team_invitations(self, org: str, slug: str) -> list[str]:
        """Fetch the logins with a pending invitation to a team.

        Invitations sent to an email address without a GitHub account have no
        login and are left out.
        """
        items = self._paginate(
            f"/orgs/{org}/teams/{slug}/invitations",
            f"get invitations of team (slug) '{slug}' in organization '{org}'",
        )

        logins: list[str] = []
        for item in items:
            if isinstance(item, dict) and item.get("login") is None:
                logger.debug("Skipping email-only invitation to team '%s': %s", slug, item)
                continue
            logins.append(self._login(item, "invitation"))
        return logins

    def invite_to_team(self, org: str, slug: str, login: str) -> None:
        """Add or invite a user to a team (200: already member, 201: invited)."""
        response = self._request("PUT", f"/orgs/{org}/teams/{slug}/memberships/{login}")
        self._expect(
            response,
            {200, 201},
            f"add user '{login}' to team (slug) '{slug}' in organization '{org}'",
        )

    def remove_from_team(self, org: str, slug: str, login: str) -> None:
        """Remove a team membership or cancel a pending invitation."""
        response = self._request("DELETE", f"/orgs/{org}/teams/{slug}/memberships/{login}")
        self._expect(
            response,
            {204, 404},
            f"remove user '{login}' from team (slug) '{slug}' in organization '{org}'",
        )

    # -- Organization membership ----------------------------------------------

    def remove_from_organization(self, org: str, login: str) -> None:
        """Remove a user from the organization (404: not a member)."""
        response = self._request("DELETE", f"/orgs/{org}/members/{login}")
        self._expect(
            response, {204, 404}, f"remove user '{login}' from organization '{org}'"
        )

    # -- Helpers ----------------------------------------------------------------

    def _request(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        """Make an HTTP request, turning network failures into TransportError."""
        logger.debug("API %s %s params=%s", method, url, params)
        try:
            response = self.client.request(method, url, params=params, json=json)
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

        if response.status_code >= 400:
            logger.debug(
                "API error: %s %s -> %d: %s",
                method,
                url,
                response.status_code,
                response.text[:500],
            )
        return response

    def _paginate(self, path: str, action: str) -> list[Any]:
        """Fetch every page of a list endpoint, following ``Link: rel="next"``."""
        all_items: list[Any] = []
        url: str | None = path
        params: dict[str, Any] | None = {"per_page": PAGE_SIZE}

        while url:
            response = self._request("GET", url, params=params)
            self._expect(response, {200}, action)

            page = self._json(response, action)
            if not isinstance(page, list):
                raise FormatError(
                    f"Expected a JSON array when trying to {action}, got: {type(page).__name__}"
                )
            all_items.extend(page)

            next_link = response.links.get("next")
            url = next_link.get("url") if next_link else None
            # the next link already carries the query string
            params = None

        return all_items

    @staticmethod
    def _expect(response: httpx.Response, accepted: set[int], action: str) -> None:
        if response.status_code not in accepted:
            raise RejectedError(f"Failed to {action}", response.status_code, response.text)

    @staticmethod
    def _json(response: httpx.Response, action: str) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise FormatError(f"Invalid JSON when trying to {action}: {e}") from e

    @staticmethod
    def _login(item: Any, kind: str) -> str:
        login = item.get("login") if isinstance(item, dict) else None
        if not isinstance(login, str):
            raise FormatError(
                f"Expected 'login' field of type string in each {kind} object, got: {item}"
            )
        return login


def _is_filled(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _is_name_conflict(response: httpx.Response) -> bool:
    """Whether a 422 on team creation means the name is already taken."""
    text = response.text.lower()
    return any(marker in text for marker in NAME_CONFLICT_MARKERS)
