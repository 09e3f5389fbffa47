"""Tests for the command line interface."""

import pytest
from conftest import ORG, FakeGitHub
from rich.console import Console
from typer.testing import CliRunner

from classroom_teams import __version__, cli
from classroom_teams.github_client import FormatError, RejectedError, TransportError

runner = CliRunner()

ROSTER = (
    '"identifier","github_username","github_id","name"\n'
    '"Alice (A)","alice","1",""\n'
    '"Bob (B)","bob","2",""\n'
)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run every command in an empty directory with no GitHub settings."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(cli, "console", Console(width=200))
    for name in ("GITHUB_TOKEN", "GITHUB_ORG", "GITHUB_API_URL", "GITHUB_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def github(monkeypatch):
    fake = FakeGitHub(teams={"group-a": "group A", "group-old": "group old"})
    monkeypatch.setattr(cli, "create_client", lambda settings: fake)
    return fake


@pytest.fixture
def roster_file(tmp_path):
    path = tmp_path / "classroom_roster.csv"
    path.write_text(ROSTER, encoding="utf-8")
    return path


def test_version():
    result = runner.invoke(cli.app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_sync_applies_the_roster(github, roster_file):
    result = runner.invoke(cli.app, ["sync", str(roster_file), "-t", "tok", "-o", ORG])

    assert result.exit_code == 0, result.output
    assert "[Created team] 'group B'" in result.output
    assert "[Deleted team] 'group old'" in result.output
    assert github.invitations["group-a"] == ["alice"]
    assert github.invitations["group-b"] == ["bob"]
    assert "Remember" in result.output


def test_sync_uses_default_roster_and_environment(github, roster_file, monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    monkeypatch.setenv("GITHUB_ORG", ORG)

    result = runner.invoke(cli.app, ["sync"])

    assert result.exit_code == 0, result.output
    assert github.count("create_team", ORG, "group B") == 1


def test_sync_reads_dotenv_file(github, roster_file, tmp_path):
    (tmp_path / ".env").write_text(f"GITHUB_TOKEN=dotenv-token\nGITHUB_ORG={ORG}\n")

    result = runner.invoke(cli.app, ["sync"])

    assert result.exit_code == 0, result.output
    assert github.count("list_teams", ORG) == 2


def test_sync_dry_run_changes_nothing(github, roster_file):
    result = runner.invoke(cli.app, ["sync", str(roster_file), "-t", "tok", "-o", ORG, "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "DRY RUN" in result.output
    assert "[Created team] 'group B'" in result.output
    assert github.mutations == []


def test_sync_exits_2_when_some_operations_were_skipped(github, roster_file):
    github.fail_on[("invite_to_team", ORG, "group-a", "alice")] = RejectedError("nope", 422)

    result = runner.invoke(cli.app, ["sync", str(roster_file), "-t", "tok", "-o", ORG])

    assert result.exit_code == cli.EXIT_PARTIAL_FAILURE
    assert "Skipped operations" in result.output
    assert github.invitations["group-b"] == ["bob"]


def test_sync_exits_1_on_github_errors(github, roster_file):
    github.fail_on[("list_teams", ORG)] = TransportError("connection refused")

    result = runner.invoke(cli.app, ["sync", str(roster_file), "-t", "tok", "-o", ORG])

    assert result.exit_code == 1
    assert "connection refused" in result.output


def test_sync_requires_token_and_org(github, roster_file):
    result = runner.invoke(cli.app, ["sync", str(roster_file)])

    assert result.exit_code == 1
    assert "GITHUB_TOKEN" in result.output
    assert "GITHUB_ORG" in result.output
    assert github.calls == []


def test_sync_rejects_invalid_roster(github, tmp_path):
    path = tmp_path / "roster.csv"
    path.write_text("identifier,github_username\nAlice,alice\n", encoding="utf-8")

    result = runner.invoke(cli.app, ["sync", str(path), "-t", "tok", "-o", ORG])

    assert result.exit_code == 1
    assert "not a valid roster file" in result.output
    assert github.calls == []


def test_clean_asks_for_confirmation(github):
    result = runner.invoke(cli.app, ["clean", "-t", "tok", "-o", ORG], input="n\n")

    assert result.exit_code == 0
    assert "Cancelled" in result.output
    assert github.calls == []


def test_clean_with_yes_deletes_group_teams(github):
    github.members["group-a"] = ["alice"]

    result = runner.invoke(cli.app, ["clean", "-t", "tok", "-o", ORG, "--yes"])

    assert result.exit_code == 0, result.output
    assert github.teams == {}
    assert github.count("remove_from_organization", ORG, "alice") == 1


def test_clean_dry_run_skips_confirmation_and_changes_nothing(github):
    result = runner.invoke(cli.app, ["clean", "-t", "tok", "-o", ORG, "--dry-run"])

    assert result.exit_code == 0, result.output
    assert "[Deleted team] 'group A'" in result.output
    assert github.mutations == []


def test_config_masks_the_token(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "ghp_1234567890abcdef")
    monkeypatch.setenv("GITHUB_ORG", ORG)

    result = runner.invoke(cli.app, ["config"])

    assert result.exit_code == 0
    assert "ghp_1234..." in result.output
    assert "ghp_1234567890abcdef" not in result.output


def test_sync_reports_unreadable_roster(github, tmp_path):
    result = runner.invoke(cli.app, ["sync", str(tmp_path), "-t", "tok", "-o", ORG])

    assert result.exit_code == 1
    assert "not a valid roster file" in result.output
    assert github.calls == []


def test_sync_reports_malformed_team_listing(github, roster_file):
    github.fail_on[("list_teams", ORG)] = FormatError("Expected non-blank 'name'")

    result = runner.invoke(cli.app, ["sync", str(roster_file), "-t", "tok", "-o", ORG])

    assert result.exit_code == 1
    assert "non-blank" in result.output
