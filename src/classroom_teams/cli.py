"""CLI interface for classroom-teams."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import AppConfig, GitHubConfig, load_config
from .github_client import DryRunGateway, GitHubClient, GitHubError, OrganizationGateway
from .logging_utils import setup_logging
from .organization import CleanResult, Organization, ReconcileResult
from .roster import InvalidRosterError, load_roster

# Run completed, but some invitations or removals were rejected by GitHub
EXIT_PARTIAL_FAILURE = 2

app = typer.Typer(
    name="classroom-teams",
    help="Keep the teams of a GitHub organization in line with a GitHub Classroom roster",
    no_args_is_help=True,
)
console = Console()

TokenOption = Annotated[
    str | None,
    typer.Option(
        "--token",
        "-t",
        help="GitHub API token. Defaults to GITHUB_TOKEN (environment or .env file)",
    ),
]
OrgOption = Annotated[
    str | None,
    typer.Option(
        "--org",
        "-o",
        help="GitHub organization name. Defaults to GITHUB_ORG (environment or .env file)",
    ),
]
DryRunOption = Annotated[
    bool,
    typer.Option("--dry-run", help="Show what would change without changing anything"),
]
ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to config file"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose/debug output"),
]


def get_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from file and environment."""
    try:
        return load_config(config_path)
    except Exception as e:
        console.print(f"[red]Error loading config: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None


def resolve_github(
    config_path: Path | None, token: str | None, org: str | None
) -> GitHubConfig:
    """Merge command line credentials over the loaded configuration."""
    github = get_config(config_path).github
    if token:
        github.token = token
    if org:
        github.org = org

    missing = []
    if not github.token:
        missing.append("GITHUB_TOKEN (--token)")
    if not github.org:
        missing.append("GITHUB_ORG (--org)")
    if missing:
        console.print(
            f"[red]Missing required settings: {', '.join(missing)}. "
            "Provide them on the command line, in the environment or in a '.env' file.[/red]"
        )
        raise typer.Exit(1)

    return github


def create_client(github: GitHubConfig) -> GitHubClient:
    """Create the GitHub API client."""
    return GitHubClient(github.token or "", api_url=github.api_url, timeout=github.timeout)


def print_action(message: str) -> None:
    """Print one action reported by the organization."""
    style = "yellow" if message.startswith("[Warning]") else None
    console.print(escape(message), style=style)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"classroom-teams {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit",
        ),
    ] = None,
) -> None:
    """Keep the teams of a GitHub organization in line with a GitHub Classroom roster."""


@app.command()
def sync(
    roster_file: Annotated[
        Path,
        typer.Argument(help="Roster CSV file downloaded from GitHub Classroom"),
    ] = Path("classroom_roster.csv"),
    token: TokenOption = None,
    org: OrgOption = None,
    dry_run: DryRunOption = False,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
) -> None:
    """
    Create, delete and fill group teams so they match the roster.

    Every group in the roster gets a team named 'group <group>' with its
    students invited. Group teams whose group is no longer in the roster are
    deleted. Teams not following the 'group ' naming are never touched.

    Examples:

        classroom-teams sync classroom_roster.csv -o my-course-org
        classroom-teams sync roster.csv --dry-run
    """
    github = resolve_github(config_path, token, org)
    setup_logging(verbose, token=github.token or "")

    try:
        students = load_roster(roster_file)
    except InvalidRosterError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1) from None

    if dry_run:
        console.print("[yellow]DRY RUN[/yellow] - no changes will be made\n")
    console.print(
        f"[bold]Updating organization[/bold] [cyan]{escape(github.org or '')}[/cyan] "
        f"from [cyan]{escape(str(roster_file))}[/cyan] ({len(students)} students)\n"
    )

    with create_client(github) as client:
        organization = Organization(
            github.org or "", _gateway(client, dry_run), log=print_action, dry_run=dry_run
        )
        try:
            result = organization.reconcile(students)
        except GitHubError as e:
            console.print(f"\n[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1) from None

    _display_reconcile_result(result)

    if result.students_invited and not dry_run:
        console.print(
            "\n[bold]Remember:[/bold] students have been invited to their teams, "
            "but they are not members until they accept the invitation sent to their email."
        )

    if not result.success:
        raise typer.Exit(EXIT_PARTIAL_FAILURE)


@app.command()
def clean(
    token: TokenOption = None,
    org: OrgOption = None,
    dry_run: DryRunOption = False,
    config_path: ConfigOption = None,
    verbose: VerboseOption = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt"),
    ] = False,
) -> None:
    """
    Delete every group team and remove its members from the organization.

    Teams not following the 'group ' naming, and their members, are kept.
    """
    github = resolve_github(config_path, token, org)
    setup_logging(verbose, token=github.token or "")

    if dry_run:
        console.print("[yellow]DRY RUN[/yellow] - no changes will be made\n")
    elif not yes:
        console.print(
            f"[yellow]This will DELETE every group team of '{escape(github.org or '')}' "
            "and REMOVE their members and invitees from the organization.[/yellow]"
        )
        if not typer.confirm("Are you sure?"):
            console.print("Cancelled.")
            raise typer.Exit(0)

    with create_client(github) as client:
        organization = Organization(
            github.org or "", _gateway(client, dry_run), log=print_action, dry_run=dry_run
        )
        try:
            result = organization.clean_all()
        except GitHubError as e:
            console.print(f"\n[red]Error: {escape(str(e))}[/red]")
            raise typer.Exit(1) from None

    _display_clean_result(result)

    if not result.success:
        raise typer.Exit(EXIT_PARTIAL_FAILURE)


@app.command()
def config(
    config_path: ConfigOption = None,
) -> None:
    """Show current configuration (with secrets masked)."""
    github = get_config(config_path).github

    table = Table(title="Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("GitHub Organization", escape(github.org) if github.org else "[red]Not set[/red]")
    table.add_row("GitHub Token", f"{github.token[:8]}..." if github.token else "[red]Not set[/red]")
    table.add_row("API URL", github.api_url)
    table.add_row("Timeout", f"{github.timeout:g} seconds")

    console.print(table)


def _gateway(client: GitHubClient, dry_run: bool) -> OrganizationGateway:
    return DryRunGateway(client) if dry_run else client


def _display_reconcile_result(result: ReconcileResult) -> None:
    """Display sync result with formatting."""
    table = Table(title="Sync Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count")

    table.add_row("Teams created", str(len(result.teams_created)))
    table.add_row("Teams deleted", str(len(result.teams_deleted)))
    table.add_row("Students invited", str(len(result.students_invited)))
    table.add_row("Students removed", str(len(result.students_removed)))
    table.add_row(
        "Failed", f"[red]{len(result.failures)}[/red]" if result.failures else "0"
    )

    console.print()
    console.print(table)
    _display_failures(result.failures)

    if result.dry_run:
        console.print("\n[yellow]DRY RUN - no changes made[/yellow]")
    elif result.success and result.total_changes == 0:
        console.print("\n[dim]Organization already up to date[/dim]")
    elif result.success:
        console.print("\n[green]✓ Sync completed successfully[/green]")
    else:
        console.print("\n[red]✗ Sync completed with errors[/red]")


def _display_clean_result(result: CleanResult) -> None:
    """Display clean result with formatting."""
    table = Table(title="Clean Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count")

    table.add_row("Users removed from organization", str(len(result.members_removed)))
    table.add_row("Teams deleted", str(len(result.teams_deleted)))
    table.add_row(
        "Failed", f"[red]{len(result.failures)}[/red]" if result.failures else "0"
    )

    console.print()
    console.print(table)
    _display_failures(result.failures)

    if result.dry_run:
        console.print("\n[yellow]DRY RUN - no changes made[/yellow]")
    elif not result.teams_deleted:
        console.print("\n[dim]No group teams found[/dim]")
    elif result.success:
        console.print("\n[green]✓ Clean completed successfully[/green]")
    else:
        console.print("\n[red]✗ Clean completed with errors[/red]")


def _display_failures(failures: list[str]) -> None:
    if failures:
        console.print("\n[red]Skipped operations:[/red]")
        for failure in failures:
            console.print(f"  - {escape(failure)}")


if __name__ == "__main__":
    app()
