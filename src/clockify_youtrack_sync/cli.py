"""Command-line interface for the Clockify to YouTrack synchronizer."""

import asyncio
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from clockify_youtrack_sync import __version__
from clockify_youtrack_sync.clockify import ClockifyClient
from clockify_youtrack_sync.config import Config
from clockify_youtrack_sync.date_range import DateRange, select_range
from clockify_youtrack_sync.exceptions import ConfigurationError
from clockify_youtrack_sync.sync import SyncEngine, SyncResult
from clockify_youtrack_sync.utils import get_logger, setup_logging
from clockify_youtrack_sync.youtrack import YouTrackClient

app = typer.Typer(help="Synchronize billable Clockify time entries to YouTrack work items")
console = Console()
logger = get_logger(__name__)


async def run_sync(config: Config, date_range: DateRange, dry_run: bool) -> SyncResult:
    """Build the clients from configuration and run one sync."""
    clockify_key = config.require_clockify_api_key()
    youtrack_url = config.require_youtrack_url()
    youtrack_token = config.require_youtrack_token()

    async with ClockifyClient(api_key=clockify_key) as clockify_client, YouTrackClient(
        base_url=youtrack_url, token=youtrack_token
    ) as youtrack_client:
        engine = SyncEngine(
            clockify_client=clockify_client,
            youtrack_client=youtrack_client,
            workspace_id=config.clockify_workspace_id,
            user_id=config.clockify_user_id,
        )
        return await engine.sync(date_range, dry_run=dry_run)


def _print_result(result: SyncResult) -> None:
    table = Table(title="Sync Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")
    table.add_row("Created", str(result.created))
    table.add_row("Already synced", str(result.already_synced))
    table.add_row("No issue", str(result.no_issue))
    console.print(table)


@app.command()
def sync(
    today: bool = typer.Option(
        False,
        "--today",
        help="Sync only today's entries.",
    ),
    yesterday: bool = typer.Option(
        False,
        "--yesterday",
        help="Sync only yesterday's entries (default).",
    ),
    last_n_days: Optional[int] = typer.Option(
        None,
        "--last-n-days",
        min=1,
        help="Sync entries from the last N days, excluding today.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Show what would be synced without creating work items.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging.",
    ),
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.clockify-youtrack-sync/",
    ),
) -> None:
    """Sync billable Clockify entries of a date window to YouTrack."""
    if sum([today, yesterday, last_n_days is not None]) > 1:
        console.print("[red]Use only one of --today, --yesterday and --last-n-days[/red]")
        raise typer.Exit(code=2)

    setup_logging(
        log_level=logging.DEBUG if verbose else logging.INFO,
        config_dir=config_dir,
    )
    logger.info(f"Clockify YouTrack Sync v{__version__}")

    date_range = select_range(datetime.now(timezone.utc), today=today, last_n_days=last_n_days)

    if dry_run:
        console.print("[bold cyan]Running in dry-run mode[/bold cyan]")
    console.print(f"Syncing entries from {date_range}")

    try:
        config = Config(config_dir)
        result = asyncio.run(run_sync(config, date_range, dry_run))
    except ConfigurationError as e:
        console.print(f"[yellow]{e}[/yellow]")
        raise typer.Exit(code=1)
    except httpx.HTTPError as e:
        logger.error(f"API request failed: {e}", exc_info=True)
        console.print(f"[red]Error: API request failed: {e}[/red]")
        raise typer.Exit(code=1)
    except Exception as e:
        logger.error(f"Sync failed: {e}", exc_info=True)
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    _print_result(result)


async def _check_connections(config: Config) -> None:
    clockify_key = config.clockify_api_key
    if clockify_key:
        try:
            async with ClockifyClient(api_key=clockify_key) as clockify_client:
                user = await clockify_client.get_current_user()
            console.print(f"[green]✓ Connected to Clockify as {user.get('name', 'user')}[/green]")
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Failed to connect to Clockify: {e}[/red]")

    youtrack_url = config.youtrack_url
    youtrack_token = config.youtrack_token
    if youtrack_url and youtrack_token:
        try:
            async with YouTrackClient(base_url=youtrack_url, token=youtrack_token) as youtrack_client:
                user = await youtrack_client.get_current_user()
                work_types = await youtrack_client.list_work_item_types()
            console.print(
                f"[green]✓ Connected to YouTrack as {user.get('login', 'user')} "
                f"({len(work_types)} work item types)[/green]"
            )
        except httpx.HTTPError as e:
            console.print(f"[red]✗ Failed to connect to YouTrack: {e}[/red]")


@app.command()
def configure(
    config_dir: Optional[Path] = typer.Option(
        None,
        "--config-dir",
        help="Configuration directory. Defaults to ~/.clockify-youtrack-sync/",
    ),
) -> None:
    """Store Clockify and YouTrack credentials and test the connections."""
    setup_logging(config_dir=config_dir)

    config = Config(config_dir, load_env_file=False)
    storage = config.storage

    console.print("[bold cyan]Clockify YouTrack Sync Configuration[/bold cyan]")
    console.print()

    console.print("[yellow]Clockify[/yellow]")
    clockify_key = Prompt.ask("Enter your Clockify API key", password=True)
    storage.set_token("clockify", clockify_key)
    workspace_id = Prompt.ask("Clockify workspace ID (empty for your default workspace)", default="")
    user_id = Prompt.ask("Clockify user ID (empty for the key's user)", default="")
    console.print()

    console.print("[yellow]YouTrack[/yellow]")
    youtrack_url = Prompt.ask("YouTrack REST API URL (e.g. https://example.youtrack.cloud/api)")
    youtrack_token = Prompt.ask("Enter your YouTrack permanent token", password=True)
    storage.set_token("youtrack", youtrack_token)

    config.update_settings(
        youtrack_url=youtrack_url,
        clockify_workspace_id=workspace_id,
        clockify_user_id=user_id,
    )
    console.print()

    console.print("[cyan]Testing connections...[/cyan]")
    asyncio.run(_check_connections(config))

    console.print("\n[green]Configuration complete![/green]")
    console.print("Run 'clockify-youtrack-sync sync --dry-run' to preview a sync.")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Clockify YouTrack Sync v{__version__}")


def main() -> None:
    """Main entry point."""
    try:
        app()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(130)


if __name__ == "__main__":
    main()
