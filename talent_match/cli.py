"""
talent-match Command Line Interface

Operator tooling around the matching engine: inspect configuration,
check the database connection and compute a talent's ranked matches.
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="talent-match",
    help="Talent-listing matching engine CLI",
    add_completion=False,
)
console = Console()


@app.command()
def version():
    """Show application version."""
    from talent_match import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show configuration and database connectivity."""
    from talent_match.data.database import get_database_manager
    from talent_match.utils.config import get_settings
    from talent_match.utils.constants import APP_DISPLAY_NAME

    settings = get_settings()

    table = Table(title=f"{APP_DISPLAY_NAME} Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", f"{settings.database.host}:{settings.database.port}")
    table.add_row("Database Name", settings.database.name)
    table.add_row("Default Limit", str(settings.matching.default_limit or "all"))
    table.add_row("Query Timeout", f"{settings.matching.query_timeout_seconds}s")
    table.add_row("Personalization", str(settings.matching.personalize))
    table.add_row("Log Level", settings.logging.level)

    console.print(table)

    if get_database_manager().check_connection():
        console.print("[green]✓[/green] Connected to MongoDB")
    else:
        console.print("[red]✗[/red] Could not connect to MongoDB")


@app.command()
def match(
    user_id: str = typer.Argument(..., help="Talent user ID"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", min=1, help="Number of matches to show"),
    no_personalize: bool = typer.Option(False, "--no-personalize", help="Use static weights only"),
    prioritize_location: bool = typer.Option(False, "--prioritize-location", help="Use the location preset"),
    prioritize_guarantee: bool = typer.Option(False, "--prioritize-guarantee", help="Use the guarantee preset"),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON"),
):
    """Compute ranked listing matches for a talent."""
    from talent_match.core.exceptions import ConfigurationError, DataUnavailable, ProfileNotFound
    from talent_match.core.matching import MatchingEngine
    from talent_match.data.models import MatchOptions
    from talent_match.utils.logger import setup_logging

    # Keep JSON output free of INFO lines when both go to a terminal
    setup_logging(console_level="WARNING" if as_json else None)

    options = MatchOptions(
        limit=limit,
        personalize=False if no_personalize else None,
        prioritize_location=prioritize_location,
        prioritize_guarantee=prioritize_guarantee,
    )

    try:
        with MatchingEngine() as engine:
            results = engine.compute_matches(user_id, options)
    except ProfileNotFound as e:
        console.print(f"[yellow]{e}[/yellow]")
        console.print("[dim]The talent needs to register a profile before matches can be computed.[/dim]")
        raise typer.Exit(1)
    except (DataUnavailable, ConfigurationError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if as_json:
        payload = [r.model_dump(mode="json") for r in results]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    if not results:
        console.print("[yellow]No published listings matched.[/yellow]")
        return

    table = Table(title=f"Matches for {user_id}")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Score", style="bold green", justify="right")
    table.add_column("Store", style="cyan")
    table.add_column("Area")
    table.add_column("Service")
    table.add_column("Guarantee", justify="right")
    table.add_column("Reasons", style="dim")

    for rank, result in enumerate(results, start=1):
        guarantee = "-"
        if result.minimum_guarantee or result.maximum_guarantee:
            guarantee = f"{result.minimum_guarantee or '?'}-{result.maximum_guarantee or '?'}"
        table.add_row(
            str(rank),
            str(result.score),
            result.business_name or str(result.listing_id),
            result.location or "-",
            result.service_type or "-",
            guarantee,
            "\n".join(result.reasons),
        )

    console.print(table)


if __name__ == "__main__":
    app()
