"""
Brand Savings - CLI Entry Point.

Usage:
    brand-savings estimate --spend 30000 --smart-bidding yes
    brand-savings serve               Start the API server
    brand-savings version             Show version
    brand-savings --help              Show help
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from brand_savings.errors import IntakeValidationError

app = typer.Typer(
    name="brand-savings",
    help="Brand Savings Calculator - estimate wasted branded search spend.",
    add_completion=False,
)
console = Console()


def configure_logging(level: str = "INFO", rich_tracebacks: bool = True) -> None:
    """Route stdlib logging through rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=rich_tracebacks)],
    )


@app.command()
def estimate(
    spend: int = typer.Option(30000, "--spend", "-s", help="Monthly brand spend in dollars (1000-200000, step 1000)"),
    smart_bidding: str = typer.Option("", "--smart-bidding", help="Using a smart bidding strategy? yes/no"),
    performance_target: str = typer.Option("", "--performance-target", help="Beating your target? yes/no"),
    brand_cpc: str = typer.Option("", "--brand-cpc", help="Brand CPC within 25% of nonbrand? yes/no"),
    impression_share: str = typer.Option("", "--impression-share", help="Impression share above 90%? yes/no"),
) -> None:
    """Print the waste estimate for a set of answers."""
    from intake.state import IntakeState

    state = IntakeState()
    try:
        state.set_spend(spend)
        state.set_answer("smart_bidding", smart_bidding)
        state.set_answer("performance_target", performance_target)
        state.set_answer("brand_cpc", brand_cpc)
        state.set_answer("impression_share", impression_share)
    except IntakeValidationError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    table = Table(show_header=False, box=None)
    table.add_row("Monthly spend", f"${spend:,}")
    for question, value in state.questionnaire.answers().items():
        if question == "match_type":
            continue
        table.add_row(question.replace("_", " ").title(), value or "[dim]unanswered[/dim]")

    console.print(table)
    console.print(
        Panel.fit(
            f"[bold green]{state.estimated_waste}[/bold green] per month",
            title="Estimated Waste",
            border_style="green",
        )
    )


@app.command()
def serve(
    port: int = typer.Option(8000, "--port", "-p", help="Port to run on"),
    reload: bool = typer.Option(False, "--reload", "-r", help="Enable auto-reload for development"),
) -> None:
    """Start the API server."""
    import os

    import uvicorn

    from brand_savings.config import get_settings

    settings = get_settings()
    # Plain tracebacks in production log collectors
    configure_logging(settings.log_level, rich_tracebacks=not settings.is_production)

    actual_port = int(os.environ.get("PORT", port))

    console.print(f"\n[bold green]Brand Savings Calculator[/bold green]")
    console.print(f"Starting server on http://localhost:{actual_port}")
    console.print(f"[dim]Press Ctrl+C to stop[/dim]\n")

    uvicorn.run(
        "brand_savings.web.app:app",
        host="0.0.0.0",
        port=actual_port,
        reload=reload,
        log_config=None,
    )


@app.command()
def version() -> None:
    """Show version information."""
    from brand_savings import __version__

    console.print(f"Brand Savings Calculator version {__version__}")


if __name__ == "__main__":
    app()
