"""Command-line interface for the site auditor."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .config import settings
from .errors import AuditError
from .models import AnalysisReport, PageSpeedDegraded, PageSpeedOk
from .orchestrator import AuditOrchestrator
from .storage import StorageManager
from .utils import setup_logging

app = typer.Typer(
    name="site-auditor",
    help="Audit a web page for SEO, trust pages, UX and PageSpeed metrics.",
    no_args_is_help=True,
)
console = Console()

SEVERITY_STYLES = {
    "critical": "bold red",
    "high": "red",
    "medium": "yellow",
    "low": "dim",
}


@app.command()
def audit(
    url: str = typer.Argument(..., help="The domain or URL to audit"),
    output_dir: Path = typer.Option(None, "--output", "-o", help="Save the report under this directory"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    skip_pagespeed: bool = typer.Option(False, "--no-pagespeed", help="Skip the PageSpeed Insights call"),
    api_key: str = typer.Option(
        None, "--api-key", envvar="PAGESPEED_API_KEY",
        help="PageSpeed API key (or set PAGESPEED_API_KEY env var)",
    ),
    lenient_trust: bool = typer.Option(
        False, "--lenient-trust", help="Match trust keywords against page text, not only links"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Audit a single page and print the report."""
    setup_logging(verbose)

    overrides = {}
    if api_key:
        overrides["pagespeed_api_key"] = api_key
    if skip_pagespeed:
        overrides["pagespeed_enabled"] = False
    if lenient_trust:
        overrides["lenient_trust_detection"] = True
    run_settings = settings.model_copy(update=overrides)

    if not as_json:
        console.print(Panel.fit(
            f"[bold blue]Site Auditor[/bold blue]\n"
            f"Auditing: [green]{url}[/green]\n"
            f"PageSpeed: {'off' if not run_settings.pagespeed_enabled else 'on'}",
            title="Starting Audit",
        ))

    try:
        report = asyncio.run(AuditOrchestrator(settings=run_settings).run(url))

        saved_path = None
        if output_dir is not None:
            storage = StorageManager(report.final_url, output_dir)
            saved_path = asyncio.run(storage.save_analysis_report(report))

    except KeyboardInterrupt:
        console.print("\n[yellow]Audit cancelled by user[/yellow]")
        raise typer.Exit(1)
    except AuditError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    else:
        _display_results(report)

    if saved_path is not None:
        console.print(f"Report saved to [cyan]{saved_path}[/cyan]")


def _display_results(report: AnalysisReport) -> None:
    """Display audit results in formatted tables."""
    console.print()

    scores = report.scores
    table = Table(title="Scores", show_header=True)
    table.add_column("Dimension", style="cyan")
    table.add_column("Score", style="green", justify="right")
    table.add_row("Total", str(scores.total))
    table.add_row("Performance", str(scores.performance) if scores.performance is not None else "n/a")
    table.add_row("SEO", str(scores.seo))
    table.add_row("UX", str(scores.ux))
    table.add_row("Trust", str(scores.trust))
    console.print(table)

    console.print(f"Final URL: [cyan]{report.final_url}[/cyan] (HTTP {report.http_status or 'n/a'})")
    console.print(f"Platform: {report.platform}")

    if isinstance(report.pagespeed, PageSpeedOk):
        metrics = report.pagespeed.result.metrics
        console.print(
            f"Core Web Vitals: LCP {metrics.lcp_ms or 'n/a'} ms | "
            f"CLS {metrics.cls if metrics.cls is not None else 'n/a'} | "
            f"INP {metrics.inp_ms or 'n/a'} ms"
        )
    elif isinstance(report.pagespeed, PageSpeedDegraded):
        console.print(f"[yellow]Speed data unavailable: {report.pagespeed.error}[/yellow]")

    trust = Table(title="Trust Pages", show_header=True)
    trust.add_column("Page", style="cyan")
    trust.add_column("Found")
    for name in ("contact", "shipping", "returns", "privacy", "terms", "faq"):
        found = getattr(report.trust, name)
        trust.add_row(name.capitalize(), "[green]yes[/green]" if found else "[red]no[/red]")
    console.print(trust)

    if report.issues:
        issues = Table(title="Issues", show_header=True)
        issues.add_column("Severity")
        issues.add_column("Key", style="cyan")
        issues.add_column("Fix")
        for issue in report.issues:
            style = SEVERITY_STYLES[issue.severity.value]
            issues.add_row(f"[{style}]{issue.severity.value}[/{style}]", issue.key, issue.fix)
        console.print(issues)

    if report.quick_wins:
        console.print("\n[bold magenta]Quick Wins:[/bold magenta]")
        for fix in report.quick_wins:
            console.print(f"  • {fix}")

    if report.errors:
        console.print("\n[red]Errors:[/red]")
        for error in report.errors:
            console.print(f"  • {error}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"Site Auditor version {__version__}")


if __name__ == "__main__":
    app()
