"""
pdf-rule-checker CLI.

Commands:
    pdf-rule-checker serve                       Run the HTTP API
    pdf-rule-checker check FILE -r RULE [...]    Check rules against a PDF via the API
"""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console

from .client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT_SECONDS, CheckClient
from .config import configure_logging, load_settings
from .errors import ConfigurationError, TransportError
from .view import clean_rules, render_error, render_results, submit_blocker

app = typer.Typer(help="Check natural-language rules against a PDF with an LLM")
console = Console()


# =============================================================================
# SERVE
# =============================================================================


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Interface to bind"),
    port: int = typer.Option(None, help="Port (default: PORT env or 5000)"),
):
    """Run the rule-check API server."""
    import uvicorn

    from .api.gateway import create_app

    settings = load_settings()
    configure_logging(settings.log_level)

    try:
        application = create_app(settings)
    except ConfigurationError as e:
        console.print(f"[bold red]Failed to initialize LLM client:[/bold red] {e}")
        raise typer.Exit(1)

    bind_port = port or settings.port
    console.print(f"[bold blue]Server running on http://{host}:{bind_port}[/bold blue]")
    uvicorn.run(application, host=host, port=bind_port, log_level=settings.log_level.lower())


# =============================================================================
# CHECK
# =============================================================================


@app.command()
def check(
    pdf: Path = typer.Argument(..., help="PDF file to check"),
    rule: list[str] = typer.Option([], "--rule", "-r", help="Rule to check (repeatable)"),
    server: str = typer.Option(DEFAULT_BASE_URL, help="API base URL"),
    timeout: float = typer.Option(DEFAULT_TIMEOUT_SECONDS, help="Request timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print raw JSON results"),
):
    """Upload a PDF and rules to the API and show the verdicts."""
    blocker = submit_blocker(pdf, rule)
    if blocker:
        render_error(console, blocker)
        raise typer.Exit(1)

    client = CheckClient(base_url=server, timeout=timeout)
    try:
        with console.status("Checking..."):
            results = asyncio.run(client.submit(pdf, clean_rules(rule)))
    except TransportError as e:
        render_error(console, e.message)
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps([r.to_dict() for r in results]))
    else:
        render_results(console, results)


def main():
    app()


if __name__ == "__main__":
    main()
