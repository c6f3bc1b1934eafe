"""
Terminal view -- rule inputs gating, error banner, and result table.

Presentational only: the only logic here is deciding whether a submission
is allowed and how a result is colored.
"""

from pathlib import Path

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .evaluation.models import STATUS_PASS, EvaluationResult

BAR_WIDTH = 20
HIGH_CONFIDENCE = 70
LOW_CONFIDENCE = 30


def clean_rules(rules: list[str]) -> list[str]:
    """Drop blank rule inputs before submission."""
    return [r for r in rules if r and r.strip()]


def submit_blocker(pdf_path: Path | None, rules: list[str]) -> str | None:
    """Return why submission is not allowed, or None if it is."""
    if pdf_path is None or not pdf_path.is_file():
        return "Please upload a PDF file."
    if pdf_path.suffix.lower() != ".pdf":
        return "Please upload a valid PDF file"
    if not clean_rules(rules):
        return "Please enter at least one rule."
    return None


def can_submit(pdf_path: Path | None, rules: list[str], loading: bool = False) -> bool:
    return not loading and submit_blocker(pdf_path, rules) is None


def status_style(status: str) -> str:
    return "bold green" if status == STATUS_PASS else "bold red"


def confidence_style(confidence: int) -> str:
    if confidence > HIGH_CONFIDENCE:
        return "green"
    if confidence > LOW_CONFIDENCE:
        return "yellow"
    return "red"


def confidence_bar(confidence: int, width: int = BAR_WIDTH) -> Text:
    filled = round(width * max(0, min(100, confidence)) / 100)
    bar = Text("█" * filled, style=confidence_style(confidence))
    bar.append("░" * (width - filled), style="dim")
    bar.append(f" {confidence}%")
    return bar


def render_error(console: Console, message: str) -> None:
    console.print(Panel(Text(message), title="⚠️  Error", border_style="red"))


def render_results(console: Console, results: list[EvaluationResult]) -> None:
    table = Table(title="Results", show_lines=True)
    table.add_column("Rule", style="bold")
    table.add_column("Status")
    table.add_column("Evidence")
    table.add_column("Reasoning")
    table.add_column("Confidence", no_wrap=True)

    for r in results:
        table.add_row(
            r.rule,
            Text(r.status.upper(), style=status_style(r.status)),
            r.evidence or "N/A",
            r.reasoning or "N/A",
            confidence_bar(r.confidence),
        )

    console.print(table)
