"""
CLI for the keyword match type switcher.

Usage:
    matchswitch convert --keywords "running shoes, [red shoes]" --match-type phrase
    matchswitch convert --input data/keywords.txt --match-type exact --output data/output/exact.csv --format csv
    matchswitch convert -k "foo, bar!" --format json --validation-report
    cat keywords.txt | matchswitch convert -m broad --copy
    matchswitch interactive
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt
from rich.table import Table

from matchswitch.config import get_settings
from matchswitch.exporters import CSVExporter, JSONExporter, TextExporter
from matchswitch.exporters.json_exporter import result_to_document
from matchswitch.models.keyword import ConversionResult, MatchType
from matchswitch.pipeline.keyword_pipeline import KeywordPipeline
from matchswitch.shell import KeywordShell
from matchswitch.utils.logging import setup_logging

console = Console()

MATCH_TYPES = [m.value for m in MatchType]
SHELL_COMMANDS = MATCH_TYPES + ["input", "show", "copy", "clear", "quit"]


def display_rejection(result: ConversionResult) -> None:
    console.print(f"[red]Error: {escape(result.message or result.status.value)}[/red]")


def display_warnings(result: ConversionResult) -> None:
    for warning in result.warnings:
        console.print(f"[yellow]Warning: {escape(warning)}[/yellow]")


def display_summary(shell: KeywordShell) -> None:
    """Display the keyword, duplicate and invalid counts."""
    table = Table(title="Summary")
    table.add_column("Count", style="cyan")
    for line in shell.summary_text():
        table.add_row(line)
    console.print(table)


def display_validation(result: ConversionResult) -> None:
    """Display one row per input token, in input order."""
    if not result.validation_results:
        console.print("[dim]No validation results yet[/dim]")
        return

    table = Table(title="Validation")
    table.add_column("Status")
    table.add_column("Keyword", style="cyan")
    table.add_column("Reason", style="yellow")

    for r in result.validation_results:
        status = "[green]✓ Valid[/green]" if r.is_valid else "[red]✗ Invalid[/red]"
        table.add_row(status, escape(r.original), escape(r.message or ""))

    console.print(table)


def display_output(shell: KeywordShell) -> None:
    if shell.output_text:
        click.echo(shell.output_text)
    else:
        console.print("[dim]No keywords[/dim]")


def export_result(
    result: ConversionResult, output_dir: Path, fmt: str, filename: str | None = None
) -> Path:
    """Write a result to ``output_dir`` in the requested format. Without a filename one is generated."""
    if fmt == "csv":
        return CSVExporter(output_dir).export_keywords(result, filename=filename)
    if fmt == "json":
        return JSONExporter(output_dir).export_json(result, filename=filename)
    return TextExporter(output_dir).export(result, filename=filename)


@click.group()
def cli() -> None:
    """Convert keyword lists between broad, phrase and exact match types."""


@cli.command()
@click.option(
    "--keywords", "-k",
    type=str,
    help="Keywords separated by commas or newlines",
)
@click.option(
    "--input", "-i",
    "input_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Text file containing keywords",
)
@click.option(
    "--match-type", "-m",
    type=click.Choice(MATCH_TYPES),
    default=None,
    help="Match type to convert to (defaults to the configured match type)",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the converted keywords to this file",
)
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "csv", "json"]),
    default=None,
    help="Export format; without --output the file goes to the configured output dir",
)
@click.option(
    "--show-validation/--no-show-validation",
    default=True,
    help="Show the per-keyword validation table",
)
@click.option(
    "--validation-report",
    is_flag=True,
    default=False,
    help="Also write the per-keyword validation CSV",
)
@click.option(
    "--copy",
    is_flag=True,
    default=False,
    help="Copy the converted keywords to the clipboard",
)
@click.option(
    "--json", "as_json",
    is_flag=True,
    default=False,
    help="Print the full result as JSON instead of tables",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    default=None,
    help="Logging level (defaults to the configured level)",
)
def convert(
    keywords: str | None,
    input_file: Path | None,
    match_type: str | None,
    output: Path | None,
    fmt: str | None,
    show_validation: bool,
    validation_report: bool,
    copy: bool,
    as_json: bool,
    log_level: str | None,
) -> None:
    """Convert keywords to a match type."""
    setup_logging(log_level)
    settings = get_settings()

    parts = []
    if keywords:
        parts.append(keywords)
    if input_file:
        parts.append(input_file.read_text(encoding="utf-8"))
    if not parts and not sys.stdin.isatty():
        parts.append(sys.stdin.read())

    raw = "\n".join(parts)
    if not raw.strip():
        console.print("[red]Error: Must provide --keywords, --input, or keywords on stdin[/red]")
        raise SystemExit(1)

    shell = KeywordShell(pipeline=KeywordPipeline(settings=settings))
    result = shell.convert(match_type or settings.default_match_type, raw)

    if as_json:
        click.echo(json.dumps(result_to_document(result), indent=2, ensure_ascii=False))
        if result.is_rejected:
            raise SystemExit(1)
        return

    if result.is_rejected:
        display_rejection(result)
        raise SystemExit(1)

    display_warnings(result)
    display_output(shell)
    console.print()
    display_summary(shell)

    if show_validation:
        display_validation(result)

    export_dir = output.parent if output else Path(settings.output_dir)
    if output or fmt:
        path = export_result(result, export_dir, fmt or "text", output.name if output else None)
        console.print(f"[green]✓ Exported to {escape(str(path))}[/green]")

    if validation_report:
        path = CSVExporter(export_dir).export_validation(result)
        console.print(f"[green]✓ Validation report written to {escape(str(path))}[/green]")

    if copy:
        outcome = shell.copy_to_clipboard()
        style = "green" if outcome.copied else "yellow"
        console.print(f"[{style}]{escape(outcome.message)}[/{style}]")


@cli.command()
def interactive() -> None:
    """Run an interactive converter session."""
    setup_logging()
    shell = KeywordShell(pipeline=KeywordPipeline(settings=get_settings()))

    console.print("\n[bold]Keyword Match Type Switcher[/bold]")
    console.print(f"Commands: {', '.join(SHELL_COMMANDS)}\n")

    while True:
        command = Prompt.ask("Command", choices=SHELL_COMMANDS, default="input", console=console)

        if command == "quit":
            break

        if command == "input":
            console.print("Enter keywords, one per line or comma separated. Finish with an empty line.")
            lines = []
            try:
                while line := console.input():
                    lines.append(line)
            except EOFError:
                pass
            shell.input_text = "\n".join(lines)

        elif command in MATCH_TYPES:
            result = shell.convert(command)
            if result.is_rejected:
                display_rejection(result)
                continue
            display_warnings(result)
            display_output(shell)
            display_summary(shell)
            display_validation(result)

        elif command == "show":
            display_output(shell)
            display_summary(shell)

        elif command == "copy":
            outcome = shell.copy_to_clipboard()
            style = "green" if outcome.copied else "yellow"
            console.print(f"[{style}]{escape(outcome.message)}[/{style}]")
            if not outcome.copied and shell.output_text:
                display_output(shell)

        elif command == "clear":
            shell.clear()
            console.print("[green]Cleared[/green]")


if __name__ == "__main__":
    cli()
