"""
Functions for formatting and displaying data in the console using Rich.
"""

from pathlib import Path

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from trackpage.models.manifest import Manifest
from trackpage.models.report import CheckReport, Verdict
from trackpage.utils.formatting import format_duration, pluralize
from trackpage.utils.urls import resolve


def format_error_with_suggestions(
    error: Exception, context: dict | None = None
) -> Panel:
    """Formats an error with actionable suggestions into a Rich Panel."""
    error_type = type(error).__name__
    error_msg = str(error)

    suggestions_map = {
        "ManifestNotFoundError": [
            "• Check the path given with --manifest (default: tracks.json).",
            "• Create a new manifest with `trackpage template`.",
        ],
        "ManifestParseError": [
            "• The manifest must be a JSON object with 'title', 'prefix' and 'songs'.",
            "• Each song needs a string 'name' and a string 'path'.",
        ],
        "ManifestWriteError": [
            "• Check that the manifest directory exists and is writable.",
        ],
        "PageWriteError": [
            "• Check that the output directory exists and is writable.",
        ],
        "ConfigurationError": [
            "• Review the values in your config.ini or on the command line.",
            "• --timeout must be in (0, 300], --concurrency in [0, 256].",
        ],
    }

    suggestions = suggestions_map.get(
        error_type, ["• Run the command with -vv for detailed logs."]
    )

    error_text = Text()
    error_text.append(f"{error_type}: ", style="bold red")
    error_text.append(error_msg)

    suggestion_text = Text("\n".join(suggestions))

    content = Table.grid(padding=(1, 0))
    content.add_row(error_text)
    content.add_row()
    content.add_row(Text("Suggestions", style="bold yellow"))
    content.add_row(suggestion_text)

    if context:
        content.add_row()
        content.add_row(Text(f"Context: {context}", style="dim"))

    return Panel(
        content,
        title="[bold red]An Error Occurred[/bold red]",
        border_style="red",
        expand=False,
    )


def print_check_report(report: CheckReport, console: Console | None = None):
    """Displays every probed URL with its outcome, followed by a summary panel."""
    console = console or Console()

    if report.results:
        table = Table(box=box.ROUNDED, title="Reachability")
        table.add_column("", no_wrap=True)
        table.add_column("Track", style="cyan")
        table.add_column("URL", overflow="fold")
        table.add_column("Result")
        for result in report.results:
            if result.ok:
                mark = "[green]✓[/green]"
                detail = f"[green]HTTP {result.status}[/green]"
            else:
                mark = "[red]✗[/red]"
                detail = f"[red]{escape(result.reason or 'failed')}[/red]"
            table.add_row(mark, escape(result.name), escape(result.url), detail)
        console.print(table)

    summary = Table(show_header=False, box=None, padding=(0, 2))
    summary.add_column(style="bold cyan", justify="right")
    summary.add_column()
    summary.add_row("✓ Reachable:", f"[bold green]{len(report.passed)}[/bold green]")
    if report.failures:
        summary.add_row(
            "✗ Unreachable:", f"[bold red]{len(report.failures)}[/bold red]"
        )
    summary.add_row("Time Elapsed:", f"[blue]{format_duration(report.elapsed)}[/blue]")

    if report.overall is Verdict.PASS:
        title = "[bold green]✓ All tracks reachable[/bold green]"
        border_color = "green"
    else:
        title = "[bold red]✗ Some tracks are not reachable[/bold red]"
        border_color = "red"

    console.print(Panel(summary, title=title, border_style=border_color, expand=False))


def print_manifest_summary(
    manifest_path: Path, manifest: Manifest, console: Console | None = None
):
    """Displays the manifest title, prefix and resolved track URLs."""
    console = console or Console()
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column(style="bold cyan")
    table.add_column(overflow="fold")
    table.add_row("Title:", escape(manifest.title) or "[dim](empty)[/dim]")
    table.add_row("Prefix:", escape(manifest.prefix) or "[dim](empty)[/dim]")
    for index, song in enumerate(manifest.songs, 1):
        table.add_row(
            f"{index}. {escape(song.name)}",
            f"[dim]{escape(resolve(manifest.prefix, song.path))}[/dim]",
        )
    console.print(
        Panel(
            table,
            title=f"{pluralize(len(manifest.songs), 'track')} ([dim]{escape(str(manifest_path))}[/dim])",
            border_style="cyan",
            expand=False,
        )
    )
