"""
Defines the command-line interface for the application using Typer.
"""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TextColumn,
)

from trackpage import __version__
from trackpage.core.checker import run_check
from trackpage.exceptions import (
    CheckInfrastructureError,
    TrackpageError,
    TrackUnreachableError,
)
from trackpage.models.manifest import Manifest, Track
from trackpage.render.page import DEFAULT_OUTPUT_NAME, write_page
from trackpage.storage.config_manager import ConfigManager, get_default_config_file
from trackpage.storage.manifest_store import DEFAULT_MANIFEST_NAME, ManifestStore
from trackpage.utils.formatting import pluralize
from trackpage.utils.urls import resolve_tracks

from .formatters import print_check_report, print_manifest_summary

console = Console()
err_console = Console(stderr=True)

logging.basicConfig(
    level="INFO",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[
        RichHandler(
            console=console,
            rich_tracebacks=True,
            show_path=False,
            show_level=False,
            markup=True,
        )
    ],
)
log = logging.getLogger("trackpage")

app = typer.Typer(
    name="trackpage",
    help=(
        "Build a static audio page from a track manifest and check that every"
        " track is reachable. Use 'trackpage <command> --help' for more info."
    ),
    rich_markup_mode="rich",
    pretty_exceptions_show_locals=False,
    add_completion=False,
)


def _manifest_option(help_text: str) -> Path:
    return typer.Option(Path(DEFAULT_MANIFEST_NAME), "--manifest", help=help_text)


def _load_manifest(path: Path) -> Manifest:
    """Loads a manifest, turning application errors into a clean exit."""
    try:
        return ManifestStore.load(path)
    except TrackpageError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


def _save_manifest(path: Path, manifest: Manifest) -> None:
    try:
        ManifestStore.save(path, manifest)
    except TrackpageError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: int = typer.Option(
        0,
        "--verbose",
        "-v",
        count=True,
        help="Increase logging verbosity (-vv for debug).",
    ),
    version: bool = typer.Option(
        False, "--version", help="Show version and exit.", is_eager=True
    ),
):
    """Track manifest and audio page tool"""
    if version:
        console.print(f"[bold]trackpage[/bold] version [cyan]{__version__}[/cyan]")
        raise typer.Exit()

    log_level = "INFO"
    if verbose >= 2:
        log_level = "DEBUG"
    logging.getLogger("trackpage").setLevel(log_level)

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def generate(
    manifest: Path = _manifest_option("The JSON manifest to read."),
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT_NAME), "--output", help="The HTML file to write."
    ),
):
    """Generate the HTML page for a manifest."""
    data = _load_manifest(manifest)
    try:
        write_page(data, output)
    except TrackpageError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e
    console.print(
        f"[green]✓ Wrote '{escape(str(output))}' with "
        f"{pluralize(len(data.songs), 'track')}.[/green]"
    )


@app.command()
def add(
    manifest: Path = _manifest_option("The manifest to modify."),
    name: str = typer.Option(..., "--name", help="The display name of the new track."),
    path: str = typer.Option(
        ..., "--path", help="The path of the new track, appended to the prefix."
    ),
):
    """Append a track to a manifest."""
    data = _load_manifest(manifest)
    updated = data.with_track(Track(name=name, path=path))
    _save_manifest(manifest, updated)
    log.debug(f"Appended track '{name}' to '{manifest}'.")
    console.print(f"[green]✓ Added '{escape(name)}' to '{escape(str(manifest))}'.[/green]")
    print_manifest_summary(manifest, updated, console)


@app.command()
def check(
    manifest: Path = _manifest_option("The manifest to check."),
    timeout: float | None = typer.Option(
        None, "--timeout", "-t", help="Seconds allowed for each request (default 10)."
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        help="Maximum simultaneous requests (default: one per track, 0 = unbounded).",
    ),
    method: str | None = typer.Option(
        None, "--method", help="HTTP method used for probes: HEAD (default) or GET."
    ),
    config_file: Path | None = typer.Option(
        None, "--config", help="INI file with check defaults."
    ),
):
    """Check that every track linked from a manifest is reachable."""
    try:
        config_manager = ConfigManager(
            config_file or get_default_config_file(), required=config_file is not None
        )
        config = config_manager.load_config(
            {"timeout": timeout, "max_concurrent": concurrency, "method": method}
        )
    except TrackpageError as e:
        console.print(f"[red]✗ Configuration is invalid: {escape(str(e))}[/red]")
        raise typer.Exit(code=1) from e

    data = _load_manifest(manifest)
    targets = resolve_tracks(data)
    for _, url in targets:
        console.print(f"Checking {escape(url)}", soft_wrap=True)

    progress = Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(bar_width=30),
        MofNCompleteColumn(),
        console=console,
        transient=True,
    )
    try:
        with progress:
            task_id = progress.add_task("Checking tracks", total=len(targets))
            report = run_check(
                targets,
                config,
                on_result=lambda _result: progress.advance(task_id),
            )
    except CheckInfrastructureError as e:
        console.print(f"[bold red]✗ Could not run the checks: {escape(str(e))}[/bold red]")
        log.debug("Full traceback:", exc_info=True)
        raise typer.Exit(code=1) from e

    for failure in report.failures:
        err_console.print(
            f"not reachable {escape(failure.url)} [dim]({escape(failure.reason or '')})[/dim]",
            soft_wrap=True,
        )

    print_check_report(report, console)

    try:
        report.raise_for_failures()
    except TrackUnreachableError as e:
        console.print(
            f"[bold red]✗ {pluralize(len(e.failures), 'track')} of "
            f"{len(report.results)} not reachable.[/bold red]"
        )
        raise typer.Exit(code=1) from e

    console.print(
        f"[bold green]✓ All {pluralize(len(report.results), 'track')} reachable.[/bold green]"
    )


@app.command(name="format")
def format_command(
    manifest: Path = _manifest_option("The manifest to format."),
):
    """Rewrite a manifest in canonical form."""
    data = _load_manifest(manifest)
    _save_manifest(manifest, data)
    console.print(f"[green]✓ Formatted '{escape(str(manifest))}'.[/green]")


@app.command()
def template(
    manifest: Path = _manifest_option("Where to write the template manifest."),
    force: bool = typer.Option(
        False, "--force", "-f", help="Overwrite an existing manifest without asking."
    ),
):
    """Write a template manifest with empty defaults."""
    if (
        manifest.exists()
        and not force
        and not typer.confirm(f"'{manifest}' already exists. Overwrite it?")
    ):
        raise typer.Abort()

    _save_manifest(manifest, ManifestStore.default())
    console.print(f"[green]✓ Template written to '{escape(str(manifest))}'.[/green]")
