"""exportcov CLI - documentation coverage for exported TypeScript/JavaScript symbols."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from exportcov import __version__
from exportcov.analyzer import analyze_path
from exportcov.exclusion import FileExcluder
from exportcov.logger import configure_logging
from exportcov.models.results import WorkspaceReport
from exportcov.output.json_writer import write_results
from exportcov.output.report import display_member, display_result, display_workspace
from exportcov.workspace import WorkspaceAnalyzer

app = typer.Typer(
    name="exportcov",
    help="Measure documentation coverage of exported TypeScript/JavaScript symbols",
    no_args_is_help=False,
    rich_markup_mode="rich",
)
console = Console()


def version_callback(value: bool) -> None:
    if value:
        console.print(f"exportcov version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Measure documentation coverage of exported TypeScript/JavaScript symbols."""
    if ctx.invoked_subcommand is None:
        # Default to run command on the current directory
        configure_logging()
        run_analysis(Path("."))


@app.command()
def run(
    path: Path = typer.Argument(
        Path("."),
        help="Package directory or source file to analyze",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results as JSON to this path",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="List documented exports too",
    ),
    fail_under: Optional[int] = typer.Option(
        None,
        "--fail-under",
        min=0,
        max=100,
        help="Exit with status 1 if coverage is below this percentage",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Extra gitignore-style pattern to exclude (repeatable)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log tracing details to stderr",
    ),
) -> None:
    """Analyze a package, or every member if it is a workspace (default command)."""
    configure_logging(debug)
    run_analysis(path, output, verbose, fail_under, exclude or [])


@app.command()
def workspace(
    path: Path = typer.Argument(
        Path("."),
        help="Workspace root containing deno.json or deno.jsonc",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write results as JSON to this path",
    ),
    fail_under: Optional[int] = typer.Option(
        None,
        "--fail-under",
        min=0,
        max=100,
        help="Exit with status 1 if aggregate coverage is below this percentage",
    ),
    exclude: Optional[list[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Extra gitignore-style pattern to exclude (repeatable)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Log tracing details to stderr",
    ),
) -> None:
    """Analyze every member of a workspace."""
    configure_logging(debug)
    report = run_workspace(path.resolve(), exclude or [])

    if report is None:
        console.print("[yellow]No workspace configuration found.[/]")
        console.print("[dim]Looked for a 'workspace' field in deno.json or deno.jsonc[/]")
        raise typer.Exit(1)

    _finish_workspace(report, output, fail_under)


def run_analysis(
    path: Path,
    output: Optional[Path] = None,
    verbose: bool = False,
    fail_under: Optional[int] = None,
    excludes: Optional[list[str]] = None,
) -> None:
    """Analyze a single package, delegating to workspace mode when configured."""
    path = path.resolve()
    excludes = excludes or []

    if path.is_dir() and WorkspaceAnalyzer(path).find_members() is not None:
        report = run_workspace(path, excludes)
        if report is not None:
            _finish_workspace(report, output, fail_under)
            return

    console.print(Panel.fit("[bold blue]exportcov - Documentation Coverage[/]"))
    console.print(f"\n[dim]Path:[/] {path}\n")

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
        ) as progress:
            progress.add_task("Tracing exports...", total=None)
            excluder = FileExcluder(path, extra_excludes=excludes) if path.is_dir() else None
            result = analyze_path(path, excluder)
    except OSError as e:
        console.print(f"[red]Error:[/] {e}")
        raise typer.Exit(1)

    display_result(result, verbose)

    if output is not None:
        write_results(result, output)
        console.print(f"\n[green]Results saved to:[/] {output}")

    _check_threshold(result.stats.percentage, fail_under)


def run_workspace(root: Path, excludes: list[str]) -> Optional[WorkspaceReport]:
    """Analyze a workspace, printing each member as it completes."""
    analyzer = WorkspaceAnalyzer(root, extra_excludes=excludes)
    members = analyzer.find_members()
    if members is None:
        return None

    console.print(Panel.fit("[bold blue]exportcov - Workspace Coverage[/]"))
    console.print(f"\n[dim]Root:[/] {root}")
    console.print(f"[dim]Members:[/] {len(members)}\n")

    return analyzer.analyze(on_member=display_member)


def _finish_workspace(
    report: WorkspaceReport,
    output: Optional[Path],
    fail_under: Optional[int],
) -> None:
    display_workspace(report)

    if output is not None:
        write_results(report, output)
        console.print(f"\n[green]Results saved to:[/] {output}")

    _check_threshold(report.aggregate.percentage, fail_under)


def _check_threshold(percentage: int, fail_under: Optional[int]) -> None:
    if fail_under is not None and percentage < fail_under:
        console.print(f"\n[red]Coverage {percentage}% is below the required {fail_under}%[/]")
        raise typer.Exit(1)
