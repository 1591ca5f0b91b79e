"""Rich rendering of coverage results."""

from collections import defaultdict
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.tree import Tree

from exportcov.models.results import (
    AnalysisResult,
    DocumentationStats,
    WorkspaceMemberResult,
    WorkspaceReport,
)
from exportcov.models.symbols import ExportedSymbol

console = Console()


def coverage_color(percentage: int) -> str:
    """Get color based on coverage level."""
    if percentage >= 80:
        return "green"
    if percentage >= 60:
        return "yellow"
    return "red"


def coverage_message(percentage: int) -> str:
    """One-line verdict for a coverage percentage."""
    if percentage == 100:
        return "Perfect! Every export is documented."
    if percentage >= 90:
        return "Excellent coverage."
    if percentage >= 80:
        return "Good coverage."
    if percentage >= 60:
        return "Coverage needs work."
    if percentage >= 40:
        return "Poor coverage."
    return "Critical: most exports are undocumented."


def build_symbols_tree(
    symbols: list[ExportedSymbol],
    title: str,
    include_documented: bool = False,
) -> Tree:
    """Build a Rich tree of symbols grouped by directory and file."""
    by_file: dict[Path, list[ExportedSymbol]] = defaultdict(list)
    for symbol in symbols:
        if include_documented or not symbol.has_documentation:
            by_file[symbol.file].append(symbol)

    root = Tree(f"[bold]{title}[/]", guide_style="dim")
    dir_nodes: dict[Path, Tree] = {}

    for file_path in sorted(by_file.keys()):
        parent = root
        for i, part in enumerate(file_path.parts[:-1]):
            dir_path = Path(*file_path.parts[: i + 1])
            if dir_path not in dir_nodes:
                dir_nodes[dir_path] = parent.add(f"[bold blue]{part}/[/]")
            parent = dir_nodes[dir_path]

        file_node = parent.add(f"[yellow]{file_path.name}[/]")

        for symbol in sorted(by_file[file_path], key=lambda s: s.line):
            item_text = Text()
            if symbol.has_documentation:
                item_text.append("✓ ", style="green bold")
                item_text.append(symbol.name, style="green")
            else:
                item_text.append("x ", style="red bold")
                item_text.append(symbol.name, style="red")
            item_text.append(f" ({symbol.kind.value}, line {symbol.line})", style="dim")
            file_node.add(item_text)

    return root


def build_stats_table(stats: DocumentationStats) -> Table:
    """Build the coverage summary table with a per-kind breakdown."""
    table = Table(title="Documentation Coverage", show_header=True, header_style="bold")
    table.add_column("Kind")
    table.add_column("Documented", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("Coverage", justify="right")

    for kind, kind_stats in sorted(stats.by_kind.items()):
        color = coverage_color(kind_stats.percentage)
        table.add_row(
            kind,
            str(kind_stats.documented),
            str(kind_stats.total),
            f"[{color}]{kind_stats.percentage}%[/]",
        )

    color = coverage_color(stats.percentage)
    table.add_section()
    table.add_row(
        "[bold]all[/]",
        f"[green]{stats.documented}[/]",
        f"[bold]{stats.total}[/]",
        f"[bold {color}]{stats.percentage}%[/]",
    )
    return table


def display_result(result: AnalysisResult, verbose: bool = False) -> None:
    """Print a single package's coverage report."""
    if result.has_exports_field and result.export_entry_path:
        console.print(f"[dim]Public API entry:[/] {result.export_entry_path}\n")

    if not result.symbols:
        console.print("[yellow]No exported symbols found.[/]")
        return

    if result.undocumented or verbose:
        title = "Exports" if verbose else "Undocumented exports"
        console.print(build_symbols_tree(result.symbols, title, include_documented=verbose))
        console.print()
    else:
        console.print("[bold green]✓[/] All exported symbols are documented!\n")

    display_stats(result.stats)


def display_stats(stats: DocumentationStats) -> None:
    """Print the summary table and verdict."""
    console.print(build_stats_table(stats))
    color = coverage_color(stats.percentage)
    console.print(f"\n[{color}]{coverage_message(stats.percentage)}[/]")


def display_member(member: WorkspaceMemberResult) -> None:
    """Print a one-line summary for a workspace member."""
    if member.error:
        console.print(f"  [red]x[/] {member.name}: [red]{member.error}[/]")
        return

    stats = member.stats
    color = coverage_color(stats.percentage)
    console.print(
        f"  [{color}]●[/] {member.name:<20} {stats.total:>3} exports, "
        f"[bold {color}]{stats.percentage}%[/] documented"
    )
    if member.result and member.result.has_exports_field and member.result.export_entry_path:
        console.print(f"    [dim]└─ Entry: {member.result.export_entry_path}[/]")


def build_workspace_table(report: WorkspaceReport) -> Table:
    """Build a table of members sorted by coverage, best first."""
    table = Table(title="Workspace Members", show_header=True, header_style="bold")
    table.add_column("Member")
    table.add_column("Exports", justify="right")
    table.add_column("Documented", justify="right")
    table.add_column("Coverage", justify="right")

    for member in sorted(report.members, key=lambda m: m.stats.percentage, reverse=True):
        stats = member.stats
        color = coverage_color(stats.percentage)
        table.add_row(
            member.name,
            str(stats.total),
            str(stats.documented),
            f"[{color}]{stats.percentage}%[/]",
        )
    return table


def display_workspace(report: WorkspaceReport) -> None:
    """Print the workspace summary."""
    aggregate = report.aggregate
    color = coverage_color(aggregate.percentage)

    console.print()
    console.print(build_workspace_table(report))
    console.print(f"\n  Members:       [bold]{aggregate.total_members}[/]")
    console.print(f"  Total exports: [bold]{aggregate.total_exports}[/]")
    console.print(f"  Documented:    [green]{aggregate.total_documented}[/]")
    console.print(f"  Undocumented:  [red]{aggregate.total_undocumented}[/]")
    console.print(f"  Coverage:      [bold {color}]{aggregate.percentage}%[/]")

    needs_work = [m for m in report.members if not m.error and m.stats.percentage < 60]
    if needs_work:
        console.print("\n[red]Members needing documentation:[/]")
        for member in needs_work:
            console.print(f"  - {member.name} ({member.stats.percentage}%)")

    console.print(f"\n[{color}]{coverage_message(aggregate.percentage)}[/]")
