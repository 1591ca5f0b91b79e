"""Documentation coverage analysis of a package or file.

Two modes are supported:

- Public API mode, when the package config declares ``exports``: every
  entry point is traced through its re-exports, and only symbols reachable
  from the entries are reported, located at their original declarations.
- Full scan mode otherwise: every source file under the root is scanned
  for its own export lines, with no cross-file tracing.
"""

from __future__ import annotations

from pathlib import Path

from exportcov.analysis.classifier import ExportForm, classify_export_line
from exportcov.analysis.docs import build_doc_map
from exportcov.analysis.source import read_lines, read_lines_strict
from exportcov.analysis.stats import calculate_stats
from exportcov.analysis.synthesizer import join_declaration, synthesize_symbol
from exportcov.analysis.tracer import ExportTracer
from exportcov.config import (
    find_config,
    get_export_entries,
    get_export_entry_path,
    has_exports_field,
)
from exportcov.exclusion import FileExcluder, find_source_files
from exportcov.logger import logger
from exportcov.models.results import AnalysisResult
from exportcov.models.symbols import ExportedSymbol, TracedExport


def analyze_path(target: Path, excluder: FileExcluder | None = None) -> AnalysisResult:
    """Analyze a directory or a single file for documentation coverage.

    Args:
        target: Package directory or source file.
        excluder: Exclusion rules for full scan mode; defaults to the
            built-in patterns plus the root's .gitignore.

    Raises:
        FileNotFoundError: If ``target`` does not exist.
        OSError: If a designated entry point cannot be read.
    """
    root = target.resolve()
    if not root.exists():
        raise FileNotFoundError(f"Path not found: {root}")

    project_dir = root if root.is_dir() else root.parent
    found = find_config(project_dir)
    config, config_path = found if found else ({}, None)

    result = AnalysisResult(
        path=root,
        has_config=found is not None,
        has_exports_field=has_exports_field(config),
        export_entry_path=get_export_entry_path(config),
        config_path=config_path,
    )

    entries = get_export_entries(config)
    if entries:
        logger.debug("Analyzing public API", entries=entries)
        result.symbols = analyze_entries(project_dir, entries)
    else:
        logger.debug("Analyzing all source files", root=str(root))
        result.symbols = analyze_all_files(root, excluder)

    result.stats = calculate_stats(result.symbols)
    return result


def analyze_entries(project_dir: Path, entries: list[str]) -> list[ExportedSymbol]:
    """Trace entry points and build a symbol for every unique export."""
    tracer = ExportTracer()
    for entry in entries:
        tracer.trace(project_dir / entry)

    by_source: dict[Path, list[TracedExport]] = {}
    for export in tracer.graph.unique_exports():
        by_source.setdefault(export.source_path, []).append(export)

    symbols: list[ExportedSymbol] = []
    for source, exports in by_source.items():
        lines = tracer.read_source(source)
        if lines is None:
            continue
        doc_map = build_doc_map(lines)
        display = display_path(source, project_dir)

        for export in exports:
            index = export.line - 1
            if not 0 <= index < len(lines):
                continue
            symbol = synthesize_symbol(
                join_declaration(lines, index),
                index,
                display,
                doc_map,
                exported_name=export.exported_name,
            )
            if symbol is None:
                logger.debug(
                    "Coverage gap: no declaration at traced line",
                    name=export.exported_name,
                    file=str(source),
                    line=export.line,
                )
                continue
            symbols.append(symbol)

    return symbols


def analyze_all_files(root: Path, excluder: FileExcluder | None = None) -> list[ExportedSymbol]:
    """Scan every source file under ``root`` for its own exports."""
    if root.is_file():
        return scan_file(read_lines_strict(root), Path(root.name))

    symbols: list[ExportedSymbol] = []
    for file in find_source_files(root, excluder):
        lines = read_lines(file)
        if lines is None:
            continue
        symbols.extend(scan_file(lines, display_path(file, root)))
    return symbols


def scan_file(lines: list[str], display: Path) -> list[ExportedSymbol]:
    """Build symbols for the export lines of one file, taken at face value."""
    doc_map = build_doc_map(lines)
    symbols: list[ExportedSymbol] = []

    for index, raw in enumerate(lines):
        classified = classify_export_line(raw.strip())
        if classified is None:
            continue

        if classified.form is ExportForm.DECLARATION:
            symbol = synthesize_symbol(join_declaration(lines, index), index, display, doc_map)
            if symbol is not None:
                symbols.append(symbol)
        elif classified.form is ExportForm.BLOCK and classified.module is None:
            for _, exported in classified.specifiers:
                symbol = synthesize_symbol(
                    raw.strip(), index, display, doc_map, exported_name=exported
                )
                if symbol is not None:
                    symbols.append(symbol)

    return symbols


def display_path(path: Path, base: Path) -> Path:
    """Path relative to ``base`` when it lies under it, absolute otherwise."""
    try:
        return path.relative_to(base)
    except ValueError:
        return path
