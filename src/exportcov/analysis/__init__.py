"""Export resolution and documentation analysis."""

from exportcov.analysis.classifier import (
    ExportForm,
    ExportLine,
    classify_declaration,
    classify_export_line,
    extract_export_name,
    is_direct_export,
    is_export_like,
)
from exportcov.analysis.docs import build_doc_map
from exportcov.analysis.imports import ImportBinding, ImportResolver, resolve_module_path
from exportcov.analysis.locator import find_declaration_line, locate_declaration
from exportcov.analysis.stats import calculate_stats
from exportcov.analysis.synthesizer import join_declaration, synthesize_symbol
from exportcov.analysis.tracer import ExportGraph, ExportTracer

__all__ = [
    "ExportForm",
    "ExportGraph",
    "ExportLine",
    "ExportTracer",
    "ImportBinding",
    "ImportResolver",
    "build_doc_map",
    "calculate_stats",
    "classify_declaration",
    "classify_export_line",
    "extract_export_name",
    "find_declaration_line",
    "is_direct_export",
    "is_export_like",
    "join_declaration",
    "locate_declaration",
    "resolve_module_path",
    "synthesize_symbol",
]
