"""Data models for exportcov."""

from exportcov.models.results import (
    AnalysisResult,
    DocumentationStats,
    KindStats,
    WorkspaceAggregate,
    WorkspaceMemberResult,
    WorkspaceReport,
    coverage_percentage,
)
from exportcov.models.symbols import ExportedSymbol, ExportKind, SymbolKind, TracedExport

__all__ = [
    # Symbol models
    "ExportKind",
    "ExportedSymbol",
    "SymbolKind",
    "TracedExport",
    # Result models
    "AnalysisResult",
    "DocumentationStats",
    "KindStats",
    "WorkspaceAggregate",
    "WorkspaceMemberResult",
    "WorkspaceReport",
    "coverage_percentage",
]
