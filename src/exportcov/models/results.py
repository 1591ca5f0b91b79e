"""Data models for analysis results."""

import math
from dataclasses import dataclass, field
from pathlib import Path

from exportcov.models.symbols import ExportedSymbol


def coverage_percentage(documented: int, total: int) -> int:
    """Percentage rounded half up; an empty set counts as fully documented."""
    if total == 0:
        return 100
    return math.floor(documented * 100 / total + 0.5)


@dataclass
class KindStats:
    """Coverage counts for one symbol kind."""

    total: int = 0
    documented: int = 0

    @property
    def percentage(self) -> int:
        return coverage_percentage(self.documented, self.total)

    def to_dict(self) -> dict:
        return {"total": self.total, "documented": self.documented}


@dataclass
class DocumentationStats:
    """Coverage summary over a set of symbols."""

    total: int = 0
    documented: int = 0
    undocumented: int = 0
    percentage: int = 100
    by_kind: dict[str, KindStats] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "documented": self.documented,
            "undocumented": self.undocumented,
            "percentage": self.percentage,
            "by_kind": {kind: stats.to_dict() for kind, stats in self.by_kind.items()},
        }


@dataclass
class AnalysisResult:
    """Result of analyzing one package or file."""

    path: Path
    has_config: bool = False
    has_exports_field: bool = False
    export_entry_path: str | None = None
    config_path: Path | None = None
    symbols: list[ExportedSymbol] = field(default_factory=list)
    stats: DocumentationStats = field(default_factory=DocumentationStats)

    @property
    def undocumented(self) -> list[ExportedSymbol]:
        return [s for s in self.symbols if not s.has_documentation]

    def to_dict(self) -> dict:
        return {
            "path": str(self.path),
            "has_config": self.has_config,
            "has_exports_field": self.has_exports_field,
            "export_entry_path": self.export_entry_path,
            "config_path": str(self.config_path) if self.config_path else None,
            "symbols": [s.to_dict() for s in self.symbols],
            "stats": self.stats.to_dict(),
        }


@dataclass
class WorkspaceMemberResult:
    """Analysis outcome for a single workspace member."""

    name: str
    path: Path
    result: AnalysisResult | None = None
    error: str | None = None

    @property
    def stats(self) -> DocumentationStats:
        if self.result is None:
            return DocumentationStats(percentage=0)
        return self.result.stats

    def to_dict(self) -> dict:
        data: dict = {
            "name": self.name,
            "path": str(self.path),
            "stats": self.stats.to_dict(),
        }
        if self.result is not None:
            data["has_config"] = self.result.has_config
            data["has_exports_field"] = self.result.has_exports_field
            data["export_entry_path"] = self.result.export_entry_path
        if self.error:
            data["error"] = self.error
        return data


@dataclass
class WorkspaceAggregate:
    """Totals across all workspace members."""

    total_members: int = 0
    total_exports: int = 0
    total_documented: int = 0
    total_undocumented: int = 0
    percentage: int = 100

    def to_dict(self) -> dict:
        return {
            "total_members": self.total_members,
            "total_exports": self.total_exports,
            "total_documented": self.total_documented,
            "total_undocumented": self.total_undocumented,
            "percentage": self.percentage,
        }


@dataclass
class WorkspaceReport:
    """Complete workspace analysis."""

    root: Path
    members: list[WorkspaceMemberResult] = field(default_factory=list)
    aggregate: WorkspaceAggregate = field(default_factory=WorkspaceAggregate)

    def to_dict(self) -> dict:
        return {
            "root": str(self.root),
            "members": [m.to_dict() for m in self.members],
            "aggregate": self.aggregate.to_dict(),
        }
