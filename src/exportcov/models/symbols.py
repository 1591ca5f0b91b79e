"""Data models for exported symbols and re-export tracing."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class SymbolKind(Enum):
    """Kinds of documentable declarations."""

    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    TYPE = "type"
    CONST = "const"
    VARIABLE = "variable"
    ENUM = "enum"


class ExportKind(Enum):
    """How a symbol is exported."""

    NAMED = "named"
    DEFAULT = "default"


@dataclass
class ExportedSymbol:
    """A resolved export, located at its original declaration."""

    name: str  # As seen by a consumer, after renames
    kind: SymbolKind
    file: Path
    line: int  # 1-based
    has_documentation: bool = False
    documentation: str | None = None
    export_kind: ExportKind = ExportKind.NAMED

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "file": str(self.file),
            "line": self.line,
            "has_documentation": self.has_documentation,
            "documentation": self.documentation,
            "export_kind": self.export_kind.value,
        }


@dataclass(frozen=True)
class TracedExport:
    """An edge in the re-export graph."""

    original_name: str
    exported_name: str
    source_path: Path
    line: int  # 1-based
