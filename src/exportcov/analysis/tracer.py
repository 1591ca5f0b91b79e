"""Re-export graph building and tracing."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from exportcov.analysis.classifier import ExportForm, ExportLine, classify_export_line
from exportcov.analysis.imports import ImportResolver
from exportcov.analysis.locator import locate_declaration
from exportcov.analysis.source import read_lines, read_lines_strict
from exportcov.logger import logger
from exportcov.models.symbols import TracedExport


@dataclass
class ExportGraph:
    """Exports contributed by each traced file."""

    # file path -> exports visible from that file, in discovery order
    buckets: dict[Path, list[TracedExport]] = field(default_factory=dict)

    def add(self, file: Path, export: TracedExport) -> bool:
        """Add an export to a file's bucket.

        Skips exports whose (exported name, source path) pair is already
        recorded for that file. Returns True if the export was added.
        """
        bucket = self.buckets.setdefault(file, [])
        for existing in bucket:
            if (
                existing.exported_name == export.exported_name
                and existing.source_path == export.source_path
            ):
                return False
        bucket.append(export)
        return True

    def get(self, file: Path) -> list[TracedExport]:
        """Get the exports recorded so far for a file."""
        return self.buckets.get(file, [])

    def unique_exports(self) -> list[TracedExport]:
        """Flatten all buckets, keeping one export per declaration.

        Two entries are the same export when they share a source path,
        an original name and an exported name.
        """
        unique: dict[tuple[Path, str, str], TracedExport] = {}
        for bucket in self.buckets.values():
            for export in bucket:
                key = (export.source_path, export.original_name, export.exported_name)
                unique.setdefault(key, export)
        return list(unique.values())


class ExportTracer:
    """Follows export statements from entry files to their declarations.

    One tracer holds the state of one traversal: the export graph and the
    set of files already visited. A file is marked visited before its body
    is scanned, so circular ``export *`` chains terminate; a file re-entered
    mid-scan contributes only what its bucket holds at that moment.
    """

    def __init__(self, resolver: ImportResolver | None = None) -> None:
        self.resolver = resolver or ImportResolver()
        self.graph = ExportGraph()
        self.visited: set[Path] = set()
        self._sources: dict[Path, list[str] | None] = {}

    def trace(self, entry_file: Path) -> list[TracedExport]:
        """Trace an entry file and return the exports visible from it.

        Raises:
            OSError: If the entry file cannot be read.
        """
        entry_file = entry_file.resolve()
        if entry_file not in self._sources:
            self._sources[entry_file] = read_lines_strict(entry_file)
        self._trace_file(entry_file)
        return self.graph.get(entry_file)

    def read_source(self, path: Path) -> list[str] | None:
        """Read a source file once per traversal; None if unreadable."""
        if path not in self._sources:
            self._sources[path] = read_lines(path)
        return self._sources[path]

    def _trace_file(self, file: Path) -> None:
        if file in self.visited:
            return
        self.visited.add(file)

        lines = self.read_source(file)
        if lines is None:
            return

        logger.debug("Tracing exports", file=str(file))
        self.graph.buckets.setdefault(file, [])

        for index, raw in enumerate(lines):
            classified = classify_export_line(raw.strip())
            if classified is None:
                continue

            line_number = index + 1
            if classified.form is ExportForm.STAR:
                self._trace_star(file, classified)
            elif classified.form in (ExportForm.BLOCK, ExportForm.TYPE_BLOCK):
                if classified.module is not None:
                    self._trace_reexport(file, classified, line_number)
                else:
                    self._trace_local_block(file, lines, classified, line_number)
            elif classified.exported_name is not None:
                # Default exports are recorded under "default"
                self.graph.add(
                    file,
                    TracedExport(
                        original_name=classified.exported_name,
                        exported_name=classified.exported_name,
                        source_path=file,
                        line=line_number,
                    ),
                )

    def _trace_star(self, file: Path, classified: ExportLine) -> None:
        """Handle ``export * from "..."``."""
        if classified.module is None:
            return
        target = self.resolver.resolve(classified.module, file.parent)
        if target is None:
            return

        self._trace_file(target)
        for export in list(self.graph.get(target)):
            self.graph.add(file, export)

    def _trace_reexport(self, file: Path, classified: ExportLine, line_number: int) -> None:
        """Handle ``export { a, b as c } from "..."``."""
        assert classified.module is not None
        target = self.resolver.resolve(classified.module, file.parent)
        if target is None:
            return

        for original, exported in classified.specifiers:
            self._add_located(file, target, original, exported, line_number)

    def _trace_local_block(
        self,
        file: Path,
        lines: list[str],
        classified: ExportLine,
        line_number: int,
    ) -> None:
        """Handle ``export { a, b as c }`` of imported or local names."""
        for original, exported in classified.specifiers:
            binding = self.resolver.find_import_source(lines, original, file.parent)
            if binding is None:
                self._add_located(file, file, original, exported, line_number)
            else:
                self._add_located(
                    file,
                    binding.source,
                    binding.imported_name,
                    exported,
                    line_number,
                    local_name=original,
                )

    def _add_located(
        self,
        file: Path,
        source: Path,
        original: str | None,
        exported: str,
        line_number: int,
        local_name: str | None = None,
    ) -> None:
        """Record an export at its declaration, or at the statement itself.

        When the declaration cannot be located, the export points at the
        re-export statement in ``file`` so it is still reported.
        """
        located = None
        if original is not None:
            located = locate_declaration(source, original, read=self.read_source)

        if located is None:
            logger.debug(
                "Declaration not found, using re-export line",
                name=original or local_name,
                source=str(source),
                file=str(file),
                line=line_number,
            )
            self.graph.add(
                file,
                TracedExport(
                    original_name=local_name or original or exported,
                    exported_name=exported,
                    source_path=file,
                    line=line_number,
                ),
            )
            return

        self.graph.add(
            file,
            TracedExport(
                original_name=original,
                exported_name=exported,
                source_path=source,
                line=located,
            ),
        )
