"""Integration tests for package analysis."""

import shutil
from pathlib import Path

import pytest

from exportcov.analyzer import analyze_path, display_path, scan_file
from exportcov.models.symbols import ExportKind, SymbolKind

# Path to test fixtures
FIXTURES_PATH = Path(__file__).parent / "fixtures"


class TestFullScan:
    """Tests for analysis without an exports field."""

    def test_undocumented_file(self) -> None:
        """Every export in basic.ts lacks documentation."""
        result = analyze_path(FIXTURES_PATH / "simple" / "basic.ts")

        assert result.stats.total == 4
        assert result.stats.documented == 0
        assert result.stats.percentage == 0
        assert not result.has_config
        assert {s.name for s in result.symbols} == {
            "documentedFunction",
            "UndocumentedClass",
            "DocumentedInterface",
            "undocumentedConst",
        }

    def test_documented_file(self) -> None:
        """Every export in documented.ts is documented."""
        result = analyze_path(FIXTURES_PATH / "simple" / "documented.ts")

        assert result.stats.total == 4
        assert result.stats.documented == 4
        assert result.stats.percentage == 100
        assert all(s.documentation for s in result.symbols)

    def test_kinds_and_lines(self) -> None:
        """Symbols carry their kind and 1-based line."""
        result = analyze_path(FIXTURES_PATH / "simple" / "basic.ts")

        found = {s.name: (s.kind, s.line) for s in result.symbols}
        assert found["documentedFunction"] == (SymbolKind.FUNCTION, 1)
        assert found["UndocumentedClass"] == (SymbolKind.CLASS, 5)
        assert found["DocumentedInterface"] == (SymbolKind.INTERFACE, 13)
        assert found["undocumentedConst"] == (SymbolKind.CONST, 18)

    def test_single_file_display_path(self) -> None:
        """A single file is reported by its name."""
        result = analyze_path(FIXTURES_PATH / "simple" / "basic.ts")

        assert all(s.file == Path("basic.ts") for s in result.symbols)

    def test_directory(self) -> None:
        """A directory scan covers every source file under it."""
        result = analyze_path(FIXTURES_PATH / "simple")

        assert result.stats.total == 8
        assert result.stats.documented == 4
        assert result.stats.percentage == 50
        assert {s.file for s in result.symbols} == {Path("basic.ts"), Path("documented.ts")}

    def test_prefix_names(self) -> None:
        """A name that prefixes another is located at its own line."""
        result = analyze_path(FIXTURES_PATH / "prefix_bug" / "types.ts")

        lines = {s.name: s.line for s in result.symbols}
        assert lines == {"ServerRateLimitDescription": 1, "Server": 6}

    def test_excluded_files_skipped(self, write_tree) -> None:
        """Test files and dependencies are not scanned."""
        root = write_tree(
            {
                "mod.ts": "export const a = 1;\n",
                "mod.test.ts": "export const b = 2;\n",
                "node_modules/x/index.js": "export const c = 3;\n",
            }
        )

        result = analyze_path(root)

        assert [s.name for s in result.symbols] == ["a"]

    def test_without_exports_field_scans_everything(self, tmp_path: Path) -> None:
        """A config without exports falls back to scanning every file."""
        project = tmp_path / "with_config"
        shutil.copytree(FIXTURES_PATH / "with_config", project)
        (project / "deno.json").write_text('{"name": "@example/pkg"}')

        result = analyze_path(project)

        names = {s.name for s in result.symbols}
        assert result.has_config
        assert not result.has_exports_field
        assert "unrelatedHelper" in names
        assert "originalFunction" in names
        assert "renamedFunction" not in names

    def test_empty_directory(self, tmp_path: Path) -> None:
        """No exports means full coverage."""
        result = analyze_path(tmp_path)

        assert result.symbols == []
        assert result.stats.percentage == 100

    def test_missing_path(self, tmp_path: Path) -> None:
        """A missing path is an error."""
        with pytest.raises(FileNotFoundError):
            analyze_path(tmp_path / "missing")


class TestPublicApi:
    """Tests for analysis through the exports field."""

    def test_reexports_traced(self) -> None:
        """Only symbols reachable from the entry are reported."""
        result = analyze_path(FIXTURES_PATH / "with_config")

        assert result.has_config
        assert result.has_exports_field
        assert result.export_entry_path == "./reexport.ts"
        assert {s.name for s in result.symbols} == {
            "documentedFunction",
            "UndocumentedClass",
            "DocumentedInterface",
            "undocumentedConst",
            "renamedFunction",
        }
        assert result.stats.total == 5
        assert result.stats.documented == 3
        assert result.stats.percentage == 60

    def test_unrelated_excluded(self) -> None:
        """Exports of files the entry never reaches are not counted."""
        result = analyze_path(FIXTURES_PATH / "with_config")

        names = {s.name for s in result.symbols}
        assert "unrelatedHelper" not in names
        assert "unrelatedConst" not in names

    def test_symbols_at_original_declaration(self) -> None:
        """Symbols point at their declaring file and line, not the entry."""
        result = analyze_path(FIXTURES_PATH / "with_config")

        found = {s.name: s for s in result.symbols}
        assert (found["documentedFunction"].file, found["documentedFunction"].line) == (Path("a.ts"), 4)
        assert (found["UndocumentedClass"].file, found["UndocumentedClass"].line) == (Path("a.ts"), 10)
        assert (found["DocumentedInterface"].file, found["DocumentedInterface"].line) == (Path("b.ts"), 4)
        assert (found["undocumentedConst"].file, found["undocumentedConst"].line) == (Path("b.ts"), 10)
        assert (found["renamedFunction"].file, found["renamedFunction"].line) == (Path("b.ts"), 15)

    def test_documentation_flags(self) -> None:
        """Documentation is read at the original declaration."""
        result = analyze_path(FIXTURES_PATH / "with_config")

        documented = {s.name for s in result.symbols if s.has_documentation}
        assert documented == {"documentedFunction", "DocumentedInterface", "renamedFunction"}

    def test_renamed_keeps_declared_kind(self) -> None:
        """A renamed re-export has the kind of its declaration."""
        result = analyze_path(FIXTURES_PATH / "with_config")

        renamed = next(s for s in result.symbols if s.name == "renamedFunction")
        assert renamed.kind is SymbolKind.FUNCTION
        assert renamed.export_kind is ExportKind.NAMED

    def test_file_target_uses_parent_config(self) -> None:
        """Analyzing a file inside a package still follows its exports."""
        result = analyze_path(FIXTURES_PATH / "with_config" / "unrelated.ts")

        assert result.has_exports_field
        assert result.stats.total == 5

    def test_cycle(self) -> None:
        """Circular star exports are analyzed once each."""
        result = analyze_path(FIXTURES_PATH / "cycle")

        assert sorted(s.name for s in result.symbols) == ["fromA", "fromB"]
        assert result.stats.documented == 1

    def test_multiple_entries(self, write_tree) -> None:
        """Every mapping value is an entry; shared declarations count once."""
        root = write_tree(
            {
                "deno.json": '{"exports": {".": "./mod.ts", "./extra": "./extra.ts"}}',
                "mod.ts": 'export * from "./core.ts";\n',
                "extra.ts": 'export { core } from "./core.ts";\n/** Extra. */\nexport const extra = 1;\n',
                "core.ts": "/** Core. */\nexport const core = 1;\n",
            }
        )

        result = analyze_path(root)

        assert sorted(s.name for s in result.symbols) == ["core", "extra"]
        assert result.stats.percentage == 100

    def test_default_export_counted_once(self, write_tree) -> None:
        """A default export reached directly and by re-export is one symbol."""
        root = write_tree(
            {
                "deno.json": '{"exports": {".": "./mod.ts", "./a": "./a.ts"}}',
                "mod.ts": 'export { default } from "./a.ts";\n',
                "a.ts": "/** Doc. */\nexport default function foo() {}\n",
            }
        )

        result = analyze_path(root)

        [symbol] = result.symbols
        assert symbol.name == "default"
        assert symbol.export_kind is ExportKind.DEFAULT
        assert (symbol.file, symbol.line) == (Path("a.ts"), 2)
        assert symbol.has_documentation
        assert result.stats.total == 1

    def test_missing_entry(self, write_tree) -> None:
        """An entry that does not exist is an error."""
        root = write_tree({"deno.json": '{"exports": "./missing.ts"}'})

        with pytest.raises(OSError):
            analyze_path(root)

    def test_unlocated_reexport_counted(self, write_tree) -> None:
        """A re-export whose declaration cannot be found is still reported."""
        root = write_tree(
            {
                "deno.json": '{"exports": "./mod.ts"}',
                "mod.ts": 'export { ghost } from "./a.ts";\n',
                "a.ts": "export const other = 1;\n",
            }
        )

        result = analyze_path(root)

        [symbol] = result.symbols
        assert symbol.name == "ghost"
        assert symbol.file == Path("mod.ts")
        assert symbol.line == 1
        assert not symbol.has_documentation


class TestScanFile:
    """Tests for scan_file."""

    def test_local_block_items(self) -> None:
        """Each item of a local export block is a symbol under its exported name."""
        lines = ["const a = 1;", "function b() {}", "export { a, b as beta };"]

        symbols = scan_file(lines, Path("mod.ts"))

        assert [s.name for s in symbols] == ["a", "beta"]
        assert all(s.line == 3 for s in symbols)

    def test_reexports_ignored(self) -> None:
        """Statements that only forward other modules declare nothing here."""
        lines = [
            'export * from "./a.ts";',
            'export { b } from "./b.ts";',
            "export type { C };",
        ]

        assert scan_file(lines, Path("mod.ts")) == []

    def test_default_export(self) -> None:
        """Default exports are reported with their export kind."""
        [symbol] = scan_file(["export default function main() {}"], Path("mod.ts"))

        assert symbol.name == "main"
        assert symbol.export_kind is ExportKind.DEFAULT


class TestDisplayPath:
    """Tests for display_path."""

    def test_relative(self) -> None:
        """Paths under the base are shown relative to it."""
        assert display_path(Path("/pkg/src/a.ts"), Path("/pkg")) == Path("src/a.ts")

    def test_outside(self) -> None:
        """Paths outside the base are left as is."""
        assert display_path(Path("/other/a.ts"), Path("/pkg")) == Path("/other/a.ts")
