"""Tests for the exclusion module."""

from pathlib import Path

import pytest

from exportcov.exclusion import DEFAULT_EXCLUDES, FileExcluder, find_source_files, is_source_file


class TestDefaultExcludes:
    """Tests for default exclusion patterns."""

    def test_default_excludes_list(self) -> None:
        """Verify DEFAULT_EXCLUDES contains expected patterns."""
        assert "node_modules" in DEFAULT_EXCLUDES
        assert ".git" in DEFAULT_EXCLUDES
        assert "dist" in DEFAULT_EXCLUDES
        assert "*.test.*" in DEFAULT_EXCLUDES

    def test_excludes_node_modules(self, tmp_path: Path) -> None:
        """Should exclude dependencies at any depth."""
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "node_modules" / "lib" / "index.js")
        assert excluder.should_exclude(tmp_path / "pkg" / "node_modules" / "a.ts")

    @pytest.mark.parametrize(
        "relative",
        ["mod.test.ts", "src/mod.spec.tsx", "mod_test.ts", "tests/helpers.ts", "test/a.ts"],
    )
    def test_excludes_tests(self, tmp_path: Path, relative: str) -> None:
        """Should exclude test files and test directories."""
        assert FileExcluder(tmp_path).should_exclude(tmp_path / relative)

    def test_includes_regular_source(self, tmp_path: Path) -> None:
        """Should not exclude regular source files."""
        excluder = FileExcluder(tmp_path)

        assert not excluder.should_exclude(tmp_path / "mod.ts")
        assert not excluder.should_exclude(tmp_path / "src" / "contest.ts")


class TestGitignore:
    """Tests for .gitignore handling."""

    def test_loads_gitignore(self, tmp_path: Path) -> None:
        """Should honor .gitignore patterns."""
        (tmp_path / ".gitignore").write_text("# generated\ngen/\n*.gen.ts\n")
        excluder = FileExcluder(tmp_path)

        assert excluder.should_exclude(tmp_path / "gen" / "a.ts")
        assert excluder.should_exclude(tmp_path / "src" / "api.gen.ts")
        assert "gen/" in excluder.patterns
        assert "# generated" not in excluder.patterns

    def test_extra_excludes(self, tmp_path: Path) -> None:
        """Command line patterns are added to the defaults."""
        excluder = FileExcluder(tmp_path, extra_excludes=["legacy/"])

        assert excluder.should_exclude(tmp_path / "legacy" / "old.ts")
        assert "legacy/" in excluder.patterns

    def test_outside_root(self, tmp_path: Path) -> None:
        """Files outside the project root are never excluded."""
        excluder = FileExcluder(tmp_path / "project")

        assert not excluder.should_exclude(tmp_path / "elsewhere" / "node_modules" / "a.ts")


class TestFindSourceFiles:
    """Tests for source discovery."""

    def test_is_source_file(self) -> None:
        """Only JS/TS extensions count."""
        assert is_source_file(Path("a.ts"))
        assert is_source_file(Path("a.mjs"))
        assert not is_source_file(Path("a.d"))
        assert not is_source_file(Path("deno.json"))

    def test_discovers_sorted(self, write_tree) -> None:
        """Should find source files recursively in sorted order."""
        root = write_tree(
            {
                "src/b.ts": "",
                "src/a.tsx": "",
                "mod.js": "",
                "README.md": "",
                "src/a.test.ts": "",
                "node_modules/x/index.js": "",
            }
        )

        files = find_source_files(root)

        assert files == [root / "mod.js", root / "src" / "a.tsx", root / "src" / "b.ts"]

    def test_single_file(self, write_tree) -> None:
        """A file root is returned as is, even if it matches a pattern."""
        root = write_tree({"mod.test.ts": "", "notes.txt": ""})

        assert find_source_files(root / "mod.test.ts") == [root / "mod.test.ts"]
        assert find_source_files(root / "notes.txt") == []
