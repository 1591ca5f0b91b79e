"""Source file discovery and exclusion for exportcov.

Handles .gitignore patterns and default patterns using the pathspec
library for gitignore-style matching.
"""

from dataclasses import dataclass, field
from pathlib import Path

import pathspec

from exportcov.logger import logger

SOURCE_EXTENSIONS = (".ts", ".tsx", ".js", ".jsx", ".mjs")

# Default patterns that are always excluded
DEFAULT_EXCLUDES = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    "*.test.*",
    "*.spec.*",
    "test/",
    "tests/",
    "*_test.*",
]


@dataclass
class ExclusionConfig:
    """Configuration for file exclusion."""

    gitignore_patterns: list[str] = field(default_factory=list)
    default_patterns: list[str] = field(default_factory=list)


class FileExcluder:
    """Handles file exclusion with gitignore-style pattern matching."""

    def __init__(
        self,
        project_root: Path,
        extra_excludes: list[str] | None = None,
    ) -> None:
        """Initialize the file excluder.

        Args:
            project_root: Root directory of the project.
            extra_excludes: Additional patterns to exclude.
        """
        self.project_root = project_root
        self._config = ExclusionConfig()
        self._load_patterns(extra_excludes or [])
        self._spec = pathspec.GitIgnoreSpec.from_lines(self.patterns)

    def _load_patterns(self, extra_excludes: list[str]) -> None:
        """Load default and .gitignore patterns."""
        self._config.default_patterns = list(DEFAULT_EXCLUDES)
        self._load_gitignore()

        if extra_excludes:
            self._config.default_patterns.extend(extra_excludes)

    def _load_gitignore(self) -> None:
        """Load .gitignore patterns."""
        gitignore_path = self.project_root / ".gitignore"
        if not gitignore_path.is_file():
            return
        try:
            content = gitignore_path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read .gitignore", path=str(gitignore_path), error=str(e))
            return
        self._config.gitignore_patterns = [
            line.strip()
            for line in content.splitlines()
            if line.strip() and not line.startswith("#")
        ]

    def should_exclude(self, file_path: Path) -> bool:
        """Check if a file should be excluded.

        Args:
            file_path: Path to the file to check.

        Returns:
            True if the file should be excluded, False otherwise.
        """
        try:
            rel_path = file_path.relative_to(self.project_root)
        except ValueError:
            return False

        if self._spec.match_file(rel_path.as_posix()):
            return True

        # Directory patterns such as "tests/" only match with a trailing slash
        for i in range(1, len(rel_path.parts)):
            if self._spec.match_file(Path(*rel_path.parts[:i]).as_posix() + "/"):
                return True

        return False

    def filter_files(self, files: list[Path]) -> list[Path]:
        """Filter a list of files, removing excluded ones."""
        return [f for f in files if not self.should_exclude(f)]

    @property
    def patterns(self) -> list[str]:
        """Return all loaded patterns."""
        return self._config.default_patterns + self._config.gitignore_patterns


def is_source_file(path: Path) -> bool:
    """Check if a path has a recognized source extension."""
    return path.suffix in SOURCE_EXTENSIONS


def find_source_files(root: Path, excluder: FileExcluder | None = None) -> list[Path]:
    """Find source files under a directory, or the file itself.

    Returns paths sorted for stable output. A single file is returned only
    if it has a source extension; exclusion patterns do not apply to it.
    """
    if root.is_file():
        return [root] if is_source_file(root) else []

    if excluder is None:
        excluder = FileExcluder(root)

    files = sorted(p for p in root.rglob("*") if p.is_file() and is_source_file(p))
    return excluder.filter_files(files)
