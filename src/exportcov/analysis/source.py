"""Reading source files as lines."""

from pathlib import Path

from exportcov.logger import logger


def read_lines_strict(path: Path) -> list[str]:
    """Read a file as a list of lines, raising OSError if it cannot be read."""
    return path.read_text(encoding="utf-8", errors="replace").split("\n")


def read_lines(path: Path) -> list[str] | None:
    """Read a file as a list of lines, or None if it cannot be read."""
    try:
        return read_lines_strict(path)
    except OSError as e:
        logger.debug("Skipping unreadable file", path=str(path), error=str(e))
        return None
