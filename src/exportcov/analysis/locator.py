"""Find the line where a symbol is declared."""

import re
from pathlib import Path
from typing import Callable

from exportcov.analysis.classifier import classify_export_line, is_direct_export
from exportcov.analysis.source import read_lines

_BARE_KEYWORDS = (
    r"(?:(?:async\s+)?function\b\s*\*?\s*"
    r"|(?:class|interface|type|(?:const\s+)?enum|const|let|var)\s+)"
)


def _bare_declaration_pattern(name: str) -> re.Pattern[str]:
    return re.compile(rf"{_BARE_KEYWORDS}{re.escape(name)}\b")


def find_declaration_line(lines: list[str], name: str) -> int | None:
    """Find the 1-based line declaring ``name``.

    An export declaring the name wins over a bare declaration anywhere in
    the file. Bare declarations must match the whole name, so ``Server``
    never matches ``ServerRateLimitDescription``.
    """
    bare = _bare_declaration_pattern(name)
    first_bare: int | None = None

    for index, raw in enumerate(lines):
        line = raw.strip()
        if is_direct_export(line):
            classified = classify_export_line(line)
            if classified is not None and classified.declares(name):
                return index + 1
        elif first_bare is None and bare.match(line):
            first_bare = index + 1

    return first_bare


def locate_declaration(
    path: Path,
    name: str,
    read: Callable[[Path], list[str] | None] = read_lines,
) -> int | None:
    """Find the 1-based line declaring ``name`` in ``path``.

    Returns None when the file is missing or unreadable, or when nothing in
    it declares the name.
    """
    lines = read(path)
    if lines is None:
        return None
    return find_declaration_line(lines, name)
