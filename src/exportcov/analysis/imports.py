"""Module specifier resolution and import statement lookup."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from exportcov.analysis.classifier import parse_specifiers
from exportcov.logger import logger

# Tried in order after the exact path
RESOLVE_SUFFIXES = (".ts", ".tsx", ".js", ".jsx", ".mjs", "/mod.ts", "/index.ts")

_NAMED_IMPORT = re.compile(
    r"""import\s*(?:type\s+)?(?:(\w+)\s*,\s*)?\{([^}]+)\}\s*from\s*["']([^"']+)["']"""
)
_DEFAULT_IMPORT = re.compile(
    r"""import\s+(?:type\s+)?(\w+)\s*(?:,[^"']*)?from\s*["']([^"']+)["']"""
)
_NAMESPACE_IMPORT = re.compile(
    r"""import\s*(?:\w+\s*,\s*)?\*\s*as\s+(\w+)\s+from\s*["']([^"']+)["']"""
)


@dataclass(frozen=True)
class ImportBinding:
    """Where a locally bound import name comes from."""

    source: Path
    imported_name: str | None  # None for namespace imports


class ImportResolver:
    """Resolves relative module specifiers to files on disk."""

    def __init__(self) -> None:
        # (directory, specifier) -> resolved path
        self._cache: dict[tuple[Path, str], Path | None] = {}

    def resolve(self, specifier: str, from_dir: Path) -> Path | None:
        """Resolve a module specifier relative to ``from_dir``.

        Only relative specifiers are resolvable; bare package names and
        URLs yield None.
        """
        key = (from_dir, specifier)
        if key not in self._cache:
            self._cache[key] = resolve_module_path(specifier, from_dir)
            if self._cache[key] is None:
                logger.debug("Unresolved module specifier", specifier=specifier, directory=str(from_dir))
        return self._cache[key]

    def find_import_source(
        self,
        lines: list[str],
        local_name: str,
        from_dir: Path,
    ) -> ImportBinding | None:
        """Find the module a locally bound name was imported from.

        Handles named (``import { a as b }``), default (``import a``),
        mixed (``import a, { b }``) and namespace (``import * as ns``)
        forms. Returns None if no import binds the name or the module
        cannot be resolved.
        """
        for raw in lines:
            line = raw.strip()
            if not line.startswith("import "):
                continue

            named = _NAMED_IMPORT.search(line)
            if named:
                default_name, specifiers, module = named.groups()
                if default_name == local_name:
                    return self._binding(module, from_dir, "default")
                for imported, alias in parse_specifiers(specifiers):
                    if alias == local_name:
                        return self._binding(module, from_dir, imported)

            namespace = _NAMESPACE_IMPORT.search(line)
            if namespace and namespace.group(1) == local_name:
                return self._binding(namespace.group(2), from_dir, None)

            default = _DEFAULT_IMPORT.search(line)
            if default and default.group(1) == local_name:
                return self._binding(default.group(2), from_dir, "default")

        return None

    def _binding(
        self,
        module: str,
        from_dir: Path,
        imported_name: str | None,
    ) -> ImportBinding | None:
        source = self.resolve(module, from_dir)
        if source is None:
            return None
        return ImportBinding(source=source, imported_name=imported_name)


def resolve_module_path(specifier: str, from_dir: Path) -> Path | None:
    """Resolve a relative specifier to an absolute file path, or None."""
    if not specifier.startswith("."):
        return None

    base = from_dir / specifier
    if base.is_file():
        return base.resolve()

    for suffix in RESOLVE_SUFFIXES:
        candidate = Path(f"{base}{suffix}")
        if candidate.is_file():
            return candidate.resolve()

    return None
