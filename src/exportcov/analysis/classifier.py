"""Line classification for export and declaration statements.

The grammar recognized here is a deliberately narrow subset of
TypeScript/JavaScript: one declaration per line, matched by prefix and
regular expression. Anything outside that subset classifies as ``None``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto

from exportcov.models.symbols import SymbolKind

DIRECT_EXPORT_PREFIXES = (
    "export function",
    "export async function",
    "export class",
    "export interface",
    "export type",
    "export enum",
    "export const",
    "export let",
    "export var",
    "export default",
)

# Type-only forms that share the "export type" prefix but declare nothing
TYPE_ONLY_PREFIXES = ("export type {", "export type *")

FROM_PATTERN = re.compile(r"""from\s+["']([^"']+)["']""")
BLOCK_PATTERN = re.compile(r"export\s*(?:type\s+)?\{\s*([^}]+)\s*\}")
AS_PATTERN = re.compile(r"\s+as\s+")

_EXPORT_DECLARATIONS: list[tuple[re.Pattern[str], SymbolKind]] = [
    (re.compile(r"export\s+(?:async\s+)?function\b\s*\*?\s*(\w+)"), SymbolKind.FUNCTION),
    (re.compile(r"export\s+class\s+(\w+)"), SymbolKind.CLASS),
    (re.compile(r"export\s+interface\s+(\w+)"), SymbolKind.INTERFACE),
    (re.compile(r"export\s+type\s+(\w+)"), SymbolKind.TYPE),
    (re.compile(r"export\s+(?:const\s+)?enum\s+(\w+)"), SymbolKind.ENUM),
    (re.compile(r"export\s+const\s+(\w+)"), SymbolKind.CONST),
    (re.compile(r"export\s+(?:let|var)\s+(\w+)"), SymbolKind.VARIABLE),
]

_BARE_DECLARATIONS: list[tuple[re.Pattern[str], SymbolKind]] = [
    (re.compile(r"(?:async\s+)?function\b\s*\*?\s*(\w+)"), SymbolKind.FUNCTION),
    (re.compile(r"class\s+(\w+)"), SymbolKind.CLASS),
    (re.compile(r"interface\s+(\w+)"), SymbolKind.INTERFACE),
    (re.compile(r"type\s+(\w+)"), SymbolKind.TYPE),
    (re.compile(r"(?:const\s+)?enum\s+(\w+)"), SymbolKind.ENUM),
    (re.compile(r"const\s+(\w+)"), SymbolKind.CONST),
    (re.compile(r"(?:let|var)\s+(\w+)"), SymbolKind.VARIABLE),
]

_DEFAULT_FUNCTION = re.compile(r"function\b\s*\*?\s*(\w+)")
_DEFAULT_CLASS = re.compile(r"class\s+(?!extends\b)(\w+)")


class ExportForm(Enum):
    """Syntactic shape of an export statement."""

    DECLARATION = auto()  # export function foo / export default ...
    BLOCK = auto()  # export { a, b as c } [from "..."]
    TYPE_BLOCK = auto()  # export type { A } [from "..."]
    STAR = auto()  # export * from "..."


@dataclass(frozen=True)
class ExportLine:
    """A classified export statement."""

    form: ExportForm
    name: str | None = None  # Declared identifier, "default" when anonymous
    kind: SymbolKind = SymbolKind.VARIABLE
    is_default: bool = False
    specifiers: tuple[tuple[str, str], ...] = ()  # (original, exported) pairs
    module: str | None = None  # The "from" specifier, if any

    @property
    def exported_name(self) -> str | None:
        """Name a consumer imports this declaration by."""
        if self.is_default:
            return "default"
        return self.name

    def declares(self, name: str) -> bool:
        """Whether this line directly declares ``name``."""
        if self.form is not ExportForm.DECLARATION:
            return False
        return self.name == name or (self.is_default and name == "default")


def is_direct_export(line: str) -> bool:
    """Check if a trimmed line starts a direct export declaration."""
    if line.startswith(TYPE_ONLY_PREFIXES):
        return False
    return line.startswith(DIRECT_EXPORT_PREFIXES)


def is_export_like(line: str) -> bool:
    """Check if a trimmed line is any kind of export statement."""
    return is_direct_export(line) or line.startswith("export ")


def parse_specifiers(text: str) -> tuple[tuple[str, str], ...]:
    """Split ``a, b as c`` into ``(("a", "a"), ("b", "c"))``."""
    pairs = []
    for item in text.split(","):
        item = item.strip()
        if item.startswith("type "):
            item = item[len("type ") :].strip()
        if not item:
            continue
        parts = AS_PATTERN.split(item, maxsplit=1)
        original = parts[0].strip()
        exported = parts[1].strip() if len(parts) > 1 else original
        pairs.append((original, exported))
    return tuple(pairs)


def classify_export_line(line: str) -> ExportLine | None:
    """Classify a trimmed line as an export statement.

    Returns None for anything that is not one of the recognized export
    forms, including exports whose declared name cannot be extracted.
    """
    if line.startswith("export *") or line.startswith("export type *"):
        match = FROM_PATTERN.search(line)
        return ExportLine(form=ExportForm.STAR, module=match.group(1) if match else None)

    if line.startswith("export {") or line.startswith("export type {"):
        is_type = line.startswith("export type")
        block = BLOCK_PATTERN.search(line)
        source = FROM_PATTERN.search(line)
        return ExportLine(
            form=ExportForm.TYPE_BLOCK if is_type else ExportForm.BLOCK,
            kind=SymbolKind.TYPE if is_type else SymbolKind.VARIABLE,
            specifiers=parse_specifiers(block.group(1)) if block else (),
            module=source.group(1) if source else None,
        )

    if line.startswith("export default"):
        rest = line[len("export default") :]
        name, kind = "default", SymbolKind.VARIABLE
        if "function" in rest:
            kind = SymbolKind.FUNCTION
            match = _DEFAULT_FUNCTION.search(rest)
            if match:
                name = match.group(1)
        elif "class" in rest:
            kind = SymbolKind.CLASS
            match = _DEFAULT_CLASS.search(rest)
            if match:
                name = match.group(1)
        return ExportLine(form=ExportForm.DECLARATION, name=name, kind=kind, is_default=True)

    if not is_direct_export(line):
        return None

    for pattern, kind in _EXPORT_DECLARATIONS:
        match = pattern.match(line)
        if match:
            return ExportLine(form=ExportForm.DECLARATION, name=match.group(1), kind=kind)

    return None


def classify_declaration(line: str) -> tuple[str, SymbolKind] | None:
    """Classify a trimmed, non-exported declaration line.

    Returns the declared name and kind, e.g. ``("Server", SymbolKind.TYPE)``
    for ``type Server = {``.
    """
    for pattern, kind in _BARE_DECLARATIONS:
        match = pattern.match(line)
        if match:
            return match.group(1), kind
    return None


def extract_export_name(line: str) -> str | None:
    """Get the name a direct export line is imported by.

    Default exports yield ``"default"``; blocks, star exports and other
    lines yield None.
    """
    classified = classify_export_line(line)
    if classified is None or classified.form is not ExportForm.DECLARATION:
        return None
    return classified.exported_name
