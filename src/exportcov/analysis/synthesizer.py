"""Building exported symbol records from declaration text."""

from pathlib import Path

from exportcov.analysis.classifier import ExportForm, classify_declaration, classify_export_line
from exportcov.models.symbols import ExportedSymbol, ExportKind

# Lines gathered at most for one declaration, including the first
DECLARATION_LOOKAHEAD = 10


def join_declaration(lines: list[str], index: int) -> str:
    """Join a declaration spread over several lines into one string.

    If the line at ``index`` has neither ``{`` nor ``;``, following lines
    are appended until one contains either, up to a fixed bound.
    """
    text = lines[index].strip()
    if "{" in text or ";" in text:
        return text

    end = min(index + DECLARATION_LOOKAHEAD, len(lines))
    for following in lines[index + 1 : end]:
        text += " " + following.strip()
        if "{" in following or ";" in following:
            break
    return text


def synthesize_symbol(
    declaration: str,
    line_index: int,
    file: Path,
    doc_map: dict[int, str],
    exported_name: str | None = None,
) -> ExportedSymbol | None:
    """Build a symbol from a declaration's text.

    Args:
        declaration: Trimmed declaration text, possibly joined from
            several lines.
        line_index: 0-based index of the declaration's first line.
        file: Path reported for the symbol.
        doc_map: Documentation map of the declaring file.
        exported_name: Name the symbol is exported as; replaces the
            declared name when given.

    Returns:
        The symbol, or None if the text is not a recognized declaration.
    """
    export_kind = ExportKind.NAMED
    classified = classify_export_line(declaration)

    if classified is not None and classified.form is ExportForm.DECLARATION:
        name, kind = classified.name, classified.kind
        if classified.is_default:
            export_kind = ExportKind.DEFAULT
    elif classified is not None and classified.form in (ExportForm.BLOCK, ExportForm.TYPE_BLOCK):
        # The export statement itself: the declaration could not be located
        if not classified.specifiers:
            return None
        name, kind = classified.specifiers[0][1], classified.kind
    else:
        bare = classify_declaration(declaration)
        if bare is None:
            return None
        name, kind = bare

    if exported_name is not None:
        name = exported_name
        export_kind = ExportKind.DEFAULT if exported_name == "default" else ExportKind.NAMED

    return ExportedSymbol(
        name=name,
        kind=kind,
        file=file,
        line=line_index + 1,
        has_documentation=line_index in doc_map,
        documentation=doc_map.get(line_index),
        export_kind=export_kind,
    )
