"""Association of documentation comments with declarations."""

from exportcov.analysis.classifier import is_export_like

DOC_OPEN = "/**"
DOC_CLOSE = "*/"

# Module-level documentation never counts for a symbol
MODULE_TAG = "@module"

# Lines after a documented export that share its documentation, so a
# declaration spread over several lines keeps the comment
SIGNATURE_WINDOW = 5


def build_doc_map(lines: list[str]) -> dict[int, str]:
    """Map 0-based line indices to the documentation comment covering them.

    A ``/** ... */`` block is bound to the next line that is neither blank
    nor a ``//`` comment, and only if that line is an export. The binding
    extends over the following ``SIGNATURE_WINDOW`` lines.
    """
    doc_map: dict[int, str] = {}
    block: list[str] = []

    for index, raw in enumerate(lines):
        line = raw.strip()

        if line.startswith(DOC_OPEN):
            if line.endswith(DOC_CLOSE):
                block = []
                _bind(doc_map, lines, index, line)
            else:
                block = [line]
        elif block:
            block.append(raw)
            if line.endswith(DOC_CLOSE):
                _bind(doc_map, lines, index, "\n".join(block))
                block = []

    return doc_map


def _bind(doc_map: dict[int, str], lines: list[str], close_index: int, text: str) -> None:
    if MODULE_TAG in text:
        return

    for index in range(close_index + 1, len(lines)):
        line = lines[index].strip()
        if not line or line.startswith("//"):
            continue
        if is_export_like(line):
            doc_map[index] = text
            last = min(index + SIGNATURE_WINDOW, len(lines) - 1)
            for covered in range(index + 1, last + 1):
                doc_map[covered] = text
        return
