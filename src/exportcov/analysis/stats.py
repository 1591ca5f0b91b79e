"""Coverage statistics."""

from collections.abc import Iterable

from exportcov.models.results import DocumentationStats, KindStats, coverage_percentage
from exportcov.models.symbols import ExportedSymbol


def calculate_stats(symbols: Iterable[ExportedSymbol]) -> DocumentationStats:
    """Reduce symbols to totals, a percentage and a per-kind breakdown."""
    stats = DocumentationStats()

    for symbol in symbols:
        stats.total += 1
        kind_stats = stats.by_kind.setdefault(symbol.kind.value, KindStats())
        kind_stats.total += 1
        if symbol.has_documentation:
            stats.documented += 1
            kind_stats.documented += 1

    stats.undocumented = stats.total - stats.documented
    stats.percentage = coverage_percentage(stats.documented, stats.total)
    return stats
