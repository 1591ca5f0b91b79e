"""JSON output writers for analysis results."""

import json
from pathlib import Path

from exportcov.models.results import AnalysisResult, WorkspaceReport


def write_results(results: AnalysisResult | WorkspaceReport, output_path: Path) -> None:
    """Write analysis or workspace results as JSON."""
    data = results.to_dict()

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
