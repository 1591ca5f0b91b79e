"""Output modules for CLI display and file writing."""

from exportcov.output.json_writer import write_results
from exportcov.output.report import display_result, display_workspace

__all__ = ["display_result", "display_workspace", "write_results"]
