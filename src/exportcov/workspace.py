"""Analysis of multi-package workspaces."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from exportcov.analyzer import analyze_path
from exportcov.config import find_config, get_workspace_members
from exportcov.exclusion import FileExcluder
from exportcov.logger import logger
from exportcov.models.results import (
    WorkspaceAggregate,
    WorkspaceMemberResult,
    WorkspaceReport,
    coverage_percentage,
)


class WorkspaceAnalyzer:
    """Analyzes each member listed in a root config's ``workspace`` field.

    A member that cannot be analyzed is reported with zero stats and its
    error; it never stops the remaining members.
    """

    def __init__(self, root: Path, extra_excludes: list[str] | None = None) -> None:
        self.root = root.resolve()
        self.extra_excludes = extra_excludes

    def find_members(self) -> list[str] | None:
        """Get member paths, or None if the root is not a workspace."""
        found = find_config(self.root)
        if found is None:
            return None
        members = get_workspace_members(found[0])
        return members or None

    def analyze(
        self,
        on_member: Callable[[WorkspaceMemberResult], None] | None = None,
    ) -> WorkspaceReport | None:
        """Analyze every member in order.

        Args:
            on_member: Called with each member's result as soon as it is
                available.

        Returns:
            The workspace report, or None if no workspace is configured.
        """
        members = self.find_members()
        if members is None:
            return None

        report = WorkspaceReport(root=self.root)
        for name in members:
            member = self.analyze_member(name)
            report.members.append(member)
            if on_member is not None:
                on_member(member)

        report.aggregate = calculate_aggregate(report.members)
        return report

    def analyze_member(self, name: str) -> WorkspaceMemberResult:
        """Analyze one member directory relative to the workspace root."""
        path = (self.root / name).resolve()
        excluder = FileExcluder(path, extra_excludes=self.extra_excludes) if path.is_dir() else None
        try:
            result = analyze_path(path, excluder)
        except OSError as e:
            logger.warning("Workspace member failed", member=name, error=str(e))
            return WorkspaceMemberResult(name=name, path=path, error=str(e))
        return WorkspaceMemberResult(name=name, path=path, result=result)


def calculate_aggregate(members: list[WorkspaceMemberResult]) -> WorkspaceAggregate:
    """Sum member stats into workspace totals."""
    aggregate = WorkspaceAggregate(total_members=len(members))
    for member in members:
        stats = member.stats
        aggregate.total_exports += stats.total
        aggregate.total_documented += stats.documented
        aggregate.total_undocumented += stats.undocumented
    aggregate.percentage = coverage_percentage(aggregate.total_documented, aggregate.total_exports)
    return aggregate
