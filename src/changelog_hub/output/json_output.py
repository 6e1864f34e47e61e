"""
JSON output formatter.

Changelogs are emitted in the same shape the snapshot loader reads back,
so the output of ``compare`` can feed ``history``.
"""

import json

from changelog_hub.models.changelog import Changelog
from changelog_hub.models.report import HistoryReport, SnapshotReport
from changelog_hub.output.formatters import BaseFormatter, register_formatter

INDENT = 2


@register_formatter("json")
class JsonFormatter(BaseFormatter):
    """
    Format output as JSON.
    """

    def format_changelog(self, changelog: Changelog) -> str:
        """Format a changelog as JSON."""
        return json.dumps(changelog.model_dump(mode="json"), indent=INDENT)

    def format_history(self, report: HistoryReport) -> str:
        """Format a history report as JSON."""
        data = report.model_dump(mode="json")
        data["stability"]["grade_label"] = report.stability.grade.label
        if report.compliance is not None:
            data["compliance"]["level_label"] = report.compliance.level.label
        return json.dumps(data, indent=INDENT)

    def format_snapshot(self, report: SnapshotReport) -> str:
        """Format a snapshot report as JSON."""
        data = report.model_dump(mode="json")
        data["technical_debt"]["total_issues"] = report.technical_debt.total_issues
        return json.dumps(data, indent=INDENT)
