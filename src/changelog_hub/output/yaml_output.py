"""
YAML output formatter.
"""

from typing import Any

import yaml

from changelog_hub.models.changelog import Changelog
from changelog_hub.models.report import HistoryReport, SnapshotReport
from changelog_hub.output.formatters import BaseFormatter, register_formatter


def _dump(data: Any) -> str:
    return yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)


@register_formatter("yaml")
class YamlFormatter(BaseFormatter):
    """
    Format output as YAML.
    """

    def format_changelog(self, changelog: Changelog) -> str:
        """Format a changelog as YAML."""
        return _dump(changelog.model_dump(mode="json"))

    def format_history(self, report: HistoryReport) -> str:
        """Format a history report as YAML."""
        data = report.model_dump(mode="json")
        data["stability"]["grade_label"] = report.stability.grade.label
        if report.compliance is not None:
            data["compliance"]["level_label"] = report.compliance.level.label
        return _dump(data)

    def format_snapshot(self, report: SnapshotReport) -> str:
        """Format a snapshot report as YAML."""
        data = report.model_dump(mode="json")
        data["technical_debt"]["total_issues"] = report.technical_debt.total_issues
        return _dump(data)
