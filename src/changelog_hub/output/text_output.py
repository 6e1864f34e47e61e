"""
Human-readable text output formatter.
"""

from io import StringIO

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from changelog_hub.models.change import BreakingChange, Severity
from changelog_hub.models.changelog import Changelog, RiskLevel
from changelog_hub.models.insight import CheckStatus
from changelog_hub.models.metrics import StabilityGrade, TrendDirection
from changelog_hub.models.report import HistoryReport, SnapshotReport
from changelog_hub.output.formatters import BaseFormatter, register_formatter

WIDTH = 120


@register_formatter("text")
class TextFormatter(BaseFormatter):
    """
    Format output as human-readable text using Rich.
    """

    def _console(self, output: StringIO) -> Console:
        return Console(file=output, force_terminal=self.config.colorize, width=WIDTH)

    def _severity_style(self, severity: Severity) -> str:
        """Get the style for a severity."""
        if not self.config.colorize:
            return ""

        styles = {
            Severity.BREAKING: "bold red",
            Severity.DANGEROUS: "red",
            Severity.WARNING: "yellow",
            Severity.INFO: "dim",
        }
        return styles.get(severity, "")

    def _severity_icon(self, severity: Severity) -> str:
        icons = {
            Severity.BREAKING: "🔴",
            Severity.DANGEROUS: "🟠",
            Severity.WARNING: "🟡",
            Severity.INFO: "🟢",
        }
        return icons.get(severity, "⚪")

    def _risk_style(self, level: RiskLevel) -> str:
        styles = {
            RiskLevel.CRITICAL: "bold red",
            RiskLevel.HIGH: "red",
            RiskLevel.MEDIUM: "yellow",
            RiskLevel.LOW: "green",
        }
        return styles.get(level, "")

    def _direction_text(self, direction: TrendDirection) -> str:
        arrows = {
            TrendDirection.IMPROVING: "[green]↗ improving[/green]",
            TrendDirection.STABLE: "→ stable",
            TrendDirection.DEGRADING: "[red]↘ degrading[/red]",
        }
        return arrows[direction]

    def _check_text(self, status: CheckStatus) -> str:
        labels = {
            CheckStatus.PASSED: "[green]PASS[/green]",
            CheckStatus.WARNING: "[yellow]WARN[/yellow]",
            CheckStatus.FAILED: "[red]FAIL[/red]",
        }
        return labels[status]

    def format_changelog(self, changelog: Changelog) -> str:
        """Format a changelog as text, grouped by severity."""
        output = StringIO()
        console = self._console(output)

        versions = f"{changelog.from_version or '∅'} → {changelog.to_version or '∅'}"
        console.print()
        console.print(
            Panel.fit(
                f"[bold]{escape(changelog.api_name)}[/bold]\n"
                f"Changelog {escape(versions)}",
                border_style="blue",
            )
        )
        console.print()

        risk = changelog.risk_assessment
        console.print("[bold]Summary[/bold]")
        console.print(f"  Total Changes: {changelog.total_changes}")
        console.print(f"  Breaking Changes: {len(changelog.breaking_changes)}")
        if risk is not None:
            style = self._risk_style(risk.level)
            console.print(
                f"  Risk: [{style}]{risk.overall_score} ({risk.level.value.upper()})[/{style}]"
            )
            console.print(f"  Recommended Bump: {risk.semver_recommendation.value.upper()}")
            console.print(f"  {escape(risk.recommendation)}")
        console.print()

        if not changelog.changes:
            console.print("[green]No changes detected.[/green]")
            console.print()
            return output.getvalue()

        for severity in Severity:
            changes = changelog.get_changes_by_severity(severity)
            if not changes:
                continue

            icon = self._severity_icon(severity)
            style = self._severity_style(severity) or "default"
            console.print(f"  {icon} [bold]{severity.value.upper()}[/bold] ({len(changes)})")
            for change in changes:
                console.print(
                    f"    [{style}]{change.type.value:<10} {escape(change.path)}[/{style}]"
                )
                console.print(f"      {escape(change.description)}")
                if (
                    self.config.show_migration
                    and isinstance(change, BreakingChange)
                    and change.migration_suggestion
                ):
                    console.print(f"      [dim]Migration: {escape(change.migration_suggestion)}[/dim]")
            console.print()

        return output.getvalue()

    def format_history(self, report: HistoryReport) -> str:
        """Format a history report as text."""
        output = StringIO()
        console = self._console(output)

        console.print()
        console.print(
            Panel.fit(
                f"[bold]{escape(report.api_name or 'Unknown')}[/bold]\n"
                f"History Analysis ({report.periods_analyzed} changelogs)",
                border_style="blue",
            )
        )
        console.print()

        stability = report.stability
        grade_style = "green" if stability.grade in (StabilityGrade.A, StabilityGrade.B) else "yellow"
        if stability.grade == StabilityGrade.F:
            grade_style = "red"
        console.print("[bold]Stability[/bold]")
        console.print(
            f"  Score: [{grade_style}]{stability.score} "
            f"({stability.grade.value} - {stability.grade.label})[/{grade_style}]"
        )
        console.print(f"  [dim]{stability.grade.description}[/dim]")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Factor", style="cyan")
        table.add_column("Weight", justify="right")
        table.add_column("Score", justify="right")
        table.add_column("Contribution", justify="right")
        for factor in stability.factors:
            table.add_row(
                factor.name,
                f"{factor.weight:.2f}",
                f"{factor.score:.1f}",
                f"{factor.contribution:.1f}",
            )
        console.print(table)
        console.print()

        velocity = report.velocity
        console.print("[bold]Velocity[/bold]")
        console.print(f"  Releases: {velocity.total_releases}")
        console.print(
            f"  Changes: {velocity.total_changes} ({velocity.total_breaking_changes} breaking)"
        )
        console.print(
            f"  Per Day / Week / Month: {velocity.changes_per_day:.2f} / "
            f"{velocity.changes_per_week:.2f} / {velocity.changes_per_month:.2f}"
        )
        console.print(f"  Breaking Per Release: {velocity.breaking_changes_per_release:.2f}")
        console.print(f"  Avg Time Between Releases: {velocity.average_time_between_releases}")
        if velocity.accelerating:
            console.print(
                f"  [yellow]Accelerating ({velocity.acceleration_rate:+.0%})[/yellow]"
            )
        console.print()

        trend = report.risk_trend
        console.print("[bold]Risk[/bold]")
        console.print(
            f"  Current: {trend.current_risk_score} ({trend.current_risk_level.value.upper()})"
        )
        console.print(f"  Trend: {self._direction_text(trend.direction)}")
        console.print(
            f"  Projected Next: {trend.projected_next_score} "
            f"({trend.projected_risk_level.value.upper()})"
        )
        console.print(f"  Cumulative: {report.cumulative_risk}")
        console.print()

        if report.patterns:
            console.print("[bold]Patterns[/bold]")
            for pattern in report.patterns:
                console.print(
                    f"  • {escape(pattern.description)} [dim]({pattern.confidence:.0%} confidence)[/dim]"
                )
            console.print()

        if report.insights:
            console.print("[bold]Insights[/bold]")
            for insight in report.insights:
                style = "red" if insight.is_high_priority else "default"
                console.print(f"  [{style}]\\[{insight.priority}] {escape(insight.title)}[/{style}]")
                console.print(f"      {escape(insight.description)}")
            console.print()

        if report.recommendations:
            console.print("[bold]Recommendations[/bold]")
            for rec in report.recommendations:
                marker = " [green](quick win)[/green]" if rec.is_quick_win else ""
                console.print(f"  • [bold]{escape(rec.title)}[/bold]{marker}")
                console.print(f"      {escape(rec.action)}")
            console.print()

        compliance = report.compliance
        if compliance is not None:
            console.print("[bold]Compliance[/bold]")
            console.print(
                f"  Score: {compliance.score} ({compliance.level.label}, "
                f"{compliance.passed_checks}/{compliance.total_checks} checks passed)"
            )
            table = Table(show_header=True, header_style="bold")
            table.add_column("Check", style="cyan")
            table.add_column("Category")
            table.add_column("Status")
            table.add_column("Message")
            for check in compliance.checks:
                table.add_row(
                    check.name,
                    check.category,
                    self._check_text(check.status),
                    escape(check.message),
                )
            console.print(table)
            console.print()

        return output.getvalue()

    def format_snapshot(self, report: SnapshotReport) -> str:
        """Format a snapshot report as text."""
        output = StringIO()
        console = self._console(output)

        complexity = report.complexity
        debt = report.technical_debt

        console.print()
        console.print(
            Panel.fit(
                f"[bold]{escape(report.api_name)}[/bold] {escape(report.version or '')}\n"
                "Structural Analysis",
                border_style="blue",
            )
        )
        console.print()

        console.print("[bold]Complexity[/bold]")
        console.print(f"  Score: {complexity.score} ({complexity.level})")
        console.print(f"  Endpoints: {complexity.endpoint_count}")

        table = Table(show_header=True, header_style="bold")
        table.add_column("Component", style="cyan")
        table.add_column("Score", justify="right")
        table.add_row("Endpoints", str(complexity.endpoint_score))
        table.add_row("Parameters", str(complexity.parameter_score))
        table.add_row("Responses", str(complexity.response_score))
        table.add_row("Schemas", str(complexity.schema_score))
        console.print(table)
        console.print()

        console.print("[bold]Technical Debt[/bold]")
        console.print(f"  Score: {debt.debt_score}")
        console.print(f"  Deprecated Endpoints: {debt.deprecated_endpoints_count}")
        console.print(f"  Missing Documentation: {debt.missing_documentation_count}")
        console.print(f"  Inconsistent Naming: {debt.inconsistent_naming_count}")
        if debt.items:
            console.print()
            for item in debt.items:
                console.print(f"  • {escape(item.description)}")
                console.print(f"    [dim]{escape(item.recommendation)}[/dim]")
        console.print()

        return output.getvalue()
