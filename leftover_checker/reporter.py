"""
Report generation for the debugging-leftover checker.
"""

from deps import Dict, List

from .issue import Issue, Severity
from .records import GroupQualityReport, SystemTrendRecord


class ReportGenerator:
    """Generate reports from issues and quality records."""

    @staticmethod
    def generate_text_report(issues: List[Issue], unit_name: str) -> str:
        """Generate a text report for one unit."""
        if not issues:
            return f"\n✓ No debugging leftovers found in {unit_name}\n"

        report = [f"\n{'='*80}"]
        report.append(f"Debugging Leftover Report: {unit_name}")
        report.append(f"{'='*80}\n")

        warnings = [i for i in issues if i.severity == Severity.WARNING]
        infos = [i for i in issues if i.severity == Severity.INFO]

        for title, group in (("WARNINGS", warnings), ("INFO", infos)):
            if not group:
                continue
            report.append(f"{title} ({len(group)}):")
            report.append("-" * 80)
            for issue in group:
                report.append(f"  Line {issue.line}, column {issue.column}: {issue.message}")
                report.append(f"    Kind: {issue.kind.value}\n")

        report.append(f"\nSummary: {len(warnings)} warnings, {len(infos)} info")
        report.append("="*80)

        return "\n".join(report)

    @staticmethod
    def generate_group_report(report: GroupQualityReport) -> str:
        """Generate a text report for a scanned group."""
        record = report.record
        lines = [f"\n{'='*80}"]
        lines.append(f"Flow Quality Report: {record.group_name or record.group_id}")
        lines.append(f"{'='*80}\n")
        lines.append(f"Grade: {report.grade.grade} ({report.grade.description})")
        lines.append(f"Quality score: {record.quality_score:.2f}")
        lines.append(f"Complexity: {record.complexity_score:.2f}")
        lines.append(
            f"Units: {record.total_units} total, {record.units_with_issues} with issues, "
            f"{record.units_with_critical_issues} critical"
        )
        lines.append(f"Health: {report.health_percentage}%\n")

        for unit in record.unit_records:
            marker = "!" if unit.has_critical_issue else ("*" if unit.issues else " ")
            lines.append(f" {marker} {unit.unit_name}: {unit.quality_score:.2f} ({unit.issue_count} issues)")

        if report.recommendations:
            lines.append("\nRecommendations:")
            lines.append("-" * 80)
            for rec in report.recommendations:
                lines.append(f"  [{rec.type}] {rec.message}")
                lines.append(f"    Action: {rec.action}")

        lines.append("="*80)
        return "\n".join(lines)

    @staticmethod
    def generate_system_summary(system: SystemTrendRecord) -> str:
        return (
            f"Overall quality {system.overall_quality:.2f}, technical debt {system.technical_debt:.2f}, "
            f"complexity {system.complexity:.2f} across {system.group_count} flows "
            f"({system.affected_units} affected, {system.critical_units} critical)"
        )

    @staticmethod
    def generate_summary(issues: List[Issue]) -> Dict[str, int]:
        """Generate a summary count by issue kind."""
        summary = {}
        for issue in issues:
            summary[issue.kind.value] = summary.get(issue.kind.value, 0) + 1
        return summary
