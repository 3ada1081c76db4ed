"""Plain-text reports."""

from leftover_checker.issue import IssueKind
from leftover_checker.main_checker import detect
from leftover_checker.quality_metrics import QualityMetrics, score_group, score_system
from leftover_checker.records import UnitSample
from leftover_checker.reporter import ReportGenerator


def test_clean_unit_report():
    assert ReportGenerator.generate_text_report([], "Router") == "\n✓ No debugging leftovers found in Router\n"


def test_unit_report_groups_by_severity():
    issues = detect("debugger;\nconsole.log(1);\n", 2)
    report = ReportGenerator.generate_text_report(issues, "Router")
    assert "Debugging Leftover Report: Router" in report
    assert "WARNINGS (1):" in report
    assert "INFO (1):" in report
    assert "  Line 1, column 1: Remove this debugger statement" in report
    assert "    Kind: console-output-call" in report
    assert "Summary: 1 warnings, 1 info" in report


def test_summary_counts_by_kind():
    issues = detect("console.log(1);\nconsole.log(2);\ndebugger;\n", 2)
    assert ReportGenerator.generate_summary(issues) == {
        "console-output-call": 2,
        "debugger-statement": 1,
    }


def test_group_report(issue_factory):
    record = score_group(
        [UnitSample([issue_factory(IssueKind.DEBUGGER_STATEMENT)], 1, 0, "a", "Break"), UnitSample([], 1, 0, "b", "Pass")],
        "flow1",
        "Orders",
    )
    text = ReportGenerator.generate_group_report(QualityMetrics().generate_group_quality_report(record))
    assert "Flow Quality Report: Orders" in text
    assert " ! Break: 0.00 (1 issues)" in text
    assert "   Pass: 100.00 (0 issues)" in text
    assert "[critical] Remove debugger statements" in text


def test_system_summary():
    text = ReportGenerator.generate_system_summary(score_system([]))
    assert text == (
        "Overall quality 100.00, technical debt 0.00, complexity 0.00 across 0 flows "
        "(0 affected, 0 critical)"
    )
