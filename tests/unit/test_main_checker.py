"""End-to-end detection: ordering, levels, suppression and failure handling."""

import logging

import pytest

from leftover_checker.issue import IssueKind
from leftover_checker.main_checker import LeftoverDetector, clamp_level, detect


def kinds_of(issues):
    return [issue.kind for issue in issues]


SAMPLE = (
    "let unused = 1;\n"
    'let mode = "debug";\n'
    "node.send(mode);\n"
    "console.log(msg);\n"
    "debugger;\n"
    "// TODO: remove\n"
    "\n"
    "\n"
    "// old();\n"
    "// older();\n"
    "return;\n"
)


def test_single_top_level_return():
    issues = detect("return;\n", 1)
    assert kinds_of(issues) == [IssueKind.TOP_LEVEL_EMPTY_RETURN]
    assert issues[0].line == 1


def test_return_inside_if_at_level_one():
    assert detect("if (x) {\n  return;\n}\n", 1) == []


def test_four_common_leftovers():
    source = (
        "let unused = 1;\n"
        "console.log(msg.payload);\n"
        'node.warn("reached");\n'
        "// TODO: x\n"
        "return msg;\n"
    )
    assert kinds_of(detect(source, 2)) == [
        IssueKind.CONSOLE_OUTPUT_CALL,
        IssueKind.HOST_WARN_CALL,
        IssueKind.UNUSED_DECLARATION,
        IssueKind.TODO_OR_FIXME_COMMENT,
    ]


def test_issue_order_at_level_three():
    assert [(i.kind, i.line) for i in detect(SAMPLE, 3)] == [
        (IssueKind.HARDCODED_SENTINEL_VALUE, 2),
        (IssueKind.CONSOLE_OUTPUT_CALL, 4),
        (IssueKind.DEBUGGER_STATEMENT, 5),
        (IssueKind.TOP_LEVEL_EMPTY_RETURN, 11),
        (IssueKind.UNUSED_DECLARATION, 1),
        (IssueKind.EXCESSIVE_BLANK_RUN, 7),
        (IssueKind.COMMENTED_OUT_CODE_RUN, 6),
        (IssueKind.TODO_OR_FIXME_COMMENT, 6),
    ]


def test_detection_is_idempotent():
    detector = LeftoverDetector()
    assert detector.detect(SAMPLE, 3) == detector.detect(SAMPLE, 3)


def test_levels_are_monotonic():
    by_level = {level: detect(SAMPLE, level) for level in (1, 2, 3)}
    assert kinds_of(by_level[1]) == [IssueKind.TOP_LEVEL_EMPTY_RETURN]
    assert all(issue in by_level[2] for issue in by_level[1])
    assert all(issue in by_level[3] for issue in by_level[2])
    assert len(by_level[1]) < len(by_level[2]) < len(by_level[3])


@pytest.mark.parametrize("raw, expected", [(0, 1), (1, 1), (3, 3), (7, 3), ("2", 2), (None, 2), ("high", 2)])
def test_clamp_level(raw, expected):
    assert clamp_level(raw) == expected


def test_out_of_range_levels_are_clamped():
    assert detect(SAMPLE, 0) == detect(SAMPLE, 1)
    assert detect(SAMPLE, 99) == detect(SAMPLE, 3)


@pytest.mark.parametrize("source", [None, "", 42, b"return;"])
def test_malformed_input_gives_no_issues(source):
    assert detect(source, 3) == []


def test_parse_failure_gives_no_issues_and_stays_quiet(caplog):
    with caplog.at_level(logging.DEBUG, logger="leftover_checker"):
        assert detect("let = ;\nconsole.log(", 3) == []
    assert caplog.records == []


def test_parse_failure_is_logged_when_verbose(caplog):
    with caplog.at_level(logging.WARNING, logger="leftover_checker"):
        assert detect("let = ;\nconsole.log(", 3, verbose=True) == []
    assert any("failed to parse" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("snippet, kind", [
    ("return;\n", IssueKind.TOP_LEVEL_EMPTY_RETURN),
    ("console.log(1);\n", IssueKind.CONSOLE_OUTPUT_CALL),
    ("node.warn(1);\n", IssueKind.HOST_WARN_CALL),
    ("debugger;\n", IssueKind.DEBUGGER_STATEMENT),
    ("let spare = 1;\n", IssueKind.UNUSED_DECLARATION),
    ("// TODO: later\n", IssueKind.TODO_OR_FIXME_COMMENT),
    ('let mode = "temp"; node.send(mode);\n', IssueKind.HARDCODED_SENTINEL_VALUE),
    ("\n\nb();\n", IssueKind.EXCESSIVE_BLANK_RUN),
    ("// a();\n// b();\n", IssueKind.COMMENTED_OUT_CODE_RUN),
])
def test_next_line_directive_removes_exactly_one_issue(snippet, kind):
    source = snippet + "console.info(2);\n"
    plain = detect(source, 3)
    assert (kind, 1) in [(i.kind, i.line) for i in plain]

    suppressed = detect("// @nr-analyzer-ignore-next\n" + source, 3)
    assert [(i.kind, i.line) for i in suppressed] == [(i.kind, i.line + 1) for i in plain if i.line != 1]


def test_ignore_region_covers_every_rule():
    source = "// @nr-analyzer-ignore-start\n" + SAMPLE + "// @nr-analyzer-ignore-end\n"
    assert detect(source, 3) == []


def test_detect_units():
    results = LeftoverDetector().detect_units({"a": "debugger;\n", "b": "node.send(msg);\n"}, 2)
    assert kinds_of(results["a"]) == [IssueKind.DEBUGGER_STATEMENT]
    assert results["b"] == []
