"""Individual debugging-leftover rules."""

import pytest

from leftover_checker.checker_base import HostProfile
from leftover_checker.issue import IssueKind, SentinelVariant, Severity
from leftover_checker.main_checker import detect


def kinds_of(issues):
    return [issue.kind for issue in issues]


# top-level-empty-return

@pytest.mark.parametrize("source", [
    "return result;\n",
    "return {a:1};\n",
    "return fn();\n",
])
def test_return_with_value_is_never_flagged(source):
    for level in (1, 2, 3):
        assert IssueKind.TOP_LEVEL_EMPTY_RETURN not in kinds_of(detect(source, level))


@pytest.mark.parametrize("source", [
    "if (x) {\n  return;\n}\n",
    "if (x) return;\nnode.send(msg);\n",
    "for (let i = 0; i < 3; i++) {\n  return;\n}\n",
    "while (x) {\n  return;\n}\n",
    "do {\n  return;\n} while (x);\n",
    "switch (x) {\n  case 1:\n    return;\n}\n",
    "try {\n  return;\n} catch (e) {\n}\n",
    "try {\n  x();\n} catch (e) {\n  return;\n}\n",
    "function f() {\n  return;\n}\nf();\n",
    "const f = () => {\n  return;\n};\nf();\n",
    "msg.list.forEach(function (item) {\n  return;\n});\n",
])
def test_conditional_or_nested_return_is_not_flagged(source):
    assert detect(source, 1) == []


def test_bare_top_level_return_is_flagged():
    (issue,) = detect("node.send(msg);\nreturn;\n", 1)
    assert issue.kind == IssueKind.TOP_LEVEL_EMPTY_RETURN
    assert issue.severity == Severity.WARNING
    assert issue.message == "Remove this top-level return statement"
    assert (issue.line, issue.column, issue.end_line, issue.end_column) == (2, 1, 2, 8)


def test_top_level_return_inside_plain_block_is_flagged():
    (issue,) = detect("{\n  return;\n}\n", 1)
    assert issue.line == 2
    assert issue.column == 3


# console-output-call, host-warn-call, debugger-statement

def test_console_methods_are_flagged():
    issues = detect("console.log(msg);\nconsole.error('x');\n", 2)
    assert kinds_of(issues) == [IssueKind.CONSOLE_OUTPUT_CALL] * 2
    assert issues[0].message == "Remove this console.log() debugging statement"
    assert issues[1].message == "Remove this console.error() debugging statement"
    assert issues[0].severity == Severity.INFO


def test_only_node_warn_is_a_host_warn_call():
    issues = detect("node.warn('x');\nnode.error('y');\nnode.status({});\n", 2)
    assert kinds_of(issues) == [IssueKind.HOST_WARN_CALL]
    assert issues[0].message == "Remove this node.warn() debugging statement"
    assert (issues[0].line, issues[0].column, issues[0].end_column) == (1, 1, 15)


def test_computed_and_other_receivers_are_ignored():
    source = "console['log'](1);\nlogger.log(2);\nnew console.Console(3);\n"
    assert detect(source, 3) == []


def test_debugger_statement():
    (issue,) = detect("if (msg.x) {\n  debugger;\n}\n", 2)
    assert issue.kind == IssueKind.DEBUGGER_STATEMENT
    assert issue.message == "Remove this debugger statement"
    assert issue.severity == Severity.WARNING
    assert (issue.line, issue.column) == (2, 3)


def test_output_rules_are_off_at_level_one():
    assert detect("console.log(1);\nnode.warn(2);\ndebugger;\n", 1) == []


def test_custom_host_profile():
    profile = HostProfile(console_object="logger", node_object="host", warn_method="alert")
    issues = detect("logger.info(1);\nhost.alert(2);\nconsole.log(3);\n", 2, profile=profile)
    assert kinds_of(issues) == [IssueKind.CONSOLE_OUTPUT_CALL, IssueKind.HOST_WARN_CALL]


# hardcoded-sentinel-value

@pytest.mark.parametrize("literal, variant, message", [
    ('"test"', SentinelVariant.TEST, "Remove hardcoded test value"),
    ("'DEBUG'", SentinelVariant.DEBUG, "Remove hardcoded debug value"),
    ('"Temp"', SentinelVariant.TEMP, "Remove hardcoded temp value"),
    ("123", SentinelVariant.NUMBER, "Remove hardcoded test number"),
])
def test_sentinel_in_declaration(literal, variant, message):
    (issue,) = detect(f"let mode = {literal};\nnode.send(mode);\n", 3)
    assert issue.kind == IssueKind.HARDCODED_SENTINEL_VALUE
    assert issue.variant == variant
    assert issue.message == message
    assert (issue.line, issue.column) == (1, 12)


def test_sentinel_in_assignment():
    (issue,) = detect("msg.payload = 123;\n", 3)
    assert issue.variant == SentinelVariant.NUMBER


@pytest.mark.parametrize("literal", ['"testing"', '"tests"', "1230", "12.3", "'123'", "true"])
def test_non_sentinel_literals(literal):
    assert detect(f"msg.payload = {literal};\n", 3) == []


def test_sentinel_needs_level_three():
    assert detect('msg.mode = "debug";\n', 2) == []


# unused-declaration

def test_unused_declaration_message_and_position():
    (issue,) = detect("let spare = 1;\nnode.send(msg);\n", 2)
    assert issue.kind == IssueKind.UNUSED_DECLARATION
    assert issue.message == "Variable 'spare' is declared but never used"
    assert (issue.line, issue.column, issue.end_column) == (1, 5, 10)


# todo-or-fixme-comment

def test_todo_comment():
    (issue,) = detect("x(); // todo: fix\n", 2)
    assert issue.kind == IssueKind.TODO_OR_FIXME_COMMENT
    assert issue.message == "TODO comment found - consider resolving"
    assert (issue.line, issue.column, issue.end_column) == (1, 9, 18)


def test_fixme_comment():
    (issue,) = detect("/* FIXME: later */\nx();\n", 2)
    assert issue.message == "FIXME comment found - consider resolving"


def test_todo_without_colon_is_ignored():
    assert detect("// TODO later\nx();\n", 3) == []


# excessive-blank-run

def test_blank_run_reported_once_at_start():
    (issue,) = detect("a();\n\n  \n\nb();\n", 3)
    assert issue.kind == IssueKind.EXCESSIVE_BLANK_RUN
    assert issue.message == "Remove excessive empty lines (3 consecutive empty lines)"
    assert (issue.line, issue.end_line) == (2, 4)


def test_single_blank_line_is_fine():
    assert detect("a();\n\nb();\n", 3) == []


def test_blank_run_with_suppressed_line_is_discarded():
    source = "a();\n// @nr-analyzer-ignore-next\n\n\nb();\n"
    assert detect(source, 3) == []


# commented-out-code-run

def test_commented_out_run():
    (issue,) = detect("// a();\n// b();\nc();\n", 2)
    assert issue.kind == IssueKind.COMMENTED_OUT_CODE_RUN
    assert issue.message == "Remove commented-out code (2 consecutive comment lines)"
    assert (issue.line, issue.end_line) == (1, 2)


def test_blank_lines_do_not_break_a_comment_run():
    (issue,) = detect("// a();\n\n// b();\n  // c();\nd();\n", 2)
    assert issue.message == "Remove commented-out code (3 consecutive comment lines)"
    assert (issue.line, issue.end_line) == (1, 4)


def test_single_comment_line_is_fine():
    assert detect("// explains the next line\nx();\n", 3) == []


def test_directive_lines_are_not_comment_code():
    source = "// @nr-analyzer-ignore-start\n// @nr-analyzer-ignore-end\nx();\n"
    assert detect(source, 3) == []
