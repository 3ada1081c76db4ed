"""Suppression directive parsing."""

from leftover_checker.ignore_directives import IgnoreRegion, parse_ignore_directives


def test_region_is_inclusive_of_both_directive_lines():
    lines = [
        "a();",
        "// @nr-analyzer-ignore-start",
        "b();",
        "// @nr-analyzer-ignore-end",
        "c();",
    ]
    suppression = parse_ignore_directives(lines)
    assert suppression.regions == (IgnoreRegion(2, 4),)
    assert [n for n in range(1, 6) if suppression.is_suppressed(n)] == [2, 3, 4]


def test_unterminated_region_is_discarded():
    lines = ["// @nr-analyzer-ignore-start", "console.log(1);", "x();"]
    suppression = parse_ignore_directives(lines)
    assert suppression.regions == ()
    assert not suppression.any_suppressed(range(1, 4))


def test_region_closes_at_first_end_after_start():
    lines = [
        "// @nr-analyzer-ignore-start",
        "a();",
        "// @nr-analyzer-ignore-end",
        "b();",
        "// @nr-analyzer-ignore-end",
    ]
    assert parse_ignore_directives(lines).regions == (IgnoreRegion(1, 3),)


def test_line_directive_marks_its_own_line():
    lines = ["a();", "console.log(x); // @nr-analyzer-ignore-line", "b();"]
    suppression = parse_ignore_directives(lines)
    assert suppression.single_lines == frozenset({2})
    assert not suppression.is_suppressed(1)
    assert not suppression.is_suppressed(3)


def test_next_directive_marks_following_line_only():
    lines = ["// @nr-analyzer-ignore-next", "debugger;", "debugger;"]
    suppression = parse_ignore_directives(lines)
    assert suppression.next_lines == frozenset({2})
    assert not suppression.is_suppressed(1)
    assert suppression.is_suppressed(2)
    assert not suppression.is_suppressed(3)


def test_next_directive_on_last_line_marks_nothing():
    suppression = parse_ignore_directives(["a();", "// @nr-analyzer-ignore-next"])
    assert suppression.next_lines == frozenset()


def test_directives_are_case_insensitive():
    lines = ["//   @NR-Analyzer-Ignore-Next", "x();"]
    assert parse_ignore_directives(lines).is_suppressed(2)


def test_directive_requires_comment_marker():
    lines = ['var s = "@nr-analyzer-ignore-next";', "x();"]
    assert parse_ignore_directives(lines).next_lines == frozenset()


def test_custom_prefix():
    lines = ["// @lint-skip-next", "x();", "// @nr-analyzer-ignore-next", "y();"]
    suppression = parse_ignore_directives(lines, prefix="@lint-skip")
    assert suppression.is_suppressed(2)
    assert not suppression.is_suppressed(4)


def test_no_directives_gives_empty_map():
    suppression = parse_ignore_directives(["a();", "b();"])
    assert suppression.regions == ()
    assert suppression.single_lines == frozenset()
    assert suppression.next_lines == frozenset()
