"""Scope and usage tracking."""

from leftover_checker.checker_base import NODE_RED_GLOBALS
from leftover_checker.scope_tracker import BindingKind, ScopeTracker, find_unused
from leftover_checker.tree_builder import TreeBuilder


def unused_names(source, exempt=NODE_RED_GLOBALS):
    program = TreeBuilder().build(source).program
    return [binding.name for binding in find_unused(program, exempt)]


def test_unused_variable_is_reported():
    assert unused_names("let a = 1;\nlet b = 2;\nnode.send(b);\n") == ["a"]


def test_use_in_nested_function_counts():
    source = "const total = 3;\nfunction report() {\n  node.send(total);\n}\n"
    assert unused_names(source) == []


def test_use_before_declaration_in_same_scope_counts():
    assert unused_names("function f() { return later; }\nvar later = 1;\n") == []


def test_inner_shadow_does_not_mark_outer_used():
    source = "let x = 1;\n{\n  let x = 2;\n  node.send(x);\n}\n"
    program = TreeBuilder().build(source).program
    (binding,) = find_unused(program)
    assert binding.name == "x"
    assert binding.site.range.start.line == 1


def test_parameters_are_exempt():
    assert unused_names("function f(a, b) { return 1; }\nf();\n") == []


def test_named_function_declarations_are_exempt():
    assert unused_names("function helper() {}\n") == []


def test_function_valued_declarator_is_exempt():
    assert unused_names("const handler = () => 1;\nconst other = function () {};\n") == []


def test_underscore_prefix_is_exempt():
    assert unused_names("let _ignored = 1;\n") == []


def test_ambient_globals_are_exempt():
    assert unused_names("var msg = {};\nvar flow = 1;\n") == []
    assert unused_names("var msg = {};\n", exempt=frozenset()) == ["msg"]


def test_property_names_are_not_usages():
    source = "let name = 1;\nconst o = { name: 2 };\nnode.send(o.name);\n"
    assert unused_names(source) == ["name"]


def test_computed_member_is_a_usage():
    source = "let key = 'a';\nconst o = {};\nnode.send(o[key]);\n"
    assert unused_names(source) == []


def test_destructuring_binds_each_name():
    source = "const { a, b: renamed, ...rest } = msg.payload;\nnode.send(a);\n"
    assert unused_names(source) == ["renamed", "rest"]


def test_catch_parameter_is_exempt():
    assert unused_names("try { x(); } catch (err) { }\n") == []


def test_duplicate_declaration_in_one_scope_counts_as_used():
    source = "var dup = 1;\nvar dup = 2;\nnode.send(dup);\n"
    assert unused_names(source) == []


def test_wrapped_unit_positions_are_corrected():
    program = TreeBuilder().build("let spare = 1;\nreturn msg;\n").program
    (binding,) = find_unused(program, NODE_RED_GLOBALS)
    assert binding.kind == BindingKind.VARIABLE
    assert binding.site.range.start.line == 1
    assert binding.site.range.start.column == 5


def test_tracker_is_reusable():
    tracker = ScopeTracker(NODE_RED_GLOBALS)
    builder = TreeBuilder()
    assert [b.name for b in tracker.analyze(builder.build("let a = 1;\n").program)] == ["a"]
    assert [b.name for b in tracker.analyze(builder.build("let b = 1;\n").program)] == ["b"]
