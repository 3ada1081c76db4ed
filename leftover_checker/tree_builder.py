"""
Builds the typed syntax tree for a code unit.

Parsing is done with tree-sitter's JavaScript grammar. Function-node bodies
routinely ``return`` at the top level, which is illegal in a plain script, so
a unit holding such a return is wrapped in a synthetic function and parsed
again; every position in the wrapped tree is shifted back by one line.
"""

import re
from dataclasses import dataclass
from typing import List, Optional

import tree_sitter_javascript as tsjs
from tree_sitter import Language, Node as TSNode, Parser

from .syntax_tree import (
    Assignment,
    AssignmentPattern,
    Block,
    Call,
    CatchClause,
    ClassNode,
    Control,
    ControlKind,
    Debugger,
    FunctionKind,
    FunctionNode,
    Identifier,
    Literal,
    LiteralKind,
    Member,
    Node,
    Other,
    Pattern,
    PatternProperty,
    Program,
    PropertyName,
    Return,
    VariableDeclaration,
    VariableDeclarator,
    walk,
)
from .issue import SourceRange

JAVASCRIPT = Language(tsjs.language())

DEFAULT_WRAPPER_NAME = "nodeRedWrapper"

# Grammar extras that may appear between any two tokens.
_EXTRAS = frozenset({"comment", "html_comment", "hash_bang_line"})

_CONTROL_KINDS = {
    "if_statement": ControlKind.IF,
    "for_statement": ControlKind.FOR,
    "for_in_statement": ControlKind.FOR_IN,
    "while_statement": ControlKind.WHILE,
    "do_statement": ControlKind.DO_WHILE,
    "switch_statement": ControlKind.SWITCH,
    "try_statement": ControlKind.TRY,
    "with_statement": ControlKind.WITH,
}

_ESCAPE_RE = re.compile(
    r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|[0-7]{1,3}|\r\n|.)",
    re.DOTALL,
)
_SIMPLE_ESCAPES = {
    "n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v",
    "\n": "", "\r": "", "\r\n": "", "\u2028": "", "\u2029": "",
}


class ParseFailure(Exception):
    """The unit could not be turned into a syntax tree."""


class IllegalReturnError(ParseFailure):
    """A return statement sits outside of any function body."""

    def __init__(self, line: int):
        super().__init__(f"Illegal return statement outside of a function (line {line})")
        self.line = line


@dataclass
class ParsedUnit:
    """A built tree plus the line correction applied to its positions."""
    program: Program
    line_offset: int = 0

    @property
    def wrapped(self) -> bool:
        return self.line_offset != 0


def cook_string(raw: str) -> str:
    """Resolve escape sequences of a quoted literal body."""

    def replace(match: "re.Match[str]") -> str:
        seq = match.group(1)
        if seq in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[seq]
        if seq.startswith("u{"):
            return chr(int(seq[2:-1], 16))
        if seq[0] in "ux" and len(seq) > 1:
            return chr(int(seq[1:], 16))
        if seq.isdigit():
            return chr(int(seq, 8))
        return seq

    return _ESCAPE_RE.sub(replace, raw)


def parse_number(raw: str) -> Optional[float]:
    """Numeric value of a number literal, ``None`` for BigInt."""
    text = raw.replace("_", "")
    if text.endswith("n"):
        return None
    lowered = text.lower()
    if lowered.startswith(("0x", "0o", "0b")):
        return float(int(lowered, 0))
    if len(text) > 1 and text[0] == "0" and text.isdigit():
        # legacy octal, or decimal when an 8/9 digit is present
        if any(ch in "89" for ch in text):
            return float(text)
        return float(int(text, 8))
    return float(text)


class _Converter:
    """Turns a tree-sitter concrete tree into typed nodes."""

    def __init__(self, source: bytes, line_offset: int = 0, wrapper_name: Optional[str] = None):
        self.lines = source.split(b"\n")
        self.line_offset = line_offset
        self.wrapper_name = wrapper_name

    # positions

    def _column(self, row: int, byte_column: int) -> int:
        if row >= len(self.lines):
            return byte_column + 1
        prefix = self.lines[row][:byte_column]
        return len(prefix.decode("utf-8", errors="replace")) + 1

    def _range(self, ts: TSNode) -> SourceRange:
        start_row, start_col = ts.start_point
        end_row, end_col = ts.end_point
        return SourceRange.from_lines(
            start_row + 1 + self.line_offset,
            self._column(start_row, start_col),
            end_row + 1 + self.line_offset,
            self._column(end_row, end_col),
        )

    # helpers

    @staticmethod
    def _text(ts: TSNode) -> str:
        return ts.text.decode("utf-8", errors="replace") if ts.text is not None else ""

    @staticmethod
    def _named(ts: Optional[TSNode]) -> List[TSNode]:
        if ts is None:
            return []
        return [c for c in ts.named_children if c.type not in _EXTRAS]

    def _opt(self, ts: Optional[TSNode]) -> Optional[Node]:
        return self.convert(ts) if ts is not None else None

    def _opt_pattern(self, ts: Optional[TSNode]) -> Optional[Node]:
        return self.pattern(ts) if ts is not None else None

    # dispatch

    def convert(self, ts: TSNode) -> Node:
        handler = getattr(self, "_convert_" + ts.type, None)
        if handler is None:
            if ts.type in _CONTROL_KINDS:
                return self._convert_control(ts)
            return self._convert_generic(ts)
        return handler(ts)

    def _convert_generic(self, ts: TSNode) -> Node:
        return Other(
            kind=ts.type,
            parts=[self.convert(c) for c in self._named(ts)],
            range=self._range(ts),
        )

    def _convert_program(self, ts: TSNode) -> Node:
        return Program(body=[self.convert(c) for c in self._named(ts)], range=self._range(ts))

    def _convert_statement_block(self, ts: TSNode) -> Node:
        return Block(body=[self.convert(c) for c in self._named(ts)], range=self._range(ts))

    def _convert_parenthesized_expression(self, ts: TSNode) -> Node:
        inner = self._named(ts)
        if len(inner) == 1:
            return self.convert(inner[0])
        return self._convert_generic(ts)

    # functions and classes

    def _params(self, ts: TSNode) -> List[Node]:
        single = ts.child_by_field_name("parameter")
        if single is not None:
            return [self.pattern(single)]
        return [self.pattern(p) for p in self._named(ts.child_by_field_name("parameters"))]

    def _function(self, ts: TSNode, kind: FunctionKind) -> FunctionNode:
        name = ts.child_by_field_name("name")
        return FunctionNode(
            kind=kind,
            name=self._opt(name),
            params=self._params(ts),
            body=self._opt(ts.child_by_field_name("body")),
            range=self._range(ts),
        )

    def _convert_function_declaration(self, ts: TSNode) -> Node:
        fn = self._function(ts, FunctionKind.DECLARATION)
        if (
            self.wrapper_name is not None
            and isinstance(fn.name, Identifier)
            and fn.name.name == self.wrapper_name
            and ts.parent is not None
            and ts.parent.type == "program"
            and ts.start_point == (0, 0)
        ):
            fn.synthetic = True
        return fn

    _convert_generator_function_declaration = _convert_function_declaration

    def _convert_function_expression(self, ts: TSNode) -> Node:
        return self._function(ts, FunctionKind.EXPRESSION)

    _convert_function = _convert_function_expression
    _convert_generator_function = _convert_function_expression

    def _convert_arrow_function(self, ts: TSNode) -> Node:
        return self._function(ts, FunctionKind.ARROW)

    def _convert_method_definition(self, ts: TSNode) -> Node:
        return self._function(ts, FunctionKind.METHOD)

    def _convert_class_declaration(self, ts: TSNode) -> Node:
        heritage = None
        for child in self._named(ts):
            if child.type == "class_heritage":
                inner = self._named(child)
                heritage = self.convert(inner[0]) if inner else None
        name = ts.child_by_field_name("name")
        return ClassNode(
            name=self._opt(name),
            is_declaration=ts.type == "class_declaration",
            heritage=heritage,
            members=[self.convert(m) for m in self._named(ts.child_by_field_name("body"))],
            range=self._range(ts),
        )

    _convert_class = _convert_class_declaration

    # declarations and assignments

    def _convert_variable_declaration(self, ts: TSNode) -> Node:
        kind_node = ts.child_by_field_name("kind") or (ts.children[0] if ts.children else None)
        kind = self._text(kind_node) if kind_node is not None else "var"
        declarators = [
            self._convert_variable_declarator(c)
            for c in self._named(ts)
            if c.type == "variable_declarator"
        ]
        return VariableDeclaration(kind=kind, declarators=declarators, range=self._range(ts))

    _convert_lexical_declaration = _convert_variable_declaration

    def _convert_variable_declarator(self, ts: TSNode) -> VariableDeclarator:
        return VariableDeclarator(
            target=self._opt_pattern(ts.child_by_field_name("name")),
            init=self._opt(ts.child_by_field_name("value")),
            range=self._range(ts),
        )

    def _convert_assignment_expression(self, ts: TSNode) -> Node:
        operator = ts.child_by_field_name("operator")
        return Assignment(
            target=self._opt_pattern(ts.child_by_field_name("left")),
            value=self._opt(ts.child_by_field_name("right")),
            operator=self._text(operator) if operator is not None else "=",
            range=self._range(ts),
        )

    _convert_augmented_assignment_expression = _convert_assignment_expression

    def pattern(self, ts: TSNode) -> Node:
        """Convert a binding or assignment target."""
        kind = ts.type
        if kind in ("identifier", "shorthand_property_identifier_pattern"):
            return Identifier(name=self._text(ts), range=self._range(ts))
        if kind in ("object_pattern", "array_pattern"):
            return Pattern(
                kind=kind.split("_")[0],
                elements=[self.pattern(c) for c in self._named(ts)],
                range=self._range(ts),
            )
        if kind == "rest_pattern":
            return Pattern(
                kind="rest",
                elements=[self.pattern(c) for c in self._named(ts)],
                range=self._range(ts),
            )
        if kind == "pair_pattern":
            return PatternProperty(
                key=self._opt(ts.child_by_field_name("key")),
                value=self._opt_pattern(ts.child_by_field_name("value")),
                range=self._range(ts),
            )
        if kind in ("assignment_pattern", "object_assignment_pattern"):
            return AssignmentPattern(
                target=self._opt_pattern(ts.child_by_field_name("left")),
                default=self._opt(ts.child_by_field_name("right")),
                range=self._range(ts),
            )
        if kind == "parenthesized_expression":
            inner = self._named(ts)
            if len(inner) == 1:
                return self.pattern(inner[0])
        return self.convert(ts)

    # calls and members

    def _convert_call_expression(self, ts: TSNode) -> Node:
        args = ts.child_by_field_name("arguments")
        arguments = self._named(args) if args is not None and args.type == "arguments" else []
        parts = [self.convert(a) for a in arguments]
        if args is not None and args.type != "arguments":
            parts.append(self.convert(args))
        return Call(
            callee=self._opt(ts.child_by_field_name("function")),
            arguments=parts,
            range=self._range(ts),
        )

    def _convert_new_expression(self, ts: TSNode) -> Node:
        args = ts.child_by_field_name("arguments")
        return Call(
            callee=self._opt(ts.child_by_field_name("constructor")),
            arguments=[self.convert(a) for a in self._named(args)],
            is_new=True,
            range=self._range(ts),
        )

    def _convert_member_expression(self, ts: TSNode) -> Node:
        return Member(
            object=self._opt(ts.child_by_field_name("object")),
            property=self._opt(ts.child_by_field_name("property")),
            computed=False,
            range=self._range(ts),
        )

    def _convert_subscript_expression(self, ts: TSNode) -> Node:
        return Member(
            object=self._opt(ts.child_by_field_name("object")),
            property=self._opt(ts.child_by_field_name("index")),
            computed=True,
            range=self._range(ts),
        )

    # statements

    def _convert_return_statement(self, ts: TSNode) -> Node:
        values = self._named(ts)
        return Return(
            argument=self.convert(values[0]) if values else None,
            range=self._range(ts),
        )

    def _convert_debugger_statement(self, ts: TSNode) -> Node:
        return Debugger(range=self._range(ts))

    def _convert_control(self, ts: TSNode) -> Node:
        parts: List[Node] = []
        kind = ts.child_by_field_name("kind") if ts.type == "for_in_statement" else None
        for child in self._named(ts):
            if kind is not None and child == ts.child_by_field_name("left"):
                target = self.pattern(child)
                parts.append(VariableDeclaration(
                    kind=self._text(kind),
                    declarators=[VariableDeclarator(target=target, range=target.range)],
                    range=self._range(child),
                ))
            else:
                parts.append(self.convert(child))
        return Control(kind=_CONTROL_KINDS[ts.type], parts=parts, range=self._range(ts))

    def _convert_catch_clause(self, ts: TSNode) -> Node:
        return CatchClause(
            param=self._opt_pattern(ts.child_by_field_name("parameter")),
            body=self._opt(ts.child_by_field_name("body")),
            range=self._range(ts),
        )

    # leaves

    def _convert_identifier(self, ts: TSNode) -> Node:
        return Identifier(name=self._text(ts), range=self._range(ts))

    _convert_shorthand_property_identifier = _convert_identifier

    def _convert_property_identifier(self, ts: TSNode) -> Node:
        return PropertyName(name=self._text(ts), range=self._range(ts))

    _convert_private_property_identifier = _convert_property_identifier
    _convert_statement_identifier = _convert_property_identifier

    def _convert_string(self, ts: TSNode) -> Node:
        raw = self._text(ts)
        return Literal(
            kind=LiteralKind.STRING,
            value=cook_string(raw[1:-1]),
            raw=raw,
            range=self._range(ts),
        )

    def _convert_number(self, ts: TSNode) -> Node:
        raw = self._text(ts)
        try:
            value = parse_number(raw)
        except ValueError:
            value = None
        kind = LiteralKind.BIGINT if raw.endswith("n") else LiteralKind.NUMBER
        return Literal(kind=kind, value=value, raw=raw, range=self._range(ts))

    def _convert_true(self, ts: TSNode) -> Node:
        return Literal(kind=LiteralKind.BOOLEAN, value=ts.type == "true", raw=ts.type, range=self._range(ts))

    _convert_false = _convert_true

    def _convert_null(self, ts: TSNode) -> Node:
        return Literal(kind=LiteralKind.NULL, value=None, raw="null", range=self._range(ts))

    def _convert_regex(self, ts: TSNode) -> Node:
        raw = self._text(ts)
        return Literal(kind=LiteralKind.REGEX, value=raw, raw=raw, range=self._range(ts))


def find_illegal_return(program: Program) -> Optional[Return]:
    """First return statement with no enclosing function, if any."""
    for node, ancestors in walk(program):
        if isinstance(node, Return) and not any(isinstance(a, FunctionNode) for a in ancestors):
            return node
    return None


class TreeBuilder:
    """Parses units of host script code into :class:`Program` trees."""

    def __init__(self, wrapper_name: str = DEFAULT_WRAPPER_NAME):
        self.wrapper_name = wrapper_name

    def _parse(self, source: str, line_offset: int, wrapper_name: Optional[str]) -> Program:
        data = source.encode("utf-8")
        tree = Parser(JAVASCRIPT).parse(data)
        root = tree.root_node
        if root.has_error:
            raise ParseFailure(_describe_error(root))
        try:
            program = _Converter(data, line_offset, wrapper_name).convert(root)
        except RecursionError as exc:
            raise ParseFailure("Unit is nested too deeply to analyze") from exc
        if not isinstance(program, Program):
            raise ParseFailure(f"Unexpected root node {root.type}")
        return program

    def parse_script(self, source: str) -> Program:
        """Parse without any fallback; raises :class:`IllegalReturnError` on a top-level return."""
        program = self._parse(source, 0, None)
        illegal = find_illegal_return(program)
        if illegal is not None:
            raise IllegalReturnError(illegal.line or 1)
        return program

    def build(self, source: str) -> ParsedUnit:
        """Parse ``source``, wrapping it in a synthetic function when it returns at top level."""
        try:
            return ParsedUnit(self.parse_script(source))
        except IllegalReturnError:
            wrapped = f"function {self.wrapper_name}() {{\n{source}\n}}"
            return ParsedUnit(self._parse(wrapped, -1, self.wrapper_name), line_offset=-1)


def _describe_error(root: TSNode) -> str:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            row, col = node.start_point
            what = f"missing {node.type}" if node.is_missing else "unexpected input"
            return f"Syntax error: {what} at line {row + 1}, column {col + 1}"
        stack.extend(c for c in reversed(node.children) if c.has_error or c.is_missing)
    return "Syntax error"
