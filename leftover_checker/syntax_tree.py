"""
Typed syntax tree for analyzed code units.

The tree is a closed set of node classes. Nodes carry no parent pointers;
passes that need ancestry receive the ancestor chain from the walker.
Nodes compare by identity so they can be used as set members and dict keys.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple, Union

from .issue import SourceRange


class FunctionKind(Enum):
    DECLARATION = "declaration"
    EXPRESSION = "expression"
    ARROW = "arrow"
    METHOD = "method"


class ControlKind(Enum):
    IF = "if"
    FOR = "for"
    FOR_IN = "for-in"
    WHILE = "while"
    DO_WHILE = "do-while"
    SWITCH = "switch"
    TRY = "try"
    WITH = "with"


class LiteralKind(Enum):
    STRING = "string"
    NUMBER = "number"
    BIGINT = "bigint"
    BOOLEAN = "boolean"
    NULL = "null"
    REGEX = "regex"


@dataclass(eq=False)
class Node:
    range: Optional[SourceRange] = field(default=None, kw_only=True)

    def children(self) -> Iterator["Node"]:
        return iter(())

    @property
    def line(self) -> Optional[int]:
        return self.range.start.line if self.range else None


def _present(*nodes: Optional[Node]) -> Iterator[Node]:
    return (n for n in nodes if n is not None)


@dataclass(eq=False)
class Program(Node):
    body: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(eq=False)
class Block(Node):
    body: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.body)


@dataclass(eq=False)
class Identifier(Node):
    """A name in binding or reference position."""
    name: str = ""


@dataclass(eq=False)
class PropertyName(Node):
    """A non-computed property key, member property or label. Never a reference."""
    name: str = ""


@dataclass(eq=False)
class Literal(Node):
    kind: LiteralKind = LiteralKind.NULL
    value: Union[str, float, bool, None] = None
    raw: str = ""


@dataclass(eq=False)
class FunctionNode(Node):
    kind: FunctionKind = FunctionKind.EXPRESSION
    name: Optional[Node] = None
    params: List[Node] = field(default_factory=list)
    body: Optional[Node] = None
    synthetic: bool = False

    def children(self) -> Iterator[Node]:
        yield from _present(self.name)
        yield from self.params
        yield from _present(self.body)


@dataclass(eq=False)
class ClassNode(Node):
    name: Optional[Identifier] = None
    is_declaration: bool = False
    heritage: Optional[Node] = None
    members: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        yield from _present(self.name, self.heritage)
        yield from self.members


@dataclass(eq=False)
class VariableDeclarator(Node):
    target: Optional[Node] = None
    init: Optional[Node] = None

    def children(self) -> Iterator[Node]:
        return _present(self.target, self.init)


@dataclass(eq=False)
class VariableDeclaration(Node):
    kind: str = "var"
    declarators: List[VariableDeclarator] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.declarators)


@dataclass(eq=False)
class Pattern(Node):
    """Destructuring pattern: ``object``, ``array`` or ``rest``."""
    kind: str = "object"
    elements: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.elements)


@dataclass(eq=False)
class PatternProperty(Node):
    """``key: value`` inside an object pattern."""
    key: Optional[Node] = None
    value: Optional[Node] = None

    def children(self) -> Iterator[Node]:
        return _present(self.key, self.value)


@dataclass(eq=False)
class AssignmentPattern(Node):
    """Binding target with a default value."""
    target: Optional[Node] = None
    default: Optional[Node] = None

    def children(self) -> Iterator[Node]:
        return _present(self.target, self.default)


@dataclass(eq=False)
class Assignment(Node):
    target: Optional[Node] = None
    value: Optional[Node] = None
    operator: str = "="

    def children(self) -> Iterator[Node]:
        return _present(self.target, self.value)


@dataclass(eq=False)
class Call(Node):
    callee: Optional[Node] = None
    arguments: List[Node] = field(default_factory=list)
    is_new: bool = False

    def children(self) -> Iterator[Node]:
        yield from _present(self.callee)
        yield from self.arguments


@dataclass(eq=False)
class Member(Node):
    object: Optional[Node] = None
    property: Optional[Node] = None
    computed: bool = False

    def children(self) -> Iterator[Node]:
        return _present(self.object, self.property)


@dataclass(eq=False)
class Return(Node):
    argument: Optional[Node] = None

    def children(self) -> Iterator[Node]:
        return _present(self.argument)


@dataclass(eq=False)
class Debugger(Node):
    pass


@dataclass(eq=False)
class Control(Node):
    """if / loops / switch / try / with."""
    kind: ControlKind = ControlKind.IF
    parts: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.parts)


@dataclass(eq=False)
class CatchClause(Node):
    param: Optional[Node] = None
    body: Optional[Block] = None

    def children(self) -> Iterator[Node]:
        return _present(self.param, self.body)


@dataclass(eq=False)
class Other(Node):
    """Any construct no pass needs to tell apart (operators, literals of
    aggregate shape, expression statements, ...). ``kind`` keeps the grammar
    name for diagnostics."""
    kind: str = ""
    parts: List[Node] = field(default_factory=list)

    def children(self) -> Iterator[Node]:
        return iter(self.parts)


Ancestors = Tuple[Node, ...]


def walk(node: Node, ancestors: Ancestors = ()) -> Iterator[Tuple[Node, Ancestors]]:
    """Depth-first pre-order walk yielding each node with its ancestor chain
    (outermost first)."""
    stack = [(node, ancestors)]
    while stack:
        current, chain = stack.pop()
        yield current, chain
        inner = chain + (current,)
        stack.extend((child, inner) for child in reversed(list(current.children())))
