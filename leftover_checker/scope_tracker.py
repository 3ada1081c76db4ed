"""
Scope and usage tracking over the typed syntax tree.

Scopes are opened for the program, every function and every block. A
reference is queued on the scope where it occurs and resolved when that scope
closes: names the scope declares absorb it, anything else moves up to the
parent. Declarations that end up with no usage are reported as unused unless
they are exempt.

Usage is tracked per name within a scope, not per binding: when a name is
declared twice in one scope and only one binding is referenced, neither is
reported.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List, Optional

from .syntax_tree import (
    AssignmentPattern,
    Block,
    CatchClause,
    ClassNode,
    FunctionKind,
    FunctionNode,
    Identifier,
    Member,
    Node,
    Pattern,
    PatternProperty,
    Program,
    PropertyName,
    VariableDeclarator,
)


class BindingKind(Enum):
    VARIABLE = "variable"
    PARAMETER = "parameter"
    CATCH_PARAMETER = "catch-parameter"
    FUNCTION = "function"
    CLASS = "class"


_ALWAYS_EXEMPT = frozenset({
    BindingKind.PARAMETER,
    BindingKind.CATCH_PARAMETER,
    BindingKind.FUNCTION,
    BindingKind.CLASS,
})


@dataclass(eq=False)
class Binding:
    """One declaration site of a name."""
    name: str
    kind: BindingKind
    site: Identifier
    holds_function: bool = False


class Scope:
    """Declarations and resolved usages of one lexical scope."""

    def __init__(self, node: Node, parent: Optional["Scope"] = None):
        self.node = node
        self.parent = parent
        self.declarations: Dict[str, List[Binding]] = {}
        self.usages: Dict[str, List[Identifier]] = {}
        self.pending: List[Identifier] = []

    def declare(self, binding: Binding):
        self.declarations.setdefault(binding.name, []).append(binding)

    def reference(self, identifier: Identifier):
        self.pending.append(identifier)

    def is_used(self, name: str) -> bool:
        return bool(self.usages.get(name))

    def resolve(self) -> List[Identifier]:
        """Absorb pending references; return the ones that belong further out."""
        unresolved = []
        for identifier in self.pending:
            if identifier.name in self.declarations:
                self.usages.setdefault(identifier.name, []).append(identifier)
            else:
                unresolved.append(identifier)
        self.pending = []
        return unresolved

    def unused(self) -> Iterable[Binding]:
        for name, bindings in self.declarations.items():
            if not self.is_used(name):
                yield from bindings


class ScopeTracker:
    """Finds declarations that are never referenced.

    ``exempt_names`` are host-provided globals that are never reported;
    names starting with ``exempt_prefix`` are treated as intentionally unused.
    """

    def __init__(self, exempt_names: FrozenSet[str] = frozenset(), exempt_prefix: str = "_"):
        self.exempt_names = frozenset(exempt_names)
        self.exempt_prefix = exempt_prefix
        self.scope: Optional[Scope] = None
        self.unused: List[Binding] = []

    def analyze(self, program: Program) -> List[Binding]:
        """Unused, non-exempt bindings of ``program`` in source order."""
        self.scope = None
        self.unused = []
        self.visit(program)
        return sorted(
            self.unused,
            key=lambda b: (b.site.range.start.line, b.site.range.start.column) if b.site.range else (0, 0),
        )

    def is_exempt(self, binding: Binding) -> bool:
        if binding.kind in _ALWAYS_EXEMPT or binding.holds_function:
            return True
        if self.exempt_prefix and binding.name.startswith(self.exempt_prefix):
            return True
        return binding.name in self.exempt_names

    # scope stack

    def _push(self, node: Node) -> Scope:
        self.scope = Scope(node, self.scope)
        return self.scope

    def _pop(self):
        scope = self.scope
        unresolved = scope.resolve()
        if scope.parent is not None:
            scope.parent.pending.extend(unresolved)
        self.unused.extend(b for b in scope.unused() if not self.is_exempt(b))
        self.scope = scope.parent

    def _declare(self, site: Identifier, kind: BindingKind, holds_function: bool = False):
        self.scope.declare(Binding(site.name, kind, site, holds_function))

    def _bind(self, target: Optional[Node], kind: BindingKind, holds_function: bool = False):
        """Declare every name bound by a binding target; visit defaults and computed keys."""
        if target is None:
            return
        if isinstance(target, Identifier):
            self._declare(target, kind, holds_function)
        elif isinstance(target, Pattern):
            for element in target.elements:
                self._bind(element, kind, holds_function)
        elif isinstance(target, PatternProperty):
            if target.key is not None and not isinstance(target.key, (PropertyName, Identifier)):
                self.visit(target.key)
            self._bind(target.value, kind, holds_function)
        elif isinstance(target, AssignmentPattern):
            self._bind(target.target, kind, holds_function)
            if target.default is not None:
                self.visit(target.default)
        else:
            self.visit(target)

    def _visit_body(self, body: Optional[Node]):
        """Visit a function or catch body inside the scope already opened for it."""
        if isinstance(body, Block):
            for statement in body.body:
                self.visit(statement)
        elif body is not None:
            self.visit(body)

    # visitor

    def visit(self, node: Node):
        method = getattr(self, "visit_" + type(node).__name__, self.generic_visit)
        method(node)

    def generic_visit(self, node: Node):
        for child in node.children():
            self.visit(child)

    def visit_Program(self, node: Program):
        self._push(node)
        self.generic_visit(node)
        self._pop()

    def visit_Block(self, node: Block):
        self._push(node)
        self.generic_visit(node)
        self._pop()

    def visit_Identifier(self, node: Identifier):
        self.scope.reference(node)

    def visit_PropertyName(self, node: PropertyName):
        pass

    def visit_Member(self, node: Member):
        if node.object is not None:
            self.visit(node.object)
        if node.computed and node.property is not None:
            self.visit(node.property)

    def visit_VariableDeclarator(self, node: VariableDeclarator):
        self._bind(node.target, BindingKind.VARIABLE, isinstance(node.init, FunctionNode))
        if node.init is not None:
            self.visit(node.init)

    def visit_FunctionNode(self, node: FunctionNode):
        if node.kind == FunctionKind.DECLARATION and isinstance(node.name, Identifier):
            self._declare(node.name, BindingKind.FUNCTION)
        elif node.kind == FunctionKind.METHOD and node.name is not None:
            self.visit(node.name)

        self._push(node)
        if node.kind == FunctionKind.EXPRESSION and isinstance(node.name, Identifier):
            self._declare(node.name, BindingKind.FUNCTION)
        for param in node.params:
            self._bind(param, BindingKind.PARAMETER)
        self._visit_body(node.body)
        self._pop()

    def visit_ClassNode(self, node: ClassNode):
        if node.is_declaration and node.name is not None:
            self._declare(node.name, BindingKind.CLASS)
        if node.heritage is not None:
            self.visit(node.heritage)
        for member in node.members:
            self.visit(member)

    def visit_CatchClause(self, node: CatchClause):
        self._push(node)
        self._bind(node.param, BindingKind.CATCH_PARAMETER)
        self._visit_body(node.body)
        self._pop()


def find_unused(program: Program, exempt_names: FrozenSet[str] = frozenset(), exempt_prefix: str = "_") -> List[Binding]:
    """Convenience wrapper around :class:`ScopeTracker`."""
    return ScopeTracker(exempt_names, exempt_prefix).analyze(program)
