"""
Abstract Syntax Tree node definitions for doscript.

The node set is closed: a program is a ``Source`` of ``Stmt`` nodes, and every
statement and expression is one of the dataclasses below. Nodes are frozen
and compared structurally, so a parsed tree can be checked against a tree
built by hand.

"""

from abc import ABC
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, ClassVar, List, Optional, Tuple


class ASTNodeType(Enum):
    """Enumeration of all AST node types."""

    # Top-level
    SOURCE = "Source"

    # Statements
    LET = "Let"
    DEF = "Def"
    IF = "If"
    FOR = "For"
    RETURN = "Return"
    EXPRESSION = "Expression"
    ASSIGNMENT = "Assignment"

    # Expressions
    LITERAL = "Literal"
    GROUP = "Group"
    BINARY = "Binary"
    VARIABLE = "Variable"
    PROPERTY = "Property"
    FUNCTION = "Function"
    METHOD = "Method"
    OBJECT = "ObjectExpr"


BINARY_OPERATORS = frozenset({
    "AND", "OR", "<", "<=", ">", ">=", "==", "!=", "+", "-", "*", "/",
})


class ASTVisitor:
    """
    Visitor over AST nodes.

    ``visit`` dispatches to ``visit_<NodeName>`` (e.g. ``visit_Let``).
    A node type without a handler falls through to ``generic_visit``, which
    raises, so visitors that skip a node type fail loudly.
    """

    def visit(self, node: 'ASTNode') -> Any:
        method = getattr(self, f"visit_{node.node_type.value}", self.generic_visit)
        return method(node)

    def generic_visit(self, node: 'ASTNode') -> Any:
        raise NotImplementedError(
            f"{self.__class__.__name__} has no handler for {node.node_type.value}"
        )


class ASTNode(ABC):
    """Base class for all AST nodes."""

    node_type: ClassVar[ASTNodeType]

    def accept(self, visitor: ASTVisitor) -> Any:
        """Accept a visitor (visitor pattern)."""
        return visitor.visit(self)

    def children(self) -> List['ASTNode']:
        """Get all child nodes, in source order."""
        return []

    def _freeze(self, *names: str):
        # Sequence fields are stored as tuples so nodes stay immutable and
        # lists and tuples compare equal.
        for name in names:
            object.__setattr__(self, name, tuple(getattr(self, name)))


class Stmt(ASTNode):
    """Base class for statements."""


class Expr(ASTNode):
    """Base class for expressions."""


# ============================================================================
# Top-level
# ============================================================================

@dataclass(frozen=True)
class Source(ASTNode):
    """Root AST node representing a complete program."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.SOURCE

    statements: Tuple[Stmt, ...]

    def __post_init__(self):
        self._freeze("statements")

    def children(self) -> List[ASTNode]:
        return list(self.statements)


# ============================================================================
# Statements
# ============================================================================

@dataclass(frozen=True)
class Let(Stmt):
    """Variable declaration: ``LET name [= value];``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.LET

    name: str
    value: Optional[Expr] = None

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []


@dataclass(frozen=True)
class Def(Stmt):
    """Function definition: ``DEF name(parameters) DO body END``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.DEF

    name: str
    parameters: Tuple[str, ...] = ()
    body: Tuple[Stmt, ...] = ()

    def __post_init__(self):
        self._freeze("parameters", "body")

    def children(self) -> List[ASTNode]:
        return list(self.body)


@dataclass(frozen=True)
class If(Stmt):
    """Conditional: ``IF condition DO then_body [ELSE else_body] END``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.IF

    condition: Expr
    then_body: Tuple[Stmt, ...] = ()
    else_body: Tuple[Stmt, ...] = ()

    def __post_init__(self):
        self._freeze("then_body", "else_body")

    def children(self) -> List[ASTNode]:
        return [self.condition, *self.then_body, *self.else_body]


@dataclass(frozen=True)
class For(Stmt):
    """Loop: ``FOR name IN iterable DO body END``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.FOR

    name: str
    iterable: Expr
    body: Tuple[Stmt, ...] = ()

    def __post_init__(self):
        self._freeze("body")

    def children(self) -> List[ASTNode]:
        return [self.iterable, *self.body]


@dataclass(frozen=True)
class Return(Stmt):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.RETURN

    value: Optional[Expr] = None

    def children(self) -> List[ASTNode]:
        return [self.value] if self.value is not None else []


@dataclass(frozen=True)
class Expression(Stmt):
    """Expression evaluated for its effect: ``expression;``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.EXPRESSION

    expression: Expr

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass(frozen=True)
class Assignment(Stmt):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.ASSIGNMENT

    target: Expr
    value: Expr

    def children(self) -> List[ASTNode]:
        return [self.target, self.value]


# ============================================================================
# Expressions
# ============================================================================

@dataclass(frozen=True)
class Literal(Expr):
    """
    Literal value expression.

    ``literal_type`` is one of "nil", "boolean", "integer", "decimal",
    "character" or "string". When omitted it is inferred from ``value``;
    a ``str`` value is a string, so characters must say so explicitly.
    """
    node_type: ClassVar[ASTNodeType] = ASTNodeType.LITERAL

    value: Any
    literal_type: Optional[str] = None

    def __post_init__(self):
        if self.literal_type is None:
            object.__setattr__(self, "literal_type", _infer_literal_type(self.value))


def _infer_literal_type(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, Decimal):
        return "decimal"
    if isinstance(value, str):
        return "string"
    raise TypeError(f"Unsupported literal value: {value!r}")


@dataclass(frozen=True)
class Group(Expr):
    """Parenthesized expression."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.GROUP

    expression: Expr

    def children(self) -> List[ASTNode]:
        return [self.expression]


@dataclass(frozen=True)
class Binary(Expr):
    """Binary operation expression."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.BINARY

    operator: str
    left: Expr
    right: Expr

    def __post_init__(self):
        if self.operator not in BINARY_OPERATORS:
            raise ValueError(f"Not a binary operator: {self.operator!r}")

    def children(self) -> List[ASTNode]:
        return [self.left, self.right]


@dataclass(frozen=True)
class Variable(Expr):
    node_type: ClassVar[ASTNodeType] = ASTNodeType.VARIABLE

    name: str


@dataclass(frozen=True)
class Property(Expr):
    """Property access: ``receiver.name``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.PROPERTY

    receiver: Expr
    name: str

    def children(self) -> List[ASTNode]:
        return [self.receiver]


@dataclass(frozen=True)
class Function(Expr):
    """Function call: ``name(arguments)``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.FUNCTION

    name: str
    arguments: Tuple[Expr, ...] = ()

    def __post_init__(self):
        self._freeze("arguments")

    def children(self) -> List[ASTNode]:
        return list(self.arguments)


@dataclass(frozen=True)
class Method(Expr):
    """Method call: ``receiver.name(arguments)``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.METHOD

    receiver: Expr
    name: str
    arguments: Tuple[Expr, ...] = ()

    def __post_init__(self):
        self._freeze("arguments")

    def children(self) -> List[ASTNode]:
        return [self.receiver, *self.arguments]


@dataclass(frozen=True)
class ObjectExpr(Expr):
    """Object literal: ``OBJECT [name] DO fields methods END``."""
    node_type: ClassVar[ASTNodeType] = ASTNodeType.OBJECT

    name: Optional[str] = None
    fields: Tuple[Let, ...] = ()
    methods: Tuple[Def, ...] = ()

    def __post_init__(self):
        self._freeze("fields", "methods")
        if not all(isinstance(field, Let) for field in self.fields):
            raise TypeError("Object fields must be Let statements")
        if not all(isinstance(method, Def) for method in self.methods):
            raise TypeError("Object methods must be Def statements")

    def children(self) -> List[ASTNode]:
        return [*self.fields, *self.methods]
