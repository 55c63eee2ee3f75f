"""
Indented text rendering of doscript ASTs.

Used by the command-line driver to show what the parser built. One node per
line, children indented by four spaces:

    Source
        Def main()
            Expression
                Function print
                    Literal string 'Hello, World!'

"""

from typing import List

from .ast_nodes import (
    ASTNode, ASTVisitor, Source, Let, Def, If, For, Return, Expression,
    Assignment, Literal, Group, Binary, Variable, Property, Function, Method,
    ObjectExpr,
)

INDENT = "    "


class ASTPrinter(ASTVisitor):
    """Renders every node type; a node without a handler is a bug."""

    def __init__(self):
        self.lines: List[str] = []
        self.depth = 0

    def format(self, node: ASTNode) -> str:
        self.lines = []
        self.depth = 0
        self.visit(node)
        return "\n".join(self.lines)

    def _line(self, text: str):
        self.lines.append(INDENT * self.depth + text)

    def _section(self, label: str, nodes):
        self._line(f"{label}:")
        self.depth += 1
        for node in nodes:
            self.visit(node)
        self.depth -= 1

    def _children(self, *nodes: ASTNode):
        self.depth += 1
        for node in nodes:
            self.visit(node)
        self.depth -= 1

    # Statements

    def visit_Source(self, node: Source):
        self._line("Source")
        self._children(*node.statements)

    def visit_Let(self, node: Let):
        self._line(f"Let {node.name}")
        if node.value is not None:
            self._children(node.value)

    def visit_Def(self, node: Def):
        self._line(f"Def {node.name}({', '.join(node.parameters)})")
        self._children(*node.body)

    def visit_If(self, node: If):
        self._line("If")
        self.depth += 1
        self._section("condition", [node.condition])
        self._section("then", node.then_body)
        if node.else_body:
            self._section("else", node.else_body)
        self.depth -= 1

    def visit_For(self, node: For):
        self._line(f"For {node.name}")
        self.depth += 1
        self._section("in", [node.iterable])
        self._section("do", node.body)
        self.depth -= 1

    def visit_Return(self, node: Return):
        self._line("Return")
        if node.value is not None:
            self._children(node.value)

    def visit_Expression(self, node: Expression):
        self._line("Expression")
        self._children(node.expression)

    def visit_Assignment(self, node: Assignment):
        self._line("Assignment")
        self._children(node.target, node.value)

    # Expressions

    def visit_Literal(self, node: Literal):
        if node.literal_type == "nil":
            self._line("Literal NIL")
        elif node.literal_type == "boolean":
            self._line(f"Literal {'TRUE' if node.value else 'FALSE'}")
        elif node.literal_type in ("integer", "decimal"):
            self._line(f"Literal {node.literal_type} {node.value}")
        else:
            self._line(f"Literal {node.literal_type} {node.value!r}")

    def visit_Group(self, node: Group):
        self._line("Group")
        self._children(node.expression)

    def visit_Binary(self, node: Binary):
        self._line(f"Binary {node.operator}")
        self._children(node.left, node.right)

    def visit_Variable(self, node: Variable):
        self._line(f"Variable {node.name}")

    def visit_Property(self, node: Property):
        self._line(f"Property .{node.name}")
        self._children(node.receiver)

    def visit_Function(self, node: Function):
        self._line(f"Function {node.name}")
        self._children(*node.arguments)

    def visit_Method(self, node: Method):
        self._line(f"Method .{node.name}")
        self.depth += 1
        self._section("receiver", [node.receiver])
        self._section("arguments", node.arguments)
        self.depth -= 1

    def visit_ObjectExpr(self, node: ObjectExpr):
        self._line("Object" if node.name is None else f"Object {node.name}")
        self._children(*node.fields, *node.methods)


def format_ast(node: ASTNode) -> str:
    """Render ``node`` and its subtree as indented text."""
    return ASTPrinter().format(node)
