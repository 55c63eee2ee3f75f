"""
doscript Parser Package

Implements a recursive descent parser for doscript. Produces immutable,
structurally comparable Abstract Syntax Trees.

Key Features:
- One method per grammar rule, precedence encoded as a cascade of rules
- Left-associative binary operators at every level
- Property and method chaining, object literals, nested DO ... END blocks
- Errors that name the offending token or end of input

"""

from .ast_nodes import *
from .token_stream import TokenStream
from .parser import Parser, parse_string, parse_file
from .printer import ASTPrinter, format_ast
from .errors import ParseError

__all__ = [
    # Core parser
    "Parser",
    "TokenStream",
    "parse_string",
    "parse_file",

    # AST nodes
    "ASTNode", "ASTNodeType", "ASTVisitor", "Stmt", "Expr", "Source",
    "Let", "Def", "If", "For", "Return", "Expression", "Assignment",
    "Literal", "Group", "Binary", "Variable", "Property", "Function",
    "Method", "ObjectExpr",

    # Printing
    "ASTPrinter", "format_ast",

    # Error handling
    "ParseError",
]
