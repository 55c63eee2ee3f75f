"""
doscript Front End Package

A lexer and recursive-descent parser for doscript, a small dynamically-typed
scripting language built from LET/DEF/IF/FOR statements and DO ... END blocks.
The front end stops at the abstract syntax tree: nothing here evaluates code.

Architecture:
    doscript/
    ├── lexer/           # Character cursor, tokens and lexical analysis
    ├── parser/          # Token cursor, grammar rules and AST generation
    └── cli.py           # Command-line driver and REPL

"""

__version__ = "0.1.0"
__license__ = "MIT"

from .lexer import Lexer, Token, TokenType, LexError, tokenize_string
from .parser import Parser, ParseError, parse_string, format_ast

__all__ = [
    # Core classes
    "Lexer",
    "Parser",
    "Token",
    "TokenType",

    # Errors
    "LexError",
    "ParseError",

    # Convenience functions
    "tokenize_string",
    "parse_string",
    "format_ast",

    # Version info
    "__version__",
    "__license__",
]
