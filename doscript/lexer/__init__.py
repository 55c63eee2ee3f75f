"""
doscript Lexer Package

Implements the lexical analyzer (tokenizer) for doscript on top of a small
character cursor.

Key Features:
- Maximal-munch tokenization over six token kinds
- Signed integer/decimal literals with optional exponents
- Character and string literals with backslash escapes
- Single- and two-character operators, any other punctuation as an operator
- Index-precise errors

"""

from .tokens import Token, TokenType, SourceLocation
from .char_stream import CharStream
from .lexer import Lexer, tokenize_string, tokenize_file
from .errors import LexError, Diagnostic

__all__ = [
    "Lexer",
    "CharStream",
    "Token",
    "TokenType",
    "SourceLocation",
    "LexError",
    "Diagnostic",
    "tokenize_string",
    "tokenize_file",
]
