"""
Token definitions for the doscript lexer.

doscript keeps its token model deliberately small: every token is one of six
kinds, and keywords such as LET or DO are ordinary identifiers that the parser
recognises by their literal text.

"""

from enum import Enum, auto
from dataclasses import dataclass, field
from typing import Optional


class TokenType(Enum):
    """Enumeration of all token kinds in doscript."""

    IDENTIFIER = auto()             # name, LET, fish2fish, kebab-case
    INTEGER = auto()                # 1, -5, 1e10
    DECIMAL = auto()                # 1.0, +2.5e-3
    CHARACTER = auto()              # 'c', '\n'
    STRING = auto()                 # "Hello,\nWorld"
    OPERATOR = auto()               # <=, (, ;, any other punctuation


@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in the source code.

    Used for error reporting: the lexer works in offsets, diagnostics show
    line and column.
    """
    filename: str
    line: int
    column: int
    offset: int  # Character offset from start of input

    @classmethod
    def from_offset(cls, source: str, offset: int, filename: str = "<input>") -> "SourceLocation":
        """Build a location for ``offset`` by counting newlines in ``source``."""
        line = source.count("\n", 0, offset) + 1
        column = offset - (source.rfind("\n", 0, offset) + 1) + 1
        return cls(filename, line, column, offset)

    def __str__(self) -> str:
        return f"{self.filename}:{self.line}:{self.column}"


@dataclass(frozen=True)
class Token:
    """
    Represents a lexical token in doscript.

    ``literal`` is the exact slice of source text the token was built from,
    quotes and backslashes included. Equality only looks at the type and the
    literal; ``offset`` is bookkeeping for diagnostics.
    """
    type: TokenType
    literal: str
    offset: Optional[int] = field(default=None, compare=False)

    def __str__(self) -> str:
        return f"{self.type.name}({self.literal!r})"

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"

    @property
    def is_literal(self) -> bool:
        """Check if this token is a number, character or string literal."""
        return self.type in LITERAL_TYPES

    @property
    def is_identifier(self) -> bool:
        return self.type == TokenType.IDENTIFIER


LITERAL_TYPES = frozenset({
    TokenType.INTEGER,
    TokenType.DECIMAL,
    TokenType.CHARACTER,
    TokenType.STRING,
})

# Words the parser treats specially. They lex as identifiers.
KEYWORDS = frozenset({
    "LET", "DEF", "IF", "DO", "ELSE", "END", "FOR", "IN", "RETURN",
    "OBJECT", "NIL", "TRUE", "FALSE", "AND", "OR",
})
