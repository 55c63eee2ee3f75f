"""
Token cursor used by the parser.

Mirrors ``CharStream`` over tokens instead of characters. There is no cut:
the parser reads literals with ``get`` and builds nodes directly.

"""

from typing import List, Optional, Union

from ..lexer.tokens import Token, TokenType

Pattern = Union[TokenType, str]


class TokenStream:
    """
    Position-tracking cursor over a token list.

    A pattern is either a ``TokenType``, matching tokens of that type, or a
    ``str``, matching tokens with that exact literal. ``Token(IDENTIFIER,
    "LET")`` is matched by both ``peek(TokenType.IDENTIFIER)`` and
    ``peek("LET")``.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.index = 0

    def has(self, offset: int = 0) -> bool:
        """Check if a token exists at ``index + offset``."""
        return 0 <= self.index + offset < len(self.tokens)

    def get(self, offset: int = 0) -> Token:
        """Return the token at ``index + offset``; it must exist."""
        assert self.has(offset), f"no token at offset {offset}"
        return self.tokens[self.index + offset]

    def get_next(self) -> Optional[Token]:
        """Return the next token, or None at end of input."""
        return self.tokens[self.index] if self.has(0) else None

    def peek(self, *patterns: Pattern) -> bool:
        """Check the next tokens against ``patterns`` without consuming."""
        if not self.has(len(patterns) - 1):
            return False
        for offset, pattern in enumerate(patterns):
            token = self.tokens[self.index + offset]
            if isinstance(pattern, TokenType):
                if token.type != pattern:
                    return False
            elif isinstance(pattern, str):
                if token.literal != pattern:
                    return False
            else:
                raise AssertionError(f"invalid token pattern: {pattern!r}")
        return True

    def match(self, *patterns: Pattern) -> bool:
        """Equivalent to ``peek``, but also advances past the matched tokens."""
        matched = self.peek(*patterns)
        if matched:
            self.index += len(patterns)
        return matched
