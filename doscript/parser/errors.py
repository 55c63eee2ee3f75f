"""
Error handling for the doscript parser.

A syntax error names the token the parser choked on, or no token at all when
the input ran out in the middle of a rule. Syntax errors never carry a
character index; that is the lexer's job.

"""

from typing import Optional, List

from ..lexer.tokens import Token, KEYWORDS
from ..lexer.errors import Diagnostic


class ParseError(Exception):
    """
    Exception raised when the parser encounters a syntax error.

    ``token`` is the offending lookahead token, or ``None`` for end of input.
    """

    def __init__(
        self,
        message: str,
        token: Optional[Token] = None,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.token = token
        self.diagnostic = Diagnostic(
            message=message,
            location=describe_token(token),
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def __str__(self) -> str:
        return f"{self.message} (at {describe_token(self.token)})"


def describe_token(token: Optional[Token]) -> str:
    if token is None:
        return "end of input"
    if token.offset is None:
        return f"{token.type.name.lower()} {token.literal!r}"
    return f"{token.type.name.lower()} {token.literal!r} @ index {token.offset}"


class SyntaxErrorRecovery:
    """
    Suggestion helpers for syntax errors.

    The parser never resynchronises after an error; these only improve the
    message for the error that stops it.
    """

    @staticmethod
    def suggest_keyword_corrections(found: Optional[Token], expected: str) -> List[str]:
        """Suggest ``expected`` when ``found`` looks like a misspelling of it."""
        if found is None or not found.is_identifier or expected not in KEYWORDS:
            return []
        if found.literal == expected:
            return []
        if SyntaxErrorRecovery._edit_distance(found.literal.upper(), expected) <= 2:
            return [f"Did you mean '{expected}'?"]
        return []

    @staticmethod
    def _edit_distance(s1: str, s2: str) -> int:
        """Calculate Levenshtein distance between two strings."""
        if len(s1) < len(s2):
            return SyntaxErrorRecovery._edit_distance(s2, s1)

        if len(s2) == 0:
            return len(s1)

        previous_row = list(range(len(s2) + 1))
        for i, c1 in enumerate(s1):
            current_row = [i + 1]
            for j, c2 in enumerate(s2):
                insertions = previous_row[j + 1] + 1
                deletions = current_row[j] + 1
                substitutions = previous_row[j] + (c1 != c2)
                current_row.append(min(insertions, deletions, substitutions))
            previous_row = current_row

        return previous_row[-1]


# Common parser error codes for categorization
PARSER_ERROR_CODES = {
    "P001": "Unexpected token",
    "P002": "Unexpected end of input",
    "P003": "Missing terminator or closing delimiter",
    "P004": "Invalid expression",
    "P005": "Trailing input",
    "P006": "Nesting too deep",
}


# Helper functions for creating common parser errors

def create_expected_error(expected: str, found: Optional[Token]) -> ParseError:
    """Create an error for a missing token, keyword or name."""
    if found is None:
        return ParseError(
            message=f"Expected {expected}, found end of input",
            token=None,
            code="P002",
            help_text=f"The input ended while the parser still expected {expected}.",
        )

    suggestions = SyntaxErrorRecovery.suggest_keyword_corrections(found, expected.strip("'"))
    return ParseError(
        message=f"Expected {expected}, found {found.literal!r}",
        token=found,
        code="P001",
        suggestions=suggestions or None
    )


def create_missing_terminator_error(terminator: str, found: Optional[Token]) -> ParseError:
    """Create an error for a missing ``)``, ``;`` or ``END``."""
    found_text = "end of input" if found is None else repr(found.literal)
    return ParseError(
        message=f"Missing '{terminator}', found {found_text}",
        token=found,
        code="P003",
        help_text=f"Add '{terminator}' to close the construct.",
        suggestions=SyntaxErrorRecovery.suggest_keyword_corrections(found, terminator) or None
    )


def create_invalid_expression_error(found: Optional[Token]) -> ParseError:
    """Create an error for a token that cannot start an expression."""
    if found is None:
        return ParseError(
            message="Expected expression, found end of input",
            token=None,
            code="P002",
        )
    return ParseError(
        message=f"Expected expression, found {found.literal!r}",
        token=found,
        code="P004",
        help_text="An expression starts with a literal, a name, '(' or OBJECT.",
    )


def create_trailing_input_error(found: Token) -> ParseError:
    """Create an error for tokens left over after a complete rule."""
    return ParseError(
        message="Expected end of input",
        token=found,
        code="P005",
        help_text=f"The rule ended before {found.literal!r}; remove the extra input.",
    )


def create_nesting_error(found: Optional[Token]) -> ParseError:
    """Create an error for input nested deeper than the parser's call stack allows."""
    return ParseError(
        message="Nesting too deep",
        token=found,
        code="P006",
        help_text="Split deeply nested groups or blocks into separate statements.",
    )
