"""
Error handling for the doscript lexer.

Every lexical error is fatal to the current call and carries the character
index where lexing stopped, plus a diagnostic for display.

"""

from typing import Optional, List
from dataclasses import dataclass


@dataclass
class Diagnostic:
    """Base class for front-end diagnostics."""
    message: str
    location: str  # "index 9", "<input>:1:10", "token ';'", "end of input"
    severity: str  # "error", "warning"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: Optional[List[str]] = None

    def __str__(self) -> str:
        severity_prefix = self.severity.upper()
        if self.code:
            severity_prefix = f"{severity_prefix}[{self.code}]"
        result = f"{severity_prefix}: {self.message}\n"
        result += f"  --> {self.location}\n"

        if self.help_text:
            result += f"  help: {self.help_text}\n"

        if self.suggestions:
            result += "  suggestions:\n"
            for suggestion in self.suggestions:
                result += f"    - {suggestion}\n"

        return result


class LexError(Exception):
    """
    Exception raised when the lexer encounters malformed input.

    ``index`` is the offset into the source where the lexer gave up.
    """

    def __init__(
        self,
        message: str,
        index: int,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.index = index
        self.location = None
        self.diagnostic = Diagnostic(
            message=message,
            location=f"index {index}",
            severity="error",
            code=code,
            help_text=help_text,
            suggestions=suggestions
        )

    def locate(self, source: str, filename: str = "<input>") -> "LexError":
        """Attach a line/column location computed from the original source."""
        from .tokens import SourceLocation

        self.location = SourceLocation.from_offset(source, self.index, filename)
        self.diagnostic.location = f"{self.location} (index {self.index})"
        return self

    def __str__(self) -> str:
        return f"{self.message} @ index {self.index}"


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
    "L002": "Unterminated string literal",
    "L003": "Unterminated character literal",
    "L004": "Invalid escape sequence",
    "L005": "Invalid character literal",
}

ESCAPE_CHARACTERS = "bnrt'\"\\"


# Helper functions for creating common errors
def create_invalid_character_error(char: str, index: int) -> LexError:
    """Create an error for a character that cannot start any token."""
    if char.isprintable():
        help_text = f"The character {char!r} cannot start a token."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexError(
        message="Not a valid token",
        index=index,
        code="L001",
        help_text=help_text
    )


def create_unterminated_string_error(index: int) -> LexError:
    """Create an error for a string literal with no closing quote."""
    return LexError(
        message="Unterminated string literal",
        index=index,
        code="L002",
        help_text="String literals must be closed with a matching \" on the same line.",
        suggestions=["Add a closing \" quote", "Escape embedded quotes as \\\""]
    )


def create_unterminated_character_error(index: int) -> LexError:
    """Create an error for a character literal with no closing quote."""
    return LexError(
        message="Unterminated character literal",
        index=index,
        code="L003",
        help_text="Character literals hold exactly one character or escape sequence.",
        suggestions=["Add a closing ' quote", "Use a string literal for more than one character"]
    )


def create_invalid_escape_error(index: int) -> LexError:
    """Create an error for a backslash followed by an unsupported character."""
    return LexError(
        message="Invalid escape sequence",
        index=index,
        code="L004",
        help_text="Supported escapes are " + ", ".join("\\" + c for c in ESCAPE_CHARACTERS) + ".",
    )


def create_invalid_character_literal_error(index: int) -> LexError:
    """Create an error for a character literal whose body is empty or a line break."""
    return LexError(
        message="Invalid character literal",
        index=index,
        code="L005",
        help_text="Quotes, backslashes and line breaks must be escaped inside character literals.",
    )
