"""
doscript Lexer - turns source text into a flat list of tokens

The lexer works through a combination of ``lex``, which repeatedly skips
whitespace/comments and calls ``_lex_token``, and ``_lex_token``, which looks
at the next character(s) to pick a token class and delegates to the matching
``_lex_*`` method. All character bookkeeping lives in ``CharStream``.

Tokenization is maximal munch: ``1fish2fish`` is an integer followed by an
identifier, ``<=>`` is ``<=`` followed by ``>``.

"""

import logging
import os
from pathlib import Path
from typing import List, Union

from .char_stream import CharStream
from .tokens import Token, TokenType
from .errors import (
    LexError, create_invalid_character_error, create_unterminated_string_error,
    create_unterminated_character_error, create_invalid_escape_error,
    create_invalid_character_literal_error
)

logger = logging.getLogger(__name__)


# Single-character patterns for CharStream.peek/match
WHITESPACE = r"[ \b\n\r\t]"
IDENTIFIER_START = r"[A-Za-z_]"
IDENTIFIER_CONTINUE = r"[A-Za-z0-9_-]"
DIGIT = r"[0-9]"
SIGN = r"[+-]"
CHARACTER_BODY = r"[^'\n\r\\]"
STRING_BODY = r"[^\"\n\r\\]"
BACKSLASH = r"\\"
ESCAPE = r"[bnrt'\"\\]"
COMPARISON_PREFIX = r"[<>!=.+]"
ANY_OPERATOR = r"[^A-Za-z_0-9'\" \b\n\r\t]"


class Lexer:
    """
    doscript lexical analyzer.

    Converts source code text into a list of tokens. The first malformed
    token aborts lexing with a ``LexError``; there is no recovery.
    """

    def __init__(self, source: str, filename: str = "<input>"):
        """
        Initialize the lexer with source code.

        Args:
            source: Source code string
            filename: Name of source file for error reporting
        """
        self.source = source
        self.filename = filename
        self.chars = CharStream(source)

    def lex(self) -> List[Token]:
        """
        Tokenize the entire source code.

        Returns:
            List of tokens in source order (no EOF marker)

        Raises:
            LexError: On the first character sequence that is not a token
        """
        self.chars = CharStream(self.source)
        tokens: List[Token] = []

        while self.chars.has(0):
            if self.chars.peek(WHITESPACE):
                self._skip_whitespace()
            elif self.chars.peek("/", "/"):
                self._skip_comment()
            else:
                tokens.append(self._lex_token())

        logger.debug("Lexed %d tokens from %s", len(tokens), self.filename)
        return tokens

    tokenize = lex

    def _skip_whitespace(self):
        while self.chars.match(WHITESPACE):
            pass
        self.chars.cut()

    def _skip_comment(self):
        self.chars.match("/", "/")
        while self.chars.match(r"[^\n\r]"):
            pass
        self.chars.cut()

    def _lex_token(self) -> Token:
        """Pick the token class from the next character(s) and lex one token."""
        if self.chars.peek(IDENTIFIER_START):
            return self._lex_identifier()
        elif self.chars.peek(DIGIT) or self.chars.peek(SIGN, DIGIT):
            return self._lex_number()
        elif self.chars.peek("'"):
            return self._lex_character()
        elif self.chars.peek('"'):
            return self._lex_string()
        elif self.chars.peek(COMPARISON_PREFIX) or self.chars.peek(ANY_OPERATOR):
            return self._lex_operator()

        raise create_invalid_character_error(self.source[self.chars.index], self.chars.index)

    def _lex_identifier(self) -> Token:
        self.chars.match(IDENTIFIER_START)
        while self.chars.match(IDENTIFIER_CONTINUE):
            pass
        return self._emit(TokenType.IDENTIFIER)

    def _lex_number(self) -> Token:
        """
        Lex an integer or decimal literal.

        The fraction and the exponent are only consumed when a digit follows
        them, so ``1.`` and ``1e`` leave the ``.``/``e`` for the next token.
        An exponent alone does not make a number decimal.
        """
        token_type = TokenType.INTEGER

        self.chars.match(SIGN)
        while self.chars.match(DIGIT):
            pass

        if self.chars.peek(r"\.", DIGIT):
            token_type = TokenType.DECIMAL
            self.chars.match(r"\.")
            while self.chars.match(DIGIT):
                pass

        if self.chars.peek("e", SIGN, DIGIT) or self.chars.peek("e", DIGIT):
            self.chars.match("e")
            self.chars.match(SIGN)
            while self.chars.match(DIGIT):
                pass

        return self._emit(token_type)

    def _lex_character(self) -> Token:
        self.chars.match("'")

        if self.chars.match(CHARACTER_BODY):
            pass
        elif self.chars.peek(BACKSLASH):
            self._lex_escape()
        else:
            raise create_invalid_character_literal_error(self.chars.index)

        if not self.chars.match("'"):
            raise create_unterminated_character_error(self.chars.index)

        return self._emit(TokenType.CHARACTER)

    def _lex_string(self) -> Token:
        self.chars.match('"')

        while self.chars.has(0) and not self.chars.peek('"'):
            if self.chars.match(STRING_BODY):
                continue
            elif self.chars.peek(BACKSLASH):
                self._lex_escape()
            else:
                # Line break inside the literal
                raise create_unterminated_string_error(self.chars.index)

        if not self.chars.match('"'):
            raise create_unterminated_string_error(self.chars.index)

        return self._emit(TokenType.STRING)

    def _lex_escape(self):
        """Consume a backslash and the escape character after it."""
        self.chars.match(BACKSLASH)
        if not self.chars.match(ESCAPE):
            raise create_invalid_escape_error(self.chars.index)

    def _lex_operator(self) -> Token:
        if self.chars.match(COMPARISON_PREFIX):
            self.chars.match("=")
        else:
            self.chars.match(ANY_OPERATOR)
        return self._emit(TokenType.OPERATOR)

    def _emit(self, token_type: TokenType) -> Token:
        offset = self.chars.start
        return Token(token_type, self.chars.emit(), offset)


def tokenize_string(source: str, filename: str = "<string>") -> List[Token]:
    """
    Convenience function to tokenize a source string.

    Args:
        source: Source code string
        filename: Filename for error reporting

    Returns:
        List of tokens

    Raises:
        LexError: If lexing fails; its ``location`` is filled in
    """
    try:
        return Lexer(source, filename).lex()
    except LexError as e:
        e.locate(source, filename)
        raise


def tokenize_file(path: Union[str, os.PathLike]) -> List[Token]:
    """
    Read a UTF-8 source file and tokenize it.

    Errors are located with the file's path as the filename, so a
    ``LexError`` reports ``path:line:column``.

    Raises:
        LexError: If lexing fails
        OSError: If the file cannot be read
    """
    path = Path(path)
    return tokenize_string(path.read_text(encoding="utf-8"), str(path))
