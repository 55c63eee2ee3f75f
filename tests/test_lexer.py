"""
Test suite for the doscript lexer.

Tests cover:
- Whitespace and comment skipping
- Each token class, including the inputs that must not lex as that class
- Maximal munch across token boundaries
- Error indices for malformed literals

"""

import tempfile
import unittest
import sys
import os

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from doscript.lexer import Lexer, CharStream, Token, TokenType, LexError, tokenize_string, tokenize_file
from doscript.lexer.errors import ERROR_CODES


def identifier(literal):
    return Token(TokenType.IDENTIFIER, literal)


def integer(literal):
    return Token(TokenType.INTEGER, literal)


def decimal(literal):
    return Token(TokenType.DECIMAL, literal)


def operator(literal):
    return Token(TokenType.OPERATOR, literal)


class TestLexer(unittest.TestCase):
    """Test cases for single token classes."""

    def _check(self, source, expected, success=True):
        """Lex ``source`` and compare; on failure cases an error also counts."""
        if success:
            self.assertEqual(Lexer(source).lex(), expected)
            return
        try:
            tokens = Lexer(source).lex()
        except LexError:
            return
        self.assertNotEqual(tokens, expected)

    def _check_single(self, token_type, cases):
        for name, source, success in cases:
            with self.subTest(name, source=source):
                self._check(source, [Token(token_type, source)], success)

    def test_whitespace(self):
        for source in [" ", "\n", "    \n    ", "\t\r\n", "\b", ""]:
            with self.subTest(source=source):
                self._check(source, [])

    def test_comment(self):
        for source in ["//", "//comment", "// first\n// second", "//\r\n  "]:
            with self.subTest(source=source):
                self._check(source, [])

    def test_identifier(self):
        self._check_single(TokenType.IDENTIFIER, [
            ("Alphabetic", "getName", True),
            ("Alphanumeric", "thelegend27", True),
            ("Underscore", "_private", True),
            ("Hyphenated", "kebab-case", True),
            ("Trailing Hyphen", "trailing-", True),
            ("Leading Hyphen", "-five", False),
            ("Leading Digit", "1fish2fish", False),
        ])

    def test_integer(self):
        self._check_single(TokenType.INTEGER, [
            ("Single Digit", "1", True),
            ("Multiple Digits", "123", True),
            ("Negative", "-5", True),
            ("Positive", "+5", True),
            ("Exponent", "1e10", True),
            ("Signed Exponent", "1e-3", True),
            ("Missing Exponent Digits", "1e", False),
            ("Missing Signed Exponent Digits", "1e-", False),
        ])

    def test_decimal(self):
        self._check_single(TokenType.DECIMAL, [
            ("Decimal", "1.0", True),
            ("Multiple Digits", "123.456", True),
            ("Negative", "-1.5", True),
            ("Exponent", "1.0e10", True),
            ("Trailing Decimal", "1.", False),
            ("Leading Decimal", ".5", False),
        ])

    def test_character(self):
        self._check_single(TokenType.CHARACTER, [
            ("Alphabetic", "'c'", True),
            ("Newline Escape", "'\\n'", True),
            ("Quote Escape", "'\\''", True),
            ("Backspace Escape", "'\\b'", True),
            ("Empty", "''", False),
            ("Unterminated", "'u", False),
            ("Multiple", "'abc'", False),
        ])

    def test_string(self):
        self._check_single(TokenType.STRING, [
            ("Empty", '""', True),
            ("Alphabetic", '"string"', True),
            ("Newline Escape", '"Hello,\\nWorld"', True),
            ("Quote Escape", '"say \\"hi\\""', True),
            ("Symbols", '"!@#$%^&*()"', True),
            ("Invalid Escape", '"invalid\\escape"', False),
            ("Unterminated", '"unterminated', False),
            ("Newline", '"first\nsecond"', False),
        ])

    def test_operator(self):
        self._check_single(TokenType.OPERATOR, [
            ("Character", "(", True),
            ("Semicolon", ";", True),
            ("Comparison", "<=", True),
            ("Greater Equal", ">=", True),
            ("Not Equal", "!=", True),
            ("Equal", "==", True),
            ("Plus Equal", "+=", True),
            ("Dot Equal", ".=", True),
            ("Ampersand", "&", True),
            ("Minus Equal", "-=", False),
            ("Whitespace", " ", False),
            ("Double Quote", '"', False),
        ])


class TestLexerInteraction(unittest.TestCase):
    """Test cases for inputs spanning several tokens."""

    def test_interaction(self):
        cases = [
            ("Whitespace", "first second", [identifier("first"), identifier("second")]),
            ("Identifier Leading Hyphen", "-five", [operator("-"), identifier("five")]),
            ("Identifier Leading Digit", "1fish2fish", [integer("1"), identifier("fish2fish")]),
            ("Integer Missing Exponent Digits", "1e", [integer("1"), identifier("e")]),
            ("Integer Missing Signed Exponent Digits", "1e-", [integer("1"), identifier("e-")]),
            ("Decimal Missing Decimal Digits", "1.", [integer("1"), operator(".")]),
            ("Operator Multiple Operators", "<=>", [operator("<="), operator(">")]),
            ("Signed Number", "1+2", [integer("1"), integer("+2")]),
            ("Hyphenated Identifier", "a-b", [identifier("a-b")]),
            ("Property", "x.y", [identifier("x"), operator("."), identifier("y")]),
            ("Two Decimals", "1.5.2", [decimal("1.5"), operator("."), integer("2")]),
            ("Comment After Token", "x // note\ny", [identifier("x"), identifier("y")]),
        ]
        for name, source, expected in cases:
            with self.subTest(name, source=source):
                self.assertEqual(Lexer(source).lex(), expected)

    def test_program(self):
        cases = [
            ("Variable", "LET x = 5;", [
                identifier("LET"),
                identifier("x"),
                operator("="),
                integer("5"),
                operator(";"),
            ]),
            ("Print Function", 'print("Hello, World!");', [
                identifier("print"),
                operator("("),
                Token(TokenType.STRING, '"Hello, World!"'),
                operator(")"),
                operator(";"),
            ]),
            ("Object", "OBJECT DO LET c = 'x'; END", [
                identifier("OBJECT"),
                identifier("DO"),
                identifier("LET"),
                identifier("c"),
                operator("="),
                Token(TokenType.CHARACTER, "'x'"),
                operator(";"),
                identifier("END"),
            ]),
        ]
        for name, source, expected in cases:
            with self.subTest(name):
                self.assertEqual(Lexer(source).lex(), expected)

    def test_token_offsets(self):
        """Tokens record where they start, without affecting equality."""
        tokens = Lexer("LET x\n  = 5;").lex()
        self.assertEqual([token.offset for token in tokens], [0, 4, 8, 10, 11])
        self.assertEqual(tokens[0], Token(TokenType.IDENTIFIER, "LET", offset=99))

    def test_lex_is_repeatable(self):
        lexer = Lexer("first second")
        self.assertEqual(lexer.lex(), lexer.lex())


class TestLexerErrors(unittest.TestCase):
    """Test cases for error reporting."""

    def test_exception(self):
        cases = [
            ("Character Unterminated", "'u", 2),
            ("Character Multiple", "'abc'", 2),
            ("Character Empty", "''", 1),
            ("Character Invalid Escape", "'\\q'", 2),
            ("String Invalid Escape", '"invalid\\escape"', 9),
            ("String Unterminated", '"unterminated', 13),
            ("String Newline", '"a\nb"', 2),
            ("String Trailing Backslash", '"\\', 2),
            ("Index Counts Code Points", '"\U0001F600\\q"', 3),
        ]
        for name, source, index in cases:
            with self.subTest(name, source=source):
                with self.assertRaises(LexError) as context:
                    Lexer(source).lex()
                self.assertEqual(context.exception.index, index)

    def test_error_codes(self):
        with self.assertRaises(LexError) as context:
            Lexer('"invalid\\escape"').lex()
        self.assertEqual(context.exception.diagnostic.code, "L004")

        with self.assertRaises(LexError) as context:
            Lexer("'u").lex()
        self.assertEqual(context.exception.diagnostic.code, "L003")

        with self.assertRaises(LexError) as context:
            Lexer("'\\q'").lex()
        self.assertIn(context.exception.diagnostic.code, ERROR_CODES)

    def test_control_character_is_operator(self):
        self.assertEqual(Lexer("x \x00").lex(), [identifier("x"), operator("\x00")])

    def test_error_location(self):
        """tokenize_string converts the index into a line and column."""
        with self.assertRaises(LexError) as context:
            tokenize_string("LET x;\n'ab'", "example.do")
        error = context.exception
        self.assertEqual(error.index, 9)
        self.assertEqual((error.location.line, error.location.column), (2, 3))
        self.assertIn("example.do:2:3", str(error.diagnostic))

    def test_tokenize_file(self):
        """Errors from a file are located with its path."""
        with tempfile.TemporaryDirectory() as directory:
            path = os.path.join(directory, "program.do")
            with open(path, "w", encoding="utf-8") as f:
                f.write("LET x = 5;\n")
            self.assertEqual(tokenize_file(path), Lexer("LET x = 5;").lex())

            with open(path, "w", encoding="utf-8") as f:
                f.write("LET x;\nLET s = \"bad\\q\";\n")
            with self.assertRaises(LexError) as context:
                tokenize_file(path)
        error = context.exception
        self.assertEqual((error.location.line, error.location.column), (2, 14))
        self.assertEqual(error.location.filename, path)
        self.assertIn(f"{path}:2:14", str(error.diagnostic))


class TestCharStream(unittest.TestCase):
    """Test cases for the character cursor."""

    def test_peek_does_not_consume(self):
        chars = CharStream("ab")
        self.assertTrue(chars.peek("a", "b"))
        self.assertFalse(chars.peek("a", "b", "c"))
        self.assertEqual(chars.index, 0)

    def test_match_and_cut(self):
        chars = CharStream("abc def")
        self.assertTrue(chars.match("[a-z]"))
        self.assertTrue(chars.match("[a-z]", "[a-z]"))
        self.assertFalse(chars.match("[a-z]"))
        self.assertEqual(chars.cut(), "abc")
        self.assertEqual(chars.cut(), "")
        self.assertTrue(chars.match(" "))
        chars.cut()
        self.assertTrue(chars.match("d", "e", "f"))
        self.assertEqual(chars.cut(), "def")
        self.assertFalse(chars.has(0))


if __name__ == "__main__":
    unittest.main()
