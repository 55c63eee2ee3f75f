"""
Test suite for the doscript command-line driver.

"""

import io
import unittest
import sys
import os

from click.testing import CliRunner

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

from doscript import __version__
from doscript.cli import main, format_tokens, read_input, evaluate, ReplConfig
from doscript.lexer import Lexer, LexError


class TestCommands(unittest.TestCase):
    """Test cases for the lex and parse commands."""

    def setUp(self):
        self.runner = CliRunner()

    def test_lex(self):
        result = self.runner.invoke(main, ["lex", "-"], input="LET x = 5;")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Tokens[size=5]:", result.output)
        self.assertIn(" - IDENTIFIER('LET')", result.output)
        self.assertIn(" - INTEGER('5')", result.output)

    def test_lex_error(self):
        result = self.runner.invoke(main, ["lex"], input="LET x;\n'ab'")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("LexError", result.output)
        self.assertIn(":2:3 (index 9)", result.output)

    def test_parse_file(self):
        with self.runner.isolated_filesystem():
            with open("hello.do", "w", encoding="utf-8") as f:
                f.write('DEF main() DO\n    print("Hello, World!");\nEND\n')
            result = self.runner.invoke(main, ["parse", "hello.do"])
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Def main()", result.output)
        self.assertIn("Literal string 'Hello, World!'", result.output)

    def test_parse_rule(self):
        result = self.runner.invoke(main, ["parse", "--rule", "expr", "-"], input="a - b - c")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(result.output.startswith("Binary -\n    Binary -"))

    def test_parse_error(self):
        result = self.runner.invoke(main, ["parse", "-"], input="LET x = 5")
        self.assertEqual(result.exit_code, 1)
        self.assertIn("ParseError", result.output)
        self.assertIn("ERROR[P003]", result.output)

    def test_unknown_rule(self):
        result = self.runner.invoke(main, ["parse", "--rule", "program", "-"], input="x")
        self.assertEqual(result.exit_code, 2)

    def test_version(self):
        result = self.runner.invoke(main, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn(__version__, result.output)


class TestRepl(unittest.TestCase):
    """Test cases for the interactive loop."""

    def setUp(self):
        self.runner = CliRunner()

    def test_parser_mode(self):
        result = self.runner.invoke(main, ["repl"], input="LET x = 5;\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Let x", result.output)
        self.assertIn("Literal integer 5", result.output)

    def test_lexer_mode(self):
        result = self.runner.invoke(main, ["repl", "--mode", "lexer"], input="<=>\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("OPERATOR('<=')", result.output)
        self.assertIn("OPERATOR('>')", result.output)

    def test_multiline_input(self):
        source = "\nDEF f() DO\n    RETURN 1;\nEND\n\n"
        result = self.runner.invoke(main, ["repl"], input=source)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Multiline input - enter empty line to submit:", result.output)
        self.assertIn("Def f()", result.output)

    def test_errors_do_not_stop_the_loop(self):
        result = self.runner.invoke(main, ["repl"], input="LET\n'ab'\nLET y;\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("ParseError: Expected variable name, found end of input", result.output)
        self.assertIn("LexError", result.output)
        self.assertIn("Let y", result.output)

    def test_deep_nesting_does_not_stop_the_loop(self):
        source = "(" * 5000 + "x" + ")" * 5000 + "\nLET y;\n"
        result = self.runner.invoke(main, ["repl", "--rule", "expr"], input=source)
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("ParseError: Nesting too deep", result.output)
        self.assertIn("ParseError: Expected end of input", result.output)

    def test_expression_rule(self):
        result = self.runner.invoke(main, ["repl", "--rule", "expr"], input="f(x)\n")
        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Function f", result.output)


class TestHelpers(unittest.TestCase):
    """Test cases for the REPL building blocks."""

    def test_format_tokens(self):
        self.assertEqual(format_tokens([]), "Tokens[size=0]")
        self.assertEqual(
            format_tokens(Lexer("x;").lex()),
            "Tokens[size=2]:\n - IDENTIFIER('x')\n - OPERATOR(';')",
        )

    def test_read_input(self):
        stream = io.StringIO("first\n\nsecond\nthird\n\n")
        self.assertEqual(read_input(stream), "first")
        self.assertEqual(read_input(stream), "second\nthird\n")
        self.assertIsNone(read_input(stream))

    def test_evaluate(self):
        self.assertEqual(evaluate("x", ReplConfig(rule="expr")), "Variable x")
        with self.assertRaises(LexError):
            evaluate("'ab'", ReplConfig(mode="lexer"))


if __name__ == "__main__":
    unittest.main()
