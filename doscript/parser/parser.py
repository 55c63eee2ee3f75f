"""
doscript Recursive Descent Parser

Each grammar rule has a dedicated ``_parse_*`` method, and references to other
rules are calls to those methods. Operator precedence is encoded by the
cascade of expression rules, loosest first:

    expr           ::= logical_expr
    logical_expr   ::= comparison_expr (('AND' | 'OR') comparison_expr)*
    comparison_expr::= additive_expr (('<' | '<=' | '>' | '>=' | '==' | '!=') additive_expr)*
    additive_expr  ::= multiplicative_expr (('+' | '-') multiplicative_expr)*
    multiplicative_expr ::= secondary_expr (('*' | '/') secondary_expr)*
    secondary_expr ::= primary_expr ('.' identifier ('(' arguments ')')?)*
    primary_expr   ::= literal_expr | group_expr | object_expr | variable_or_function_expr

Every binary level folds to the left, so ``a - b - c`` is ``(a - b) - c``.

"""

import logging
import os
from decimal import Decimal
from typing import Callable, List, Optional, Sequence, Union

from ..lexer.tokens import Token, TokenType
from ..lexer.lexer import tokenize_string, tokenize_file
from .ast_nodes import (
    ASTNode, Source, Stmt, Expr,
    Let, Def, If, For, Return, Expression, Assignment,
    Literal, Group, Binary, Variable, Property, Function, Method, ObjectExpr,
)
from .errors import (
    ParseError, create_expected_error, create_missing_terminator_error,
    create_invalid_expression_error, create_trailing_input_error, create_nesting_error
)
from .token_stream import TokenStream

logger = logging.getLogger(__name__)


RULES = ("source", "stmt", "expr")

LOGICAL_OPERATORS = ("AND", "OR")
COMPARISON_OPERATORS = ("<", "<=", ">", ">=", "==", "!=")
ADDITIVE_OPERATORS = ("+", "-")
MULTIPLICATIVE_OPERATORS = ("*", "/")

LITERAL_KEYWORDS = {
    "NIL": None,
    "TRUE": True,
    "FALSE": False,
}

ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "\\": "\\",
    "'": "'",
    '"': '"',
}


class Parser:
    """
    doscript recursive descent parser.

    Parses one grammar rule over a token list. The first syntax error aborts
    the parse with a ``ParseError``; there is no recovery and no partial tree.
    """

    def __init__(self, tokens: List[Token]):
        """
        Initialize parser with a list of tokens.

        Args:
            tokens: List of tokens from the lexer
        """
        self.token_list = tokens
        self.tokens = TokenStream(tokens)

    def parse(self, rule: str = "source") -> ASTNode:
        """
        Parse the tokens as ``rule`` and require that nothing is left over.

        Args:
            rule: "source" for a whole program, "stmt" for one statement or
                "expr" for one expression

        Returns:
            ``Source``, a ``Stmt`` or an ``Expr`` depending on ``rule``

        Raises:
            ParseError: On the first syntax error, on trailing tokens, or when
                the input is nested too deeply to parse
            ValueError: If ``rule`` is not a known rule name
        """
        if rule not in RULES:
            raise ValueError(f"Unknown rule {rule!r}, expected one of {', '.join(RULES)}")

        self.tokens = TokenStream(self.token_list)
        try:
            if rule == "source":
                ast = self._parse_source()
            elif rule == "stmt":
                ast = self._parse_stmt()
            else:
                ast = self._parse_expr()
        except RecursionError:
            raise create_nesting_error(self.tokens.get_next()) from None

        if self.tokens.has(0):
            raise create_trailing_input_error(self.tokens.get(0))

        logger.debug("Parsed %s from %d tokens", ast.node_type.value, len(self.token_list))
        return ast

    # ------------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------------

    def _parse_source(self) -> Source:
        statements = []
        while self.tokens.has(0):
            statements.append(self._parse_stmt())
        return Source(statements)

    def _parse_stmt(self) -> Stmt:
        """Parse one statement, dispatching on the leading keyword."""
        if self.tokens.peek("LET"):
            return self._parse_let_stmt()
        elif self.tokens.peek("DEF"):
            return self._parse_def_stmt()
        elif self.tokens.peek("IF"):
            return self._parse_if_stmt()
        elif self.tokens.peek("FOR"):
            return self._parse_for_stmt()
        elif self.tokens.peek("RETURN"):
            return self._parse_return_stmt()
        return self._parse_expression_or_assignment_stmt()

    # let_stmt ::= 'LET' identifier ('=' expr)? ';'
    def _parse_let_stmt(self) -> Let:
        self._expect("LET")
        name = self._expect_identifier("variable name")

        value = None
        if self.tokens.match("="):
            value = self._parse_expr()

        self._expect_terminator(";")
        return Let(name, value)

    # def_stmt ::= 'DEF' identifier '(' (identifier (',' identifier)*)? ')' 'DO' stmt* 'END'
    def _parse_def_stmt(self) -> Def:
        self._expect("DEF")
        name = self._expect_identifier("function name")
        self._expect("(")

        parameters = []
        if not self.tokens.peek(")"):
            parameters.append(self._expect_identifier("parameter name"))
            while self.tokens.match(","):
                parameters.append(self._expect_identifier("parameter name"))

        self._expect_terminator(")")
        self._expect("DO")
        body = self._parse_block("END")
        self._expect_terminator("END")
        return Def(name, parameters, body)

    # if_stmt ::= 'IF' expr 'DO' stmt* ('ELSE' stmt*)? 'END'
    def _parse_if_stmt(self) -> If:
        self._expect("IF")
        condition = self._parse_expr()
        self._expect("DO")
        then_body = self._parse_block("ELSE", "END")

        else_body: List[Stmt] = []
        if self.tokens.match("ELSE"):
            else_body = self._parse_block("END")

        self._expect_terminator("END")
        return If(condition, then_body, else_body)

    # for_stmt ::= 'FOR' identifier 'IN' expr 'DO' stmt* 'END'
    def _parse_for_stmt(self) -> For:
        self._expect("FOR")
        name = self._expect_identifier("loop variable")
        self._expect("IN")
        iterable = self._parse_expr()
        self._expect("DO")
        body = self._parse_block("END")
        self._expect_terminator("END")
        return For(name, iterable, body)

    # return_stmt ::= 'RETURN' expr? ';' | 'RETURN' 'IF' expr ';'
    def _parse_return_stmt(self) -> Stmt:
        self._expect("RETURN")

        # RETURN IF cond; is a conditional early return with no value
        if self.tokens.match("IF"):
            condition = self._parse_expr()
            self._expect_terminator(";")
            return If(condition, [Return(None)], [])

        value = None
        if not self.tokens.peek(";"):
            value = self._parse_expr()

        self._expect_terminator(";")
        return Return(value)

    # expression_or_assignment_stmt ::= expr ('=' expr)? ';'
    def _parse_expression_or_assignment_stmt(self) -> Stmt:
        expression = self._parse_expr()

        if self.tokens.match("="):
            value = self._parse_expr()
            self._expect_terminator(";")
            return Assignment(expression, value)

        self._expect_terminator(";")
        return Expression(expression)

    def _parse_block(self, *terminators: str) -> List[Stmt]:
        """Parse statements up to (not including) one of ``terminators``."""
        statements = []
        while self.tokens.has(0) and not any(self.tokens.peek(t) for t in terminators):
            statements.append(self._parse_stmt())
        return statements

    # ------------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------------

    def _parse_expr(self) -> Expr:
        return self._parse_logical_expr()

    def _parse_logical_expr(self) -> Expr:
        return self._parse_binary(LOGICAL_OPERATORS, self._parse_comparison_expr)

    def _parse_comparison_expr(self) -> Expr:
        return self._parse_binary(COMPARISON_OPERATORS, self._parse_additive_expr)

    def _parse_additive_expr(self) -> Expr:
        return self._parse_binary(ADDITIVE_OPERATORS, self._parse_multiplicative_expr)

    def _parse_multiplicative_expr(self) -> Expr:
        return self._parse_binary(MULTIPLICATIVE_OPERATORS, self._parse_secondary_expr)

    def _parse_binary(self, operators: Sequence[str], parse_operand: Callable[[], Expr]) -> Expr:
        """Parse one left-associative precedence level."""
        left = parse_operand()
        while True:
            operator = self._match_any(operators)
            if operator is None:
                return left
            right = parse_operand()
            left = Binary(operator, left, right)

    def _parse_secondary_expr(self) -> Expr:
        expression = self._parse_primary_expr()

        while self.tokens.match("."):
            name = self._expect_identifier("property or method name")
            if self.tokens.match("("):
                expression = Method(expression, name, self._parse_arguments())
            else:
                expression = Property(expression, name)

        return expression

    def _parse_primary_expr(self) -> Expr:
        token = self.tokens.get_next()
        if token is None:
            raise create_invalid_expression_error(None)

        if token.is_literal or token.literal in LITERAL_KEYWORDS:
            return self._parse_literal_expr()
        elif self.tokens.peek("("):
            return self._parse_group_expr()
        elif self.tokens.peek("OBJECT"):
            return self._parse_object_expr()
        elif self.tokens.peek(TokenType.IDENTIFIER):
            return self._parse_variable_or_function_expr()

        raise create_invalid_expression_error(token)

    # literal_expr ::= 'NIL' | 'TRUE' | 'FALSE' | integer | decimal | character | string
    def _parse_literal_expr(self) -> Expr:
        token = self.tokens.get(0)
        self.tokens.match(token.type)
        return literal_expr(token)

    # group_expr ::= '(' expr ')'
    def _parse_group_expr(self) -> Group:
        self._expect("(")
        expression = self._parse_expr()
        self._expect_terminator(")")
        return Group(expression)

    # object_expr ::= 'OBJECT' identifier? 'DO' let_stmt* def_stmt* 'END'
    def _parse_object_expr(self) -> ObjectExpr:
        self._expect("OBJECT")

        name = None
        if not self.tokens.peek("DO") and self.tokens.match(TokenType.IDENTIFIER):
            name = self.tokens.get(-1).literal
        self._expect("DO")

        fields = []
        while self.tokens.peek("LET"):
            fields.append(self._parse_let_stmt())

        methods = []
        while self.tokens.peek("DEF"):
            methods.append(self._parse_def_stmt())

        self._expect_terminator("END")
        return ObjectExpr(name, fields, methods)

    # variable_or_function_expr ::= identifier ('(' (expr (',' expr)*)? ')')?
    def _parse_variable_or_function_expr(self) -> Expr:
        name = self._expect_identifier("identifier")
        if self.tokens.match("("):
            return Function(name, self._parse_arguments())
        return Variable(name)

    def _parse_arguments(self) -> List[Expr]:
        """Parse ``(expr (',' expr)*)? ')'``; the ``(`` is already consumed."""
        arguments = []
        if not self.tokens.peek(")"):
            arguments.append(self._parse_expr())
            while self.tokens.match(","):
                arguments.append(self._parse_expr())

        self._expect_terminator(")")
        return arguments

    # ------------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------------

    def _match_any(self, literals: Sequence[str]) -> Optional[str]:
        """Consume the next token if its literal is one of ``literals``."""
        for literal in literals:
            if self.tokens.match(literal):
                return literal
        return None

    def _expect(self, literal: str) -> Token:
        if not self.tokens.match(literal):
            raise create_expected_error(f"'{literal}'", self.tokens.get_next())
        return self.tokens.get(-1)

    def _expect_identifier(self, description: str) -> str:
        if not self.tokens.match(TokenType.IDENTIFIER):
            raise create_expected_error(description, self.tokens.get_next())
        return self.tokens.get(-1).literal

    def _expect_terminator(self, terminator: str):
        if not self.tokens.match(terminator):
            raise create_missing_terminator_error(terminator, self.tokens.get_next())


def literal_expr(token: Token) -> Expr:
    """
    Build the expression for a literal token.

    Values are built here rather than in the lexer, so tokens keep their raw
    text. Identifiers other than NIL/TRUE/FALSE become variables.
    """
    text = token.literal

    if token.type == TokenType.IDENTIFIER:
        if text in LITERAL_KEYWORDS:
            return Literal(LITERAL_KEYWORDS[text])
        return Variable(text)
    elif token.type == TokenType.INTEGER:
        # The lexer keeps exponent forms such as 1e10 as integer tokens
        if "e" in text:
            return Literal(Decimal(text), "decimal")
        # int(str) is capped by sys.get_int_max_str_digits(); Decimal is not
        return Literal(int(Decimal(text)), "integer")
    elif token.type == TokenType.DECIMAL:
        return Literal(Decimal(text), "decimal")
    elif token.type == TokenType.CHARACTER:
        body = text[1:-1]
        if body.startswith("\\"):
            return Literal(ESCAPES.get(body[1], body[1]), "character")
        return Literal(body, "character")
    elif token.type == TokenType.STRING:
        return Literal(unescape(text[1:-1]), "string")

    raise ParseError("Expected a literal expression.", token)


def unescape(text: str) -> str:
    """Resolve backslash escapes; an unknown escape yields the escaped character."""
    result = []
    i = 0
    while i < len(text):
        c = text[i]
        if c == "\\" and i < len(text) - 1:
            i += 1
            result.append(ESCAPES.get(text[i], text[i]))
        else:
            result.append(c)
        i += 1
    return "".join(result)


def parse_string(source: str, rule: str = "source", filename: str = "<string>") -> ASTNode:
    """
    Convenience function to lex and parse a source string.

    Args:
        source: Source code string
        rule: Grammar rule to parse ("source", "stmt" or "expr")
        filename: Filename for error reporting

    Returns:
        The AST for ``rule``

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
    """
    tokens = tokenize_string(source, filename)
    return Parser(tokens).parse(rule)


def parse_file(path: Union[str, os.PathLike], rule: str = "source") -> ASTNode:
    """
    Tokenize the file at ``path`` with ``tokenize_file`` and parse it as ``rule``.

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
        OSError: If the file cannot be read
    """
    return Parser(tokenize_file(path)).parse(rule)
