"""
Command-line driver for the doscript front end.

    doscript lex program.do          # print the tokens
    doscript parse program.do        # print the AST
    doscript parse --rule expr -     # parse one expression from stdin
    doscript repl --mode parser      # interactive loop

The REPL reads one line at a time. A non-empty line is a complete program; an
empty line starts multi-line input, which ends at the next empty line. Lex and
parse errors are reported and the loop carries on.

"""

import logging
from dataclasses import dataclass
from typing import List, Optional, TextIO

import click
from rich.console import Console
from rich.text import Text

from . import __version__
from .lexer import Lexer, Token, LexError
from .parser import Parser, ParseError, format_ast
from .parser.parser import RULES

logger = logging.getLogger(__name__)

MODES = ("lexer", "parser")


@dataclass
class ReplConfig:
    """Settings for one REPL session, taken from the command line."""
    mode: str = "parser"
    rule: str = "source"
    prompt: str = "> "


def format_tokens(tokens: List[Token]) -> str:
    lines = [f"Tokens[size={len(tokens)}]" + (":" if tokens else "")]
    lines.extend(f" - {token}" for token in tokens)
    return "\n".join(lines)


def read_input(stream: TextIO) -> Optional[str]:
    """
    Read one REPL submission from ``stream``.

    Returns None at end of input.
    """
    line = stream.readline()
    if not line:
        return None
    line = line.rstrip("\r\n")
    if line:
        return line

    click.echo("Multiline input - enter empty line to submit:")
    lines = []
    while True:
        line = stream.readline()
        if not line or not line.rstrip("\r\n"):
            break
        lines.append(line.rstrip("\r\n") + "\n")
    return "".join(lines)


def evaluate(source: str, config: ReplConfig) -> str:
    """
    Lex (and, in parser mode, parse) ``source`` and render the result.

    Raises:
        LexError: If lexing fails
        ParseError: If parsing fails
    """
    tokens = Lexer(source).lex()
    if config.mode == "lexer":
        return format_tokens(tokens)
    return format_ast(Parser(tokens).parse(config.rule))


def _error_text(error: Exception) -> Text:
    return Text.assemble((type(error).__name__, "bold red"), ": ", str(error))


def _read_source(file: TextIO) -> str:
    source = file.read()
    logger.debug("Read %d characters from %s", len(source), getattr(file, "name", "<stream>"))
    return source


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.version_option(__version__, prog_name="doscript")
def main(verbose: bool):
    """doscript lexer and parser."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
def lex(file: TextIO):
    """Print the tokens of FILE (default: stdin)."""
    console = Console(highlight=False, emoji=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
    filename = getattr(file, "name", "<stdin>")
    source = _read_source(file)
    try:
        tokens = Lexer(source, filename).lex()
    except LexError as e:
        e.locate(source, filename)
        err_console.print(_error_text(e))
        err_console.print(str(e.diagnostic), markup=False)
        raise SystemExit(1)
    console.print(format_tokens(tokens), markup=False)


@main.command()
@click.argument("file", type=click.File("r", encoding="utf-8"), default="-")
@click.option("--rule", type=click.Choice(RULES), default="source", show_default=True,
              help="Grammar rule to parse.")
def parse(file: TextIO, rule: str):
    """Print the AST of FILE (default: stdin)."""
    console = Console(highlight=False, emoji=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)
    filename = getattr(file, "name", "<stdin>")
    source = _read_source(file)
    try:
        tokens = Lexer(source, filename).lex()
        ast = Parser(tokens).parse(rule)
    except (LexError, ParseError) as e:
        if isinstance(e, LexError):
            e.locate(source, filename)
        err_console.print(_error_text(e))
        err_console.print(str(e.diagnostic), markup=False)
        raise SystemExit(1)
    console.print(format_ast(ast), markup=False)


@main.command()
@click.option("--mode", type=click.Choice(MODES), default="parser", show_default=True,
              help="Stop after lexing or go on to parse.")
@click.option("--rule", type=click.Choice(RULES), default="source", show_default=True,
              help="Grammar rule to parse in parser mode.")
def repl(mode: str, rule: str):
    """Interactive read/lex/parse/print loop; end of input exits."""
    config = ReplConfig(mode=mode, rule=rule)
    console = Console(highlight=False, emoji=False, soft_wrap=True)
    stream = click.get_text_stream("stdin")

    while True:
        click.echo(config.prompt, nl=False)
        source = read_input(stream)
        if source is None:
            click.echo()
            break
        try:
            console.print(evaluate(source, config), markup=False)
        except (LexError, ParseError) as e:
            console.print(_error_text(e))


if __name__ == "__main__":
    main()
