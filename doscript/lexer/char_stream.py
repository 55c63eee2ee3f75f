"""
Character cursor used by the lexer.

Lexing rules match characters with ``peek``/``match`` and only build a literal
once, with ``cut``. Whitespace and comments are matched the same way and their
cut text is simply dropped.

"""

import re


class CharStream:
    """
    Position-tracking cursor over the source text.

    Each pattern passed to ``peek``/``match`` is a regular expression that must
    match exactly one character, e.g. ``"[0-9]"`` or ``"/"``. ``peek("/", "/")``
    tests the next two characters.
    """

    def __init__(self, source: str):
        self.source = source
        self.index = 0
        self.length = 0

    def has(self, offset: int = 0) -> bool:
        """Check if a character exists at ``index + offset``."""
        return self.index + offset < len(self.source)

    def peek(self, *patterns: str) -> bool:
        """Check the next characters against ``patterns`` without consuming."""
        if not self.has(len(patterns) - 1):
            return False
        for offset, pattern in enumerate(patterns):
            if re.fullmatch(pattern, self.source[self.index + offset], re.DOTALL) is None:
                return False
        return True

    def match(self, *patterns: str) -> bool:
        """Equivalent to ``peek``, but also advances past the matched characters."""
        matched = self.peek(*patterns)
        if matched:
            self.index += len(patterns)
            self.length += len(patterns)
        return matched

    def cut(self) -> str:
        """Return the text matched since the last cut and start a new one."""
        literal = self.source[self.index - self.length:self.index]
        self.length = 0
        return literal

    emit = cut

    @property
    def start(self) -> int:
        """Offset where the text matched since the last cut begins."""
        return self.index - self.length
