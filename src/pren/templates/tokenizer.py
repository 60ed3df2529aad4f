"""Template scanner: splits source text into literal and placeholder spans."""

from typing import List

from .types import Token, TokenType
from ..core.exceptions import UnterminatedPlaceholderError, MalformedPlaceholderError

OPEN = "{{"
CLOSE = "}}"
ESCAPE_OPEN = "{{{{"
ESCAPE_CLOSE = "}}}}"


class Scanner:
    """
    Single-pass scanner over template source.

    Produces tokens that cover the whole input in order. Escapes
    ({{{{ text }}}}) are matched before placeholders ({{ body }}), so an
    escape is never read as a placeholder.
    """

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.tokens: List[Token] = []

    def scan(self) -> List[Token]:
        """
        Tokenize the whole source.

        Returns:
            Tokens in source order

        Raises:
            UnterminatedPlaceholderError: An opener has no matching closer
            MalformedPlaceholderError: A placeholder body contains '{{'
        """
        while self.pos < len(self.source):
            start = self.source.find(OPEN, self.pos)
            if start == -1:
                self._emit_literal(len(self.source))
                break

            self._emit_literal(start)
            if self.source.startswith(ESCAPE_OPEN, start):
                self._scan_escape(start)
            else:
                self._scan_placeholder(start)

        return self.tokens

    def _emit_literal(self, end: int) -> None:
        if end > self.pos:
            self.tokens.append(Token(TokenType.LITERAL, self.source[self.pos:end], self.pos))
        self.pos = end

    def _scan_escape(self, start: int) -> None:
        body_start = start + len(ESCAPE_OPEN)
        end = self.source.find(ESCAPE_CLOSE, body_start)
        if end == -1:
            raise UnterminatedPlaceholderError(
                f"Unterminated escape starting at position {start}",
                position=start
            )

        self.tokens.append(Token(TokenType.ESCAPE, self.source[body_start:end], start))
        self.pos = end + len(ESCAPE_CLOSE)

    def _scan_placeholder(self, start: int) -> None:
        body_start = start + len(OPEN)
        end = self.source.find(CLOSE, body_start)
        if end == -1:
            raise UnterminatedPlaceholderError(
                f"Unterminated placeholder starting at position {start}",
                position=start
            )

        body = self.source[body_start:end]
        if OPEN in body:
            raise MalformedPlaceholderError(
                f"Nested '{OPEN}' inside placeholder at position {start}",
                position=start,
                details={"body": body}
            )

        self.tokens.append(Token(TokenType.PLACEHOLDER, body.strip(), start))
        self.pos = end + len(CLOSE)


def tokenize(source: str) -> List[Token]:
    """Convenience function to scan a template source string."""
    return Scanner(source).scan()
