"""Scanners for the ntlang family of arithmetic expression languages.

Three scanners are provided, each recognising a slightly larger microsyntax:

* ``scan_symbols``: only the operator symbols ``+ - * /``.
* ``scan_arithmetic``: integer literals, ``+ - * /`` and blanks.
* ``scan``: the ntlang scanner, with integer literals, ``+ -`` and blanks.

Every scanner returns a list of tokens that always ends with an EOT token.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Mapping, Sequence

SCAN_TOKEN_LEN = 32
SCAN_TABLE_LEN = 1024
SCAN_INPUT_LEN = 4096

_WHITESPACE = frozenset(" \t")
_DIGITS = frozenset("0123456789")


class TokenKind(enum.Enum):
    """Kinds of token produced by the scanners."""

    INTLIT = "TK_INTLIT"
    PLUS = "TK_PLUS"
    MINUS = "TK_MINUS"
    MULT = "TK_MULT"
    DIV = "TK_DIV"
    EOT = "TK_EOT"
    ANY = "TK_ANY"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A scanned token: its kind and the text it was scanned from."""

    kind: TokenKind
    value: str = ""

    def __str__(self) -> str:
        return format_token(self)


class ScanError(ValueError):
    """Raised when the input holds a character no token can start with."""

    def __init__(self, char: str | None = None) -> None:
        self.char = char
        if char is None:
            message = "scan error: invalid char"
        else:
            message = f"scan error: invalid char: {char}"
        super().__init__(message)


def format_token(token: Token) -> str:
    """Render a token as ``TK_NAME("value")``."""
    return f'{token.kind.value}("{token.value}")'


def format_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens one per line."""
    return "\n".join(format_token(token) for token in tokens)


_SYMBOLS_ALL: Mapping[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.MULT,
    "/": TokenKind.DIV,
}

_SYMBOLS_NTLANG: Mapping[str, TokenKind] = {
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
}


def _scan(
    text: str,
    symbols: Mapping[str, TokenKind],
    *,
    literals: bool,
    report_char: bool,
) -> list[Token]:
    text = text[:SCAN_INPUT_LEN]
    end = len(text)
    pos = 0
    tokens: list[Token] = []

    while True:
        if literals:
            while pos < end and text[pos] in _WHITESPACE:
                pos += 1
        if pos == end:
            tokens.append(Token(TokenKind.EOT, ""))
            return tokens
        char = text[pos]
        if literals and char in _DIGITS:
            start = pos
            while pos < end and text[pos] in _DIGITS:
                pos += 1
            tokens.append(Token(TokenKind.INTLIT, text[start:pos]))
        elif char in symbols:
            tokens.append(Token(symbols[char], char))
            pos += 1
        else:
            raise ScanError(char if report_char else None)


def scan_symbols(text: str) -> list[Token]:
    """Scan a string made only of the symbols ``+ - * /``."""
    return _scan(text, _SYMBOLS_ALL, literals=False, report_char=False)


def scan_arithmetic(text: str) -> list[Token]:
    """Scan integer literals and ``+ - * /``, skipping blanks and tabs."""
    return _scan(text, _SYMBOLS_ALL, literals=True, report_char=True)


def scan(text: str) -> list[Token]:
    """Scan an ntlang expression: integer literals, ``+`` and ``-``."""
    return _scan(text, _SYMBOLS_NTLANG, literals=True, report_char=True)


class TokenStream:
    """A cursor over a scanned token list, used by the parser."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self.tokens = list(tokens)
        self.position = 0

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def get(self, offset: int = 0) -> Token:
        """Return the token at the current position plus ``offset``."""
        index = self.position + offset
        if not 0 <= index < len(self.tokens):
            raise IndexError(f"token index {index} out of range")
        return self.tokens[index]

    def accept(self, kind: TokenKind) -> bool:
        """Advance past the current token if it is of ``kind``.

        ``TokenKind.ANY`` matches whatever token is current.
        """
        if kind is TokenKind.ANY:
            self.position += 1
            return True
        if self.get(0).kind is kind:
            self.position += 1
            return True
        return False