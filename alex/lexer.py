"""Tokenizer for the alex source language."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

EOF = 0x04

# Bytes treated as whitespace, in the Latin-1 reading of the source.
_SPACE = frozenset(b"\t\n\v\f\r \x85\xa0")


class TokenKind(Enum):
    """The kinds of token the lexer produces."""

    IDENT = "ident"
    LABEL = "label"
    INT = "int"
    INPUT = "input"
    OUTPUT = "output"
    GOTO = "goto"
    IF = "if"
    THEN = "then"
    EQUAL = "equal"
    DOUBLE_EQUAL = "doubleequal"
    PLUS = "plus"
    MINUS = "minus"
    MUL = "mul"
    LESS_THAN = "lessthan"
    LESS_THAN_EQUAL = "lessthanequal"
    INVALID = "invalid"
    END = "end"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Token:
    """A token: its kind and, for names, labels and numbers, its text."""

    kind: TokenKind
    val: str = ""

    def __str__(self) -> str:
        return f"{self.kind}({self.val})" if self.val else str(self.kind)


_KEYWORDS = {
    "input": TokenKind.INPUT,
    "output": TokenKind.OUTPUT,
    "goto": TokenKind.GOTO,
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
}

_SINGLE = {
    ord("+"): TokenKind.PLUS,
    ord("-"): TokenKind.MINUS,
    ord("*"): TokenKind.MUL,
}


def _is_word(byte: int) -> bool:
    return byte == ord("_") or chr(byte).isalpha()


def _is_digit(byte: int) -> bool:
    return ord("0") <= byte <= ord("9")


class Lexer:
    """Splits source bytes into tokens, one call of next_token at a time."""

    def __init__(self, source: bytes | str) -> None:
        if isinstance(source, str):
            source = source.encode("utf-8")
        self._buf = bytes(source)
        self._pos = 0
        self._read_pos = 0
        self._ch = EOF
        self._read()

    def _peek(self) -> int:
        if self._read_pos >= len(self._buf):
            return EOF
        return self._buf[self._read_pos]

    def _read(self) -> int:
        self._ch = self._peek()
        self._pos = self._read_pos
        self._read_pos += 1
        return self._ch

    def _take_while(self, pred) -> str:
        start = self._pos
        while pred(self._ch):
            self._read()
        return self._buf[start:self._pos].decode("latin-1")

    def _skip_whitespace(self) -> None:
        while self._ch in _SPACE:
            self._read()

    def next_token(self) -> Token:
        """Return the next token; END once the input is exhausted."""
        self._skip_whitespace()
        ch = self._ch

        if ch == EOF:
            self._read()
            return Token(TokenKind.END)
        if ch == ord("="):
            if self._read() == ord("="):
                self._read()
                return Token(TokenKind.DOUBLE_EQUAL)
            return Token(TokenKind.EQUAL)
        if ch == ord("<"):
            if self._read() == ord("="):
                self._read()
                return Token(TokenKind.LESS_THAN_EQUAL)
            return Token(TokenKind.LESS_THAN)
        if ch in _SINGLE:
            self._read()
            return Token(_SINGLE[ch])
        if ch == ord(":"):
            self._read()
            return Token(TokenKind.LABEL, self._take_while(_is_word))
        if _is_digit(ch):
            return Token(TokenKind.INT, self._take_while(_is_digit))
        if _is_word(ch):
            word = self._take_while(_is_word)
            kind = _KEYWORDS.get(word)
            if kind is not None:
                return Token(kind)
            return Token(TokenKind.IDENT, word)

        self._read()
        return Token(TokenKind.INVALID, bytes([ch]).decode("latin-1"))

    def __iter__(self) -> Iterator[Token]:
        """Yield tokens up to and including the END token."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.END:
                return


def tokenize(source: bytes | str) -> list[Token]:
    """Tokenize the whole source; the list always ends with an END token."""
    return list(Lexer(source))