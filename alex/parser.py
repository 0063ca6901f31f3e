"""Syntax tree and recursive-descent parser for the alex language."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from alex.lexer import Token, TokenKind


class ParseError(Exception):
    """Raised when the token stream does not match the grammar."""


# Terms


@dataclass(frozen=True)
class TermInput:
    """A number read from standard input."""

    def __str__(self) -> str:
        return "term(input)"


@dataclass(frozen=True)
class TermInt:
    """An integer literal, kept as its source text."""

    val: str

    def __str__(self) -> str:
        return f"term(int({self.val}))"


@dataclass(frozen=True)
class TermIdent:
    """A reference to a variable."""

    val: str

    def __str__(self) -> str:
        return f"term(ident({self.val}))"


Term = Union[TermInput, TermInt, TermIdent]


# Expressions


@dataclass(frozen=True)
class ExprSingle:
    """An expression made of a single term."""

    term: Term

    def __str__(self) -> str:
        return f"expr(single({self.term}))"


@dataclass(frozen=True)
class ExprPlus:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"expr(plus({self.lhs} + {self.rhs}))"


@dataclass(frozen=True)
class ExprMinus:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"expr(minus({self.lhs} - {self.rhs}))"


@dataclass(frozen=True)
class ExprMul:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"expr(mul({self.lhs} * {self.rhs}))"


Expr = Union[ExprSingle, ExprPlus, ExprMinus, ExprMul]


# Relations


@dataclass(frozen=True)
class RelLessThan:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"rel({self.lhs} < {self.rhs})"


@dataclass(frozen=True)
class RelLessThanEqual:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"rel({self.lhs} <= {self.rhs})"


@dataclass(frozen=True)
class RelEqual:
    lhs: Term
    rhs: Term

    def __str__(self) -> str:
        return f"rel({self.lhs} == {self.rhs})"


Rel = Union[RelLessThan, RelLessThanEqual, RelEqual]


# Instructions


@dataclass(frozen=True)
class InstrAssign:
    ident: str
    expr: Expr

    def __str__(self) -> str:
        return f"assign({self.ident} = {self.expr})"


@dataclass(frozen=True)
class InstrIf:
    rel: Rel
    instr: "Instr"

    def __str__(self) -> str:
        return f"if({self.rel} -> {self.instr})"


@dataclass(frozen=True)
class InstrGoto:
    label: str

    def __str__(self) -> str:
        return f"goto({self.label})"


@dataclass(frozen=True)
class InstrOutput:
    term: Term

    def __str__(self) -> str:
        return f"output({self.term})"


@dataclass(frozen=True)
class InstrLabel:
    name: str

    def __str__(self) -> str:
        return f"label({self.name})"


Instr = Union[InstrAssign, InstrIf, InstrGoto, InstrOutput, InstrLabel]


@dataclass
class Program:
    """A whole program: its instructions in source order."""

    instrs: list[Instr] = field(default_factory=list)


_EXPR_OPS = {
    TokenKind.PLUS: ExprPlus,
    TokenKind.MINUS: ExprMinus,
    TokenKind.MUL: ExprMul,
}

_REL_OPS = {
    TokenKind.LESS_THAN: RelLessThan,
    TokenKind.LESS_THAN_EQUAL: RelLessThanEqual,
    TokenKind.DOUBLE_EQUAL: RelEqual,
}


class Parser:
    """Builds a syntax tree from a token sequence ending in END."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = list(tokens)
        self._index = 0

    def _current(self) -> Token:
        try:
            return self._tokens[self._index]
        except IndexError:
            raise ParseError("unexpected end of token stream") from None

    def _advance(self) -> None:
        self._index += 1

    def _expect(self, kind: TokenKind) -> Token:
        token = self._current()
        if token.kind is not kind:
            raise ParseError(f"expected {kind}, found: {token.kind}")
        self._advance()
        return token

    def parse_program(self) -> Program:
        """Parse instructions until END; a program holds at least one."""
        program = Program()
        while True:
            program.instrs.append(self.parse_instr())
            if self._current().kind is TokenKind.END:
                return program

    def parse_instr(self) -> Instr:
        kind = self._current().kind
        handlers = {
            TokenKind.IDENT: self.parse_assign,
            TokenKind.IF: self.parse_if,
            TokenKind.GOTO: self.parse_goto,
            TokenKind.OUTPUT: self.parse_output,
            TokenKind.LABEL: self.parse_label,
        }
        handler = handlers.get(kind)
        if handler is None:
            raise ParseError(f"unexpected token kind: {kind}")
        return handler()

    def parse_label(self) -> InstrLabel:
        return InstrLabel(self._expect(TokenKind.LABEL).val)

    def parse_output(self) -> InstrOutput:
        self._expect(TokenKind.OUTPUT)
        return InstrOutput(self.parse_term())

    def parse_goto(self) -> InstrGoto:
        self._expect(TokenKind.GOTO)
        return InstrGoto(self._expect(TokenKind.LABEL).val)

    def parse_if(self) -> InstrIf:
        self._expect(TokenKind.IF)
        rel = self.parse_rel()
        self._expect(TokenKind.THEN)
        return InstrIf(rel, self.parse_instr())

    def parse_rel(self) -> Rel:
        lhs = self.parse_term()
        kind = self._current().kind
        op = _REL_OPS.get(kind)
        if op is None:
            raise ParseError(
                "expected rel token (lessthan, lessthanequal, doubleequal), "
                f"found: {kind}"
            )
        self._advance()
        return op(lhs, self.parse_term())

    def parse_assign(self) -> InstrAssign:
        ident = self._expect(TokenKind.IDENT).val
        self._expect(TokenKind.EQUAL)
        return InstrAssign(ident, self.parse_expr())

    def parse_expr(self) -> Expr:
        lhs = self.parse_term()
        op = _EXPR_OPS.get(self._current().kind)
        if op is None:
            return ExprSingle(lhs)
        self._advance()
        return op(lhs, self.parse_term())

    def parse_term(self) -> Term:
        token = self._current()
        if token.kind is TokenKind.INPUT:
            term: Term = TermInput()
        elif token.kind is TokenKind.INT:
            term = TermInt(token.val)
        elif token.kind is TokenKind.IDENT:
            term = TermIdent(token.val)
        else:
            raise ParseError(
                f"expected term token (input, int, or ident), found: {token.kind}"
            )
        self._advance()
        return term


def parse(tokens: Iterable[Token]) -> Program:
    """Parse a full token sequence into a Program."""
    return Parser(tokens).parse_program()