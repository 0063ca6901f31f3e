"""Assembly generation for alex programs (FASM, x86-64 Linux)."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Iterator

from alex.parser import (
    Expr,
    ExprMinus,
    ExprMul,
    ExprPlus,
    ExprSingle,
    Instr,
    InstrAssign,
    InstrGoto,
    InstrIf,
    InstrLabel,
    InstrOutput,
    Program,
    Rel,
    RelEqual,
    RelLessThan,
    RelLessThanEqual,
    Term,
    TermIdent,
    TermInput,
    TermInt,
)


class ScopeError(Exception):
    """Raised when an identifier is used before it is defined."""


class Scope:
    """Ordered set of variable names; a name's position fixes its stack slot."""

    def __init__(self, idents: Iterable[str] = ()) -> None:
        self.idents: list[str] = list(idents)

    def append(self, ident: str) -> None:
        self.idents.append(ident)

    def __contains__(self, ident: object) -> bool:
        return ident in self.idents

    def __iter__(self) -> Iterator[str]:
        return iter(self.idents)

    def __len__(self) -> int:
        return len(self.idents)

    def find(self, ident: str) -> int:
        """Return the slot index of ident, raising ScopeError if absent."""
        try:
            return self.idents.index(ident)
        except ValueError:
            raise ScopeError(f"cannot find ident in scope: {ident}") from None


def _check_term(term: Term, scope: Scope) -> None:
    if isinstance(term, TermIdent) and term.val not in scope:
        raise ScopeError(f"ident not defined: {term.val}")


def _check_expr(expr: Expr, scope: Scope) -> None:
    if isinstance(expr, ExprSingle):
        _check_term(expr.term, scope)
    else:
        _check_term(expr.lhs, scope)
        _check_term(expr.rhs, scope)


def _scope_instr(instr: Instr, scope: Scope) -> None:
    match instr:
        case InstrAssign(ident=ident, expr=expr):
            _check_expr(expr, scope)
            if ident not in scope:
                scope.append(ident)
        case InstrIf(rel=rel, instr=body):
            _check_term(rel.lhs, scope)
            _check_term(rel.rhs, scope)
            _scope_instr(body, scope)
        case InstrOutput(term=term):
            _check_term(term, scope)


def build_scope(program: Program) -> Scope:
    """Collect assigned names in order, checking every use is defined first."""
    scope = Scope()
    for instr in program.instrs:
        _scope_instr(instr, scope)
    return scope


def _slot(index: int) -> int:
    return index * 8 + 8


_REL_SET = {
    RelLessThan: "setl",
    RelLessThanEqual: "setle",
    RelEqual: "sete",
}

_EXPR_OP = {
    ExprPlus: "add",
    ExprMinus: "sub",
    ExprMul: "imul",
}


class _Emitter:
    def __init__(self, scope: Scope) -> None:
        self.scope = scope
        self.lines: list[str] = []
        self.if_count = 0

    def out(self, line: str) -> None:
        self.lines.append(line)

    def ins(self, text: str) -> None:
        self.lines.append("    " + text)

    def instr(self, instr: Instr) -> None:
        match instr:
            case InstrAssign(ident=ident, expr=expr):
                self.expr(expr)
                index = self.scope.find(ident)
                self.ins(f"mov qword [rbp - {_slot(index)}], rax ; Store in `{ident}`")
            case InstrIf(rel=rel, instr=body):
                self.rel(rel)
                suffix = self.if_count
                self.if_count += 1
                self.ins("test rax, rax")
                self.ins(f"jz .endif{suffix}")
                self.instr(body)
                self.out(f".endif{suffix}:")
            case InstrGoto(label=label):
                self.ins(f"jmp .{label}")
            case InstrOutput(term=term):
                self.term(term)
                self.ins("mov rdi, 1")
                self.ins("mov rsi, rax")
                self.ins("call write_uint")
                self.ins("write 1, newline, 1")
            case InstrLabel(name=name):
                self.out(f".{name}:")

    def binop(self, lhs: Term, rhs: Term) -> None:
        self.term(lhs)
        self.ins("mov rbx, rax")
        self.term(rhs)

    def rel(self, rel: Rel) -> None:
        self.binop(rel.lhs, rel.rhs)
        self.ins("cmp rbx, rax")
        self.ins(f"{_REL_SET[type(rel)]} al")
        self.ins("movzx rax, al")

    def expr(self, expr: Expr) -> None:
        if isinstance(expr, ExprSingle):
            self.term(expr.term)
            return
        self.binop(expr.lhs, expr.rhs)
        self.ins(f"{_EXPR_OP[type(expr)]} rbx, rax")
        self.ins("mov rax, rbx")

    def term(self, term: Term) -> None:
        match term:
            case TermInput():
                self.ins("read 0, line, LINE_MAX")
                self.ins("mov rdi, line")
                self.ins("mov rsi, rax")
                self.ins("call parse_uint")
            case TermInt(val=val):
                self.ins(f"mov rax, {val}")
            case TermIdent(val=val):
                index = self.scope.find(val)
                self.ins(f"mov rax, qword [rbp - {_slot(index)}] ; Load `{val}`")


def emit_program(program: Program) -> str:
    """Return the assembly for program; the scope is reported on stderr."""
    scope = build_scope(program)
    print(f"Scope: [{' '.join(scope.idents)}]", file=sys.stderr)

    frame = len(scope) * 8
    em = _Emitter(scope)
    em.out("format ELF64 executable")
    em.out("LINE_MAX equ 1024")
    em.out("segment readable executable")
    em.out('include "src/lib.asm"')
    em.out("entry _start")
    em.out("_start:")
    em.ins("mov rbp, rsp")
    em.ins(f"sub rsp, {frame}")

    for instr in program.instrs:
        em.instr(instr)

    em.ins(f"add rsp, {frame}")
    em.ins("mov rax, 60")
    em.ins("mov rdi, 0")
    em.ins("syscall")

    em.out("segment readable writeable")
    em.out("newline db 0xa")
    em.out("line rb LINE_MAX")
    return "".join(line + "\n" for line in em.lines)