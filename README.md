# alex

`alex` compiles a very small imperative language into x86-64 assembly for
FASM (ELF64 executable output).

## The language

A program is a sequence of instructions separated by whitespace:

```
n = input
i = 0
:loop
if n <= i then goto :done
output i
i = i + 1
goto :loop
:done
```

- `name = term`, `name = term + term`, `name = term - term`, `name = term * term`
- `if term < term then <instruction>`, and the same with `<=` and `==`
- `goto :label` and `:label` to mark a place
- `output term` prints an unsigned integer followed by a newline
- a term is a non-negative integer literal, a variable, or `input`, which
  reads one line from standard input and parses it as an unsigned integer

Variable and label names are made of letters and underscores; digits are not
part of a name. The words `input`, `output`, `goto`, `if` and `then` are
reserved. A variable must be assigned before it is read, and every variable
gets its own 8-byte stack slot in the order it is first assigned.

## Usage

Install the package, then compile a source file. The assembly is written to
standard output, and the list of variables found is written to standard error
as `Scope: [a b ...]`:

```
alex program.txt > program.asm
```

With no file argument, or a file that cannot be read, `alex` prints a message
and exits with status 1. A syntax error or a use of an undefined variable is
reported on standard error as `error: ...` with exit status 2.

The generated assembly includes `src/lib.asm`, which must provide the
`read`/`write` macros and the `parse_uint`/`write_uint` routines.

## From Python

```python
from alex.cli import compile_source

asm = compile_source("x = 2 * 3\noutput x\n")
```

`compile_source` accepts `str` or `bytes` and returns the assembly as a
string. The lower layers are available as well:

- `alex.lexer.tokenize(source)` returns a list of `Token`s ending with a
  `TokenKind.END` token; `alex.lexer.Lexer` yields the same tokens one at a
  time through `next_token()` or iteration.
- `alex.parser.parse(tokens)` returns a `Program` whose `instrs` hold the
  syntax tree (`InstrAssign`, `InstrIf`, `InstrGoto`, `InstrOutput`,
  `InstrLabel`, with `Expr*`, `Rel*` and `Term*` nodes beneath them).
  `alex.parser.Parser` exposes the individual `parse_*` methods.
- `alex.emit.build_scope(program)` returns the `Scope` of assigned variables;
  `alex.emit.emit_program(program)` returns the assembly text and prints the
  scope line to standard error.

Syntax errors raise `alex.parser.ParseError`, and use of an undefined variable
raises `alex.emit.ScopeError`.

## What it does not do

`alex` only produces assembly text. It does not assemble or link it, does not
run the program, and does not ship the `src/lib.asm` support file that the
output includes; FASM and that file are needed to build an executable. Labels
are not checked: a `goto` to a label that is never defined is left for the
assembler to reject.

## Tests

```
pip install -e ".[test]"
pytest
```