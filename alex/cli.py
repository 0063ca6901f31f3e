"""Command-line entry point: compile an alex source file to assembly."""

from __future__ import annotations

import sys
from pathlib import Path

from alex.emit import ScopeError, emit_program
from alex.lexer import tokenize
from alex.parser import ParseError, parse


def compile_source(source: bytes | str) -> str:
    """Compile alex source text to FASM assembly."""
    return emit_program(parse(tokenize(source)))


def main(argv: list[str] | None = None) -> int:
    """Compile the file named by the first argument, writing assembly to stdout."""
    args = sys.argv[1:] if argv is None else list(argv)
    if not args:
        print("must provide file to compile as first argument")
        return 1
    try:
        source = Path(args[0]).read_bytes()
    except OSError as err:
        print(f"error reading file: {err}")
        return 1
    try:
        assembly = compile_source(source)
    except (ParseError, ScopeError) as err:
        print(f"error: {err}", file=sys.stderr)
        return 2
    sys.stdout.write(assembly)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())