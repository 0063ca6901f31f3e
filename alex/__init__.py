"""A compiler for a tiny language that emits x86-64 FASM assembly: lexer, parser, emitter and command line."""

__version__ = "0.1.0"
__all__ = ["cli", "emit", "lexer", "parser"]