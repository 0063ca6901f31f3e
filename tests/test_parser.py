import pytest

from alex.lexer import Token, TokenKind, tokenize
from alex.parser import (
    ExprMinus,
    ExprMul,
    ExprPlus,
    ExprSingle,
    InstrAssign,
    InstrGoto,
    InstrIf,
    InstrLabel,
    InstrOutput,
    ParseError,
    Parser,
    Program,
    RelEqual,
    RelLessThan,
    RelLessThanEqual,
    TermIdent,
    TermInput,
    TermInt,
    parse,
)


def parse_text(text):
    return parse(tokenize(text))


def test_single_assignment():
    assert parse_text("x = 1") == Program([InstrAssign("x", ExprSingle(TermInt("1")))])


@pytest.mark.parametrize(
    "op, cls",
    [("+", ExprPlus), ("-", ExprMinus), ("*", ExprMul)],
)
def test_binary_expressions(op, cls):
    program = parse_text(f"y = a {op} 2")
    assert program.instrs == [InstrAssign("y", cls(TermIdent("a"), TermInt("2")))]


@pytest.mark.parametrize(
    "op, cls",
    [("<", RelLessThan), ("<=", RelLessThanEqual), ("==", RelEqual)],
)
def test_relations(op, cls):
    program = parse_text(f"if x {op} 3 then goto :end")
    assert program.instrs == [
        InstrIf(cls(TermIdent("x"), TermInt("3")), InstrGoto("end"))
    ]


def test_nested_if():
    program = parse_text("if a < b then if b < c then output a")
    assert program.instrs == [
        InstrIf(
            RelLessThan(TermIdent("a"), TermIdent("b")),
            InstrIf(
                RelLessThan(TermIdent("b"), TermIdent("c")),
                InstrOutput(TermIdent("a")),
            ),
        )
    ]


def test_output_input_and_label():
    program = parse_text(":top\noutput input\ngoto :top")
    assert program.instrs == [
        InstrLabel("top"),
        InstrOutput(TermInput()),
        InstrGoto("top"),
    ]


def test_instruction_count_matches_lines():
    lines = ["n = input", "i = 0", ":loop", "output i", "i = i + 1",
             "if i < n then goto :loop"]
    assert len(parse_text("\n".join(lines)).instrs) == len(lines)


def test_parse_term_directly():
    assert Parser(tokenize("5")).parse_term() == TermInt("5")


def test_parse_expr_directly_single():
    assert Parser(tokenize("input")).parse_expr() == ExprSingle(TermInput())


def test_parse_rel_directly():
    rel = Parser(tokenize("a == b")).parse_rel()
    assert rel == RelEqual(TermIdent("a"), TermIdent("b"))


def test_parse_accepts_token_iterator():
    tokens = iter(tokenize("output 7"))
    assert parse(tokens).instrs == [InstrOutput(TermInt("7"))]


def test_assign_str():
    instr = InstrAssign("x", ExprPlus(TermIdent("a"), TermInt("2")))
    assert str(instr) == "assign(x = expr(plus(term(ident(a)) + term(int(2)))))"


def test_if_str():
    instr = InstrIf(RelLessThanEqual(TermInput(), TermInt("4")), InstrGoto("done"))
    assert str(instr) == "if(rel(term(input) <= term(int(4))) -> goto(done))"


def test_empty_program_is_error():
    with pytest.raises(ParseError, match="unexpected token kind: end"):
        parse_text("")


def test_missing_equal():
    with pytest.raises(ParseError, match="expected equal, found: int"):
        parse_text("x 1")


def test_missing_relation_operator():
    with pytest.raises(ParseError, match=r"expected rel token .*found: then"):
        parse_text("if x then goto :a")


def test_missing_then():
    with pytest.raises(ParseError, match="expected then, found: goto"):
        parse_text("if x < 1 goto :a")


def test_goto_needs_label():
    with pytest.raises(ParseError, match="expected label, found: ident"):
        parse_text("goto x")


def test_bad_term():
    with pytest.raises(ParseError, match=r"expected term token .*found: plus"):
        parse_text("x = +")


def test_statement_cannot_start_with_operator():
    with pytest.raises(ParseError, match="unexpected token kind: equal"):
        parse_text("= 1")


def test_invalid_token_rejected():
    with pytest.raises(ParseError, match="unexpected token kind: invalid"):
        parse_text("x = 1 @")


def test_tokens_without_end():
    with pytest.raises(ParseError, match="unexpected end of token stream"):
        parse([Token(TokenKind.OUTPUT), Token(TokenKind.INT, "1")])


def test_parse_label_wrong_kind():
    with pytest.raises(ParseError, match="expected label, found: output"):
        Parser(tokenize("output 1")).parse_label()