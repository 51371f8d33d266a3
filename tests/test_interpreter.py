import math

import pytest

from lox import ast
from lox.errors import EvalError, InvariantError
from lox.interpreter import Evaluator, evaluate, is_equal, is_truthy, stringify
from lox.lexer import Scanner
from lox.parser import Parser
from lox.position import BytePos, Span, WithSpan
from lox.token import Token, TokenType


#runs the full pipeline so evaluator tests stay focused on values
def run(source: str):
    tokens = Scanner(source).scan()
    return evaluate(Parser(tokens).parse())


def fails(source: str) -> EvalError:
    with pytest.raises(EvalError) as excinfo:
        run(source)
    return excinfo.value


def span(start: int, end: int) -> Span:
    return Span(BytePos(start), BytePos(end))


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("1 / 2", 0.5),
        ("(1 + 2) * 3", 9.0),
        ("10 - 4 - 3", 3.0),
        ("-(2 * 3)", -6.0),
        ("--4", 4.0),
        ('"a" + "b"', "ab"),
        ('"" + ""', ""),
        ("true", True),
        ("nil", None),
        ("(((7)))", 7.0),
    ],
)
def test_values(source: str, expected) -> None:
    assert run(source) == expected


@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("1 < 2", True),
        ("2 <= 2", True),
        ("1 > 2", False),
        ("3 >= 4", False),
        ('1 == "1"', False),
        ("nil == nil", True),
        ("nil == false", False),
        ("true == 1", False),
        ('"a" == "a"', True),
        ("0 == -0", True),
        ("1 != 2", True),
        ('nil != ""', True),
        ("!0", False),
        ("!nil", True),
        ('!""', False),
        ("!false", True),
        ("!!1", True),
    ],
)
def test_boolean_results(source: str, expected: bool) -> None:
    result = run(source)
    assert isinstance(result, bool)
    assert result is expected


def test_concatenation_requires_matching_operands() -> None:
    error = fails('1 + "b"')
    assert "two numbers or two strings." in error.message
    assert error.span == span(0, 7)


@pytest.mark.parametrize("source", ['"a" - 1', "true * 2", '"a" < "b"', "nil >= 1", "1 / false"])
def test_arithmetic_and_comparison_require_numbers(source: str) -> None:
    assert fails(source).message == "Operands must be numbers."


def test_divide_by_zero() -> None:
    error = fails("1 / 0")
    assert "Divide by zero." in error.message
    assert error.span == span(0, 5)
    assert fails("1 / -0").message == "Divide by zero."


#negation reports at the operator, not the operand
def test_negating_non_number() -> None:
    error = fails('-"a"')
    assert error.message == "Operand - must be a number."
    assert error.span == span(0, 1)


#both sides are evaluated even when the result would be known early
def test_no_short_circuit() -> None:
    assert fails("nil == (1 / 0)").message == "Divide by zero."
    assert fails('(1 + "x") == nil').message == "Operands must be two numbers or two strings."


def test_first_error_wins() -> None:
    error = fails('(-"a") + (1 / 0)')
    assert error.message == "Operand - must be a number."


def test_unknown_binary_operator_is_reported() -> None:
    one = WithSpan(ast.Literal(Token.number("1")), span(0, 1))
    comma = WithSpan(Token(TokenType.COMMA), span(1, 2))
    expr = WithSpan(ast.Binary(operator=comma, left=one, right=one), span(0, 3))
    with pytest.raises(EvalError) as excinfo:
        evaluate(expr)
    assert excinfo.value.message == "Invalid operator"


def test_malformed_number_lexeme_is_invariant_error() -> None:
    expr = WithSpan(ast.Literal(Token.number("1x")), span(0, 2))
    with pytest.raises(InvariantError):
        evaluate(expr)


def test_truthiness_and_equality_helpers() -> None:
    assert is_truthy(0.0)
    assert is_truthy("")
    assert not is_truthy(None)
    assert not is_truthy(False)
    assert is_equal(None, None)
    assert not is_equal(1.0, True)
    assert not is_equal(0.0, False)


@pytest.mark.parametrize(
    ("value", "text"),
    [
        (None, "nil"),
        (True, "true"),
        (False, "false"),
        (3.0, "3"),
        (0.5, "0.5"),
        (-0.0, "-0"),
        (1e21, "1000000000000000000000"),
        (math.inf, "inf"),
        (math.nan, "nan"),
        ("raw text", "raw text"),
    ],
)
def test_stringify(value, text: str) -> None:
    assert stringify(value) == text


def test_trace_prints_each_node(capsys: pytest.CaptureFixture[str]) -> None:
    expr = Parser(Scanner("1 + 2").scan()).parse()
    assert Evaluator(trace=True).evaluate(expr) == 3.0
    lines = capsys.readouterr().out.splitlines()
    assert lines == [
        "[trace] node=Literal value=1",
        "[trace] node=Literal value=2",
        "[trace] node=Binary op=+ value=3",
    ]


#deep groups and long left-leaning chains stay well inside the stack
@pytest.mark.parametrize(
    ("source", "expected"),
    [
        ("(" * 200 + "1" + ")" * 200, 1.0),
        (" + ".join(["1"] * 2000), 2000.0),
        (" - ".join(["1"] * 1500), -1498.0),
        ("-" * 300 + "7", 7.0),
        ('"a" + ' * 999 + '"a"', "a" * 1000),
    ],
)
def test_large_expressions(source: str, expected) -> None:
    assert run(source) == expected


def test_overly_deep_tree_is_a_diagnostic() -> None:
    expr = WithSpan(ast.Literal(Token.number("1")), span(0, 1))
    for _ in range(15_000):
        expr = WithSpan(ast.Grouping(expr), span(0, 1))
    with pytest.raises(EvalError) as excinfo:
        evaluate(expr)
    assert excinfo.value.message == "Expression nests too deeply."


#chained operators trace inner operations before outer ones
def test_trace_order_for_chains(capsys: pytest.CaptureFixture[str]) -> None:
    expr = Parser(Scanner("1 + 2 - 3").scan()).parse()
    assert Evaluator(trace=True).evaluate(expr) == 0.0
    assert capsys.readouterr().out.splitlines() == [
        "[trace] node=Literal value=1",
        "[trace] node=Literal value=2",
        "[trace] node=Binary op=+ value=3",
        "[trace] node=Literal value=3",
        "[trace] node=Binary op=- value=0",
    ]
