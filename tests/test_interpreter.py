from dataclasses import dataclass

import pytest

from letlang.errors import ErrorCode, InterpreterError
from letlang.interpreter import Interpreter, interpret
from letlang.parser import Binary, Expr, Literal, Stmt, Variable
from letlang.tokenizer import Token, TokenType
from letlang.types import BinOp, Span
from letlang.utils import capture_stdout, parse_source


@dataclass(frozen=True)
class WhileStmt(Stmt):
    span: Span


class RecordingInterpreter(Interpreter):
    seen: list[Expr]

    def __init__(self):
        super().__init__()
        self.seen = []

    def evaluate(self, expr: Expr) -> int:
        self.seen.append(expr)
        return super().evaluate(expr)


def var(name: str) -> Variable:
    return Variable(Token(TokenType.Ident, name, Span(0, len(name))), Span(0, len(name)))


def test_scenarios():
    assert interpret(parse_source("let x = 10; let y = 20; print(x + y);")) == [30]
    assert interpret(parse_source("let x = 5; print(x - 3);")) == [2]


def test_variables():
    interpreter = Interpreter()
    interpreter.interpret(parse_source("let a = 6; let b = a * 7;"))
    assert interpreter.variables == {"a": 6, "b": 42}
    assert interpreter.output == []


def test_division_floors():
    assert interpret(parse_source("print(7 / 2); print(0 - 7);")) == [3, -7]
    assert interpret(parse_source("let n = 0 - 7; print(n / 2);")) == [-4]


def test_print_sink():
    with capture_stdout() as buf:
        interpret(parse_source("print(2); print(3);"), print)
    assert buf.getvalue() == "2\n3\n"


def test_default_sink_only_collects():
    with capture_stdout() as buf:
        assert interpret(parse_source("print(3);")) == [3]
    assert buf.getvalue() == ""


def test_left_evaluated_before_right():
    interpreter = RecordingInterpreter()
    left, right = Literal(1, Span(0, 1)), Literal(2, Span(4, 5))
    expr = Binary(left, BinOp.ADD, right, Span(0, 5))
    assert interpreter.evaluate(expr) == 3
    assert interpreter.seen == [expr, left, right]


def test_undefined_variable():
    with pytest.raises(InterpreterError) as exc:
        Interpreter().evaluate(var("ghost"))
    assert exc.value.kind == ErrorCode.UNDEFINED_VARIABLE
    assert "ghost" in str(exc.value)


def test_self_reference_fails_at_run_time():
    with pytest.raises(InterpreterError) as exc:
        interpret(parse_source("let x = x;"))
    assert exc.value.kind == ErrorCode.UNDEFINED_VARIABLE


def test_unknown_operator():
    expr = Binary(Literal(1, Span(0, 1)), "%", Literal(2, Span(4, 5)), Span(0, 5))  # type: ignore[arg-type]
    with pytest.raises(InterpreterError) as exc:
        Interpreter().evaluate(expr)
    assert exc.value.kind == ErrorCode.UNKNOWN_OPERATOR


def test_unknown_statement():
    with pytest.raises(InterpreterError) as exc:
        interpret([WhileStmt(Span(0, 0))])
    assert exc.value.kind == ErrorCode.UNKNOWN_NODE


def test_division_by_zero():
    seen: list[int] = []
    with pytest.raises(InterpreterError) as exc:
        interpret(parse_source("print(4); let z = 0; print(1 / z);"), seen.append)
    assert exc.value.kind == ErrorCode.DIVISION_BY_ZERO
    assert seen == [4]
