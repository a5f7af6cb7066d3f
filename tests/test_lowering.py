from dataclasses import dataclass

import pytest

from letlang.errors import CodeGenError, ErrorCode
from letlang.lowering import Lowering, generate
from letlang.parser import Expr, LetStmt, Stmt
from letlang.tokenizer import Token, TokenType
from letlang.types import Immediate, Instr, Op, Span, VariableRef
from letlang.utils import compile_source, parse_source


@dataclass(frozen=True)
class WhileStmt(Stmt):
    span: Span


@dataclass(frozen=True)
class Grouping(Expr):
    span: Span


def test_let_then_print():
    code = compile_source("let x = 10; print(x);")
    assert code == [
        Instr(Op.PUSH, Immediate(10)),
        Instr(Op.STORE, "x"),
        Instr(Op.PUSH, VariableRef("x")),
        Instr(Op.PRINT),
    ]


@pytest.mark.parametrize(
    "op, instr",
    [("+", Op.ADD), ("-", Op.SUB), ("*", Op.MUL), ("/", Op.DIV)],
)
def test_binary_lowering(op: str, instr: Op):
    code = compile_source(f"let a = 8; print(a {op} 2);")
    assert code == [
        Instr(Op.PUSH, Immediate(8)),
        Instr(Op.STORE, "a"),
        Instr(Op.PUSH, VariableRef("a")),
        Instr(Op.PUSH, Immediate(2)),
        Instr(instr),
        Instr(Op.PRINT),
    ]


def test_program_order():
    code = compile_source("let a = 1; let b = a * 3; print(b - a); print(a);")
    assert [instr.op for instr in code] == [
        Op.PUSH, Op.STORE,
        Op.PUSH, Op.PUSH, Op.MUL, Op.STORE,
        Op.PUSH, Op.PUSH, Op.SUB, Op.PRINT,
        Op.PUSH, Op.PRINT,
    ]
    assert code[5] == Instr(Op.STORE, "b")


def test_operands_are_tagged():
    code = compile_source("let n = 5; print(n + 7);")
    pushes = [instr.arg for instr in code if instr.op == Op.PUSH]
    assert pushes == [Immediate(5), VariableRef("n"), Immediate(7)]


def test_empty_program():
    assert generate([]) == []
    assert compile_source("   ") == []


def test_lower_is_repeatable():
    lowering = Lowering(parse_source("print(1);"))
    assert lowering.lower() == lowering.lower()


def test_unknown_statement():
    with pytest.raises(CodeGenError) as exc:
        generate([WhileStmt(Span(0, 0))])
    assert exc.value.kind == ErrorCode.UNKNOWN_NODE
    assert exc.value.node_kind == "WhileStmt"


def test_unknown_expression():
    name = Token(TokenType.Ident, "x", Span(4, 5))
    stmt = LetStmt(name=name, value=Grouping(Span(8, 11)), span=Span(0, 12))
    with pytest.raises(CodeGenError) as exc:
        generate([stmt])
    assert exc.value.node_kind == "Grouping"
