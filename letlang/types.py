import operator
import sys
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum, IntEnum, auto
from typing_extensions import override


Sink = Callable[[int], None]


@contextmanager
def unlimited_int_digits() -> Iterator[None]:
    """Lift the int/str digit limit so long literals and large results convert."""
    limit = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(0)
    try:
        yield
    finally:
        sys.set_int_max_str_digits(limit)


@dataclass(frozen=True)
class Span:
    start: int
    end: int


class BinOp(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# NOTE: floor division, so both backends agree on 7 / 2 == 3 and -7 / 2 == -4
BINOP_FUNCS: dict[BinOp, Callable[[int, int], int]] = {
    BinOp.ADD: operator.add,
    BinOp.SUB: operator.sub,
    BinOp.MUL: operator.mul,
    BinOp.DIV: operator.floordiv,
}


class Op(IntEnum):
    PUSH = 0
    STORE = auto()
    ADD = auto()
    SUB = auto()
    MUL = auto()
    DIV = auto()
    PRINT = auto()


BINOP_TO_OP: dict[BinOp, Op] = {
    BinOp.ADD: Op.ADD,
    BinOp.SUB: Op.SUB,
    BinOp.MUL: Op.MUL,
    BinOp.DIV: Op.DIV,
}

OP_TO_BINOP: dict[Op, BinOp] = {op: binop for binop, op in BINOP_TO_OP.items()}


@dataclass(frozen=True)
class Immediate:
    value: int

    @override
    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class VariableRef:
    name: str

    @override
    def __str__(self) -> str:
        return self.name


Operand = Immediate | VariableRef


@dataclass(frozen=True)
class Instr:
    op: Op
    arg: Operand | str | None = None

    @override
    def __repr__(self) -> str:
        if self.arg is None:
            return self.op.name
        return f"{self.op.name} {self.arg}"
