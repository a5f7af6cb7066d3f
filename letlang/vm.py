import logging
from collections.abc import Callable
from typing import NoReturn

from .errors import ErrorCode, VMError
from .types import BINOP_FUNCS, OP_TO_BINOP, Immediate, Instr, Op, Sink, VariableRef

logger = logging.getLogger(__name__)


class VM:
    code: list[Instr]
    ip: int
    stack: list[int]
    variables: dict[str, int]
    output: list[int]
    sink: Sink | None

    def __init__(self, code: list[Instr], sink: Sink | None = None):
        self.code = code
        self.ip = 0
        self.stack = []
        self.variables = {}
        self.output = []
        self.sink = sink

        self.DISPATCH: dict[Op, Callable[[Instr], None]] = {
            Op.PUSH: self.op_push,
            Op.STORE: self.op_store,
            Op.ADD: self.op_binary,
            Op.SUB: self.op_binary,
            Op.MUL: self.op_binary,
            Op.DIV: self.op_binary,
            Op.PRINT: self.op_print,
        }

    def fail(self, kind: ErrorCode, msg: str) -> NoReturn:
        raise VMError(kind, f"{msg} (ip={self.ip}, instr={self.code[self.ip]!r})")

    def push(self, value: int):
        self.stack.append(value)

    def pop(self) -> int:
        if not self.stack:
            self.fail(ErrorCode.STACK_UNDERFLOW, "pop from empty operand stack")
        return self.stack.pop()

    def op_push(self, instr: Instr):
        match instr.arg:
            case Immediate(value):
                self.push(value)
            case VariableRef(name):
                if name not in self.variables:
                    self.fail(ErrorCode.UNBOUND_NAME, f"{name} has no value")
                self.push(self.variables[name])
            case _:
                self.fail(ErrorCode.MALFORMED_INSTRUCTION, f"bad PUSH operand {instr.arg!r}")

    def op_store(self, instr: Instr):
        if not isinstance(instr.arg, str):
            self.fail(ErrorCode.MALFORMED_INSTRUCTION, f"bad STORE target {instr.arg!r}")
        self.variables[instr.arg] = self.pop()

    def op_binary(self, instr: Instr):
        # right was pushed last
        right = self.pop()
        left = self.pop()
        fn = BINOP_FUNCS[OP_TO_BINOP[instr.op]]
        try:
            self.push(fn(left, right))
        except ZeroDivisionError:
            self.fail(ErrorCode.DIVISION_BY_ZERO, "right operand is 0")

    def op_print(self, _instr: Instr):
        value = self.pop()
        self.output.append(value)
        if self.sink is not None:
            self.sink(value)

    def undefined(self, instr: Instr):
        self.fail(ErrorCode.UNKNOWN_INSTRUCTION, f"no handler for {instr.op!r}")

    def run(self) -> list[int]:
        DISPATCH = self.DISPATCH
        while self.ip < len(self.code):
            instr = self.code[self.ip]
            # stack is formatted lazily, only when DEBUG is on
            logger.debug("| %d: %r  stack=%s", self.ip, instr, self.stack)
            DISPATCH.get(instr.op, self.undefined)(instr)
            self.ip += 1
        return self.output


def execute(code: list[Instr], sink: Sink | None = None) -> list[int]:
    return VM(code, sink).run()
