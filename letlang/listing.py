"""
Text form of an instruction sequence, one instruction per line:

    PUSH 10
    STORE x
    PUSH x
    PRINT
"""

import re

from .errors import ErrorCode, VMError
from .types import Immediate, Instr, Op, VariableRef, unlimited_int_digits

MNEMONICS: dict[str, Op] = {op.name: op for op in Op}
TAKES_ARGUMENT = (Op.PUSH, Op.STORE)

_INT = re.compile(r"-?[0-9]+")


def render_listing(code: list[Instr]) -> str:
    with unlimited_int_digits():
        return "".join(f"{instr!r}\n" for instr in code)


def read_operand(raw: str) -> Immediate | VariableRef:
    if _INT.fullmatch(raw):
        with unlimited_int_digits():
            return Immediate(int(raw))
    return VariableRef(raw)


def read_listing(text: str) -> list[Instr]:
    code: list[Instr] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        parts = line.split()
        if not parts:
            continue
        op = MNEMONICS.get(parts[0])
        if op is None:
            raise VMError(ErrorCode.UNKNOWN_INSTRUCTION, f"line {lineno}: {parts[0]}")
        nargs = 1 if op in TAKES_ARGUMENT else 0
        if len(parts) - 1 != nargs:
            raise VMError(
                ErrorCode.MALFORMED_INSTRUCTION,
                f"line {lineno}: {op.name} takes {nargs} argument(s), got {len(parts) - 1}",
            )
        match op:
            case Op.PUSH:
                code.append(Instr(op, read_operand(parts[1])))
            case Op.STORE:
                code.append(Instr(op, parts[1]))
            case _:
                code.append(Instr(op))
    return code
