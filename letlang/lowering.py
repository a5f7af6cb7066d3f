import logging

from .errors import CodeGenError
from .parser import Binary, Expr, LetStmt, Literal, PrintStmt, Stmt, Variable
from .types import BINOP_TO_OP, Immediate, Instr, Op, VariableRef

logger = logging.getLogger(__name__)


class Lowering:
    statements: list[Stmt]
    bytecode: list[Instr]

    def __init__(self, statements: list[Stmt]):
        self.statements = statements
        self.bytecode = []

    def emit(self, op: Op, arg: Immediate | VariableRef | str | None = None):
        self.bytecode.append(Instr(op, arg))

    def lower_expression(self, expr: Expr):
        if isinstance(expr, Literal):
            self.emit(Op.PUSH, Immediate(expr.value))
        elif isinstance(expr, Variable):
            self.emit(Op.PUSH, VariableRef(expr.identifier))
        elif isinstance(expr, Binary):
            self.lower_expression(expr.left)
            self.lower_expression(expr.right)
            op = BINOP_TO_OP.get(expr.op)
            if op is None:
                raise CodeGenError(f"Binary({expr.op})")
            self.emit(op)
        else:
            raise CodeGenError(type(expr).__name__)

    def lower_stmt(self, stmt: Stmt):
        if isinstance(stmt, LetStmt):
            self.lower_expression(stmt.value)
            self.emit(Op.STORE, stmt.identifier)
        elif isinstance(stmt, PrintStmt):
            self.lower_expression(stmt.value)
            self.emit(Op.PRINT)
        else:
            raise CodeGenError(type(stmt).__name__)

    def lower(self) -> list[Instr]:
        self.bytecode = []
        for stmt in self.statements:
            self.lower_stmt(stmt)
        logger.debug("lowered %d statements into %d instructions", len(self.statements), len(self.bytecode))
        return self.bytecode


def generate(statements: list[Stmt]) -> list[Instr]:
    return Lowering(statements).lower()
