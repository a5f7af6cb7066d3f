import logging

from .errors import ErrorCode, InterpreterError
from .parser import Binary, Expr, LetStmt, Literal, PrintStmt, Stmt, Variable
from .types import BINOP_FUNCS, Sink

logger = logging.getLogger(__name__)


class Interpreter:
    """Runs the statement list directly, no bytecode in between."""

    variables: dict[str, int]
    output: list[int]
    sink: Sink | None

    def __init__(self, sink: Sink | None = None):
        self.variables = {}
        self.output = []
        self.sink = sink

    def interpret(self, statements: list[Stmt]) -> list[int]:
        for stmt in statements:
            self.execute(stmt)
        return self.output

    def execute(self, stmt: Stmt):
        logger.debug("execute %s", stmt)
        if isinstance(stmt, LetStmt):
            self.variables[stmt.identifier] = self.evaluate(stmt.value)
        elif isinstance(stmt, PrintStmt):
            value = self.evaluate(stmt.value)
            self.output.append(value)
            if self.sink is not None:
                self.sink(value)
        else:
            raise InterpreterError(ErrorCode.UNKNOWN_NODE, f"unhandled stmt {stmt}")

    def evaluate(self, expr: Expr) -> int:
        if isinstance(expr, Literal):
            return expr.value
        elif isinstance(expr, Variable):
            if expr.identifier not in self.variables:
                raise InterpreterError(ErrorCode.UNDEFINED_VARIABLE, expr.identifier)
            return self.variables[expr.identifier]
        elif isinstance(expr, Binary):
            left = self.evaluate(expr.left)
            right = self.evaluate(expr.right)
            fn = BINOP_FUNCS.get(expr.op)
            if fn is None:
                raise InterpreterError(ErrorCode.UNKNOWN_OPERATOR, f"{expr.op}")
            try:
                return fn(left, right)
            except ZeroDivisionError:
                raise InterpreterError(ErrorCode.DIVISION_BY_ZERO, "right operand is 0") from None
        else:
            raise InterpreterError(ErrorCode.UNKNOWN_NODE, f"unhandled expr {expr}")


def interpret(statements: list[Stmt], sink: Sink | None = None) -> list[int]:
    return Interpreter(sink).interpret(statements)
