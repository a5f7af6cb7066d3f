from enum import Enum


class ErrorCode(Enum):
    # LexError
    LEXER_ERROR = "Lexer error"

    # ParseError
    UNEXPECTED_TOKEN = "Unexpected token"

    # SemanticError
    REDECLARED = "Redeclared identifier"
    UNDECLARED = "Undeclared identifier"

    # CodeGenError / InterpreterError
    UNKNOWN_NODE = "Unknown node"

    # VMError
    STACK_UNDERFLOW = "Stack underflow"
    UNKNOWN_INSTRUCTION = "Unknown instruction"
    MALFORMED_INSTRUCTION = "Malformed instruction"
    UNBOUND_NAME = "Unbound name"

    # InterpreterError
    UNDEFINED_VARIABLE = "Undefined variable"
    UNKNOWN_OPERATOR = "Unknown operator"

    DIVISION_BY_ZERO = "Division by zero"


class LetlangError(Exception):
    kind: ErrorCode
    message: str

    def __init__(self, kind: ErrorCode, message: str = ""):
        self.kind = kind
        self.message = message
        text = f"{kind.value}: {message}" if message else kind.value
        super().__init__(f"{self.__class__.__name__}: {text}")


class LexError(LetlangError):
    position: int

    def __init__(self, position: int, message: str = ""):
        self.position = position
        super().__init__(ErrorCode.LEXER_ERROR, message)


class ParseError(LetlangError):
    expected: str
    found: str

    def __init__(self, expected: str, found: str, message: str = ""):
        self.expected = expected
        self.found = found
        super().__init__(ErrorCode.UNEXPECTED_TOKEN, message or f"expected {expected}, found {found}")


class SemanticError(LetlangError):
    identifier: str

    def __init__(self, kind: ErrorCode, identifier: str, message: str = ""):
        assert kind in (ErrorCode.REDECLARED, ErrorCode.UNDECLARED), f"not a semantic error kind: {kind}"
        self.identifier = identifier
        super().__init__(kind, message or identifier)


class CodeGenError(LetlangError):
    node_kind: str

    def __init__(self, node_kind: str, message: str = ""):
        self.node_kind = node_kind
        super().__init__(ErrorCode.UNKNOWN_NODE, message or node_kind)


class VMError(LetlangError):
    pass


class InterpreterError(LetlangError):
    pass
