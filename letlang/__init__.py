"""
letlang: a two-statement language (`let`, `print`) with a bytecode VM and a
tree-walking interpreter over the same AST.
"""

from .errors import (
    CodeGenError,
    ErrorCode,
    InterpreterError,
    LetlangError,
    LexError,
    ParseError,
    SemanticError,
    VMError,
)
from .tokenizer import Token, Tokenizer, TokenType, tokenize
from .parser import Binary, LetStmt, Literal, Parser, PrintStmt, Variable, parse
from .lowering import Lowering, generate
from .listing import read_listing, render_listing
from .vm import VM, execute
from .interpreter import Interpreter, interpret
from .utils import compile_source, run_source

__version__ = "0.1.0"
__all__ = [
    "tokenize", "Tokenizer", "Token", "TokenType",
    "parse", "Parser", "LetStmt", "PrintStmt", "Literal", "Variable", "Binary",
    "generate", "Lowering", "render_listing", "read_listing",
    "execute", "VM", "interpret", "Interpreter",
    "compile_source", "run_source",
    "ErrorCode", "LetlangError", "LexError", "ParseError", "SemanticError",
    "CodeGenError", "VMError", "InterpreterError",
]
