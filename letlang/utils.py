import io
import sys
from collections.abc import Callable
from contextlib import contextmanager

from .interpreter import interpret
from .lowering import generate
from .parser import Parser, Stmt
from .tokenizer import Tokenizer
from .types import Instr, Sink
from .vm import execute


def parse_source(text: str) -> list[Stmt]:
    tokenizer = Tokenizer(text)
    tokens = tokenizer.tokenize()
    return Parser(tokens, tokenizer.sm).parse()


def compile_source(text: str) -> list[Instr]:
    return generate(parse_source(text))


def _run_vm(statements: list[Stmt], sink: Sink | None) -> list[int]:
    return execute(generate(statements), sink)


BACKENDS: dict[str, Callable[[list[Stmt], Sink | None], list[int]]] = {
    "vm": _run_vm,
    "tree": interpret,
}


def run_source(text: str, backend: str = "vm", sink: Sink | None = None) -> list[int]:
    run = BACKENDS.get(backend)
    if run is None:
        raise ValueError(f"unknown backend {backend!r}, expected one of {sorted(BACKENDS)}")
    return run(parse_source(text), sink)


@contextmanager
def capture_stdout():
    old = sys.stdout
    buf = io.StringIO()
    sys.stdout = buf
    try:
        yield buf
    finally:
        sys.stdout = old
