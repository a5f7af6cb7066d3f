import argparse
import logging
import sys
from pathlib import Path

from .debug_ast import render_ast
from .errors import LetlangError
from .interpreter import interpret
from .listing import render_listing
from .lowering import generate
from .parser import Parser
from .tokenizer import Tokenizer
from .types import unlimited_int_digits
from .utils import BACKENDS
from .vm import execute

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(format="{name}: {message}", style="{")
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)


def build_argparser() -> argparse.ArgumentParser:
    argparser = argparse.ArgumentParser(prog="letlang", description="run a let/print program")
    argparser.add_argument(
        "-b", "--backend",
        choices=sorted(BACKENDS),
        default="vm",
        help="execution backend (default: vm)",
    )
    argparser.add_argument("--tokens", action="store_true", help="dump tokens before running")
    argparser.add_argument("--ast", action="store_true", help="dump the parsed AST before running")
    argparser.add_argument("--bytecode", action="store_true", help="dump the instruction listing before running")
    argparser.add_argument("-v", "--verbose", action="store_true", help="verbose debugging output")
    argparser.add_argument("FILE", help="source file")
    return argparser


def main(argv: list[str] | None = None) -> int:
    argparser = build_argparser()
    args = argparser.parse_args(argv)
    setup_logging(args.verbose)

    path = Path(args.FILE)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        argparser.error(f"can't read {path}: {e.strerror}")

    try:
        tokenizer = Tokenizer(text)
        tokens = tokenizer.tokenize()
        if args.tokens:
            print(tokenizer.tokens_pretty_gutter())

        statements = Parser(tokens, tokenizer.sm).parse()
        if args.ast:
            print(render_ast(statements, source_map=tokenizer.sm, show_spans=False))

        code = generate(statements) if args.bytecode or args.backend == "vm" else []
        if args.bytecode:
            print(render_listing(code), end="")

        logger.info("running %s with the %s backend", path, args.backend)
        if args.backend == "vm":
            output = execute(code)
        else:
            output = interpret(statements)
    except LetlangError as err:
        print(err, file=sys.stderr)
        return 1

    with unlimited_int_digits():
        for value in output:
            print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
