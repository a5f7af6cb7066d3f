import logging
from dataclasses import dataclass
from typing import Protocol

from .errors import ErrorCode, ParseError, SemanticError
from .source_map import SourceMap
from .tokenizer import Token, TokenType
from .types import BinOp, Span, unlimited_int_digits

logger = logging.getLogger(__name__)


# program    := statement*
# statement  := assignment | print
# assignment := "let" <ident> "=" expression ";"
# print      := "print" "(" expression ")" ";"
# expression := operand ( <operator> operand )?
# operand    := <number> | <ident>

class Node(Protocol):
    span: Span


class Stmt(Node):
    span: Span


@dataclass(frozen=True)
class LetStmt(Stmt):
    name: Token
    value: "Expr"
    span: Span

    @property
    def identifier(self) -> str:
        return self.name.raw


@dataclass(frozen=True)
class PrintStmt(Stmt):
    value: "Expr"
    span: Span


class Expr(Node):
    span: Span


@dataclass(frozen=True)
class Literal(Expr):
    value: int
    span: Span


@dataclass(frozen=True)
class Variable(Expr):
    name: Token
    span: Span

    @property
    def identifier(self) -> str:
        return self.name.raw


@dataclass(frozen=True)
class Binary(Expr):
    left: Literal | Variable
    op: BinOp
    right: Literal | Variable
    span: Span


class SymbolTable:
    """Names declared so far in one program. Only ever grows."""

    symbols: dict[str, Token]

    def __init__(self):
        self.symbols = {}

    def lookup(self, name: str) -> Token | None:
        return self.symbols.get(name)

    def declare(self, tok: Token):
        assert tok.raw not in self.symbols, f"{tok.raw} declared twice"
        self.symbols[tok.raw] = tok

    def __contains__(self, name: str) -> bool:
        return name in self.symbols

    def __len__(self) -> int:
        return len(self.symbols)


class Parser:
    tokens: list[Token]
    index: int
    sm: SourceMap | None
    symbols: SymbolTable

    def __init__(self, tokens: list[Token], source_map: SourceMap | None = None):
        self.tokens = tokens
        self.index = 0
        self.sm = source_map
        self.symbols = SymbolTable()

    def trace(self, event: str, tok: Token):
        logger.debug(
            "%s %s %r [%d, %d)", event, tok.kind.name, tok.raw, tok.span.start, tok.span.end,
            extra={"event": event, "token": tok},
        )

    def err(self, node: object, msg: str) -> str:
        if self.sm is None:
            return msg
        return self.sm.to_err(node, msg)

    def end_span(self) -> Span:
        end = self.tokens[-1].span.end if self.tokens else 0
        return Span(end, end)

    def at_end(self) -> bool:
        return self.index >= len(self.tokens)

    def peek(self) -> Token | None:
        if self.at_end():
            return None
        return self.tokens[self.index]

    def at(self, kind: TokenType) -> bool:
        tok = self.peek()
        return tok is not None and tok.kind == kind

    def advance(self) -> Token:
        assert not self.at_end(), "tried advancing past the last token"
        tok = self.tokens[self.index]
        self.index += 1
        return tok

    def consume(self, *kinds: TokenType) -> Token:
        tok = self.peek()
        if tok is None or tok.kind not in kinds:
            expected = " or ".join(kind.describe() for kind in kinds)
            if tok is None:
                found = "end of input"
                where: object = self.end_span()
            else:
                found = f"'{tok.raw}'"
                where = tok
            msg = f"expected {expected}, found {found}"
            raise ParseError(expected, found, self.err(where, msg))
        self.trace("consume", tok)
        return self.advance()

    def parse_operand(self) -> Literal | Variable:
        tok = self.consume(TokenType.Number, TokenType.Ident)
        if tok.kind == TokenType.Number:
            with unlimited_int_digits():
                value = int(tok.raw)
            return Literal(value=value, span=tok.span)
        if tok.raw not in self.symbols:
            raise SemanticError(
                ErrorCode.UNDECLARED, tok.raw, self.err(tok, f"variable {tok.raw} not declared")
            )
        return Variable(name=tok, span=tok.span)

    def parse_expr(self) -> Expr:
        """
        expression := operand ( <operator> operand )?

        Only one operator is taken, a second one is left for the caller to
        trip over.
        """
        left = self.parse_operand()
        if not self.at(TokenType.Operator):
            return left
        op = self.consume(TokenType.Operator)
        right = self.parse_operand()
        return Binary(
            left=left,
            op=BinOp(op.raw),
            right=right,
            span=Span(left.span.start, right.span.end),
        )

    def parse_let(self) -> LetStmt:
        start = self.consume(TokenType.Let)
        name = self.consume(TokenType.Ident)
        if name.raw in self.symbols:
            first = self.symbols.lookup(name.raw)
            assert first is not None
            raise SemanticError(
                ErrorCode.REDECLARED, name.raw,
                self.err(name, f"variable {name.raw} already declared at offset {first.span.start}"),
            )
        self.symbols.declare(name)
        self.trace("declare", name)
        _ = self.consume(TokenType.Eq)
        value = self.parse_expr()
        semi = self.consume(TokenType.Semi)
        return LetStmt(name=name, value=value, span=Span(start.span.start, semi.span.end))

    def parse_print(self) -> PrintStmt:
        start = self.consume(TokenType.Print)
        _ = self.consume(TokenType.OpenParen)
        value = self.parse_expr()
        _ = self.consume(TokenType.CloseParen)
        semi = self.consume(TokenType.Semi)
        return PrintStmt(value=value, span=Span(start.span.start, semi.span.end))

    def parse_stmt(self) -> Stmt:
        token = self.peek()
        assert token is not None, "parse_stmt called at end of input"
        self.trace("statement", token)
        match token.kind:
            case TokenType.Let:
                return self.parse_let()
            case TokenType.Print:
                return self.parse_print()
            case _:
                found = f"'{token.raw}'"
                raise ParseError(
                    "'let' or 'print'", found,
                    self.err(token, f"expected 'let' or 'print', found {found}"),
                )

    def parse(self) -> list[Stmt]:
        body: list[Stmt] = []
        while not self.at_end():
            body.append(self.parse_stmt())
        return body


def parse(tokens: list[Token], source_map: SourceMap | None = None) -> list[Stmt]:
    return Parser(tokens, source_map).parse()
