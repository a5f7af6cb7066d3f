import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing_extensions import override

from .errors import LexError
from .source_map import SourceMap
from .types import Span

logger = logging.getLogger(__name__)


class TokenType(Enum):
    Let = "Let"
    Print = "Print"
    Ident = "Ident"
    Number = "Number"
    Eq = "Equals"
    Operator = "Operator"
    Semi = "SemiColon"
    OpenParen = "OpenParen"
    CloseParen = "CloseParen"

    def describe(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS = {
    TokenType.Let: "'let'",
    TokenType.Print: "'print'",
    TokenType.Ident: "identifier",
    TokenType.Number: "number",
    TokenType.Eq: "'='",
    TokenType.Operator: "operator",
    TokenType.Semi: "';'",
    TokenType.OpenParen: "'('",
    TokenType.CloseParen: "')'",
}


@dataclass(frozen=True)
class Token:
    kind: TokenType
    raw: str
    span: Span

    @override
    def __repr__(self):
        return f"{self.raw}"


class Tokenizer:
    tokens: list[Token]
    text: str
    index: int
    sm: SourceMap
    # NOTE: order matters, keywords must be tried before Ident
    PATTERNS: list[tuple[re.Pattern[str], TokenType | None]] = [
        (re.compile(r"\s+"), None),
        (re.compile(r"let\b", re.ASCII), TokenType.Let),
        (re.compile(r"print\b", re.ASCII), TokenType.Print),
        (re.compile(r"[A-Za-z_][A-Za-z0-9_]*"), TokenType.Ident),
        (re.compile(r"[0-9]+"), TokenType.Number),
        (re.compile(r"="), TokenType.Eq),
        (re.compile(r"[+\-*/]"), TokenType.Operator),
        (re.compile(r";"), TokenType.Semi),
        (re.compile(r"\("), TokenType.OpenParen),
        (re.compile(r"\)"), TokenType.CloseParen),
    ]

    def __init__(self, text: str):
        self.text = text
        self.sm = SourceMap(text)
        self.tokens = []
        self.index = 0

    def add(self, kind: TokenType, raw: str, span: Span):
        self.tokens.append(Token(kind, raw, span))

    def match_here(self) -> tuple[re.Match[str], TokenType | None] | None:
        for pattern, kind in self.PATTERNS:
            m = pattern.match(self.text, self.index)
            if m is not None:
                return m, kind
        return None

    def tokenize(self) -> list[Token]:
        self.tokens = []
        self.index = 0
        while self.index < len(self.text):
            found = self.match_here()
            if found is None:
                ch = self.text[self.index]
                raise LexError(self.index, self.err_at(self.index, f"Unknown character {ch!r}"))
            m, kind = found
            if kind is not None:
                self.add(kind, m.group(), Span(m.start(), m.end()))
            self.index = m.end()
        logger.debug("tokenized %d tokens", len(self.tokens))
        return self.tokens

    def err_at(self, off: int, msg: str) -> str:
        return self.sm.to_err(off, msg)

    def _escape(self, s: str) -> str:
        return s.encode("unicode_escape").decode("ascii")

    def tokens_debug(self) -> str:
        out = []
        for t in self.tokens:
            (sline, scol), (eline, ecol) = self.sm.span_to_lc(t.span)
            out.append(
                f'Token {{ kind: {t.kind.name}, raw: "{self._escape(t.raw)}", '
                f"span: [{t.span.start},{t.span.end}) @ {sline}:{scol}-{eline}:{ecol} }}"
            )
        return "\n".join(out)

    def tokens_pretty_gutter(self) -> str:
        lines = self.text.split("\n")
        if lines and lines[-1] == "":
            lines.pop()
        pieces = []
        for ln, line in enumerate(lines, start=1):
            line_start = self.sm.line_starts[ln - 1]
            carets = [" "] * len(line)
            for t in self.tokens:
                s = max(t.span.start, line_start) - line_start
                e = min(t.span.end, line_start + len(line)) - line_start
                for i in range(s, e):
                    carets[i] = "^"
            pieces.append(f"{ln:>4} | {line}")
            if any(c != " " for c in carets):
                pieces.append("     | " + "".join(carets).rstrip())
        pieces.append("")
        pieces.append(self.tokens_debug())
        return "\n".join(pieces)


def tokenize(source: str) -> list[Token]:
    return Tokenizer(source).tokenize()
