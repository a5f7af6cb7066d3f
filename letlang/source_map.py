from bisect import bisect_right
from typing import Any

from .types import Span


class SourceMap:
    text: str
    line_starts: list[int]

    def __init__(self, text: str):
        self.text = text
        self.line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self.line_starts.append(i + 1)

    def offset_to_line_col(self, off: int) -> tuple[int, int]:
        # 1-based line/col
        li = bisect_right(self.line_starts, off) - 1
        return (li + 1, off - self.line_starts[li] + 1)

    def span_to_lc(self, span: Span):
        return (self.offset_to_line_col(span.start),
                self.offset_to_line_col(span.end))

    def line(self, ln: int) -> str:
        lines = self.text.split("\n")
        return lines[ln - 1] if 1 <= ln <= len(lines) else ""

    def to_err(self, node: Any, msg: str) -> str:
        """
        Render `msg` under the source excerpt `node` covers. `node` may be
        anything with a `span`, a bare Span or an int offset.
        """
        if isinstance(node, int):
            span = Span(node, node + 1)
        else:
            span = getattr(node, "span", node)

        (sline, scol), (eline, ecol) = self.span_to_lc(span)
        header = f"At {sline}:{scol}"
        if (sline, scol) != (eline, ecol):
            header += f"-{eline}:{ecol}"
        parts = [header, f" {sline:>4} | {self.line(sline)}"]

        if sline == eline:
            carets = "^" * max(1, ecol - scol)
            parts.append("      | " + " " * (scol - 1) + f"{carets} {msg}")
            return "\n".join(parts)

        first = self.line(sline)
        parts.append("      | " + " " * (scol - 1) + "^" * max(1, len(first) - (scol - 1)))
        if eline - sline > 1:
            parts.append("      | ...")
        last = self.line(eline)
        parts.append(f" {eline:>4} | {last}")
        parts.append("      | " + "^" * max(1, min(ecol - 1, len(last))) + f" {msg}")
        return "\n".join(parts)
