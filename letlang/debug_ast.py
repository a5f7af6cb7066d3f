# debug_ast.py
from __future__ import annotations

import enum
from dataclasses import fields, is_dataclass
from typing import Any, Iterable, Optional

from .source_map import SourceMap
from .tokenizer import Token
from .types import Immediate, Span, VariableRef


def render_ast(root: Any, *, show_spans: bool = True,
               source_map: Optional[SourceMap] = None) -> str:
    """
    Box-drawing dump of a node, a statement list, a token or a span:

        └─ list[1]
           └─ [0]:
              └─ PrintStmt
                 └─ value:
                    └─ Literal
                       └─ value = 3
    """
    lines: list[str] = []
    _render(root, lines, prefix="", is_last=True, show_spans=show_spans, sm=source_map)
    return "\n".join(lines)


def _render(obj: Any, out: list[str], *, prefix: str, is_last: bool,
            show_spans: bool, sm: Optional[SourceMap]) -> None:
    out.append(prefix + ("└─ " if is_last else "├─ ") + _label(obj, show_spans, sm))
    child_prefix = prefix + ("   " if is_last else "│  ")
    kids = [(name, child) for name, child in _children(obj)
            if show_spans or not isinstance(child, Span)]
    for i, (name, child) in enumerate(kids):
        last = i == len(kids) - 1
        if _is_atomic(child):
            head = child_prefix + ("└─ " if last else "├─ ")
            out.append(head + f"{name} = " + _label(child, show_spans, sm))
        else:
            out.append(child_prefix + ("└─ " if last else "├─ ") + f"{name}:")
            _render(child, out, prefix=child_prefix + ("   " if last else "│  "),
                    is_last=True, show_spans=show_spans, sm=sm)


def _label(obj: Any, show_spans: bool, sm: Optional[SourceMap]) -> str:
    if obj is None:
        return "None"
    if isinstance(obj, (str, int)):
        return repr(obj)
    if isinstance(obj, enum.Enum):
        return f"{obj.__class__.__name__}.{obj.name}"
    if isinstance(obj, Token):
        parts = [obj.kind.name, repr(obj.raw)]
        if show_spans:
            parts.append(_span_str(obj.span, sm))
        return "Token(" + ", ".join(parts) + ")"
    if isinstance(obj, Span):
        return "Span(" + _span_str(obj, sm) + ")"
    if isinstance(obj, (Immediate, VariableRef)):
        return f"{obj.__class__.__name__}({obj})"
    if isinstance(obj, list):
        return f"list[{len(obj)}]"
    if is_dataclass(obj):
        name = obj.__class__.__name__
        if show_spans and hasattr(obj, "span"):
            return f"{name} [{_span_str(obj.span, sm)}]"
        return name
    return repr(obj)


def _children(obj: Any) -> Iterable[tuple[str, Any]]:
    if isinstance(obj, list):
        for i, el in enumerate(obj):
            yield (f"[{i}]", el)
    elif is_dataclass(obj) and not isinstance(obj, (Token, Span, Immediate, VariableRef)):
        for f in fields(obj):
            yield (f.name, getattr(obj, f.name))


def _is_atomic(x: Any) -> bool:
    return not (isinstance(x, list) or (is_dataclass(x) and not isinstance(
        x, (Token, Span, Immediate, VariableRef))))


def _span_str(span: Span, sm: Optional[SourceMap]) -> str:
    if sm is None:
        return f"{span.start}..{span.end}"
    (sl, sc), (el, ec) = sm.span_to_lc(span)
    return f"{sl}:{sc}-{el}:{ec}"
