#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import fields, is_dataclass
from typing import Any, List, Optional

from bl_ast import Node, Program, Span


def _format_span(span: Optional[Span]) -> str:
    if span is None:
        return ""
    return f" @{span.start_line}:{span.start_column}-{span.end_line}:{span.end_column}"


def _header(node: Node) -> str:
    scalars = []
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if value is None or isinstance(value, (Node, list)):
            continue
        scalars.append(f"{f.name}={value!r}")
    header = node.__class__.__name__
    if scalars:
        header += "(" + ", ".join(scalars) + ")"
    return header + _format_span(node.span)


def format_node(node: Any, indent: int = 0, label: str = "") -> List[str]:
    """
    Reflection-based syntax tree dump.

    One line per node: `label: ClassName(scalar=...) @span`. Child nodes
    follow on deeper lines; list children (statements) are unlabeled.
    Missing children left by parse errors show as `<missing>`.
    """
    ind = "  " * indent
    prefix = f"{label}: " if label else ""

    if node is None:
        return [ind + prefix + "<missing>"]

    if not (isinstance(node, Node) and is_dataclass(node)):
        return [ind + prefix + repr(node)]

    lines = [ind + prefix + _header(node)]
    for f in fields(node):
        if f.name == "span":
            continue
        value = getattr(node, f.name)
        if isinstance(value, list):
            for elem in value:
                lines.extend(format_node(elem, indent + 1))
        elif isinstance(value, Node):
            lines.extend(format_node(value, indent + 1, f.name))
        elif value is None and f.name in ("right", "cond"):
            lines.extend(format_node(None, indent + 1, f.name))
    return lines


def format_program(program: Program) -> str:
    """Convenience: dump a whole Program as a string."""
    return "\n".join(format_node(program))
