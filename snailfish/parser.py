from __future__ import annotations

import re
from typing import Iterable, List

from snailfish.tree import Node, Pair, SnailfishNumber, Value

_INTEGER = re.compile(r"[0-9]+")


class ParseError(ValueError):
    """Raised when text or an expression is not a well-formed snailfish number."""


def find_comma(body: str) -> int:
    """Index of the comma separating a pair body at nesting level zero."""

    depth = 0
    for idx, char in enumerate(body):
        if char == "," and depth == 0:
            return idx
        if char == "[":
            depth += 1
        elif char == "]":
            if depth == 0:
                raise ParseError(f"unexpected ']' at offset {idx} in {body!r}")
            depth -= 1
    raise ParseError(f"missing ',' at nesting level zero in {body!r}")


def _parse_node(text: str) -> Node:
    if text.startswith("["):
        if not text.endswith("]"):
            raise ParseError(f"unbalanced brackets in {text!r}")
        return _parse_pair(text[1:-1])

    if not _INTEGER.fullmatch(text):
        raise ParseError(f"invalid integer {text!r}")
    return Value(int(text))


def _parse_pair(body: str) -> Pair:
    comma = find_comma(body)
    return Pair(left=_parse_node(body[:comma]), right=_parse_node(body[comma + 1 :]))


def parse_number(text: str) -> SnailfishNumber:
    """Parse bracketed notation such as ``[[1,2],3]``."""

    src = text.strip()
    if len(src) < 2 or not (src.startswith("[") and src.endswith("]")):
        raise ParseError(f"snailfish number must be enclosed in brackets: {text!r}")
    return SnailfishNumber(_parse_pair(src[1:-1]))


def parse_lines(lines: Iterable[str]) -> List[SnailfishNumber]:
    """Parse one number per line, skipping blank lines and keeping order."""

    numbers: List[SnailfishNumber] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            numbers.append(parse_number(line))
        except ParseError as exc:
            raise ParseError(f"line {lineno}: {exc}") from exc
    return numbers


def _node_from_expr(expr: object) -> Node:
    # bool is an int subclass but never a valid leaf
    if isinstance(expr, int) and not isinstance(expr, bool):
        if expr < 0:
            raise ParseError(f"leaf values must be non-negative, got {expr}")
        return Value(expr)
    if isinstance(expr, (list, tuple)):
        if len(expr) != 2:
            raise ParseError(f"pairs need exactly two elements, got {len(expr)}")
        return Pair(_node_from_expr(expr[0]), _node_from_expr(expr[1]))
    raise ParseError(f"invalid element: {expr!r}")


def number_from_list(expr: object) -> SnailfishNumber:
    """Build a number from nested two-element lists, e.g. ``[[1, 2], 3]``."""

    root = _node_from_expr(expr)
    if not isinstance(root, Pair):
        raise ParseError(f"snailfish number must be a pair, got {expr!r}")
    return SnailfishNumber(root)
