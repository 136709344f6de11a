from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple, Union


class Direction(Enum):
    LEFT = "left"
    RIGHT = "right"

    @property
    def opposite(self) -> "Direction":
        return Direction.RIGHT if self is Direction.LEFT else Direction.LEFT


@dataclass
class Value:
    """Leaf holding a single non-negative integer."""

    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class Pair:
    """Internal node owning exactly two children."""

    left: "Node"
    right: "Node"

    def child(self, side: Direction) -> "Node":
        return self.left if side is Direction.LEFT else self.right

    def set_child(self, side: Direction, node: "Node") -> None:
        if side is Direction.LEFT:
            self.left = node
        else:
            self.right = node

    def __str__(self) -> str:
        return render(self)


Node = Union[Pair, Value]


@dataclass
class SnailfishNumber:
    """Top-level number: the single owner of a root pair.

    Reduction rewrites the tree in place, so callers that need to keep an
    operand intact should add a ``copy()`` of it instead.
    """

    root: Pair

    def copy(self) -> "SnailfishNumber":
        return SnailfishNumber(clone(self.root))

    def to_list(self) -> list:
        return to_list(self.root)

    def __str__(self) -> str:
        return render(self.root)


def render(node: Node) -> str:
    """Canonical bracketed notation, e.g. ``[[1,2],3]``."""

    if isinstance(node, Value):
        return str(node.value)
    return f"[{render(node.left)},{render(node.right)}]"


def clone(node: Node) -> Node:
    if isinstance(node, Value):
        return Value(node.value)
    return Pair(clone(node.left), clone(node.right))


def to_list(node: Node) -> Union[int, list]:
    """Nested Python lists mirroring the tree, leaves as plain ints."""

    if isinstance(node, Value):
        return node.value
    return [to_list(node.left), to_list(node.right)]


def iter_leaves(node: Node, depth: int = 0) -> Iterator[Tuple[Value, int]]:
    """Yield ``(leaf, enclosing_pairs)`` in left-to-right order."""

    stack: List[Tuple[Node, int]] = [(node, depth)]
    while stack:
        current, level = stack.pop()
        if isinstance(current, Value):
            yield current, level
            continue
        stack.append((current.right, level + 1))
        stack.append((current.left, level + 1))
