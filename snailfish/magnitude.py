from __future__ import annotations

from typing import Union

from snailfish.tree import Node, Pair, SnailfishNumber, Value

LEFT_WEIGHT = 3
RIGHT_WEIGHT = 2


def magnitude(node: Union[Node, SnailfishNumber]) -> int:
    """Weighted fold: a leaf is its value, a pair is 3*left + 2*right."""

    if isinstance(node, SnailfishNumber):
        node = node.root
    if isinstance(node, Value):
        return node.value
    if isinstance(node, Pair):
        return LEFT_WEIGHT * magnitude(node.left) + RIGHT_WEIGHT * magnitude(node.right)
    raise TypeError(f"cannot take the magnitude of {type(node).__name__}")
