from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from snailfish.config import DEFAULT_CONFIG, ReductionConfig
from snailfish.tree import Node, Pair, SnailfishNumber, Value


@dataclass(frozen=True)
class StructuralMetrics:
    """Aggregate measurements of a snailfish tree.

    ``max_pair_depth`` counts the root pair as level 1, so a reduced number
    under the default bounds never exceeds 4.
    """

    pairs: int
    leaves: int
    max_pair_depth: int
    max_value: int


def _walk_nodes(root: Pair) -> Iterable[tuple[Node, int]]:
    stack: list[tuple[Node, int]] = [(root, 1)]
    while stack:
        node, level = stack.pop()
        yield node, level
        if isinstance(node, Pair):
            stack.append((node.right, level + 1))
            stack.append((node.left, level + 1))


def measure_structure(number: SnailfishNumber) -> StructuralMetrics:
    """Compute size, nesting and leaf-range metrics for a number."""

    pairs = 0
    leaves = 0
    max_pair_depth = 0
    max_value = 0

    for node, level in _walk_nodes(number.root):
        if isinstance(node, Value):
            leaves += 1
            max_value = max(max_value, node.value)
            continue
        pairs += 1
        max_pair_depth = max(max_pair_depth, level)

    return StructuralMetrics(
        pairs=pairs,
        leaves=leaves,
        max_pair_depth=max_pair_depth,
        max_value=max_value,
    )


def validate_reduced(number: SnailfishNumber, config: ReductionConfig | None = None) -> list[str]:
    """Return human-readable reasons why ``number`` is not in reduced form."""

    config = config or DEFAULT_CONFIG
    metrics = measure_structure(number)
    violations: list[str] = []

    if metrics.max_pair_depth > config.max_depth:
        violations.append(
            f"max_pair_depth={metrics.max_pair_depth} exceeds max_depth={config.max_depth}"
        )
    if metrics.max_value >= config.split_threshold:
        violations.append(
            f"max_value={metrics.max_value} reaches split_threshold={config.split_threshold}"
        )

    return violations


def is_reduced(number: SnailfishNumber, config: ReductionConfig | None = None) -> bool:
    return not validate_reduced(number, config)
