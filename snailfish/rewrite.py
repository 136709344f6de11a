from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from snailfish.config import ReductionConfig
from snailfish.tree import Direction, Node, Pair, SnailfishNumber, Value, render


class InvariantViolation(RuntimeError):
    """Raised when a tree breaks an assumption the rewrite rules rely on."""

    def __init__(self, message: str, subtree: Node):
        super().__init__(f"{message}: {render(subtree)}")
        self.subtree = subtree


@dataclass(frozen=True)
class Carry:
    """Amount travelling sideways from an exploded pair to a neighbouring leaf."""

    direction: Direction
    amount: int


@dataclass
class Explosion:
    """Outcome of the explode search as it unwinds towards the root.

    ``pending`` is the carry that has not yet met a sibling subtree on the way
    up. Once it is delivered it becomes ``None``; if it is still set at the
    root there is no leaf on that side and the amount is dropped.
    """

    left_amount: int
    right_amount: int
    pending: Optional[Carry] = None


def deliver(node: Node, carry: Carry) -> None:
    """Add ``carry`` to the leaf of ``node`` nearest to where it enters.

    A right-bound carry enters a subtree from its left edge, so it follows
    the leftmost path; a left-bound carry follows the rightmost path.
    """

    entry = carry.direction.opposite
    while isinstance(node, Pair):
        node = node.child(entry)
    node.value += carry.amount


def _leaf_amounts(pair: Pair) -> Tuple[int, int]:
    if not (isinstance(pair.left, Value) and isinstance(pair.right, Value)):
        raise InvariantViolation("exploding pair must hold two values", pair)
    return pair.left.value, pair.right.value


def _explode_child(parent: Pair, side: Direction) -> Optional[Explosion]:
    target = parent.child(side)
    if not isinstance(target, Pair):
        return None

    left_amount, right_amount = _leaf_amounts(target)
    parent.set_child(side, Value(0))
    explosion = Explosion(left_amount=left_amount, right_amount=right_amount)
    if side is Direction.LEFT:
        deliver(parent.right, Carry(Direction.RIGHT, right_amount))
        explosion.pending = Carry(Direction.LEFT, left_amount)
    else:
        deliver(parent.left, Carry(Direction.LEFT, left_amount))
        explosion.pending = Carry(Direction.RIGHT, right_amount)
    return explosion


def _explode_within(pair: Pair, enclosing: int, max_depth: int) -> Optional[Explosion]:
    # ``enclosing`` counts ``pair`` itself plus the pairs above it
    if enclosing >= max_depth:
        for side in (Direction.LEFT, Direction.RIGHT):
            explosion = _explode_child(pair, side)
            if explosion is not None:
                return explosion
        return None

    for side in (Direction.LEFT, Direction.RIGHT):
        child = pair.child(side)
        if not isinstance(child, Pair):
            continue
        explosion = _explode_within(child, enclosing + 1, max_depth)
        if explosion is None:
            continue
        pending = explosion.pending
        if pending is not None and pending.direction is side.opposite:
            deliver(pair.child(side.opposite), pending)
            explosion.pending = None
        return explosion
    return None


def explode(number: SnailfishNumber, config: ReductionConfig) -> Optional[Dict[str, object]]:
    """Explode the leftmost over-depth pair, if any.

    Returns a detail mapping describing the explosion, or ``None`` when no
    pair is deep enough.
    """

    explosion = _explode_within(number.root, 1, config.max_depth)
    if explosion is None:
        return None

    dropped = explosion.pending
    return {
        "left": explosion.left_amount,
        "right": explosion.right_amount,
        "dropped": dropped.direction.value if dropped is not None else None,
    }


def split_value(leaf: Value) -> Pair:
    half = leaf.value // 2
    return Pair(Value(half), Value(leaf.value - half))


def _split_within(pair: Pair, threshold: int) -> Optional[int]:
    for side in (Direction.LEFT, Direction.RIGHT):
        child = pair.child(side)
        if isinstance(child, Pair):
            found = _split_within(child, threshold)
            if found is not None:
                return found
        elif child.value >= threshold:
            pair.set_child(side, split_value(child))
            return child.value
    return None


def split(number: SnailfishNumber, config: ReductionConfig) -> Optional[Dict[str, object]]:
    """Split the leftmost leaf at or above the threshold, if any."""

    value = _split_within(number.root, config.split_threshold)
    if value is None:
        return None
    return {"value": value}


@dataclass(frozen=True)
class Rule:
    """Named rewrite step over a whole number.

    ``action`` applies at most one rewrite and returns its detail mapping, or
    ``None`` when the rule has nothing to do.
    """

    name: str
    action: Callable[[SnailfishNumber, ReductionConfig], Optional[Dict[str, object]]]

    def apply(self, number: SnailfishNumber, config: ReductionConfig) -> Optional[Dict[str, object]]:
        return self.action(number, config)


EXPLODE = Rule(name="explode", action=explode)
SPLIT = Rule(name="split", action=split)

# Priority order: a rule only fires when every earlier rule has nothing to do.
REDUCTION_RULES: Tuple[Rule, ...] = (EXPLODE, SPLIT)
