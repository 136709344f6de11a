from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence, Tuple

from snailfish.config import ReductionConfig
from snailfish.magnitude import magnitude
from snailfish.runtime import Event, reduce_number
from snailfish.tree import Pair, SnailfishNumber

logger = logging.getLogger(__name__)

EventHooks = Optional[List[Callable[[Event], None]]]


class EmptyInputError(ValueError):
    """Raised when a strategy receives too few numbers to produce a result."""


@dataclass(frozen=True)
class PairwiseResult:
    left_index: int
    right_index: int
    magnitude: int


def add_numbers(
    left: SnailfishNumber,
    right: SnailfishNumber,
    *,
    config: ReductionConfig | None = None,
    event_hooks: EventHooks = None,
) -> SnailfishNumber:
    """Snailfish addition: pair the operands, then reduce.

    Both operands are consumed; their root pairs become the children of the
    result and are rewritten in place.
    """

    combined = SnailfishNumber(Pair(left.root, right.root))
    events = reduce_number(combined, config=config, event_hooks=event_hooks)
    logger.debug("added into %s after %d rewrites", combined, len(events))
    return combined


def sum_all(
    numbers: Sequence[SnailfishNumber],
    *,
    config: ReductionConfig | None = None,
    event_hooks: EventHooks = None,
) -> SnailfishNumber:
    """Left fold of ``numbers`` with snailfish addition.

    Works on copies, so the input sequence is left untouched.
    """

    if not numbers:
        raise EmptyInputError("sum_all requires at least one number")

    total = numbers[0].copy()
    for number in numbers[1:]:
        total = add_numbers(total, number.copy(), config=config, event_hooks=event_hooks)
    return total


def sum_magnitude(
    numbers: Sequence[SnailfishNumber],
    *,
    config: ReductionConfig | None = None,
    event_hooks: EventHooks = None,
) -> int:
    return magnitude(sum_all(numbers, config=config, event_hooks=event_hooks))


def pairwise_magnitudes(
    numbers: Sequence[SnailfishNumber],
    *,
    config: ReductionConfig | None = None,
) -> Iterator[Tuple[int, int, int]]:
    """Yield ``(i, j, magnitude(numbers[i] + numbers[j]))`` for every ``i != j``.

    Positions, not values, are compared: equal numbers at different indices
    are still paired, and both operand orders are evaluated.
    """

    for i, j in itertools.permutations(range(len(numbers)), 2):
        total = add_numbers(numbers[i].copy(), numbers[j].copy(), config=config)
        yield i, j, magnitude(total)


def best_pair(
    numbers: Sequence[SnailfishNumber],
    *,
    config: ReductionConfig | None = None,
) -> PairwiseResult:
    """The ordered pair of distinct positions whose sum has the largest magnitude."""

    if len(numbers) < 2:
        raise EmptyInputError(f"max_pairwise requires at least two numbers, got {len(numbers)}")

    best: PairwiseResult | None = None
    for i, j, value in pairwise_magnitudes(numbers, config=config):
        if best is None or value > best.magnitude:
            best = PairwiseResult(left_index=i, right_index=j, magnitude=value)

    assert best is not None
    logger.debug("best pair %d+%d with magnitude %d", best.left_index, best.right_index, best.magnitude)
    return best


def max_pairwise(
    numbers: Sequence[SnailfishNumber],
    *,
    config: ReductionConfig | None = None,
) -> int:
    return best_pair(numbers, config=config).magnitude
