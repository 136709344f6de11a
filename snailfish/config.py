from __future__ import annotations

from dataclasses import dataclass

MAX_DEPTH = 4
SPLIT_THRESHOLD = 10


@dataclass(frozen=True)
class ReductionConfig:
    """Bounds that drive the explode/split fixed point.

    ``max_depth`` counts enclosing pairs: a pair nested inside ``max_depth``
    other pairs explodes. ``split_threshold`` is the smallest leaf value that
    splits. ``max_steps`` optionally caps the rewrites of a single reduction.
    """

    max_depth: int = MAX_DEPTH
    split_threshold: int = SPLIT_THRESHOLD
    max_steps: int | None = None


DEFAULT_CONFIG = ReductionConfig()


def validate_config(config: ReductionConfig) -> None:
    """Reject bounds under which reduction is undefined or cannot terminate."""

    if config.max_depth <= 0:
        raise ValueError("max_depth must be positive")
    if config.split_threshold < 2:
        raise ValueError("split_threshold must be at least 2")
    if config.max_steps is not None and config.max_steps <= 0:
        raise ValueError("max_steps must be positive when provided")
