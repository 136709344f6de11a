from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from snailfish.config import DEFAULT_CONFIG, ReductionConfig, validate_config
from snailfish.constraints import is_reduced
from snailfish.rewrite import REDUCTION_RULES, Rule
from snailfish.tree import SnailfishNumber

logger = logging.getLogger(__name__)


class ReductionBudgetExceeded(RuntimeError):
    """Raised when a step budget stops reduction short of its fixed point."""


@dataclass
class Event:
    step: int
    rule: str
    before: str
    after: str
    detail: Dict[str, object] = field(default_factory=dict)

    def to_record(self) -> Dict[str, object]:
        """JSON-ready event representation for tracing."""

        return {
            "step": self.step,
            "rule": self.rule,
            "before": self.before,
            "after": self.after,
            "detail": dict(self.detail),
        }


class Reducer:
    """Fixed-point driver for snailfish rewrites.

    Each ``step`` tries the rules in priority order and applies the first one
    that fires, so an explode is always preferred over a split and the search
    restarts from the top after every rewrite.
    """

    def __init__(
        self,
        config: ReductionConfig | None = None,
        rules: Optional[Sequence[Rule]] = None,
        event_hooks: Optional[List[Callable[[Event], None]]] = None,
    ):
        self.config = config if config is not None else DEFAULT_CONFIG
        validate_config(self.config)

        self.rules: List[Rule] = list(rules) if rules is not None else list(REDUCTION_RULES)
        if not self.rules:
            raise ValueError("Reducer requires at least one rule")
        names = [rule.name for rule in self.rules]
        if len(set(names)) != len(names):
            raise ValueError(f"Duplicate rule names: {names}")

        self.event_hooks: List[Callable[[Event], None]] = event_hooks or []
        self.number: Optional[SnailfishNumber] = None
        self.events: List[Event] = []
        self.rule_counts: Dict[str, int] = {}
        self.idle = False
        self.exhausted_budget = False

    def _reset_state(self) -> None:
        self.events.clear()
        self.rule_counts.clear()
        self.idle = False
        self.exhausted_budget = False

    def load(self, number: SnailfishNumber) -> None:
        self._reset_state()
        self.number = number

    def step(self) -> Optional[Event]:
        if self.number is None:
            raise RuntimeError("No number loaded; call load() first")
        if self.idle:
            return None

        before = str(self.number)
        for rule in self.rules:
            detail = rule.apply(self.number, self.config)
            if detail is None:
                continue

            event = Event(
                step=len(self.events) + 1,
                rule=rule.name,
                before=before,
                after=str(self.number),
                detail=detail,
            )
            self.events.append(event)
            self.rule_counts[rule.name] = self.rule_counts.get(rule.name, 0) + 1
            for hook in self.event_hooks:
                hook(event)
            return event

        self.idle = True
        return None

    def run_until_idle(self) -> List[Event]:
        """Apply rewrites until no rule fires or the step budget is spent."""

        emitted: List[Event] = []
        max_steps = self.config.max_steps
        while not self.idle:
            if max_steps is not None and len(emitted) >= max_steps:
                self.exhausted_budget = not is_reduced(self.number, self.config)
                if self.exhausted_budget:
                    logger.warning("reduction stopped after %d steps with rewrites pending", len(emitted))
                break
            event = self.step()
            if event is not None:
                emitted.append(event)
        return emitted

    def stats(self) -> Dict[str, object]:
        """Summaries of reducer activity."""

        return {
            "events": len(self.events),
            "rule_counts": dict(self.rule_counts),
            "idle": self.idle,
            "budget_exhausted": self.exhausted_budget,
        }


def reduce_number(
    number: SnailfishNumber,
    config: ReductionConfig | None = None,
    event_hooks: Optional[List[Callable[[Event], None]]] = None,
) -> List[Event]:
    """Reduce ``number`` in place and return the rewrite events."""

    reducer = Reducer(config=config, event_hooks=event_hooks)
    reducer.load(number)
    events = reducer.run_until_idle()
    if reducer.exhausted_budget:
        raise ReductionBudgetExceeded(
            f"reduction did not reach a fixed point within {reducer.config.max_steps} steps"
        )
    return events
