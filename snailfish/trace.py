from __future__ import annotations

import io
import json
from typing import Dict, Iterable, List, Optional

from snailfish.runtime import Event


class JSONLTracer:
    """Event hook that writes one JSON record per rewrite to a file-like sink.

    ``rules`` restricts tracing to the named rewrite rules.
    """

    def __init__(self, sink: io.TextIOBase, rules: Optional[Iterable[str]] = None):
        self.sink = sink
        self.rules = set(rules) if rules is not None else None
        self.count = 0

    def __call__(self, event: Event) -> None:
        if self.rules is not None and event.rule not in self.rules:
            return
        self.sink.write(json.dumps(event.to_record()))
        self.sink.write("\n")
        self.sink.flush()
        self.count += 1


class EventCounter:
    """Event hook tallying rewrites per rule and carries lost off either edge."""

    def __init__(self) -> None:
        self.rule_counts: Dict[str, int] = {}
        self.dropped: Dict[str, int] = {}

    def __call__(self, event: Event) -> None:
        self.rule_counts[event.rule] = self.rule_counts.get(event.rule, 0) + 1
        side = event.detail.get("dropped")
        if side is not None:
            self.dropped[str(side)] = self.dropped.get(str(side), 0) + 1

    def summary(self) -> Dict[str, object]:
        return {"rule_counts": dict(self.rule_counts), "dropped_carries": dict(self.dropped)}


def dump_events(events: Iterable[Event]) -> List[dict]:
    """Convert an event stream to JSON-serializable dicts."""

    return [ev.to_record() for ev in events]
