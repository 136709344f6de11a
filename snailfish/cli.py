from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterable, List

from snailfish.config import DEFAULT_CONFIG, ReductionConfig
from snailfish.driver import best_pair, sum_all
from snailfish.logging_config import setup_logging
from snailfish.magnitude import magnitude
from snailfish.parser import parse_lines
from snailfish.trace import EventCounter, JSONLTracer

logger = logging.getLogger("snailfish.cli")


def _read_lines(path: str) -> List[str]:
    """Load input lines from a file path or stdin.

    Passing ``-`` reads from stdin to support piping numbers into the CLI.
    """

    if path == "-":
        return sys.stdin.read().splitlines()

    target = Path(path)
    if not target.exists():
        raise FileNotFoundError(path)
    return target.read_text().splitlines()


def _resolve_config(args: argparse.Namespace) -> ReductionConfig:
    overrides = {}
    if args.max_depth is not None:
        overrides["max_depth"] = args.max_depth
    if args.split_threshold is not None:
        overrides["split_threshold"] = args.split_threshold
    if args.max_steps is not None:
        overrides["max_steps"] = args.max_steps
    return replace(DEFAULT_CONFIG, **overrides)


def run_cli(argv: Iterable[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Add up snailfish numbers and report the magnitudes of the total and the best pair."
    )
    parser.add_argument("input", help="File with one snailfish number per line ('-' reads stdin)")
    parser.add_argument("--json", action="store_true", help="Print a JSON summary instead of two plain lines")
    parser.add_argument(
        "--trace-jsonl",
        dest="trace_jsonl",
        help="Write the rewrite events of the running sum to a JSONL file",
    )
    parser.add_argument(
        "--trace-rule",
        action="append",
        dest="trace_rules",
        help="Only trace events of this rule (explode or split, can repeat)",
    )
    parser.add_argument("--max-depth", dest="max_depth", type=int, help="Pair nesting that triggers an explode")
    parser.add_argument(
        "--split-threshold",
        dest="split_threshold",
        type=int,
        help="Smallest leaf value that splits",
    )
    parser.add_argument(
        "--max-steps",
        dest="max_steps",
        type=int,
        help="Abort any single reduction that needs more rewrites than this",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        help="Verbosity of diagnostic logs written to stderr",
    )

    args = parser.parse_args(list(argv) if argv is not None else None)
    setup_logging(getattr(logging, args.log_level))

    sink = None

    try:
        config = _resolve_config(args)
        numbers = parse_lines(_read_lines(args.input))
        logger.info("parsed %d numbers from %s", len(numbers), args.input)
        counter = EventCounter()
        hooks: list = [counter]
        if args.trace_jsonl:
            sink = open(args.trace_jsonl, "w", encoding="utf-8")
            hooks.append(JSONLTracer(sink, rules=args.trace_rules))

        total = sum_all(numbers, config=config, event_hooks=hooks)
        sum_magnitude = magnitude(total)
        best = best_pair(numbers, config=config)
        logger.info("sum magnitude %d, best pair magnitude %d", sum_magnitude, best.magnitude)

        if args.json:
            summary = {
                "numbers": len(numbers),
                "sum": str(total),
                "sum_magnitude": sum_magnitude,
                "max_pairwise_magnitude": best.magnitude,
                "best_pair": [best.left_index, best.right_index],
                **counter.summary(),
            }
            print(json.dumps(summary, indent=2))
        else:
            print(sum_magnitude)
            print(best.magnitude)
        return 0
    except Exception as exc:  # pragma: no cover - defensive shell entry
        print(f"snailfish: {exc}", file=sys.stderr)
        return 1
    finally:
        if sink is not None:
            sink.close()


def main() -> int:  # pragma: no cover - thin wrapper
    return run_cli()


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    sys.exit(main())
