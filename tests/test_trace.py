import io
import json

from snailfish.parser import parse_number
from snailfish.runtime import Reducer, reduce_number
from snailfish.trace import EventCounter, JSONLTracer, dump_events


def test_jsonl_tracer_captures_reducer_events():
    sink = io.StringIO()
    tracer = JSONLTracer(sink)

    reduce_number(parse_number("[[[[[9,8],1],2],3],4]"), event_hooks=[tracer])

    lines = [line for line in sink.getvalue().splitlines() if line]
    assert len(lines) == 1
    assert tracer.count == 1

    record = json.loads(lines[0])
    assert record == {
        "step": 1,
        "rule": "explode",
        "before": "[[[[[9,8],1],2],3],4]",
        "after": "[[[[0,9],2],3],4]",
        "detail": {"left": 9, "right": 8, "dropped": "left"},
    }


def test_dump_events_serializes_event_stream():
    reducer = Reducer()
    reducer.load(parse_number("[11,1]"))
    events = reducer.run_until_idle()

    records = dump_events(events)

    assert records == [
        {"step": 1, "rule": "split", "before": "[11,1]", "after": "[[5,6],1]", "detail": {"value": 11}}
    ]


def test_jsonl_tracer_can_filter_rules():
    sink = io.StringIO()
    tracer = JSONLTracer(sink, rules=["split"])

    reduce_number(parse_number("[[[[[4,3],4],4],[7,[[8,4],9]]],[1,1]]"), event_hooks=[tracer])

    rules = [json.loads(line)["rule"] for line in sink.getvalue().splitlines()]
    assert rules == ["split", "split"]
    assert tracer.count == 2


def test_event_counter_tallies_rules_and_dropped_carries():
    counter = EventCounter()

    reduce_number(parse_number("[[[[[9,8],1],2],3],4]"), event_hooks=[counter])
    reduce_number(parse_number("[7,[6,[5,[4,[3,2]]]]]"), event_hooks=[counter])
    reduce_number(parse_number("[11,1]"), event_hooks=[counter])

    assert counter.summary() == {
        "rule_counts": {"explode": 2, "split": 1},
        "dropped_carries": {"left": 1, "right": 1},
    }
