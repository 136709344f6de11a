from snailfish.config import DEFAULT_CONFIG, MAX_DEPTH, SPLIT_THRESHOLD, ReductionConfig  # noqa: F401
from snailfish.constraints import (  # noqa: F401
    StructuralMetrics,
    is_reduced,
    measure_structure,
    validate_reduced,
)
from snailfish.driver import (  # noqa: F401
    EmptyInputError,
    PairwiseResult,
    add_numbers,
    best_pair,
    max_pairwise,
    pairwise_magnitudes,
    sum_all,
    sum_magnitude,
)
from snailfish.magnitude import magnitude  # noqa: F401
from snailfish.parser import ParseError, number_from_list, parse_lines, parse_number  # noqa: F401
from snailfish.rewrite import (  # noqa: F401
    EXPLODE,
    REDUCTION_RULES,
    SPLIT,
    Carry,
    Explosion,
    InvariantViolation,
    Rule,
    explode,
    split,
    split_value,
)
from snailfish.runtime import Event, ReductionBudgetExceeded, Reducer, reduce_number  # noqa: F401
from snailfish.trace import EventCounter, JSONLTracer, dump_events  # noqa: F401
from snailfish.tree import Direction, Node, Pair, SnailfishNumber, Value, render  # noqa: F401
