from aggregator.counter import count_matches, parse_game_version
from aggregator.finalizer import finalize_output, item_frequencies
from aggregator.merger import merge_counts
from aggregator.signature import comp_signature, derive, unit_set
from aggregator.state import MISSING_PLACEMENT, AccumulatorState, CompCounts

__all__ = [
    "MISSING_PLACEMENT",
    "AccumulatorState",
    "CompCounts",
    "comp_signature",
    "count_matches",
    "derive",
    "finalize_output",
    "item_frequencies",
    "merge_counts",
    "parse_game_version",
    "unit_set",
]
