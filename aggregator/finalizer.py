from aggregator.state import AccumulatorState, CompCounts
from shared.models.snapshot import CompOutputModel, UnitOutputModel

TOP_ITEMS = 3
FREQ_DECIMALS = 3


def item_frequencies(histogram: dict[int, int]) -> list[tuple[int, float]]:
    """
    Share of each item in a unit's total item observations.
    e.g. {5: 2, 7: 1} -> [(5, 0.667), (7, 0.333)]

    Sorted by share descending, equal shares by ascending item id.
    A unit with zero observations gets a share of 0 for every recorded item.
    """
    total = sum(histogram.values())
    ranked = sorted(histogram.items(), key=lambda kv: (-kv[1], kv[0]))
    if not total:
        return [(item, 0.0) for item, _count in ranked]
    return [(item, round(count / total, FREQ_DECIMALS)) for item, count in ranked]


def _finalize_entry(counts: CompCounts) -> CompOutputModel:
    units = []
    for character_id in counts.unit_set:
        freq = item_frequencies(counts.units.get(character_id, {}))
        units.append(UnitOutputModel(
            character_id=character_id,
            top_items=[item for item, _share in freq[:TOP_ITEMS]],
            item_freq=freq,
        ))

    return CompOutputModel(
        patch=counts.patch,
        comp_key=counts.comp_key,
        picks=counts.picks,
        avg_placement=round(counts.placement_sum / counts.picks, 2),
        winrate=round(counts.wins / counts.picks * 100, 1),
        unit_set=list(counts.unit_set),
        units=units,
    )


def finalize_output(state: AccumulatorState, min_picks: int) -> list[CompOutputModel]:
    """
    Turns raw counts into ranked report rows. Pure, `state` is not modified.

    Entries with fewer than `min_picks` picks are dropped. Rows are ordered by
    average placement ascending, then picks descending, then (patch, comp_key)
    so equal rows always come out in the same order.

    Raises:
        ValueError: if min_picks is negative.
    """
    if min_picks < 0:
        raise ValueError(f"min_picks must be non-negative, got {min_picks}")

    rows = [
        _finalize_entry(counts)
        for counts in state.values()
        # picks == 0 only happens with min_picks == 0 and a hand-built state
        if counts.picks >= min_picks and counts.picks > 0
    ]
    rows.sort(key=lambda r: (r.avg_placement, -r.picks, r.patch, r.comp_key))
    return rows
