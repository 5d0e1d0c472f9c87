from aggregator.state import AccumulatorState


def merge_counts(base: AccumulatorState, add: AccumulatorState) -> AccumulatorState:
    """
    Folds `add` into `base` in place and returns `base`.

    Shared keys are combined additively (picks, wins, placement_sum and every
    item count). Keys only present in `add` are deep-copied into `base` so the
    two states never share an entry.

    Not idempotent: merging the same batch twice double-counts it. Callers
    must merge each batch at most once.
    """
    for key, counts in add.items():
        current = base.get(key)
        if current is None:
            base[key] = counts.model_copy(deep=True)
            continue

        current.picks += counts.picks
        current.wins += counts.wins
        current.placement_sum += counts.placement_sum

        # Older snapshots may lack a histogram for some units of the comp
        for character_id, histogram in counts.units.items():
            dest = current.units.setdefault(character_id, {})
            for item, count in histogram.items():
                dest[item] = dest.get(item, 0) + count

    return base
