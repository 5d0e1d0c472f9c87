from collections.abc import Iterable

from pydantic import BaseModel, Field

# Placement counted for a participant whose placement is missing.
# 8 players per lobby, so 9 is worse than any real finish.
MISSING_PLACEMENT = 9


class CompCounts(BaseModel):
    """
    Mutable aggregate for one (patch, comp_key) pair.

    Identity fields and unit_set are fixed at creation. Counters only grow,
    through counting a batch or merging another state in.

    units maps character_id -> item_id -> times observed. Each entry owns its
    histograms outright, they are never shared with another entry.
    """

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------
    patch: str
    comp_key: str
    unit_set: list[str] = Field(default_factory=list)

    # -------------------------------------------------------------------------
    # Counters
    # -------------------------------------------------------------------------
    picks: int = 0
    wins: int = 0
    placement_sum: int = 0
    units: dict[str, dict[int, int]] = Field(default_factory=dict)

    @property
    def key(self) -> tuple[str, str]:
        return self.patch, self.comp_key


# (patch, comp_key) -> CompCounts. Unit of persistence and of merge.
AccumulatorState = dict[tuple[str, str], CompCounts]


def add_items(histogram: dict[int, int], items: Iterable[int]) -> None:
    for item in items:
        histogram[item] = histogram.get(item, 0) + 1
