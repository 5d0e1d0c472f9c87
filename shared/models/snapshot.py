from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CompCountsRowModel(BaseModel):
    """
    Represents one persisted accumulator entry inside a snapshot file.
    Raw counts only, so later runs can keep adding to them exactly.

    units is a list of [character_id, [[item_id, count], ...]] pairs.
    """
    patch: str
    comp_key: str
    picks: int = Field(ge=0)
    wins: int = Field(ge=0)
    # Older snapshots spell this field sumPlacement
    placement_sum: int = Field(
        ge=0,
        validation_alias=AliasChoices("placement_sum", "sumPlacement"),
    )
    unit_set: list[str] = Field(default_factory=list)
    units: list[tuple[str, list[tuple[int, int]]]] = Field(default_factory=list)


class UnitOutputModel(BaseModel):
    character_id: str
    top_items: list[int]
    item_freq: list[tuple[int, float]]  # [item_id, share], share descending


class CompOutputModel(BaseModel):
    """
    A finalized, read-only report row for one composition on one patch.
    Built fresh from raw counts on every run, never merged.
    """
    model_config = ConfigDict(frozen=True)

    patch: str
    comp_key: str
    picks: int
    avg_placement: float  # 2 dp
    winrate: float        # percent, 1 dp
    unit_set: list[str]
    units: list[UnitOutputModel]


class SnapshotModel(BaseModel):
    """
    Represents the full snapshot file written at the end of a run.
    e.g. data/top_comps_MASTER_NA1.json
    """
    model_config = ConfigDict(populate_by_name=True)

    generated_at: str = ""
    platform: str = ""
    region: str = ""
    tier: str = ""
    division: str = ""
    min_picks: int = 0
    top_n: int = 0
    top: list[CompOutputModel] = Field(default_factory=list)
    raw_counts: list[CompCountsRowModel] = Field(default_factory=list, alias="__raw_counts")
