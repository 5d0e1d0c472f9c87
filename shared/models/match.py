from pydantic import BaseModel, ConfigDict, Field, field_validator


class UnitModel(BaseModel):
    model_config = ConfigDict(frozen=True)

    character_id: str
    items: list[int] = Field(default_factory=list)  # multiset, duplicates are meaningful

    @field_validator("items", mode="before")
    @classmethod
    def _items_or_empty(cls, value):
        # Missing / null / non-list item fields count as an itemless unit
        if not isinstance(value, list):
            return []
        return value


class ParticipantModel(BaseModel):
    placement: int | None = None  # 1 = best, None when the API omits it
    units: list[UnitModel] = Field(default_factory=list)


class MatchInfoModel(BaseModel):
    game_version: str = ""
    participants: list[ParticipantModel] | None = None


class MatchMetadataModel(BaseModel):
    data_version: str = ""
    match_id: str = ""
    participants: list[str] = Field(default_factory=list)


class MatchResponseModel(BaseModel):
    """
    Represents the full response from the match detail endpoint.
    e.g. GET /tft/match/v1/matches/{matchId}

    Only the fields the aggregation reads are declared, everything else
    in the payload is ignored.
    """
    metadata: MatchMetadataModel | None = None
    info: MatchInfoModel
