from pydantic import BaseModel, Field


class LeagueEntryModel(BaseModel):
    """
    Represents a single player entry within a league response.
    Older payloads only carry summonerId, newer ones carry puuid as well.
    """
    summonerId: str | None = None
    puuid: str | None = None
    leaguePoints: int = 0
    rank: str | None = None


class LeagueListModel(BaseModel):
    """
    Represents the full response from the apex tier league endpoints.
    e.g. GET /tft/league/v1/challenger
    """
    tier: str = ""
    leagueId: str = ""
    entries: list[LeagueEntryModel] = Field(default_factory=list)


class SummonerModel(BaseModel):
    """
    e.g. GET /tft/summoner/v1/summoners/{encryptedSummonerId}
    """
    puuid: str
