from shared.models.league import LeagueEntryModel, LeagueListModel, SummonerModel
from shared.models.match import MatchInfoModel, MatchResponseModel, ParticipantModel, UnitModel
from shared.models.snapshot import CompCountsRowModel, CompOutputModel, SnapshotModel, UnitOutputModel

__all__ = [
    "CompCountsRowModel",
    "CompOutputModel",
    "LeagueEntryModel",
    "LeagueListModel",
    "MatchInfoModel",
    "MatchResponseModel",
    "ParticipantModel",
    "SnapshotModel",
    "SummonerModel",
    "UnitModel",
    "UnitOutputModel",
]
