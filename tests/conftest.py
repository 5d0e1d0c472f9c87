import pytest

from shared.models.match import MatchInfoModel


def build_match(version: str, *boards) -> MatchInfoModel:
    """
    boards: (placement, [(character_id, [item, ...]), ...]) tuples.
    """
    return MatchInfoModel.model_validate({
        "game_version": version,
        "participants": [
            {
                "placement": placement,
                "units": [{"character_id": cid, "items": items} for cid, items in units],
            }
            for placement, units in boards
        ],
    })


@pytest.fixture
def make_match():
    return build_match


@pytest.fixture
def raw_match():
    """A trimmed match detail response as returned by the Riot API."""
    return {
        "metadata": {
            "data_version": "6",
            "match_id": "NA1_4851234567",
            "participants": ["puuid-a", "puuid-b"],
        },
        "info": {
            "game_datetime": 1702000000000,
            "game_length": 2012.5,
            "game_version": "Version 13.24.545.1234 (Dec 05 2023/11:22:33) [PUBLIC] <Releases/13.24>",
            "participants": [
                {
                    "placement": 1,
                    "puuid": "puuid-a",
                    "units": [
                        {"character_id": "TFT10_Jinx", "items": [44, 16], "tier": 2},
                        {"character_id": "TFT10_Vi", "items": [], "tier": 2},
                    ],
                },
                {
                    "placement": 5,
                    "puuid": "puuid-b",
                    "units": [
                        {"character_id": "TFT10_Ahri", "tier": 3},
                    ],
                },
            ],
        },
    }
