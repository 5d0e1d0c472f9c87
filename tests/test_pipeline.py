import json
from unittest.mock import MagicMock

import pytest

from crawler import pipeline
from shared.config import Settings
from shared.models.league import LeagueEntryModel


def _match(match_id, boards):
    return {
        "metadata": {"match_id": match_id},
        "info": {
            "game_version": "Version 13.24.545.1234 (Dec 05 2023/11:22:33) [PUBLIC]",
            "participants": [
                {"placement": placement, "units": [{"character_id": cid, "items": items} for cid, items in units]}
                for placement, units in boards
            ],
        },
    }


@pytest.fixture
def settings(tmp_path):
    return Settings(
        RIOT_API_KEY="RGAPI-test",
        TIER="CHALLENGER",
        PLATFORM="NA1",
        DATA_DIR=str(tmp_path),
        MIN_PICKS=2,
        SUMMONER_CONCURRENCY=2,
        MATCH_IDS_CONCURRENCY=2,
        MATCH_CONCURRENCY=2,
    )


@pytest.fixture
def client():
    c = MagicMock()
    c.league_list.return_value = [
        LeagueEntryModel(puuid="p1"),
        LeagueEntryModel(puuid="p2"),
    ]
    c.match_ids_by_puuid.side_effect = lambda puuid, count: {"p1": ["NA1_1", "NA1_2"], "p2": ["NA1_2"]}[puuid]
    matches = {
        "NA1_1": _match("NA1_1", [(1, [("Jinx", [1, 2])]), (4, [("Vi", [])])]),
        "NA1_2": _match("NA1_2", [(3, [("Jinx", [2, 1])]), (2, [("Vi", [])])]),
    }
    c.get_match.side_effect = matches.__getitem__
    return c


def test_run_writes_snapshot(settings, client):
    path = pipeline.run(settings, client=client)

    data = json.loads(path.read_text(encoding="utf-8"))

    assert path.name == "top_comps_CHALLENGER_NA1.json"
    assert data["min_picks"] == 2
    assert [r["comp_key"] for r in data["top"]] == ["Jinx:1.2", "Vi:"]
    jinx = data["top"][0]
    assert jinx["picks"] == 2
    assert jinx["avg_placement"] == 2.0
    assert jinx["winrate"] == 50.0
    assert sum(r["picks"] for r in data["__raw_counts"]) == 4


def test_second_run_accumulates(settings, client):
    pipeline.run(settings, client=client)
    path = pipeline.run(settings, client=client)

    data = json.loads(path.read_text(encoding="utf-8"))
    rows = {r["comp_key"]: r for r in data["__raw_counts"]}

    assert rows["Jinx:1.2"]["picks"] == 4
    assert rows["Jinx:1.2"]["wins"] == 2
    assert rows["Jinx:1.2"]["placement_sum"] == 8
    assert rows["Vi:"]["picks"] == 4


def test_main_requires_api_key(monkeypatch):
    monkeypatch.setattr(pipeline, "default_settings", Settings(RIOT_API_KEY=""))
    run = MagicMock()
    monkeypatch.setattr(pipeline, "run", run)

    assert pipeline.main([]) == 1
    run.assert_not_called()


def test_main_applies_overrides(monkeypatch):
    monkeypatch.setattr(pipeline, "default_settings", Settings(RIOT_API_KEY="RGAPI-test", PLATFORM="NA1"))
    run = MagicMock()
    monkeypatch.setattr(pipeline, "run", run)

    assert pipeline.main(["--tier", "diamond", "--division", "ii", "--min-picks", "5"]) == 0

    used = run.call_args.args[0]
    assert used.TIER == "DIAMOND"
    assert used.DIVISION == "II"
    assert used.MIN_PICKS == 5
    assert used.PLATFORM == "NA1"
