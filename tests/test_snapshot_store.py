import json

import pytest

from aggregator.counter import count_matches
from crawler.services.snapshot_store import (
    SnapshotCorruptError,
    load_prev_counts,
    rows_from_state,
    save_snapshot,
    snapshot_path,
    state_from_rows,
)

META = dict(platform="NA1", region="AMERICAS", tier="MASTER", division="I")


@pytest.fixture
def state(make_match):
    return count_matches([
        make_match("13.24.1", (1, [("Jinx", [1, 2]), ("Vi", [])]), (3, [("Jinx", [2, 1]), ("Vi", [])])),
        make_match("13.24.1", (2, [("Ekko", [5, 5, 7])]), (8, [("Ahri", [])])),
    ])


def _dump(state):
    return {key: counts.model_dump() for key, counts in state.items()}


def test_snapshot_path(tmp_path):
    assert snapshot_path(tmp_path, "MASTER", "NA1") == tmp_path / "top_comps_MASTER_NA1.json"


def test_rows_round_trip_exactly(state):
    assert _dump(state_from_rows(rows_from_state(state))) == _dump(state)


def test_save_then_load_keeps_raw_counts(tmp_path, state):
    path = tmp_path / "nested" / "snap.json"

    save_snapshot(path, state, min_picks=1, top_n=20, **META)

    assert _dump(load_prev_counts(path)) == _dump(state)


def test_snapshot_envelope(tmp_path, state):
    path = save_snapshot(tmp_path / "snap.json", state, min_picks=2, top_n=1, **META)

    data = json.loads(path.read_text(encoding="utf-8"))

    assert data["platform"] == "NA1"
    assert data["tier"] == "MASTER"
    assert data["min_picks"] == 2
    assert data["generated_at"]
    assert len(data["__raw_counts"]) == len(state)
    assert [row["comp_key"] for row in data["top"]] == ["Jinx:1.2|Vi:"]
    jinx_row = next(r for r in data["__raw_counts"] if r["comp_key"] == "Jinx:1.2|Vi:")
    assert jinx_row["placement_sum"] == 4
    assert ["Jinx", [[1, 2], [2, 2]]] in jinx_row["units"]


def test_missing_file_is_empty_state(tmp_path):
    assert load_prev_counts(tmp_path / "nope.json") == {}


def test_unreadable_file_is_empty_state(tmp_path):
    # a directory exists but cannot be opened as a file
    assert load_prev_counts(tmp_path) == {}


@pytest.mark.parametrize(
    "content",
    [
        b"{not json",
        b"[1, 2, 3]",
        b'{"__raw_counts": [\xff\xfe]}',
        json.dumps({"__raw_counts": [{"patch": "13.24", "comp_key": "X"}]}).encode(),
        json.dumps({"__raw_counts": [{
            "patch": "13.24", "comp_key": "X", "picks": -1, "wins": 0,
            "placement_sum": 0, "unit_set": [], "units": [],
        }]}).encode(),
    ],
)
def test_corrupt_snapshot_raises(tmp_path, content):
    path = tmp_path / "snap.json"
    path.write_bytes(content)

    with pytest.raises(SnapshotCorruptError):
        load_prev_counts(path)


def test_legacy_snapshot_field_names(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({
        "generated_at": "2024-01-01T00:00:00.000Z",
        "top20": [],
        "__raw_counts": [{
            "patch": "13.24",
            "comp_key": "Jinx:1.2",
            "picks": 50,
            "wins": 9,
            "sumPlacement": 210,
            "unit_set": ["Jinx"],
            "units": [["Jinx", [[1, 50], [2, 50]]]],
        }],
    }), encoding="utf-8")

    state = load_prev_counts(path)
    entry = state[("13.24", "Jinx:1.2")]

    assert entry.placement_sum == 210
    assert entry.units == {"Jinx": {1: 50, 2: 50}}


def test_snapshot_without_raw_counts_is_empty(tmp_path):
    path = tmp_path / "snap.json"
    path.write_text(json.dumps({"generated_at": "x"}), encoding="utf-8")

    assert load_prev_counts(path) == {}
