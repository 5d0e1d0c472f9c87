import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError

from aggregator.finalizer import finalize_output
from aggregator.state import AccumulatorState, CompCounts
from shared.models.snapshot import CompCountsRowModel, SnapshotModel

logger = logging.getLogger(__name__)


class SnapshotCorruptError(Exception):
    pass


def snapshot_path(data_dir: str | Path, tier: str, platform: str) -> Path:
    return Path(data_dir) / f"top_comps_{tier}_{platform}.json"


def rows_from_state(state: AccumulatorState) -> list[CompCountsRowModel]:
    """
    Flattens the accumulator state into persisted rows, raw counts only.
    """
    return [
        CompCountsRowModel(
            patch=c.patch,
            comp_key=c.comp_key,
            picks=c.picks,
            wins=c.wins,
            placement_sum=c.placement_sum,
            unit_set=list(c.unit_set),
            units=[(cid, list(bag.items())) for cid, bag in c.units.items()],
        )
        for c in state.values()
    ]


def state_from_rows(rows: list[CompCountsRowModel]) -> AccumulatorState:
    state: AccumulatorState = {}
    for row in rows:
        counts = CompCounts(
            patch=row.patch,
            comp_key=row.comp_key,
            unit_set=list(row.unit_set),
            picks=row.picks,
            wins=row.wins,
            placement_sum=row.placement_sum,
            units={cid: dict(items) for cid, items in row.units},
        )
        state[counts.key] = counts
    return state


def load_prev_counts(path: str | Path) -> AccumulatorState:
    """
    Loads the accumulator state persisted by a previous run.

    A missing or unreadable file means "no prior state" and yields an empty
    state. A file that reads fine but does not parse raises
    SnapshotCorruptError, since dropping it would silently reset the counts.
    """
    path = Path(path)
    if not path.exists():
        logger.info("No previous snapshot at %s", path)
        return {}

    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.warning("Could not read previous snapshot %s: %s", path, e)
        return {}

    # Bytes go straight to pydantic so bad encoding is a ValidationError too
    try:
        snapshot = SnapshotModel.model_validate_json(raw)
    except ValidationError as e:
        raise SnapshotCorruptError(f"{path} is not a valid snapshot: {e}") from e

    state = state_from_rows(snapshot.raw_counts)
    logger.info("Loaded %d compositions from %s", len(state), path)
    return state


def save_snapshot(
    path: str | Path,
    state: AccumulatorState,
    *,
    platform: str,
    region: str,
    tier: str,
    division: str,
    min_picks: int,
    top_n: int = 20,
) -> Path:
    """
    Writes the snapshot file: run metadata, the finalized top-N rows for
    consumers, and every raw count for exact accumulation by the next run.
    """
    path = Path(path)

    snapshot = SnapshotModel(
        generated_at=datetime.now(timezone.utc).isoformat(),
        platform=platform,
        region=region,
        tier=tier,
        division=division,
        min_picks=min_picks,
        top_n=top_n,
        top=finalize_output(state, min_picks)[:top_n],
        raw_counts=rows_from_state(state),
    )

    os.makedirs(path.parent, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(snapshot.model_dump(mode="json", by_alias=True), f, indent=2)

    return path
