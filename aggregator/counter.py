import logging
import re
from collections.abc import Iterable

from aggregator.signature import derive
from aggregator.state import MISSING_PLACEMENT, AccumulatorState, CompCounts, add_items
from shared.models.match import MatchInfoModel

logger = logging.getLogger(__name__)

_PATCH_RE = re.compile(r"(\d+)\.(\d+)")


def parse_game_version(raw_version: str) -> str:
    """
    Extracts a clean patch string from the raw game_version field.
    e.g. "Version 13.24.545.1234 (Dec 05 2023/11:22:33) [PUBLIC] " → "13.24"

    Falls back to the stripped raw string when no major.minor pair is found.
    """
    match = _PATCH_RE.search(raw_version)
    if match:
        return f"{match.group(1)}.{match.group(2)}"
    return raw_version.strip()


def count_matches(matches: Iterable[MatchInfoModel]) -> AccumulatorState:
    """
    Builds a fresh accumulator state from one batch of matches.

    One pick per participant board, keyed by (patch, composition key).
    Matches without a participant list are skipped. A missing placement
    counts as MISSING_PLACEMENT towards placement_sum and is never a win.

    Args:
        matches: Validated match info objects, see crawler.services.match_parser.

    Returns:
        New AccumulatorState holding only this batch's counts.
    """
    state: AccumulatorState = {}
    skipped = 0

    for match in matches:
        if match.participants is None:
            skipped += 1
            continue

        patch = parse_game_version(match.game_version)

        for participant in match.participants:
            comp_key, units_present = derive(participant.units)

            entry = state.get((patch, comp_key))
            if entry is None:
                entry = CompCounts(patch=patch, comp_key=comp_key, unit_set=units_present)
                state[entry.key] = entry

            placement = participant.placement
            entry.picks += 1
            if placement == 1:
                entry.wins += 1
            entry.placement_sum += placement if placement is not None else MISSING_PLACEMENT

            # Histogram is created even for itemless units
            for unit in participant.units:
                add_items(entry.units.setdefault(unit.character_id, {}), unit.items)

    if skipped:
        logger.debug("Skipped %d matches without participants", skipped)
    return state
