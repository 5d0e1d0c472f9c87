import logging
from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed

import requests

from crawler.api.riot import APEX_TIERS, RiotApiError, RiotClient
from shared.models.league import LeagueEntryModel

logger = logging.getLogger(__name__)

# Failures a single fetch may raise without aborting the batch
FETCH_ERRORS = (RiotApiError, requests.RequestException, ValueError)


def _fan_out(fn: Callable, args: Iterable, workers: int, label: str) -> list:
    """
    Runs fn over args on a bounded thread pool.
    Failed calls are logged and dropped, results keep completion order.
    """
    results = []
    failed = 0
    with ThreadPoolExecutor(max_workers=max(1, workers)) as executor:
        futures = {executor.submit(fn, arg): arg for arg in args}
        for future in as_completed(futures):
            try:
                results.append(future.result())
            except FETCH_ERRORS as e:
                failed += 1
                logger.warning("[%s] %s failed: %s", label, futures[future], e)

    if failed:
        logger.info("[%s] %d ok, %d failed", label, len(results), failed)
    return results


def seed_summoners(client: RiotClient, tier: str, division: str, pages: int) -> list[LeagueEntryModel]:
    """
    Ladder entries to seed the crawl from.
    Apex tiers come from one league list call, lower tiers are paged.
    """
    if tier.upper() in APEX_TIERS:
        return client.league_list(tier)

    entries: list[LeagueEntryModel] = []
    for page in range(1, pages + 1):
        batch = client.league_entries(tier, division, page)
        if not batch:
            break
        entries.extend(batch)
    return entries


def resolve_puuids(client: RiotClient, entries: list[LeagueEntryModel], cap: int, workers: int) -> list[str]:
    """
    Deduplicated puuids for the first `cap` ladder entries.
    Entries that already carry a puuid skip the summoner lookup.
    """
    entries = entries[:cap]
    puuids = [e.puuid for e in entries if e.puuid]
    to_lookup = [e.summonerId for e in entries if not e.puuid and e.summonerId]

    if to_lookup:
        summoners = _fan_out(client.summoner_by_id, to_lookup, workers, "summoner")
        puuids.extend(s.puuid for s in summoners)

    return list(dict.fromkeys(puuids))


def pull_matches(
    client: RiotClient,
    puuids: list[str],
    per_player: int,
    id_workers: int,
    match_workers: int,
) -> list[dict]:
    """
    Raw match payloads for every distinct match id found across `puuids`.
    Each id is fetched once even when several seeded players share a lobby.
    """
    id_lists = _fan_out(
        lambda puuid: client.match_ids_by_puuid(puuid, per_player),
        puuids,
        id_workers,
        "match_ids",
    )

    match_ids = sorted({mid for ids in id_lists for mid in ids})
    logger.info("[match_ids] %d distinct matches from %d players", len(match_ids), len(puuids))

    return _fan_out(client.get_match, match_ids, match_workers, "match")
