import argparse
import logging
import sys
from pathlib import Path

from aggregator.counter import count_matches
from aggregator.merger import merge_counts
from crawler.api.riot import RiotClient
from crawler.services.fetcher import pull_matches, resolve_puuids, seed_summoners
from crawler.services.match_parser import parse_matches
from crawler.services.snapshot_store import load_prev_counts, save_snapshot, snapshot_path
from shared.config import Settings, settings as default_settings
from shared.log import configure_logging

logger = logging.getLogger(__name__)


def run(settings: Settings, client: RiotClient | None = None) -> Path:
    """
    One full crawl: seed ladder → puuids → matches → count → merge with the
    previous snapshot → write the new snapshot.

    The previous snapshot is read once here and merged exactly once.

    Returns:
        Path of the written snapshot.
    """
    if client is None:
        client = RiotClient(
            api_key=settings.RIOT_API_KEY,
            platform=settings.PLATFORM,
            region=settings.REGION,
            timeout=settings.HTTP_TIMEOUT,
            max_retries=settings.HTTP_MAX_RETRIES,
        )

    logger.info("[Seed] %s %s on %s", settings.TIER, settings.DIVISION, settings.PLATFORM)
    entries = seed_summoners(client, settings.TIER, settings.DIVISION, settings.LADDER_PAGES)

    puuids = resolve_puuids(client, entries, settings.SEED_SUMMONERS, settings.SUMMONER_CONCURRENCY)
    logger.info("[PUUIDs] %d", len(puuids))

    logger.info("[Pull] matches per puuid = %d", settings.MATCHES_PER)
    raw_matches = pull_matches(
        client,
        puuids,
        settings.MATCHES_PER,
        settings.MATCH_IDS_CONCURRENCY,
        settings.MATCH_CONCURRENCY,
    )
    matches = parse_matches(raw_matches)
    logger.info("[Matches] %d usable of %d fetched", len(matches), len(raw_matches))

    logger.info("[Aggregate] new batch")
    new_counts = count_matches(matches)

    logger.info("[Accumulate] merging with previous snapshot (if any)")
    out_path = snapshot_path(settings.DATA_DIR, settings.TIER, settings.PLATFORM)
    merged = merge_counts(load_prev_counts(out_path), new_counts)

    logger.info("[Save] writing snapshot")
    save_snapshot(
        out_path,
        merged,
        platform=settings.PLATFORM,
        region=settings.REGION,
        tier=settings.TIER,
        division=settings.DIVISION,
        min_picks=settings.MIN_PICKS,
        top_n=settings.TOP_N,
    )

    logger.info("[Done] %s (%d compositions)", out_path, len(merged))
    return out_path


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tft-comps",
        description="Crawl ranked TFT matches and accumulate composition stats.",
    )
    parser.add_argument("--tier", help="Ladder tier, e.g. CHALLENGER or DIAMOND")
    parser.add_argument("--division", help="Division for paged tiers (I-IV)")
    parser.add_argument("--platform", help="Platform routing, e.g. NA1, EUW1")
    parser.add_argument("--region", help="Regional routing, e.g. AMERICAS, EUROPE")
    parser.add_argument("--min-picks", type=int, help="Minimum picks for a comp to be reported")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    overrides = {
        "TIER": args.tier.upper() if args.tier else None,
        "DIVISION": args.division.upper() if args.division else None,
        "PLATFORM": args.platform.upper() if args.platform else None,
        "REGION": args.region.upper() if args.region else None,
        "MIN_PICKS": args.min_picks,
    }
    settings = default_settings.model_copy(
        update={k: v for k, v in overrides.items() if v is not None}
    )

    configure_logging(settings.LOG_LEVEL)

    if not settings.RIOT_API_KEY:
        logger.error("Missing RIOT_API_KEY")
        return 1
    if settings.MIN_PICKS < 0:
        logger.error("MIN_PICKS must be non-negative, got %d", settings.MIN_PICKS)
        return 1

    run(settings)
    return 0


if __name__ == "__main__":
    sys.exit(main())
