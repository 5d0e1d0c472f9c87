import logging
import time
from urllib.parse import quote

import requests

from shared.models.league import LeagueEntryModel, LeagueListModel, SummonerModel

logger = logging.getLogger(__name__)

# Tiers served by the single-page league list endpoint
APEX_TIERS = ("CHALLENGER", "GRANDMASTER", "MASTER")


class RiotApiError(Exception):
    pass


class RiotClient:
    """
    Thin client over the TFT endpoints used by the crawler.

    Platform routing (NA1, EUW1, ...) serves league and summoner endpoints,
    regional routing (AMERICAS, EUROPE, ASIA) serves match endpoints.
    """

    def __init__(
        self,
        api_key: str,
        platform: str,
        region: str,
        timeout: int = 20,
        max_retries: int = 6,
        session: requests.Session | None = None,
    ):
        if not api_key:
            raise RiotApiError("RIOT_API_KEY is missing")

        self.platform = platform
        self.region = region
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = session or requests.Session()
        self.session.headers.update({"X-Riot-Token": api_key})

    # -------------------------------------------------------------------------
    # TRANSPORT
    # -------------------------------------------------------------------------

    def _get(self, routing: str, path: str, params: dict | None = None):
        url = f"https://{routing.lower()}.api.riotgames.com{path}"

        for attempt in range(self.max_retries):
            r = self.session.get(url, params=params, timeout=self.timeout)

            if r.status_code == 200:
                return r.json()

            if r.status_code == 429:
                retry_after = r.headers.get("Retry-After")
                sleep_s = int(retry_after) if retry_after and retry_after.isdigit() else (2 + attempt)
                logger.info("Rate limited on %s, sleeping %ss", path, sleep_s)
                time.sleep(sleep_s)
                continue

            try:
                body = r.json()
            except ValueError:
                body = r.text

            raise RiotApiError(f"HTTP {r.status_code} for {url} params={params} body={body}")

        raise RiotApiError(f"Too many retries (429) for {url}")

    # -------------------------------------------------------------------------
    # LEAGUE
    # -------------------------------------------------------------------------

    def league_entries(self, tier: str, division: str, page: int) -> list[LeagueEntryModel]:
        data = self._get(
            self.platform,
            f"/tft/league/v1/entries/{tier.upper()}/{division.upper()}",
            params={"page": page},
        )
        return [LeagueEntryModel.model_validate(e) for e in data]

    def league_list(self, tier: str) -> list[LeagueEntryModel]:
        if tier.upper() not in APEX_TIERS:
            raise ValueError(f"{tier} has no league list endpoint, use league_entries")
        data = self._get(self.platform, f"/tft/league/v1/{tier.lower()}")
        return LeagueListModel.model_validate(data).entries

    # -------------------------------------------------------------------------
    # SUMMONER
    # -------------------------------------------------------------------------

    def summoner_by_id(self, summoner_id: str) -> SummonerModel:
        data = self._get(self.platform, f"/tft/summoner/v1/summoners/{quote(summoner_id, safe='')}")
        return SummonerModel.model_validate(data)

    # -------------------------------------------------------------------------
    # MATCH
    # -------------------------------------------------------------------------

    def match_ids_by_puuid(self, puuid: str, count: int) -> list[str]:
        return self._get(
            self.region,
            f"/tft/match/v1/matches/by-puuid/{quote(puuid, safe='')}/ids",
            params={"start": 0, "count": count},
        )

    def get_match(self, match_id: str) -> dict:
        """Raw match payload, validated later by crawler.services.match_parser."""
        return self._get(self.region, f"/tft/match/v1/matches/{quote(match_id, safe='')}")
