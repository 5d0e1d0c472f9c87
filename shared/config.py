from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # -------------------------------------------------------------------------
    # RIOT API
    # -------------------------------------------------------------------------
    RIOT_API_KEY: str = ""
    PLATFORM: str = "NA1"        # league + summoner endpoints
    REGION: str = "AMERICAS"     # match endpoints
    HTTP_TIMEOUT: int = 20       # seconds
    HTTP_MAX_RETRIES: int = 6    # 429 retries only

    # -------------------------------------------------------------------------
    # LADDER SEED
    # -------------------------------------------------------------------------
    TIER: str = "MASTER"
    DIVISION: str = "I"
    LADDER_PAGES: int = 5        # only used for paged tiers (DIAMOND and below)
    SEED_SUMMONERS: int = 1000
    MATCHES_PER: int = 20

    # -------------------------------------------------------------------------
    # FAN-OUT
    # Each fetch kind has its own worker pool so caps can be tuned independently
    # -------------------------------------------------------------------------
    SUMMONER_CONCURRENCY: int = 12
    MATCH_IDS_CONCURRENCY: int = 12
    MATCH_CONCURRENCY: int = 8

    # -------------------------------------------------------------------------
    # AGGREGATION
    # -------------------------------------------------------------------------
    MIN_PICKS: int = 50
    TOP_N: int = 20

    # -------------------------------------------------------------------------
    # OUTPUT
    # -------------------------------------------------------------------------
    DATA_DIR: str = "data"
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


# Single instance imported across the entire project
settings = Settings()
