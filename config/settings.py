from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database (remote copy of synced personalization state)
    DATABASE_URL: str = "sqlite+aiosqlite:///./sentinel.db"

    # Server
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # Outbound HTTP
    USER_AGENT: str = "Sentinel/1.0 (news aggregator; compatible)"
    HTTP_TIMEOUT: float = 15.0

    # Cache
    CACHE_TTL_SECONDS: int = 300
    CACHE_WARM_ENABLED: bool = True
    CACHE_WARM_MINUTES: int = 4

    # Reddit
    REDDIT_DEFAULT_SUBS: str = (
        "popular,worldnews,technology,science,news,business,artificial,"
        "MachineLearning,ChatGPT,interestingasfuck,UpliftingNews,nottheonion,"
        "geopolitics,economics,Futurology,space,movies,gaming,programming,"
        "CredibleDefense"
    )
    REDDIT_MAX_SUBS: int = 25
    REDDIT_BATCH_SIZE: int = 4
    REDDIT_BATCH_DELAY: float = 0.2
    REDDIT_FEED_LIMIT: int = 15
    REDDIT_LOCAL_LIMIT: int = 10

    # Other sources
    HN_FEED_LIMIT: int = 30
    NEWSAPI_KEY: str = ""
    NEWSAPI_LIMIT: int = 20
    GUARDIAN_API_KEY: str = "test"
    GUARDIAN_FEED_LIMIT: int = 25
    RSS_ITEMS_PER_FEED: int = 10
    WIKINEWS_LIMIT: int = 20

    # Ranking
    FEED_MAX_ITEMS: int = 150

    # Identity provider (Supabase-style GoTrue API)
    SUPABASE_URL: str = ""
    SUPABASE_ANON_KEY: str = ""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    def default_subreddits(self) -> list[str]:
        return [s.strip() for s in self.REDDIT_DEFAULT_SUBS.split(",") if s.strip()]


settings = Settings()
