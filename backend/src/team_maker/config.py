"""Application configuration via pydantic-settings."""

from dataclasses import dataclass
from functools import lru_cache

from pydantic import computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API Settings
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS - comma-separated origins (env var: CORS_ORIGINS)
    cors_origins: str = "http://localhost:5173,http://127.0.0.1:5173"

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins as a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # Scoring weights
    bot_lane_weight: float = 1.5
    solo_lane_weight: float = 0.5

    # Search budget
    max_attempts: int = 100
    max_combinations: int = 5000
    max_exhaustive_roster_size: int = 16
    local_search_restarts: int = 20

    # "Good enough" early stop
    good_enough_total_diff: float = 50
    good_enough_bot_diff: float = 100

    # Anti-repetition
    max_retained_roles: int = 3
    min_changed_members: int = 2

    # Sessions
    max_roster_size: int = 20
    session_ttl_seconds: int = 60 * 60


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


@dataclass(frozen=True)
class SearchConfig:
    """Snapshot of the tunables used by a single team search."""

    bot_lane_weight: float = 1.5
    solo_lane_weight: float = 0.5
    max_attempts: int = 100
    max_combinations: int = 5000
    max_exhaustive_roster_size: int = 16
    local_search_restarts: int = 20
    good_enough_total_diff: float = 50
    good_enough_bot_diff: float = 100
    max_retained_roles: int = 3
    min_changed_members: int = 2

    @classmethod
    def from_settings(cls, source: Settings | None = None) -> "SearchConfig":
        """Build a config from application settings (defaults to the global ones)."""
        source = source or settings
        return cls(
            bot_lane_weight=source.bot_lane_weight,
            solo_lane_weight=source.solo_lane_weight,
            max_attempts=source.max_attempts,
            max_combinations=source.max_combinations,
            max_exhaustive_roster_size=source.max_exhaustive_roster_size,
            local_search_restarts=source.local_search_restarts,
            good_enough_total_diff=source.good_enough_total_diff,
            good_enough_bot_diff=source.good_enough_bot_diff,
            max_retained_roles=source.max_retained_roles,
            min_changed_members=source.min_changed_members,
        )
