"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from affiliate_ai.scoring.models import ScoringWeights


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = "affiliate-ai"
    debug: bool = False
    environment: str = "development"

    # Database (SQLite for local dev, PostgreSQL for prod)
    database_url: str = "sqlite+aiosqlite:///./affiliate_ai.db"

    # Frontend
    frontend_url: str = "http://localhost:3000"

    # API
    api_prefix: str = "/api"

    # Recommendations
    candidate_pool_size: int = 100  # Top-N unpromoted products scored per user
    trending_window_days: int = 30

    # Scoring weight overrides
    scoring_competition_penalty: float = 100.0
    scoring_refund_penalty_multiplier: float = 500.0


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_scoring_weights(settings: Settings | None = None) -> ScoringWeights:
    """Build scoring weights from settings."""
    if settings is None:
        settings = get_settings()

    return ScoringWeights(
        competition_penalty=settings.scoring_competition_penalty,
        refund_penalty_multiplier=settings.scoring_refund_penalty_multiplier,
    )
