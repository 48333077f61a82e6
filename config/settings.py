from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for friends-backend.

    Common defaults live here; environment variables override per environment.

    Only env vars and .env files, no YAML/JSON.
    """

    # --- Core ---
    service_name: str = "friends-backend"

    # --- Logging ---
    log_level: str  # required

    # --- Database (PostgreSQL) ---
    db_host: str  # required
    db_port: int  # required
    db_user: str  # required
    db_password: str  # required
    db_database: str  # required

    # --- Connection pool ---
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10

    model_config = SettingsConfigDict(
        # .env.common: shared defaults (committed)
        # .env.local: local overrides (gitignored)
        env_file=(".env.common", ".env.local"),
        env_file_encoding="utf-8",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance. Call this instead of instantiating Settings directly."""
    return Settings()
