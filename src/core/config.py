"""Application settings, read from environment variables (prefix CHESS_) or a .env file."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CHESS_", env_file=".env", extra="ignore"
    )

    # --- persistence ---
    database_url: str = "sqlite:///./chess.db"
    echo_sql: bool = False

    # --- authentication ---
    api_key: str = ""
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    # only tokens issued for this address are accepted. Empty: any valid token is accepted.
    admin_email: str = ""

    # --- logging ---
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
