from __future__ import annotations

from datetime import date

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ---- App ----
    app_env: str = "local"  # local|dev|prod
    app_version: str = "2026-10.v1"
    database_url: str = "sqlite:///./rentmaster.db"

    # ---- CORS (used by main.py) ----
    cors_allow_origins: list[str] | str = ["*"]

    # ---- Logging ----
    log_level: str = "INFO"
    sql_log_level: str = "WARNING"

    # ---- Dashboard windows ----
    # "all" period: fixed window wide enough for every plausible record
    history_start: date = date(2023, 1, 1)
    history_end: date = date(2030, 12, 31)
    forecast_days: int = 6  # today + 5 days ahead

    # ---- Demo seed ----
    seed_on_empty: bool = True
    seed_reference_year: int = 2024
    seed_random_seed: int | None = None

    # ---- Remote pull (Supabase PostgREST) ----
    supabase_url: str | None = None
    supabase_anon_key: str | None = None
    supabase_timeout_s: float = 20.0

    # ---- Export ----
    export_dir: str = "."

    def model_post_init(self, __context) -> None:
        env = (self.app_env or "local").strip().lower()
        if env in ("prod", "production"):
            origins = self.cors_allow_origins
            if origins == "*" or origins == ["*"] or (isinstance(origins, str) and "*" in origins):
                raise ValueError("SECURITY: cors_allow_origins wildcard is not allowed in prod")

        if self.history_end < self.history_start:
            raise ValueError("history_end cannot be before history_start")
        if self.forecast_days < 1:
            raise ValueError("forecast_days must be >= 1")


settings = Settings()
