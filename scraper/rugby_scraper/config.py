"""
Typed settings for the rugby feed updater.

Uses Pydantic Settings to load configuration from environment variables
(and an optional .env file at the repository root). Source adapters never
read the environment themselves: they receive the relevant section of these
settings in their constructor.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env

KNOWN_SOURCES = ("apisports", "rugbypass", "supersport")
DEFAULT_FINISHED_STATUSES = ("FT", "AET", "PEN", "CANC", "WO")


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class ApiSportsConfig(BaseModel):
    base_url: str = Field(default="https://v1.rugby.api-sports.io")
    games_path: str = "/games"
    season: int = 2024
    league: int | None = None
    # Single day filter in YYYY-MM-DD, passed through untouched
    date: str | None = None
    request_timeout_seconds: int = 20


class RugbyPassConfig(BaseModel):
    base_url: str = Field(default="https://www.rugbypass.com")
    live_url: str = Field(default="https://www.rugbypass.com/live/")


class SuperSportConfig(BaseModel):
    fixtures_url: str = Field(default="https://supersport.com/rugby/fixtures")
    results_url: str = Field(default="https://supersport.com/rugby/results")


class ScraperConfig(BaseModel):
    request_timeout_seconds: int = 20
    user_agent: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    )


class OutputConfig(BaseModel):
    data_dir: str = "data"
    fixtures_file: str = "fixtures.json"
    results_file: str = "results.json"
    # Lexical sort on kickoffIso; provider strings are not always ISO-8601
    sort_by_kickoff: bool = False

    @property
    def fixtures_path(self) -> Path:
        return Path(self.data_dir) / self.fixtures_file

    @property
    def results_path(self) -> Path:
        return Path(self.data_dir) / self.results_file


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Nested sections keep their defaults unless one of the flat override
    variables below is set (RUGBY_DATA_DIR, APISPORTS_SEASON, ...), so the
    common knobs never need double-underscore syntax.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    rugby_api_key: str | None = Field(None, alias="RUGBY_API_KEY")
    sources: list[str] | str = Field(
        default_factory=lambda: ["rugbypass", "supersport"], alias="RUGBY_SOURCES"
    )
    finished_statuses: list[str] | str = Field(
        default_factory=lambda: list(DEFAULT_FINISHED_STATUSES),
        alias="RUGBY_FINISHED_STATUSES",
    )

    apisports_config: ApiSportsConfig = Field(default_factory=ApiSportsConfig)
    rugbypass_config: RugbyPassConfig = Field(default_factory=RugbyPassConfig)
    supersport_config: SuperSportConfig = Field(default_factory=SuperSportConfig)
    scraper_config: ScraperConfig = Field(default_factory=ScraperConfig)
    output_config: OutputConfig = Field(default_factory=OutputConfig)

    data_dir_override: str | None = Field(None, alias="RUGBY_DATA_DIR")
    sort_output_override: bool | None = Field(None, alias="RUGBY_SORT_OUTPUT")
    apisports_season_override: int | None = Field(None, alias="APISPORTS_SEASON")
    apisports_league_override: int | None = Field(None, alias="APISPORTS_LEAGUE")
    apisports_date_override: str | None = Field(None, alias="APISPORTS_DATE")

    @field_validator("sources", mode="before")
    @classmethod
    def parse_sources(cls, v: str | list[str]) -> list[str]:
        names = _split_csv(v) if isinstance(v, str) else [str(name).strip() for name in v]
        return [name.lower() for name in names if name]

    @field_validator("finished_statuses", mode="before")
    @classmethod
    def parse_finished_statuses(cls, v: str | list[str]) -> list[str]:
        codes = _split_csv(v) if isinstance(v, str) else list(v)
        return [str(code).strip().upper() for code in codes if str(code).strip()]

    @model_validator(mode="after")
    def _apply_overrides(self) -> Settings:
        """Map the flat override variables onto the nested sections."""
        if self.data_dir_override:
            self.output_config.data_dir = self.data_dir_override
        if self.sort_output_override is not None:
            self.output_config.sort_by_kickoff = bool(self.sort_output_override)
        if self.apisports_season_override is not None:
            self.apisports_config.season = self.apisports_season_override
        if self.apisports_league_override is not None:
            self.apisports_config.league = self.apisports_league_override
        if self.apisports_date_override:
            self.apisports_config.date = self.apisports_date_override
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Environment variables don't change during a run, so parsing them once
    is enough.
    """
    validate_env()
    return Settings()


# Global settings instance - import this in other modules
settings = get_settings()
