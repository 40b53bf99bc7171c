"""Configuration schema models using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field, HttpUrl

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class FeedConfig(BaseModel):
    """A feed subscribed at startup."""

    name: str
    url: HttpUrl


class PlaybackConfig(BaseModel):
    """Playback controller configuration."""

    tick_interval_seconds: float = Field(default=1.0, gt=0)


class FetchConfig(BaseModel):
    """Feed fetching configuration."""

    timeout_seconds: float = Field(default=30.0, gt=0)
    user_agent: str = "ShuffleCast/0.1"
    max_concurrent_fetches: int = Field(default=5, ge=1)


class GlobalConfig(BaseModel):
    """Global ShuffleCast configuration."""

    version: str = "1"
    log_level: LogLevel = "INFO"

    playback: PlaybackConfig = Field(default_factory=PlaybackConfig)
    fetch: FetchConfig = Field(default_factory=FetchConfig)

    default_feeds: list[FeedConfig] = Field(default_factory=list)
