"""Configuration management for ShuffleCast."""

from shufflecast.config.logging import setup_logging
from shufflecast.config.manager import ConfigManager
from shufflecast.config.schema import FeedConfig, FetchConfig, GlobalConfig, PlaybackConfig

__all__ = [
    "ConfigManager",
    "FeedConfig",
    "FetchConfig",
    "GlobalConfig",
    "PlaybackConfig",
    "setup_logging",
]
