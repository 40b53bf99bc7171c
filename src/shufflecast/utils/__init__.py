"""Utility functions and helpers for ShuffleCast."""

from shufflecast.utils.errors import (
    ConfigError,
    DuplicateFeedError,
    EmptyFeedError,
    EngineInitError,
    FeedError,
    FeedNotFoundError,
    FeedParseError,
    FetchError,
    FetchStatusError,
    FetchTimeoutError,
    InvalidConfigError,
    NoActiveSessionError,
    NoFeedSelectedError,
    PlaybackError,
    ShuffleCastError,
)

__all__ = [
    "ShuffleCastError",
    "ConfigError",
    "InvalidConfigError",
    "FeedError",
    "FeedNotFoundError",
    "DuplicateFeedError",
    "FeedParseError",
    "FetchError",
    "FetchTimeoutError",
    "FetchStatusError",
    "PlaybackError",
    "NoActiveSessionError",
    "NoFeedSelectedError",
    "EmptyFeedError",
    "EngineInitError",
]
