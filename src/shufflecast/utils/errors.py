"""Custom exceptions for ShuffleCast."""


class ShuffleCastError(Exception):
    """Base exception for all ShuffleCast errors."""

    pass


class ConfigError(ShuffleCastError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class FeedError(ShuffleCastError):
    """Feed management errors."""

    pass


class FeedNotFoundError(FeedError):
    """Feed is not subscribed."""

    pass


class DuplicateFeedError(FeedError):
    """Feed already subscribed."""

    pass


class FeedParseError(FeedError):
    """RSS markup the tokenizer could not recover from."""

    pass


class FetchError(ShuffleCastError):
    """Network or transport failure while fetching a feed."""

    pass


class FetchTimeoutError(FetchError):
    """Feed request timed out."""

    pass


class FetchStatusError(FetchError):
    """Feed server answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str = "") -> None:
        self.status_code = status_code
        super().__init__(message or f"HTTP {status_code}")


class PlaybackError(ShuffleCastError):
    """Playback command could not be carried out."""

    pass


class NoActiveSessionError(PlaybackError):
    """Command needs a current episode but none is playing."""

    pass


class NoFeedSelectedError(PlaybackError):
    """Skip requested before any feed was selected."""

    pass


class EmptyFeedError(PlaybackError):
    """Selected feed has no episodes to pick from."""

    pass


class EngineInitError(PlaybackError):
    """Player engine failed to load or start an audio URI."""

    pass
