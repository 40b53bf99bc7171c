"""Observable playback state and command results."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from shufflecast.feeds.models import Episode, Feed


class PlaybackState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    PLAYING = "playing"
    PAUSED = "paused"
    ENDED = "ended"  # Transient; auto-advance follows immediately


class PlaybackSnapshot(BaseModel):
    """Immutable view of the controller state handed to listeners."""

    model_config = ConfigDict(frozen=True)

    state: PlaybackState = PlaybackState.IDLE
    feed: Feed | None = None
    episode: Episode | None = None
    is_playing: bool = False
    progress: float = Field(default=0.0, ge=0.0, le=1.0)


class CommandStatus(str, Enum):
    OK = "ok"
    NO_ACTIVE_SESSION = "no_active_session"
    NO_FEED_SELECTED = "no_feed_selected"
    EMPTY_FEED = "empty_feed"
    ENGINE_INIT_FAILURE = "engine_init_failure"
    DURATION_UNKNOWN = "duration_unknown"
    INVALID_POSITION = "invalid_position"


class CommandResult(BaseModel):
    """What a playback command did, reported instead of raising."""

    model_config = ConfigDict(frozen=True)

    status: CommandStatus = CommandStatus.OK
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.status is CommandStatus.OK


OK = CommandResult()
