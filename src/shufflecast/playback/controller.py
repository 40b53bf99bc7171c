"""Shuffle playback controller.

The controller owns at most one playback session: an engine handle plus the
tick and end-of-track observers registered on it. Starting an episode always
releases the previous session completely before the next engine is created.

Engine and OS notifications are routed through a dispatcher, and each carries
the token of the session that registered it. Notifications for a session that
has since been released are ignored.
"""

import logging
import math
import random
from collections.abc import Callable

from shufflecast.config.schema import PlaybackConfig
from shufflecast.feeds.models import Episode, Feed
from shufflecast.feeds.store import random_episode
from shufflecast.playback.dispatch import Dispatcher, ImmediateDispatcher
from shufflecast.playback.engine import (
    EngineFactory,
    InterruptionEvent,
    InterruptionKind,
    InterruptionSource,
    ObserverHandle,
    PlayerEngine,
    RemoteCommand,
    RemoteCommandCenter,
)
from shufflecast.playback.models import (
    OK,
    CommandResult,
    CommandStatus,
    PlaybackSnapshot,
    PlaybackState,
)
from shufflecast.utils.errors import (
    EmptyFeedError,
    EngineInitError,
    NoActiveSessionError,
    NoFeedSelectedError,
    PlaybackError,
)

logger = logging.getLogger(__name__)

Listener = Callable[[PlaybackSnapshot], None]


class _Session:
    """A live engine handle and the observers registered on it."""

    def __init__(self, token: int, engine: PlayerEngine, episode: Episode) -> None:
        self.token = token
        self.engine: PlayerEngine | None = engine
        self.episode = episode
        self.tick_handle: ObserverHandle | None = None
        self.end_handle: ObserverHandle | None = None

    def release(self) -> None:
        """Stop the engine, unregister tick then end observers, drop the handle.

        Every step runs even when an earlier one fails; engine errors are
        logged rather than raised.
        """
        engine = self.engine
        if engine is None:
            return
        self.engine = None
        try:
            engine.pause()
        except Exception:
            logger.exception(f"Engine failed to pause while releasing session {self.token}")
        for handle in (self.tick_handle, self.end_handle):
            if handle is None:
                continue
            try:
                engine.remove_observer(handle)
            except Exception:
                logger.exception(f"Engine failed to remove observer of session {self.token}")
        self.tick_handle = None
        self.end_handle = None


class PlaybackController:
    """Drives shuffle playback of podcast episodes.

    All public methods must be called on the context that owns the
    controller. Failures are logged and returned as :class:`CommandResult`
    values; none are raised.

    Example:
        >>> controller = PlaybackController(engine_factory=MyEngine)
        >>> controller.add_listener(render)
        >>> controller.shuffle(feed)
        >>> controller.toggle_play_pause()
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        dispatcher: Dispatcher | None = None,
        config: PlaybackConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            engine_factory: Creates a fresh player engine for each session
            dispatcher: Delivers engine and OS callbacks onto the owning context
            config: Playback settings (tick interval)
            rng: Random source for episode selection; seed it for reproducibility
        """
        self.engine_factory = engine_factory
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.config = config or PlaybackConfig()
        self.rng = rng or random.Random()

        self._session: _Session | None = None
        self._next_token = 0
        self._state = PlaybackState.IDLE
        self._feed: Feed | None = None
        self._episode: Episode | None = None
        self._is_playing = False
        self._progress = 0.0

        self._listeners: list[Listener] = []
        self._remote_center: RemoteCommandCenter | None = None
        self._remote_handles: list[ObserverHandle] = []
        self._interruption_source: InterruptionSource | None = None
        self._interruption_handle: ObserverHandle | None = None

    # Observable state

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def selected_feed(self) -> Feed | None:
        return self._feed

    @property
    def current_episode(self) -> Episode | None:
        return self._episode

    @property
    def is_playing(self) -> bool:
        return self._is_playing

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def has_session(self) -> bool:
        return self._session is not None

    @property
    def snapshot(self) -> PlaybackSnapshot:
        return PlaybackSnapshot(
            state=self._state,
            feed=self._feed,
            episode=self._episode,
            is_playing=self._is_playing,
            progress=self._progress,
        )

    def add_listener(self, listener: Listener) -> Callable[[], None]:
        """Subscribe to state changes.

        Returns:
            Callable that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self) -> None:
        snapshot = self.snapshot
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception:
                logger.exception("Playback listener failed")

    # Commands

    def play(self, episode: Episode, feed: Feed) -> CommandResult:
        """Start ``episode`` from ``feed``, replacing any current session.

        Any engine failure while the new session is being built releases
        whatever part of it exists and settles in ``IDLE``.
        """
        self._release_session()

        self._feed = feed
        self._episode = episode
        self._is_playing = False
        self._progress = 0.0
        self._state = PlaybackState.LOADING
        self._publish()

        session: _Session | None = None
        try:
            engine = self.engine_factory()
            engine.load(str(episode.audio_url))

            self._next_token += 1
            session = _Session(self._next_token, engine, episode)
            token = session.token
            session.tick_handle = engine.add_periodic_observer(
                self.config.tick_interval_seconds,
                lambda current: self.dispatcher.call_soon(self._on_tick, token, current),
            )
            session.end_handle = engine.add_end_observer(
                lambda: self.dispatcher.call_soon(self._on_reached_end, token)
            )
            engine.play()
        except Exception as e:
            if session is not None:
                session.release()
            self._reset()
            self._publish()
            return _failure(
                EngineInitError(f"Failed to start '{episode.title}' ({episode.audio_url}): {e}")
            )

        self._session = session
        self._is_playing = True
        self._state = PlaybackState.PLAYING
        logger.info(f"Playing '{episode.title}' from '{feed.name}'")
        self._publish()
        return OK

    def shuffle(self, feed: Feed) -> CommandResult:
        """Select ``feed`` and play a random episode from it.

        An empty feed is reported and leaves the current playback alone.
        """
        try:
            episode = self._pick_episode(feed)
        except EmptyFeedError as e:
            return _failure(e)
        return self.play(episode, feed)

    def toggle_play_pause(self) -> CommandResult:
        try:
            self._require_session()
        except NoActiveSessionError as e:
            return _failure(e)

        if self._is_playing:
            self._pause()
        else:
            self._resume()
        return OK

    def skip_to_next(self) -> CommandResult:
        """Replace the current episode with a random one from the selected feed.

        Sampling is with replacement, so the same episode may come up again.
        End-of-track auto-advance goes through here as well.
        """
        try:
            feed = self._require_feed()
        except NoFeedSelectedError as e:
            return _failure(e)

        self._release_session()
        try:
            episode = self._pick_episode(feed)
        except EmptyFeedError as e:
            self._reset()
            self._publish()
            return _failure(e)

        return self.play(episode, feed)

    def seek(self, fraction: float) -> CommandResult:
        """Jump to ``fraction`` of the episode, clamped to [0, 1]."""
        try:
            session = self._require_session()
        except NoActiveSessionError as e:
            return _failure(e)
        if math.isnan(fraction):
            return CommandResult(status=CommandStatus.INVALID_POSITION, message="NaN")

        duration = session.engine.duration()
        if not _is_known(duration):
            logger.debug("Seek ignored: duration not known yet")
            return CommandResult(status=CommandStatus.DURATION_UNKNOWN)

        fraction = min(max(fraction, 0.0), 1.0)
        session.engine.seek(fraction * duration)
        return OK

    def stop(self) -> CommandResult:
        """Release the session and clear the current episode. Safe to repeat."""
        had_state = self._session is not None or self._episode is not None
        self._release_session()
        self._reset()
        if had_state:
            self._publish()
        return OK

    def close(self) -> None:
        """Stop playback and detach from every external event source."""
        self.detach_remote()
        self.detach_interruptions()
        self.stop()

    # Session internals

    def _release_session(self) -> None:
        session = self._session
        if session is None:
            return
        # Clear first so callbacks already queued for this token are ignored
        self._session = None
        session.release()
        logger.debug(f"Released session {session.token}")

    def _reset(self) -> None:
        self._episode = None
        self._is_playing = False
        self._progress = 0.0
        self._state = PlaybackState.IDLE

    def _require_session(self) -> _Session:
        session = self._session
        if session is None or session.engine is None:
            raise NoActiveSessionError("Player is unavailable")
        return session

    def _require_feed(self) -> Feed:
        if self._feed is None:
            raise NoFeedSelectedError("No feed selected")
        return self._feed

    def _pick_episode(self, feed: Feed) -> Episode:
        episode = random_episode(feed, self.rng)
        if episode is None:
            raise EmptyFeedError(f"No episodes available in '{feed.name}'")
        return episode

    def _live_session(self, token: int) -> _Session | None:
        session = self._session
        if session is None or session.token != token or session.engine is None:
            return None
        return session

    def _pause(self) -> None:
        if self._session is None or self._session.engine is None or not self._is_playing:
            return
        self._session.engine.pause()
        self._is_playing = False
        self._state = PlaybackState.PAUSED
        self._publish()

    def _resume(self) -> None:
        if self._session is None or self._session.engine is None or self._is_playing:
            return
        self._session.engine.play()
        self._is_playing = True
        self._state = PlaybackState.PLAYING
        self._publish()

    def _on_tick(self, token: int, current: float | None) -> None:
        session = self._live_session(token)
        if session is None:
            return
        if current is None:
            current = session.engine.current_time()
        duration = session.engine.duration()
        if current is None or math.isnan(current) or not _is_known(duration):
            return

        progress = min(max(current / duration, 0.0), 1.0)
        if progress != self._progress:
            self._progress = progress
            self._publish()

    def _on_reached_end(self, token: int) -> None:
        session = self._live_session(token)
        if session is None:
            return
        logger.debug(f"Reached end of '{session.episode.title}'")
        self._state = PlaybackState.ENDED
        self._publish()
        self.skip_to_next()

    # Interruptions

    def attach_interruptions(self, source: InterruptionSource) -> None:
        """Listen for audio session interruptions from ``source``."""
        self.detach_interruptions()
        self._interruption_source = source
        self._interruption_handle = source.subscribe(
            lambda event: self.dispatcher.call_soon(self.handle_interruption, event)
        )

    def detach_interruptions(self) -> None:
        if self._interruption_source is not None and self._interruption_handle is not None:
            self._interruption_source.unsubscribe(self._interruption_handle)
        self._interruption_source = None
        self._interruption_handle = None

    def handle_interruption(self, event: InterruptionEvent) -> None:
        """Pause on interruption start; resume on end when the OS says so.

        The session is kept across the interruption, so position is preserved.
        """
        if event.kind is InterruptionKind.BEGAN:
            logger.info("Audio interrupted")
            self._pause()
        elif event.kind is InterruptionKind.ENDED:
            if event.should_resume:
                logger.info("Interruption ended, resuming")
                self._resume()
        else:
            logger.debug(f"Ignoring interruption event: {event.kind.value}")

    # Remote commands

    def attach_remote(self, center: RemoteCommandCenter) -> None:
        """Register play, pause and next-track handlers with ``center``."""
        self.detach_remote()
        self._remote_center = center
        self._remote_handles = [
            center.add_handler(RemoteCommand.PLAY, self._remote_play),
            center.add_handler(RemoteCommand.PAUSE, self._remote_pause),
            center.add_handler(RemoteCommand.NEXT_TRACK, self._remote_next),
        ]

    def detach_remote(self) -> None:
        if self._remote_center is not None:
            for handle in self._remote_handles:
                self._remote_center.remove_handler(handle)
        self._remote_center = None
        self._remote_handles = []

    def _remote_play(self) -> bool:
        if self._session is None or self._is_playing:
            return False
        self.dispatcher.call_soon(self._resume)
        return True

    def _remote_pause(self) -> bool:
        if not self._is_playing:
            return False
        self.dispatcher.call_soon(self._pause)
        return True

    def _remote_next(self) -> bool:
        self.dispatcher.call_soon(self.skip_to_next)
        return True


def _is_known(duration: float | None) -> bool:
    return duration is not None and not math.isnan(duration) and duration > 0


_STATUS_FOR_ERROR: dict[type[PlaybackError], CommandStatus] = {
    NoActiveSessionError: CommandStatus.NO_ACTIVE_SESSION,
    NoFeedSelectedError: CommandStatus.NO_FEED_SELECTED,
    EmptyFeedError: CommandStatus.EMPTY_FEED,
    EngineInitError: CommandStatus.ENGINE_INIT_FAILURE,
}


def _failure(error: PlaybackError) -> CommandResult:
    """Log ``error`` and report it as a command result."""
    logger.warning(str(error))
    for error_type, status in _STATUS_FOR_ERROR.items():
        if isinstance(error, error_type):
            return CommandResult(status=status, message=str(error))
    raise error
