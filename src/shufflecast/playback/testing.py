"""In-memory collaborators for exercising the playback controller.

These stand in for a real media engine and OS surfaces, so hosts and tests
can drive the controller without audio hardware.

Example:

    from shufflecast.playback.testing import FakeEngineFactory

    def test_plays():
        factory = FakeEngineFactory(duration=100.0)
        controller = PlaybackController(engine_factory=factory)
        controller.play(episode, feed)

        factory.last.tick(50.0)
        assert controller.progress == 0.5
"""

import itertools
from collections.abc import Callable
from typing import Any

from shufflecast.playback.engine import (
    InterruptionEvent,
    InterruptionKind,
    RemoteCommand,
    RemoteHandler,
)
from shufflecast.utils.errors import EngineInitError

_handles = itertools.count(1)


class FakeEngine:
    """Player engine that records calls and lets tests fire its observers."""

    def __init__(self, duration: float | None = None, fail_load: bool = False) -> None:
        self.duration_value = duration
        self.fail_load = fail_load
        self.uri: str | None = None
        self.position = 0.0
        self.playing = False
        self.calls: list[str] = []
        self.tick_observers: dict[int, Callable[[float], None]] = {}
        self.end_observers: dict[int, Callable[[], None]] = {}

    def load(self, uri: str) -> None:
        self.calls.append("load")
        if self.fail_load:
            raise EngineInitError(f"Cannot open {uri}")
        self.uri = uri

    def play(self) -> None:
        self.calls.append("play")
        self.playing = True

    def pause(self) -> None:
        self.calls.append("pause")
        self.playing = False

    def seek(self, position: float) -> None:
        self.calls.append("seek")
        self.position = position

    def current_time(self) -> float | None:
        return self.position

    def duration(self) -> float | None:
        return self.duration_value

    def add_periodic_observer(self, interval: float, callback: Callable[[float], None]) -> int:
        handle = next(_handles)
        self.tick_observers[handle] = callback
        self.calls.append("add_periodic_observer")
        return handle

    def add_end_observer(self, callback: Callable[[], None]) -> int:
        handle = next(_handles)
        self.end_observers[handle] = callback
        self.calls.append("add_end_observer")
        return handle

    def remove_observer(self, handle: Any) -> None:
        if handle in self.tick_observers:
            del self.tick_observers[handle]
            self.calls.append("remove_tick_observer")
        elif handle in self.end_observers:
            del self.end_observers[handle]
            self.calls.append("remove_end_observer")

    @property
    def observer_count(self) -> int:
        return len(self.tick_observers) + len(self.end_observers)

    def tick(self, current: float) -> None:
        """Advance to ``current`` seconds and fire the periodic observers."""
        self.position = current
        for callback in list(self.tick_observers.values()):
            callback(current)

    def finish(self) -> None:
        """Play to the end of the item."""
        if self.duration_value is not None:
            self.position = self.duration_value
        self.playing = False
        for callback in list(self.end_observers.values()):
            callback()


class FakeEngineFactory:
    """Engine factory remembering every engine it built."""

    def __init__(
        self,
        duration: float | None = 100.0,
        fail_load: bool = False,
        engine_cls: type[FakeEngine] = FakeEngine,
    ) -> None:
        self.duration = duration
        self.fail_load = fail_load
        self.engine_cls = engine_cls
        self.engines: list[FakeEngine] = []

    def __call__(self) -> FakeEngine:
        engine = self.engine_cls(duration=self.duration, fail_load=self.fail_load)
        self.engines.append(engine)
        return engine

    @property
    def last(self) -> FakeEngine:
        return self.engines[-1]

    @property
    def live_engines(self) -> list[FakeEngine]:
        """Engines that still have observers registered."""
        return [engine for engine in self.engines if engine.observer_count]


class FakeRemoteCommandCenter:
    """Remote-control surface that tests can press buttons on."""

    def __init__(self) -> None:
        self.handlers: dict[int, tuple[RemoteCommand, RemoteHandler]] = {}

    def add_handler(self, command: RemoteCommand, handler: RemoteHandler) -> int:
        handle = next(_handles)
        self.handlers[handle] = (command, handler)
        return handle

    def remove_handler(self, handle: Any) -> None:
        self.handlers.pop(handle, None)

    def send(self, command: RemoteCommand) -> bool:
        """Invoke the handlers for ``command``; False if none succeeded."""
        results = [handler() for cmd, handler in list(self.handlers.values()) if cmd is command]
        return any(results)


class FakeInterruptionSource:
    """Interruption notifier that tests can trigger."""

    def __init__(self) -> None:
        self.subscribers: dict[int, Callable[[InterruptionEvent], None]] = {}

    def subscribe(self, callback: Callable[[InterruptionEvent], None]) -> int:
        handle = next(_handles)
        self.subscribers[handle] = callback
        return handle

    def unsubscribe(self, handle: Any) -> None:
        self.subscribers.pop(handle, None)

    def emit(self, kind: InterruptionKind, should_resume: bool = False) -> None:
        event = InterruptionEvent(kind=kind, should_resume=should_resume)
        for callback in list(self.subscribers.values()):
            callback(event)


class QueueDispatcher:
    """Dispatcher that holds callbacks until :meth:`drain` is called.

    Models notifications that were already in flight when the controller
    changed state.
    """

    def __init__(self) -> None:
        self.pending: list[tuple[Callable[..., Any], tuple[Any, ...]]] = []

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        self.pending.append((callback, args))

    def drain(self) -> int:
        count = 0
        while self.pending:
            callback, args = self.pending.pop(0)
            callback(*args)
            count += 1
        return count
