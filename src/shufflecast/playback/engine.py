"""Interfaces of the collaborators the playback controller drives.

None of these are implemented here. A host application adapts its media
framework, remote-control surface and audio-session notifications to these
protocols and injects them into the controller.
"""

from collections.abc import Callable
from enum import Enum
from typing import Any, Protocol

from pydantic import BaseModel

ObserverHandle = Any


class PlayerEngine(Protocol):
    """One media player handle, used for a single episode."""

    def load(self, uri: str) -> None:
        """Prepare the audio at ``uri``; raise EngineInitError on failure."""
        ...

    def play(self) -> None: ...

    def pause(self) -> None: ...

    def seek(self, position: float) -> None:
        """Jump to ``position`` seconds."""
        ...

    def current_time(self) -> float | None: ...

    def duration(self) -> float | None: ...

    def add_periodic_observer(
        self, interval: float, callback: Callable[[float], None]
    ) -> ObserverHandle:
        """Call ``callback(current_time)`` every ``interval`` seconds while playing."""
        ...

    def add_end_observer(self, callback: Callable[[], None]) -> ObserverHandle:
        """Call ``callback()`` when the loaded item plays to its end."""
        ...

    def remove_observer(self, handle: ObserverHandle) -> None: ...


EngineFactory = Callable[[], PlayerEngine]


class RemoteCommand(str, Enum):
    """Commands a lock screen or headset can send."""

    PLAY = "play"
    PAUSE = "pause"
    NEXT_TRACK = "next_track"


RemoteHandler = Callable[[], bool]


class RemoteCommandCenter(Protocol):
    """OS surface delivering remote-control commands."""

    def add_handler(self, command: RemoteCommand, handler: RemoteHandler) -> ObserverHandle: ...

    def remove_handler(self, handle: ObserverHandle) -> None: ...


class InterruptionKind(str, Enum):
    BEGAN = "began"
    ENDED = "ended"
    OTHER = "other"


class InterruptionEvent(BaseModel):
    """Audio session interruption (phone call, alarm, another app)."""

    kind: InterruptionKind
    should_resume: bool = False


class InterruptionSource(Protocol):
    """OS surface delivering audio interruption notifications."""

    def subscribe(self, callback: Callable[[InterruptionEvent], None]) -> ObserverHandle: ...

    def unsubscribe(self, handle: ObserverHandle) -> None: ...
