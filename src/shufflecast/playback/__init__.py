"""Shuffle playback control for ShuffleCast."""

from shufflecast.playback.controller import PlaybackController
from shufflecast.playback.dispatch import AsyncioDispatcher, Dispatcher, ImmediateDispatcher
from shufflecast.playback.engine import (
    EngineFactory,
    InterruptionEvent,
    InterruptionKind,
    InterruptionSource,
    PlayerEngine,
    RemoteCommand,
    RemoteCommandCenter,
)
from shufflecast.playback.models import (
    CommandResult,
    CommandStatus,
    PlaybackSnapshot,
    PlaybackState,
)

__all__ = [
    "AsyncioDispatcher",
    "CommandResult",
    "CommandStatus",
    "Dispatcher",
    "EngineFactory",
    "ImmediateDispatcher",
    "InterruptionEvent",
    "InterruptionKind",
    "InterruptionSource",
    "PlaybackController",
    "PlaybackSnapshot",
    "PlaybackState",
    "PlayerEngine",
    "RemoteCommand",
    "RemoteCommandCenter",
]
