"""Marshaling of asynchronous notifications onto the state-owning context.

Engine ticks, end-of-track notices and OS callbacks may arrive on any thread.
The controller routes every one of them through a dispatcher so that its
state is only ever touched from one place.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class Dispatcher(Protocol):
    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None: ...


class ImmediateDispatcher:
    """Runs callbacks inline.

    Only correct when notifications already arrive on the owning context,
    e.g. a single-threaded host or a test using fake collaborators.
    """

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        callback(*args)


class AsyncioDispatcher:
    """Schedules callbacks on an asyncio event loop from any thread."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self.loop = loop or asyncio.get_running_loop()

    def call_soon(self, callback: Callable[..., Any], *args: Any) -> None:
        if self.loop.is_closed():
            logger.debug(f"Dropping {getattr(callback, '__name__', callback)}: loop closed")
            return
        self.loop.call_soon_threadsafe(callback, *args)
