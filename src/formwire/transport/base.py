"""Transport interface.

This is the contract that transport implementations follow, plus the
behavior every implementation shares: an ordered outbound buffer that holds
messages while the link is down, lifecycle event callbacks, and the
heartbeat. Implementations only move bytes; see :mod:`formwire.transport.zmq`.
It lives outside :mod:`formwire.protocol` so the protocol remains
transport-agnostic.
"""

from __future__ import annotations

import asyncio
import collections
import logging
from abc import ABC, abstractmethod
from typing import Callable, Deque, Dict, List, Optional

from .. import config
from ..protocol.fields import HEARTBEAT
from . import codec

log = logging.getLogger(__name__)


# Transport agnostic exceptions

class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """A write could not be completed because the link went away."""


class TransportFatalError(TransportError):
    """The transport failed in a way that cannot be recovered in-process."""


OPEN = "open"
CLOSE = "close"
RECONNECTING = "reconnecting"
RECONNECTED = "reconnected"
FATAL_ERROR = "fatal_error"

_EOF = object()


class Transport(ABC):
    """Minimal contract for a wire-level transport.

    Subclasses implement :meth:`_connect`, :meth:`_disconnect`,
    :meth:`_write` and :meth:`_read`, and report link state changes by
    calling :meth:`_link_up`, :meth:`_link_down`, :meth:`_retrying` and
    :meth:`_failed`.
    """

    events = (OPEN, CLOSE, RECONNECTING, RECONNECTED, FATAL_ERROR)

    def __init__(self, url: str, reconnect: Optional[float] = None, heartbeat: Optional[float] = None):
        self.url = url
        self.reconnect = config.reconnect(reconnect)
        self.heartbeat = config.heartbeat(heartbeat)

        self._outbound: Deque[bytes] = collections.deque()
        self._inbound: asyncio.Queue = asyncio.Queue()
        self._link = asyncio.Event()
        self._wakeup = asyncio.Event()
        self._listeners: Dict[str, List[Callable]] = {event: [] for event in self.events}
        self._tasks: List[asyncio.Task] = []
        self._fatal: Optional[BaseException] = None
        self._seen_open = False

    # --- public surface ---

    @property
    def is_open(self) -> bool:
        """Whether the link is currently up."""
        return self._link.is_set()

    @property
    def pending(self) -> int:
        """Number of outbound messages not yet written."""
        return len(self._outbound)

    def on(self, event: str, callback: Callable) -> None:
        """Register *callback* for a lifecycle *event*."""

        if event not in self._listeners:
            raise ValueError("unknown transport event: %r" % (event,))
        if not callable(callback):
            raise TypeError("callback must be callable")

        self._listeners[event].append(callback)

    async def open(self) -> None:
        """Establish the link and start the background tasks."""

        await self._connect()

        self._tasks.append(asyncio.ensure_future(self._drain()))
        self._tasks.append(asyncio.ensure_future(self._receive()))

        if self.heartbeat is not None:
            self._tasks.append(asyncio.ensure_future(self._beat()))

    async def close(self) -> None:
        """Stop the background tasks and tear down the link. Anything still
        in the outbound buffer is discarded."""

        tasks = self._tasks
        self._tasks = []

        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        await self._disconnect()
        self._link_down()

    def send(self, message) -> None:
        """Queue a message (or raw bytes) for delivery. Messages are written
        in the order they were queued; while the link is down they stay
        queued, and are flushed once it comes back."""

        self._outbound.append(codec.encode(message))
        self._wakeup.set()

    async def recv(self) -> bytes:
        """Return the next inbound payload. Raises
        :class:`TransportFatalError` once the transport has failed."""

        data = await self._inbound.get()

        if data is _EOF:
            # Leave the marker in place for any other reader.
            self._inbound.put_nowait(_EOF)
            raise TransportFatalError(str(self._fatal)) from self._fatal

        return data

    # --- hooks for subclasses ---

    @abstractmethod
    async def _connect(self) -> None:
        """Start connecting. Need not wait for the link to come up."""

    @abstractmethod
    async def _disconnect(self) -> None:
        """Release the underlying connection/socket."""

    @abstractmethod
    async def _write(self, data: bytes) -> None:
        """Put bytes on the wire. Raise :class:`TransportConnectionError`
        if the link went away; the same bytes will be retried later."""

    @abstractmethod
    async def _read(self) -> bytes:
        """Wait for and return the next inbound payload."""

    def _link_up(self) -> None:
        if self.is_open:
            return

        self._link.set()
        self._wakeup.set()

        if self._seen_open:
            self._emit(RECONNECTED)
        else:
            self._seen_open = True
            self._emit(OPEN)

    def _link_down(self) -> None:
        if not self.is_open:
            return

        self._link.clear()
        self._emit(CLOSE)

    def _retrying(self) -> None:
        self._emit(RECONNECTING)

    def _failed(self, error: BaseException) -> None:
        if self._fatal is not None:
            return

        self._fatal = error
        self._link.clear()
        self._inbound.put_nowait(_EOF)
        self._emit(FATAL_ERROR, error)

    # --- internal ---

    def _emit(self, event: str, *args) -> None:
        for callback in list(self._listeners[event]):
            try:
                callback(*args)
            except Exception:
                log.exception("%s callback failed", event)

    async def _drain(self) -> None:
        """Write queued messages in order, one at a time. A message only
        leaves the buffer after it has been written."""

        while True:
            await self._link.wait()

            if not self._outbound:
                self._wakeup.clear()
                await self._wakeup.wait()
                continue

            data = self._outbound[0]

            try:
                await self._write(data)
            except TransportConnectionError:
                self._link_down()
                continue
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._failed(e)
                return

            self._outbound.popleft()

    async def _receive(self) -> None:
        while True:
            try:
                data = await self._read()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                self._failed(e)
                return

            self._inbound.put_nowait(data)

    async def _beat(self) -> None:
        while True:
            await asyncio.sleep(self.heartbeat)

            # Pings are only useful on a live link; never buffer them.
            if self.is_open:
                self.send(HEARTBEAT)
