"""ZeroMQ client transport.

A single DEALER socket carries both directions. ZeroMQ already retries a
dropped connection on its own; the socket is configured so that the retry
interval is fixed rather than growing, and a monitor socket relays the link
state back to :class:`formwire.transport.base.Transport`, which owns the
outbound buffer.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import zmq
import zmq.asyncio
from zmq.utils.monitor import parse_monitor_message

from ..base import Transport, TransportConnectionError

log = logging.getLogger(__name__)

zmq_context = zmq.asyncio.Context()

_monitored = (
    zmq.EVENT_CONNECTED
    | zmq.EVENT_DISCONNECTED
    | zmq.EVENT_CONNECT_RETRIED
    | zmq.EVENT_MONITOR_STOPPED
)


class Client(Transport):
    """Connect a DEALER socket to *url*, for example ``tcp://host:port``."""

    def __init__(self, url: str, reconnect: Optional[float] = None, heartbeat: Optional[float] = None):
        Transport.__init__(self, url, reconnect, heartbeat)

        self.socket: Optional[zmq.asyncio.Socket] = None
        self.monitor: Optional[zmq.asyncio.Socket] = None
        self._watcher: Optional[asyncio.Task] = None

    async def _connect(self) -> None:

        interval = int(self.reconnect * 1000)

        socket = zmq_context.socket(zmq.DEALER)
        socket.setsockopt(zmq.LINGER, 0)

        # IMMEDIATE keeps messages from being queued onto a pipe that has
        # no live peer; the base class buffers them instead.

        socket.setsockopt(zmq.IMMEDIATE, 1)
        socket.setsockopt(zmq.RECONNECT_IVL, interval)
        socket.setsockopt(zmq.RECONNECT_IVL_MAX, 0)

        self.socket = socket
        self.monitor = socket.get_monitor_socket(_monitored)
        self._watcher = asyncio.ensure_future(self._watch())

        try:
            socket.connect(self.url)
        except zmq.ZMQError as e:
            raise TransportConnectionError("cannot connect to %s: %s" % (self.url, e)) from e

    async def _disconnect(self) -> None:

        if self._watcher is not None:
            self._watcher.cancel()
            await asyncio.gather(self._watcher, return_exceptions=True)
            self._watcher = None

        if self.socket is not None:
            try:
                self.socket.disable_monitor()
            except zmq.ZMQError:
                pass
            self.socket.close()
            self.socket = None

        if self.monitor is not None:
            self.monitor.close()
            self.monitor = None

    async def _write(self, data: bytes) -> None:
        try:
            await self.socket.send(data)
        except zmq.Again as e:
            raise TransportConnectionError(str(e)) from e

    async def _read(self) -> bytes:
        parts = await self.socket.recv_multipart()

        # A ROUTER on the far end may prepend an empty delimiter frame.
        return parts[-1]

    async def _watch(self) -> None:
        """Translate monitor events into link state changes."""

        while True:
            parts = await self.monitor.recv_multipart()
            event = parse_monitor_message(parts)
            kind = event['event']

            if kind == zmq.EVENT_CONNECTED:
                self._link_up()
            elif kind == zmq.EVENT_DISCONNECTED:
                self._link_down()
            elif kind == zmq.EVENT_CONNECT_RETRIED:
                self._retrying()
            elif kind == zmq.EVENT_MONITOR_STOPPED:
                return
            else:
                log.debug("ignoring monitor event %r", event)
