"""Transport layer implementations."""

from .. import config

from .base import (
    Transport,
    TransportError,
    TransportConnectionError,
    TransportFatalError,
)

_BACKEND = config.transport()

if _BACKEND == "zmq":
    from .zmq import client as backend
else:
    raise ImportError(f"unknown FORMWIRE_TRANSPORT backend: {_BACKEND!r}")


def create(url=None, reconnect=None, heartbeat=None) -> Transport:
    """Return an unopened transport for *url* using the configured backend.
    The url defaults to the ``FORMWIRE_URL`` environment variable."""

    return backend.Client(config.url(url), reconnect=reconnect, heartbeat=heartbeat)
