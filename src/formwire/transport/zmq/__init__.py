"""ZeroMQ transport backend."""

from . import client
