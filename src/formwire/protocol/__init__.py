from . import fields
from . import message


"""
formwire Protocol Layer
=======================

This package defines the messages exchanged with the remote peer. It has no
knowledge of how bytes move; see :mod:`formwire.transport` for that.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Workflow Code
    │
    ▼
Session Facade (session.py, elements.py)
    One awaitable method per field kind
    - text(), number(), select(), ...
    - group()

    │
    ▼
Engine (engine.py, broker.py, patch.py)
    Correlates inbound events with suspended fields
    - validator map
    - resolve / patch / groupComplete keys

    │
    ▼
Message Model (message.py)
    Tagged unions, one per direction
    - Render, Patch, Warn, Destroy, ...
    - StartSession, PatchRequest, Resolve

    │
    ▼
Field Vocabulary (fields.py)
    Canonical action names and correlation phases

---------------------------------------------------------------------

Below the Protocol Layer
------------------------

Codec (transport/codec.py)
    Maps messages <-> JSON bytes, never raises on decode

Transport (transport/base.py, transport/zmq/)
    Moves bytes, buffers while disconnected, reconnects

---------------------------------------------------------------------
"""


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
