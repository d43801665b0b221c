"""Transport codec for formwire messages."""

from __future__ import annotations

from typing import Union

import msgspec

from .. import json
from ..protocol.message import InboundMessage, Outbound, ParseFailure, Render


_inbound = msgspec.json.Decoder(InboundMessage)


def encode(message: Union[Outbound, bytes]) -> bytes:
    """Return the wire bytes for an outbound message.

    A :class:`Render` carries its descriptor flattened into the top level;
    the identifying fields always win over a descriptor key of the same name.
    Bytes are passed through as-is, this is how the heartbeat is sent.
    """

    if isinstance(message, bytes):
        return message

    if isinstance(message, Render):
        flattened = dict(message.descriptor)
        flattened["action"] = "render"
        flattened["fieldId"] = message.field_id
        flattened["sessionId"] = message.session_id
        flattened["type"] = message.type
        return json.dumps(flattened)

    return json.dumps(message)


def decode(payload: bytes) -> Union[InboundMessage, ParseFailure]:
    """Parse inbound bytes. This never raises; anything that is not one of
    the known inbound messages comes back as a :class:`ParseFailure`.
    """

    if isinstance(payload, str):
        payload = payload.encode()

    try:
        return _inbound.decode(payload)
    except msgspec.DecodeError as e:
        # ValidationError is a DecodeError: wrong types, missing fields,
        # and unknown actions all land here.
        return ParseFailure(reason=str(e), payload=bytes(payload))
    except ValueError as e:
        # Well-formed JSON can still carry strings that are not valid UTF-8.
        return ParseFailure(reason=str(e), payload=bytes(payload))
    except TypeError as e:
        # Not bytes-like at all.
        return ParseFailure(reason=str(e))
