""" Class representations of formwire messages. Every message on the wire is
    a JSON object discriminated by its ``action`` field; each direction has
    its own tagged union of :class:`msgspec.Struct` subclasses, so decoding
    an inbound payload either yields exactly one of the known variants or
    fails outright.

    Attribute names are snake_case here and camelCase on the wire.
"""

import typing
import uuid

import msgspec

from . import fields


class Outbound(msgspec.Struct, tag_field='action', rename='camel', kw_only=True):
    """ Base class for every message sent to the peer.
    """


class Render(Outbound, tag=fields.RENDER):
    """ Ask the peer to render a field. The *descriptor* is a dictionary of
        render parameters; it is flattened into the top-level JSON object
        when encoded, see :func:`formwire.transport.codec.encode`.
    """

    field_id: str
    session_id: str
    type: str
    descriptor: dict = {}


class Patch(Outbound, tag=fields.PATCH):
    field_id: str
    session_id: str
    patched_state: typing.Any = None


class Warn(Outbound, tag=fields.WARN):
    field_id: str
    session_id: str
    validation_result: typing.Union[str, bool]


class Destroy(Outbound, tag=fields.DESTROY):
    field_id: str
    session_id: str


class Complete(Outbound, tag=fields.COMPLETE):
    session_id: str


class GroupComplete(Outbound, tag=fields.GROUP_COMPLETE):
    session_id: str


class UpdatePeers(Outbound, tag=fields.UPDATE_PEERS):
    pass



class Inbound(msgspec.Struct, tag_field='action', rename='camel', kw_only=True):
    """ Base class for every message received from the peer.
    """


class StartSession(Inbound, tag=fields.START_SESSION):
    session_id: str
    user: str


class PatchRequest(Inbound, tag=fields.PATCH):
    """ The peer wants a fresh option set for a field; *data* is the partial
        query string (autocomplete) or a paging request (tables).
    """

    field_id: str
    session_id: str
    data: typing.Any = None


class Resolve(Inbound, tag=fields.RESOLVE):
    field_id: str
    session_id: str
    field_value: typing.Any = None


InboundMessage = typing.Union[StartSession, PatchRequest, Resolve]


class ParseFailure(msgspec.Struct):
    """ Stand-in for an inbound payload that could not be decoded. These are
        never raised, only returned, and are dropped by the caller.
    """

    reason: str
    payload: bytes = b''



def new_id(prefix):
    """ Return a new identifier with the given *prefix*, for example
        ``field_0f3c...``. Identifiers are random rather than sequential so
        that they stay unique across process restarts; the peer outlives us
        and remembers the identifiers we handed out before.
    """

    return '%s_%s' % (prefix, uuid.uuid4().hex)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
