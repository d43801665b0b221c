""" Server-driven option refresh. Some fields cannot ship their full option
    set up front: an autocomplete field only knows what to offer once the
    user starts typing, and a filterable table pages through results on
    demand. For those fields a :class:`PatchChannel` listens for the peer's
    patch requests, calls the caller-supplied fetch function, and sends the
    result back as a ``patch`` message.
"""

import logging

from . import broker
from .awaitable import settle
from .protocol import fields
from .protocol.message import Patch

log = logging.getLogger(__name__)


class PatchChannel:
    """ The channel for one field. It is registered with the engine by
        :func:`open` and must be closed exactly when the field resolves; the
        engine does this itself the moment validation succeeds, and the
        field operation closes it again (harmlessly) on its way out.

        A fetch still in flight when the channel closes has its result
        discarded, no patch is ever sent for a resolved field.
    """

    def __init__(self, engine, session_id, field_id, fetch):

        if callable(fetch):
            pass
        else:
            raise TypeError('fetch must be callable')

        self.engine = engine
        self.session_id = session_id
        self.field_id = field_id
        self.fetch = fetch
        self.key = broker.key(session_id, field_id, fields.PHASE_PATCH)
        self.closed = False


    def open(self):
        self.engine.channels[self.key] = self
        self.engine.broker.on(self.key, self.refine)
        return self


    def close(self):

        if self.closed:
            return

        self.closed = True
        self.engine.broker.remove_all(self.key)

        if self.engine.channels.get(self.key) is self:
            del self.engine.channels[self.key]


    async def refine(self, data):
        """ Handle one patch request from the peer.
        """

        if self.closed:
            return

        try:
            state = await settle(self.fetch(data))
        except Exception:
            log.exception('fetch for %s failed', self.field_id)
            return

        if self.closed:
            log.debug('discarding late patch for %s', self.field_id)
            return

        patch = Patch(field_id=self.field_id, session_id=self.session_id, patched_state=state)
        self.engine.send(patch)


# end of class PatchChannel


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
