""" Per-session objects handed to the host workflow: the :class:`Session`
    description, and :class:`SessionIO`, the field producer that also knows
    how to run a group of fields concurrently.
"""

import asyncio

import msgspec

from . import broker
from .elements import Elements
from .protocol import fields
from .protocol.message import GroupComplete, new_id


class Session(msgspec.Struct, frozen=True):
    """ One workflow execution, as announced by the peer.
    """

    session_id: str
    user: str



class SessionIO(Elements):
    """ Standalone field producer for one session. Fields requested directly
        from this object are destroyed as soon as they resolve; fields
        requested inside :func:`group` stay on the page.
    """

    def __init__(self, engine, session):

        Elements.__init__(self, engine, session.session_id, standalone=True)
        self.session = session
        self.page = Elements(engine, session.session_id, standalone=False)


    async def group(self, build):
        """ Render several fields at once. *build* is called with a field
            producer and returns a list of pending field operations, for
            example::

                name, age = await io.group(lambda page: [
                    page.text('Name'),
                    page.number('Age'),
                ])

            The results are returned in the order *build* listed them, once
            every one of them has resolved. If any of them raises, the rest
            are cancelled and the exception is raised here.
        """

        pending = build(self.page)
        tasks = [asyncio.ensure_future(operation) for operation in pending]

        group_id = new_id(fields.GROUP_PREFIX)
        key = broker.key(self.session_id, group_id, fields.PHASE_GROUP)

        future = self.engine.broker.wait(key)
        collector = asyncio.ensure_future(self._collect(key, tasks))

        try:
            results = await future
        finally:
            self.engine.broker.discard(key, future)
            if not collector.done():
                collector.cancel()
                for task in tasks:
                    task.cancel()

        self.engine.send(GroupComplete(session_id=self.session_id))
        return results


    async def _collect(self, key, tasks):

        try:
            results = await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            for task in tasks:
                task.cancel()
            self.engine.broker.throw(key, e)
            return

        self.engine.broker.emit(key, list(results))


# end of class SessionIO


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
