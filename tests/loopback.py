""" An in-memory transport to act as a foil for the unit tests. Whatever the
    engine writes is recorded in :attr:`Loopback.written`; whatever a test
    passes to :func:`Loopback.feed` comes back out of :func:`Transport.recv`.
"""

import asyncio

import formwire
from formwire.engine import Engine
from formwire.protocol.fields import HEARTBEAT
from formwire.transport.base import Transport, TransportConnectionError


class Loopback(Transport):

    def __init__(self, auto_open=True, heartbeat=0, reconnect=1):

        Transport.__init__(self, 'loopback://unittest', reconnect=reconnect, heartbeat=heartbeat)

        self.auto_open = auto_open
        self.broken = 0
        self.written = list()
        self.peer = asyncio.Queue()


    async def _connect(self):
        if self.auto_open:
            self._link_up()


    async def _disconnect(self):
        pass


    async def _write(self, data):

        if self.broken > 0:
            self.broken -= 1
            raise TransportConnectionError('unittest link is broken')

        self.written.append(data)


    async def _read(self):

        data = await self.peer.get()

        if isinstance(data, BaseException):
            raise data

        return data


    def feed(self, **message):
        """ Queue an inbound JSON message built from the keyword arguments.
        """

        self.peer.put_nowait(formwire.json.dumps(message))


    def feed_raw(self, data):
        self.peer.put_nowait(data)


    def sent(self, action=None):
        """ Return the decoded messages written so far, heartbeats excluded,
            optionally only those with the given *action*.
        """

        messages = list()

        for data in self.written:
            if data == HEARTBEAT:
                continue
            message = formwire.json.loads(data)
            if action is None or message['action'] == action:
                messages.append(message)

        return messages


    async def expect(self, action, count=1, timeout=2):
        """ Wait until at least *count* messages with the given *action* have
            been written, and return all of them.
        """

        async def poll():
            while True:
                found = self.sent(action)
                if len(found) >= count:
                    return found
                await asyncio.sleep(0.001)

        return await asyncio.wait_for(poll(), timeout)


# end of class Loopback



async def started(workflow=None):
    """ Return an (engine, link, runner) triple for an engine running on a
        fresh :class:`Loopback`.
    """

    link = Loopback()
    engine = Engine(link, verbose=False)

    if workflow is not None:
        engine.stateful_session(workflow)

    await engine.start()
    runner = asyncio.ensure_future(engine.run())
    return engine, link, runner



async def stop(engine, runner):
    runner.cancel()
    await asyncio.gather(runner, return_exceptions=True)
    await engine.close()



async def settle(delay=0.02):
    """ Give background tasks a moment to run.
    """

    await asyncio.sleep(delay)



def run(coroutine, timeout=5):
    return asyncio.run(asyncio.wait_for(coroutine, timeout))


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
