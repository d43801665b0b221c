""" Exercise the ZeroMQ client against a ROUTER socket standing in for the
    form server.
"""

import asyncio
import formwire
import zmq
import zmq.asyncio

from formwire.transport import base
from formwire.transport.zmq.client import Client


def test_round_trip():

    async def scenario():
        context = zmq.asyncio.Context.instance()
        server = context.socket(zmq.ROUTER)
        server.setsockopt(zmq.LINGER, 0)
        port = server.bind_to_random_port('tcp://127.0.0.1')

        client = Client('tcp://127.0.0.1:%d' % (port), reconnect=0.1, heartbeat=0)
        opened = asyncio.Event()
        client.on(base.OPEN, opened.set)

        await client.open()
        await asyncio.wait_for(opened.wait(), 5)

        client.send(formwire.protocol.message.UpdatePeers())
        identity, payload = await asyncio.wait_for(server.recv_multipart(), 5)
        assert formwire.json.loads(payload) == {'action': 'updatePeers'}

        reply = b'{"action":"startSession","sessionId":"s1","user":"alice"}'
        await server.send_multipart([identity, reply])

        received = await asyncio.wait_for(client.recv(), 5)
        assert received == reply

        await client.close()
        assert client.is_open == False

        server.close()

    asyncio.run(scenario())


def test_buffered_until_connected():

    async def scenario():
        context = zmq.asyncio.Context.instance()

        # Reserve a port, then release it so that nothing is listening.

        probe = context.socket(zmq.ROUTER)
        port = probe.bind_to_random_port('tcp://127.0.0.1')
        probe.close(linger=0)

        url = 'tcp://127.0.0.1:%d' % (port)
        client = Client(url, reconnect=0.05, heartbeat=0)
        await client.open()

        client.send(b'first')
        client.send(b'second')
        await asyncio.sleep(0.1)
        assert client.pending == 2

        server = context.socket(zmq.ROUTER)
        server.setsockopt(zmq.LINGER, 0)
        server.bind(url)

        first = await asyncio.wait_for(server.recv_multipart(), 5)
        second = await asyncio.wait_for(server.recv_multipart(), 5)

        assert first[-1] == b'first'
        assert second[-1] == b'second'

        await client.close()
        server.close()

    asyncio.run(scenario())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
