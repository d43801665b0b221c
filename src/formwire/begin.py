""" Entry points for host programs. Most programs only need :func:`serve`::

        async def workflow(io, session):
            name = await io.text('Name')
            await io.paragraph('Hello, ' + name)

        asyncio.run(formwire.serve(workflow, 'tcp://forms.example.com:10100'))
"""

from . import transport
from .engine import Engine


async def connect(url=None, verbose=True, reconnect=None, heartbeat=None):
    """ Create an :class:`Engine` connected to *url* and return it once the
        transport is open. The caller is responsible for registering a
        workflow, invoking :func:`Engine.run`, and eventually
        :func:`Engine.close`.
    """

    link = transport.create(url, reconnect=reconnect, heartbeat=heartbeat)
    engine = Engine(link, verbose=verbose)
    await engine.start()
    return engine



async def serve(workflow, url=None, **kwargs):
    """ Connect, run *workflow* for every session the peer starts, and keep
        going until the transport fails; see :func:`connect` for the keyword
        arguments.
    """

    engine = await connect(url, **kwargs)
    engine.stateful_session(workflow)

    try:
        await engine.run()
    finally:
        await engine.close()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
