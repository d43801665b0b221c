""" The :class:`Engine` ties a transport to the correlation broker. It reads
    every inbound message, runs the validation round trip for submitted
    values, routes patch requests, and starts the host workflow for every
    session the peer opens.

    All state that would otherwise be process-wide (the validator map, the
    broker, the open patch channels, the running sessions) belongs to an
    engine instance, so several engines can share one process.
"""

import asyncio
import logging

from . import broker
from . import validators
from .errors import DuplicateWaiter
from .places import PlacesClient
from .protocol import fields
from .protocol.message import (
    Complete,
    Destroy,
    ParseFailure,
    PatchRequest,
    Render,
    Resolve,
    StartSession,
    UpdatePeers,
    Warn,
    new_id,
)
from .session import Session, SessionIO
from .transport import base as transport_base
from .transport import codec

log = logging.getLogger(__name__)


class Engine:
    """ Drive form sessions over *transport*, a
        :class:`formwire.transport.Transport` that has not been opened yet.
        If *verbose* is True the transport life cycle is logged at info level.
    """

    def __init__(self, transport, verbose=True):

        self.transport = transport
        self.broker = broker.Broker()
        self.validators = dict()
        self.channels = dict()
        self.sessions = dict()
        self.workflow = None
        self.tasks = set()
        self._places = None

        transport.on(transport_base.FATAL_ERROR, self._fatal)

        if verbose:
            transport.on(transport_base.OPEN, lambda: log.info('Connected to %s', transport.url))
            transport.on(transport_base.RECONNECTING, lambda: log.info('Reconnecting...'))
            transport.on(transport_base.RECONNECTED, lambda: log.info('Reconnected'))
            transport.on(transport_base.CLOSE, lambda: log.warning('Disconnected'))


    async def start(self):
        """ Open the transport and announce ourselves to the peer.
        """

        await self.transport.open()
        self.send(UpdatePeers())


    async def run(self):
        """ Process inbound messages until the transport fails, at which point
            :class:`formwire.transport.TransportFatalError` is raised. The
            expected response is for the process to exit and be restarted.
        """

        while True:
            payload = await self.transport.recv()
            message = codec.decode(payload)
            self.dispatch(message)


    async def close(self):

        sessions = list(self.sessions.values())
        for task in sessions:
            task.cancel()
        await asyncio.gather(*sessions, return_exceptions=True)

        # In-flight validation and patch fetches must not write to a closed
        # transport.

        pending = list(self.tasks) + list(self.broker.tasks)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)

        await self.transport.close()

        if self._places is not None:
            await self._places.close()
            self._places = None


    def stateful_session(self, workflow):
        """ Register the coroutine function run for every session the peer
            starts. It is called as ``workflow(io, session)`` with a
            :class:`formwire.session.SessionIO` and a
            :class:`formwire.session.Session`.
        """

        if callable(workflow):
            pass
        else:
            raise TypeError('workflow must be callable')

        self.workflow = workflow


    def send(self, message):
        self.transport.send(message)


    def places(self):
        """ Return the shared Google Places client, creating it on first use.
        """

        if self._places is None:
            self._places = PlacesClient()

        return self._places


    # Field life cycle, as used by formwire.elements.

    def render(self, session_id, type, descriptor, field_id=None):
        """ Send a render message and return the field id, generating one if
            *field_id* is not provided.
        """

        if field_id is None:
            field_id = new_id(fields.FIELD_PREFIX)

        message = Render(field_id=field_id, session_id=session_id, type=type, descriptor=descriptor)
        self.send(message)
        return field_id


    def destroy(self, session_id, field_id):
        self.send(Destroy(field_id=field_id, session_id=session_id))


    async def resolution(self, session_id, field_id, validator):
        """ Register *validator* for the field and wait until the peer submits
            a value that passes it. The registration is always removed on
            the way out, whether or not the wait completed.
        """

        if field_id in self.validators:
            raise DuplicateWaiter('field already has a pending validator: ' + field_id)

        key = broker.key(session_id, field_id, fields.PHASE_RESOLVE)
        entry = (session_id, validator)

        self.validators[field_id] = entry

        try:
            future = self.broker.wait(key)
        except DuplicateWaiter:
            del self.validators[field_id]
            raise

        try:
            return await future
        finally:
            self.broker.discard(key, future)
            if self.validators.get(field_id) is entry:
                del self.validators[field_id]


    # Inbound message handling.

    def dispatch(self, message):

        if isinstance(message, ParseFailure):
            log.debug('dropping inbound payload: %s', message.reason)
        elif isinstance(message, StartSession):
            self._start_session(message)
        elif isinstance(message, PatchRequest):
            key = broker.key(message.session_id, message.field_id, fields.PHASE_PATCH)
            if not self.broker.emit(key, message.data):
                log.debug('no patch channel for %s', key)
        elif isinstance(message, Resolve):
            self._spawn(self._resolve(message))
        else:
            log.debug('ignoring inbound message %r', message)


    async def _resolve(self, message):
        """ One round of the validation loop: validate the submitted value,
            then either wake the field or warn the peer and keep waiting.
        """

        field_id = message.field_id
        session_id = message.session_id
        value = message.field_value
        key = broker.key(session_id, field_id, fields.PHASE_RESOLVE)

        entry = self.validators.get(field_id)

        if entry is None:
            # Already resolved, or never ours; a redelivery after reconnect
            # lands here.
            if not self.broker.emit(key, value):
                log.debug('no pending field for %s', key)
            return

        owner, validator = entry

        if owner != session_id:
            log.warning('resolve for %s claims session %s, owned by %s', field_id, session_id, owner)
            return

        try:
            result = await validators.run(validator, value)
        except Exception as e:
            log.exception('validator for %s failed', field_id)
            result = str(e) or 'Invalid value'

        if result is True:
            # Another submission may have been accepted while this one
            # was being validated.
            if self.validators.get(field_id) is not entry:
                return

            del self.validators[field_id]

            channel = self.channels.get(broker.key(session_id, field_id, fields.PHASE_PATCH))
            if channel is not None:
                channel.close()

            self.broker.emit(key, value)
        else:
            # A later submission may already have been accepted; the field
            # is gone and there is nobody left to warn.
            if self.validators.get(field_id) is not entry:
                return

            warning = Warn(field_id=field_id, session_id=session_id, validation_result=result)
            self.send(warning)


    # Session registry.

    def _start_session(self, message):

        session_id = message.session_id

        if session_id in self.sessions:
            log.info('session %s is already running', session_id)
            return

        if self.workflow is None:
            log.warning('no workflow registered, ignoring session %s', session_id)
            return

        self.send(UpdatePeers())

        session = Session(session_id=session_id, user=message.user)
        io = SessionIO(self, session)

        task = asyncio.ensure_future(self._run_session(io, session))
        self.sessions[session_id] = task


    async def _run_session(self, io, session):

        session_id = session.session_id

        try:
            await self.workflow(io, session)
        except asyncio.CancelledError:
            self._teardown(session_id)
            raise
        except Exception:
            log.exception('workflow for session %s failed', session_id)

        self.send(Complete(session_id=session_id))
        self._teardown(session_id)


    def _teardown(self, session_id):
        """ Release everything still registered under *session_id*.
        """

        self.sessions.pop(session_id, None)

        for key, channel in list(self.channels.items()):
            if channel.session_id == session_id:
                channel.close()

        for field_id, entry in list(self.validators.items()):
            if entry[0] == session_id:
                del self.validators[field_id]

        self.broker.remove_session(session_id)


    # Internal.

    def _spawn(self, coroutine):
        task = asyncio.ensure_future(coroutine)
        self.tasks.add(task)
        task.add_done_callback(self._task_done)
        return task


    def _task_done(self, task):

        self.tasks.discard(task)

        if task.cancelled():
            return

        exception = task.exception()
        if exception is not None:
            log.error('inbound handler failed', exc_info=exception)


    def _fatal(self, error):
        log.critical('transport failed, exiting: %s', error)


# end of class Engine


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
