""" The correlation broker is how an inbound network event finds the one
    suspended operation it belongs to. Everything is keyed by a composite
    :class:`Key` built by :func:`key`, so events for one session or field can
    never reach another. Session identifiers are opaque strings chosen by the
    peer, so a key is matched on its parts, never on its string form.

    There are two kinds of registrations:

    * Waiters, created with :func:`Broker.wait`: a single future per key,
      used for the ``resolve`` and ``groupComplete`` phases. Registering a
      second live waiter for the same key raises
      :class:`formwire.errors.DuplicateWaiter`.

    * Listeners, registered with :func:`Broker.on` or :func:`Broker.once`:
      callbacks invoked on every (or the next) :func:`Broker.emit` for a key,
      used for the ``patch`` phase.
"""

import asyncio
import inspect
import logging
import typing

from .errors import DuplicateWaiter

log = logging.getLogger(__name__)


class Key(typing.NamedTuple):

    session_id: str
    field_id: str
    phase: str

    def __str__(self):
        return '%s:%s:%s' % (self.session_id, self.field_id, self.phase)



def key(session_id, field_id, phase):
    """ Return the correlation key for a *field_id* (or group id) within a
        *session_id*, for the given *phase*.
    """

    return Key(session_id, field_id, phase)



class Broker:

    def __init__(self):

        self.listeners = dict()
        self.waiters = dict()
        self.tasks = set()


    def __contains__(self, key):
        return key in self.listeners or key in self.waiters


    def on(self, key, callback):
        """ Register a persistent *callback* for *key*. The callback receives
            the emitted payload; if it returns an awaitable, that awaitable is
            scheduled as a task.
        """

        self._register(key, callback, False)


    def once(self, key, callback):
        """ Register a *callback* that is removed after its first delivery.
        """

        self._register(key, callback, True)


    def _register(self, key, callback, once):

        if callable(callback):
            pass
        else:
            raise TypeError('callback must be callable')

        try:
            callbacks = self.listeners[key]
        except KeyError:
            callbacks = list()
            self.listeners[key] = callbacks

        callbacks.append((callback, once))


    def wait(self, key):
        """ Register the single waiter for *key* and return its future. The
            future is registered before this method returns, so an
            :func:`emit` issued any time after the call will be seen.
        """

        existing = self.waiters.get(key)

        if existing is not None and not existing.done():
            raise DuplicateWaiter('a waiter is already registered for ' + str(key))

        future = asyncio.get_running_loop().create_future()
        self.waiters[key] = future
        return future


    def discard(self, key, future):
        """ Forget *future* as the waiter for *key*, if it still is. This is
            the cleanup path for a waiter that went away without being woken.
        """

        if self.waiters.get(key) is future:
            del self.waiters[key]


    def emit(self, key, payload=None):
        """ Deliver *payload* to the waiter and any listeners for *key*. One-shot
            listeners are removed after delivery. Returns True if anything
            received the payload.
        """

        delivered = False

        future = self.waiters.pop(key, None)

        if future is not None and not future.done():
            future.set_result(payload)
            delivered = True

        try:
            callbacks = self.listeners[key]
        except KeyError:
            return delivered

        remaining = [entry for entry in callbacks if entry[1] == False]

        if remaining:
            self.listeners[key] = remaining
        else:
            del self.listeners[key]

        for callback, once in callbacks:
            self._invoke(key, callback, payload)
            delivered = True

        return delivered


    def throw(self, key, exception):
        """ Wake the waiter for *key* with an *exception* instead of a value.
        """

        future = self.waiters.pop(key, None)

        if future is None or future.done():
            return False

        future.set_exception(exception)
        return True


    def remove_all(self, key):
        """ Remove every listener registered for *key*. Waiters are not
            affected.
        """

        self.listeners.pop(key, None)


    def remove_session(self, session_id):
        """ Drop every listener and cancel every waiter registered under
            *session_id*. Returns the number of registrations removed.
        """

        removed = 0

        for key in list(self.listeners.keys()):
            if _owned(key, session_id):
                del self.listeners[key]
                removed += 1

        for key in list(self.waiters.keys()):
            if _owned(key, session_id):
                future = self.waiters.pop(key)
                future.cancel()
                removed += 1

        return removed


    def _invoke(self, key, callback, payload):

        try:
            result = callback(payload)
        except Exception:
            log.exception('listener for %s failed', key)
            return

        if inspect.isawaitable(result):
            task = asyncio.ensure_future(result)
            self.tasks.add(task)
            task.add_done_callback(self._task_done)


    def _task_done(self, task):

        self.tasks.discard(task)

        if task.cancelled():
            return

        exception = task.exception()
        if exception is not None:
            log.error('listener task failed', exc_info=exception)


# end of class Broker



def _owned(key, session_id):
    # Keys that were not built by key() belong to no session.
    return isinstance(key, Key) and key.session_id == session_id


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
