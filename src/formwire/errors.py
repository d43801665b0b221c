""" Exceptions raised by the engine itself. Transport-level exceptions live
    in :mod:`formwire.transport.base`.
"""


class FormwireError(Exception):
    """ Base class for all engine errors.
    """


class OptionsError(FormwireError, ValueError):
    """ The options supplied for a field do not match its schema.
    """


class DuplicateWaiter(FormwireError, RuntimeError):
    """ A second waiter was registered for a single-consumer key.
    """


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
