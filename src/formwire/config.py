""" Runtime settings. Every setting can be passed explicitly by the caller;
    otherwise it is read from the environment, and failing that a default
    applies. The environment is consulted every time a function here is
    called, there is no caching.
"""

import os


default_heartbeat = 1.0
default_reconnect = 1.0
default_transport = 'zmq'


def url(explicit=None):
    """ Return the connection string for the remote endpoint. The *explicit*
        value wins if provided, otherwise the ``FORMWIRE_URL`` environment
        variable is used.
    """

    if explicit:
        return str(explicit)

    try:
        found = os.environ['FORMWIRE_URL']
    except KeyError:
        raise RuntimeError('no url specified and FORMWIRE_URL is not set')

    found = found.strip()
    if found == '':
        raise RuntimeError('FORMWIRE_URL is set but empty')

    return found



def transport():
    """ Return the name of the transport backend to use.
    """

    name = os.environ.get('FORMWIRE_TRANSPORT', default_transport)
    return name.strip().lower()



def heartbeat(explicit=None):
    """ Return the heartbeat period in seconds. A period of zero disables
        the heartbeat entirely, and is returned as None.
    """

    period = _seconds('FORMWIRE_HEARTBEAT', explicit, default_heartbeat)

    if period == 0:
        return None

    return period



def reconnect(explicit=None):
    """ Return the fixed interval, in seconds, between reconnection attempts.
    """

    interval = _seconds('FORMWIRE_RECONNECT', explicit, default_reconnect)

    if interval == 0:
        raise ValueError('the reconnect interval must be greater than zero')

    return interval



def google_maps_key(explicit=None):
    """ Return the API key used by address fields. An empty string means no
        key is available; address fields still work, but the peer is warned.
    """

    if explicit:
        return explicit

    return os.environ.get('FORMWIRE_GOOGLE_MAPS_KEY', '')



def _seconds(variable, explicit, default):

    if explicit is not None:
        value = explicit
    else:
        try:
            value = os.environ[variable]
        except KeyError:
            return default

    try:
        value = float(value)
    except (TypeError, ValueError):
        raise ValueError("%s must be a number of seconds, not %r" % (variable, value))

    if value < 0:
        raise ValueError("%s cannot be negative: %r" % (variable, value))

    return value


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
