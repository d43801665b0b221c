""" Python client for server-rendered form workflows. A host program supplies
    a workflow coroutine; the peer renders the fields it asks for, and the
    values the user submits come back as the results of those awaits.
"""

# Utility components.

from . import json
from . import config
from . import errors

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import broker
from . import options
from . import validators

# Primary public-facing interfaces.

from . import begin
connect = begin.connect
serve = begin.serve

from .engine import Engine
from .session import Session, SessionIO
from .errors import DuplicateWaiter, FormwireError, OptionsError
from .transport import TransportError, TransportFatalError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
