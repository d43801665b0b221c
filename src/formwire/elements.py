""" Field producers. An :class:`Elements` instance is bound to one session and
    offers one coroutine method per field kind. Input methods render the
    field, wait for the peer to submit a value that passes validation, and
    return that value. Display methods render once and return a handle.

    Every input method accepts the keyword arguments *validator* (a plain or
    coroutine function returning True or a rejection string) and
    *cached_field_id* (re-use an identifier handed out before a restart), in
    addition to the options for its kind; see :mod:`formwire.options`.
"""

import logging

from . import config
from . import options as schema
from . import validators
from .awaitable import settle
from .errors import OptionsError
from .patch import PatchChannel
from .protocol.message import Patch, Warn

log = logging.getLogger(__name__)


class Elements:
    """ When *standalone* is True every input field is destroyed as soon as it
        resolves; otherwise (inside a group) the field is left in place.
    """

    def __init__(self, engine, session_id, standalone=True):

        self.engine = engine
        self.session_id = session_id
        self.standalone = standalone


    async def _input(self, kind, descriptor, validator=None, cached_field_id=None, wire_type=None, fetch=None, rendered=None):
        """ The shared life cycle of every input field: render, open the patch
            channel if there is one, register the validator, wait.
        """

        engine = self.engine
        session_id = self.session_id

        if wire_type is None:
            wire_type = kind

        if validator is None:
            validator = validators.default(kind)
        elif callable(validator):
            pass
        else:
            raise OptionsError('validator must be callable')

        field_id = engine.render(session_id, wire_type, descriptor, cached_field_id)

        channel = None

        try:
            if fetch is not None:
                channel = PatchChannel(engine, session_id, field_id, fetch).open()

            if rendered is not None:
                rendered(field_id)

            return await engine.resolution(session_id, field_id, validator)
        finally:
            if channel is not None:
                channel.close()
            if self.standalone:
                engine.destroy(session_id, field_id)


    async def _simple(self, kind, label, options, validator, cached_field_id, wire_type=None):
        descriptor = schema.normalize(kind, label, options)
        return await self._input(kind, descriptor, validator, cached_field_id, wire_type)


    # Input fields.

    async def text(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('text', label, options, validator, cached_field_id)


    async def number(self, label, validator=None, cached_field_id=None, **options):
        descriptor = schema.normalize('number', label, options)
        descriptor['number'] = True
        return await self._input('number', descriptor, validator, cached_field_id)


    async def currency(self, label, validator=None, cached_field_id=None, **options):
        """ The peer expects the number of decimals as ``minDecimals``.
        """

        descriptor = schema.normalize('currency', label, options)
        descriptor['minDecimals'] = descriptor.pop('decimals')
        return await self._input('currency', descriptor, validator, cached_field_id)


    async def markdown(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('markdown', label, options, validator, cached_field_id)


    async def rich_text(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('rich_text', label, options, validator, cached_field_id, 'richText')


    async def slider(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('slider', label, options, validator, cached_field_id)


    async def email(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('email', label, options, validator, cached_field_id)


    async def checkbox(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('checkbox', label, options, validator, cached_field_id)


    async def checkboxes(self, label, items, validator=None, cached_field_id=None, **options):
        """ A list of checkboxes; resolves with the list of checked values.
            On the wire this is a checkbox field with an options list.
        """

        descriptor = schema.normalize('checkboxes', label, options)
        descriptor['options'] = schema.items('checkboxes', items)
        return await self._input('checkboxes', descriptor, validator, cached_field_id, 'checkbox')


    async def radio(self, label, items, validator=None, cached_field_id=None, **options):
        descriptor = schema.normalize('radio', label, options)
        descriptor['options'] = schema.items('radio', items)
        return await self._input('radio', descriptor, validator, cached_field_id)


    async def select(self, label, items, validator=None, cached_field_id=None, **options):
        descriptor = schema.normalize('select', label, options)
        descriptor['options'] = schema.items('select', items)
        return await self._input('select', descriptor, validator, cached_field_id)


    async def autocomplete(self, label, query, validator=None, cached_field_id=None, **options):
        """ The *query* function receives the user's partial input and
            returns a list of options, each either a string or a dictionary
            with ``label`` and ``value``. It may be a coroutine function.
        """

        if callable(query):
            pass
        else:
            raise OptionsError('autocomplete query must be callable')

        descriptor = schema.normalize('autocomplete', label, options)
        return await self._input('autocomplete', descriptor, validator, cached_field_id, fetch=query)


    async def address(self, label, api_key=None, pick=None, lookup=None, validator=None, cached_field_id=None, **options):
        """ An autocomplete field backed by Google Places. The resolved value
            is the chosen prediction, or whatever *pick* returns when given
            that prediction. The API key defaults to the
            ``FORMWIRE_GOOGLE_MAPS_KEY`` environment variable; if there is
            none the peer is warned, but the field still works.

            *lookup* replaces the Google Places call entirely, it receives
            the partial input and returns the list of options.
        """

        api_key = config.google_maps_key(api_key)
        descriptor = schema.normalize('address', label, options)

        if lookup is None:
            places = self.engine.places()

            async def lookup(text):
                return await places.autocomplete(api_key, text)

        def rendered(field_id):
            if api_key:
                return
            log.warning('no Google Maps API key for address field %s', field_id)
            warning = Warn(field_id=field_id, session_id=self.session_id, validation_result='Missing Google Maps API key')
            self.engine.send(warning)

        value = await self._input('address', descriptor, validator, cached_field_id, 'autocomplete', lookup, rendered)

        if pick is not None:
            value = await settle(pick(value))

        return value


    async def date(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('date', label, options, validator, cached_field_id)


    async def datetime_local(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('datetime_local', label, options, validator, cached_field_id, 'datetime-local')


    async def time(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('time', label, options, validator, cached_field_id)


    async def colorpicker(self, label, validator=None, cached_field_id=None, **options):
        return await self._simple('colorpicker', label, options, validator, cached_field_id)


    async def table(self, label, query, validator=None, cached_field_id=None, **options):
        """ A table of selectable rows; resolves with the selected rows.

            The *query* function is called with the keyword arguments
            ``query`` (the filter text), ``page`` (starting at 1), ``offset``
            and ``page_size``, and returns a ``(rows, total)`` pair. The first
            page is fetched before the table is rendered. Further pages are
            only fetched for a *filterable* table.
        """

        if callable(query):
            pass
        else:
            raise OptionsError('table query must be callable')

        descriptor = schema.normalize('table', label, options)
        page_size = descriptor['resultsPerPage']

        rows, total = await _page(query, '', 1, page_size)
        descriptor['resultsToDisplay'] = rows
        descriptor['totalResults'] = total

        fetch = None

        if descriptor['filterable']:

            async def fetch(data):
                text, page = _paging(data)
                rows, total = await _page(query, text, page, page_size)
                return {'resultsToDisplay': rows, 'totalResults': total}

        return await self._input('table', descriptor, validator, cached_field_id, fetch=fetch)


    # Display elements.

    async def progress(self, label, **options):
        descriptor = schema.normalize('progress', label, options)
        descriptor['defaultValue'] = 0
        field_id = self.engine.render(self.session_id, 'progress', descriptor)
        return Progress(self.engine, self.session_id, field_id)


    async def loading(self, label, **options):
        descriptor = schema.normalize('loading', label, options)
        field_id = self.engine.render(self.session_id, 'loading', descriptor)
        return Loading(self.engine, self.session_id, field_id)


    async def heading(self, text):
        field_id = self.engine.render(self.session_id, 'heading', {'text': str(text)})
        return Display(self.engine, self.session_id, field_id)


    async def paragraph(self, text):
        field_id = self.engine.render(self.session_id, 'paragraph', {'text': str(text)})
        return Display(self.engine, self.session_id, field_id)


# end of class Elements



class Display:
    """ Handle for a rendered display element.
    """

    def __init__(self, engine, session_id, field_id):

        self.engine = engine
        self.session_id = session_id
        self.field_id = field_id
        self.destroyed = False


    def destroy(self):
        if self.destroyed:
            return

        self.destroyed = True
        self.engine.destroy(self.session_id, self.field_id)


    def _patch(self, state):
        patch = Patch(field_id=self.field_id, session_id=self.session_id, patched_state=state)
        self.engine.send(patch)


# end of class Display



class Progress(Display):

    def __init__(self, engine, session_id, field_id):
        Display.__init__(self, engine, session_id, field_id)
        self.value = 0


    def increment(self, amount=1):
        self.value += amount
        self._patch(self.value)


# end of class Progress



class Loading(Display):

    icons = ('spinner', 'check')

    def update_message(self, label=None, description=None, icon=None):
        """ Change any of the *label*, *description*, or *icon* shown; only
            the arguments given are sent.
        """

        state = dict()

        if icon is not None:
            if icon not in self.icons:
                raise OptionsError('unknown loading icon: ' + repr(icon))
            state['icon'] = icon
        if label is not None:
            state['label'] = str(label)
        if description is not None:
            state['description'] = str(description)

        self._patch(state)


# end of class Loading



def _paging(data):
    """ Interpret a table patch request, ``{query, page}``.
    """

    if not isinstance(data, dict):
        raise ValueError('table patch request must be an object, not ' + repr(data))

    text = data.get('query') or ''
    page = data.get('page') or 1

    if isinstance(page, bool) or not isinstance(page, int) or page < 1:
        raise ValueError('invalid table page: ' + repr(page))

    return str(text), page



async def _page(query, text, page, page_size):

    offset = (page - 1) * page_size
    result = await settle(query(query=text, page=page, offset=offset, page_size=page_size))

    try:
        rows, total = result
    except (TypeError, ValueError):
        raise ValueError('table query must return a (rows, total) pair, not ' + repr(result))

    return list(rows), int(total)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
