""" Default validators, one per input field kind. A validator receives the
    raw value submitted by the peer and returns True if it is acceptable,
    otherwise a short human-readable reason that is shown next to the field.

    Caller-supplied validators follow the same contract and may also be
    coroutine functions; see :func:`run`.
"""

from .awaitable import settle


def _is_number(value):
    # bool is an int subclass, but True is not a number a user typed.
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def required_string(value):
    if not isinstance(value, str):
        return 'Expected string'
    if not value:
        return 'Required'
    return True


def currency(value):
    if not isinstance(value, str):
        return 'Invalid string'
    if not value:
        return 'Required'
    return True


def rich_text(value):
    if not isinstance(value, str):
        return 'Expected string'
    if value == '<p></p>':
        return 'Required'
    return True


def number(value):
    if _is_number(value):
        return True
    return 'Invalid number'


def email(value):
    if not isinstance(value, str):
        return 'Expected string'
    if '@' in value:
        return True
    return 'Invalid email address'


def checkbox(value):
    if isinstance(value, bool):
        return True
    return 'Expected boolean'


def checkboxes(value):
    if isinstance(value, list):
        return True
    return 'Expected array'


def truthy(value):
    if value:
        return True
    return 'Required'


def json_value(value):
    """ Anything that arrived as decoded JSON is a JSON value, except that
        null means nothing was chosen.
    """

    if value is None:
        return 'Required'
    return True


def table(value):
    if not isinstance(value, list):
        return 'Expected array'
    if len(value) == 0:
        return 'Required'
    return True


defaults = dict()
defaults['text'] = required_string
defaults['number'] = number
defaults['currency'] = currency
defaults['markdown'] = required_string
defaults['rich_text'] = rich_text
defaults['slider'] = number
defaults['email'] = email
defaults['checkbox'] = checkbox
defaults['checkboxes'] = checkboxes
defaults['radio'] = truthy
defaults['select'] = truthy
defaults['autocomplete'] = json_value
defaults['address'] = truthy
defaults['date'] = required_string
defaults['datetime_local'] = required_string
defaults['time'] = required_string
defaults['colorpicker'] = required_string
defaults['table'] = table


def default(kind):
    """ Return the default validator for a field *kind*.
    """

    try:
        return defaults[kind]
    except KeyError:
        raise KeyError('no default validator for field kind: ' + repr(kind))



async def run(validator, value):
    """ Invoke *validator* on *value*, awaiting the result if necessary.
        Anything other than True is converted to a rejection string.
    """

    result = await settle(validator(value))

    if result is True:
        return True

    if result is None or result is False:
        return 'Invalid value'

    return str(result)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
