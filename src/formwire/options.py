""" Option schemas for every field kind. Callers pass options as snake_case
    keyword arguments; :func:`normalize` checks them against the schema for
    the field kind, fills in the defaults for anything omitted, and returns
    the camelCase dictionary that becomes the render descriptor.

    Validation of the submitted value is a separate concern, handled in
    :mod:`formwire.validators`.
"""

import typing

import msgspec

from .errors import OptionsError


Positive = typing.Annotated[float, msgspec.Meta(gt=0)]
PositiveInt = typing.Annotated[int, msgspec.Meta(gt=0)]
Appearance = typing.Literal['text-input', 'option']
ColorFormat = typing.Literal['hex', 'hsla', 'rgba']


class Options(msgspec.Struct, rename='camel', forbid_unknown_fields=True, kw_only=True):
    pass


class Text(Options):
    default_value: str = ''
    disabled: bool = False
    help: str = ''
    placeholder: str = ''


class Email(Text):
    pass


class Number(Options):
    max: typing.Optional[float] = None
    min: typing.Optional[float] = None
    step: typing.Optional[Positive] = 1
    default_value: typing.Optional[float] = 0
    disabled: bool = False
    help: str = ''
    placeholder: str = ''


class Currency(Options):
    default_value: str = '0'
    display_locale: str = 'en-US'
    currency: str = 'USD'
    decimals: PositiveInt = 2
    value_format: typing.Literal['number', 'string'] = 'number'
    step: float = 1
    min: typing.Optional[float] = None
    max: typing.Optional[float] = None
    disabled: bool = False
    help: str = ''


class Markdown(Options):
    default_value: str = ''
    placeholder: str = ''


class RichText(Markdown):
    pass


class Mark(msgspec.Struct, forbid_unknown_fields=True):
    at: float
    label: str


class Slider(Number):
    mark_labels: bool = False
    marks: typing.Union[bool, typing.List[Mark]] = False
    snap_to_marks: bool = False


class Checkbox(Options):
    default_value: bool = False
    disabled: bool = False
    help: str = ''


class Checkboxes(Options):
    disabled: bool = False
    help: str = ''


class Radio(Options):
    default_value: typing.Any = None
    disabled: bool = False
    help: str = ''


class Select(Radio):
    placeholder: str = ''


class Autocomplete(Options):
    selection_appearance: Appearance = 'text-input'
    default_value: typing.Optional[str] = None
    multiple: bool = False
    disabled: bool = False
    help: str = ''
    placeholder: str = ''


class Address(Options):
    selection_appearance: Appearance = 'text-input'
    default_value: typing.Optional[str] = None
    disabled: bool = False
    help: str = ''
    placeholder: str = ''


class Date(Options):
    default_value: str = ''
    max: typing.Optional[str] = None
    min: typing.Optional[str] = None
    step: typing.Optional[Positive] = 1
    disabled: bool = False
    help: str = ''


class Colorpicker(Options):
    default_value: str = '#FFFFFF'
    disabled: bool = False
    help: str = ''
    format: ColorFormat = 'hex'
    output_format: ColorFormat = 'hex'
    eye_dropper: bool = True
    alpha: bool = True
    inline: bool = True


class Column(Options):
    key: str
    label: str
    sortable: bool = False
    direction: typing.Literal['asc', 'desc'] = 'asc'


class Table(Options):
    default_value: typing.List[typing.Any] = []
    results_per_page: PositiveInt = 10
    filterable: bool = False
    columns: typing.List[Column] = []
    filter_placeholder: str = ''


class Progress(Options):
    description: str = ''
    max: float = 100
    indicator: bool = False


class Loading(Options):
    description: str = ''
    icon: typing.Literal['spinner', 'check'] = 'spinner'


class CheckboxItem(Options):
    value: typing.Any
    label: str
    checked_by_default: bool = False
    help: str = ''
    disabled: bool = False


class RadioItem(Options):
    value: typing.Any
    label: str
    help: str = ''
    disabled: bool = False


class SelectItem(Options):
    value: typing.Any
    label: str
    disabled: bool = False


schemas = dict()
schemas['text'] = Text
schemas['number'] = Number
schemas['currency'] = Currency
schemas['markdown'] = Markdown
schemas['rich_text'] = RichText
schemas['slider'] = Slider
schemas['email'] = Email
schemas['checkbox'] = Checkbox
schemas['checkboxes'] = Checkboxes
schemas['radio'] = Radio
schemas['select'] = Select
schemas['autocomplete'] = Autocomplete
schemas['address'] = Address
schemas['date'] = Date
schemas['datetime_local'] = Date
schemas['time'] = Date
schemas['colorpicker'] = Colorpicker
schemas['table'] = Table
schemas['progress'] = Progress
schemas['loading'] = Loading

item_schemas = dict()
item_schemas['checkboxes'] = CheckboxItem
item_schemas['radio'] = RadioItem
item_schemas['select'] = SelectItem


def camel(name):
    """ Translate a snake_case *name* to camelCase.
    """

    first, *rest = name.split('_')
    return first + ''.join(part.capitalize() for part in rest)



def normalize(kind, label, options):
    """ Validate the *options* dictionary for a field of the given *kind*
        and return the render descriptor, including the *label*.
    """

    try:
        schema = schemas[kind]
    except KeyError:
        raise OptionsError('unknown field kind: ' + repr(kind))

    if not isinstance(label, str):
        raise OptionsError("%s label must be a string, not %r" % (kind, label))

    descriptor = _convert(kind, options, schema)
    descriptor['label'] = label
    return descriptor



def items(kind, entries):
    """ Validate the list of choices for a checkboxes, radio, or select field.
        Disabled choices are expressed the way the peer expects them, as
        ``attrs: {disabled: true}``.
    """

    schema = item_schemas[kind]

    if isinstance(entries, (str, bytes, dict)):
        raise OptionsError("%s items must be a list, not %r" % (kind, entries))

    normalized = list()

    for entry in entries:
        if isinstance(entry, dict):
            pass
        else:
            raise OptionsError("%s item must be a dictionary, not %r" % (kind, entry))

        item = _convert(kind, entry, schema)
        disabled = item.pop('disabled')

        if disabled:
            item['attrs'] = {'disabled': True}

        normalized.append(item)

    return normalized



def _convert(kind, values, schema):

    renamed = dict()
    for name, value in values.items():
        renamed[camel(name)] = value

    try:
        parsed = msgspec.convert(renamed, schema)
    except msgspec.ValidationError as e:
        raise OptionsError("invalid %s options: %s" % (kind, e)) from e

    return msgspec.to_builtins(parsed)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
