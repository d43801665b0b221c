import formwire
import pytest

from formwire import options


def test_camel():
    assert options.camel('default_value') == 'defaultValue'
    assert options.camel('results_per_page') == 'resultsPerPage'
    assert options.camel('label') == 'label'


def test_text_defaults():

    descriptor = options.normalize('text', 'Note', {})

    assert descriptor == {
        'defaultValue': '',
        'disabled': False,
        'help': '',
        'placeholder': '',
        'label': 'Note',
    }


def test_caller_values_are_kept():

    descriptor = options.normalize('number', 'Age', {'min': 0, 'max': 120, 'default_value': 18})

    assert descriptor['min'] == 0
    assert descriptor['max'] == 120
    assert descriptor['defaultValue'] == 18
    assert descriptor['step'] == 1


def test_kind_specific_defaults():

    assert options.normalize('currency', 'Price', {})['currency'] == 'USD'
    assert options.normalize('currency', 'Price', {})['decimals'] == 2
    assert options.normalize('colorpicker', 'Color', {})['inline'] == True
    assert options.normalize('table', 'Rows', {})['resultsPerPage'] == 10
    assert options.normalize('table', 'Rows', {})['filterable'] == False
    assert options.normalize('loading', 'Wait', {})['icon'] == 'spinner'
    assert options.normalize('autocomplete', 'Pick', {})['selectionAppearance'] == 'text-input'


def test_slider_marks():

    marks = [{'at': 0, 'label': 'Low'}, {'at': 10, 'label': 'High'}]
    descriptor = options.normalize('slider', 'Level', {'marks': marks, 'snap_to_marks': True})

    assert descriptor['marks'] == marks
    assert descriptor['snapToMarks'] == True


def test_table_columns():

    columns = [{'key': 'name', 'label': 'Name', 'sortable': True}]
    descriptor = options.normalize('table', 'People', {'columns': columns})

    assert descriptor['columns'] == [
        {'key': 'name', 'label': 'Name', 'sortable': True, 'direction': 'asc'},
    ]


@pytest.mark.parametrize('kind,values', (
    ('text', {'bogus': 1}),
    ('text', {'placeholder': 5}),
    ('number', {'step': 0}),
    ('currency', {'decimals': -1}),
    ('currency', {'value_format': 'roman'}),
    ('colorpicker', {'format': 'cmyk'}),
    ('loading', {'icon': 'hourglass'}),
    ('table', {'results_per_page': 0}),
    ('table', {'columns': [{'label': 'No key'}]}),
    ('autocomplete', {'selection_appearance': 'bubble'}),
))
def test_invalid_options(kind, values):

    with pytest.raises(formwire.OptionsError):
        options.normalize(kind, 'Label', values)


def test_invalid_label_and_kind():

    with pytest.raises(formwire.OptionsError):
        options.normalize('text', 42, {})

    with pytest.raises(formwire.OptionsError):
        options.normalize('hologram', 'Label', {})

    # OptionsError is also a ValueError.

    with pytest.raises(ValueError):
        options.normalize('text', None, {})


def test_items():

    entries = [
        {'value': 'a', 'label': 'Apple'},
        {'value': 'b', 'label': 'Banana', 'disabled': True},
    ]

    normalized = options.items('select', entries)

    assert normalized == [
        {'value': 'a', 'label': 'Apple'},
        {'value': 'b', 'label': 'Banana', 'attrs': {'disabled': True}},
    ]


def test_checkbox_items():

    entries = [{'value': 1, 'label': 'One', 'checked_by_default': True}]
    normalized = options.items('checkboxes', entries)

    assert normalized == [
        {'value': 1, 'label': 'One', 'checkedByDefault': True, 'help': ''},
    ]


def test_invalid_items():

    with pytest.raises(formwire.OptionsError):
        options.items('radio', 'abc')

    with pytest.raises(formwire.OptionsError):
        options.items('radio', ['abc'])

    with pytest.raises(formwire.OptionsError):
        options.items('radio', [{'label': 'Missing value'}])

    with pytest.raises(formwire.OptionsError):
        options.items('select', [{'value': 1, 'label': 'One', 'help': 'Not for select'}])


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
