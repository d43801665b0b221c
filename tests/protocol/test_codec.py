import formwire
import pytest

from formwire.protocol import message
from formwire.transport import codec


def test_render_is_flattened():

    render = message.Render(field_id='field_X', session_id='s1', type='text',
                            descriptor={'label': 'Note', 'placeholder': ''})

    encoded = codec.encode(render)
    decoded = formwire.json.loads(encoded)

    assert decoded == {
        'action': 'render',
        'fieldId': 'field_X',
        'sessionId': 's1',
        'type': 'text',
        'label': 'Note',
        'placeholder': '',
    }


def test_render_identity_wins():

    # A descriptor cannot overwrite the identifying fields.

    render = message.Render(field_id='field_X', session_id='s1', type='text',
                            descriptor={'type': 'bogus', 'action': 'destroy'})

    decoded = formwire.json.loads(codec.encode(render))
    assert decoded['type'] == 'text'
    assert decoded['action'] == 'render'


def test_outbound_messages():

    cases = (
        (message.Patch(field_id='f', session_id='s', patched_state=[1, 2]),
         {'action': 'patch', 'fieldId': 'f', 'sessionId': 's', 'patchedState': [1, 2]}),
        (message.Warn(field_id='f', session_id='s', validation_result='Required'),
         {'action': 'warn', 'fieldId': 'f', 'sessionId': 's', 'validationResult': 'Required'}),
        (message.Destroy(field_id='f', session_id='s'),
         {'action': 'destroy', 'fieldId': 'f', 'sessionId': 's'}),
        (message.Complete(session_id='s'),
         {'action': 'complete', 'sessionId': 's'}),
        (message.GroupComplete(session_id='s'),
         {'action': 'groupComplete', 'sessionId': 's'}),
        (message.UpdatePeers(),
         {'action': 'updatePeers'}),
    )

    for outbound, expected in cases:
        assert formwire.json.loads(codec.encode(outbound)) == expected


def test_bytes_pass_through():
    assert codec.encode(b'ping') == b'ping'


def test_decode_inbound():

    start = codec.decode(b'{"action":"startSession","sessionId":"s1","user":"alice"}')
    assert isinstance(start, message.StartSession)
    assert start.session_id == 's1'
    assert start.user == 'alice'

    patch = codec.decode(b'{"action":"patch","sessionId":"s1","fieldId":"f","data":"ab"}')
    assert isinstance(patch, message.PatchRequest)
    assert patch.data == 'ab'

    resolve = codec.decode(b'{"action":"resolve","sessionId":"s1","fieldId":"f","fieldValue":{"a":[1]}}')
    assert isinstance(resolve, message.Resolve)
    assert resolve.field_id == 'f'
    assert resolve.field_value == {'a': [1]}


def test_decode_accepts_str():
    resolve = codec.decode('{"action":"resolve","sessionId":"s1","fieldId":"f","fieldValue":""}')
    assert isinstance(resolve, message.Resolve)
    assert resolve.field_value == ''


@pytest.mark.parametrize('payload', (
    b'',
    b'ping',
    b'{not json',
    b'[1, 2, 3]',
    b'"startSession"',
    b'{"sessionId": "s1"}',
    b'{"action": "startSession", "sessionId": "s1"}',
    b'{"action": "startSession", "sessionId": 5, "user": "alice"}',
    b'{"action": "resolve", "fieldId": "f"}',
    b'{"action": "somethingNew", "sessionId": "s1"}',
    b'{"action": "resolve", "sessionId": "s1", "fieldId": "f", "fieldValue": "\xff"}',
))
def test_decode_failure(payload):

    decoded = codec.decode(payload)
    assert isinstance(decoded, message.ParseFailure)
    assert decoded.reason != ''


def test_decode_never_raises_on_garbage_types():
    decoded = codec.decode(None)
    assert isinstance(decoded, message.ParseFailure)


def test_new_id():

    first = message.new_id('field')
    second = message.new_id('field')

    assert first.startswith('field_')
    assert first != second


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
