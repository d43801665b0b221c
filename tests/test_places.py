import httpx
import pytest

from formwire.places import AUTOCOMPLETE_URL, PlacesClient
from loopback import run


def mocked(handler):
    return PlacesClient(httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_autocomplete():

    requests = list()

    def handler(request):
        requests.append(request)
        predictions = [
            {'description': 'Main St, Springfield', 'place_id': 'abc'},
            {'description': 'Main St, Shelbyville', 'place_id': 'def'},
        ]
        return httpx.Response(200, json={'status': 'OK', 'predictions': predictions})

    async def scenario():
        places = mocked(handler)
        found = await places.autocomplete('key', 'Main')
        await places.close()
        return found

    found = run(scenario())

    assert len(requests) == 1
    assert str(requests[0].url).startswith(AUTOCOMPLETE_URL)
    assert requests[0].url.params['input'] == 'Main'
    assert requests[0].url.params['key'] == 'key'

    assert [option['label'] for option in found] == ['Main St, Springfield', 'Main St, Shelbyville']
    assert found[0]['value']['place_id'] == 'abc'


def test_no_key_or_text():

    def handler(request):
        raise AssertionError('no request expected')

    async def scenario():
        places = mocked(handler)
        assert await places.autocomplete('', 'Main') == []
        assert await places.autocomplete('key', '') == []
        await places.close()

    run(scenario())


def test_zero_results():

    def handler(request):
        return httpx.Response(200, json={'status': 'ZERO_RESULTS', 'predictions': []})

    async def scenario():
        places = mocked(handler)
        found = await places.autocomplete('key', 'Nowhere')
        await places.close()
        return found

    assert run(scenario()) == []


def test_http_error():

    def handler(request):
        return httpx.Response(500, json={})

    async def scenario():
        places = mocked(handler)
        try:
            await places.autocomplete('key', 'Main')
        finally:
            await places.close()

    with pytest.raises(httpx.HTTPStatusError):
        run(scenario())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
