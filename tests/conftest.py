import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """ Settings in the caller's environment must not leak into the tests;
        any test that wants one sets it explicitly.
    """

    for variable in ('FORMWIRE_URL', 'FORMWIRE_RECONNECT', 'FORMWIRE_HEARTBEAT', 'FORMWIRE_GOOGLE_MAPS_KEY'):
        monkeypatch.delenv(variable, raising=False)

    yield

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
