from datetime import timedelta

from fitsocial.lib.pydantic_settings_integration import pydantic_settings_integration

FITSOCIAL_TEST_LIMIT = 1
FITSOCIAL_TEST_TIMEOUT = timedelta(seconds=1)


def test_pydantic_settings_integration(monkeypatch):
    monkeypatch.setenv('FITSOCIAL_TEST_LIMIT', '5')
    monkeypatch.setenv('FITSOCIAL_TEST_TIMEOUT', 'PT30S')
    pydantic_settings_integration(
        __name__, globals(), name_filter=lambda name: name.startswith('FITSOCIAL_TEST_')
    )
    assert FITSOCIAL_TEST_LIMIT == 5
    assert timedelta(seconds=30) == FITSOCIAL_TEST_TIMEOUT
