import pytest

from roadsnap.config.settings import get_settings


@pytest.fixture
def reload_settings():
    """Drop the cached Settings before and after a test that changes env/config."""
    get_settings.cache_clear()
    yield get_settings
    get_settings.cache_clear()


@pytest.fixture
def contracts_disabled(monkeypatch, reload_settings):
    monkeypatch.setenv("ROADSNAP_CHECK_CONTRACTS", "0")
    assert reload_settings().contracts.enabled is False
