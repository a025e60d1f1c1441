"""Integration tests - can optionally hit real API (disabled by default)."""
import os
import pytest
from ambient_provider import AmbientWeatherProvider
from credentials import credentials_from_env

requires_keys = pytest.mark.skipif(
    not (os.environ.get("AMBIENT_API_KEY") and os.environ.get("AMBIENT_APPLICATION_KEY")),
    reason="AMBIENT_API_KEY / AMBIENT_APPLICATION_KEY not set - skipping integration test"
)


@requires_keys
def test_ambient_latest_integration():
    """
    Integration test that hits the real Ambient Weather API.

    Set AMBIENT_API_KEY and AMBIENT_APPLICATION_KEY to run this test.
    """
    provider = AmbientWeatherProvider(credentials_from_env())

    weather = provider.get_latest()

    assert weather.date_utc is not None
    assert weather.date_utc > 0


@requires_keys
def test_ambient_historic_integration():
    """Integration test for history with a small limit."""
    provider = AmbientWeatherProvider(credentials_from_env())

    history = provider.get_historic(limit=5)

    assert 0 < len(history) <= 5
    timestamps = [w.date_utc for w in history]
    assert timestamps == sorted(timestamps, reverse=True)
