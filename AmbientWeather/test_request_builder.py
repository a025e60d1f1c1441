"""Tests for request URL construction."""
import pytest
from datetime import datetime, timezone
from urllib.parse import parse_qs, urlsplit
from credentials import ApiEndpoint, Credentials
from request_builder import (
    MAX_HISTORIC_LIMIT,
    build_device_data_url,
    build_devices_url,
    format_end_date,
    redact,
)

MAC = "00:0E:C6:20:0F:7B"


@pytest.fixture
def legacy():
    return Credentials(api_key="api123", app_key="app456", device=0)


@pytest.fixture
def realtime():
    return Credentials(api_key="api123", app_key="app456", device=MAC, endpoint=ApiEndpoint.REALTIME)


def query(url):
    return parse_qs(urlsplit(url).query)


def test_devices_url_legacy(legacy):
    url = build_devices_url(legacy)

    assert url == "https://api.ambientweather.net/v1/devices?apiKey=api123&applicationKey=app456"


def test_devices_url_realtime(realtime):
    url = build_devices_url(realtime)

    assert url.startswith("https://rt.ambientweather.net/v1/devices?")
    assert query(url) == {"apiKey": ["api123"], "applicationKey": ["app456"]}


def test_device_data_url_without_options(realtime):
    """Test cursor and limit are omitted when not supplied."""
    url = build_device_data_url(realtime, MAC)

    parts = urlsplit(url)
    assert parts.netloc == "rt.ambientweather.net"
    assert parts.path == f"/v1/devices/{MAC}"
    assert "limit" not in query(url)
    assert "endDate" not in query(url)


def test_device_data_url_with_limit(legacy):
    url = build_device_data_url(legacy, MAC, limit=10)

    assert urlsplit(url).netloc == "api.ambientweather.net"
    assert query(url)["limit"] == ["10"]


def test_device_data_url_with_end_date(legacy):
    url = build_device_data_url(legacy, MAC, end_date=1684929480000)

    assert query(url)["endDate"] == ["1684929480000"]


def test_endpoint_changes_only_host(legacy, realtime):
    legacy_url = urlsplit(build_device_data_url(legacy, MAC, limit=5))
    realtime_url = urlsplit(build_device_data_url(realtime, MAC, limit=5))

    assert legacy_url.netloc != realtime_url.netloc
    assert legacy_url.path == realtime_url.path
    assert legacy_url.query == realtime_url.query


@pytest.mark.parametrize("limit", [0, -1, MAX_HISTORIC_LIMIT + 1, "10", 2.5, True])
def test_device_data_url_rejects_bad_limit(legacy, limit):
    with pytest.raises(ValueError):
        build_device_data_url(legacy, MAC, limit=limit)


def test_keys_are_url_encoded():
    creds = Credentials(api_key="a b&c", app_key="x=y", device=0)

    assert query(build_devices_url(creds)) == {"apiKey": ["a b&c"], "applicationKey": ["x=y"]}


def test_format_end_date_datetime():
    aware = datetime(2021, 1, 1, tzinfo=timezone.utc)

    assert format_end_date(aware) == "1609459200000"
    # Naive datetimes are taken as UTC
    assert format_end_date(datetime(2021, 1, 1)) == "1609459200000"


def test_format_end_date_passthrough():
    assert format_end_date(1609459200000) == "1609459200000"
    assert format_end_date("2021-01-01T00:00:00Z") == "2021-01-01T00:00:00Z"


def test_format_end_date_rejects_other_types():
    with pytest.raises(TypeError):
        format_end_date(1.5)


def test_redact_strips_keys(legacy):
    assert redact(build_devices_url(legacy)) == "https://api.ambientweather.net/v1/devices"
