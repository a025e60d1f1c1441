"""URL construction for the Ambient Weather REST API."""
from datetime import datetime, timezone
from typing import Optional, Union
from urllib.parse import quote, urlencode

from credentials import Credentials

API_VERSION = "v1"
MAX_HISTORIC_LIMIT = 288

EndDate = Union[int, str, datetime]


def _base_url(credentials: Credentials) -> str:
    return f"https://{credentials.endpoint.host}/{API_VERSION}/devices"


def _auth_params(credentials: Credentials) -> dict:
    return {"apiKey": credentials.api_key, "applicationKey": credentials.app_key}


def format_end_date(end_date: EndDate) -> str:
    """
    Render a history cursor the way the API accepts it.

    Datetimes become epoch milliseconds (naive values are taken as UTC);
    ints are assumed to already be epoch milliseconds; strings pass through.
    """
    if isinstance(end_date, datetime):
        if end_date.tzinfo is None:
            end_date = end_date.replace(tzinfo=timezone.utc)
        return str(int(end_date.timestamp() * 1000))
    if isinstance(end_date, bool):
        raise TypeError("end_date must be an int, str or datetime")
    if isinstance(end_date, (int, str)):
        return str(end_date)
    raise TypeError("end_date must be an int, str or datetime")


def validate_limit(limit: int) -> None:
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValueError(f"limit must be an integer, got {limit!r}")
    if not 1 <= limit <= MAX_HISTORIC_LIMIT:
        raise ValueError(f"limit must be between 1 and {MAX_HISTORIC_LIMIT}, got {limit}")


def build_devices_url(credentials: Credentials) -> str:
    """URL of the account's device list (each entry carries its lastData)."""
    return f"{_base_url(credentials)}?{urlencode(_auth_params(credentials))}"


def build_device_data_url(
    credentials: Credentials,
    mac_address: str,
    end_date: Optional[EndDate] = None,
    limit: Optional[int] = None
) -> str:
    """
    URL of one device's stored observations.

    Args:
        credentials: Account credentials (host is taken from the endpoint)
        mac_address: Device MAC address, used as a path segment
        end_date: Only return records at or before this time
        limit: Number of records to return (1..288); vendor default when None

    Raises:
        ValueError: If limit is out of range
    """
    params = _auth_params(credentials)
    if end_date is not None:
        params["endDate"] = format_end_date(end_date)
    if limit is not None:
        validate_limit(limit)
        params["limit"] = limit

    path = quote(mac_address, safe=":")
    return f"{_base_url(credentials)}/{path}?{urlencode(params)}"


def redact(url: str) -> str:
    """Drop the query string so keys never end up in logs."""
    return url.split("?", 1)[0]
