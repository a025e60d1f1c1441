"""Ambient Weather REST API provider implementation."""
import logging
import time
import requests
from typing import Any, List, Optional, Tuple
from credentials import ApiEndpoint, Credentials
from request_builder import (
    EndDate,
    build_device_data_url,
    build_devices_url,
    format_end_date,
    redact,
    validate_limit,
)
from weather_data import Device, WeatherData
from weather_provider import (
    DecodeError,
    DeviceNotFoundError,
    HTTPStatusError,
    TransportError,
    WeatherProviderBase,
)

# Ambient allows one request per second per API key
MIN_REQUEST_INTERVAL = 1.0


class AmbientWeatherProvider(WeatherProviderBase):
    """
    Weather provider for a single Ambient Weather station.

    API docs: https://ambientweather.docs.apiary.io
    Field list: https://github.com/ambient-weather/api-docs/wiki/Device-Data-Specs

    Every HTTP request is preceded by a fixed sleep of `request_delay`
    seconds. The provider keeps no history of earlier calls, so even an
    isolated request pays the delay.
    """

    def __init__(
        self,
        credentials: Credentials,
        timeout: int = 10,
        request_delay: float = MIN_REQUEST_INTERVAL,
        session: Optional[requests.Session] = None
    ):
        """
        Initialize the provider.

        Args:
            credentials: Key pair, device and endpoint to query
            timeout: HTTP request timeout in seconds
            request_delay: Seconds to wait before every request. 0 disables the
                wait and is meant for tests against a local stub only.
            session: Optional requests session to issue requests on
        """
        if request_delay < 0:
            raise ValueError(f"request_delay must not be negative, got {request_delay}")
        self.credentials = credentials
        self.timeout = timeout
        self.request_delay = request_delay
        self.session = session

    def get_latest(self) -> WeatherData:
        """
        Fetch the most recent observation for the configured device.

        Returns:
            WeatherData: Latest observation

        Raises:
            TransportError: If the request could not be completed
            HTTPStatusError: If the API answered with a non-success status
            DecodeError: If the body is not the expected JSON
            DeviceNotFoundError: If the device is not registered to the account
        """
        creds = self.credentials
        if creds.endpoint is ApiEndpoint.REALTIME and not creds.device_is_index:
            url = build_device_data_url(creds, creds.device, limit=1)
            data, body = self._get_json(url)
            if not isinstance(data, list) or not data:
                raise DecodeError("Expected a non-empty JSON array of observations", body)
            return self._decode_record(data[0], body)

        device, body = self._find_device()
        last_data = device.get("lastData")
        if last_data is None:
            raise DecodeError("Device entry has no 'lastData'", body)
        weather_data = self._decode_record(last_data, body)
        logging.info(f"Latest observation: {weather_data.date} tempf={weather_data.tempf}")
        return weather_data

    def get_historic(
        self,
        end_date: Optional[EndDate] = None,
        limit: Optional[int] = None
    ) -> List[WeatherData]:
        """
        Fetch stored observations for the configured device, newest first.

        Args:
            end_date: Only return records at or before this time
                (epoch milliseconds, datetime, or a date string)
            limit: Number of records (1..288); the API default when None

        Returns:
            List[WeatherData]: Observations in the order the API returned them.
            Fewer than `limit` records is not an error.

        Raises:
            ValueError: If limit is out of range (checked before any request)
            TypeError: If end_date is not an int, str or datetime (checked before any request)
            TransportError, HTTPStatusError, DecodeError, DeviceNotFoundError
        """
        if limit is not None:
            validate_limit(limit)
        if end_date is not None:
            format_end_date(end_date)

        mac_address = self._resolve_mac_address()
        url = build_device_data_url(self.credentials, mac_address, end_date=end_date, limit=limit)
        data, body = self._get_json(url)

        if not isinstance(data, list):
            raise DecodeError("Expected a JSON array of observations", body)
        records = [self._decode_record(item, body) for item in data]
        logging.info(f"Fetched {len(records)} historic observations for {mac_address}")
        return records

    def list_devices(self) -> List[Device]:
        """
        Fetch the devices registered to the account.

        Raises:
            TransportError, HTTPStatusError, DecodeError
        """
        devices, body = self._get_device_list()
        try:
            return [Device.from_json(entry) for entry in devices]
        except (KeyError, ValueError, TypeError) as e:
            logging.error(f"Failed to parse device list: {e}", exc_info=True)
            raise DecodeError(f"Failed to parse device list: {str(e)}", body) from e

    def _resolve_mac_address(self) -> str:
        if not self.credentials.device_is_index:
            return self.credentials.device
        device, body = self._find_device()
        mac_address = device.get("macAddress")
        if not isinstance(mac_address, str) or not mac_address:
            raise DecodeError("Device entry has no 'macAddress'", body)
        logging.debug(f"Device index {self.credentials.device} resolved to {mac_address}")
        return mac_address

    def _find_device(self) -> Tuple[dict, str]:
        """Pick the configured device out of the device list, by index or MAC."""
        devices, body = self._get_device_list()
        selector = self.credentials.device

        if self.credentials.device_is_index:
            if not 0 <= selector < len(devices):
                raise DeviceNotFoundError(
                    f"Device index {selector} out of range ({len(devices)} devices on account)"
                )
            device = devices[selector]
        else:
            wanted = selector.upper()
            matches = [
                d for d in devices
                if isinstance(d, dict) and str(d.get("macAddress", "")).upper() == wanted
            ]
            if not matches:
                raise DeviceNotFoundError(f"Device {selector} not found on account")
            device = matches[0]

        if not isinstance(device, dict):
            raise DecodeError("Device entry is not a JSON object", body)
        return device, body

    def _get_device_list(self) -> Tuple[list, str]:
        data, body = self._get_json(build_devices_url(self.credentials))
        if not isinstance(data, list):
            raise DecodeError("Expected a JSON array of devices", body)
        logging.debug(f"Account has {len(data)} device(s)")
        return data, body

    def _decode_record(self, item: Any, body: str) -> WeatherData:
        try:
            return WeatherData.from_json(item)
        except (ValueError, TypeError) as e:
            logging.error(f"Failed to parse observation: {e}", exc_info=True)
            raise DecodeError(f"Failed to parse observation: {str(e)}", body) from e

    def _throttle(self) -> None:
        logging.debug(f"Waiting {self.request_delay}s before request (rate limit)")
        time.sleep(self.request_delay)

    def _get_json(self, url: str) -> Tuple[Any, str]:
        """
        Sleep, GET `url`, and parse the body as JSON.

        Returns:
            The decoded JSON value and the raw body text
        """
        self._throttle()

        try:
            logging.info(f"Making Ambient Weather API request: {redact(url)}")
            if self.session is not None:
                response = self.session.get(url, timeout=self.timeout)
            else:
                response = requests.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during API request: {e}")
            raise TransportError(e) from e

        logging.info(f"API response status: {response.status_code}")
        body = response.text

        if not response.ok:
            logging.error(f"API request failed with status {response.status_code}: {body[:500]}")
            raise HTTPStatusError(response.status_code, body)

        try:
            data = response.json()
        except ValueError as e:
            logging.error(f"Non-JSON response body: {body[:500]}")
            raise DecodeError(f"Response is not valid JSON: {str(e)}", body) from e

        logging.debug(f"API response (truncated): {body[:500]}...")
        return data, body


def get_latest(credentials: Credentials, **kwargs) -> WeatherData:
    """Fetch the latest observation. Keyword arguments go to AmbientWeatherProvider."""
    return AmbientWeatherProvider(credentials, **kwargs).get_latest()


def get_historic(
    credentials: Credentials,
    end_date: Optional[EndDate] = None,
    limit: Optional[int] = None,
    **kwargs
) -> List[WeatherData]:
    """Fetch historic observations, newest first. Keyword arguments go to AmbientWeatherProvider."""
    return AmbientWeatherProvider(credentials, **kwargs).get_historic(end_date=end_date, limit=limit)


def list_devices(credentials: Credentials, **kwargs) -> List[Device]:
    """Fetch the account's devices. Keyword arguments go to AmbientWeatherProvider."""
    return AmbientWeatherProvider(credentials, **kwargs).list_devices()
