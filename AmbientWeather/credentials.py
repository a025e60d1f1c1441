"""Account credentials and endpoint selection."""
import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from dotenv import load_dotenv


class ApiEndpoint(Enum):
    """Which generation of the Ambient Weather REST API to talk to."""
    LEGACY = "api.ambientweather.net"
    REALTIME = "rt.ambientweather.net"

    @property
    def host(self) -> str:
        return self.value


class ConfigurationError(Exception):
    """Raised when credentials cannot be assembled from the environment."""
    pass


@dataclass(frozen=True)
class Credentials:
    """
    Key pair plus the device to query.

    `device` is either a positional index into the account's device list
    (0 for a single-station account) or the station's MAC address.
    """
    api_key: str = field(repr=False)
    app_key: str = field(repr=False)
    device: Union[int, str] = 0
    endpoint: ApiEndpoint = ApiEndpoint.LEGACY

    @classmethod
    def create(
        cls,
        api_key: str,
        app_key: str,
        device: Union[int, str] = 0,
        use_new_api_endpoint: bool = False
    ) -> "Credentials":
        """
        Build credentials from the four plain attributes.

        Args:
            api_key: Account API key
            app_key: Application key for this integration
            device: Device index or MAC address
            use_new_api_endpoint: Use rt.ambientweather.net instead of api.ambientweather.net
        """
        endpoint = ApiEndpoint.REALTIME if use_new_api_endpoint else ApiEndpoint.LEGACY
        return cls(api_key=api_key, app_key=app_key, device=device, endpoint=endpoint)

    @property
    def device_is_index(self) -> bool:
        return isinstance(self.device, int)


def parse_device(value: str) -> Union[int, str]:
    """Digits select a device by index, anything else is taken as a MAC address."""
    value = value.strip()
    return int(value) if value.isdigit() else value


def credentials_from_env(prefix: str = "AMBIENT_") -> Credentials:
    """
    Load credentials from environment variables (and a .env file, if present).

    Reads {prefix}API_KEY, {prefix}APPLICATION_KEY, {prefix}DEVICE and
    {prefix}ENDPOINT ("legacy" or "realtime").

    Raises:
        ConfigurationError: If a key is missing or the endpoint name is unknown
    """
    load_dotenv()
    api_key = os.getenv(f"{prefix}API_KEY")
    app_key = os.getenv(f"{prefix}APPLICATION_KEY")
    device = os.getenv(f"{prefix}DEVICE", "0")
    endpoint_name = os.getenv(f"{prefix}ENDPOINT", "legacy")

    if not api_key:
        raise ConfigurationError(f"Missing {prefix}API_KEY in environment")
    if not app_key:
        raise ConfigurationError(f"Missing {prefix}APPLICATION_KEY in environment")

    try:
        endpoint = ApiEndpoint[endpoint_name.strip().upper()]
    except KeyError as exc:
        raise ConfigurationError(
            f"Invalid {prefix}ENDPOINT '{endpoint_name}' (expected 'legacy' or 'realtime')"
        ) from exc

    credentials = Credentials(
        api_key=api_key,
        app_key=app_key,
        device=parse_device(device),
        endpoint=endpoint,
    )
    logging.info("Configuration loaded: device=%s endpoint=%s", credentials.device, endpoint.name.lower())
    return credentials
