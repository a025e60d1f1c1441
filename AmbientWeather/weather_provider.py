"""Weather provider abstraction and the errors a provider can raise."""
from abc import ABC, abstractmethod
from typing import List, Optional
from weather_data import WeatherData


class WeatherProviderBase(ABC):
    """Abstract base class for station data providers."""

    @abstractmethod
    def get_latest(self) -> WeatherData:
        """
        Fetch the most recent observation for the configured device.

        Returns:
            WeatherData: Latest observation

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass

    @abstractmethod
    def get_historic(self, end_date=None, limit: Optional[int] = None) -> List[WeatherData]:
        """
        Fetch past observations, newest first.

        Raises:
            WeatherProviderError: If the provider fails to fetch data
        """
        pass


class WeatherProviderError(Exception):
    """Exception raised when a weather provider fails."""
    pass


class TransportError(WeatherProviderError):
    """The HTTP layer failed before a response arrived (DNS, TLS, timeout, ...)."""

    def __init__(self, original: Exception):
        super().__init__(str(original))
        self.original = original


class HTTPStatusError(WeatherProviderError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body[:200]}")
        self.status_code = status_code
        self.body = body


class DeviceNotFoundError(WeatherProviderError):
    """The configured device is not in the account's device list."""
    pass


class DecodeError(WeatherProviderError):
    """The response body was not JSON, or not the shape we expected."""

    def __init__(self, message: str, body: str):
        super().__init__(message)
        self.body = body
