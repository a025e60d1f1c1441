"""Tests for the command-line entry point."""
import pytest
from unittest.mock import patch
import main
from credentials import ConfigurationError, Credentials
from weather_data import Device, WeatherData
from weather_provider import HTTPStatusError


@pytest.fixture
def creds():
    with patch("main.credentials_from_env") as from_env:
        from_env.return_value = Credentials(api_key="k", app_key="a")
        yield from_env


@pytest.fixture
def provider_cls():
    with patch("main.AmbientWeatherProvider") as cls, patch("main.setup_logging"):
        yield cls


def test_parse_args_defaults():
    args = main.parse_args([])

    assert args.command == "latest"
    assert args.limit is None
    assert args.end_date is None
    assert args.timeout == 10
    assert args.verbose is False


def test_format_observation():
    line = main.format_observation(WeatherData(date_utc=1609459200000, tempf=32.5, humidity=80))

    assert line.startswith("2021-01-01T00:00:00+00:00")
    assert "temp 32.5F" in line
    assert "hum 80%" in line
    assert "wind N/A" in line


def test_format_device():
    line = main.format_device(0, Device(mac_address="AA:BB:CC:DD:EE:FF", name="Backyard"))

    assert line == "[0] AA:BB:CC:DD:EE:FF  Backyard"


def test_main_latest(creds, provider_cls, capsys):
    provider_cls.return_value.get_latest.return_value = WeatherData(tempf=70.0)

    assert main.main(["latest", "--timeout", "5"]) == 0

    assert "temp 70.0F" in capsys.readouterr().out
    assert provider_cls.call_args[1]["timeout"] == 5


def test_main_history_passes_cursor(creds, provider_cls, capsys):
    provider_cls.return_value.get_historic.return_value = [WeatherData(tempf=1.0), WeatherData(tempf=2.0)]

    assert main.main(["history", "--limit", "2", "--end-date", "1609459200000"]) == 0

    provider_cls.return_value.get_historic.assert_called_once_with(end_date=1609459200000, limit=2)
    assert len(capsys.readouterr().out.strip().splitlines()) == 2


def test_main_devices(creds, provider_cls, capsys):
    provider_cls.return_value.list_devices.return_value = [Device(mac_address="AA:BB")]

    assert main.main(["devices"]) == 0

    assert "[0] AA:BB" in capsys.readouterr().out


def test_main_provider_error(creds, provider_cls):
    provider_cls.return_value.get_latest.side_effect = HTTPStatusError(401, "unauthorized")

    assert main.main([]) == 1


def test_main_bad_limit(creds, provider_cls):
    provider_cls.return_value.get_historic.side_effect = ValueError("limit must be between 1 and 288")

    assert main.main(["history", "--limit", "0"]) == 2


def test_main_missing_config(provider_cls):
    with patch("main.credentials_from_env", side_effect=ConfigurationError("Missing AMBIENT_API_KEY")):
        with pytest.raises(SystemExit) as exc_info:
            main.main([])

    assert "AMBIENT_API_KEY" in str(exc_info.value)


def test_parse_args_has_no_delay_override():
    """Test the rate-limit wait cannot be changed from the command line."""
    with pytest.raises(SystemExit):
        main.parse_args(["--delay", "0"])


def test_main_uses_default_request_delay(creds, provider_cls):
    provider_cls.return_value.get_latest.return_value = WeatherData(tempf=70.0)

    main.main([])

    assert "request_delay" not in provider_cls.call_args[1]
