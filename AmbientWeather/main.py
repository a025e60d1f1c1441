"""Command-line access to an Ambient Weather station."""
import argparse
import logging
import sys
from typing import List, Optional

from ambient_provider import AmbientWeatherProvider
from credentials import ConfigurationError, credentials_from_env
from weather_data import Device, WeatherData
from weather_provider import WeatherProviderError


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("Ambient Weather station data")
    parser.add_argument("command", nargs="?", choices=["latest", "history", "devices"], default="latest")
    parser.add_argument("--limit", type=int, default=None, help="Number of historic records (1-288)")
    parser.add_argument("--end-date", default=None, help="Only records at or before this time (epoch ms or ISO date)")
    parser.add_argument("--timeout", type=int, default=10, help="HTTP timeout in seconds")
    parser.add_argument("--log-file", default=None)
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def setup_logging(log_file: Optional[str], verbose: bool) -> None:
    log_level = logging.DEBUG if verbose else logging.INFO
    handlers = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=handlers
    )


def _fmt(value, suffix: str = "") -> str:
    return "N/A" if value is None else f"{value}{suffix}"


def format_observation(weather: WeatherData) -> str:
    when = weather.timestamp.isoformat() if weather.timestamp else "unknown time"
    return (
        f"{when}  temp {_fmt(weather.tempf, 'F')}  hum {_fmt(weather.humidity, '%')}  "
        f"wind {_fmt(weather.windspeedmph, 'mph')} @ {_fmt(weather.winddir)}  "
        f"rain {_fmt(weather.dailyrainin, 'in')}  baro {_fmt(weather.baromrelin, 'inHg')}"
    )


def format_device(index: int, device: Device) -> str:
    name = device.name or "(unnamed)"
    return f"[{index}] {device.mac_address}  {name}  {device.location or ''}".rstrip()


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        credentials = credentials_from_env()
    except ConfigurationError as exc:
        raise SystemExit(str(exc)) from exc

    end_date = args.end_date
    if end_date is not None and end_date.isdigit():
        end_date = int(end_date)

    provider = AmbientWeatherProvider(credentials, timeout=args.timeout)

    try:
        if args.command == "devices":
            for index, device in enumerate(provider.list_devices()):
                print(format_device(index, device))
        elif args.command == "history":
            for weather in provider.get_historic(end_date=end_date, limit=args.limit):
                print(format_observation(weather))
        else:
            print(format_observation(provider.get_latest()))
    except (ValueError, TypeError) as err:
        logging.error("Invalid argument: %s", err)
        return 2
    except WeatherProviderError as err:
        logging.error("Weather fetch failed: %s", err)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
