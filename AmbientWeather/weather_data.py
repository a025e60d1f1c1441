"""Station observation model - one reading as reported by an Ambient Weather device."""
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Dict, Optional


def _vendor(key: str, kind: type):
    """Optional field mapped from the vendor's JSON key `key`."""
    return field(default=None, metadata={"json": key, "kind": kind})


@dataclass
class WeatherData:
    """
    One observation from a station.

    Every sensor value is optional: None means the device did not report it,
    which is not the same as a reading of zero. Units are the vendor's own
    (Fahrenheit, mph, inches, inHg, W/m^2).
    """
    date_utc: Optional[int] = _vendor("dateutc", int)  # epoch milliseconds
    date: Optional[str] = _vendor("date", str)
    tz: Optional[str] = _vendor("tz", str)

    # Outdoor
    tempf: Optional[float] = _vendor("tempf", float)
    humidity: Optional[int] = _vendor("humidity", int)
    feels_like: Optional[float] = _vendor("feelsLike", float)
    dew_point: Optional[float] = _vendor("dewPoint", float)

    # Indoor
    tempinf: Optional[float] = _vendor("tempinf", float)
    humidityin: Optional[int] = _vendor("humidityin", int)
    feels_like_in: Optional[float] = _vendor("feelsLikein", float)
    dew_point_in: Optional[float] = _vendor("dewPointin", float)

    # Wind
    winddir: Optional[int] = _vendor("winddir", int)
    windspeedmph: Optional[float] = _vendor("windspeedmph", float)
    windgustmph: Optional[float] = _vendor("windgustmph", float)
    maxdailygust: Optional[float] = _vendor("maxdailygust", float)
    windgustdir: Optional[int] = _vendor("windgustdir", int)
    windspdmph_avg2m: Optional[float] = _vendor("windspdmph_avg2m", float)
    winddir_avg2m: Optional[int] = _vendor("winddir_avg2m", int)
    windspdmph_avg10m: Optional[float] = _vendor("windspdmph_avg10m", float)
    winddir_avg10m: Optional[int] = _vendor("winddir_avg10m", int)

    # Rain
    hourlyrainin: Optional[float] = _vendor("hourlyrainin", float)
    dailyrainin: Optional[float] = _vendor("dailyrainin", float)
    weeklyrainin: Optional[float] = _vendor("weeklyrainin", float)
    monthlyrainin: Optional[float] = _vendor("monthlyrainin", float)
    yearlyrainin: Optional[float] = _vendor("yearlyrainin", float)
    eventrainin: Optional[float] = _vendor("eventrainin", float)
    totalrainin: Optional[float] = _vendor("totalrainin", float)
    last_rain: Optional[str] = _vendor("lastRain", str)

    # Pressure
    baromrelin: Optional[float] = _vendor("baromrelin", float)
    baromabsin: Optional[float] = _vendor("baromabsin", float)

    # Sun
    solarradiation: Optional[float] = _vendor("solarradiation", float)
    uv: Optional[int] = _vendor("uv", int)

    # Air quality
    pm25: Optional[float] = _vendor("pm25", float)
    pm25_24h: Optional[float] = _vendor("pm25_24h", float)
    pm25_in: Optional[float] = _vendor("pm25_in", float)
    pm25_in_24h: Optional[float] = _vendor("pm25_in_24h", float)
    co2: Optional[float] = _vendor("co2", float)

    # Extra sensor channels
    temp1f: Optional[float] = _vendor("temp1f", float)
    temp2f: Optional[float] = _vendor("temp2f", float)
    temp3f: Optional[float] = _vendor("temp3f", float)
    temp4f: Optional[float] = _vendor("temp4f", float)
    temp5f: Optional[float] = _vendor("temp5f", float)
    temp6f: Optional[float] = _vendor("temp6f", float)
    temp7f: Optional[float] = _vendor("temp7f", float)
    temp8f: Optional[float] = _vendor("temp8f", float)
    temp9f: Optional[float] = _vendor("temp9f", float)
    temp10f: Optional[float] = _vendor("temp10f", float)
    humidity1: Optional[int] = _vendor("humidity1", int)
    humidity2: Optional[int] = _vendor("humidity2", int)
    humidity3: Optional[int] = _vendor("humidity3", int)
    humidity4: Optional[int] = _vendor("humidity4", int)
    humidity5: Optional[int] = _vendor("humidity5", int)
    humidity6: Optional[int] = _vendor("humidity6", int)
    humidity7: Optional[int] = _vendor("humidity7", int)
    humidity8: Optional[int] = _vendor("humidity8", int)
    humidity9: Optional[int] = _vendor("humidity9", int)
    humidity10: Optional[int] = _vendor("humidity10", int)
    soiltemp1f: Optional[float] = _vendor("soiltemp1f", float)
    soiltemp2f: Optional[float] = _vendor("soiltemp2f", float)
    soiltemp3f: Optional[float] = _vendor("soiltemp3f", float)
    soiltemp4f: Optional[float] = _vendor("soiltemp4f", float)
    soiltemp5f: Optional[float] = _vendor("soiltemp5f", float)
    soiltemp6f: Optional[float] = _vendor("soiltemp6f", float)
    soiltemp7f: Optional[float] = _vendor("soiltemp7f", float)
    soiltemp8f: Optional[float] = _vendor("soiltemp8f", float)
    soiltemp9f: Optional[float] = _vendor("soiltemp9f", float)
    soiltemp10f: Optional[float] = _vendor("soiltemp10f", float)
    soilhum1: Optional[int] = _vendor("soilhum1", int)
    soilhum2: Optional[int] = _vendor("soilhum2", int)
    soilhum3: Optional[int] = _vendor("soilhum3", int)
    soilhum4: Optional[int] = _vendor("soilhum4", int)
    soilhum5: Optional[int] = _vendor("soilhum5", int)
    soilhum6: Optional[int] = _vendor("soilhum6", int)
    soilhum7: Optional[int] = _vendor("soilhum7", int)
    soilhum8: Optional[int] = _vendor("soilhum8", int)
    soilhum9: Optional[int] = _vendor("soilhum9", int)
    soilhum10: Optional[int] = _vendor("soilhum10", int)

    # Battery / signal (1 = OK, 0 = low on most sensors)
    battout: Optional[int] = _vendor("battout", int)
    battin: Optional[int] = _vendor("battin", int)
    batt1: Optional[int] = _vendor("batt1", int)
    batt2: Optional[int] = _vendor("batt2", int)
    batt3: Optional[int] = _vendor("batt3", int)
    batt4: Optional[int] = _vendor("batt4", int)
    batt5: Optional[int] = _vendor("batt5", int)
    batt6: Optional[int] = _vendor("batt6", int)
    batt7: Optional[int] = _vendor("batt7", int)
    batt8: Optional[int] = _vendor("batt8", int)
    batt9: Optional[int] = _vendor("batt9", int)
    batt10: Optional[int] = _vendor("batt10", int)
    batt_25: Optional[int] = _vendor("batt_25", int)
    batt_co2: Optional[int] = _vendor("batt_co2", int)
    batt_lightning: Optional[int] = _vendor("batt_lightning", int)

    # Lightning
    lightning_day: Optional[int] = _vendor("lightning_day", int)
    lightning_hour: Optional[int] = _vendor("lightning_hour", int)
    lightning_distance: Optional[float] = _vendor("lightning_distance", float)
    lightning_time: Optional[int] = _vendor("lightning_time", int)

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "WeatherData":
        """
        Build an observation from one vendor JSON object.

        Unknown keys are ignored; keys that are missing or null stay None.

        Raises:
            TypeError: If payload is not an object or a value has the wrong type
            ValueError: If a value cannot be converted to the field's type
        """
        if not isinstance(payload, dict):
            raise TypeError(f"expected JSON object, got {type(payload).__name__}")

        values = {}
        for f in fields(cls):
            raw = payload.get(f.metadata["json"])
            if raw is None:
                continue
            values[f.name] = _coerce(raw, f.metadata["kind"], f.metadata["json"])
        return cls(**values)

    @property
    def timestamp(self) -> Optional[datetime]:
        """Observation time as an aware UTC datetime."""
        if self.date_utc is None:
            return None
        return datetime.fromtimestamp(self.date_utc / 1000, tz=timezone.utc)

    def is_stale(self, max_age_seconds: int = 900) -> bool:
        """Check if this reading is older than max_age_seconds (no timestamp counts as stale)."""
        if self.date_utc is None:
            return True
        current_ms = int(datetime.now(tz=timezone.utc).timestamp() * 1000)
        return current_ms - self.date_utc > max_age_seconds * 1000


def _coerce(raw: Any, kind: type, key: str) -> Any:
    # bool is an int subclass; the vendor never sends booleans for readings
    if isinstance(raw, bool) or isinstance(raw, (dict, list)):
        raise TypeError(f"unexpected {type(raw).__name__} for '{key}'")
    if kind is int and isinstance(raw, float):
        if not raw.is_integer():
            raise ValueError(f"'{key}' is not an integer: {raw}")
        return int(raw)
    if kind is str:
        return str(raw)
    return kind(raw)


@dataclass
class Device:
    """A station registered to the account, as returned by the device list."""
    mac_address: str
    name: Optional[str] = None
    location: Optional[str] = None
    last_data: Optional[WeatherData] = None

    @classmethod
    def from_json(cls, payload: Dict[str, Any]) -> "Device":
        """
        Build a device from one entry of the /devices response.

        Raises:
            KeyError: If the entry has no macAddress
            TypeError: If the entry or its info block is not a JSON object
        """
        if not isinstance(payload, dict):
            raise TypeError(f"expected JSON object, got {type(payload).__name__}")
        info = payload.get("info") or {}
        if not isinstance(info, dict):
            raise TypeError(f"expected JSON object for 'info', got {type(info).__name__}")
        last_data = payload.get("lastData")
        return cls(
            mac_address=payload["macAddress"],
            name=info.get("name"),
            location=info.get("location"),
            last_data=WeatherData.from_json(last_data) if last_data is not None else None,
        )
