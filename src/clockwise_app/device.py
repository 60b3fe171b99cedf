from __future__ import annotations

import os
import platform
import socket
import time
from dataclasses import dataclass

from clockwise_sdk.models import DeviceInfo, GeoPoint

APP_VERSION = "0.4.0"


class LocationUnavailableError(RuntimeError):
    pass


def get_device_info() -> DeviceInfo:
    return DeviceInfo(
        platform=platform.platform(),
        system=platform.system(),
        release=platform.release(),
        machine=platform.machine(),
        hostname=socket.gethostname(),
        timezone=time.tzname[0],
        app_version=APP_VERSION,
    )


@dataclass
class LocationProvider:
    latitude: float | None = None
    longitude: float | None = None

    @classmethod
    def from_env(cls) -> "LocationProvider":
        raw_lat = os.getenv("CLOCKWISE_DEVICE_LATITUDE")
        raw_lon = os.getenv("CLOCKWISE_DEVICE_LONGITUDE")
        try:
            latitude = float(raw_lat) if raw_lat else None
            longitude = float(raw_lon) if raw_lon else None
        except ValueError as exc:
            raise LocationUnavailableError(f"Invalid device coordinates: {raw_lat!r}, {raw_lon!r}") from exc
        return cls(latitude=latitude, longitude=longitude)

    def current_location(self) -> GeoPoint:
        if self.latitude is None or self.longitude is None:
            raise LocationUnavailableError("Geolocation is not available on this device")
        return GeoPoint(latitude=self.latitude, longitude=self.longitude)
