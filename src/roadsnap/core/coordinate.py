"""
Fixed-point coordinates.

Latitude and longitude are stored as integers scaled by `COORDINATE_PRECISION`, so
coordinates coming from parsed OSM/GPS data or graph node storage compare exactly.
A `Coordinate()` built without arguments is "unset": both fields hold the 32-bit
minimum. The geometry functions require set coordinates.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np

from roadsnap.config.settings import get_settings

logger = logging.getLogger(__name__)

COORDINATE_PRECISION = 1_000_000.0
COORDINATE_DECIMALS = 6
UNSET = -(2**31)

# Single-precision copy of the scale, used on the float32 paths.
PRECISION_F32 = np.float32(COORDINATE_PRECISION)

_REPRESENTATION_BITS = 30
_STRING_INTEGER_DIGITS = 4
_SCALE = 10**COORDINATE_DECIMALS


def degrees_f32(value: int) -> np.float32:
    """Convert one fixed-point field to degrees in single precision."""
    return np.float32(value) / PRECISION_F32


def _report_broken_field(name: str, value: int) -> None:
    if value == UNSET or (abs(value) >> _REPRESENTATION_BITS) == 0:
        return
    contracts = get_settings().contracts
    if not (contracts.enabled and contracts.log_broken_coordinates):
        return
    logger.debug("broken %s: %d, bits: %s", name, value, format(value & 0xFFFFFFFF, "032b"))


@dataclass
class Coordinate:
    """A latitude/longitude pair in fixed-point degrees (degrees * COORDINATE_PRECISION)."""

    lat: int = UNSET
    lon: int = UNSET

    def __post_init__(self) -> None:
        _report_broken_field("lat", self.lat)
        _report_broken_field("lon", self.lon)

    @classmethod
    def from_degrees(cls, lat: float, lon: float) -> "Coordinate":
        """Build a coordinate from decimal degrees, rounded to the nearest fixed-point unit."""
        return cls(lat=int(round(lat * COORDINATE_PRECISION)), lon=int(round(lon * COORDINATE_PRECISION)))

    def to_degrees(self) -> tuple[float, float]:
        return self.lat / COORDINATE_PRECISION, self.lon / COORDINATE_PRECISION

    def reset(self) -> None:
        self.lat = UNSET
        self.lon = UNSET

    def is_set(self) -> bool:
        return not (self.lat == UNSET and self.lon == UNSET)

    def is_valid(self) -> bool:
        """Bounds check only; an unset coordinate is simply out of bounds."""
        if (
            self.lat > 90 * COORDINATE_PRECISION
            or self.lat < -90 * COORDINATE_PRECISION
            or self.lon > 180 * COORDINATE_PRECISION
            or self.lon < -180 * COORDINATE_PRECISION
        ):
            return False
        return True

    def get_bearing(self, other: "Coordinate") -> float:
        """Bearing of this coordinate as seen from `other`, in degrees [0, 360)."""
        from roadsnap.core.bearing import get_bearing

        return get_bearing(other, self)

    def __str__(self) -> str:
        lat, lon = self.to_degrees()
        return f"({lat:g},{lon:g})"


def lat_lon_to_string(value: int) -> str:
    """Format one fixed-point field with an 11-character layout and six fractional digits.

    At most four integer digits are kept, e.g. 52519400 -> "52.519400", -1 -> "-0.000001".
    """
    sign = "-" if value < 0 else ""
    whole, fraction = divmod(abs(value), _SCALE)
    whole %= 10**_STRING_INTEGER_DIGITS
    return f"{sign}{whole}.{fraction:0{COORDINATE_DECIMALS}d}"


def coordinate_to_string(coordinate: Coordinate) -> str:
    """`"lon,lat"`, the order used by geometry exports."""
    return f"{lat_lon_to_string(coordinate.lon)},{lat_lon_to_string(coordinate.lat)}"


def coordinate_to_reversed_string(coordinate: Coordinate) -> str:
    """`"lat,lon"`."""
    return f"{lat_lon_to_string(coordinate.lat)},{lat_lon_to_string(coordinate.lon)}"
