"""
Distance approximations between fixed-point coordinates.

- `haversine_m`: great-circle distance, double precision. Used when a distance is reported.
- `equirectangular_m`: planar approximation, single precision. Used on the snapping hot
  path, where segments are short and the float32 error is far below GPS noise.

Both come in a scalar form (four fixed-point fields) and a coordinate-pair form.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from roadsnap.core.contracts import require
from roadsnap.core.coordinate import COORDINATE_PRECISION, UNSET, degrees_f32

if TYPE_CHECKING:
    from roadsnap.core.coordinate import Coordinate

# Mean radius used throughout the routing engine (between the polar and equatorial radii).
EARTH_RADIUS_M = 6372797.560856

_RAD = 0.017453292519943295769236907684886
_RAD_F32 = np.float32(_RAD)
_EARTH_RADIUS_F32 = np.float32(EARTH_RADIUS_M)
_TWO_F32 = np.float32(2.0)


def _require_set_fields(lat1: int, lon1: int, lat2: int, lon2: int) -> None:
    require(lat1 != UNSET, "lat1 is unset")
    require(lon1 != UNSET, "lon1 is unset")
    require(lat2 != UNSET, "lat2 is unset")
    require(lon2 != UNSET, "lon2 is unset")


def haversine_m(lat1: int, lon1: int, lat2: int, lon2: int) -> float:
    """Great-circle distance in meters between two fixed-point positions."""
    _require_set_fields(lat1, lon1, lat2, lon2)
    dlat1 = (lat1 / COORDINATE_PRECISION) * _RAD
    dlong1 = (lon1 / COORDINATE_PRECISION) * _RAD
    dlat2 = (lat2 / COORDINATE_PRECISION) * _RAD
    dlong2 = (lon2 / COORDINATE_PRECISION) * _RAD

    d_long = dlong1 - dlong2
    d_lat = dlat1 - dlat2

    a_harv = math.sin(d_lat / 2.0) ** 2 + math.cos(dlat1) * math.cos(dlat2) * math.sin(d_long / 2.0) ** 2
    c_harv = 2.0 * math.atan2(math.sqrt(a_harv), math.sqrt(1.0 - a_harv))
    return EARTH_RADIUS_M * c_harv


def equirectangular_m(lat1: int, lon1: int, lat2: int, lon2: int) -> float:
    """Planar (equirectangular) distance in meters, computed in float32.

    The longitude delta is scaled by the cosine of the mean latitude. Only accurate over
    short distances.
    """
    _require_set_fields(lat1, lon1, lat2, lon2)
    float_lat1 = degrees_f32(lat1) * _RAD_F32
    float_lon1 = degrees_f32(lon1) * _RAD_F32
    float_lat2 = degrees_f32(lat2) * _RAD_F32
    float_lon2 = degrees_f32(lon2) * _RAD_F32

    x_value = (float_lon2 - float_lon1) * np.cos((float_lat1 + float_lat2) / _TWO_F32)
    y_value = float_lat2 - float_lat1
    return float(np.sqrt(x_value * x_value + y_value * y_value) * _EARTH_RADIUS_F32)


def approximate_distance(a: Coordinate, b: Coordinate) -> float:
    return haversine_m(a.lat, a.lon, b.lat, b.lon)


def approximate_euclidean_distance(a: Coordinate, b: Coordinate) -> float:
    return equirectangular_m(a.lat, a.lon, b.lat, b.lon)
