"""Initial compass bearing between fixed-point coordinates (single precision)."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import numpy as np

from roadsnap.core.contracts import require
from roadsnap.core.coordinate import UNSET, degrees_f32

if TYPE_CHECKING:
    from roadsnap.core.coordinate import Coordinate

_DEG_TO_RAD_F32 = np.float32(math.pi / 180.0)
_RAD_TO_DEG_F32 = np.float32(180.0 / math.pi)
_FULL_TURN_F32 = np.float32(360.0)
_ZERO_F32 = np.float32(0.0)


def degree_to_radian(degree: float) -> np.float32:
    return np.float32(degree) * _DEG_TO_RAD_F32


def radian_to_degree(radian: float) -> np.float32:
    return np.float32(radian) * _RAD_TO_DEG_F32


def get_bearing(a: Coordinate, b: Coordinate) -> float:
    """Initial bearing from `a` to `b` in degrees, normalized into [0, 360).

    0 is north, 90 east.
    """
    require(a.lat != UNSET and a.lon != UNSET, "bearing origin is unset")
    require(b.lat != UNSET and b.lon != UNSET, "bearing destination is unset")

    delta_long = degree_to_radian(degrees_f32(b.lon) - degrees_f32(a.lon))
    lat1 = degree_to_radian(degrees_f32(a.lat))
    lat2 = degree_to_radian(degrees_f32(b.lat))
    y_value = np.sin(delta_long) * np.cos(lat2)
    x_value = np.cos(lat1) * np.sin(lat2) - np.sin(lat1) * np.cos(lat2) * np.cos(delta_long)
    result = radian_to_degree(np.arctan2(y_value, x_value))

    # float32 rounding can land a tiny negative angle exactly on 360.
    while result < _ZERO_F32:
        result += _FULL_TURN_F32
    while result >= _FULL_TURN_F32:
        result -= _FULL_TURN_F32
    return float(result)
