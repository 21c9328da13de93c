"""
Mercator helpers.

The projection code only needs a forward/inverse pair mapping latitude to a locally
planar y-value and back. It takes any object with `lat2y` and `y2lat`, so tests can
inject a stub projection.
"""

from __future__ import annotations

import math
from typing import Protocol

import numpy as np

_DEG_PER_RAD = 180.0 / math.pi
_RAD_PER_DEG = math.pi / 180.0


class Projection(Protocol):
    def lat2y(self, lat: float) -> float: ...

    def y2lat(self, y: float) -> float: ...


class SphericalMercator:
    """Spherical Mercator with y expressed in degree-like units (y == lat at the equator)."""

    def lat2y(self, lat: float) -> float:
        # IEEE semantics at the poles: lat2y(-90) is -inf instead of a math domain error.
        with np.errstate(divide="ignore"):
            return float(_DEG_PER_RAD * np.log(np.tan(math.pi / 4.0 + lat * _RAD_PER_DEG / 2.0)))

    def y2lat(self, y: float) -> float:
        return _DEG_PER_RAD * (2.0 * math.atan(math.exp(y * _RAD_PER_DEG)) - math.pi / 2.0)


MERCATOR = SphericalMercator()


def lat2y(lat: float) -> float:
    return MERCATOR.lat2y(lat)


def y2lat(y: float) -> float:
    return MERCATOR.y2lat(y)
