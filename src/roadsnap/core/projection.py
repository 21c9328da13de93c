"""
Perpendicular projection of a query point onto a segment.

This is what snaps GPS points onto graph edges. Coordinates are mapped into a locally
planar space (x = longitude degrees, y = Mercator-projected latitude), the query point
is projected orthogonally onto the segment's supporting line, and the foot of the
perpendicular is clamped to the segment.

Three entry points share the math:
- `compute_perpendicular_distance(point, source, target)`: distance only.
- `project_onto_segment(source, target, point)`: distance, nearest point and ratio.
- `ordered_perpendicular_distance_approximation(point, source, target)`: integer surrogate
  that only preserves ranking among candidates of the same segment.

The planar math runs in float32; the epsilon snaps below are tuned to that precision.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from roadsnap.core.contracts import ensure, require
from roadsnap.core.coordinate import COORDINATE_PRECISION, PRECISION_F32, UNSET, Coordinate, degrees_f32
from roadsnap.core.distance import approximate_euclidean_distance
from roadsnap.core.mercator import MERCATOR, Projection

FLOAT32_EPSILON = np.finfo(np.float32).eps

# One unit of coordinate precision; offsets below it are discretization noise.
_OFFSET_RESOLUTION = np.float32(1.0 / COORDINATE_PRECISION)
_ZERO = np.float32(0.0)
_ONE = np.float32(1.0)


@dataclass(frozen=True)
class PerpendicularProjection:
    """Result of projecting a point onto a segment.

    `ratio` is 0 at the source, 1 at the target. `distance` is in meters.
    """

    distance: float
    nearest: Coordinate
    ratio: float


@dataclass(frozen=True)
class _Foot:
    x: np.float32
    y: np.float32
    ratio: np.float32
    # Planar offset of the foot from the source, in degrees.
    along_x: np.float32
    along_y: np.float32


def _to_planar(coordinate: Coordinate, projection: Projection) -> tuple[np.float32, np.float32]:
    x = degrees_f32(coordinate.lon)
    y = np.float32(projection.lat2y(float(degrees_f32(coordinate.lat))))
    return x, y


def _foot_of_perpendicular(
    point: Coordinate,
    source: Coordinate,
    target: Coordinate,
    projection: Projection,
    *,
    vertical_tolerance: np.float32,
) -> _Foot:
    """Project `point` onto the line through `source` and `target` in planar space.

    `ratio` is the position of the foot along the segment, NaN when the segment is
    degenerate in planar space.
    """
    x, y = _to_planar(point, projection)
    a, b = _to_planar(source, projection)
    c, d = _to_planar(target, projection)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        dx = c - a
        dy = d - b
        # Offsets are taken relative to the source; in absolute float32 terms the m*m*a
        # products cancel badly on steep segments far from (0, 0).
        if abs(dx) > vertical_tolerance:
            slope = dy / dx
            along_x = ((x - a) + slope * (y - b)) / (_ONE + slope * slope)
            along_y = slope * along_x
            p = a + along_x
            q = b + along_y
        else:
            along_x = dx
            along_y = y - b
            p = c
            q = y
        ratio = (along_x * dx + along_y * dy) / (dx * dx + dy * dy)
    return _Foot(x=p, y=q, ratio=ratio, along_x=along_x, along_y=along_y)


def _foot_to_coordinate(foot: _Foot, projection: Projection) -> Coordinate:
    return Coordinate(
        lat=int(projection.y2lat(float(foot.y)) * COORDINATE_PRECISION),
        lon=int(foot.x * PRECISION_F32),
    )


def _require_set(**coordinates: Coordinate) -> None:
    for name, coordinate in coordinates.items():
        require(UNSET not in (coordinate.lat, coordinate.lon), f"{name} coordinate is unset")


def _snap_to_segment(
    point: Coordinate,
    source: Coordinate,
    target: Coordinate,
    projection: Projection,
) -> PerpendicularProjection:
    foot = _foot_of_perpendicular(point, source, target, projection, vertical_tolerance=FLOAT32_EPSILON)

    ratio = foot.ratio
    if np.isnan(ratio):
        # Degenerate segment: the only point with a defined position is the target itself.
        ratio = _ONE if target == point else _ZERO
    elif abs(foot.along_x) < _OFFSET_RESOLUTION and abs(foot.along_y) < _OFFSET_RESOLUTION:
        # A foot within one fixed-point unit of the source is the source.
        ratio = _ZERO
    elif abs(ratio) <= FLOAT32_EPSILON:
        ratio = _ZERO
    elif abs(ratio - _ONE) <= FLOAT32_EPSILON:
        ratio = _ONE

    if ratio <= _ZERO:
        ratio = _ZERO
        nearest = Coordinate(lat=source.lat, lon=source.lon)
    elif ratio >= _ONE:
        ratio = _ONE
        nearest = Coordinate(lat=target.lat, lon=target.lon)
    else:
        nearest = _foot_to_coordinate(foot, projection)
    ensure(nearest.is_valid(), f"nearest point {nearest!r} is not a valid coordinate")

    distance = approximate_euclidean_distance(point, nearest)
    ensure(distance >= 0.0, f"negative distance {distance}")
    return PerpendicularProjection(distance=distance, nearest=nearest, ratio=float(ratio))


def compute_perpendicular_distance(
    point: Coordinate,
    source: Coordinate,
    target: Coordinate,
    *,
    projection: Projection = MERCATOR,
) -> float:
    """Distance in meters from `point` to the nearest point of segment `source`-`target`."""
    _require_set(point=point, source=source, target=target)
    return _snap_to_segment(point, source, target, projection).distance


def project_onto_segment(
    source: Coordinate,
    target: Coordinate,
    point: Coordinate,
    *,
    projection: Projection = MERCATOR,
) -> PerpendicularProjection:
    """Nearest point of segment `source`-`target` to `point`, its distance and ratio."""
    _require_set(point=point, source=source, target=target)
    require(point.is_valid(), f"query coordinate {point!r} is not valid")
    return _snap_to_segment(point, source, target, projection)


def ordered_perpendicular_distance_approximation(
    point: Coordinate,
    source: Coordinate,
    target: Coordinate,
    *,
    projection: Projection = MERCATOR,
) -> int:
    """Integer distance surrogate, in fixed-point units, for ranking candidates of one segment.

    Not a metric distance: longitude deltas are not scaled by latitude and there is no
    snapping. Only the relative order among points of the same segment is meaningful.
    """
    _require_set(point=point, source=source, target=target)
    foot = _foot_of_perpendicular(point, source, target, projection, vertical_tolerance=_ZERO)

    ratio = foot.ratio
    if np.isnan(ratio):
        # Compares with the target only, like the exact variants.
        ratio = _ONE if target == point else _ZERO

    if ratio <= _ZERO:
        dx = point.lon - source.lon
        dy = point.lat - source.lat
    elif ratio >= _ONE:
        dx = point.lon - target.lon
        dy = point.lat - target.lat
    else:
        dx = int(np.float32(point.lon) - foot.x * PRECISION_F32)
        dy = int(point.lat - projection.y2lat(float(foot.y)) * COORDINATE_PRECISION)
    return math.isqrt(dx * dx + dy * dy)
