"""
Domain models (Pydantic).

The geometry core works on integer `Coordinate`s. These models are the boundary for
human input and machine output:
- decimal-degree input validated before it becomes fixed-point (`GeoPoint`)
- JSON-serializable results printed by the CLI (`DistanceReport`, `BearingReport`, `SnapReport`)
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from roadsnap.core.coordinate import COORDINATE_PRECISION, Coordinate


class GeoPoint(BaseModel):
    """A geographic point in decimal degrees."""

    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)

    def to_coordinate(self) -> Coordinate:
        return Coordinate.from_degrees(self.lat, self.lon)

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "GeoPoint":
        return cls(lat=coordinate.lat / COORDINATE_PRECISION, lon=coordinate.lon / COORDINATE_PRECISION)


class DistanceReport(BaseModel):
    source: GeoPoint
    target: GeoPoint
    haversine_m: float = Field(..., ge=0)
    equirectangular_m: float = Field(..., ge=0)


class BearingReport(BaseModel):
    source: GeoPoint
    target: GeoPoint
    bearing_deg: float = Field(..., ge=0, lt=360)


class SnapReport(BaseModel):
    """Projection of `point` onto the segment `source` -> `target`."""

    point: GeoPoint
    source: GeoPoint
    target: GeoPoint
    nearest: GeoPoint
    ratio: float = Field(..., ge=0, le=1)
    distance_m: float = Field(..., ge=0)
    ordered_approximation: int = Field(..., ge=0)
