"""
roadsnap CLI entrypoint.

This CLI is intended for quick local checks of the geometry primitives: distances, bearings,
snapping a point onto a segment, coordinate formatting, and the ordering report.
Inputs are decimal degrees; they are converted to fixed-point before any computation.
"""

from __future__ import annotations

import argparse
import json
from typing import Any

from pydantic import ValidationError

from roadsnap.config.settings import get_settings
from roadsnap.core.bearing import get_bearing
from roadsnap.core.coordinate import coordinate_to_reversed_string, coordinate_to_string
from roadsnap.core.distance import approximate_distance, approximate_euclidean_distance
from roadsnap.core.logging import configure_logging
from roadsnap.core.projection import ordered_perpendicular_distance_approximation, project_onto_segment
from roadsnap.domain.models import BearingReport, DistanceReport, GeoPoint, SnapReport
from roadsnap.quality.ordering import build_ordering_report


def _point(values: list[float]) -> GeoPoint:
    """Validate a `LAT LON` argument pair."""
    lat, lon = values
    return GeoPoint(lat=lat, lon=lon)


def _print_model(model: Any, as_json: bool) -> None:
    if as_json:
        print(json.dumps(model.model_dump(mode="json"), indent=2))
        return
    for key, value in model.model_dump(mode="python").items():
        if isinstance(value, dict):
            value = f"{value['lat']:.6f},{value['lon']:.6f}"
        print(f"{key}: {value}")


def _cmd_distance(args: argparse.Namespace) -> int:
    source, target = _point(args.origin), _point(args.destination)
    a, b = source.to_coordinate(), target.to_coordinate()
    report = DistanceReport(
        source=source,
        target=target,
        haversine_m=approximate_distance(a, b),
        equirectangular_m=approximate_euclidean_distance(a, b),
    )
    _print_model(report, args.json)
    return 0


def _cmd_bearing(args: argparse.Namespace) -> int:
    source, target = _point(args.origin), _point(args.destination)
    report = BearingReport(
        source=source,
        target=target,
        bearing_deg=get_bearing(source.to_coordinate(), target.to_coordinate()),
    )
    _print_model(report, args.json)
    return 0


def _cmd_snap(args: argparse.Namespace) -> int:
    point, source, target = _point(args.point), _point(args.source), _point(args.target)
    query = point.to_coordinate()
    segment_source, segment_target = source.to_coordinate(), target.to_coordinate()

    result = project_onto_segment(segment_source, segment_target, query)
    report = SnapReport(
        point=point,
        source=source,
        target=target,
        nearest=GeoPoint.from_coordinate(result.nearest),
        ratio=result.ratio,
        distance_m=result.distance,
        ordered_approximation=ordered_perpendicular_distance_approximation(query, segment_source, segment_target),
    )
    _print_model(report, args.json)
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    coordinate = GeoPoint(lat=args.lat, lon=args.lon).to_coordinate()
    if args.reversed:
        print(coordinate_to_reversed_string(coordinate))
    else:
        print(coordinate_to_string(coordinate))
    return 0


def _cmd_ordering_report(args: argparse.Namespace) -> int:
    report = build_ordering_report(get_settings(), samples=args.samples, seed=args.seed)
    print(json.dumps(report, indent=2))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the roadsnap CLI."""
    parser = argparse.ArgumentParser(prog="roadsnap")
    sub = parser.add_subparsers(dest="command", required=True)
    latlon: dict[str, Any] = {"nargs": 2, "type": float, "metavar": ("LAT", "LON")}

    dist = sub.add_parser("distance", help="Haversine and equirectangular distance between two points.")
    dist.add_argument("--from", dest="origin", required=True, **latlon)
    dist.add_argument("--to", dest="destination", required=True, **latlon)
    dist.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    dist.set_defaults(func=_cmd_distance)

    bear = sub.add_parser("bearing", help="Initial bearing from one point to another (degrees).")
    bear.add_argument("--from", dest="origin", required=True, **latlon)
    bear.add_argument("--to", dest="destination", required=True, **latlon)
    bear.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    bear.set_defaults(func=_cmd_bearing)

    snap = sub.add_parser("snap", help="Project a point onto a segment.")
    snap.add_argument("--point", required=True, **latlon)
    snap.add_argument("--source", required=True, **latlon)
    snap.add_argument("--target", required=True, **latlon)
    snap.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    snap.set_defaults(func=_cmd_snap)

    fmt = sub.add_parser("format", help="Print a coordinate in the fixed 'lon,lat' export layout.")
    fmt.add_argument("--lat", required=True, type=float)
    fmt.add_argument("--lon", required=True, type=float)
    fmt.add_argument("--reversed", action="store_true", help="Print 'lat,lon' instead")
    fmt.set_defaults(func=_cmd_format)

    rep = sub.add_parser("ordering-report", help="Check that the integer approximation ranks like the real distance.")
    rep.add_argument("--samples", type=int, default=None)
    rep.add_argument("--seed", type=int, default=None)
    rep.set_defaults(func=_cmd_ordering_report)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m roadsnap.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except ValidationError as exc:
        errors = "; ".join(f"{'.'.join(str(p) for p in e['loc'])}: {e['msg']}" for e in exc.errors())
        parser.error(errors)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    raise SystemExit(main())
