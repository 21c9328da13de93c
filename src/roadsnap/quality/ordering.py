"""
Ordering agreement report for the integer distance approximation.

`ordered_perpendicular_distance_approximation` is only useful as a pre-filter if it ranks
candidates the same way the real perpendicular distance does. This module measures that
empirically: deterministic, network-free, driven by `ordering_report` settings.
Used by:
- CLI (`roadsnap ordering-report`)
- tests
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any

from roadsnap.config.settings import OrderingReportSettings, Settings
from roadsnap.core.coordinate import COORDINATE_PRECISION, Coordinate
from roadsnap.core.projection import (
    compute_perpendicular_distance,
    ordered_perpendicular_distance_approximation,
)

logger = logging.getLogger(__name__)

# Pairs closer than this are below the approximation's integer resolution.
MIN_GAP_M = 1.0


@dataclass(frozen=True)
class RankedPair:
    """Two query points measured against the same segment, nearer one first."""

    near_distance_m: float
    far_distance_m: float
    near_approximation: int
    far_approximation: int

    def is_comparable(self, margin: float) -> bool:
        return self.far_distance_m > self.near_distance_m * (1.0 + margin) + MIN_GAP_M

    def is_inverted(self) -> bool:
        return self.far_approximation < self.near_approximation


def _fixed(value_deg: float) -> int:
    return int(round(value_deg * COORDINATE_PRECISION))


def _random_segment(rng: random.Random, cfg: OrderingReportSettings) -> tuple[Coordinate, Coordinate]:
    lat = rng.uniform(-cfg.max_abs_lat, cfg.max_abs_lat)
    lon = rng.uniform(-cfg.max_abs_lon, cfg.max_abs_lon)
    source = Coordinate(lat=_fixed(lat), lon=_fixed(lon))
    target = Coordinate(
        lat=_fixed(lat + rng.uniform(-cfg.max_segment_deg, cfg.max_segment_deg)),
        lon=_fixed(lon + rng.uniform(-cfg.max_segment_deg, cfg.max_segment_deg)),
    )
    return source, target


def _random_query(
    rng: random.Random, source: Coordinate, target: Coordinate, cfg: OrderingReportSettings
) -> Coordinate:
    # Anywhere along the segment or a bit past its ends, pushed off the line.
    t = rng.uniform(-0.3, 1.3)
    offset = cfg.max_offset_deg * COORDINATE_PRECISION
    return Coordinate(
        lat=int(source.lat + t * (target.lat - source.lat) + rng.uniform(-offset, offset)),
        lon=int(source.lon + t * (target.lon - source.lon) + rng.uniform(-offset, offset)),
    )


def sample_pairs(cfg: OrderingReportSettings, *, samples: int, seed: int) -> list[RankedPair]:
    rng = random.Random(seed)
    pairs: list[RankedPair] = []
    for _ in range(samples):
        source, target = _random_segment(rng, cfg)
        measured = []
        for _ in range(2):
            query = _random_query(rng, source, target, cfg)
            measured.append(
                (
                    compute_perpendicular_distance(query, source, target),
                    ordered_perpendicular_distance_approximation(query, source, target),
                )
            )
        (near_m, near_approx), (far_m, far_approx) = sorted(measured, key=lambda m: m[0])
        pairs.append(
            RankedPair(
                near_distance_m=near_m,
                far_distance_m=far_m,
                near_approximation=near_approx,
                far_approximation=far_approx,
            )
        )
    return pairs


def build_ordering_report(
    settings: Settings, *, samples: int | None = None, seed: int | None = None
) -> dict[str, Any]:
    cfg = settings.ordering_report
    n = int(samples) if samples is not None else cfg.samples
    s = int(seed) if seed is not None else cfg.seed
    if n <= 0:
        raise ValueError("samples must be > 0")

    pairs = sample_pairs(cfg, samples=n, seed=s)
    comparable = [p for p in pairs if p.is_comparable(cfg.margin)]
    inversions = sum(1 for p in comparable if p.is_inverted())
    agreement = 1.0 - inversions / len(comparable) if comparable else 1.0

    if inversions:
        logger.warning("Ordered approximation inverted %d of %d comparable pairs.", inversions, len(comparable))
    logger.info("Ordering report: samples=%d seed=%d agreement=%.4f", n, s, agreement)
    return {
        "samples": n,
        "seed": s,
        "margin": cfg.margin,
        "compared_pairs": len(comparable),
        "inversions": inversions,
        "agreement": agreement,
    }
