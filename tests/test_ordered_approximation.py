import random

import pytest

from roadsnap.core.contracts import PreconditionViolation
from roadsnap.core.coordinate import UNSET, Coordinate
from roadsnap.core.projection import compute_perpendicular_distance, ordered_perpendicular_distance_approximation

SOURCE = Coordinate(lat=0, lon=0)
TARGET = Coordinate(lat=0, lon=1_000_000)


def test_value_is_in_fixed_point_units():
    # 0.001 degrees north of the quarter point.
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=1_000, lon=250_000), SOURCE, TARGET) == 1000


def test_points_past_the_ends_are_measured_from_the_endpoint():
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=0, lon=-500_000), SOURCE, TARGET) == 500_000
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=3_000, lon=1_004_000), SOURCE, TARGET) == 5_000


def test_returns_int():
    value = ordered_perpendicular_distance_approximation(Coordinate(lat=123, lon=456_789), SOURCE, TARGET)
    assert type(value) is int


def test_preserves_ranking_of_the_real_distance():
    # Near the equator the missing cos(lat) scale is negligible, so any pair whose real
    # distances differ clearly must be ranked the same way.
    rng = random.Random(7)
    compared = 0
    for _ in range(500):
        source = Coordinate(lat=rng.randint(-500_000, 500_000), lon=rng.randint(-500_000, 500_000))
        target = Coordinate(
            lat=source.lat + rng.randint(-20_000, 20_000), lon=source.lon + rng.randint(-20_000, 20_000)
        )
        queries = [
            Coordinate(lat=source.lat + rng.randint(-30_000, 30_000), lon=source.lon + rng.randint(-30_000, 30_000))
            for _ in range(2)
        ]
        (near_m, near_approx), (far_m, far_approx) = sorted(
            (
                compute_perpendicular_distance(q, source, target),
                ordered_perpendicular_distance_approximation(q, source, target),
            )
            for q in queries
        )
        if far_m > near_m * 1.1 + 1.0:
            compared += 1
            assert near_approx <= far_approx
    assert compared > 300


def test_degenerate_segment_is_measured_from_the_point():
    point = Coordinate(lat=0, lon=0)
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=1_000, lon=0), point, point) == 1000
    assert ordered_perpendicular_distance_approximation(point, point, point) == 0


def test_nan_tie_break_only_looks_at_the_target():
    # Documented asymmetry: on a segment that collapses in float32 (100.000000 vs 100.000001
    # degrees), only a query equal to the target is measured from the target. Everything
    # else, including points that coincide with neither endpoint, is measured from the source.
    source = Coordinate(lat=0, lon=100_000_000)
    target = Coordinate(lat=0, lon=100_000_001)

    assert ordered_perpendicular_distance_approximation(target, source, target) == 0
    assert ordered_perpendicular_distance_approximation(source, source, target) == 0
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=0, lon=100_000_002), source, target) == 2

    # Swapping the endpoints changes which one the fallback uses.
    assert ordered_perpendicular_distance_approximation(Coordinate(lat=0, lon=100_000_002), target, source) == 1


def test_unset_inputs_are_rejected():
    with pytest.raises(PreconditionViolation):
        ordered_perpendicular_distance_approximation(SOURCE, Coordinate(), TARGET)


@pytest.mark.parametrize(
    "half_unset",
    [Coordinate(lat=UNSET, lon=0), Coordinate(lat=0, lon=UNSET)],
)
def test_half_unset_inputs_are_rejected(half_unset):
    query = Coordinate(lat=1_000, lon=250_000)
    with pytest.raises(PreconditionViolation, match="point coordinate is unset"):
        ordered_perpendicular_distance_approximation(half_unset, SOURCE, TARGET)
    with pytest.raises(PreconditionViolation, match="source coordinate is unset"):
        ordered_perpendicular_distance_approximation(query, half_unset, TARGET)
    with pytest.raises(PreconditionViolation, match="target coordinate is unset"):
        ordered_perpendicular_distance_approximation(query, SOURCE, half_unset)
