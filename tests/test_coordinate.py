import logging

from roadsnap.config.settings import get_settings
from roadsnap.core.coordinate import (
    COORDINATE_PRECISION,
    UNSET,
    Coordinate,
    coordinate_to_reversed_string,
    coordinate_to_string,
    lat_lon_to_string,
)


def test_default_coordinate_is_the_unset_sentinel():
    c = Coordinate()
    assert c.lat == UNSET
    assert c.lon == UNSET
    assert not c.is_set()
    assert not c.is_valid()


def test_is_set_is_false_only_when_both_fields_are_sentinel():
    assert Coordinate(lat=UNSET, lon=0).is_set()
    assert Coordinate(lat=0, lon=UNSET).is_set()
    assert Coordinate(lat=0, lon=0).is_set()


def test_reset_restores_sentinel():
    c = Coordinate(lat=52519400, lon=13388860)
    c.reset()
    assert c == Coordinate()
    assert not c.is_set()


def test_is_valid_bounds_are_inclusive():
    p = int(COORDINATE_PRECISION)
    assert Coordinate(lat=90 * p, lon=180 * p).is_valid()
    assert Coordinate(lat=-90 * p, lon=-180 * p).is_valid()
    assert not Coordinate(lat=90 * p + 1, lon=0).is_valid()
    assert not Coordinate(lat=0, lon=-180 * p - 1).is_valid()


def test_equality_is_exact():
    assert Coordinate(lat=1, lon=2) == Coordinate(lat=1, lon=2)
    assert Coordinate(lat=1, lon=2) != Coordinate(lat=1, lon=3)
    assert Coordinate(lat=1, lon=2) != Coordinate(lat=2, lon=1)


def test_from_degrees_rounds_to_fixed_point():
    c = Coordinate.from_degrees(52.5194, 13.38886)
    assert (c.lat, c.lon) == (52519400, 13388860)
    assert c.to_degrees() == (52.5194, 13.38886)


def test_str_prints_degrees_with_six_significant_digits():
    assert str(Coordinate(lat=52519400, lon=13388860)) == "(52.5194,13.3889)"
    assert str(Coordinate(lat=0, lon=-500000)) == "(0,-0.5)"


def test_fields_wider_than_30_bits_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="roadsnap.core.coordinate")
    Coordinate(lat=2**30, lon=0)
    assert "broken lat: 1073741824, bits: 01000000000000000000000000000000" in caplog.text
    assert "broken lon" not in caplog.text


def test_sentinel_is_not_reported_as_broken(caplog):
    caplog.set_level(logging.DEBUG, logger="roadsnap.core.coordinate")
    Coordinate()
    assert "broken" not in caplog.text


def test_lat_lon_to_string_fixed_layout():
    assert lat_lon_to_string(52519400) == "52.519400"
    assert lat_lon_to_string(-13388860) == "-13.388860"
    assert lat_lon_to_string(0) == "0.000000"
    assert lat_lon_to_string(-1) == "-0.000001"
    assert lat_lon_to_string(180000000) == "180.000000"
    # Only four integer digits fit in the 11-character layout.
    assert lat_lon_to_string(12345678901) == "2345.678901"


def test_coordinate_strings_use_lon_lat_and_lat_lon_order():
    c = Coordinate(lat=52519400, lon=13388860)
    assert coordinate_to_string(c) == "13.388860,52.519400"
    assert coordinate_to_reversed_string(c) == "52.519400,13.388860"


def test_construction_reads_settings_only_for_broken_fields(monkeypatch, caplog):
    calls = []

    def counting_settings():
        calls.append(1)
        return get_settings()

    monkeypatch.setattr("roadsnap.core.coordinate.get_settings", counting_settings)
    caplog.set_level(logging.DEBUG, logger="roadsnap.core.coordinate")

    Coordinate(lat=52_519_400, lon=13_388_860)
    Coordinate()
    assert calls == []

    Coordinate(lat=0, lon=2**30)
    assert len(calls) == 1
    assert "broken lon" in caplog.text


def test_broken_fields_are_not_logged_with_contracts_disabled(contracts_disabled, caplog):
    caplog.set_level(logging.DEBUG, logger="roadsnap.core.coordinate")
    Coordinate(lat=2**30, lon=0)
    assert "broken" not in caplog.text
