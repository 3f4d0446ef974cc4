import pytest

from benigna.core.geo import Coordinate, encode_geohash, format_distance, haversine_km

SAO_PAULO = Coordinate(latitude=-23.5505, longitude=-46.6333)
RIO = Coordinate(latitude=-22.9068, longitude=-43.1729)


def test_haversine_zero_for_same_point():
    assert haversine_km(SAO_PAULO, SAO_PAULO) == 0


def test_haversine_is_symmetric():
    assert haversine_km(SAO_PAULO, RIO) == pytest.approx(haversine_km(RIO, SAO_PAULO))


def test_one_degree_of_latitude():
    a = Coordinate(latitude=0, longitude=0)
    b = Coordinate(latitude=1, longitude=0)
    assert haversine_km(a, b) == pytest.approx(111.19, abs=0.01)


def test_sao_paulo_to_rio():
    assert haversine_km(SAO_PAULO, RIO) == pytest.approx(361, abs=5)


def test_coordinate_bounds():
    with pytest.raises(ValueError):
        Coordinate(latitude=91, longitude=0)


def test_format_distance():
    assert format_distance(0.45) == "450m"
    assert format_distance(0.9996) == "1000m"
    assert format_distance(2.345) == "2.3km"


def test_encode_geohash():
    assert encode_geohash(SAO_PAULO).startswith("6gyf")
    assert len(encode_geohash(SAO_PAULO, precision=5)) == 5
