import numpy as np
import pytest

from flarematch.config import ParseErrorPolicy
from flarematch.errors import CellParseError, DegenerateDataError
from flarematch.geo import GeoPoint, haversine_km
from flarematch.numeric import cell, normalize, parse_float


# ---------- parsing ---------- #
@pytest.mark.parametrize("raw, expected", [("3.5", 3.5), (" -12 ", -12.0), ("1e3", 1000.0)])
def test_parse_float_valid(raw, expected):
    assert parse_float(raw) == expected


@pytest.mark.parametrize("raw", ["", "  ", "n/a", "12,5", None])
def test_parse_float_lenient_zero(raw):
    assert parse_float(raw) == 0.0


def test_parse_float_skip_row_returns_none():
    assert parse_float("bad", ParseErrorPolicy.SKIP_ROW) is None
    assert parse_float("7", ParseErrorPolicy.SKIP_ROW) == 7.0


def test_parse_float_fail_names_location():
    with pytest.raises(CellParseError) as info:
        parse_float("abc", ParseErrorPolicy.FAIL, row=4, col=2)
    assert info.value.row == 4 and info.value.col == 2
    assert "abc" in str(info.value)


def test_cell_out_of_range_is_absent():
    row = ["a", "b"]
    assert cell(row, 1) == "b"
    assert cell(row, 2) is None


# ---------- normalisation ---------- #
def test_normalize_range_is_unit_interval():
    out = normalize([5.0, -3.0, 10.0, 2.5])
    assert out.min() == 0.0
    assert out.max() == 1.0
    assert out[1] == 0.0 and out[2] == 1.0


def test_normalize_preserves_order():
    values = [4.0, 1.0, 3.0, 2.0]
    assert list(np.argsort(normalize(values))) == list(np.argsort(values))


def test_normalize_constant_input_raises():
    with pytest.raises(DegenerateDataError):
        normalize([2.0, 2.0, 2.0])


def test_normalize_empty_raises():
    with pytest.raises(DegenerateDataError):
        normalize([])


# ---------- haversine ---------- #
def test_haversine_zero_distance():
    assert haversine_km(0.0, 0.0, 0.0, 0.0) == 0.0


def test_haversine_one_degree_at_equator():
    assert haversine_km(0.0, 0.0, 0.0, 1.0) == pytest.approx(111.19, abs=0.5)


def test_haversine_vectorised_matches_scalar():
    lats = np.array([10.0, 20.0, -5.0])
    lons = np.array([0.0, 3.0, 120.0])
    vec = haversine_km(1.0, 2.0, lats, lons)
    for i in range(3):
        assert vec[i] == pytest.approx(haversine_km(1.0, 2.0, lats[i], lons[i]))


def test_geopoint_from_row_and_distance():
    a = GeoPoint.from_row(["x", "0", "0"], 1, 2)
    b = GeoPoint.from_row(["y", "1", "0"], 1, 2)
    assert a == GeoPoint(0.0, 0.0)
    assert a.distance_to(b) == pytest.approx(111.19, abs=0.5)


def test_geopoint_missing_cells_anchor_at_origin():
    assert GeoPoint.from_row(["only"], 4, 5) == GeoPoint(0.0, 0.0)
    assert GeoPoint.from_row(["only"], 4, 5, ParseErrorPolicy.SKIP_ROW) is None
