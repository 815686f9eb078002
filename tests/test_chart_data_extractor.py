"""Tests for converting ephemeris payloads into readings and cusps."""

import pytest

from utils.chart_data_extractor import extract_body_readings, extract_house_cusps


def test_planets_list():
    readings = extract_body_readings(
        [
            {"name": "Sun", "fullDegree": "84.5", "sign": "Gemini", "house": 8},
            {"name": " Moon ", "full_degree": 215.0, "sign": "", "house": "12"},
            {"name": "Chiron", "longitude": 100.0, "house": 13},
        ]
    )

    assert [r.name for r in readings] == ["Sun", "Moon", "Chiron"]
    assert readings[0].degree == pytest.approx(84.5)
    assert readings[0].house == 8
    assert readings[1].sign is None
    assert readings[1].house == 12
    assert readings[2].house is None


def test_planets_wrapped_in_dict():
    readings = extract_body_readings({"planets": [{"name": "Sun", "degree": 10}]})
    assert readings[0].degree == 10.0


def test_nameless_and_non_dict_entries_ignored():
    assert extract_body_readings([{"fullDegree": 10}, "Sun", None]) == []
    assert extract_body_readings(None) == []


def test_non_finite_degree_falls_through_to_next_key():
    reading = extract_body_readings([{"name": "Sun", "fullDegree": "nan", "degree": 12.0}])[0]
    assert reading.degree == 12.0


def test_reading_without_degree():
    reading = extract_body_readings([{"name": "Ascendant", "sign": "Leo"}])[0]
    assert reading.degree is None
    assert reading.sign == "Leo"


def test_house_cusps_sorted_and_malformed_skipped(caplog):
    payload = {
        "houses": [
            {"house": 2, "degree": 40.0, "sign": "Taurus"},
            {"house": 1, "degree": 10.0, "sign": "Aries"},
            {"house": 14, "degree": 70.0},
            {"house": 3},
        ]
    }

    with caplog.at_level("WARNING"):
        cusps = extract_house_cusps(payload)

    assert [(c.house, c.degree, c.sign) for c in cusps] == [(1, 10.0, "Aries"), (2, 40.0, "Taurus")]
    assert "Skipping malformed house cusp" in caplog.text


def test_house_cusps_bare_list():
    cusps = extract_house_cusps([{"house": 1, "degree": 0}])
    assert cusps[0].sign is None
