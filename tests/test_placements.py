"""Tests for assembling placements from an ephemeris response."""

import pytest

from core.exceptions import IncompleteEphemerisDataError, IncompletePlacementsError
from models.astrology import BodyReading, EphemerisResponse, HouseCusp
from services.placements import assemble_placements, find_reading, rising_sign
from services.zodiac import house_of, sign_of
from tests.conftest import make_cusps


def test_big_three(paris_birth, paris, ephemeris):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    assert result.big_three.model_dump() == {"sun": "Gemini", "moon": "Scorpio", "rising": "Capricorn"}


def test_upstream_payloads_are_carried_forward(paris_birth, paris, ephemeris):
    raw = {"planets": [{"name": "Sun"}], "house_cusps": {"houses": []}}

    result = assemble_placements(paris_birth, paris, 2.0, ephemeris.model_copy(update={"raw": raw}))

    assert result.raw == raw


def test_placement_order_and_omitted_bodies(paris_birth, paris, ephemeris):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    assert [point.name for point in result.placements] == [
        "Sun",
        "Moon",
        "Mercury",
        "Venus",
        "North Node",
        "South Node",
    ]


def test_derives_missing_sign_and_house_from_degree(paris_birth, paris, ephemeris, cusps):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    sun = result.placement("Sun")
    assert sun.sign == "Gemini"
    assert sun.house == house_of(75.0, cusps) == 6
    assert sun.house_degraded is False


def test_keeps_provider_sign_and_house(paris_birth, paris, ephemeris):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    mercury = result.placement("Mercury")
    assert mercury.sign == "Gemini"
    assert mercury.house == 5


def test_south_node_is_derived_independently(paris_birth, paris, ephemeris, cusps):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    north = result.placement("North Node")
    south = result.placement("South Node")
    assert north.degree == pytest.approx(10.0)
    assert south.degree == pytest.approx(190.0)
    assert south.sign == sign_of(190.0) == "Libra"
    assert south.house == house_of(190.0, cusps)
    assert south.sign != north.sign
    assert south.house != north.house


def test_south_node_ignores_north_node_provider_fields(paris_birth, paris, cusps):
    ephemeris = EphemerisResponse(
        bodies=[
            BodyReading(name="Sun", degree=75.0),
            BodyReading(name="Moon", degree=215.0),
            BodyReading(name="True Node", degree=10.0, sign="Aries", house=3),
        ],
        house_cusps=cusps,
    )

    south = assemble_placements(paris_birth, paris, 2.0, ephemeris).placement("South Node")

    assert south.sign == "Libra"
    assert south.house == house_of(190.0, cusps)


def test_north_node_without_degree_is_incomplete(paris_birth, paris, cusps):
    ephemeris = EphemerisResponse(
        bodies=[
            BodyReading(name="Sun", degree=75.0),
            BodyReading(name="Moon", degree=215.0),
            BodyReading(name="North Node", sign="Aries"),
        ],
        house_cusps=cusps,
    )

    with pytest.raises(IncompleteEphemerisDataError):
        assemble_placements(paris_birth, paris, 2.0, ephemeris)


def test_missing_north_node_is_incomplete(paris_birth, paris, cusps):
    ephemeris = EphemerisResponse(
        bodies=[BodyReading(name="Sun", degree=75.0), BodyReading(name="Moon", degree=215.0)],
        house_cusps=cusps,
    )

    with pytest.raises(IncompleteEphemerisDataError):
        assemble_placements(paris_birth, paris, 2.0, ephemeris)


def test_missing_moon_is_incomplete_placements(paris_birth, paris, cusps):
    ephemeris = EphemerisResponse(
        bodies=[BodyReading(name="Sun", degree=75.0), BodyReading(name="Node", degree=10.0)],
        house_cusps=cusps,
    )

    with pytest.raises(IncompletePlacementsError) as exc_info:
        assemble_placements(paris_birth, paris, 2.0, ephemeris)
    assert exc_info.value.details == {"missing": ["Moon"]}


def test_missing_first_house_is_incomplete_placements(paris_birth, paris):
    ephemeris = EphemerisResponse(
        bodies=[
            BodyReading(name="Sun", degree=75.0),
            BodyReading(name="Moon", degree=215.0),
            BodyReading(name="Node", degree=10.0),
        ],
        house_cusps=make_cusps()[1:],
    )

    with pytest.raises(IncompletePlacementsError) as exc_info:
        assemble_placements(paris_birth, paris, 2.0, ephemeris)
    assert exc_info.value.details == {"missing": ["Rising"]}


def test_incomplete_cusps_leave_houses_empty(paris_birth, paris):
    cusps = [HouseCusp(house=1, degree=100.0, sign="Cancer")]
    ephemeris = EphemerisResponse(
        bodies=[
            BodyReading(name="Sun", degree=75.0),
            BodyReading(name="Moon", degree=215.0, house=4),
            BodyReading(name="Node", degree=10.0),
        ],
        house_cusps=cusps,
    )

    result = assemble_placements(paris_birth, paris, 2.0, ephemeris)

    assert result.big_three.rising == "Cancer"
    assert result.placement("Sun").house is None
    assert result.placement("Moon").house == 4
    assert result.placement("South Node").house is None


def test_rising_sign_falls_back_to_cusp_degree():
    cusps = make_cusps(first=100.0)
    assert rising_sign(cusps) == "Cancer"


def test_rising_sign_title_cases_provider_value():
    cusps = [HouseCusp(house=1, degree=0.0, sign="CAPRICORN")]
    assert rising_sign(cusps) == "Capricorn"


def test_find_reading_is_case_insensitive():
    bodies = [BodyReading(name="SUN", degree=1.0), BodyReading(name="node", degree=2.0)]
    assert find_reading(bodies, "Sun").degree == 1.0
    assert find_reading(bodies, "North Node").degree == 2.0
    assert find_reading(bodies, "Pluto") is None


def test_meta_records_inputs(paris_birth, paris, ephemeris):
    result = assemble_placements(paris_birth, paris, 2.0, ephemeris, resolved_query="Paris")

    assert result.meta.house_system == "placidus"
    assert result.meta.latitude == paris.latitude
    assert result.meta.utc_offset == 2.0
    assert result.meta.resolved_query == "Paris"
