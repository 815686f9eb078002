"""Tests for the AstrologyAPI adapter against a mock transport."""

import base64
import json
from datetime import date

import httpx
import pytest

from core.clients.astrology_api import AstrologyAPIClient, basic_auth
from core.exceptions import EphemerisProviderError, ExternalServiceError, TimezoneUnresolvedError
from models.astrology import BirthEvent

BIRTH = BirthEvent(year=1990, month=6, day=15, hour=14, minute=30, birthplace="Paris, France")

PLANETS = [
    {"id": 0, "name": "Sun", "fullDegree": 84.12, "normDegree": 24.12, "sign": "Gemini", "house": 8},
    {"id": 1, "name": "Moon", "fullDegree": 215.4, "normDegree": 5.4, "sign": "Scorpio", "house": 12},
    {"id": 10, "name": "Node", "fullDegree": 311.0, "normDegree": 11.0, "sign": "Aquarius", "house": 3},
]
HOUSES = {
    "houses": [{"house": i + 1, "sign": "Capricorn" if i == 0 else None, "degree": (285 + 30 * i) % 360} for i in range(12)],
    "ascendant": 285.0,
    "midheaven": 195.0,
}


def make_client(handler):
    return AstrologyAPIClient(
        user_id="user",
        api_key="secret",
        base_url="https://astro.test/v1",
        transport=httpx.MockTransport(handler),
    )


def test_basic_auth_header():
    token = basic_auth("user", "secret").split(" ", 1)[1]
    assert base64.b64decode(token).decode() == "user:secret"


async def test_search_posts_place_and_parses_geonames():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["url"] = str(request.url)
        captured["body"] = json.loads(request.content)
        captured["auth"] = request.headers["Authorization"]
        return httpx.Response(
            200,
            json={
                "geonames": [
                    {"place_name": "Paris", "latitude": "48.85341", "longitude": "2.3488"},
                    {"place_name": "Nowhere", "latitude": "", "longitude": "2.0"},
                ]
            },
        )

    results = await make_client(handler).search("Paris, France")

    assert captured["url"] == "https://astro.test/v1/geo_details"
    assert captured["body"] == {"place": "Paris, France", "maxRows": 1}
    assert captured["auth"] == basic_auth("user", "secret")
    assert len(results) == 1
    assert results[0].latitude == pytest.approx(48.85341)
    assert results[0].display_name == "Paris"


async def test_search_with_no_geonames_returns_empty():
    client = make_client(lambda request: httpx.Response(200, json={"geonames": []}))
    assert await client.search("Atlantis") == []


async def test_search_error_keeps_upstream_text():
    client = make_client(lambda request: httpx.Response(401, text="invalid credentials"))

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.search("Paris")
    assert "invalid credentials" in exc_info.value.message


async def test_offset_for_sends_us_style_date():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"timezone": 5.5})

    offset = await make_client(handler).offset_for(28.61, 77.2, date(1990, 6, 5))

    assert offset == 5.5
    assert captured["body"] == {"latitude": 28.61, "longitude": 77.2, "date": "06-05-1990"}


async def test_offset_for_without_timezone_returns_none():
    client = make_client(lambda request: httpx.Response(200, json={"status": False}))
    assert await client.offset_for(0.0, 0.0, date(2000, 1, 1)) is None


async def test_offset_for_failure_is_timezone_unresolved():
    client = make_client(lambda request: httpx.Response(500, text="boom"))

    with pytest.raises(TimezoneUnresolvedError):
        await client.offset_for(0.0, 0.0, date(2000, 1, 1))


async def test_compute_calls_planets_then_house_cusps():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append((request.url.path, json.loads(request.content)))
        if request.url.path.endswith("planets/tropical"):
            return httpx.Response(200, json=PLANETS)
        return httpx.Response(200, json=HOUSES)

    response = await make_client(handler).compute(BIRTH, 48.85, 2.35, 2.0)

    assert [path for path, _ in requests] == ["/v1/planets/tropical", "/v1/house_cusps/tropical"]
    assert requests[0][1] == {
        "day": 15,
        "month": 6,
        "year": 1990,
        "hour": 14,
        "min": 30,
        "lat": 48.85,
        "lon": 2.35,
        "tzone": 2.0,
        "house_type": "placidus",
    }
    assert [body.name for body in response.bodies] == ["Sun", "Moon", "Node"]
    assert response.bodies[0].degree == pytest.approx(84.12)
    assert response.bodies[0].house == 8
    assert len(response.house_cusps) == 12
    assert response.house_cusps[0].sign == "Capricorn"
    assert response.raw["planets"] == PLANETS


async def test_compute_error_carries_upstream_diagnostic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, text='{"msg":"You are not authorized to access this API"}')

    with pytest.raises(EphemerisProviderError) as exc_info:
        await make_client(handler).compute(BIRTH, 48.85, 2.35, 2.0)

    error = exc_info.value
    assert error.message.startswith("AstrologyAPI planets/tropical error:")
    assert "not authorized" in error.message
    assert error.details["status_code"] == 403


async def test_compute_network_failure_is_provider_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(EphemerisProviderError):
        await make_client(handler).compute(BIRTH, 48.85, 2.35, 2.0)
