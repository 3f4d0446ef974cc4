import asyncio

import httpx
import pytest

from benigna.core.errors import GeocodingError, NotFoundError, ValidationError

from conftest import make_geocoder


def run(coro):
    return asyncio.run(coro)


def unreachable(request):
    raise httpx.ConnectError("connection refused", request=request)


def test_geocode(geocoder):
    location = run(geocoder.geocode("Rio de Janeiro"))
    assert location.latitude == pytest.approx(-22.9068)
    assert location.longitude == pytest.approx(-43.1729)
    assert location.city == "Rio de Janeiro"


def test_geocode_sends_country_and_user_agent():
    seen = {}

    def handler(request):
        seen["params"] = dict(request.url.params)
        seen["agent"] = request.headers["user-agent"]
        return httpx.Response(200, json=[{"lat": "1", "lon": "2"}])

    run(make_geocoder(handler).geocode("Praça da Sé"))
    assert seen["params"]["countrycodes"] == "br"
    assert seen["params"]["limit"] == "1"
    assert seen["agent"].startswith("benigna")


def test_geocode_no_results(geocoder):
    with pytest.raises(NotFoundError, match="Endereço não encontrado"):
        run(geocoder.geocode("lugar nenhum"))


def test_geocode_network_failure():
    with pytest.raises(GeocodingError):
        run(make_geocoder(unreachable).geocode("Praça da Sé"))


def test_server_error_is_a_geocoding_error():
    geocoder = make_geocoder(lambda request: httpx.Response(503))
    with pytest.raises(GeocodingError):
        run(geocoder.reverse(-23.55, -46.63))


def test_reverse_uses_town_when_city_missing(geocoder):
    location = run(geocoder.reverse(-23.55, -46.63))
    assert location.city == "São Paulo"
    assert location.address == "Praça da Sé, São Paulo"


def test_resolve_location_degrades_to_coordinates():
    location = run(make_geocoder(unreachable).resolve_location(-23.55, -46.63))
    assert location.latitude == -23.55
    assert location.longitude == -46.63
    assert location.address is None


def test_lookup_postal_code(geocoder):
    address = run(geocoder.lookup_postal_code("01001-000"))
    assert address.street == "Praça da Sé"
    assert address.neighborhood == "Sé"
    assert address.city == "São Paulo"
    assert address.state == "SP"


def test_lookup_postal_code_errors(geocoder):
    with pytest.raises(ValidationError, match="8 dígitos"):
        run(geocoder.lookup_postal_code("0100"))
    with pytest.raises(NotFoundError, match="CEP não encontrado"):
        run(geocoder.lookup_postal_code("99999-999"))
