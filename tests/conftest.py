from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
import pytest
from fastapi.testclient import TestClient

from benigna.core.geocoding import GeocodingClient, get_geocoder
from benigna.core.schedule import local_now
from benigna.db.repository import InMemoryRepository
from benigna.db.session import get_repository
from benigna.models.institution import Address, InstitutionInDB

# A Monday morning in São Paulo
FIXED_NOW = datetime(2024, 3, 4, 10, 0, tzinfo=ZoneInfo("America/Sao_Paulo"))

DONOR_CPF = "52998224725"
OTHER_CPF = "11144477735"
INSTITUTION_CNPJ = "11222333000181"
OTHER_CNPJ = "11444777000161"


def make_institution(name="Casa Aurora", latitude=-23.55, longitude=-46.63, **overrides):
    address = Address(
        street="Rua das Flores",
        number="100",
        neighborhood=overrides.pop("neighborhood", "Centro"),
        city=overrides.pop("city", "São Paulo"),
        state="SP",
        zip_code="01001000",
        latitude=latitude,
        longitude=longitude,
    )
    data = dict(
        name=name,
        email=overrides.pop("email", f"{name.lower().replace(' ', '.')}@benigna.org"),
        phone="11988887777",
        type="institution",
        password_hash="x",
        description="Acolhimento e distribuição de doações",
        address=address,
    )
    data.update(overrides)
    return InstitutionInDB(**data)


def nominatim_handler(request: httpx.Request) -> httpx.Response:
    if request.url.host == "viacep.test":
        if "99999999" in request.url.path:
            return httpx.Response(200, json={"erro": True})
        return httpx.Response(200, json={
            "cep": "01001-000",
            "logradouro": "Praça da Sé",
            "complemento": "lado ímpar",
            "bairro": "Sé",
            "localidade": "São Paulo",
            "uf": "SP",
        })
    if request.url.path == "/search":
        if request.url.params.get("q") == "lugar nenhum":
            return httpx.Response(200, json=[])
        return httpx.Response(200, json=[{
            "lat": "-22.9068",
            "lon": "-43.1729",
            "display_name": "Rio de Janeiro, Brasil",
            "address": {"city": "Rio de Janeiro", "state": "Rio de Janeiro"},
        }])
    if request.url.path == "/reverse":
        return httpx.Response(200, json={
            "display_name": "Praça da Sé, São Paulo",
            "address": {"town": "São Paulo", "state": "São Paulo"},
        })
    return httpx.Response(404)


def make_geocoder(handler=nominatim_handler) -> GeocodingClient:
    return GeocodingClient(
        nominatim_url="https://nominatim.test",
        viacep_url="https://viacep.test/ws",
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def repo():
    return InMemoryRepository()


@pytest.fixture
def geocoder():
    return make_geocoder()


@pytest.fixture
def client(repo, geocoder):
    from benigna.main import app

    app.dependency_overrides[get_repository] = lambda: repo
    app.dependency_overrides[get_geocoder] = lambda: geocoder
    app.dependency_overrides[local_now] = lambda: FIXED_NOW
    yield TestClient(app)
    app.dependency_overrides.clear()
