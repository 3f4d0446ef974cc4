# benigna-api/benigna/core/geocoding.py
"""Forward/reverse geocoding (Nominatim) and postal-code lookup (ViaCEP).

Every call is single-shot with a fixed timeout. Unreachable services raise
``GeocodingError``; lookups that come back empty raise ``NotFoundError``.
"""
import logging
from typing import Any, Dict, Optional

import httpx

from benigna import config
from benigna.core.errors import GeocodingError, NotFoundError, ValidationError
from benigna.core.validation import only_digits
from benigna.models.location import LocationData, PostalAddress

logger = logging.getLogger(__name__)


def _city_from(address: Dict[str, Any]) -> Optional[str]:
    return address.get("city") or address.get("town") or address.get("village")


class GeocodingClient:
    def __init__(
        self,
        nominatim_url: str = config.NOMINATIM_URL,
        viacep_url: str = config.VIACEP_URL,
        timeout: float = config.GEOCODING_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.nominatim_url = nominatim_url.rstrip("/")
        self.viacep_url = viacep_url.rstrip("/")
        self.timeout = timeout
        self.transport = transport

    async def _get_json(self, url: str, params: Optional[Dict[str, Any]], error_message: str) -> Any:
        headers = {"User-Agent": config.GEOCODING_USER_AGENT}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(url, params=params, headers=headers)
                response.raise_for_status()
                return response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise GeocodingError(error_message) from e

    async def geocode(self, address: str) -> LocationData:
        data = await self._get_json(
            f"{self.nominatim_url}/search",
            {"format": "json", "q": address, "limit": 1, "countrycodes": "br", "addressdetails": 1},
            "Erro na busca do endereço",
        )
        if not data:
            raise NotFoundError("Endereço não encontrado")

        result = data[0]
        details = result.get("address") or {}
        return LocationData(
            latitude=float(result["lat"]),
            longitude=float(result["lon"]),
            address=result.get("display_name"),
            city=_city_from(details),
            state=details.get("state"),
        )

    async def reverse(self, latitude: float, longitude: float) -> LocationData:
        data = await self._get_json(
            f"{self.nominatim_url}/reverse",
            {"format": "json", "lat": latitude, "lon": longitude, "zoom": 18, "addressdetails": 1},
            "Erro na busca reversa",
        )
        if not data or "error" in data:
            raise NotFoundError("Endereço não encontrado")

        details = data.get("address") or {}
        return LocationData(
            latitude=latitude,
            longitude=longitude,
            address=data.get("display_name"),
            city=_city_from(details),
            state=details.get("state"),
        )

    async def resolve_location(self, latitude: float, longitude: float) -> LocationData:
        """Reverse-geocode a device position, keeping the bare coordinate on failure."""
        try:
            return await self.reverse(latitude, longitude)
        except (GeocodingError, NotFoundError) as e:
            logger.info("Reverse geocoding unavailable for %s,%s: %s", latitude, longitude, e.message)
            return LocationData(latitude=latitude, longitude=longitude)

    async def lookup_postal_code(self, zip_code: str) -> PostalAddress:
        clean = only_digits(zip_code)
        if len(clean) != 8:
            raise ValidationError("CEP deve ter 8 dígitos")

        data = await self._get_json(f"{self.viacep_url}/{clean}/json/", None, "Erro ao buscar CEP")
        if data.get("erro"):
            raise NotFoundError("CEP não encontrado")

        return PostalAddress(
            zip_code=data.get("cep") or clean,
            street=data.get("logradouro") or "",
            complement=data.get("complemento") or "",
            neighborhood=data.get("bairro") or "",
            city=data.get("localidade") or "",
            state=data.get("uf") or "",
        )


def get_geocoder() -> GeocodingClient:
    return GeocodingClient()
