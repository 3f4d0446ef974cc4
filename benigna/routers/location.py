# benigna-api/benigna/routers/location.py
from fastapi import APIRouter, Depends, Query

from benigna.core.errors import ValidationError
from benigna.core.geocoding import GeocodingClient, get_geocoder
from benigna.models.location import LocationData, PostalAddress

router = APIRouter(prefix="/location", tags=["Location"])


@router.get("/geocode", response_model=LocationData)
async def geocode(address: str = "", geocoder: GeocodingClient = Depends(get_geocoder)):
    if not address.strip():
        raise ValidationError("Informe um endereço")
    return await geocoder.geocode(address.strip())


@router.get("/reverse", response_model=LocationData)
async def reverse_geocode(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180),
    geocoder: GeocodingClient = Depends(get_geocoder),
):
    return await geocoder.resolve_location(lat, lon)


@router.get("/cep/{zip_code}", response_model=PostalAddress)
async def lookup_zip_code(zip_code: str, geocoder: GeocodingClient = Depends(get_geocoder)):
    return await geocoder.lookup_postal_code(zip_code)
