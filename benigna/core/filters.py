# benigna-api/benigna/core/filters.py
"""Institution search: filtering and distance ranking over a catalogue snapshot."""
from datetime import datetime
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field

from benigna.core.geo import Coordinate, format_distance, haversine_km
from benigna.core.schedule import is_open_now
from benigna.models.institution import InstitutionInDB, InstitutionListing


class FilterOptions(BaseModel):
    search_query: Optional[str] = None
    category: Optional[str] = None
    max_distance: Optional[float] = Field(None, ge=0, description="Kilometers")
    min_rating: Optional[float] = Field(None, ge=0, le=5)
    open_now: bool = False


def _matches_query(institution: InstitutionInDB, query: str) -> bool:
    query = query.lower()
    return (
        query in institution.name.lower()
        or query in institution.address.city.lower()
        or query in institution.address.neighborhood.lower()
    )


def filter_institutions(
    institutions: Sequence[InstitutionInDB],
    options: FilterOptions,
    user_location: Optional[Coordinate] = None,
    now: Optional[datetime] = None,
) -> List[InstitutionInDB]:
    """Apply every requested criterion, then sort by distance when a location is known.

    Criteria that are empty or zero count as not requested. The distance limit
    only applies when ``user_location`` is given.
    """
    filtered = list(institutions)

    if options.search_query:
        filtered = [inst for inst in filtered if _matches_query(inst, options.search_query)]

    if options.category:
        filtered = [inst for inst in filtered if options.category in inst.accepted_categories]

    if options.max_distance and user_location is not None:
        filtered = [
            inst for inst in filtered
            if haversine_km(user_location, inst.address.coordinate) <= options.max_distance
        ]

    if options.min_rating:
        filtered = [inst for inst in filtered if inst.rating >= options.min_rating]

    if options.open_now:
        at = now or datetime.now()
        filtered = [inst for inst in filtered if is_open_now(inst.working_hours, at)]

    if user_location is not None:
        filtered.sort(key=lambda inst: haversine_km(user_location, inst.address.coordinate))

    return filtered


def build_listings(
    institutions: Sequence[InstitutionInDB],
    user_location: Optional[Coordinate] = None,
    now: Optional[datetime] = None,
) -> List[InstitutionListing]:
    at = now or datetime.now()
    listings = []
    for inst in institutions:
        data = inst.model_dump(exclude={"password_hash"})
        if user_location is not None:
            distance = haversine_km(user_location, inst.address.coordinate)
            data["distance_km"] = distance
            data["distance_label"] = format_distance(distance)
        data["open_now"] = is_open_now(inst.working_hours, at)
        listings.append(InstitutionListing.model_validate(data))
    return listings
