from typing import Annotated

from fastapi import APIRouter, Body

from app.dependencies import AvailabilityDep
from app.schemas.offers import OfferRecord

router = APIRouter()


# Plain ``def``: the search reads the rate table and catalog from disk, so it
# runs in FastAPI's threadpool.
@router.post("/availability", response_model=list[OfferRecord])
def search_availability(
    service: AvailabilityDep,
    body: Annotated[bytes, Body(media_type="application/xml")] = b"",
) -> list[OfferRecord]:
    return service.search(body)
