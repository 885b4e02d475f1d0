"""Itinerary endpoints - create, list, get, update, delete and clone by travel ID."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from tourdesk.app.api.deps import enforce_rate_limit, get_itinerary_service
from tourdesk.app.api.errors import to_http_exception
from tourdesk.app.config import get_settings
from tourdesk.app.errors import TourDeskError
from tourdesk.app.models.common import Company
from tourdesk.app.models.itinerary import (
    Itinerary,
    ItineraryCloneDraft,
    ItineraryDraft,
    ItinerarySummary,
)
from tourdesk.app.services.itineraries import ItineraryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/itineraries", tags=["itineraries"])

Service = Annotated[ItineraryService, Depends(get_itinerary_service)]


class ItineraryListResponse(BaseModel):
    """Response for GET /itineraries."""

    itineraries: list[ItinerarySummary]
    limit: int
    offset: int


def resolve_page_size(limit: int | None) -> int:
    """Apply the configured default and cap to a requested page size."""
    settings = get_settings()
    if limit is None:
        return settings.default_page_size
    return min(limit, settings.max_page_size)


@router.post(
    "",
    response_model=Itinerary,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
def create_itinerary(draft: ItineraryDraft, service: Service) -> Itinerary:
    """Create an itinerary; a travel ID is allocated unless the draft carries one.

    Returns:
        Stored itinerary

    Raises:
        HTTPException: 409 on phone or travel ID conflict, 422 on a malformed
            travel ID, 503 if no travel ID could be allocated
    """
    logger.info(f"[POST /itineraries] company={draft.company.value}")

    try:
        return service.create(draft)
    except TourDeskError as e:
        logger.warning(f"[POST /itineraries] rejected: {e}")
        raise to_http_exception(e) from e


@router.get("", response_model=ItineraryListResponse)
def list_itineraries(
    service: Service,
    search: Annotated[str | None, Query(max_length=100)] = None,
    company: Company | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> ItineraryListResponse:
    """List itineraries newest first, optionally filtered by search term and company."""
    page_size = resolve_page_size(limit)
    itineraries = service.list_itineraries(
        search=search, company=company, limit=page_size, offset=offset
    )
    return ItineraryListResponse(itineraries=itineraries, limit=page_size, offset=offset)


@router.get("/{travel_id}", response_model=Itinerary)
def get_itinerary(travel_id: str, service: Service) -> Itinerary:
    """Get one itinerary by travel ID."""
    try:
        return service.get(travel_id)
    except TourDeskError as e:
        raise to_http_exception(e) from e


@router.put(
    "/{travel_id}",
    response_model=Itinerary,
    dependencies=[Depends(enforce_rate_limit)],
)
def update_itinerary(travel_id: str, draft: ItineraryDraft, service: Service) -> Itinerary:
    """Update an itinerary in place. The stored travel ID and company are kept."""
    logger.info(f"[PUT /itineraries/{travel_id}]")

    try:
        return service.update(travel_id, draft)
    except TourDeskError as e:
        logger.warning(f"[PUT /itineraries/{travel_id}] rejected: {e}")
        raise to_http_exception(e) from e


@router.delete(
    "/{travel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(enforce_rate_limit)],
)
def delete_itinerary(travel_id: str, service: Service) -> Response:
    """Permanently delete an itinerary together with its voucher."""
    logger.info(f"[DELETE /itineraries/{travel_id}]")

    try:
        service.delete(travel_id)
    except TourDeskError as e:
        raise to_http_exception(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{travel_id}/clone",
    response_model=ItineraryCloneDraft,
    dependencies=[Depends(enforce_rate_limit)],
)
def clone_itinerary(
    travel_id: str,
    service: Service,
    company: Company | None = None,
) -> ItineraryCloneDraft:
    """Copy an itinerary into an unsaved draft with a fresh travel ID.

    The draft has blank client fields; submit it to POST /itineraries after
    filling them in.
    """
    logger.info(f"[POST /itineraries/{travel_id}/clone]")

    try:
        return service.clone(travel_id, company)
    except TourDeskError as e:
        logger.warning(f"[POST /itineraries/{travel_id}/clone] rejected: {e}")
        raise to_http_exception(e) from e
