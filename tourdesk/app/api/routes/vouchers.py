"""Voucher endpoints - prefill, CRUD and night reallocation."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel

from tourdesk.app.api.deps import enforce_rate_limit, get_voucher_service
from tourdesk.app.api.errors import to_http_exception
from tourdesk.app.api.routes.itineraries import resolve_page_size
from tourdesk.app.errors import TourDeskError
from tourdesk.app.models.common import Company
from tourdesk.app.models.voucher import (
    NightEdit,
    NightValue,
    Voucher,
    VoucherDraft,
    VoucherHotelStay,
    VoucherPrefill,
)
from tourdesk.app.services.nights import allocate_nights
from tourdesk.app.services.vouchers import VoucherService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vouchers", tags=["vouchers"])

Service = Annotated[VoucherService, Depends(get_voucher_service)]


class VoucherListResponse(BaseModel):
    """Response for GET /vouchers."""

    vouchers: list[Voucher]
    limit: int
    offset: int


class NightAllocationResponse(BaseModel):
    """Response for POST /vouchers/allocate-nights."""

    stays: list[VoucherHotelStay]
    total_nights: int


@router.post("/allocate-nights", response_model=NightAllocationResponse)
def allocate_nights_endpoint(edit: NightEdit) -> NightAllocationResponse:
    """Apply one nights edit to an unsaved list of stays and rebalance it."""
    try:
        stays = allocate_nights(
            edit.stays, edit.edited_index, edit.requested_value, edit.total_nights
        )
    except TourDeskError as e:
        raise to_http_exception(e) from e

    return NightAllocationResponse(stays=stays, total_nights=edit.total_nights)


@router.get("/prefill/{travel_id}", response_model=VoucherPrefill)
def prefill_voucher(travel_id: str, service: Service) -> VoucherPrefill:
    """Start a voucher from an itinerary's client, nights, cabs and hotels."""
    try:
        return service.prefill(travel_id)
    except TourDeskError as e:
        raise to_http_exception(e) from e


@router.post(
    "",
    response_model=Voucher,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(enforce_rate_limit)],
)
def create_voucher(draft: VoucherDraft, service: Service) -> Voucher:
    """Issue the voucher for an itinerary.

    Raises:
        HTTPException: 404 if the itinerary is missing, 409 if a voucher exists
    """
    logger.info(f"[POST /vouchers] travel_id={draft.travel_id}")

    try:
        return service.create(draft)
    except TourDeskError as e:
        logger.warning(f"[POST /vouchers] rejected: {e}")
        raise to_http_exception(e) from e


@router.get("", response_model=VoucherListResponse)
def list_vouchers(
    service: Service,
    search: Annotated[str | None, Query(max_length=100)] = None,
    company: Company | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
    offset: Annotated[int, Query(ge=0)] = 0,
) -> VoucherListResponse:
    """List vouchers newest first, optionally for one company."""
    page_size = resolve_page_size(limit)
    vouchers = service.list_vouchers(
        search=search, company=company, limit=page_size, offset=offset
    )
    return VoucherListResponse(vouchers=vouchers, limit=page_size, offset=offset)


@router.get("/{travel_id}", response_model=Voucher)
def get_voucher(travel_id: str, service: Service) -> Voucher:
    try:
        return service.get(travel_id)
    except TourDeskError as e:
        raise to_http_exception(e) from e


@router.put(
    "/{travel_id}",
    response_model=Voucher,
    dependencies=[Depends(enforce_rate_limit)],
)
def update_voucher(travel_id: str, draft: VoucherDraft, service: Service) -> Voucher:
    logger.info(f"[PUT /vouchers/{travel_id}]")

    try:
        return service.update(travel_id, draft)
    except TourDeskError as e:
        raise to_http_exception(e) from e


@router.delete(
    "/{travel_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(enforce_rate_limit)],
)
def delete_voucher(travel_id: str, service: Service) -> Response:
    logger.info(f"[DELETE /vouchers/{travel_id}]")

    try:
        service.delete(travel_id)
    except TourDeskError as e:
        raise to_http_exception(e) from e

    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{travel_id}/nights",
    response_model=Voucher,
    dependencies=[Depends(enforce_rate_limit)],
)
def edit_voucher_nights(travel_id: str, edit: NightValue, service: Service) -> Voucher:
    """Set one stay's nights on a stored voucher; later stays are rebalanced."""
    logger.info(f"[POST /vouchers/{travel_id}/nights] index={edit.index} nights={edit.nights}")

    try:
        return service.edit_nights(travel_id, edit.index, edit.nights)
    except TourDeskError as e:
        raise to_http_exception(e) from e
