"""Translation of domain errors into HTTP responses."""

from fastapi import HTTPException, status

from tourdesk.app.errors import (
    ClientPhoneConflictError,
    DuplicateTravelIdError,
    InvalidDateRangeError,
    InvalidTravelIdError,
    ItineraryNotFoundError,
    NightAllocationError,
    TourDeskError,
    TravelIdAllocationError,
    VoucherExistsError,
    VoucherNotFoundError,
)

_STATUS_BY_ERROR: dict[type[TourDeskError], int] = {
    ItineraryNotFoundError: status.HTTP_404_NOT_FOUND,
    VoucherNotFoundError: status.HTTP_404_NOT_FOUND,
    ClientPhoneConflictError: status.HTTP_409_CONFLICT,
    DuplicateTravelIdError: status.HTTP_409_CONFLICT,
    VoucherExistsError: status.HTTP_409_CONFLICT,
    InvalidTravelIdError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    InvalidDateRangeError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    NightAllocationError: status.HTTP_422_UNPROCESSABLE_ENTITY,
    TravelIdAllocationError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(error: TourDeskError) -> HTTPException:
    """Map a domain error onto an HTTPException with its message as detail."""
    for error_type, status_code in _STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=str(error))

    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="internal error",
    )
