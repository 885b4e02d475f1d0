"""Domain exception types shared by services, repositories and routes."""

from datetime import datetime


class TourDeskError(Exception):
    """Base class for domain errors."""

    pass


class ItineraryNotFoundError(TourDeskError):
    """No itinerary exists for the given travel ID."""

    def __init__(self, travel_id: str) -> None:
        super().__init__(f"Itinerary with Travel ID {travel_id} not found")
        self.travel_id = travel_id


class VoucherNotFoundError(TourDeskError):
    """No voucher exists for the given travel ID."""

    def __init__(self, travel_id: str) -> None:
        super().__init__(f"Voucher for Travel ID {travel_id} not found")
        self.travel_id = travel_id


class VoucherExistsError(TourDeskError):
    """A voucher was already issued for the travel ID."""

    def __init__(self, travel_id: str) -> None:
        super().__init__(f"Voucher already exists for Travel ID {travel_id}")
        self.travel_id = travel_id


class ClientPhoneConflictError(TourDeskError):
    """Another itinerary already uses the client phone number."""

    def __init__(self, client_phone: str, travel_id: str) -> None:
        super().__init__(f"Client phone {client_phone} is already used by itinerary {travel_id}")
        self.client_phone = client_phone
        self.travel_id = travel_id


class DuplicateTravelIdError(TourDeskError):
    """Storage rejected a travel ID that is already taken."""

    def __init__(self, travel_id: str) -> None:
        super().__init__(f"Travel ID {travel_id} already exists")
        self.travel_id = travel_id


class InvalidTravelIdError(TourDeskError):
    """A caller-supplied travel ID is malformed or has the wrong prefix."""

    pass


class TravelIdAllocationError(TourDeskError):
    """Unique identifier allocation failed after exhausting all attempts."""

    def __init__(self, company: str, attempts: int) -> None:
        super().__init__(
            f"unique identifier allocation failed for {company} after {attempts} attempts"
        )
        self.company = company
        self.attempts = attempts


class NightAllocationError(TourDeskError, ValueError):
    """Night reallocation was called with inputs that break its contract."""

    pass


class InvalidDateRangeError(TourDeskError):
    """A date range whose start is after its end."""

    def __init__(self, date_from: datetime, date_to: datetime) -> None:
        super().__init__(
            f"date_from {date_from.isoformat()} is after date_to {date_to.isoformat()}"
        )
        self.date_from = date_from
        self.date_to = date_to
