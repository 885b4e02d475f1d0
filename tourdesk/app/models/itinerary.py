"""Itinerary models - admin-authored trip plans identified by travel ID."""

import re
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, field_validator, model_validator

from tourdesk.app.models.common import Company

ROOM_TYPES = ["Standard", "Deluxe", "Super Deluxe", "Suite", "Luxury", "Houseboat", "Custom"]

DEFAULT_INCLUSIONS = [
    "Double Sharing",
    "Breakfast",
    "Dinner",
    "Welcome Drink",
    "WIFI",
    "TV",
    "Gym (subject to availability)",
    "Swimming Pool (subject to availability)",
    "Private Cab",
    "Full Sightseeing (as per itinerary)",
    "Cab Timing (9AM-7PM)",
    "Airport / Railway Transfer",
    "Toll & Taxes",
    "Govt. Taxes",
    "Driver Charges",
]

DEFAULT_EXCLUSIONS = [
    "Single / Triple",
    "Lunch",
    "SIC Cab",
    "Trip Supplements",
    "Anything not mentioned in Inclusions",
]

# <PREFIX><DDMMYYYY><HHmm><NNNN>
TRAVEL_ID_PATTERN = re.compile(r"^(TRL|TTH)(\d{2})(\d{2})(\d{4})(\d{2})(\d{2})(\d{4})$")
TRAVEL_ID_LENGTH = 19

_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

NonEmptyStr = Annotated[str, Field(min_length=1)]


def is_valid_travel_id(value: str, company: Company | None = None) -> bool:
    """Check that value is a well-formed travel ID, optionally for a given company."""
    match = TRAVEL_ID_PATTERN.match(value)
    if match is None:
        return False

    prefix, day, month, _, hour, minute, _ = match.groups()
    if company is not None and prefix != company.prefix:
        return False

    return 1 <= int(day) <= 31 and 1 <= int(month) <= 12 and int(hour) < 24 and int(minute) < 60


class DayPlan(BaseModel):
    """Plan for a single day of the trip."""

    day_number: int = Field(..., ge=1)
    summary: NonEmptyStr
    image_src: str = ""
    description: NonEmptyStr


class HotelPlan(BaseModel):
    """Hotel booked at one place along the trip."""

    place_name: NonEmptyStr
    place_description: NonEmptyStr
    hotel_name: NonEmptyStr
    room_type: NonEmptyStr
    room_type_custom: str | None = None
    hotel_description: NonEmptyStr

    @field_validator("room_type")
    @classmethod
    def validate_room_type(cls, v: str) -> str:
        """Ensure room type is one of the offered types."""
        if v not in ROOM_TYPES:
            raise ValueError(f"room_type must be one of {', '.join(ROOM_TYPES)}")
        return v

    @model_validator(mode="after")
    def validate_custom_room_type(self) -> "HotelPlan":
        """Custom room types need a name."""
        if self.room_type == "Custom" and not (self.room_type_custom or "").strip():
            raise ValueError("room_type_custom is required when room_type is Custom")
        return self

    @property
    def effective_room_type(self) -> str:
        """Room type as printed on the itinerary."""
        if self.room_type == "Custom" and self.room_type_custom:
            return self.room_type_custom
        return self.room_type


class ItineraryContent(BaseModel):
    """Trip content shared by drafts, stored itineraries and clones."""

    company: Company = Company.TOURILLO
    package_title: NonEmptyStr
    number_of_days: int = Field(..., ge=1)
    number_of_nights: int = Field(..., ge=0)
    number_of_hotels: int = Field(..., ge=0)
    trip_advisor_name: NonEmptyStr
    trip_advisor_number: NonEmptyStr
    cabs: NonEmptyStr
    flights: NonEmptyStr
    quote_price: float = Field(..., ge=0)
    price_per_person: float = Field(..., ge=0)
    days: list[DayPlan]
    hotels: list[HotelPlan] = Field(default_factory=list)
    inclusions: list[str] = Field(default_factory=lambda: list(DEFAULT_INCLUSIONS))
    exclusions: list[str] = Field(default_factory=lambda: list(DEFAULT_EXCLUSIONS))

    @model_validator(mode="after")
    def validate_day_and_hotel_counts(self) -> "ItineraryContent":
        """Ensure days and hotels match their declared counts."""
        if len(self.days) != self.number_of_days:
            raise ValueError(
                f"days has {len(self.days)} entries but number_of_days is {self.number_of_days}"
            )
        if len(self.hotels) != self.number_of_hotels:
            raise ValueError(
                f"hotels has {len(self.hotels)} entries "
                f"but number_of_hotels is {self.number_of_hotels}"
            )
        for position, day in enumerate(self.days, start=1):
            if day.day_number != position:
                raise ValueError(f"day at position {position} has day_number {day.day_number}")
        return self

    def content_fields(self) -> dict:
        """Dump only the fields defined on ItineraryContent."""
        return self.model_dump(include=set(ItineraryContent.model_fields))


class ItineraryDraft(ItineraryContent):
    """Itinerary as submitted by the create and edit forms."""

    client_name: NonEmptyStr
    client_phone: str = Field(..., min_length=10)
    client_email: str = ""
    travel_id: str | None = None

    @field_validator("client_email")
    @classmethod
    def validate_client_email(cls, v: str) -> str:
        """Allow empty, otherwise require a plausible address."""
        if v and not _EMAIL_PATTERN.match(v):
            raise ValueError("Invalid email")
        return v


class Itinerary(ItineraryDraft):
    """Stored itinerary."""

    travel_id: str
    created_at: datetime
    updated_at: datetime


class ItineraryCloneDraft(ItineraryContent):
    """Content copied from an existing itinerary under a freshly allocated travel ID."""

    travel_id: str
    source_travel_id: str
    client_name: str = ""
    client_phone: str = ""
    client_email: str = ""


class ItinerarySummary(BaseModel):
    """Summary of an itinerary for listing and dropdowns."""

    travel_id: str
    company: Company
    client_name: str
    client_phone: str
    client_email: str
    package_title: str
    created_at: datetime

    @classmethod
    def from_itinerary(cls, itinerary: Itinerary) -> "ItinerarySummary":
        return cls(
            travel_id=itinerary.travel_id,
            company=itinerary.company,
            client_name=itinerary.client_name,
            client_phone=itinerary.client_phone,
            client_email=itinerary.client_email,
            package_title=itinerary.package_title,
            created_at=itinerary.created_at,
        )
