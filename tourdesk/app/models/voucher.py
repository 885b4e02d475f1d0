"""Voucher models - hotel and transport confirmations issued for an itinerary."""

from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, Field, model_validator

NonEmptyStr = Annotated[str, Field(min_length=1)]


class VoucherHotelStay(BaseModel):
    """One hotel stay on a voucher."""

    hotel_name: str = ""
    nights: int = Field(0, ge=0)
    from_date: str = ""
    to_date: str = ""
    description: str = ""


class VoucherPrefill(BaseModel):
    """Voucher fields derived from an itinerary, before nights are distributed."""

    travel_id: NonEmptyStr
    client_name: str = ""
    adult_no: int = Field(1, ge=1)
    children_no: int = Field(0, ge=0)
    total_nights: int = Field(0, ge=0)
    hotel_stays: list[VoucherHotelStay] = Field(default_factory=list)
    cab_details: str = ""


class VoucherDraft(BaseModel):
    """Voucher as submitted by the create and edit forms."""

    travel_id: NonEmptyStr
    client_name: NonEmptyStr
    adult_no: int = Field(..., ge=1)
    children_no: int = Field(0, ge=0)
    total_nights: int = Field(..., ge=0)
    hotel_stays: list[VoucherHotelStay]
    cab_details: NonEmptyStr

    @model_validator(mode="after")
    def validate_nights_sum(self) -> "VoucherDraft":
        """Ensure hotel stay nights add up to total_nights."""
        allocated = sum(stay.nights for stay in self.hotel_stays)
        if allocated != self.total_nights:
            raise ValueError(
                f"hotel stay nights add up to {allocated} but total_nights is {self.total_nights}"
            )
        return self


class Voucher(VoucherDraft):
    """Stored voucher."""

    created_at: datetime
    updated_at: datetime


class NightEdit(BaseModel):
    """A single edit to one stay's nights, applied against a fixed total."""

    stays: list[VoucherHotelStay]
    edited_index: int
    requested_value: int
    total_nights: int


class NightValue(BaseModel):
    """New nights value for one stay of a stored voucher."""

    index: int
    nights: int
