"""Dashboard models - itinerary and voucher figures for the admin overview."""

from datetime import datetime

from pydantic import BaseModel, Field

from tourdesk.app.models.common import Company


class CompanyCount(BaseModel):
    company: Company
    prefix: str
    count: int


class AdvisorCount(BaseModel):
    advisor: str
    count: int


class VoucherTotals(BaseModel):
    """Totals over a set of vouchers."""

    vouchers: int = 0
    with_hotels: int = 0
    nights: int = 0
    guests: int = 0


class DashboardStats(BaseModel):
    """Itinerary and voucher figures, optionally limited to a creation date range."""

    date_from: datetime | None = None
    date_to: datetime | None = None
    total_itineraries: int
    total_vouchers: int
    itineraries_by_company: list[CompanyCount]
    itineraries_by_advisor: list[AdvisorCount] = Field(default_factory=list)
    vouchers_by_company: list[CompanyCount]
    vouchers_with_hotels: int
    vouchers_without_hotels: int
    total_voucher_nights: int
    total_voucher_guests: int
