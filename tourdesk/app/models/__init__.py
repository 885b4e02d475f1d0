"""Models package - re-exports for convenience."""

from tourdesk.app.models.common import COMPANY_PROFILES, Company, CompanyProfile, get_company_profile
from tourdesk.app.models.dashboard import AdvisorCount, CompanyCount, DashboardStats, VoucherTotals
from tourdesk.app.models.itinerary import (
    DEFAULT_EXCLUSIONS,
    DEFAULT_INCLUSIONS,
    ROOM_TYPES,
    DayPlan,
    HotelPlan,
    Itinerary,
    ItineraryCloneDraft,
    ItineraryContent,
    ItineraryDraft,
    ItinerarySummary,
    is_valid_travel_id,
)
from tourdesk.app.models.voucher import (
    NightEdit,
    NightValue,
    Voucher,
    VoucherDraft,
    VoucherHotelStay,
    VoucherPrefill,
)

__all__ = [
    # Common
    "Company",
    "CompanyProfile",
    "COMPANY_PROFILES",
    "get_company_profile",
    # Itinerary
    "ROOM_TYPES",
    "DEFAULT_INCLUSIONS",
    "DEFAULT_EXCLUSIONS",
    "DayPlan",
    "HotelPlan",
    "ItineraryContent",
    "ItineraryDraft",
    "Itinerary",
    "ItineraryCloneDraft",
    "ItinerarySummary",
    "is_valid_travel_id",
    # Voucher
    "VoucherHotelStay",
    "VoucherPrefill",
    "VoucherDraft",
    "Voucher",
    "NightEdit",
    "NightValue",
    # Dashboard
    "CompanyCount",
    "AdvisorCount",
    "VoucherTotals",
    "DashboardStats",
]
