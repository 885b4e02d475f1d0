"""Common types and enums shared across all models."""

from enum import Enum

from pydantic import BaseModel


class Company(str, Enum):
    """Operating company an itinerary is sold under."""

    TOURILLO = "TOURILLO"
    TRAVEL_TRAIL_HOLIDAYS = "TRAVEL_TRAIL_HOLIDAYS"

    @property
    def prefix(self) -> str:
        """Travel ID prefix for this company."""
        return _TRAVEL_ID_PREFIXES[self]

    @classmethod
    def from_travel_id(cls, travel_id: str) -> "Company | None":
        """Company whose prefix starts the travel ID, if any."""
        for company in cls:
            if travel_id.startswith(company.prefix):
                return company
        return None


_TRAVEL_ID_PREFIXES: dict[Company, str] = {
    Company.TOURILLO: "TRL",
    Company.TRAVEL_TRAIL_HOLIDAYS: "TTH",
}


class CompanyProfile(BaseModel):
    """Contact and branding details shown on itineraries and vouchers."""

    company: Company
    name: str
    short_name: str
    contact_phone: str
    support_phone: str
    email: str
    website: str


COMPANY_PROFILES: dict[Company, CompanyProfile] = {
    Company.TOURILLO: CompanyProfile(
        company=Company.TOURILLO,
        name="Tourillo Private Limited",
        short_name="Tourillo",
        contact_phone="+91 9625992025",
        support_phone="9625992025",
        email="support@tourillo.com",
        website="www.tourillo.com",
    ),
    Company.TRAVEL_TRAIL_HOLIDAYS: CompanyProfile(
        company=Company.TRAVEL_TRAIL_HOLIDAYS,
        name="Travel Trail Holidays Private Limited",
        short_name="Travel Trail Holidays",
        contact_phone="+91 9876543210",
        support_phone="9876543210",
        email="support@traveltrailholidays.com",
        website="www.traveltrailholidays.com",
    ),
}


def get_company_profile(company: Company) -> CompanyProfile:
    """Look up the profile for a company."""
    return COMPANY_PROFILES[company]
