"""Company profile endpoint."""

from fastapi import APIRouter

from tourdesk.app.models.common import COMPANY_PROFILES, CompanyProfile

router = APIRouter(prefix="/companies", tags=["companies"])


@router.get("", response_model=list[CompanyProfile])
def list_companies() -> list[CompanyProfile]:
    """List the companies itineraries can be issued under."""
    return list(COMPANY_PROFILES.values())
