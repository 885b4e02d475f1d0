"""Dashboard endpoint."""

import logging
from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from tourdesk.app.api.deps import get_dashboard_service
from tourdesk.app.api.errors import to_http_exception
from tourdesk.app.errors import TourDeskError
from tourdesk.app.models.dashboard import DashboardStats
from tourdesk.app.services.dashboard import DashboardService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("", response_model=DashboardStats)
def get_dashboard(
    service: Annotated[DashboardService, Depends(get_dashboard_service)],
    date_from: datetime | None = None,
    date_to: datetime | None = None,
) -> DashboardStats:
    """Itinerary and voucher figures, limited to records created in the range when given."""
    try:
        return service.stats(date_from, date_to)
    except TourDeskError as e:
        logger.warning(f"[GET /dashboard] rejected: {e}")
        raise to_http_exception(e) from e
