"""FastAPI dependency providers for repositories, services and rate limiting."""

from functools import lru_cache
from typing import Annotated

import redis
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from tourdesk.app.config import get_settings
from tourdesk.app.db.engine import get_session
from tourdesk.app.db.inmemory import InMemoryRateLimiter
from tourdesk.app.db.repositories import (
    DashboardRepository,
    ItineraryRepository,
    RateLimiter,
    VoucherRepository,
)
from tourdesk.app.db.sql_repositories import (
    SqlDashboardRepository,
    SqlItineraryRepository,
    SqlVoucherRepository,
)
from tourdesk.app.middleware.ratelimit import RateLimitPolicy
from tourdesk.app.ratelimit import RedisRateLimiter
from tourdesk.app.services.dashboard import DashboardService
from tourdesk.app.services.itineraries import ItineraryService
from tourdesk.app.services.travel_id import TravelIdGenerator
from tourdesk.app.services.vouchers import VoucherService


def get_itinerary_repository(
    session: Annotated[Session, Depends(get_session)],
) -> ItineraryRepository:
    return SqlItineraryRepository(session)


def get_voucher_repository(
    session: Annotated[Session, Depends(get_session)],
) -> VoucherRepository:
    return SqlVoucherRepository(session)


def get_dashboard_repository(
    session: Annotated[Session, Depends(get_session)],
) -> DashboardRepository:
    return SqlDashboardRepository(session)


def get_travel_id_generator(
    itineraries: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> TravelIdGenerator:
    return TravelIdGenerator.from_settings(itineraries, get_settings())


def get_itinerary_service(
    itineraries: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
    generator: Annotated[TravelIdGenerator, Depends(get_travel_id_generator)],
) -> ItineraryService:
    return ItineraryService(itineraries, generator)


def get_voucher_service(
    vouchers: Annotated[VoucherRepository, Depends(get_voucher_repository)],
    itineraries: Annotated[ItineraryRepository, Depends(get_itinerary_repository)],
) -> VoucherService:
    return VoucherService(vouchers, itineraries)


def get_dashboard_service(
    stats: Annotated[DashboardRepository, Depends(get_dashboard_repository)],
) -> DashboardService:
    return DashboardService(stats)


@lru_cache
def get_rate_limit_policy() -> RateLimitPolicy:
    """Build the process-wide policy, counting in Redis when configured."""
    settings = get_settings()

    limiter: RateLimiter
    if settings.redis_url:
        client = redis.from_url(settings.redis_url, decode_responses=True)  # type: ignore[no-untyped-call]
        limiter = RedisRateLimiter(client)
    else:
        limiter = InMemoryRateLimiter()

    return RateLimitPolicy.from_settings(limiter, settings)


def enforce_rate_limit(request: Request) -> None:
    """Reject write requests over the per-client quota with 429."""
    client_key = request.client.host if request.client else "anonymous"
    allowed, retry_after = get_rate_limit_policy().check(
        request.method, request.url.path, client_key
    )

    if not allowed:
        raise HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail="Rate limit exceeded",
            headers={"Retry-After": str(retry_after)},
        )
