"""FastAPI application."""

from fastapi import FastAPI

from tourdesk.app.api.routes.companies import router as companies_router
from tourdesk.app.api.routes.dashboard import router as dashboard_router
from tourdesk.app.api.routes.health import router as health_router
from tourdesk.app.api.routes.itineraries import router as itineraries_router
from tourdesk.app.api.routes.metrics import router as metrics_router
from tourdesk.app.api.routes.vouchers import router as vouchers_router
from tourdesk.app.config import get_settings
from tourdesk.app.utils.logging import configure_logging

configure_logging(get_settings())

app = FastAPI(title="Tour Desk API", version="0.1.0")

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(companies_router, tags=["companies"])
app.include_router(itineraries_router, tags=["itineraries"])
app.include_router(vouchers_router, tags=["vouchers"])
app.include_router(dashboard_router, tags=["dashboard"])


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Tour Desk API", "version": "0.1.0"}
