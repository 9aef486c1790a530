"""FastAPI application."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.trips.api.routes.health import router as health_router
from backend.trips.api.routes.metrics import router as metrics_router
from backend.trips.api.routes.packages import router as packages_router
from backend.trips.config import get_settings
from backend.trips.utils.logging import configure_logging

settings = get_settings()
configure_logging(settings.log_level)

app = FastAPI(title="Trip Package API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.ui_origin],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)

# Register routes
app.include_router(health_router, tags=["health"])
app.include_router(metrics_router, tags=["metrics"])
app.include_router(packages_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint."""
    return {"message": "Trip Package API", "version": "0.1.0"}
