"""
Contacts API — Health Check & Service Descriptor
==================================================

What:  GET /health liveness probe and GET / service descriptor.
Who:   Docker health checks, load balancers, and humans poking at the API.

The store is in-process, so there are no dependencies to probe: if the
process can answer, it's healthy.
"""

from datetime import datetime, timezone

from fastapi import APIRouter

from app import __version__
from app.config import settings
from app.schemas.contact import HealthResponse, ServiceInfoResponse


router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="ok",
        message="Server is running",
        timestamp=datetime.now(timezone.utc),
    )


@router.get(
    "/",
    response_model=ServiceInfoResponse,
    summary="Service descriptor",
    description="Names the service and lists its main endpoint paths.",
)
async def service_info() -> ServiceInfoResponse:
    contacts_path = f"{settings.api_prefix}/contacts"
    return ServiceInfoResponse(
        message=settings.app_name,
        version=__version__,
        endpoints={
            "health": "/health",
            "contacts": contacts_path,
            "search": f"{contacts_path}/search?keyword=<keyword>",
            "stats": f"{contacts_path}/stats",
        },
    )
