"""FastAPI route definitions for the URL shortener REST API.

API Endpoint Overview
=====================
::
    GET  /health
        └─ HealthResponse (200)

    POST /shorten
        ├─ ShortenRequest (request body)
        └─ ShortenResponse (201) or 400/500

    GET|PUT|PATCH|DELETE /shorten
        └─ 405

    GET  /
        └─ 400 (no short code)

    GET  /:short_code
        └─ 301 Redirect or 404/500

Request Flow Diagram
====================
::
    ┌─────────────┐
    │  HTTP       │
    │  Request    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Validate &  │
    │ Parse       │
    │ (Pydantic)  │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Inject      │
    │ Service     │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ Call Service│
    │ (threadpool)│
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ HTTP        │
    │ Response    │
    └─────────────┘

Key Behaviours
===============
- Handlers are plain ``def`` functions, so FastAPI runs them in its worker
  thread pool; the core is synchronous and never awaits.
- ShortCodeNotFoundError maps to 404; every other service error maps to 500.
- 301 redirects tell clients the mapping is permanent.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse

from shortener.dependencies import ServiceManager, get_service_manager, get_shortening_service
from shortener.enums import HealthStatus
from shortener.exceptions import ShortCodeNotFoundError, ShortenerError
from shortener.schemas import ErrorResponse, HealthResponse, ShortenRequest, ShortenResponse
from shortener.service import ShorteningService

__all__ = ["router"]

router = APIRouter()

_error_responses = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/health", response_model=HealthResponse, tags=["health"])
def health_check(manager: ServiceManager = Depends(get_service_manager)) -> HealthResponse:
    manager.logger.debug("Health check requested")
    return HealthResponse(status=HealthStatus.HEALTHY, records=len(manager.store))


@router.post(
    "/shorten",
    response_model=ShortenResponse,
    status_code=201,
    responses=_error_responses,
    tags=["urls"],
)
def shorten_url(
    payload: ShortenRequest,
    manager: ServiceManager = Depends(get_service_manager),
    service: ShorteningService = Depends(get_shortening_service),
) -> ShortenResponse:
    manager.logger.info(f"URL shortening requested: {payload.long_url}")

    try:
        short_code = service.shorten_url(payload.long_url)
    except ShortenerError as exc:
        manager.logger.error(f"URL shortening failed: {exc}")
        raise HTTPException(status_code=500, detail=f"Failed to shorten URL: {exc}") from exc

    return ShortenResponse(short_url=f"{manager.settings.BASE_URL}{short_code}")


# Without this, non-POST requests to /shorten would fall through to /{short_code}
@router.api_route(
    "/shorten",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
def shorten_method_not_allowed() -> None:
    raise HTTPException(status_code=405, detail="Method Not Allowed", headers={"Allow": "POST"})


@router.get("/", responses=_error_responses, tags=["redirect"])
def missing_short_code() -> None:
    raise HTTPException(status_code=400, detail="Short code not provided in URL path")


@router.get("/{short_code}", responses=_error_responses, tags=["redirect"])
def redirect_to_url(
    short_code: str,
    manager: ServiceManager = Depends(get_service_manager),
    service: ShorteningService = Depends(get_shortening_service),
) -> RedirectResponse:
    try:
        long_url = service.get_long_url(short_code)
    except ShortCodeNotFoundError as exc:
        manager.logger.warning(f"Redirect failed - short code not found: {short_code}")
        raise HTTPException(status_code=404, detail="Short URL not found") from exc
    except ShortenerError as exc:
        manager.logger.error(f"Redirect failed for {short_code}: {exc}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve long URL: {exc}") from exc

    manager.logger.info(f"Redirect: {short_code} -> {long_url}")
    return RedirectResponse(url=long_url, status_code=301)
