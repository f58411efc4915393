"""FastAPI application entry point for the URL shortener service.

Application Lifecycle Diagram
===========================
::
    ┌─────────────┐
    │  uvicorn    │
    │  startup    │
    └──────┬──────┘
           ▼
    ┌──────────────┐
    │ lifespan()   │
    │ startup:     │
    │ initialize() │
    └──────┬───────┘
           ▼
    ┌─────────────┐
    │ Serve HTTP  │
    │ requests    │
    └──────┬──────┘
           ▼
    ┌─────────────┐
    │ lifespan()  │
    │ shutdown:   │
    │ cleanup()   │
    └─────────────┘

How to Use
===========
**Step 1 — Run**::
    url-shortener
    # or
    uvicorn shortener.main:app --host 0.0.0.0 --port 8080

**Step 2 — Make API calls**::
    curl -X POST http://localhost:8080/shorten \
         -H "Content-Type: application/json" \
         -d '{"long_url": "https://example.com/a/b"}'

    curl -i http://localhost:8080/1

Key Behaviours
===============
- All mappings are held in memory and lost on restart.
- Error responses share one body shape: ``{"message": "..."}``.
- Request validation failures are reported as 400, not FastAPI's default 422.
- Prometheus metrics are exposed at /metrics.
"""

__all__ = ["app", "run"]

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortener.config import get_settings
from shortener.dependencies import LOGGER_NAME, _service_manager, setup_logger
from shortener.routes import router

settings = get_settings()
logger = logging.getLogger(LOGGER_NAME)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # Startup
    _service_manager.initialize()
    logger.info(f"Base URL for short links: {settings.BASE_URL}")
    logger.info("Routes:")
    logger.info("  POST /shorten (to create a short URL)")
    logger.info("  GET /{shortCode} (to redirect to the original URL)")
    yield
    # Shutdown
    _service_manager.cleanup()


app = FastAPI(
    title=settings.APP_NAME,
    version="1.0.0",
    description="An in-memory URL shortener API",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = "; ".join(str(err.get("msg", "")) for err in errors) or "Invalid request body"
    logger.debug(f"Rejected request to {request.url.path}: {message}")
    return JSONResponse(status_code=400, content={"message": f"Invalid request body: {message}"})


Instrumentator(
    should_group_status_codes=True,
    should_ignore_untemplated=False,
    should_respect_env_var=False,
).instrument(app).expose(app, include_in_schema=False)

app.include_router(router)


def run() -> None:
    """Start uvicorn with the configured host and port."""
    setup_logger(settings.LOG_LEVEL)
    logger.info(f"Starting URL Shortener server on {settings.HOST}:{settings.PORT}")
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
