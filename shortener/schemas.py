"""Pydantic schemas for request/response validation in the URL shortener.

Schema Hierarchy
=================
::
    ShortenRequest (Input)
    └─ long_url: str (validated http/https URL)

    ShortenResponse (Output)
    └─ short_url: str (BASE_URL + short code)

    ErrorResponse (Output)
    └─ message: str

    HealthResponse (Output)
    ├─ status: HealthStatus
    └─ records: int

Key Behaviours
===============
- URL validation uses the validators library, plus an explicit check that
  the scheme is http or https.
- Empty URLs are rejected.
"""

import validators
from pydantic import BaseModel, Field, field_validator

from shortener.enums import HealthStatus

__all__ = [
    "ALLOWED_SCHEMES",
    "ShortenRequest",
    "ShortenResponse",
    "ErrorResponse",
    "HealthResponse",
]

ALLOWED_SCHEMES = ("http://", "https://")


class ShortenRequest(BaseModel):
    long_url: str = Field(..., description="URL to shorten, e.g. 'https://example.com/a/b'")

    @field_validator("long_url")
    @classmethod
    def validate_long_url(cls, v: str) -> str:
        if not v:
            raise ValueError("long_url must not be empty")
        if not v.lower().startswith(ALLOWED_SCHEMES) or not validators.url(v):
            raise ValueError("Invalid or empty 'long_url' provided. Must be a valid http(s) URL.")
        return v


class ShortenResponse(BaseModel):
    short_url: str


class ErrorResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    status: HealthStatus
    records: int
