"""Shared enums for the URL shortener service.

This module defines the status values used in responses and metric labels.
Using enums instead of string literals provides type safety and prevents typos.
"""

from enum import StrEnum

__all__ = ["HealthStatus", "ShortenStatus", "LookupStatus"]


class HealthStatus(StrEnum):
    """Health check status values."""

    HEALTHY = "healthy"


class ShortenStatus(StrEnum):
    """Outcome of a shorten request, used as a metric label."""

    SUCCESS = "success"
    EXISTING = "existing"
    ERROR = "error"


class LookupStatus(StrEnum):
    """Outcome of a short code lookup, used as a metric label."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
