"""Outbound services: tokens, geocoding and email."""

from outletbase.infrastructure.services.email_service import (
    EmailResult,
    EmailService,
    get_email_service,
)
from outletbase.infrastructure.services.geocoding_service import (
    DisabledGeocodingService,
    GeocodingService,
    get_geocoding_service,
)
from outletbase.infrastructure.services.token_service import TokenService, token_service

__all__ = [
    "DisabledGeocodingService",
    "EmailResult",
    "EmailService",
    "GeocodingService",
    "TokenService",
    "get_email_service",
    "get_geocoding_service",
    "token_service",
]
