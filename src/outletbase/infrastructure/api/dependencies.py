"""FastAPI dependencies for authentication and service wiring.

Provides dependencies for extracting and validating bearer tokens and for
building the domain services on top of the request's database session.
"""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from outletbase.core.config import Settings, get_settings
from outletbase.core.logging import get_logger
from outletbase.domain.entities import CurrentUser
from outletbase.domain.exceptions import UnauthorizedError
from outletbase.domain.services import (
    DeliveryAgentService,
    Geocoder,
    InvitationService,
    OrderService,
    OutletService,
    ProductService,
    ServiceAreaResolver,
)
from outletbase.infrastructure.auth import InvalidTokenError, TokenExpiredError, jwt_service
from outletbase.infrastructure.persistence.database import get_db_session
from outletbase.infrastructure.persistence.repositories import OutletRepository
from outletbase.infrastructure.services import email_service as email_service_module
from outletbase.infrastructure.services import geocoding_service as geocoding_service_module
from outletbase.infrastructure.services.email_service import EmailService

logger = get_logger(__name__)


async def get_current_user(
    authorization: Annotated[str | None, Header()] = None,
) -> CurrentUser:
    """Extract and validate the current user from the Authorization header.

    Args:
        authorization: The Authorization header value (e.g., "Bearer <token>").

    Returns:
        CurrentUser: The authenticated identity.

    Raises:
        UnauthorizedError: If the token is missing, malformed, invalid or expired.
    """
    if authorization is None:
        logger.info("Authentication failed: missing Authorization header")
        raise UnauthorizedError("Missing Authorization header")

    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        logger.info("Authentication failed: invalid Authorization header format")
        raise UnauthorizedError("Could not validate credentials")

    try:
        payload = jwt_service.validate_access_token(parts[1])
    except TokenExpiredError:
        logger.info("Authentication failed: token expired")
        raise UnauthorizedError("Token has expired") from None
    except InvalidTokenError as e:
        logger.info("Authentication failed: invalid token", error=str(e))
        raise UnauthorizedError(f"Invalid token: {e}") from None

    return CurrentUser(
        user_id=str(payload.get("user_id") or payload["sub"]),
        email=payload["email"],
        name=payload.get("name"),
    )


# Type alias for dependency injection
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_app_settings() -> Settings:
    return get_settings()


def get_email_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> EmailService:
    """Email service for the configured provider."""
    return email_service_module.get_email_service(settings)


def get_geocoder(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Geocoder:
    """Geocoding client, or a no-op when geocoding is disabled."""
    return geocoding_service_module.get_geocoding_service(settings)


def get_service_area_resolver(
    session: DbSession,
    geocoder: Annotated[Geocoder, Depends(get_geocoder)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> ServiceAreaResolver:
    return ServiceAreaResolver(OutletRepository(session), geocoder, settings)


def get_invitation_service(
    session: DbSession,
    email_service: Annotated[EmailService, Depends(get_email_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> InvitationService:
    return InvitationService(session, email_service, settings)


def get_outlet_service(
    session: DbSession,
    geocoder: Annotated[Geocoder, Depends(get_geocoder)],
    invitation_service: Annotated[InvitationService, Depends(get_invitation_service)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> OutletService:
    return OutletService(session, geocoder, invitation_service, settings)


def get_product_service(session: DbSession) -> ProductService:
    return ProductService(session)


def get_delivery_agent_service(session: DbSession) -> DeliveryAgentService:
    return DeliveryAgentService(session)


def get_order_service(
    session: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> OrderService:
    return OrderService(session, settings)


Resolver = Annotated[ServiceAreaResolver, Depends(get_service_area_resolver)]
Invitations = Annotated[InvitationService, Depends(get_invitation_service)]
Outlets = Annotated[OutletService, Depends(get_outlet_service)]
Products = Annotated[ProductService, Depends(get_product_service)]
DeliveryAgents = Annotated[DeliveryAgentService, Depends(get_delivery_agent_service)]
Orders = Annotated[OrderService, Depends(get_order_service)]
