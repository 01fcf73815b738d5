"""API Schemas for request/response validation."""

from pydantic import BaseModel, Field

from outletbase.infrastructure.api.schemas.admin_schemas import (
    AdminListResponse,
    AdminResponse,
    AdminRoleUpdateRequest,
)
from outletbase.infrastructure.api.schemas.delivery_agent_schemas import (
    DeliveryAgentCreateRequest,
    DeliveryAgentListResponse,
    DeliveryAgentResponse,
    DeliveryAgentUpdateRequest,
)
from outletbase.infrastructure.api.schemas.invitation_schemas import (
    InvitationAcceptResponse,
    InvitationCreateRequest,
    InvitationPreviewResponse,
    InvitationResendResponse,
    InvitationResponse,
)
from outletbase.infrastructure.api.schemas.order_schemas import (
    AgentOrderUpdateRequest,
    OrderAgentSummary,
    OrderCreateRequest,
    OrderItemRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderOutletSummary,
    OrderResponse,
    OutletOrderUpdateRequest,
)
from outletbase.infrastructure.api.schemas.outlet_schemas import (
    OutletCreateRequest,
    OutletListResponse,
    OutletResponse,
    OutletUpdateRequest,
)
from outletbase.infrastructure.api.schemas.product_schemas import (
    OutletProductCreateRequest,
    OutletProductListResponse,
    OutletProductResponse,
    OutletProductUpdateRequest,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
)
from outletbase.infrastructure.api.schemas.store_schemas import (
    MenuItemResponse,
    MenuOutletResponse,
    MenuResponse,
    NearbyRequest,
    ServiceabilityResponse,
    ServiceableOutletResponse,
)


class ErrorResponse(BaseModel):
    """Body of every business-rule failure."""

    error: str = Field(..., description="Stable error code")
    message: str = Field(..., description="Human-readable message")


__all__ = [
    "AdminListResponse",
    "AdminResponse",
    "AdminRoleUpdateRequest",
    "AgentOrderUpdateRequest",
    "DeliveryAgentCreateRequest",
    "DeliveryAgentListResponse",
    "DeliveryAgentResponse",
    "DeliveryAgentUpdateRequest",
    "ErrorResponse",
    "InvitationAcceptResponse",
    "InvitationCreateRequest",
    "InvitationPreviewResponse",
    "InvitationResendResponse",
    "InvitationResponse",
    "MenuItemResponse",
    "MenuOutletResponse",
    "MenuResponse",
    "NearbyRequest",
    "OrderAgentSummary",
    "OrderCreateRequest",
    "OrderItemRequest",
    "OrderItemResponse",
    "OrderListResponse",
    "OrderOutletSummary",
    "OrderResponse",
    "OutletCreateRequest",
    "OutletListResponse",
    "OutletOrderUpdateRequest",
    "OutletProductCreateRequest",
    "OutletProductListResponse",
    "OutletProductResponse",
    "OutletProductUpdateRequest",
    "OutletResponse",
    "OutletUpdateRequest",
    "ProductCreateRequest",
    "ProductListResponse",
    "ProductResponse",
    "ProductUpdateRequest",
    "ServiceabilityResponse",
    "ServiceableOutletResponse",
]
