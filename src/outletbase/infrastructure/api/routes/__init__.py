"""API routers."""

from outletbase.infrastructure.api.routes.admins_router import router as admins_router
from outletbase.infrastructure.api.routes.delivery_agents_router import (
    router as delivery_agents_router,
)
from outletbase.infrastructure.api.routes.invitations_router import (
    outlet_invitations_router,
)
from outletbase.infrastructure.api.routes.invitations_router import (
    router as invitations_router,
)
from outletbase.infrastructure.api.routes.orders_router import (
    delivery_router,
    outlet_orders_router,
    store_orders_router,
)
from outletbase.infrastructure.api.routes.outlets_router import router as outlets_router
from outletbase.infrastructure.api.routes.products_router import outlet_products_router
from outletbase.infrastructure.api.routes.products_router import router as products_router
from outletbase.infrastructure.api.routes.store_router import router as store_router

__all__ = [
    "admins_router",
    "delivery_agents_router",
    "delivery_router",
    "invitations_router",
    "outlet_invitations_router",
    "outlet_orders_router",
    "outlet_products_router",
    "outlets_router",
    "products_router",
    "store_orders_router",
    "store_router",
]
