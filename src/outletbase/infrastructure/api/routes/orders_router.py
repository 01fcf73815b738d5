"""Order API routes.

Three audiences, three routers:

- ``store_orders_router`` (``/store/orders``): customers place and list
  their own orders.
- ``outlet_orders_router`` (``/outlets/{outlet_id}/orders``): owners and
  admins follow their outlet's orders and assign riders.
- ``delivery_router`` (``/delivery/orders``): riders see and progress the
  orders assigned to them.
"""

from fastapi import APIRouter, status

from outletbase.domain.entities import OrderCreate, OrderDetails, OrderItemInput, OrderUpdate
from outletbase.infrastructure.api.dependencies import AuthenticatedUser, Orders
from outletbase.infrastructure.api.schemas import (
    AgentOrderUpdateRequest,
    ErrorResponse,
    OrderAgentSummary,
    OrderCreateRequest,
    OrderItemResponse,
    OrderListResponse,
    OrderOutletSummary,
    OrderResponse,
    OutletOrderUpdateRequest,
)

store_orders_router = APIRouter()
outlet_orders_router = APIRouter()
delivery_router = APIRouter()


def to_order_response(details: OrderDetails) -> OrderResponse:
    order, outlet, agent = details.order, details.outlet, details.agent
    return OrderResponse(
        id=order.id,
        outlet_id=order.outlet_id,
        customer_name=order.customer_name,
        customer_phone=order.customer_phone,
        customer_email=order.customer_email,
        delivery_address=order.delivery_address,
        postal_code=order.postal_code,
        total_amount=order.total_amount,
        status=order.status,
        delivery_agent_id=order.delivery_agent_id,
        notes=order.notes,
        items=[
            OrderItemResponse(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity,
                price=item.price,
                line_total=item.line_total,
            )
            for item in details.items
        ],
        outlet=(
            OrderOutletSummary(
                id=outlet.id, name=outlet.name, address=outlet.address, phone=outlet.phone
            )
            if outlet
            else None
        ),
        delivery_agent=(
            OrderAgentSummary(id=agent.id, name=agent.name, phone=agent.phone)
            if agent
            else None
        ),
        created_at=order.created_at,
        updated_at=order.updated_at,
    )


def _list(orders: list[OrderDetails]) -> OrderListResponse:
    return OrderListResponse(orders=[to_order_response(o) for o in orders], total=len(orders))


@store_orders_router.post(
    "/orders",
    status_code=status.HTTP_201_CREATED,
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid order"},
        403: {"model": ErrorResponse, "description": "Outlet is closed"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def place_order(
    request: OrderCreateRequest,
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderResponse:
    """Place an order; prices come from the outlet's current menu."""
    data = request.model_dump(exclude={"items"})
    items = [OrderItemInput(product_id=i.product_id, quantity=i.quantity) for i in request.items]
    details = await order_service.place_order(current_user, OrderCreate(**data, items=items))
    return to_order_response(details)


@store_orders_router.get("/orders", response_model=OrderListResponse)
async def list_my_orders(
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderListResponse:
    """List the caller's orders, newest first."""
    return _list(await order_service.list_customer_orders(current_user))


@outlet_orders_router.get(
    "/{outlet_id}/orders",
    response_model=OrderListResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Not an owner or admin"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def list_outlet_orders(
    outlet_id: str,
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderListResponse:
    return _list(await order_service.list_outlet_orders(outlet_id, current_user))


@outlet_orders_router.patch(
    "/{outlet_id}/orders/{order_id}",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid status or inactive agent"},
        403: {"model": ErrorResponse, "description": "Not an owner or admin"},
        404: {"model": ErrorResponse, "description": "Order or agent not found"},
        409: {"model": ErrorResponse, "description": "Order already closed"},
    },
)
async def update_outlet_order(
    outlet_id: str,
    order_id: str,
    request: OutletOrderUpdateRequest,
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderResponse:
    """Change an order's status or assign a rider.

    Assigning a rider to a pending order without a status confirms it.
    """
    update = OrderUpdate(**request.model_dump(exclude_unset=True))
    details = await order_service.update_outlet_order(outlet_id, order_id, current_user, update)
    return to_order_response(details)


@delivery_router.get(
    "/orders",
    response_model=OrderListResponse,
    responses={403: {"model": ErrorResponse, "description": "Not a delivery agent"}},
)
async def list_assigned_orders(
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderListResponse:
    """List orders assigned to the caller as a delivery agent."""
    return _list(await order_service.list_agent_orders(current_user))


@delivery_router.patch(
    "/orders/{order_id}",
    response_model=OrderResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Status not allowed for agents"},
        403: {"model": ErrorResponse, "description": "Not a delivery agent"},
        404: {"model": ErrorResponse, "description": "Order not assigned to caller"},
        409: {"model": ErrorResponse, "description": "Order already closed"},
    },
)
async def update_assigned_order(
    order_id: str,
    request: AgentOrderUpdateRequest,
    current_user: AuthenticatedUser,
    order_service: Orders,
) -> OrderResponse:
    details = await order_service.update_agent_order(current_user, order_id, request.status)
    return to_order_response(details)
