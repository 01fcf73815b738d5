"""Pydantic schemas for order endpoints.

Customers never send prices; every amount in a response was computed
from the outlet's menu when the order was placed.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field


class OrderItemRequest(BaseModel):
    product_id: str = Field(..., min_length=1, description="Catalogue product ID")
    quantity: int = Field(..., ge=1, description="Number of units")


class OrderCreateRequest(BaseModel):
    """Request schema for placing an order."""

    outlet_id: str = Field(..., min_length=1, description="Outlet to order from")
    customer_name: str = Field(..., min_length=1, max_length=255)
    customer_phone: str = Field(..., min_length=1, max_length=32)
    customer_email: EmailStr = Field(..., description="Receipt address")
    delivery_address: str = Field(..., min_length=1)
    postal_code: str = Field(..., description="Postal code of the delivery address")
    notes: str | None = Field(None, description="Instructions for the outlet")
    items: list[OrderItemRequest] = Field(..., min_length=1)


class OrderItemResponse(BaseModel):
    product_id: str | None = Field(None, description="Null once the product is deleted")
    product_name: str = Field(..., description="Name when ordered")
    quantity: int = Field(..., description="Number of units")
    price: Decimal = Field(..., description="Unit price when ordered")
    line_total: Decimal = Field(..., description="price x quantity")


class OrderOutletSummary(BaseModel):
    id: str
    name: str
    address: str
    phone: str | None = None


class OrderAgentSummary(BaseModel):
    id: str
    name: str
    phone: str


class OrderResponse(BaseModel):
    """An order with its lines."""

    id: str = Field(..., description="Order ID")
    outlet_id: str = Field(..., description="Outlet ID")
    customer_name: str
    customer_phone: str
    customer_email: str
    delivery_address: str
    postal_code: str
    total_amount: Decimal = Field(..., description="Sum of the line totals")
    status: str = Field(..., description="Order status")
    delivery_agent_id: str | None = Field(None, description="Assigned rider")
    notes: str | None = None
    items: list[OrderItemResponse] = Field(default_factory=list)
    outlet: OrderOutletSummary | None = None
    delivery_agent: OrderAgentSummary | None = None
    created_at: datetime = Field(..., description="When the order was placed")
    updated_at: datetime = Field(..., description="Last status change")


class OrderListResponse(BaseModel):
    orders: list[OrderResponse] = Field(..., description="Newest first")
    total: int = Field(..., description="Total number of orders")


class OutletOrderUpdateRequest(BaseModel):
    """Outlet-side order change.

    Assigning ``delivery_agent_id`` to a pending order without a status
    confirms it; an explicit null unassigns the rider.
    """

    status: str | None = Field(None, description="New status")
    delivery_agent_id: str | None = Field(None, description="Rider to assign")


class AgentOrderUpdateRequest(BaseModel):
    status: str = Field(..., description="out_for_delivery or delivered")
