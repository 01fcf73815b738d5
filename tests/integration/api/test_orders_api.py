"""Integration tests for customer, outlet and delivery order endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

from outletbase.domain.entities import CurrentUser

STORE_ORDERS = "/api/v1/store/orders"
OUTLETS = "/api/v1/outlets"
DELIVERY_ORDERS = "/api/v1/delivery/orders"


@pytest.fixture
def rider() -> CurrentUser:
    return CurrentUser(user_id="rider-1", email="ravi@example.com", name="Ravi")


@pytest_asyncio.fixture
async def shop(client: AsyncClient, auth_headers, make_outlet, owner) -> dict:
    """An outlet selling coffee at 35.00 (base 40) and dosa at 85.00, with one rider."""
    outlet = await make_outlet(owner)
    headers = auth_headers(owner)
    ids = {}
    for name, price in (("Filter Coffee", 40), ("Masala Dosa", 85)):
        response = await client.post(
            "/api/v1/products",
            json={"name": name, "base_price": price, "image_url": f"{name}.jpg"},
            headers=headers,
        )
        ids[name] = response.json()["id"]
    await client.post(
        f"{OUTLETS}/{outlet.id}/products",
        json={"product_id": ids["Filter Coffee"], "custom_price": "35"},
        headers=headers,
    )
    await client.post(
        f"{OUTLETS}/{outlet.id}/products",
        json={"product_id": ids["Masala Dosa"]},
        headers=headers,
    )
    response = await client.post(
        f"{OUTLETS}/{outlet.id}/delivery-agents",
        json={"name": "Ravi", "phone": "98400 00001", "email": "ravi@example.com"},
        headers=headers,
    )
    return {"outlet_id": outlet.id, "products": ids, "agent_id": response.json()["id"]}


def order_payload(shop: dict, **overrides) -> dict:
    payload = {
        "outlet_id": shop["outlet_id"],
        "customer_name": "Sam Customer",
        "customer_phone": "98410 12345",
        "customer_email": "sam@example.com",
        "delivery_address": "4 Beach Road, Chennai",
        "postal_code": "600001",
        "items": [
            {"product_id": shop["products"]["Filter Coffee"], "quantity": 2},
            {"product_id": shop["products"]["Masala Dosa"], "quantity": 1},
        ],
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def placed(client: AsyncClient, auth_headers, shop, stranger) -> dict:
    response = await client.post(
        STORE_ORDERS, json=order_payload(shop), headers=auth_headers(stranger)
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_place_order_requires_authentication(client: AsyncClient, shop):
    response = await client.post(STORE_ORDERS, json=order_payload(shop))
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_place_order_prices_from_menu(placed: dict, shop: dict):
    assert placed["status"] == "pending"
    assert placed["total_amount"] == "155.00"
    assert placed["outlet"]["id"] == shop["outlet_id"]
    lines = {item["product_name"]: item for item in placed["items"]}
    assert lines["Filter Coffee"]["price"] == "35.00"
    assert lines["Filter Coffee"]["line_total"] == "70.00"
    assert lines["Masala Dosa"]["quantity"] == 1


@pytest.mark.asyncio
async def test_client_prices_are_ignored(client: AsyncClient, auth_headers, shop, stranger):
    payload = order_payload(
        shop,
        items=[{"product_id": shop["products"]["Masala Dosa"], "quantity": 1, "price": 1}],
        total_amount=1,
    )

    response = await client.post(STORE_ORDERS, json=payload, headers=auth_headers(stranger))

    assert response.status_code == 201
    assert response.json()["total_amount"] == "85.00"


@pytest.mark.asyncio
async def test_unknown_product_is_invalid_input(client: AsyncClient, auth_headers, shop, stranger):
    payload = order_payload(shop, items=[{"product_id": "missing", "quantity": 1}])

    response = await client.post(STORE_ORDERS, json=payload, headers=auth_headers(stranger))

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_closed_outlet(client: AsyncClient, auth_headers, shop, owner, stranger):
    await client.patch(
        f"{OUTLETS}/{shop['outlet_id']}", json={"is_active": False}, headers=auth_headers(owner)
    )

    response = await client.post(
        STORE_ORDERS, json=order_payload(shop), headers=auth_headers(stranger)
    )

    assert response.status_code == 403
    assert response.json()["error"] == "outlet_closed"


@pytest.mark.asyncio
async def test_my_orders(client: AsyncClient, auth_headers, placed, stranger, owner):
    response = await client.get(STORE_ORDERS, headers=auth_headers(stranger))

    assert response.status_code == 200
    assert [o["id"] for o in response.json()["orders"]] == [placed["id"]]
    assert len(response.json()["orders"][0]["items"]) == 2
    assert (await client.get(STORE_ORDERS, headers=auth_headers(owner))).json()["total"] == 0


@pytest.mark.asyncio
async def test_outlet_orders_require_membership(
    client: AsyncClient, auth_headers, shop, placed, stranger
):
    response = await client.get(
        f"{OUTLETS}/{shop['outlet_id']}/orders", headers=auth_headers(stranger)
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_assign_rider_and_deliver(
    client: AsyncClient, auth_headers, shop, placed, owner, rider
):
    order_url = f"{OUTLETS}/{shop['outlet_id']}/orders/{placed['id']}"

    response = await client.patch(
        order_url, json={"delivery_agent_id": shop["agent_id"]}, headers=auth_headers(owner)
    )
    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    assert response.json()["delivery_agent"]["name"] == "Ravi"

    response = await client.get(
        f"{OUTLETS}/{shop['outlet_id']}/orders", headers=auth_headers(owner)
    )
    assert response.json()["orders"][0]["delivery_agent"]["phone"] == "98400 00001"

    response = await client.get(DELIVERY_ORDERS, headers=auth_headers(rider))
    assert response.status_code == 200
    assert [o["id"] for o in response.json()["orders"]] == [placed["id"]]

    response = await client.patch(
        f"{DELIVERY_ORDERS}/{placed['id']}",
        json={"status": "delivered"},
        headers=auth_headers(rider),
    )
    assert response.status_code == 200
    assert response.json()["status"] == "delivered"

    response = await client.patch(
        order_url, json={"status": "cancelled"}, headers=auth_headers(owner)
    )
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_invalid_status_is_invalid_input(
    client: AsyncClient, auth_headers, shop, placed, owner
):
    response = await client.patch(
        f"{OUTLETS}/{shop['outlet_id']}/orders/{placed['id']}",
        json={"status": "shipped"},
        headers=auth_headers(owner),
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_non_agent_cannot_use_delivery_endpoints(
    client: AsyncClient, auth_headers, placed, stranger
):
    response = await client.get(DELIVERY_ORDERS, headers=auth_headers(stranger))

    assert response.status_code == 403
    assert response.json()["message"] == "Not a delivery agent"


@pytest.mark.asyncio
async def test_rider_cannot_touch_unassigned_order(
    client: AsyncClient, auth_headers, shop, placed, rider
):
    response = await client.patch(
        f"{DELIVERY_ORDERS}/{placed['id']}",
        json={"status": "delivered"},
        headers=auth_headers(rider),
    )

    assert response.status_code == 404
