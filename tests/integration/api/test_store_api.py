"""Integration tests for the public serviceability endpoints."""

import pytest
from httpx import AsyncClient

from outletbase.core.config import Settings
from outletbase.domain.entities import Coordinates
from outletbase.domain.services.service_area_resolver import NOT_SERVICEABLE_MESSAGE
from outletbase.infrastructure.api.app import app
from outletbase.infrastructure.api.dependencies import get_app_settings

NEARBY = "/api/v1/store/nearby"
CHECK = "/api/v1/store/check-postal-code"
STORE = "/api/v1/store"


@pytest.mark.asyncio
async def test_nearby_returns_outlet_in_radius(client: AsyncClient, make_outlet, owner):
    outlet = await make_outlet(owner)
    await make_outlet(owner, name="Bengaluru Bowl", latitude=12.9716, longitude=77.5946)

    response = await client.post(NEARBY, json={"latitude": 13.06, "longitude": 80.25})

    assert response.status_code == 200
    data = response.json()
    assert data["serviceable"] is True
    assert data["message"] is None
    assert [o["id"] for o in data["outlets"]] == [outlet.id]
    assert data["outlets"][0]["distance_km"] == pytest.approx(3.38, abs=0.01)
    assert data["outlets"][0]["name"] == "Marina Kitchen"


@pytest.mark.asyncio
async def test_nearby_orders_by_distance(client: AsyncClient, make_outlet, owner):
    far = await make_outlet(owner, name="Far Kitchen", latitude=13.10, longitude=80.29)
    near = await make_outlet(owner, name="Near Kitchen", latitude=13.061, longitude=80.251)

    response = await client.post(NEARBY, json={"latitude": 13.06, "longitude": 80.25})

    distances = [o["distance_km"] for o in response.json()["outlets"]]
    assert [o["id"] for o in response.json()["outlets"]] == [near.id, far.id]
    assert distances == sorted(distances)


@pytest.mark.asyncio
async def test_nearby_accepts_numeric_strings(client: AsyncClient, make_outlet, owner):
    await make_outlet(owner)

    response = await client.post(NEARBY, json={"latitude": "13.06", "longitude": "80.25"})

    assert response.status_code == 200
    assert response.json()["serviceable"] is True


@pytest.mark.asyncio
async def test_nearby_max_distance_caps_results(client: AsyncClient, make_outlet, owner):
    await make_outlet(owner)

    response = await client.post(
        NEARBY, json={"latitude": 13.06, "longitude": 80.25, "max_distance_km": 2}
    )

    assert response.json() == {
        "serviceable": False,
        "outlets": [],
        "message": NOT_SERVICEABLE_MESSAGE,
    }


@pytest.mark.asyncio
async def test_nearby_skips_inactive_outlets(client: AsyncClient, make_outlet, owner):
    await make_outlet(owner, is_active=False)

    response = await client.post(NEARBY, json={"latitude": 13.06, "longitude": 80.25})

    assert response.status_code == 200
    assert response.json()["serviceable"] is False


@pytest.mark.asyncio
async def test_nearby_out_of_range(client: AsyncClient, make_outlet, owner):
    await make_outlet(owner)

    response = await client.post(NEARBY, json={"latitude": 28.6139, "longitude": 77.2090})

    assert response.status_code == 200
    assert response.json()["message"] == NOT_SERVICEABLE_MESSAGE


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"latitude": "abc", "longitude": 80.25},
        {"latitude": 95, "longitude": 80.25},
        {"latitude": 13.06, "longitude": -181},
    ],
)
async def test_nearby_invalid_coordinates(client: AsyncClient, payload):
    response = await client.post(NEARBY, json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"
    assert response.json()["message"]


@pytest.mark.asyncio
async def test_nearby_rejects_non_positive_cap(client: AsyncClient):
    response = await client.post(
        NEARBY, json={"latitude": 13.06, "longitude": 80.25, "max_distance_km": 0}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_check_postal_code_geocodes(client: AsyncClient, make_outlet, owner, geocoder):
    outlet = await make_outlet(owner, postal_code="600001")
    geocoder.places["600002"] = Coordinates(latitude=13.06, longitude=80.25)

    response = await client.get(CHECK, params={"postal_code": "600002"})

    assert response.status_code == 200
    data = response.json()
    assert data["serviceable"] is True
    assert data["outlets"][0]["id"] == outlet.id
    assert data["outlets"][0]["distance_km"] == pytest.approx(3.38, abs=0.01)
    assert geocoder.calls == [("", "600002")]


@pytest.mark.asyncio
async def test_check_postal_code_includes_postal_only_outlets(
    client: AsyncClient, make_outlet, owner, geocoder
):
    located = await make_outlet(owner)
    unlocated = await make_outlet(
        owner, name="Corner Stall", postal_code="600002", latitude=None, longitude=None
    )
    geocoder.places["600002"] = Coordinates(latitude=13.06, longitude=80.25)

    response = await client.get(CHECK, params={"postal_code": "600002"})

    outlets = response.json()["outlets"]
    assert [o["id"] for o in outlets] == [located.id, unlocated.id]
    assert outlets[1]["distance_km"] is None


@pytest.mark.asyncio
async def test_unresolvable_postal_code_is_not_serviceable(client: AsyncClient, make_outlet, owner):
    await make_outlet(owner)

    response = await client.get(CHECK, params={"postal_code": "999999"})

    assert response.status_code == 200
    assert response.json() == {
        "serviceable": False,
        "outlets": [],
        "message": NOT_SERVICEABLE_MESSAGE,
    }


@pytest.mark.asyncio
@pytest.mark.parametrize("postal_code", ["12345", "1234567", "60000A", "  "])
async def test_malformed_postal_code(client: AsyncClient, postal_code):
    response = await client.get(CHECK, params={"postal_code": postal_code})

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_postal_mode_matches_exact_code(client: AsyncClient, make_outlet, owner, geocoder):
    app.dependency_overrides[get_app_settings] = lambda: Settings(
        _env_file=None, service_area_mode="postal"
    )
    outlet = await make_outlet(owner, postal_code="600001")
    await make_outlet(owner, name="Elsewhere", postal_code="600002")

    response = await client.get(CHECK, params={"postal_code": " 600001 "})

    data = response.json()
    assert [o["id"] for o in data["outlets"]] == [outlet.id]
    assert data["outlets"][0]["distance_km"] is None
    assert geocoder.calls == []


@pytest.mark.asyncio
async def test_menu_is_public(client: AsyncClient, auth_headers, make_outlet, owner):
    outlet = await make_outlet(owner)
    headers = auth_headers(owner)
    product = await client.post(
        "/api/v1/products",
        json={"name": "Filter Coffee", "base_price": 40, "image_url": "coffee.jpg"},
        headers=headers,
    )
    await client.post(
        f"/api/v1/outlets/{outlet.id}/products",
        json={"product_id": product.json()["id"], "custom_price": "35"},
        headers=headers,
    )

    response = await client.get(f"{STORE}/{outlet.id}/menu")

    assert response.status_code == 200
    data = response.json()
    assert data["outlet"]["name"] == outlet.name
    assert [(i["name"], i["price"]) for i in data["items"]] == [("Filter Coffee", "35.00")]


@pytest.mark.asyncio
async def test_menu_of_closed_outlet(client: AsyncClient, make_outlet, owner):
    outlet = await make_outlet(owner, is_active=False)

    response = await client.get(f"{STORE}/{outlet.id}/menu")

    assert response.status_code == 403
    assert response.json() == {"error": "outlet_closed", "message": "Outlet is currently closed"}


@pytest.mark.asyncio
async def test_menu_of_unknown_outlet(client: AsyncClient):
    response = await client.get(f"{STORE}/missing/menu")
    assert response.status_code == 404
