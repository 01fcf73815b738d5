"""Integration tests for outlet management endpoints."""

import pytest
from httpx import AsyncClient

from outletbase.domain.entities import Coordinates

OUTLETS = "/api/v1/outlets"


@pytest.fixture
def outlet_payload() -> dict:
    return {
        "name": "Adyar Bakes",
        "address": "12 Main Road, Adyar, Chennai",
        "postal_code": "600020",
        "phone": "044-2441-0000",
    }


@pytest.mark.asyncio
async def test_requires_authentication(client: AsyncClient):
    response = await client.get(OUTLETS)

    assert response.status_code == 401
    assert response.json()["error"] == "unauthorized"
    assert response.headers["WWW-Authenticate"] == "Bearer"


@pytest.mark.asyncio
async def test_rejects_malformed_token(client: AsyncClient):
    response = await client.get(OUTLETS, headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_rejects_non_bearer_scheme(client: AsyncClient):
    response = await client.get(OUTLETS, headers={"Authorization": "Basic dXNlcjpwYXNz"})
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_create_outlet_geocodes(
    client: AsyncClient, auth_headers, owner, geocoder, outlet_payload
):
    geocoder.places["600020"] = Coordinates(latitude=13.0012, longitude=80.2565)

    response = await client.post(OUTLETS, json=outlet_payload, headers=auth_headers(owner))

    assert response.status_code == 201
    data = response.json()
    assert data["name"] == "Adyar Bakes"
    assert data["owner_id"] == owner.user_id
    assert data["is_owner"] is True
    assert data["is_active"] is True
    assert data["latitude"] == 13.0012
    assert data["delivery_radius_km"] == 10.0


@pytest.mark.asyncio
async def test_create_outlet_with_admin_invitation(
    client: AsyncClient, auth_headers, owner, email_provider, outlet_payload
):
    payload = dict(outlet_payload, latitude=13.0, longitude=80.25, admin_email="chef@example.com")

    response = await client.post(OUTLETS, json=payload, headers=auth_headers(owner))

    assert response.status_code == 201
    assert [m["to"] for m in email_provider.sent] == ["chef@example.com"]

    admins = await client.get(
        f"{OUTLETS}/{response.json()['id']}/admins", headers=auth_headers(owner)
    )
    assert [i["email"] for i in admins.json()["pending_invitations"]] == ["chef@example.com"]


@pytest.mark.asyncio
async def test_create_outlet_invalid_postal_code(
    client: AsyncClient, auth_headers, owner, outlet_payload
):
    payload = dict(outlet_payload, postal_code="6000")

    response = await client.post(OUTLETS, json=payload, headers=auth_headers(owner))

    assert response.status_code == 400
    assert response.json() == {
        "error": "invalid_input",
        "message": "Postal code must be exactly 6 digits",
    }


@pytest.mark.asyncio
async def test_create_outlet_half_coordinates(
    client: AsyncClient, auth_headers, owner, outlet_payload
):
    payload = dict(outlet_payload, latitude=13.0)

    response = await client.post(OUTLETS, json=payload, headers=auth_headers(owner))

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"


@pytest.mark.asyncio
async def test_list_outlets(client: AsyncClient, auth_headers, make_outlet, owner, stranger):
    outlet = await make_outlet(owner)

    response = await client.get(OUTLETS, headers=auth_headers(owner))
    assert response.json()["total"] == 1
    assert response.json()["outlets"][0]["id"] == outlet.id

    response = await client.get(OUTLETS, headers=auth_headers(stranger))
    assert response.json() == {"outlets": [], "total": 0}


@pytest.mark.asyncio
async def test_get_outlet_access(client: AsyncClient, auth_headers, make_outlet, owner, stranger):
    outlet = await make_outlet(owner)

    response = await client.get(f"{OUTLETS}/{outlet.id}", headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["is_owner"] is True

    response = await client.get(f"{OUTLETS}/{outlet.id}", headers=auth_headers(stranger))
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"

    response = await client.get(f"{OUTLETS}/missing", headers=auth_headers(owner))
    assert response.status_code == 404
    assert response.json()["error"] == "not_found"


@pytest.mark.asyncio
async def test_patch_outlet_partial(client: AsyncClient, auth_headers, make_outlet, owner):
    outlet = await make_outlet(owner)

    response = await client.patch(
        f"{OUTLETS}/{outlet.id}",
        json={"delivery_radius_km": 5, "phone": None},
        headers=auth_headers(owner),
    )

    assert response.status_code == 200
    data = response.json()
    assert data["delivery_radius_km"] == 5.0
    assert data["phone"] is None
    assert data["name"] == "Marina Kitchen"
    assert data["latitude"] == 13.0827


@pytest.mark.asyncio
async def test_patch_is_active_requires_owner(
    client: AsyncClient, auth_headers, make_outlet, owner, stranger
):
    outlet = await make_outlet(owner)

    response = await client.patch(
        f"{OUTLETS}/{outlet.id}", json={"is_active": False}, headers=auth_headers(stranger)
    )
    assert response.status_code == 403

    response = await client.patch(
        f"{OUTLETS}/{outlet.id}", json={"is_active": False}, headers=auth_headers(owner)
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False


@pytest.mark.asyncio
@pytest.mark.parametrize("field", ["is_active", "delivery_radius_km", "name"])
async def test_patch_null_required_field_is_client_error(
    client: AsyncClient, auth_headers, make_outlet, owner, field
):
    outlet = await make_outlet(owner)

    response = await client.patch(
        f"{OUTLETS}/{outlet.id}", json={field: None}, headers=auth_headers(owner)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"

    response = await client.get(f"{OUTLETS}/{outlet.id}", headers=auth_headers(owner))
    assert response.json()["is_active"] is True


@pytest.mark.asyncio
async def test_delete_outlet(client: AsyncClient, auth_headers, make_outlet, owner, stranger):
    outlet = await make_outlet(owner)
    outlet_id = outlet.id

    response = await client.delete(f"{OUTLETS}/{outlet_id}", headers=auth_headers(stranger))
    assert response.status_code == 403

    response = await client.delete(f"{OUTLETS}/{outlet_id}", headers=auth_headers(owner))
    assert response.status_code == 204

    response = await client.get(f"{OUTLETS}/{outlet_id}", headers=auth_headers(owner))
    assert response.status_code == 404
