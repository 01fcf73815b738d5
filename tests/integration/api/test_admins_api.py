"""Integration tests for outlet admin endpoints."""

import pytest
import pytest_asyncio
from httpx import AsyncClient

OUTLETS = "/api/v1/outlets"


@pytest_asyncio.fixture
async def outlet(make_outlet, owner):
    return await make_outlet(owner)


@pytest_asyncio.fixture
async def admin(client: AsyncClient, auth_headers, outlet, owner, invitee, email_provider):
    """Invite and accept so the invitee becomes an admin of the outlet."""
    await client.post(
        f"{OUTLETS}/{outlet.id}/invitations",
        json={"email": invitee.email},
        headers=auth_headers(owner),
    )
    token = email_provider.sent[-1]["text"].split("?token=")[1].split()[0]
    response = await client.post(
        f"/api/v1/invitations/{token}/accept", headers=auth_headers(invitee)
    )
    assert response.status_code == 200
    return invitee


@pytest.mark.asyncio
async def test_owner_lists_admins_and_invitations(
    client: AsyncClient, auth_headers, outlet, owner, admin
):
    await client.post(
        f"{OUTLETS}/{outlet.id}/invitations",
        json={"email": "later@example.com"},
        headers=auth_headers(owner),
    )

    response = await client.get(f"{OUTLETS}/{outlet.id}/admins", headers=auth_headers(owner))

    assert response.status_code == 200
    data = response.json()
    assert [(a["user_id"], a["role"], a["is_owner"]) for a in data["admins"]] == [
        (owner.user_id, "owner", True),
        (admin.user_id, "admin", False),
    ]
    assert data["admins"][1]["name"] == "Arun Admin"
    assert [i["email"] for i in data["pending_invitations"]] == ["later@example.com"]


@pytest.mark.asyncio
async def test_admin_view_hides_invitations(
    client: AsyncClient, auth_headers, outlet, owner, admin
):
    await client.post(
        f"{OUTLETS}/{outlet.id}/invitations",
        json={"email": "later@example.com"},
        headers=auth_headers(owner),
    )

    response = await client.get(f"{OUTLETS}/{outlet.id}/admins", headers=auth_headers(admin))

    assert response.status_code == 200
    assert len(response.json()["admins"]) == 2
    assert response.json()["pending_invitations"] == []


@pytest.mark.asyncio
async def test_stranger_cannot_list_admins(client: AsyncClient, auth_headers, outlet, stranger):
    response = await client.get(f"{OUTLETS}/{outlet.id}/admins", headers=auth_headers(stranger))
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_update_admin_role(client: AsyncClient, auth_headers, outlet, owner, admin):
    url = f"{OUTLETS}/{outlet.id}/admins/{admin.user_id}"

    response = await client.patch(url, json={"role": "manager"}, headers=auth_headers(admin))
    assert response.status_code == 403

    response = await client.patch(url, json={"role": "manager"}, headers=auth_headers(owner))
    assert response.status_code == 200
    assert response.json()["role"] == "manager"


@pytest.mark.asyncio
async def test_remove_admin(client: AsyncClient, auth_headers, outlet, owner, admin):
    url = f"{OUTLETS}/{outlet.id}/admins/{admin.user_id}"

    response = await client.delete(url, headers=auth_headers(owner))
    assert response.status_code == 204

    response = await client.get(f"{OUTLETS}/{outlet.id}", headers=auth_headers(admin))
    assert response.status_code == 403

    response = await client.delete(url, headers=auth_headers(owner))
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_owner_cannot_remove_self(client: AsyncClient, auth_headers, outlet, owner):
    response = await client.delete(
        f"{OUTLETS}/{outlet.id}/admins/{owner.user_id}", headers=auth_headers(owner)
    )

    assert response.status_code == 400
    assert response.json()["error"] == "invalid_input"
