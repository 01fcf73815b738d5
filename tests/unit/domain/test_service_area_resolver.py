"""Unit tests for ServiceAreaResolver."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from outletbase.core.config import Settings
from outletbase.domain.entities import Coordinates
from outletbase.domain.exceptions import InvalidInputError, LocationNotResolvableError
from outletbase.domain.services.service_area_resolver import (
    NOT_SERVICEABLE_MESSAGE,
    ServiceAreaResolver,
)
from outletbase.infrastructure.persistence.models import OutletModel

T0 = datetime(2026, 3, 1, 9, 0, tzinfo=timezone.utc)
CUSTOMER = Coordinates(13.0600, 80.2500)


def outlet(
    outlet_id: str,
    latitude: float | None,
    longitude: float | None,
    radius: float = 10.0,
    postal_code: str = "600001",
    created_offset_s: int = 0,
) -> OutletModel:
    return OutletModel(
        id=outlet_id,
        name=f"Outlet {outlet_id}",
        address="Somewhere",
        postal_code=postal_code,
        latitude=latitude,
        longitude=longitude,
        delivery_radius_km=radius,
        owner_id="owner-1",
        is_active=True,
        created_at=T0 + timedelta(seconds=created_offset_s),
    )


def make_resolver(mode: str = "geo", with_coords=(), by_postal=(), geocoded=None):
    repo = AsyncMock()
    repo.list_active_with_coordinates.return_value = list(with_coords)
    repo.list_active_by_postal_code.return_value = list(by_postal)
    geocoder = AsyncMock()
    geocoder.resolve.return_value = geocoded
    settings = Settings(_env_file=None, service_area_mode=mode)
    return ServiceAreaResolver(repo, geocoder, settings), repo, geocoder


class TestResolveByCoordinates:
    @pytest.mark.asyncio
    async def test_includes_outlet_within_radius(self):
        marina = outlet("marina", 13.0827, 80.2707)
        resolver, _, _ = make_resolver(with_coords=[marina])

        matches = await resolver.resolve_by_coordinates(CUSTOMER)

        assert [m.outlet.id for m in matches] == ["marina"]
        assert matches[0].distance_km == pytest.approx(3.38, abs=0.01)

    @pytest.mark.asyncio
    async def test_excludes_outlet_beyond_its_radius(self):
        small = outlet("small", 13.0827, 80.2707, radius=2.0)
        resolver, _, _ = make_resolver(with_coords=[small])

        assert await resolver.resolve_by_coordinates(CUSTOMER) == []

    @pytest.mark.asyncio
    async def test_radius_boundary_is_inclusive(self):
        exact = outlet("exact", 13.0827, 80.2707, radius=3.38)
        resolver, _, _ = make_resolver(with_coords=[exact])

        matches = await resolver.resolve_by_coordinates(CUSTOMER)
        assert [m.outlet.id for m in matches] == ["exact"]

    @pytest.mark.asyncio
    async def test_sorted_nearest_first(self):
        far = outlet("far", 13.0827, 80.2707, created_offset_s=0)
        near = outlet("near", 13.0610, 80.2510, created_offset_s=10)
        mid = outlet("mid", 13.0700, 80.2600, created_offset_s=5)
        resolver, _, _ = make_resolver(with_coords=[far, near, mid])

        matches = await resolver.resolve_by_coordinates(CUSTOMER)

        assert [m.outlet.id for m in matches] == ["near", "mid", "far"]
        distances = [m.distance_km for m in matches]
        assert distances == sorted(distances)

    @pytest.mark.asyncio
    async def test_equal_distances_ordered_by_creation_then_id(self):
        later = outlet("a-later", 13.0827, 80.2707, created_offset_s=60)
        earlier = outlet("z-earlier", 13.0827, 80.2707, created_offset_s=0)
        same_time_b = outlet("b-same", 13.0827, 80.2707, created_offset_s=30)
        same_time_a = outlet("a-same", 13.0827, 80.2707, created_offset_s=30)
        resolver, _, _ = make_resolver(with_coords=[later, same_time_b, earlier, same_time_a])

        matches = await resolver.resolve_by_coordinates(CUSTOMER)

        assert [m.outlet.id for m in matches] == ["z-earlier", "a-same", "b-same", "a-later"]

    @pytest.mark.asyncio
    async def test_max_distance_override_narrows_results(self):
        near = outlet("near", 13.0610, 80.2510)
        far = outlet("far", 13.0827, 80.2707)
        resolver, _, _ = make_resolver(with_coords=[near, far])

        matches = await resolver.resolve_by_coordinates(CUSTOMER, max_distance_km=1.0)

        assert [m.outlet.id for m in matches] == ["near"]

    @pytest.mark.asyncio
    async def test_max_distance_cannot_widen_outlet_radius(self):
        small = outlet("small", 13.0827, 80.2707, radius=2.0)
        resolver, _, _ = make_resolver(with_coords=[small])

        assert await resolver.resolve_by_coordinates(CUSTOMER, max_distance_km=50.0) == []

    @pytest.mark.asyncio
    async def test_non_positive_max_distance_rejected(self):
        resolver, _, _ = make_resolver()
        with pytest.raises(InvalidInputError):
            await resolver.resolve_by_coordinates(CUSTOMER, max_distance_km=0)


class TestResolveByPostalCode:
    @pytest.mark.asyncio
    async def test_postal_mode_exact_match_only(self):
        a = outlet("a", None, None, postal_code="600001")
        resolver, repo, geocoder = make_resolver(mode="postal", by_postal=[a])

        matches = await resolver.resolve_by_postal_code("600001")

        assert [m.outlet.id for m in matches] == ["a"]
        assert matches[0].distance_km is None
        repo.list_active_by_postal_code.assert_awaited_once_with("600001")
        geocoder.resolve.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_postal_code_rejected(self):
        resolver, repo, _ = make_resolver()
        with pytest.raises(InvalidInputError):
            await resolver.resolve_by_postal_code("6000")
        repo.list_active_by_postal_code.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_geo_mode_unresolvable_raises(self):
        resolver, _, geocoder = make_resolver(geocoded=None)

        with pytest.raises(LocationNotResolvableError):
            await resolver.resolve_by_postal_code("600001")
        geocoder.resolve.assert_awaited_once_with("", "600001")

    @pytest.mark.asyncio
    async def test_geo_mode_distance_matches_before_postal_only(self):
        with_coords = outlet("geo", 13.0827, 80.2707, postal_code="600004")
        postal_only = outlet("postal", None, None, postal_code="600001")
        resolver, _, _ = make_resolver(
            with_coords=[with_coords],
            by_postal=[postal_only],
            geocoded=CUSTOMER,
        )

        matches = await resolver.resolve_by_postal_code("600001")

        assert [m.outlet.id for m in matches] == ["geo", "postal"]
        assert matches[0].distance_km is not None
        assert matches[1].distance_km is None

    @pytest.mark.asyncio
    async def test_geo_mode_same_postal_code_out_of_range_not_matched(self):
        # Outlets with coordinates are matched by distance only.
        far_same_code = outlet("far", 13.5, 80.9, radius=5.0, postal_code="600001")
        resolver, _, _ = make_resolver(
            with_coords=[far_same_code],
            by_postal=[far_same_code],
            geocoded=CUSTOMER,
        )

        assert await resolver.resolve_by_postal_code("600001") == []


class TestCheckWrappers:
    @pytest.mark.asyncio
    async def test_unresolvable_postal_code_is_not_serviceable(self):
        resolver, _, _ = make_resolver(geocoded=None)

        result = await resolver.check_postal_code("999999")

        assert result.serviceable is False
        assert result.outlets == []
        assert result.message == NOT_SERVICEABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_no_outlets_in_range_is_not_serviceable(self):
        resolver, _, _ = make_resolver(geocoded=CUSTOMER)

        result = await resolver.check_postal_code("600001")

        assert result.serviceable is False
        assert result.message == NOT_SERVICEABLE_MESSAGE

    @pytest.mark.asyncio
    async def test_malformed_postal_code_still_raises(self):
        resolver, _, _ = make_resolver()
        with pytest.raises(InvalidInputError):
            await resolver.check_postal_code("ABCDEF")

    @pytest.mark.asyncio
    async def test_check_coordinates_serviceable(self):
        marina = outlet("marina", 13.0827, 80.2707)
        resolver, _, _ = make_resolver(with_coords=[marina])

        result = await resolver.check_coordinates("13.06", "80.25")

        assert result.serviceable is True
        assert result.message is None
        assert result.outlets[0].outlet.id == "marina"

    @pytest.mark.asyncio
    async def test_check_coordinates_not_found(self):
        resolver, _, _ = make_resolver(with_coords=[])

        result = await resolver.check_coordinates(13.06, 80.25)

        assert result.serviceable is False
        assert result.outlets == []

    @pytest.mark.asyncio
    async def test_check_coordinates_rejects_garbage(self):
        resolver, repo, _ = make_resolver()
        with pytest.raises(InvalidInputError):
            await resolver.check_coordinates("north", 80.25)
        repo.list_active_with_coordinates.assert_not_awaited()
