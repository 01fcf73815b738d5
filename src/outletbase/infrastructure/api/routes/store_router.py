"""Public store API routes.

Customers ask which outlets deliver to a postal code or to their device
coordinates. Both endpoints answer 200 with ``serviceable=false`` when
nothing delivers there; only malformed input is an error. The menu of
an open outlet is public too.
"""

from fastapi import APIRouter, Query, status

from outletbase.domain.entities import Menu, ServiceabilityResult
from outletbase.infrastructure.api.dependencies import Products, Resolver
from outletbase.infrastructure.api.schemas import (
    ErrorResponse,
    MenuItemResponse,
    MenuOutletResponse,
    MenuResponse,
    NearbyRequest,
    ServiceabilityResponse,
    ServiceableOutletResponse,
)

router = APIRouter()


def to_serviceability_response(result: ServiceabilityResult) -> ServiceabilityResponse:
    return ServiceabilityResponse(
        serviceable=result.serviceable,
        outlets=[
            ServiceableOutletResponse(
                id=match.outlet.id,
                name=match.outlet.name,
                address=match.outlet.address,
                postal_code=match.outlet.postal_code,
                phone=match.outlet.phone,
                latitude=match.outlet.latitude,
                longitude=match.outlet.longitude,
                delivery_radius_km=match.outlet.delivery_radius_km,
                distance_km=match.distance_km,
            )
            for match in result.outlets
        ],
        message=result.message,
    )


@router.get(
    "/check-postal-code",
    status_code=status.HTTP_200_OK,
    response_model=ServiceabilityResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed postal code"}},
)
async def check_postal_code(
    resolver: Resolver,
    postal_code: str = Query(..., description="Postal code to check"),
) -> ServiceabilityResponse:
    """Check whether any outlet delivers to a postal code."""
    result = await resolver.check_postal_code(postal_code)
    return to_serviceability_response(result)


@router.post(
    "/nearby",
    status_code=status.HTTP_200_OK,
    response_model=ServiceabilityResponse,
    responses={400: {"model": ErrorResponse, "description": "Malformed coordinates"}},
)
async def nearby_outlets(
    request: NearbyRequest,
    resolver: Resolver,
) -> ServiceabilityResponse:
    """List outlets delivering to the given coordinates, nearest first."""
    result = await resolver.check_coordinates(
        request.latitude, request.longitude, request.max_distance_km
    )
    return to_serviceability_response(result)


def to_menu_response(menu: Menu) -> MenuResponse:
    outlet = menu.outlet
    return MenuResponse(
        outlet=MenuOutletResponse(
            id=outlet.id,
            name=outlet.name,
            address=outlet.address,
            postal_code=outlet.postal_code,
            phone=outlet.phone,
        ),
        items=[
            MenuItemResponse(
                product_id=item.product.id,
                outlet_product_id=item.listing.id,
                name=item.product.name,
                description=item.product.description,
                category=item.product.category,
                image_url=item.product.image_url,
                price=item.price,
            )
            for item in menu.items
        ],
    )


@router.get(
    "/{outlet_id}/menu",
    response_model=MenuResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Outlet is closed"},
        404: {"model": ErrorResponse, "description": "Outlet not found"},
    },
)
async def get_menu(outlet_id: str, product_service: Products) -> MenuResponse:
    """Products an open outlet currently sells, at the outlet's prices."""
    return to_menu_response(await product_service.get_menu(outlet_id))
