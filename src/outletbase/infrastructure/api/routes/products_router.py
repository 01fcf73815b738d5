"""Catalogue and outlet product API routes.

``router`` serves the caller's own catalogue under ``/products``;
``outlet_products_router`` manages which of the owner's products an
outlet sells, under ``/outlets/{outlet_id}/products``.
"""

from fastapi import APIRouter, Response, status

from outletbase.domain.entities import (
    CatalogueEntry,
    OutletProductUpdate,
    ProductCreate,
    ProductUpdate,
)
from outletbase.infrastructure.api.dependencies import AuthenticatedUser, Products
from outletbase.infrastructure.api.schemas import (
    ErrorResponse,
    OutletProductCreateRequest,
    OutletProductListResponse,
    OutletProductResponse,
    OutletProductUpdateRequest,
    ProductCreateRequest,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
)

router = APIRouter()
outlet_products_router = APIRouter()

_OUTLET_ERRORS = {
    403: {"model": ErrorResponse, "description": "Not an owner or admin"},
    404: {"model": ErrorResponse, "description": "Outlet or product not found"},
}


def to_outlet_product_response(entry: CatalogueEntry) -> OutletProductResponse:
    product, listing = entry.product, entry.listing
    return OutletProductResponse(
        product_id=product.id,
        name=product.name,
        description=product.description,
        category=product.category,
        image_url=product.image_url,
        base_price=product.base_price,
        is_active=product.is_active,
        outlet_product_id=listing.id if listing else None,
        is_available=listing.is_available if listing else False,
        custom_price=listing.custom_price if listing else None,
    )


@router.get("", response_model=ProductListResponse)
async def list_products(
    current_user: AuthenticatedUser,
    product_service: Products,
) -> ProductListResponse:
    """List the products the caller created."""
    products = await product_service.list_products(current_user)
    return ProductListResponse(
        products=[ProductResponse.model_validate(p) for p in products],
        total=len(products),
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductResponse,
    responses={400: {"model": ErrorResponse, "description": "Invalid product data"}},
)
async def create_product(
    request: ProductCreateRequest,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> ProductResponse:
    product = await product_service.create_product(
        current_user, ProductCreate(**request.model_dump())
    )
    return ProductResponse.model_validate(product)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        403: {"model": ErrorResponse, "description": "Created by someone else"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def get_product(
    product_id: str,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> ProductResponse:
    return ProductResponse.model_validate(
        await product_service.get_product(product_id, current_user)
    )


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid product data"},
        403: {"model": ErrorResponse, "description": "Created by someone else"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def update_product(
    product_id: str,
    request: ProductUpdateRequest,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> ProductResponse:
    """Partially update a product; only fields present in the body change."""
    update = ProductUpdate(**request.model_dump(exclude_unset=True))
    product = await product_service.update_product(product_id, current_user, update)
    return ProductResponse.model_validate(product)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        403: {"model": ErrorResponse, "description": "Created by someone else"},
        404: {"model": ErrorResponse, "description": "Product not found"},
    },
)
async def delete_product(
    product_id: str,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> Response:
    """Delete a product and take it off every outlet."""
    await product_service.delete_product(product_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@outlet_products_router.get(
    "/{outlet_id}/products",
    response_model=OutletProductListResponse,
    responses=_OUTLET_ERRORS,
)
async def list_outlet_products(
    outlet_id: str,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> OutletProductListResponse:
    """List the owner's catalogue with this outlet's availability and prices."""
    entries = await product_service.list_outlet_products(outlet_id, current_user)
    return OutletProductListResponse(
        outlet_id=outlet_id,
        products=[to_outlet_product_response(e) for e in entries],
    )


@outlet_products_router.post(
    "/{outlet_id}/products",
    status_code=status.HTTP_201_CREATED,
    response_model=OutletProductResponse,
    responses={
        **_OUTLET_ERRORS,
        400: {"model": ErrorResponse, "description": "Invalid custom price"},
        409: {"model": ErrorResponse, "description": "Already on this outlet"},
    },
)
async def add_outlet_product(
    outlet_id: str,
    request: OutletProductCreateRequest,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> OutletProductResponse:
    entry = await product_service.add_outlet_product(
        outlet_id, request.product_id, current_user, request.custom_price
    )
    return to_outlet_product_response(entry)


@outlet_products_router.patch(
    "/{outlet_id}/products/{product_id}",
    response_model=OutletProductResponse,
    responses={
        **_OUTLET_ERRORS,
        400: {"model": ErrorResponse, "description": "Invalid listing data"},
    },
)
async def update_outlet_product(
    outlet_id: str,
    product_id: str,
    request: OutletProductUpdateRequest,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> OutletProductResponse:
    """Toggle availability or set the outlet price of a listed product."""
    update = OutletProductUpdate(**request.model_dump(exclude_unset=True))
    entry = await product_service.update_outlet_product(
        outlet_id, product_id, current_user, update
    )
    return to_outlet_product_response(entry)


@outlet_products_router.delete(
    "/{outlet_id}/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_OUTLET_ERRORS,
)
async def remove_outlet_product(
    outlet_id: str,
    product_id: str,
    current_user: AuthenticatedUser,
    product_service: Products,
) -> Response:
    await product_service.remove_outlet_product(outlet_id, product_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
