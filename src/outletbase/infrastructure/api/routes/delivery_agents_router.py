"""Delivery agent API routes, under ``/outlets/{outlet_id}/delivery-agents``."""

from fastapi import APIRouter, Response, status

from outletbase.domain.entities import DeliveryAgentCreate, DeliveryAgentUpdate
from outletbase.infrastructure.api.dependencies import AuthenticatedUser, DeliveryAgents
from outletbase.infrastructure.api.schemas import (
    DeliveryAgentCreateRequest,
    DeliveryAgentListResponse,
    DeliveryAgentResponse,
    DeliveryAgentUpdateRequest,
    ErrorResponse,
)

router = APIRouter()

_ERRORS = {
    403: {"model": ErrorResponse, "description": "Not an owner or admin"},
    404: {"model": ErrorResponse, "description": "Outlet or agent not found"},
}


@router.get(
    "/{outlet_id}/delivery-agents",
    response_model=DeliveryAgentListResponse,
    responses=_ERRORS,
)
async def list_delivery_agents(
    outlet_id: str,
    current_user: AuthenticatedUser,
    agent_service: DeliveryAgents,
) -> DeliveryAgentListResponse:
    agents = await agent_service.list_agents(outlet_id, current_user)
    return DeliveryAgentListResponse(
        agents=[DeliveryAgentResponse.model_validate(a) for a in agents],
        total=len(agents),
    )


@router.post(
    "/{outlet_id}/delivery-agents",
    status_code=status.HTTP_201_CREATED,
    response_model=DeliveryAgentResponse,
    responses={**_ERRORS, 400: {"model": ErrorResponse, "description": "Invalid agent data"}},
)
async def create_delivery_agent(
    outlet_id: str,
    request: DeliveryAgentCreateRequest,
    current_user: AuthenticatedUser,
    agent_service: DeliveryAgents,
) -> DeliveryAgentResponse:
    """Attach a rider to the outlet."""
    agent = await agent_service.create_agent(
        outlet_id, current_user, DeliveryAgentCreate(**request.model_dump())
    )
    return DeliveryAgentResponse.model_validate(agent)


@router.patch(
    "/{outlet_id}/delivery-agents/{agent_id}",
    response_model=DeliveryAgentResponse,
    responses={**_ERRORS, 400: {"model": ErrorResponse, "description": "Invalid agent data"}},
)
async def update_delivery_agent(
    outlet_id: str,
    agent_id: str,
    request: DeliveryAgentUpdateRequest,
    current_user: AuthenticatedUser,
    agent_service: DeliveryAgents,
) -> DeliveryAgentResponse:
    update = DeliveryAgentUpdate(**request.model_dump(exclude_unset=True))
    agent = await agent_service.update_agent(outlet_id, agent_id, current_user, update)
    return DeliveryAgentResponse.model_validate(agent)


@router.delete(
    "/{outlet_id}/delivery-agents/{agent_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_ERRORS,
)
async def delete_delivery_agent(
    outlet_id: str,
    agent_id: str,
    current_user: AuthenticatedUser,
    agent_service: DeliveryAgents,
) -> Response:
    """Remove a rider; their orders become unassigned."""
    await agent_service.delete_agent(outlet_id, agent_id, current_user)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
