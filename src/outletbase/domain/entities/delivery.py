"""Delivery agent value objects."""

from dataclasses import dataclass

from outletbase.domain.entities.outlet import UNSET, PartialUpdate


@dataclass
class DeliveryAgentCreate:
    """Input for attaching a rider to an outlet.

    ``email`` links the agent to a sign-in identity; without it the agent
    can be assigned orders but cannot see them.
    """

    name: str
    phone: str
    email: str | None = None


@dataclass
class DeliveryAgentUpdate(PartialUpdate):
    name: str = UNSET
    phone: str = UNSET
    email: str | None = UNSET
    is_active: bool = UNSET
