"""OutletBase - multi-tenant outlet, service-area and admin-invitation backend.

Outlet owners register delivery outlets and invite administrators;
customers find the outlets that deliver to their postal code or location.
"""

__version__ = "0.1.0"

__all__ = ["__version__"]
