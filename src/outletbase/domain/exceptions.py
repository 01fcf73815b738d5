"""Business-rule errors raised by the domain services.

Every error carries a stable ``code`` and the HTTP status the API layer
reports it with. Messages are safe to show to end users.
"""


class OutletBaseError(Exception):
    """Base class for all business-rule failures."""

    code = "error"
    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(OutletBaseError):
    """Malformed postal code, coordinates or other client input."""

    code = "invalid_input"
    status_code = 400


class LocationNotResolvableError(OutletBaseError):
    """The geocoder could not place a postal code or address.

    Callers report this as "not serviceable", never as a failure.
    """

    code = "location_not_resolvable"
    status_code = 200


class NotFoundError(OutletBaseError):
    """Missing outlet, invitation or admin grant."""

    code = "not_found"
    status_code = 404


class UnauthorizedError(OutletBaseError):
    """No authenticated identity."""

    code = "unauthorized"
    status_code = 401


class ForbiddenError(OutletBaseError):
    """Authenticated, but lacking the required role on the outlet."""

    code = "forbidden"
    status_code = 403


class InvitationExpiredError(OutletBaseError):
    code = "expired"
    status_code = 410


class InvitationAlreadyAcceptedError(OutletBaseError):
    code = "already_accepted"
    status_code = 409


class AlreadyAdminError(OutletBaseError):
    code = "already_admin"
    status_code = 409


class EmailMismatchError(OutletBaseError):
    """The invitation was addressed to a different email."""

    code = "email_mismatch"
    status_code = 403


class ConflictError(OutletBaseError):
    """The change clashes with the current state, e.g. a duplicate listing."""

    code = "conflict"
    status_code = 409


class OutletClosedError(OutletBaseError):
    """The outlet is deactivated and takes no orders."""

    code = "outlet_closed"
    status_code = 403
