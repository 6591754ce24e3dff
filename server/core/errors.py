# server/core/errors.py

from fastapi import status


class GadgetAPIError(Exception):
    """
    Base class for every business-rule failure.
    Each kind carries the HTTP status the gateway answers with.
    """
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class ValidationError(GadgetAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid input"


class DuplicateResource(GadgetAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Resource already exists"


class InvalidCredentials(GadgetAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid credentials"


class Unauthenticated(GadgetAPIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"


class Forbidden(GadgetAPIError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Forbidden"


class TokenInvalid(Forbidden):
    detail = "Invalid token"


class TokenExpired(Forbidden):
    detail = "Token expired"


class NotFound(GadgetAPIError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class InvalidTransition(GadgetAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Invalid status transition"


class AlreadyTerminal(GadgetAPIError):
    status_code = status.HTTP_400_BAD_REQUEST
    detail = "Gadget is already in a terminal status"


class AlreadyDecommissioned(AlreadyTerminal):
    detail = "Decommissioned gadget"


class AlreadyDestroyed(AlreadyTerminal):
    detail = "Already destroyed"


class CodenameExhausted(GadgetAPIError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    detail = "No unique codename available"
