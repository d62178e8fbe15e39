"""Error taxonomy shared by the API client, services and routers.

Every error carries the HTTP status the portal answers with and the message
shown to the user in the error notification.
"""
from __future__ import annotations


class PortalError(Exception):
    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class NetworkError(PortalError):
    status_code = 503
    default_message = (
        "Unable to reach the server. Please check your network or contact support."
    )


class UnauthorizedError(PortalError):
    status_code = 401
    default_message = "Unauthorized. Please log in again."


class ForbiddenError(PortalError):
    status_code = 403
    default_message = "Admin access required"


class NotFoundError(PortalError):
    status_code = 404

    def __init__(self, resource: str = "Resource", message: str | None = None) -> None:
        self.resource = resource
        super().__init__(message or f"{resource} not found")


class FormValidationError(PortalError):
    status_code = 422
    default_message = "Please fill in all required fields"


class InvalidTransitionError(PortalError):
    status_code = 409

    def __init__(self, action: str, status: str) -> None:
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} an application that is {status}")


class BackendError(PortalError):
    """Non-2xx answer from the backend other than 401/404; message is the backend's."""

    default_message = "An error occurred"

    def __init__(self, message: str | None = None, status_code: int = 400) -> None:
        super().__init__(message)
        self.status_code = status_code


class UnexpectedResponseError(PortalError):
    status_code = 502
    default_message = "Unexpected response format"
