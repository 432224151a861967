"""
Error taxonomy for the complaint desk.

The services raise these; translating them into HTTP responses is the job of
the exception handlers registered in ``main.py``.
"""
from typing import Optional


class ComplaintDeskError(Exception):
    default_detail = "Complaint desk error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(ComplaintDeskError):
    """Missing or invalid input fields."""

    default_detail = "Invalid input"


class UnauthenticatedError(ComplaintDeskError):
    """No valid principal on the request."""

    default_detail = "Not authenticated"


class ForbiddenError(ComplaintDeskError):
    """Authenticated, but the role or ownership rules disallow the operation."""

    default_detail = "Access denied"


class NotFoundError(ComplaintDeskError):
    default_detail = "Complaint not found"


class InvalidStateError(ComplaintDeskError):
    """The complaint's current status does not allow the operation."""

    default_detail = "Operation not allowed in the complaint's current status"


class InternalError(ComplaintDeskError):
    """Unexpected persistence failure. The detail is never shown to clients."""

    default_detail = "Server error"
