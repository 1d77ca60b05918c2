"""
Domain exceptions raised by stores and services.

Route handlers translate these into HTTP responses; the analytics
engine itself never raises them.
"""


class TaPagoError(Exception):
    """Base class for all application errors."""
    
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(TaPagoError):
    """Requested entity does not exist for the current user."""


class DuplicateDateError(TaPagoError):
    """A per-day uniqueness constraint would be violated."""
    
    def __init__(self, message: str, day=None):
        super().__init__(message)
        self.day = day


class ProtectedResourceError(TaPagoError):
    """Operation is not allowed on this entity (e.g. removing a default type)."""


class AuthProviderError(TaPagoError):
    """The hosted auth provider rejected the request or is unreachable."""
    
    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.status_code = status_code


class InvalidDataError(TaPagoError):
    """Input is well-formed but breaks a domain rule."""
