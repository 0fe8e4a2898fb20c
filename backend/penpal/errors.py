"""
Celebrity Penpal - Error Taxonomy

Every error raised by services carries the HTTP status it maps to.
The app renders them as {"error": message}.
"""


class PenpalError(Exception):
    """Base class for all application errors."""
    status_code = 500

    def __init__(self, message: str = "Internal error"):
        super().__init__(message)
        self.message = message


class ValidationError(PenpalError):
    """Missing or malformed input."""
    status_code = 400


class MissingFieldError(ValidationError):
    pass


class NoAddressError(ValidationError):
    """Recipient profile has no stored mailing address."""

    def __init__(self, message: str = "No address available for this recipient"):
        super().__init__(message)


class InvalidAddressError(ValidationError):
    """Address text could not be split into name and street lines."""

    def __init__(self, message: str = "Address must have at least a name and a street line"):
        super().__init__(message)


class AuthenticationError(PenpalError):
    status_code = 401

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class AuthorizationError(PenpalError):
    status_code = 403

    def __init__(self, message: str = "Cannot send to this recipient"):
        super().__init__(message)


class NotFoundError(PenpalError):
    status_code = 404

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class RecipientNotFoundError(NotFoundError):

    def __init__(self, message: str = "Recipient not found"):
        super().__init__(message)


class ConflictError(PenpalError):
    status_code = 409


class UpstreamError(PenpalError):
    """Third-party service failure. Recovered locally, never shown to users."""
    pass


class FulfillmentError(UpstreamError):
    """Handwrytten request failed (network, timeout, rejection, bad address)."""
    pass


class InternalError(PenpalError):
    status_code = 500
