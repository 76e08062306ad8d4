from typing import Dict, Optional


class MarketplaceError(Exception):
    """
    Base exception for the marketplace. Carries the HTTP status the error
    handlers render it with and optional field-level messages.
    """
    status_code = 500
    default_message = "An internal error occurred."

    def __init__(self, message: Optional[str] = None, errors: Optional[Dict[str, str]] = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(MarketplaceError):
    status_code = 422
    default_message = "The given data was invalid."


class InvalidOrExpiredCode(MarketplaceError):
    status_code = 422
    default_message = "Invalid or expired code."


class RateLimited(MarketplaceError):
    status_code = 429
    default_message = "Too many attempts. Please try again later."


class ServiceUnavailable(MarketplaceError):
    status_code = 500
    default_message = "Service is unavailable."


class AuthenticationError(MarketplaceError):
    status_code = 401
    default_message = "Could not validate credentials"


class PermissionDeniedError(MarketplaceError):
    status_code = 403
    default_message = "You are not authorized to perform this action."


class NotFoundError(MarketplaceError):
    status_code = 404
    default_message = "Resource not found"
