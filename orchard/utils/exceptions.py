"""Custom exceptions for the Orchard resource server"""

from typing import Any, Dict


class OrchardError(Exception):
    """Base exception for Orchard.

    Every error carries a stable code and the HTTP status it maps to.
    """

    code = "ORCHARD_ERROR"
    http_status = 500

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_response(self) -> Dict[str, Any]:
        return {"message": self.message, "error": self.code}


class ValidationError(OrchardError):
    """Required input field missing or empty"""

    code = "VALIDATION_ERROR"
    http_status = 400


class EmailTakenError(OrchardError):
    """Registration with an email that already exists"""

    code = "EMAIL_TAKEN"
    http_status = 400

    def __init__(self, message: str = "Email already exists"):
        super().__init__(message)


class InvalidCredentialsError(OrchardError):
    """Unknown email or wrong password (deliberately indistinguishable)"""

    code = "INVALID_CREDENTIALS"
    http_status = 400

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)


class UnauthenticatedError(OrchardError):
    """No usable session on a request that needs one"""

    code = "UNAUTHENTICATED"
    http_status = 401


class ForbiddenError(OrchardError):
    """Authenticated, but not the owner of the target record"""

    code = "FORBIDDEN"
    http_status = 403


class NotFoundError(OrchardError):
    """Target record does not exist"""

    code = "NOT_FOUND"
    http_status = 404


class ConfigError(OrchardError):
    """Configuration error"""

    code = "CONFIG_ERROR"
    http_status = 500
