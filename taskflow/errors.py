"""Error kinds raised by the services and mapped to HTTP responses in main."""


class TaskflowError(Exception):
    status_code = 500
    detail = "Internal server error"

    def __init__(self, detail=None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


class ValidationFailed(TaskflowError):
    status_code = 400
    detail = "Validation failed"


class DuplicateEmail(TaskflowError):
    status_code = 400
    detail = "User already exists with this email"


class AuthenticationError(TaskflowError):
    """Base for failures that answer 401 with a Bearer challenge."""

    status_code = 401
    detail = "Not authenticated"


class InvalidCredentials(AuthenticationError):
    # Same message for unknown email and wrong password.
    detail = "Invalid credentials"


class MissingToken(AuthenticationError):
    detail = "Access denied. No token provided."


class InvalidToken(AuthenticationError):
    detail = "Invalid token"


class ExpiredToken(AuthenticationError):
    detail = "Token has expired"


class Forbidden(TaskflowError):
    status_code = 403
    detail = "Access denied"


class NotFound(TaskflowError):
    status_code = 404
    detail = "Resource not found"
