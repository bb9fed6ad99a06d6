"""
Errors reported by procedures.

Each error maps to one HTTP status and a stable error_code; the exception
handler in service.middleware.exception_handlers renders them.
"""


class ProcedureError(Exception):
    status_code: int = 400
    error_code: str = "procedure_error"
    error: str = "Request failed"

    def __init__(self, message: str | None = None):
        self.message = message or self.error
        super().__init__(self.message)


class Unauthenticated(ProcedureError):
    status_code = 401
    error_code = "unauthenticated"
    error = "Authentication required"

    def __init__(self, message: str | None = None):
        super().__init__(message or "You must be logged in to access this resource.")


class InvalidCode(ProcedureError):
    status_code = 401
    error_code = "invalid_code"
    error = "Invalid verification code"

    def __init__(self, message: str | None = None):
        super().__init__(message or "Invalid verification code.")


class NotFound(ProcedureError):
    status_code = 404
    error_code = "not_found"
    error = "Not found"


class BadRequest(ProcedureError):
    status_code = 400
    error_code = "bad_request"
    error = "Bad request"


class EmailDeliveryFailed(ProcedureError):
    status_code = 502
    error_code = "email_delivery_failed"
    error = "Email delivery failed"

    def __init__(self, message: str | None = None):
        super().__init__(message or "Could not send the verification email. Please try again.")
