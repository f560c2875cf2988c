"""Domain exceptions raised by services and rendered by the API error handlers"""

from typing import Optional


class FieldOpsError(Exception):
    """Base exception for all domain errors"""

    status_code = 500
    title = "Internal Server Error"
    error_type = "internal_server_error"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.title
        super().__init__(self.detail)


class Unauthorized(FieldOpsError):
    """No session, an expired session, or a failed credential check"""

    status_code = 401
    title = "Unauthorized"
    error_type = "unauthorized"


class Forbidden(FieldOpsError):
    """Authenticated, but the access-control rules deny the action"""

    status_code = 403
    title = "Forbidden"
    error_type = "forbidden"

    def __init__(self, detail: Optional[str] = None, reason: Optional[str] = None):
        super().__init__(detail)
        self.reason = reason


class NotFound(FieldOpsError):
    """Referenced entity does not exist"""

    status_code = 404
    title = "Not Found"
    error_type = "not_found"


class InvalidInput(FieldOpsError):
    """Missing or malformed input"""

    status_code = 400
    title = "Validation Error"
    error_type = "validation_error"


class AlreadyActive(InvalidInput):
    """User already has an open time card"""

    error_type = "already_active"

    def __init__(self, detail: str = "Already clocked in"):
        super().__init__(detail)


class NotActive(InvalidInput):
    """User has no open time card"""

    error_type = "not_active"

    def __init__(self, detail: str = "Not clocked in"):
        super().__init__(detail)


class TooManyRequests(FieldOpsError):
    """Login throttling tripped"""

    status_code = 429
    title = "Too Many Requests"
    error_type = "rate_limit_exceeded"
