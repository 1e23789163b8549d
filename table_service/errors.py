"""
Error taxonomy — Table Service
Every domain failure is raised as a ServiceError subclass and rendered by
the app-level error handler as {"success": false, "error": ...}.
"""


class ServiceError(Exception):
    status_code = 500
    error_code = "INTERNAL"

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__name__)
        self.message = message or self.__class__.__name__

    def to_dict(self):
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
        }


class InvalidInput(ServiceError):
    status_code = 400
    error_code = "INVALID_INPUT"


class InvalidStatus(InvalidInput):
    error_code = "INVALID_STATUS"


class InvalidState(InvalidInput):
    error_code = "INVALID_STATE"


class ChallengeNotFound(InvalidInput):
    error_code = "OTP_NOT_FOUND"


class ChallengeExpired(InvalidInput):
    error_code = "OTP_EXPIRED"


class Unauthenticated(ServiceError):
    status_code = 401
    error_code = "UNAUTHENTICATED"


class ChallengeMismatch(Unauthenticated):
    error_code = "OTP_MISMATCH"


class Forbidden(ServiceError):
    status_code = 403
    error_code = "FORBIDDEN"


class NotFound(ServiceError):
    status_code = 404
    error_code = "NOT_FOUND"


class Conflict(ServiceError):
    status_code = 409
    error_code = "CONFLICT"


class Internal(ServiceError):
    pass
