class HrFleetError(Exception):
    """Base error; ``status_code`` is what the HTTP layer answers with."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(HrFleetError):
    status_code = 400


class InvalidRangeError(ValidationError):
    pass


class NotFoundError(HrFleetError):
    status_code = 404


class AuthError(HrFleetError):
    status_code = 401


class TransientStorageError(HrFleetError):
    status_code = 503


class ExternalServiceError(HrFleetError):
    status_code = 502

    def __init__(self, message: str, code: str = "UNKNOWN") -> None:
        super().__init__(message)
        self.code = code
