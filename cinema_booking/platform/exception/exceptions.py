class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int = 500) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Guarded transition rejected (empty selection, bad contact details, wrong step)"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatConflictError(ConflictError):
    """A seat was booked by someone else between fetch and submit"""

    def __init__(self, message: str, *, seat_ids: list[str] | None = None) -> None:
        self.seat_ids = seat_ids or []
        super().__init__(message)


class SubmissionInProgressError(ConflictError):
    pass


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)


class AuthenticationRequiredError(AuthenticationError):
    pass


class SubmissionError(CustomBaseError):
    """The booking store rejected or failed the submission"""

    def __init__(self, message: str) -> None:
        super().__init__(message, 502)


class DataIntegrityError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 422)
