from typing import Any, Iterable


class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    retryable: bool = False

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)

    @property
    def kind(self) -> str:
        return type(self).__name__.removesuffix('Error')

    def extra(self) -> dict[str, Any]:
        """Additional fields exposed to API callers"""
        return {}


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class InvalidInputError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class TooLateError(DomainError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class ForbiddenError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 403)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class PartialInventoryError(CustomBaseError):
    def __init__(self, message: str, *, missing_slot_ids: Iterable[int] = ()) -> None:
        self.missing_slot_ids = list(missing_slot_ids)
        super().__init__(message, 404)

    def extra(self) -> dict[str, Any]:
        return {'missing_slot_ids': self.missing_slot_ids}


class ConflictError(CustomBaseError):
    def __init__(self, message: str, *, conflicting_slot_ids: Iterable[int] = ()) -> None:
        self.conflicting_slot_ids = list(conflicting_slot_ids)
        super().__init__(message, 409)

    def extra(self) -> dict[str, Any]:
        if not self.conflicting_slot_ids:
            return {}
        return {'conflicting_slot_ids': self.conflicting_slot_ids}


class WriteFailureError(CustomBaseError):
    """The store rejected a write; safe to retry once state is rolled back"""

    retryable = True

    def __init__(self, message: str) -> None:
        super().__init__(message, 503)


class AuthenticationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 401)
