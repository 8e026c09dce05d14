"""
Domain exceptions.

Services raise these; the API layer maps each category to an HTTP status
code (see ``main.domain_exception_handler``). Nothing is retried internally.
"""


class DomainException(Exception):
    """
    Base exception for all domain errors.

    Attributes:
        message: Human-readable error description, returned to the caller
            as the response ``detail``.
    """

    status_code: int = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message={self.message!r})"


class NotFoundError(DomainException):
    """A task, user, project, comment or invitation does not exist."""

    status_code = 404


class BadRequestError(DomainException):
    """Malformed input or a rule violation (duplicate invite, resolved invite)."""

    status_code = 400


class PermissionDeniedError(DomainException):
    """The acting user does not own the resource they try to change."""

    status_code = 403
