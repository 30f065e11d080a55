"""Domain errors.

Every failure a domain operation reports is one of these. Each error carries
a stable machine-readable `code` and a `retryable` flag telling the caller
whether the same request may succeed if simply repeated.
"""


class DomainError(Exception):
    """Base domain error."""

    code: str = "domain_error"
    retryable: bool = False

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthenticatedError(DomainError):
    """No verifiable caller identity was supplied."""

    code = "unauthenticated"


class InvalidArgumentError(DomainError):
    """A request argument is malformed or out of range."""

    code = "invalid_argument"

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class NotFoundError(DomainError):
    """The referenced entity does not exist."""

    code = "not_found"

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity.capitalize()} not found")
        self.entity = entity
        self.entity_id = entity_id


class NotAuthorizedError(DomainError):
    """The caller is authenticated but may not act on the resource."""

    code = "not_authorized"


class ConflictError(DomainError):
    """A concurrent mutation prevented the change from applying atomically."""

    code = "conflict"
    retryable = True


class StoreUnavailableError(DomainError):
    """The backing store could not be reached or timed out."""

    code = "store_unavailable"
    retryable = True
