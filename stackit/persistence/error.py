"""Translation of database failures into domain errors."""

from sqlalchemy.exc import (
    DBAPIError,
    IntegrityError,
    InterfaceError,
    OperationalError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from stackit.domain.error import ConflictError, DomainError, StoreUnavailableError

# serialization_failure, deadlock_detected, lock_not_available
_RETRYABLE_SQLSTATES = frozenset({"40001", "40P01", "55P03"})


def _sqlstate(error: DBAPIError) -> str | None:
    orig = error.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def translate_error(error: Exception) -> DomainError | None:
    """Map a database exception to the domain error it represents.

    Args:
        error: Exception raised by SQLAlchemy or the driver

    Returns:
        The domain error to raise instead, or None if the exception is not a
        store failure (programming errors propagate unchanged)
    """
    if isinstance(error, PoolTimeoutError):
        return StoreUnavailableError("Timed out waiting for a database connection")
    if isinstance(error, IntegrityError):
        # unique_violation; FK and check violations are bugs, not races
        if _sqlstate(error) in (None, "23505"):
            return ConflictError("A concurrent change conflicted with this request")
        return None
    if isinstance(error, DBAPIError):
        if _sqlstate(error) in _RETRYABLE_SQLSTATES:
            return ConflictError("A concurrent change conflicted with this request")
        if error.connection_invalidated or isinstance(
            error, (OperationalError, InterfaceError)
        ):
            return StoreUnavailableError("Database is unavailable")
        return None
    if isinstance(error, (ConnectionError, TimeoutError)):
        return StoreUnavailableError("Database is unavailable")
    return None
