"""Error taxonomy shared by the pipelines, collaborators and the API."""

import asyncio
from typing import Awaitable, TypeVar

T = TypeVar("T")


class LedgerLensError(Exception):
    """Base class for all errors surfaced to callers."""

    kind = "internal_error"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(LedgerLensError):
    """A document or audit id does not resolve for the given owner."""

    kind = "not_found"
    status_code = 404


class UnsupportedInputError(LedgerLensError):
    """Structural parse failure, e.g. a corrupt tabular file."""

    kind = "unsupported_input"
    status_code = 422


class DependencyUnavailableError(LedgerLensError):
    """Storage or inference collaborator unreachable or answered non-2xx."""

    kind = "dependency_unavailable"
    status_code = 502


class DependencyTimeoutError(DependencyUnavailableError):
    """A collaborator call exceeded its time budget."""

    kind = "dependency_timeout"
    status_code = 504


class ValidationFailureError(LedgerLensError):
    """Required request fields are missing or malformed."""

    kind = "validation_failure"
    status_code = 400


async def with_timeout(awaitable: Awaitable[T], seconds: float, operation: str) -> T:
    """
    Await a collaborator call with a bounded timeout.

    Args:
        awaitable: The pending collaborator call
        seconds: Time budget
        operation: Human-readable name used in the error message

    Returns:
        Result of the awaitable

    Raises:
        DependencyTimeoutError: If the call does not finish in time
    """
    try:
        return await asyncio.wait_for(awaitable, timeout=seconds)
    except asyncio.TimeoutError as e:
        raise DependencyTimeoutError(f"{operation} timed out after {seconds:g}s") from e
